"""Binance USDT-M Futures order client."""

from __future__ import annotations

import asyncio
import json
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from loguru import logger as default_logger

from app.binance_sign import signed_query
from app.config import MAINNET_URL
from app.models import OrderRequest

ORDER_PATH = "/fapi/v1/order"


class ExchangeError(RuntimeError):
    """Outbound request failed: network, non-2xx, malformed body or API error code."""


class BinanceFuturesClient:
    """Signs and sends single order requests. No retries."""

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str = MAINNET_URL,
        timeout_sec: float = 10,
        logger: Any | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec
        self.logger = logger or default_logger

    @classmethod
    def from_config(cls, config, logger: Any | None = None) -> "BinanceFuturesClient":
        return cls(
            api_key=config.binance.api_key,
            api_secret=config.binance.api_secret,
            base_url=config.binance.base_url,
            timeout_sec=config.binance.timeout_sec,
            logger=logger,
        )

    async def place_order(self, order: OrderRequest) -> dict[str, Any]:
        return await self._signed_request("POST", ORDER_PATH, order.to_params())

    async def _signed_request(
        self,
        method: str,
        path: str,
        params: list[tuple[str, object]],
    ) -> dict[str, Any]:
        query = signed_query(params, self.api_secret)
        url = f"{self.base_url}{path}?{query}"
        self.logger.debug("Sending request to Binance: {} {}", method, url.split("&signature=", 1)[0])

        try:
            data = await asyncio.to_thread(self._request_sync, method, url)
        except ExchangeError as exc:
            self.logger.error("Binance request error [{} {}]: {}", method, path, exc)
            raise

        self.logger.info("Binance response: {}", data)
        return data

    def _request_sync(self, method: str, url: str) -> dict[str, Any]:
        headers = {"X-MBX-APIKEY": self.api_key, "Content-Type": "application/json"}
        req = Request(url=url, method=method.upper(), headers=headers)

        try:
            with urlopen(req, timeout=self.timeout_sec) as resp:
                raw = resp.read().decode("utf-8")
        except HTTPError as exc:
            raw = exc.read().decode("utf-8", errors="ignore")
            raise ExchangeError(f"HTTPError {exc.code}: {raw}") from exc
        except URLError as exc:
            raise ExchangeError(f"URLError: {exc}") from exc
        except TimeoutError as exc:
            raise ExchangeError(f"timeout: {exc}") from exc

        try:
            payload = json.loads(raw or "{}")
        except json.JSONDecodeError as exc:
            raise ExchangeError(f"malformed response: {raw[:250]}") from exc
        if not isinstance(payload, dict):
            raise ExchangeError(f"unexpected response: {raw[:250]}")

        code = payload.get("code")
        if isinstance(code, int) and code < 0:
            raise ExchangeError(f"API error code={code} msg={payload.get('msg')}")
        return payload
