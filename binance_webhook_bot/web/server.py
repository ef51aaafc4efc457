"""Webhook endpoint plus health and debug routes."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger as default_logger

from app.binance_client import BinanceFuturesClient
from app.config import AppConfig
from app.health import credential_status, service_status, utc_timestamp
from app.signal_dispatcher import SignalDispatcher


def create_app(
    config: AppConfig,
    dispatcher: SignalDispatcher | None = None,
    logger: Any | None = None,
) -> FastAPI:
    log = logger or default_logger
    if dispatcher is None:
        dispatcher = SignalDispatcher(BinanceFuturesClient.from_config(config, logger=log), logger=log)

    app = FastAPI(title="binance_webhook_bot")
    app.state.config = config
    app.state.dispatcher = dispatcher

    @app.post("/webhook")
    async def webhook(request: Request):
        log.info("Webhook request received at {}", utc_timestamp())
        try:
            payload = await request.json()
            await dispatcher.handle(payload)
        except Exception as exc:  # noqa: BLE001
            log.exception("Webhook handling error: {}", exc)
            return JSONResponse(status_code=500, content={"status": "error", "message": str(exc)})
        return JSONResponse(
            status_code=200,
            content={"status": "success", "message": "signal processed", "timestamp": utc_timestamp()},
        )

    @app.get("/")
    async def health():
        return service_status(config)

    @app.get("/env")
    async def env():
        return credential_status(config)

    return app
