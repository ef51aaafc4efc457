"""Translates webhook trading signals into Binance futures orders."""

from __future__ import annotations

import json
from typing import Any, Protocol

from loguru import logger as default_logger

from app.models import (
    CLOSE_LONG,
    CLOSE_SHORT,
    OPEN_LONG,
    OPEN_SHORT,
    OrderRequest,
    TradingSignal,
)


class OrderClient(Protocol):
    async def place_order(self, order: OrderRequest) -> dict[str, Any]: ...


def normalize_symbol(raw_symbol: str) -> str:
    """BINANCE:BTCUSDT.P -> BTCUSDT, SOL -> SOLUSDT."""
    symbol = raw_symbol.removeprefix("BINANCE:").removesuffix(".P")
    if not symbol.endswith("USDT"):
        symbol += "USDT"
    return symbol


class SignalDispatcher:
    """Executes one signal at a time; orders go out sequentially and are never retried."""

    def __init__(self, client: OrderClient, logger: Any | None = None) -> None:
        self.client = client
        self.logger = logger or default_logger

    async def handle(self, payload: Any) -> list[dict[str, Any]]:
        """Dispatch a raw webhook payload. Errors are logged, never raised."""
        self.logger.info("Trading signal received: {}", _pretty(payload))

        if not isinstance(payload, dict):
            self.logger.error("Signal rejected: payload must be a JSON object")
            return []

        results: list[dict[str, Any]] = []
        try:
            signal = TradingSignal.from_payload(payload)
            if signal.symbol is None:
                self.logger.error("Signal rejected: missing symbol")
                return results
            if signal.invalid_stop_loss is not None:
                self.logger.warning("Ignoring invalid stop_loss={!r}", signal.invalid_stop_loss)

            symbol = normalize_symbol(signal.symbol)
            orders = self.build_orders(signal, symbol)
            if orders is None:
                self.logger.warning("Unknown action: {}", signal.action)
                return results
            for label, order in orders:
                self.logger.info("Placing {} order: {} {} {} qty={}", label, order.symbol, order.side, order.type, order.quantity)
                result = await self.client.place_order(order)
                self.logger.info("{} order result: {}", label, result)
                results.append(result)
            self.logger.info("Signal executed: action={} symbol={} orders={}", signal.action, symbol, len(results))
        except Exception as exc:  # noqa: BLE001
            self.logger.exception("Signal execution failed after {} order(s): {}", len(results), exc)
        return results

    def build_orders(self, signal: TradingSignal, symbol: str) -> list[tuple[str, OrderRequest]] | None:
        """Orders for the signal's action in send order; None for an unknown action."""
        qty = signal.quantity
        if signal.action == OPEN_LONG:
            orders = [("open long", OrderRequest.market(symbol, "BUY", qty))]
            if signal.stop_loss is not None:
                orders.append(("long stop-loss", OrderRequest.stop_market(symbol, "SELL", qty, signal.stop_loss)))
            return orders
        if signal.action == OPEN_SHORT:
            orders = [("open short", OrderRequest.market(symbol, "SELL", qty))]
            if signal.stop_loss is not None:
                orders.append(("short stop-loss", OrderRequest.stop_market(symbol, "BUY", qty, signal.stop_loss)))
            return orders
        if signal.action == CLOSE_LONG:
            return [("close long", OrderRequest.market(symbol, "SELL", qty))]
        if signal.action == CLOSE_SHORT:
            return [("close short", OrderRequest.market(symbol, "BUY", qty))]
        return None


def _pretty(payload: Any) -> str:
    try:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(payload)
