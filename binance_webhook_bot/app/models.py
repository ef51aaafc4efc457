"""Domain models for webhook signals and exchange orders."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

OPEN_LONG = "OPEN_LONG"
OPEN_SHORT = "OPEN_SHORT"
CLOSE_LONG = "CLOSE_LONG"
CLOSE_SHORT = "CLOSE_SHORT"

_LEADING_INT_RE = re.compile(r"^\s*([-+]?\d+)")


def parse_quantity(raw: Any) -> int:
    """Integer part of raw; anything missing, unparseable or below 1 becomes 1."""
    if raw is None or isinstance(raw, bool):
        return 1
    if isinstance(raw, (int, float)):
        try:
            value = int(raw)
        except (OverflowError, ValueError):
            return 1
    else:
        match = _LEADING_INT_RE.match(str(raw))
        if not match:
            return 1
        try:
            value = int(match.group(1))
        except (OverflowError, ValueError):
            # longer than the int/str conversion limit
            return 1
    return value if value >= 1 else 1


def parse_price(raw: Any) -> Decimal | None:
    """Positive finite price; missing, empty or zero is None, anything else invalid raises ValueError."""
    if raw is None or isinstance(raw, bool) or raw == "":
        return None
    if isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, float):
        value = Decimal(repr(raw))
    elif isinstance(raw, str):
        try:
            value = Decimal(raw.strip())
        except InvalidOperation as exc:
            raise ValueError(f"not a number: {raw!r}") from exc
    else:
        raise TypeError(f"unsupported price type: {type(raw).__name__}")

    if not value.is_finite():
        raise ValueError(f"price must be finite: {raw!r}")
    if value == 0:
        return None
    if value < 0:
        raise ValueError(f"price must be positive: {raw!r}")
    return value


def format_price(value: Decimal) -> str:
    """Plain decimal text without exponent or trailing zeros: 0.00005, 41000."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(slots=True)
class TradingSignal:
    symbol: str | None
    action: str | None = None
    quantity: int = 1
    stop_loss: Decimal | None = None
    invalid_stop_loss: Any = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TradingSignal":
        raw_symbol = payload.get("symbol")
        symbol = raw_symbol.strip() if isinstance(raw_symbol, str) else None
        raw_action = payload.get("action")

        invalid_stop_loss = None
        try:
            stop_loss = parse_price(payload.get("stop_loss"))
        except (TypeError, ValueError, ArithmeticError):
            stop_loss = None
            invalid_stop_loss = payload.get("stop_loss")

        return cls(
            symbol=symbol or None,
            action=str(raw_action) if raw_action is not None else None,
            quantity=parse_quantity(payload.get("quantity")),
            stop_loss=stop_loss,
            invalid_stop_loss=invalid_stop_loss,
        )


@dataclass(slots=True)
class OrderRequest:
    symbol: str
    side: str
    type: str
    quantity: int
    stop_price: Decimal | None = None
    working_type: str | None = None

    @classmethod
    def market(cls, symbol: str, side: str, quantity: int) -> "OrderRequest":
        return cls(symbol=symbol, side=side, type="MARKET", quantity=quantity)

    @classmethod
    def stop_market(cls, symbol: str, side: str, quantity: int, stop_price: Decimal) -> "OrderRequest":
        return cls(
            symbol=symbol,
            side=side,
            type="STOP_MARKET",
            quantity=quantity,
            stop_price=stop_price,
            working_type="MARK_PRICE",
        )

    def to_params(self) -> list[tuple[str, object]]:
        """Ordered parameter pairs; this order is what gets signed."""
        params: list[tuple[str, object]] = [
            ("symbol", self.symbol),
            ("side", self.side),
            ("type", self.type),
            ("quantity", self.quantity),
        ]
        if self.stop_price is not None:
            params.append(("stopPrice", format_price(self.stop_price)))
        if self.working_type is not None:
            params.append(("workingType", self.working_type))
        return params
