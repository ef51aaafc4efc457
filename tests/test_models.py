from decimal import Decimal

import pytest

from app.binance_sign import build_query
from app.models import OrderRequest, TradingSignal, format_price, parse_price, parse_quantity


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 1),
        ("abc", 1),
        ("5", 5),
        (5, 5),
        ("12abc", 12),
        (7.9, 7),
        ("0", 1),
        (-3, 1),
        ("", 1),
        (True, 1),
        ("1" * 5000, 1),
        (float("inf"), 1),
    ],
)
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected


def test_signal_defaults():
    signal = TradingSignal.from_payload({"symbol": "BTCUSDT", "action": "OPEN_LONG"})
    assert signal.quantity == 1
    assert signal.stop_loss is None
    assert signal.invalid_stop_loss is None


def test_signal_missing_or_blank_symbol():
    assert TradingSignal.from_payload({"action": "OPEN_LONG"}).symbol is None
    assert TradingSignal.from_payload({"symbol": "  "}).symbol is None


def test_signal_stop_loss_parsing():
    assert TradingSignal.from_payload({"symbol": "X", "stop_loss": "41500.5"}).stop_loss == Decimal("41500.5")
    assert TradingSignal.from_payload({"symbol": "X", "stop_loss": 0}).stop_loss is None

    bad = TradingSignal.from_payload({"symbol": "X", "stop_loss": "soon"})
    assert bad.stop_loss is None
    assert bad.invalid_stop_loss == "soon"


def test_market_order_params_order():
    order = OrderRequest.market("BTCUSDT", "BUY", 3)
    assert order.to_params() == [("symbol", "BTCUSDT"), ("side", "BUY"), ("type", "MARKET"), ("quantity", 3)]


def test_stop_market_order_params_order():
    order = OrderRequest.stop_market("BTCUSDT", "SELL", 3, Decimal("41000.0"))
    assert order.to_params() == [
        ("symbol", "BTCUSDT"),
        ("side", "SELL"),
        ("type", "STOP_MARKET"),
        ("quantity", 3),
        ("stopPrice", "41000"),
        ("workingType", "MARK_PRICE"),
    ]


def test_small_stop_price_is_plain_decimal_text():
    price = parse_price(0.00005)
    order = OrderRequest.stop_market("1000PEPEUSDT", "SELL", 1, price)

    assert build_query(order.to_params()) == (
        "symbol=1000PEPEUSDT&side=SELL&type=STOP_MARKET&quantity=1&stopPrice=0.00005&workingType=MARK_PRICE"
    )


@pytest.mark.parametrize(
    "raw,expected",
    [
        (Decimal("1E-7"), "0.0000001"),
        (Decimal("41000.50"), "41000.5"),
        (Decimal("41000"), "41000"),
        (Decimal("4.1E+4"), "41000"),
    ],
)
def test_format_price(raw, expected):
    assert format_price(raw) == expected


@pytest.mark.parametrize("raw", ["inf", "-inf", "NaN", float("inf"), -5, "-0.1"])
def test_non_finite_or_negative_stop_loss_is_invalid(raw):
    with pytest.raises(ValueError):
        parse_price(raw)

    signal = TradingSignal.from_payload({"symbol": "BTCUSDT", "stop_loss": raw})
    assert signal.stop_loss is None
    assert signal.invalid_stop_loss == raw


def test_huge_integer_stop_loss_keeps_precision():
    raw = int("9" * 400)

    assert TradingSignal.from_payload({"symbol": "X", "stop_loss": raw}).stop_loss == Decimal(raw)


def test_non_string_symbol_is_none():
    assert TradingSignal.from_payload({"symbol": {"a": 1}}).symbol is None
    assert TradingSignal.from_payload({"symbol": 42}).symbol is None
