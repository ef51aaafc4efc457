import pytest

from app.config import AppConfig, BinanceConfig


class RecordingLogger:
    """Collects loguru-style calls as (level, formatted message)."""

    def __init__(self):
        self.records = []

    def _add(self, level, message, *args):
        self.records.append((level, message.format(*args)))

    def debug(self, message, *args):
        self._add("DEBUG", message, *args)

    def info(self, message, *args):
        self._add("INFO", message, *args)

    def warning(self, message, *args):
        self._add("WARNING", message, *args)

    def error(self, message, *args):
        self._add("ERROR", message, *args)

    def exception(self, message, *args):
        self._add("EXCEPTION", message, *args)

    def messages(self, level=None):
        return [m for lvl, m in self.records if level is None or lvl == level]


class FakeOrderClient:
    """Records orders instead of sending them; fail_on makes the n-th call (1-based) raise."""

    def __init__(self, fail_on=None):
        self.orders = []
        self.fail_on = fail_on

    async def place_order(self, order):
        self.orders.append(order)
        if self.fail_on is not None and len(self.orders) >= self.fail_on:
            raise RuntimeError("HTTPError 400: {\"code\":-2019,\"msg\":\"Margin is insufficient.\"}")
        return {"orderId": len(self.orders), "symbol": order.symbol, "status": "NEW"}


@pytest.fixture
def log():
    return RecordingLogger()


@pytest.fixture
def config():
    return AppConfig(
        environment="test",
        binance=BinanceConfig(api_key="test-key", api_secret="test-secret"),
    )


@pytest.fixture
def make_orders():
    """Factory for FakeOrderClient; pass fail_on to make the n-th order raise."""
    return FakeOrderClient
