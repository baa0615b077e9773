"""Pytest configuration and shared fixtures."""
import json
from collections.abc import Callable
from decimal import Decimal

import httpx
import pytest

from coinsight.market.models import AssetQuote

from .fakes import FakeGateway


@pytest.fixture
def gateway():
    """Return a gateway that answers immediately."""
    return FakeGateway()


@pytest.fixture
def bitcoin_quote():
    return AssetQuote(id="bitcoin", name="Bitcoin", symbol="btc", price=Decimal("65000"))


@pytest.fixture
def sample_quotes(bitcoin_quote):
    """Return a two-asset snapshot in market cap order."""
    return (
        bitcoin_quote,
        AssetQuote(id="ethereum", name="Ethereum", symbol="eth", price=Decimal("3120.55")),
    )


@pytest.fixture
def coins_markets_payload():
    """Return a CoinGecko coins/markets response body."""
    return [
        {
            "id": "bitcoin",
            "symbol": "btc",
            "name": "Bitcoin",
            "current_price": 65000,
            "market_cap": 1280000000000,
        },
        {
            "id": "ethereum",
            "symbol": "eth",
            "name": "Ethereum",
            "current_price": 3120.55,
            "market_cap": 375000000000,
        },
    ]


@pytest.fixture
def mock_http_client():
    """Return a factory building an AsyncClient around a request handler."""
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return _make


def json_response(payload, status_code: int = 200) -> httpx.Response:
    """Build a JSON response without float re-encoding surprises."""
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"content-type": "application/json"},
    )


@pytest.fixture
def make_json_response():
    return json_response
