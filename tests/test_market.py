"""Unit tests for the market-data client."""
from decimal import Decimal

import httpx
import pytest

from coinsight.errors import FeedError
from coinsight.market import TRACKED_ASSETS, AssetQuote, MarketDataClient
from coinsight.market.client import parse_quotes


class TestAssetQuote:
    """Tests for AssetQuote model."""

    def test_label_uppercases_symbol(self, bitcoin_quote):
        assert bitcoin_quote.display_symbol == "BTC"
        assert bitcoin_quote.label() == "Bitcoin (BTC): $65000"

    @pytest.mark.parametrize(
        "raw,shown",
        [
            ("65000.0", "65000"),
            ("1.2e-7", "0.00000012"),
            ("3120.550", "3120.55"),
            ("0.5123", "0.5123"),
            ("0", "0"),
        ],
    )
    def test_label_price_is_plain_decimal(self, raw, shown):
        quote = AssetQuote(id="x", name="X", symbol="x", price=Decimal(raw))

        assert quote.display_price == shown
        assert quote.label() == f"X (X): ${shown}"

    def test_quote_is_frozen(self, bitcoin_quote):
        """Test that quotes cannot be mutated after creation."""
        with pytest.raises(ValueError):
            bitcoin_quote.price = Decimal("1")  # type: ignore[misc]


class TestParseQuotes:
    """Tests for response parsing."""

    def test_parse_valid_payload(self):
        quotes = parse_quotes([
            {"id": "solana", "name": "Solana", "symbol": "sol", "current_price": Decimal("142.7")},
        ])

        assert quotes == (
            AssetQuote(id="solana", name="Solana", symbol="sol", price=Decimal("142.7")),
        )

    def test_parse_empty_list(self):
        assert parse_quotes([]) == ()

    @pytest.mark.parametrize("payload", [
        {"error": "rate limited"},
        "bitcoin",
        None,
        [["bitcoin", 65000]],
    ])
    def test_non_list_of_objects_fails(self, payload):
        with pytest.raises(FeedError):
            parse_quotes(payload)

    @pytest.mark.parametrize("field", ["id", "name", "symbol", "current_price"])
    def test_missing_field_fails(self, field):
        item = {"id": "bitcoin", "name": "Bitcoin", "symbol": "btc", "current_price": 65000}
        del item[field]

        with pytest.raises(FeedError, match=field):
            parse_quotes([item])

    @pytest.mark.parametrize("price", [None, "65000", True, 6.5e4])
    def test_invalid_price_fails(self, price):
        with pytest.raises(FeedError):
            parse_quotes([{"id": "bitcoin", "name": "Bitcoin", "symbol": "btc", "current_price": price}])


class TestMarketDataClient:
    """Tests for MarketDataClient against a mock transport."""

    def test_requires_assets(self):
        with pytest.raises(ValueError):
            MarketDataClient(asset_ids=[])

    @pytest.mark.asyncio
    async def test_fetch_sends_expected_query(self, mock_http_client, make_json_response, coins_markets_payload):
        """Test endpoint path and query parameters."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return make_json_response(coins_markets_payload)

        client = MarketDataClient(base_url="https://feed.test/api/v3/", http_client=mock_http_client(handler))
        await client.fetch_quotes()

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/v3/coins/markets"
        assert request.url.params["vs_currency"] == "usd"
        assert request.url.params["ids"] == ",".join(TRACKED_ASSETS)
        assert request.url.params["order"] == "market_cap_desc"

    @pytest.mark.asyncio
    async def test_fetch_parses_quotes_in_order(self, mock_http_client, make_json_response, coins_markets_payload):
        client = MarketDataClient(
            http_client=mock_http_client(lambda request: make_json_response(coins_markets_payload))
        )

        quotes = await client.fetch_quotes()

        assert [q.id for q in quotes] == ["bitcoin", "ethereum"]
        assert quotes[0].price == Decimal("65000")
        assert str(quotes[1].price) == "3120.55"

    @pytest.mark.asyncio
    async def test_non_2xx_is_feed_error(self, mock_http_client, make_json_response):
        client = MarketDataClient(
            http_client=mock_http_client(lambda request: make_json_response({"status": "busy"}, 429))
        )

        with pytest.raises(FeedError) as exc_info:
            await client.fetch_quotes()
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_invalid_json_is_feed_error(self, mock_http_client):
        client = MarketDataClient(
            http_client=mock_http_client(lambda request: httpx.Response(200, content=b"<html>"))
        )

        with pytest.raises(FeedError, match="invalid JSON"):
            await client.fetch_quotes()

    @pytest.mark.asyncio
    async def test_transport_error_is_feed_error(self, mock_http_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = MarketDataClient(http_client=mock_http_client(handler))

        with pytest.raises(FeedError, match="request failed"):
            await client.fetch_quotes()

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self, mock_http_client, make_json_response):
        http_client = mock_http_client(lambda request: make_json_response([]))

        async with MarketDataClient(http_client=http_client) as client:
            assert await client.fetch_quotes() == ()

        assert not http_client.is_closed
