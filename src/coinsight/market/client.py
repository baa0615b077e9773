"""Market-data provider client.

Hides the provider's HTTP contract (endpoint, query parameters, response
shape) behind ``fetch_quotes``. Any deviation from the expected shape is a
``FeedError``.
"""

import json
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..errors import FeedError
from .models import AssetQuote, MarketSnapshot

DEFAULT_MARKET_URL = "https://api.coingecko.com/api/v3"

# Provider ids, requested ordered by market cap
TRACKED_ASSETS = ("bitcoin", "ethereum", "internet-computer", "solana", "ripple")

_REQUIRED_FIELDS = ("id", "name", "symbol", "current_price")


def parse_quotes(payload: Any) -> MarketSnapshot:
    """Convert a decoded ``coins/markets`` response into quotes.

    Args:
        payload: Decoded JSON body (floats already parsed as Decimal)

    Returns:
        Quotes in response order

    Raises:
        FeedError: If the payload is not a list of complete coin objects
    """
    if not isinstance(payload, list):
        raise FeedError(f"expected a list, got {type(payload).__name__}")

    quotes = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise FeedError(f"item {index} is not an object")
        missing = [key for key in _REQUIRED_FIELDS if item.get(key) is None]
        if missing:
            raise FeedError(f"item {index} missing {', '.join(missing)}")

        price = item["current_price"]
        # bool is an int subclass; the provider never sends one as a price
        if isinstance(price, bool) or not isinstance(price, (int, Decimal)):
            raise FeedError(f"item {index} has non-numeric price {price!r}")

        try:
            quotes.append(AssetQuote(
                id=item["id"],
                name=item["name"],
                symbol=item["symbol"],
                price=price,
            ))
        except PydanticValidationError as e:
            raise FeedError(f"item {index} invalid: {e}") from e

    return tuple(quotes)


class MarketDataClient:
    """Client for the CoinGecko ``coins/markets`` endpoint.

    Hidden design decisions:
    - Endpoint path and query parameters
    - Decimal parsing of prices (no float rounding)
    - Translation of transport and shape errors into FeedError

    Supports async context manager protocol:
        async with MarketDataClient() as client:
            quotes = await client.fetch_quotes()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_MARKET_URL,
        asset_ids: Sequence[str] = TRACKED_ASSETS,
        vs_currency: str = "usd",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Provider API root
            asset_ids: Provider ids of the tracked assets
            vs_currency: Quote currency
            timeout: Request timeout in seconds
            http_client: Pre-built client (tests inject one with a mock transport)
        """
        if not asset_ids:
            raise ValueError("At least one asset id must be tracked")
        self._base_url = base_url.rstrip("/")
        self._asset_ids = tuple(asset_ids)
        self._vs_currency = vs_currency
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def asset_ids(self) -> tuple[str, ...]:
        return self._asset_ids

    def request_params(self) -> dict[str, str]:
        """Query parameters sent with every fetch."""
        return {
            "vs_currency": self._vs_currency,
            "ids": ",".join(self._asset_ids),
            "order": "market_cap_desc",
        }

    async def fetch_quotes(self) -> MarketSnapshot:
        """Fetch the current quotes for all tracked assets.

        Returns:
            Quotes ordered by descending market capitalization

        Raises:
            FeedError: On transport failure, non-2xx status or malformed body
        """
        url = f"{self._base_url}/coins/markets"
        try:
            resp = await self._client.get(url, params=self.request_params())
        except httpx.HTTPError as e:
            raise FeedError(f"request failed: {e}") from e

        if not resp.is_success:
            raise FeedError(f"HTTP {resp.status_code}", status_code=resp.status_code)

        try:
            payload = json.loads(resp.text, parse_float=Decimal)
        except ValueError as e:
            raise FeedError(f"invalid JSON: {e}") from e

        return parse_quotes(payload)

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "MarketDataClient":
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.close()
