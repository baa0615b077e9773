from .client import DEFAULT_MARKET_URL, TRACKED_ASSETS, MarketDataClient
from .models import AssetQuote, MarketSnapshot
from .poller import POLL_INTERVAL_SECONDS, MarketFeedPoller

__all__ = [
    "DEFAULT_MARKET_URL",
    "POLL_INTERVAL_SECONDS",
    "TRACKED_ASSETS",
    "AssetQuote",
    "MarketDataClient",
    "MarketFeedPoller",
    "MarketSnapshot",
]
