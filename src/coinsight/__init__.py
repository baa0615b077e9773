"""
Coinsight: a terminal investment assistant that fuses live crypto prices into every question.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .chat import ChatController, ChatView, ExchangeState, Message, Role, build_prompt
from .errors import CoinsightError, FeedError, GatewayError, ValidationError
from .gateway import AgentGateway, create_agent_gateway
from .market import AssetQuote, MarketDataClient, MarketFeedPoller

__all__ = [
    "AgentGateway",
    "AssetQuote",
    "ChatController",
    "ChatView",
    "CoinsightError",
    "ExchangeState",
    "FeedError",
    "GatewayError",
    "MarketDataClient",
    "MarketFeedPoller",
    "Message",
    "Role",
    "ValidationError",
    "build_prompt",
    "create_agent_gateway",
]
