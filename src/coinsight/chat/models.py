"""Data models for the conversation.

Hides the representation of transcript entries and of the read-only view
handed to renderers.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..market.models import AssetQuote


class Role(str, Enum):
    """Author of a transcript entry."""

    USER = "user"
    SYSTEM = "system"


class ExchangeState(str, Enum):
    """Controller state between and during exchanges."""

    IDLE = "idle"
    PENDING = "pending"


class Message(BaseModel):
    """A transcript entry. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who wrote the message")
    content: str = Field(description="Message text")
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Creation time, for display only"
    )

    @property
    def is_user(self) -> bool:
        return self.role is Role.USER


class ChatView(BaseModel):
    """Immutable snapshot of everything a renderer may read."""

    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...]
    quotes: tuple[AssetQuote, ...]
    ready: bool
    state: ExchangeState

    @property
    def has_market_data(self) -> bool:
        """False when the latest poll failed or returned nothing."""
        return len(self.quotes) > 0
