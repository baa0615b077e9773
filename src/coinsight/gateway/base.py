from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..chat.models import Message


class AgentGateway(ABC):
    """Abstract base class for the advisory backend.

    This module hides the design decision of which backend answers questions.
    Implementations must handle backend-specific details like:
    - Client setup and authentication
    - Conversion of transcript roles to the backend's wire roles
    - Translation of transport failures into GatewayError

    The result is treated as opaque text by the caller.

    Supports async context manager protocol for proper resource cleanup:
        async with gateway:
            reply = await gateway.ask(context)
        # Automatically cleaned up
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in logs and error messages."""

    @abstractmethod
    async def ask(self, context: Sequence[Message]) -> str:
        """Ask the backend for the next assistant reply.

        Args:
            context: Prior conversation without the greeting, ending with the
                     newest user message (whose content is the built prompt)

        Returns:
            Assistant reply text

        Raises:
            GatewayError: On transport failure, timeout or malformed response
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "AgentGateway":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
