"""Test doubles shared across test modules."""
from collections.abc import Sequence

from coinsight.chat.models import Message
from coinsight.gateway.base import AgentGateway


class FakeGateway(AgentGateway):
    """In-process gateway recording every context it is asked with.

    Set ``release`` to an asyncio.Event to hold replies until the test sets it.
    """

    def __init__(self, reply: str = "Consider a diversified allocation.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[Message]] = []
        self.release = None
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    async def ask(self, context: Sequence[Message]) -> str:
        self.calls.append(list(context))
        if self.release is not None:
            await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.reply

    async def close(self) -> None:
        self.closed = True
