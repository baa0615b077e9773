"""Conversation controller.

Owns the session transcript and the latest market snapshot, and drives every
exchange through IDLE -> PENDING -> IDLE. Only one exchange may be in flight.

Transcript mutation happens synchronously, either in ``submit`` or once the
gateway result is available, so renderers never observe a half-applied update.
"""

import asyncio
import functools
from collections.abc import Callable, Iterable

from ..debug import DebugCallback, DebugEmitter
from ..errors import GatewayError, ValidationError
from ..gateway.base import AgentGateway
from ..market.models import AssetQuote, MarketSnapshot
from ..market.poller import MarketFeedPoller
from .models import ChatView, ExchangeState, Message, Role
from .prompt import build_prompt

GREETING = "I help you build the best trading portfolio"
PLACEHOLDER = "Thinking ..."
ERROR_REPLY = "An error occurred. Please try again."

Listener = Callable[[ChatView], None]


class ChatController(DebugEmitter):
    """Session state machine fusing market data into advisory exchanges.

    Usage:
        controller = ChatController(gateway, poller)
        controller.subscribe(render)
        controller.start()
        task = controller.submit("Should I buy bitcoin?")
        ...
        controller.close()
    """

    def __init__(
        self,
        gateway: AgentGateway,
        poller: MarketFeedPoller | None = None,
        greeting: str = GREETING,
    ) -> None:
        self._gateway = gateway
        self._poller = poller
        self._messages: list[Message] = [Message(role=Role.SYSTEM, content=greeting)]
        self._snapshot: MarketSnapshot = ()
        self._state = ExchangeState.IDLE
        self._listeners: list[Listener] = []
        self._pending_task: asyncio.Task | None = None
        self._last_reply: str | None = None
        self._closed = False

    @property
    def messages(self) -> tuple[Message, ...]:
        """The transcript, greeting first."""
        return tuple(self._messages)

    @property
    def snapshot(self) -> MarketSnapshot:
        """The latest market snapshot (empty when the last poll failed)."""
        return self._snapshot

    @property
    def state(self) -> ExchangeState:
        return self._state

    @property
    def ready(self) -> bool:
        """Whether a new submit would be accepted."""
        return not self._closed and self._state is ExchangeState.IDLE

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_task(self) -> asyncio.Task | None:
        """The in-flight gateway call, if any."""
        return self._pending_task

    def view(self) -> ChatView:
        """Immutable snapshot of the renderer-visible state."""
        return ChatView(
            messages=self.messages,
            quotes=self._snapshot,
            ready=self.ready,
            state=self._state,
        )

    def last_reply(self) -> str | None:
        """Content of the most recent successful assistant reply."""
        return self._last_reply

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a ChatView after every change.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback, propagating it to the poller."""
        super().set_debug_callback(callback)
        if self._poller is not None:
            self._poller.set_debug_callback(callback)

    def start(self) -> None:
        """Start market polling, if a poller was supplied.

        Raises:
            RuntimeError: If the controller has been closed
        """
        if self._closed:
            raise RuntimeError("Controller is closed")
        if self._poller is not None:
            self._poller.start(self.update_snapshot)

    def update_snapshot(self, quotes: Iterable[AssetQuote]) -> None:
        """Replace the market snapshot wholesale."""
        if self._closed:
            return
        self._snapshot = tuple(quotes)
        if not self._snapshot:
            self._debug("warning", "Chat", "No market data available")
        self._notify()

    def submit(self, text: str) -> asyncio.Task | None:
        """Start an exchange for the user's text.

        Rejected silently (returns None, nothing changes) for blank input or
        while another exchange is pending. Must be called from within a
        running event loop.

        Returns:
            The task resolving the exchange, or None if rejected
        """
        try:
            self._validate(text)
        except ValidationError as e:
            self._debug("debug", "Chat", f"Submit rejected: {e}")
            return None

        loop = asyncio.get_running_loop()

        # The prompt reads the snapshot as of this instant; later polls only
        # affect later submits.
        prompt = build_prompt(text, self._snapshot)
        context = [*self._messages[1:], Message(role=Role.USER, content=prompt)]

        self._messages.append(Message(role=Role.USER, content=text))
        self._messages.append(Message(role=Role.SYSTEM, content=PLACEHOLDER))
        placeholder_index = len(self._messages) - 1
        self._state = ExchangeState.PENDING

        task = loop.create_task(self._exchange(context, placeholder_index))
        task.add_done_callback(functools.partial(self._on_exchange_done, placeholder_index))
        self._pending_task = task
        self._debug("info", "Chat", f"Submitted: '{text[:50]}'")
        self._notify()
        return self._pending_task

    def close(self) -> None:
        """Tear down: stop polling and ignore any reply still in flight."""
        if self._closed:
            return
        self._closed = True
        if self._poller is not None:
            self._poller.stop()
        self._listeners.clear()
        self._debug("info", "Chat", "Closed")

    def _validate(self, text: str) -> None:
        if self._closed:
            raise ValidationError("controller is closed")
        if self._state is not ExchangeState.IDLE:
            raise ValidationError("an exchange is already pending")
        if not text or not text.strip():
            raise ValidationError("empty message")

    async def _exchange(self, context: list[Message], placeholder_index: int) -> None:
        self._debug("debug", "Chat", f"Calling gateway with {len(context)} message(s)")
        try:
            reply = await self._gateway.ask(context)
        except GatewayError as e:
            self._debug("error", "Gateway", str(e))
            self._resolve(placeholder_index, ERROR_REPLY)
            return
        except Exception as e:
            self._debug("error", "Gateway", f"Unexpected failure: {e}")
            self._resolve(placeholder_index, ERROR_REPLY)
            return

        self._resolve(placeholder_index, reply, succeeded=True)

    def _on_exchange_done(self, placeholder_index: int, task: asyncio.Task) -> None:
        # A cancelled exchange never reaches _resolve on its own
        if task.cancelled() and self._pending_task is task:
            self._debug("warning", "Chat", "Exchange cancelled")
            self._resolve(placeholder_index, ERROR_REPLY)

    def _resolve(self, placeholder_index: int, content: str, succeeded: bool = False) -> None:
        """Replace the placeholder in place and return to IDLE."""
        if self._closed:
            self._debug("debug", "Chat", "Reply arrived after close; ignored")
            return
        self._messages[placeholder_index] = Message(role=Role.SYSTEM, content=content)
        if succeeded:
            self._last_reply = content
        self._state = ExchangeState.IDLE
        self._pending_task = None
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        view = self.view()
        for listener in list(self._listeners):
            listener(view)
