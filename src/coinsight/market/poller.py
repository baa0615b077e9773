"""Periodic market-data polling.

Hides the timer lifecycle: an asyncio task that fetches immediately on start,
then on a fixed cadence until stopped. A fixed-interval poll is its own retry
mechanism, so failures are never retried early or backed off.
"""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable

from ..debug import DebugEmitter
from ..errors import FeedError
from .models import MarketSnapshot

POLL_INTERVAL_SECONDS = 10.0

Fetcher = Callable[[], Awaitable[MarketSnapshot]]
UpdateCallback = Callable[[MarketSnapshot], None]


class MarketFeedPoller(DebugEmitter):
    """Repeating, cancellable market snapshot fetcher.

    ``on_update`` is called after every attempt with the new snapshot, which is
    empty when the attempt failed. After ``stop()`` returns no further update
    is delivered, even if a fetch was in flight.

    Usage:
        poller = MarketFeedPoller(client.fetch_quotes)
        poller.start(on_update)
        ...
        poller.stop()
    """

    def __init__(self, fetch: Fetcher, interval: float = POLL_INTERVAL_SECONDS):
        """Initialize the poller.

        Args:
            fetch: Coroutine function returning the latest quotes. Any exception it
                raises counts as a failed attempt.
            interval: Seconds between the start of consecutive attempts
        """
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        self._fetch = fetch
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._on_update: UpdateCallback | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        """Whether the poll loop is active."""
        return self._task is not None and not self._task.done()

    def start(self, on_update: UpdateCallback) -> None:
        """Fetch immediately, then every interval until stopped.

        Must be called from within a running event loop.

        Raises:
            RuntimeError: If the poller is already running
        """
        if self._task is not None:
            raise RuntimeError("Poller already started")
        self._on_update = on_update
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._debug("info", "Poller", f"Started (every {self._interval:g}s)")

    def stop(self) -> None:
        """Cancel the poll loop. Safe to call more than once."""
        task = self._task
        if task is None:
            return
        self._task = None
        self._on_update = None
        task.cancel()
        self._debug("info", "Poller", "Stopped")

    async def poll_once(self) -> MarketSnapshot:
        """Run a single fetch attempt.

        Returns:
            The fetched quotes, or an empty snapshot if the fetch failed
        """
        try:
            quotes = await self._fetch()
        except FeedError as e:
            self._debug("warning", "Poller", f"{e}; clearing snapshot")
            return ()
        except Exception as e:
            self._debug("error", "Poller", f"Unexpected fetch failure: {e!r}; clearing snapshot")
            return ()
        self._debug("debug", "Poller", f"Received {len(quotes)} quote(s)")
        return tuple(quotes)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            quotes = await self.poll_once()

            # stop() may have raced the fetch; a stopped loop delivers nothing
            if asyncio.current_task() is not self._task or self._on_update is None:
                return
            self._on_update(quotes)

            next_tick += self._interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

    async def __aenter__(self) -> "MarketFeedPoller":
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        task = self._task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
