"""Debug callback plumbing shared by the core components.

Components never write to a logging sink themselves. They forward
``(level, component, message)`` triples to whatever callback the host
installed (the TUI routes them into its log panel).
"""

from collections.abc import Callable

DebugCallback = Callable[[str, str, str], None]


class DebugEmitter:
    """Mixin giving a component ``set_debug_callback`` and ``_debug``."""

    _debug_callback: DebugCallback | None = None

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for detailed logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send a debug log message if a callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)
