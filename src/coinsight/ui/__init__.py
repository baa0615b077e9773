"""Terminal UI module for coinsight.

Provides a Textual-based TUI rendering the chat controller's state.

Module structure (Parnas principle - each module hides a design decision):
- widgets.py: Custom widgets (ticker, transcript, input bar, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette and theme configuration
- config.py: Display constants and log levels
- app.py: Application orchestration (user interaction flow)
"""

from .app import CoinsightApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, MarketTicker

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "CoinsightApp",
    "DebugPanel",
    "LogLevel",
    "MarketTicker",
    "run_textual_tui",
]
