"""Main Textual TUI application.

Renders the controller's state and forwards user input to it. The app never
mutates the transcript or snapshot itself; it only reads ChatView snapshots.
"""

import asyncio

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..chat.controller import ChatController
from ..chat.models import ChatView
from .styles import APP_CSS
from .themes import COINSIGHT_DARK
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, LogLevel, MarketTicker


class CoinsightApp(App):
    """Textual TUI for the market-aware advisory chat."""

    CSS = APP_CSS
    TITLE = "Coinsight"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+r", "copy_last_reply", "Copy Reply"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        controller: ChatController,
        log_level: str | None = None,
        subtitle: str | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._log_level = log_level
        self._subtitle = subtitle
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield MarketTicker(id="ticker")
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Wire the controller to the widgets and start polling."""
        self.register_theme(COINSIGHT_DARK)
        self.theme = "coinsight-dark"
        if self._subtitle:
            self.sub_title = self._subtitle

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._controller.set_debug_callback(self._route_debug)
        self._unsubscribe = self._controller.subscribe(self._render_view)
        self._render_view(self._controller.view())
        self._controller.start()

    def on_unmount(self) -> None:
        """Detach from and tear down the controller."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._controller.set_debug_callback(None)
        self._controller.close()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route component debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        if level == "debug":
            log_panel.debug(component, message)
        elif level == "info":
            log_panel.info(component, message)
        elif level == "warning":
            log_panel.warning(component, message)
        elif level == "error":
            log_panel.error(component, message)

    def _render_view(self, view: ChatView) -> None:
        self.query_one("#ticker", MarketTicker).update_quotes(view.quotes)
        self.query_one("#chat-history", ChatHistoryWidget).sync(view.messages)

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.set_enabled(view.ready)
        if view.ready:
            input_bar.focus_input()

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Hand user input to the controller; clear it only if accepted."""
        if self._controller.submit(event.value) is None:
            return
        self.query_one("#chat-input-bar", ChatInputBar).accept(event.value)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_reply(self) -> None:
        """Copy the last assistant reply to clipboard."""
        reply = self._controller.last_reply()
        if reply:
            self.copy_to_clipboard(reply)
            self.notify("Reply copied")
        else:
            self.notify("No reply to copy", severity="warning")


async def run_textual_tui(
    controller: ChatController,
    log_level: str | None = None,
    subtitle: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        controller: Chat controller (not yet started)
        log_level: Log level for panel (debug/info/warning/error), None to hide
        subtitle: Header subtitle, e.g. the gateway in use
    """
    app = CoinsightApp(controller=controller, log_level=log_level, subtitle=subtitle)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        controller.close()
