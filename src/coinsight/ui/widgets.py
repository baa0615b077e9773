"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Ticker formatting
- Transcript rendering and in-place placeholder replacement
- Log rendering and level filtering
"""

from collections.abc import Sequence
from datetime import datetime

from rich.markup import escape
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, Input, Markdown, RichLog, Static

from ..chat.controller import PLACEHOLDER
from ..chat.models import Message as TranscriptMessage
from ..market.models import AssetQuote
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    TICKER_EMPTY_TEXT,
    LogLevel,
)


class ClickableMessage(Vertical):
    """A transcript entry that copies its content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        """Copy message content to the clipboard (OSC 52)."""
        event.stop()
        self.app.copy_to_clipboard(self._content)
        self.app.notify("Copied to clipboard", timeout=2)


class HistoryInput(Input):
    """Input widget with command history support.

    Use Up/Down arrow keys to navigate through history.
    Multi-line pastes are converted to single line (newlines become spaces).
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def _on_paste(self, event) -> None:
        """Handle paste events - convert newlines to spaces for single-line input."""
        if event.text:
            self.insert_text_at_cursor(" ".join(event.text.split()))
            event.prevent_default()
            event.stop()

    def _on_key(self, event) -> None:
        """Handle key events for history navigation."""
        if event.key == "up":
            if self._history:
                if self._history_index == -1:
                    self._current_input = self.value
                    self._history_index = len(self._history) - 1
                elif self._history_index > 0:
                    self._history_index -= 1
                self.value = self._history[self._history_index]
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()
        elif event.key == "down":
            if self._history_index != -1:
                if self._history_index < len(self._history) - 1:
                    self._history_index += 1
                    self.value = self._history[self._history_index]
                else:
                    self._history_index = -1
                    self.value = self._current_input
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()

    def add_to_history(self, command: str) -> None:
        """Add a command to history."""
        if command and (not self._history or self._history[-1] != command):
            self._history.append(command)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self._current_input = ""


class ChatInputBar(Horizontal):
    """Single-line input with a Send button.

    Posts ``Submitted`` on Enter or Send. The text is only cleared once the
    app reports the submit as accepted, via ``accept``.
    """

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button("Send", id="send-btn")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def _submit(self) -> None:
        value = self.query_one("#chat-input", HistoryInput).value
        self.post_message(self.Submitted(value))

    def accept(self, value: str) -> None:
        """Record an accepted submission and clear the input."""
        text_input = self.query_one("#chat-input", HistoryInput)
        text_input.add_to_history(value)
        text_input.value = ""

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable both the input and the Send button."""
        self.query_one("#chat-input", HistoryInput).disabled = not enabled
        self.query_one("#send-btn", Button).disabled = not enabled

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


class MarketTicker(Static):
    """Live price strip. Shows an error line when no quotes are available."""

    BORDER_TITLE = "Live Crypto Prices"

    def update_quotes(self, quotes: Sequence[AssetQuote]) -> None:
        """Render the latest snapshot."""
        if not quotes:
            self.add_class("-empty")
            self.border_subtitle = ""
            self.update(TICKER_EMPTY_TEXT)
            return

        self.remove_class("-empty")
        self.border_subtitle = f"updated {datetime.now().strftime(LOG_TIMESTAMP_FORMAT)}"
        chips = [
            f"[bold]{escape(quote.name)}[/] ({escape(quote.display_symbol)}): "
            f"[bold yellow]${quote.display_price}[/]"
            for quote in quotes
        ]
        self.update("   ".join(chips))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript mirroring the controller's session.

    ``sync`` diffs by position: new entries are appended and any entry whose
    message object changed (the resolved placeholder) is replaced in place.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered: list[TranscriptMessage] = []
        self._containers: list[ClickableMessage] = []

    def sync(self, messages: Sequence[TranscriptMessage]) -> None:
        """Bring the display in line with the given transcript."""
        changed = False
        for index, msg in enumerate(messages):
            if index < len(self._rendered):
                if self._rendered[index] is msg:
                    continue
                old = self._containers[index]
                new = self._build(msg)
                self.mount(new, after=old)
                old.remove()
                self._containers[index] = new
                self._rendered[index] = msg
            else:
                container = self._build(msg)
                self.mount(container)
                self._containers.append(container)
                self._rendered.append(msg)
            changed = True

        if changed:
            self.border_subtitle = f"{len(messages)} messages"
            self.scroll_end(animate=False)

    def _build(self, msg: TranscriptMessage) -> ClickableMessage:
        """Create the widget tree for a single message."""
        stamp = msg.created_at.strftime(MESSAGE_TIMESTAMP_FORMAT)
        if msg.is_user:
            header = f"User [{stamp}]"
            classes = "chat-message user-message"
        else:
            header = f"Bot [{stamp}]"
            classes = "chat-message assistant-message"
            if msg.content == PLACEHOLDER:
                classes += " pending-message"

        container = ClickableMessage(content=msg.content, classes=classes)
        container.compose_add_child(Static(escape(header), classes="message-header"))
        if msg.is_user:
            container.compose_add_child(Static(escape(msg.content), classes="message-content"))
        else:
            container.compose_add_child(Markdown(msg.content, classes="message-content"))
        return container


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        """Set log level threshold."""
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Chat, Poller, Gateway)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        level_color = level_colors.get(level, "white")
        level_name = LogLevel.name(level)

        component_colors = {
            "TUI": "cyan",
            "Chat": "green",
            "Poller": "yellow",
            "Gateway": "magenta",
        }
        comp_color = component_colors.get(component, "white")

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{level_name:<5}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def debug(self, component: str, message: str) -> None:
        """Log a DEBUG level message."""
        self.log(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        """Log an INFO level message."""
        self.log(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        """Log a WARNING level message."""
        self.log(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        """Log an ERROR level message."""
        self.log(component, message, LogLevel.ERROR)

    def show(self) -> None:
        """Show the log panel."""
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        """Hide the log panel."""
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
