"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Single column: price ticker on top, transcript filling the middle,
optional log panel, input bar at the bottom.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Price Ticker
   ============================================ */
#ticker {
    height: auto;
    min-height: 3;
    padding: 0 1;
    background: $panel;
    border: round $accent 60%;
    border-title-color: $accent;
    border-title-style: bold;
    border-title-align: center;

    &.-empty {
        border: round $error 60%;
        color: $error;
    }
}

/* ============================================
   Transcript
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus {
        border: round $primary;
    }
}

.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 0 2;
}

.user-message {
    border-right: tall $primary;
    background: $primary 15%;
    content-align: right top;

    & .message-header {
        color: $primary;
        text-style: bold;
        text-align: right;
    }
}

.assistant-message {
    border-left: tall $secondary;
    background: $surface;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }
}

.pending-message .message-content {
    color: $text-muted;
    text-style: italic;
}

.message-header {
    height: auto;
}

.message-content {
    height: auto;
    margin: 0;
}

/* ============================================
   Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

/* ============================================
   Input Bar
   ============================================ */
ChatInputBar {
    height: auto;
    padding: 0 1;
    background: $panel;
}

#chat-input {
    width: 1fr;
}

#send-btn {
    width: 10;
    margin: 0 0 0 1;
    background: $primary;
    color: $background;
    text-style: bold;

    &:disabled {
        background: $primary 40%;
    }
}
"""
