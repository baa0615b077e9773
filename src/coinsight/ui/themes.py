"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Slate background with blue accents, green/red reserved for market moves
COINSIGHT_DARK = Theme(
    name="coinsight-dark",
    primary="#3b82f6",      # Blue - input and user messages
    secondary="#94a3b8",    # Slate - assistant messages
    accent="#fbbf24",       # Amber - ticker highlights
    foreground="#e2e8f0",
    background="#0f172a",
    success="#22c55e",
    warning="#f59e0b",
    error="#ef4444",
    surface="#1e293b",
    panel="#111827",
    dark=True,
    variables={
        "block-cursor-foreground": "#0f172a",
        "block-cursor-background": "#93c5fd",
        "input-cursor-background": "#e2e8f0",
        "input-cursor-foreground": "#0f172a",
        "input-selection-background": "#3b82f6 30%",

        "border": "#334155",
        "border-blurred": "#1e293b",

        "footer-foreground": "#cbd5e1",
        "footer-background": "#0f172a",
        "footer-key-foreground": "#fbbf24",
        "footer-key-background": "#1e293b",

        "text-muted": "#64748b",
        "text-disabled": "#334155",
    },
)
