"""UI configuration constants.

Centralizes magic numbers and display strings for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Input configuration
INPUT_PLACEHOLDER = "Ask anything ..."
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Ticker configuration
TICKER_EMPTY_TEXT = "Error fetching data"

# Transcript configuration
MESSAGE_TIMESTAMP_FORMAT = "%H:%M"

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
