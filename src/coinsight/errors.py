"""Error taxonomy.

Every failure in coinsight is recovered locally by the component that owns
the affected state; none of these is fatal to the process.
"""


class CoinsightError(Exception):
    """Base class for coinsight errors."""


class FeedError(CoinsightError):
    """Market-data fetch or parse failure (recovered by the poller)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(f"Market feed error: {message}")
        self.status_code = status_code


class GatewayError(CoinsightError):
    """Advisory backend call failed (recovered by the chat controller)."""

    def __init__(self, message: str, gateway: str | None = None):
        msg = f"Gateway error: {message}"
        if gateway:
            msg += f" (gateway: {gateway})"
        super().__init__(msg)
        self.gateway = gateway


class ValidationError(CoinsightError):
    """Submission rejected at the controller boundary.

    Raised for empty input or a submit attempted while an exchange is pending.
    Never surfaced to the user.
    """
