"""Prompt construction.

Combines the user's question with the latest market snapshot into the single
text payload sent to the advisory backend.
"""

from collections.abc import Iterable

from ..market.models import AssetQuote

ADVICE_INSTRUCTION = "Provide investment advice based on the above data and user message."


def build_prompt(user_message: str, snapshot: Iterable[AssetQuote]) -> str:
    """Build the advisory request payload.

    The market block is always present, even when the snapshot is empty, so
    the backend sees an explicit absence of data rather than a missing section.

    Args:
        user_message: The user's raw text
        snapshot: Quotes in display order

    Returns:
        Prompt text ending with ADVICE_INSTRUCTION
    """
    lines = [f"User message: {user_message}", "", "Crypto data:"]
    lines.extend(quote.label() for quote in snapshot)
    lines.append("")
    lines.append(ADVICE_INSTRUCTION)
    return "\n".join(lines)
