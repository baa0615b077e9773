"""Advisor system prompt.

The advisor persona ships as ``advisor.txt`` next to this module. Operators can
replace it without reinstalling: ``COINSIGHT_ADVISOR_PROMPT`` names a file to
use instead, and otherwise ``./prompts/advisor.txt`` in the working directory
wins over the packaged copy.
"""

import os
from pathlib import Path

ADVISOR_PROMPT_ENV = "COINSIGHT_ADVISOR_PROMPT"
ADVISOR_PROMPT_FILE = "advisor.txt"

_PACKAGED_PROMPT = Path(__file__).parent / ADVISOR_PROMPT_FILE


def advisor_prompt_candidates() -> list[Path]:
    """Files consulted for the advisor prompt, highest precedence first."""
    candidates = []
    override = os.getenv(ADVISOR_PROMPT_ENV)
    if override:
        candidates.append(Path(override).expanduser())
    candidates.append(Path.cwd() / "prompts" / ADVISOR_PROMPT_FILE)
    candidates.append(_PACKAGED_PROMPT)
    return candidates


def get_advisor_prompt() -> str:
    """Read the system prompt sent to LLM-backed gateways.

    Read on every call, so edits apply to the next session without a restart.

    Raises:
        FileNotFoundError: If an explicit override is missing, or no prompt
            file exists at all
        ValueError: If the chosen prompt file is blank
    """
    candidates = advisor_prompt_candidates()
    override = os.getenv(ADVISOR_PROMPT_ENV)
    if override and not candidates[0].is_file():
        raise FileNotFoundError(f"{ADVISOR_PROMPT_ENV} points to a missing file: {candidates[0]}")

    for path in candidates:
        if path.is_file():
            text = path.read_text(encoding="utf-8").strip()
            if not text:
                raise ValueError(f"Advisor prompt is empty: {path}")
            return text

    searched = "\n".join(f"  - {path}" for path in candidates)
    raise FileNotFoundError(f"Advisor prompt not found. Searched:\n{searched}")


__all__ = [
    "ADVISOR_PROMPT_ENV",
    "advisor_prompt_candidates",
    "get_advisor_prompt",
]
