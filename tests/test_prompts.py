"""Unit tests for advisor prompt loading."""
import pytest

from coinsight.prompts import ADVISOR_PROMPT_ENV, advisor_prompt_candidates, get_advisor_prompt


@pytest.fixture(autouse=True)
def _no_override(monkeypatch, tmp_path):
    monkeypatch.delenv(ADVISOR_PROMPT_ENV, raising=False)
    monkeypatch.chdir(tmp_path)


def test_packaged_advisor_prompt():
    prompt = get_advisor_prompt()

    assert prompt
    assert "portfolio" in prompt


def test_working_directory_override(tmp_path):
    (tmp_path / "prompts").mkdir()
    (tmp_path / "prompts" / "advisor.txt").write_text("Answer in one sentence.\n")

    assert get_advisor_prompt() == "Answer in one sentence."


def test_edits_apply_without_restart(tmp_path):
    (tmp_path / "prompts").mkdir()
    prompt_file = tmp_path / "prompts" / "advisor.txt"
    prompt_file.write_text("First persona.")
    assert get_advisor_prompt() == "First persona."

    prompt_file.write_text("Second persona.")
    assert get_advisor_prompt() == "Second persona."


def test_env_override_wins(tmp_path, monkeypatch):
    (tmp_path / "prompts").mkdir()
    (tmp_path / "prompts" / "advisor.txt").write_text("Working directory persona.")
    custom = tmp_path / "custom.txt"
    custom.write_text("Only discuss stablecoins.")
    monkeypatch.setenv(ADVISOR_PROMPT_ENV, str(custom))

    assert advisor_prompt_candidates()[0] == custom
    assert get_advisor_prompt() == "Only discuss stablecoins."


def test_missing_env_override_fails(tmp_path, monkeypatch):
    monkeypatch.setenv(ADVISOR_PROMPT_ENV, str(tmp_path / "missing.txt"))

    with pytest.raises(FileNotFoundError, match="missing file"):
        get_advisor_prompt()


def test_blank_prompt_file_fails(tmp_path):
    (tmp_path / "prompts").mkdir()
    (tmp_path / "prompts" / "advisor.txt").write_text("   \n")

    with pytest.raises(ValueError, match="empty"):
        get_advisor_prompt()
