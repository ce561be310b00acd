from pathlib import Path

import pytest

from backupwalker.prompts import confirm_backup, is_valid_directory_path, prompt_for_directory


def _feed(monkeypatch, answers: list[str]) -> None:
    remaining = iter(answers)

    def _input(prompt: str = "") -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", _input)


def test_is_valid_directory_path(tmp_path: Path) -> None:
    a_file = tmp_path / "file.txt"
    a_file.write_text("x", encoding="utf-8")

    assert is_valid_directory_path(str(tmp_path)) is True
    assert is_valid_directory_path(str(a_file)) is False
    assert is_valid_directory_path(str(tmp_path / "missing")) is False
    assert is_valid_directory_path("") is False
    assert is_valid_directory_path("   ") is False


def test_prompt_for_directory_reprompts_until_valid(tmp_path: Path, monkeypatch, capsys) -> None:
    _feed(monkeypatch, [str(tmp_path / "nope"), "", str(tmp_path)])

    chosen = prompt_for_directory("source")

    output = capsys.readouterr().out
    assert chosen == tmp_path
    assert output.count("not a valid path") == 2


def test_prompt_for_directory_raises_on_end_of_input(monkeypatch) -> None:
    _feed(monkeypatch, [])

    with pytest.raises(EOFError):
        prompt_for_directory("destination")


@pytest.mark.parametrize("answer", ["continue", "Continue", "yes", "", " CONTINUE", "CONTINUE "])
def test_confirm_backup_rejects_anything_but_exact_token(answer: str, monkeypatch, capsys) -> None:
    _feed(monkeypatch, [answer])

    assert confirm_backup(Path("/src"), Path("/dst")) is False


def test_confirm_backup_accepts_token_and_names_both_paths(monkeypatch, capsys) -> None:
    _feed(monkeypatch, ["CONTINUE"])

    assert confirm_backup(Path("/src"), Path("/dst")) is True
    output = capsys.readouterr().out
    assert str(Path("/src")) in output
    assert str(Path("/dst")) in output
    assert "irreversible" in output


def test_confirm_backup_treats_end_of_input_as_refusal(monkeypatch) -> None:
    _feed(monkeypatch, [])

    assert confirm_backup(Path("/src"), Path("/dst")) is False
