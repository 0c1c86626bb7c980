"""Tests for Prompter over scripted streams."""

import io

import pytest

from start_assets.core.errors import TerminalRequiredError, ValidationError
from start_assets.core.prompts import Prompter


def _prompter(text: str, *, interactive: bool = True) -> tuple[Prompter, io.StringIO]:
    out = io.StringIO()
    return Prompter(io.StringIO(text), out, interactive=interactive), out


def test_require_interactive() -> None:
    prompter, _ = _prompter("", interactive=False)

    with pytest.raises(TerminalRequiredError, match="needs a terminal"):
        prompter.require_interactive("needs a terminal")


def test_ask_returns_default_on_blank() -> None:
    prompter, out = _prompter("\n")

    assert prompter.ask("Description", "old") == "old"
    assert out.getvalue() == "Description [old]: "


def test_ask_returns_answer() -> None:
    prompter, _ = _prompter("  new value \n")

    assert prompter.ask("Description") == "new value"


@pytest.mark.parametrize(
    ("answer", "expected"), [("y\n", True), ("YES\n", True), ("n\n", False), ("", False)]
)
def test_confirm(answer: str, expected: bool) -> None:
    prompter, _ = _prompter(answer)

    assert prompter.confirm("Remove?") is expected


def test_confirm_no_prints_cancelled() -> None:
    prompter, out = _prompter("\n")

    prompter.confirm("Remove role 'x'?")

    assert out.getvalue().endswith("Cancelled.\n")


def test_choose_many_lists_numbered_names() -> None:
    prompter, out = _prompter("1,3\n")

    chosen = prompter.choose_many(["a", "b", "c"], "role", "x")

    assert chosen == ["a", "c"]
    output = out.getvalue()
    assert "Found 3 roles matching 'x':" in output
    assert "   1. a" in output
    assert "Select 1-3 or all: " in output


def test_choose_many_all() -> None:
    prompter, _ = _prompter("all\n")

    assert prompter.choose_many(["a", "b"], "role") == ["a", "b"]


def test_choose_many_by_name() -> None:
    prompter, _ = _prompter("B\n")

    assert prompter.choose_many(["a", "b"], "role") == ["b"]


def test_choose_many_eof_cancels() -> None:
    prompter, out = _prompter("")

    assert prompter.choose_many(["a", "b"], "role") == []
    assert "Cancelled." in out.getvalue()


def test_choose_many_invalid_selection() -> None:
    prompter, _ = _prompter("5\n")

    with pytest.raises(ValidationError, match="out of range"):
        prompter.choose_many(["a", "b"], "role")


def test_choose_one() -> None:
    prompter, out = _prompter("2\n")

    assert prompter.choose_one(["roles/a", "roles/b"], "asset") == "roles/b"
    assert "2 assets:" in out.getvalue()


def test_choose_one_rejects_multiple() -> None:
    prompter, _ = _prompter("1,2\n")

    with pytest.raises(ValidationError):
        prompter.choose_one(["a", "b"], "asset")


class TestReorder:
    def test_moves_then_saves(self) -> None:
        prompter, out = _prompter("3\n2\n\n")

        assert prompter.reorder(["a", "b", "c"], "Reorder Roles:") == ["c", "a", "b"]
        assert out.getvalue().startswith("Reorder Roles:")

    def test_blank_saves_unchanged(self) -> None:
        prompter, _ = _prompter("\n")

        assert prompter.reorder(["a", "b"], "Reorder:") == ["a", "b"]

    @pytest.mark.parametrize("text", ["q\n", "QUIT\n", "2\nexit\n", "2\n"])
    def test_cancel_and_end_of_input(self, text: str) -> None:
        prompter, out = _prompter(text)

        assert prompter.reorder(["a", "b"], "Reorder:") is None
        assert "Cancelled." in out.getvalue()

    def test_bad_input_is_reported_and_loop_continues(self) -> None:
        prompter, out = _prompter("x\n1\n9\n2\n\n")

        assert prompter.reorder(["a", "b"], "Reorder:") == ["b", "a"]
        output = out.getvalue()
        assert "Invalid input: x" in output
        assert "Already at top." in output
        assert "Invalid number: 9 (must be 1-2)" in output
