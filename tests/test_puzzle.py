"""Unit tests for answer normalization and checking."""

import pytest

from riddle_gate.services.puzzle import CORRECT_ANSWER, check_answer, normalize_answer


@pytest.mark.parametrize(
    "raw",
    ["echo", "ECHO", " EcHo ", "\techo\n", "   eChO", "Echo   "],
)
def test_correct_answer_any_case_and_whitespace(raw: str) -> None:
    assert check_answer(raw) is True


@pytest.mark.parametrize(
    "raw",
    ["owl", "", "   ", "echoes", "e cho", "an echo", "ech0", "echo!"],
)
def test_other_strings_are_incorrect(raw: str) -> None:
    assert check_answer(raw) is False


@pytest.mark.parametrize("raw", [None, 42, ["echo"], {"answer": "echo"}, b"echo"])
def test_non_string_input_is_incorrect_not_an_error(raw) -> None:
    assert check_answer(raw) is False


def test_normalize_answer_trims_and_casefolds() -> None:
    assert normalize_answer("  EcHo ") == "echo"
    assert normalize_answer(None) == ""


def test_correct_answer_constant() -> None:
    assert CORRECT_ANSWER == "echo"
