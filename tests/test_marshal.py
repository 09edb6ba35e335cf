from __future__ import annotations

import pytest

from busypy.exceptions import ArgumentError
from busypy.marshal import CallResult, adapt, bind_arguments, parse_bool, result_tokens
from busypy.signature import FunctionSignature


def test_bind_scalar_arguments_converts_by_type_name() -> None:
    signature = FunctionSignature.parse("Pad", "text str, width int, strict bool, ratio float")
    assert bind_arguments(signature, ["x", "4", "yes", "0.5"]) == ["x", 4, True, 0.5]


def test_bind_unknown_type_passes_string_through() -> None:
    signature = FunctionSignature.parse("Open", "path PathLike")
    assert bind_arguments(signature, ["a/b"]) == ["a/b"]


def test_bind_rejects_wrong_argument_count() -> None:
    signature = FunctionSignature.parse("basename", "p str", "str")
    with pytest.raises(ArgumentError, match="basename: expected 1 argument, got 2"):
        bind_arguments(signature, ["a", "b"])


def test_bind_variadic_expands_remaining_arguments() -> None:
    signature = FunctionSignature.parse("join", "a str, p ...str", "str")
    assert bind_arguments(signature, ["x", "y", "z"]) == ["x", "y", "z"]
    assert bind_arguments(signature, ["x"]) == ["x"]
    with pytest.raises(ArgumentError, match="join: expected at least 1 argument, got 0"):
        bind_arguments(signature, [])


def test_bind_array_collects_into_one_list_between_scalars() -> None:
    signature = FunctionSignature.parse("filter", "names []str, pat str", "[]str")
    assert bind_arguments(signature, ["a.py", "b.txt", "*.py"]) == [["a.py", "b.txt"], "*.py"]
    assert bind_arguments(signature, ["*.py"]) == [[], "*.py"]


def test_bind_rejects_two_list_arguments() -> None:
    signature = FunctionSignature.parse("zip", "a []str, b []str")
    with pytest.raises(ArgumentError):
        bind_arguments(signature, ["x", "y"])


def test_parse_bool_words() -> None:
    assert parse_bool("On") is True
    assert parse_bool("0") is False
    with pytest.raises(ValueError):
        parse_bool("maybe")


def test_result_tokens_follow_return_specs() -> None:
    split = FunctionSignature.parse("split", "p str", "head, tail str")
    assert result_tokens(split, ("/usr", "lib")) == ("/usr", "lib")

    listing = FunctionSignature.parse("glob", "pathname str", "matches []str, err error")
    assert result_tokens(listing, ["a", "b"]) == ("a", "b")

    checked = FunctionSignature.parse("getsize", "filename str", "int, error")
    assert result_tokens(checked, 5) == ("5",)
    assert result_tokens(checked, None) == ()

    silent = FunctionSignature.parse("touch", "path str")
    assert result_tokens(silent, "ignored") == ()


def test_result_tokens_spell_booleans_in_lower_case() -> None:
    exists = FunctionSignature.parse("exists", "path str", "bool")
    assert result_tokens(exists, True) == ("true",)
    assert result_tokens(exists, False) == ("false",)

    flags = FunctionSignature.parse("flags", "", "[]bool")
    assert result_tokens(flags, [True, False, 0]) == ("true", "false", "0")


def test_result_tokens_reject_mismatched_tuples() -> None:
    split = FunctionSignature.parse("split", "p str", "head, tail str")
    with pytest.raises(ArgumentError):
        result_tokens(split, ("only",))


def test_adapt_reports_errors_without_raising() -> None:
    signature = FunctionSignature.parse("explode", "s str", "str, error")

    def _explode(value: str) -> str:
        raise OSError(f"cannot handle {value}")

    result = adapt(signature, _explode)(["x"])
    assert result.values == ()
    assert isinstance(result.error, OSError)
    assert result.failed

    arity = adapt(signature, _explode)([])
    assert isinstance(arity.error, ArgumentError)


def test_adapt_repeats_and_keeps_partial_results() -> None:
    signature = FunctionSignature.parse("upper", "s str", "str, error", repeats=True)

    def _upper(value: str) -> str:
        if value == "bad":
            raise ValueError("bad input")
        return value.upper()

    implementation = adapt(signature, _upper)
    assert implementation(["a", "b"]) == CallResult(values=("A", "B"))
    assert implementation([]) == CallResult()

    partial = implementation(["a", "bad", "c"])
    assert partial.values == ("A",)
    assert str(partial.error) == "bad input"
