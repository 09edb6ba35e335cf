from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from busypy.exceptions import ArgumentError
from busypy.signature import ERROR_TYPE, FunctionSignature, ListKind, ValueSpec

logger = logging.getLogger(__name__)

Converter = Callable[[str], object]

_TRUE_WORDS = frozenset({"1", "t", "true", "y", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "f", "false", "n", "no", "off"})


@dataclass(frozen=True)
class CallResult:
    """Outcome of one invocation. Values and error are reported independently."""

    values: tuple[str, ...] = ()
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


Implementation = Callable[[Sequence[str]], CallResult]


def parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean value: {text!r}")


CONVERTERS: dict[str, Converter] = {
    "str": str,
    "string": str,
    "int": int,
    "float": float,
    "bool": parse_bool,
}


def convert(spec: ValueSpec, raw: str) -> object:
    converter = CONVERTERS.get(spec.type_name, str)
    return converter(raw)


def _plural(count: int) -> str:
    return "argument" if count == 1 else "arguments"


def bind_arguments(signature: FunctionSignature, raw: Sequence[str]) -> list[object]:
    """Convert raw command-line strings into positional call arguments."""
    list_positions = [
        index for index, spec in enumerate(signature.args) if spec.is_list
    ]
    if len(list_positions) > 1:
        raise ArgumentError(
            f"{signature.name}: cannot bind more than one list argument from the command line"
        )
    if not list_positions:
        expected = len(signature.args)
        if len(raw) != expected:
            raise ArgumentError(
                f"{signature.name}: expected {expected} {_plural(expected)}, got {len(raw)}"
            )
        return [convert(spec, item) for spec, item in zip(signature.args, raw)]

    split = list_positions[0]
    head = signature.args[:split]
    list_spec = signature.args[split]
    tail = signature.args[split + 1:]
    fixed = len(head) + len(tail)
    if len(raw) < fixed:
        raise ArgumentError(
            f"{signature.name}: expected at least {fixed} {_plural(fixed)}, got {len(raw)}"
        )
    list_end = len(raw) - len(tail)
    positional = [convert(spec, item) for spec, item in zip(head, raw[:len(head)])]
    items = [convert(list_spec, item) for item in raw[len(head):list_end]]
    if list_spec.list_kind is ListKind.VARIADIC:
        positional.extend(items)
    else:
        positional.append(items)
    positional.extend(convert(spec, item) for spec, item in zip(tail, raw[list_end:]))
    return positional


def format_token(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def result_tokens(signature: FunctionSignature, value: object) -> tuple[str, ...]:
    """Map a Python return value onto the signature's non-error results."""
    rets = [ret for ret in signature.rets if ret.type_name != ERROR_TYPE]
    if not rets:
        return ()
    if len(rets) == 1:
        values: Sequence[object] = (value,)
    else:
        if not isinstance(value, (tuple, list)) or len(value) != len(rets):
            raise ArgumentError(
                f"{signature.name}: expected {len(rets)} results, got {value!r}"
            )
        values = value
    tokens: list[str] = []
    for spec, item in zip(rets, values):
        if spec.list_kind is ListKind.SCALAR:
            if item is not None:
                tokens.append(format_token(item))
        else:
            tokens.extend(format_token(element) for element in item)
    return tuple(tokens)


def call(
    signature: FunctionSignature,
    func: Callable[..., object],
    raw: Sequence[str],
) -> tuple[str, ...]:
    positional = bind_arguments(signature, raw)
    return result_tokens(signature, func(*positional))


def adapt(signature: FunctionSignature, func: Callable[..., object]) -> Implementation:
    """Wrap a plain Python callable into the string-in, tokens-out contract.

    Repeated signatures call ``func`` once per raw argument. When one of those
    calls fails the tokens collected so far are returned with the error.
    """

    def _invoke(raw: Sequence[str]) -> CallResult:
        if not signature.repeats:
            try:
                return CallResult(values=call(signature, func, raw))
            except Exception as exc:
                logger.debug("%s failed: %r", signature.name, exc)
                return CallResult(error=exc)
        collected: list[str] = []
        for item in raw:
            try:
                collected.extend(call(signature, func, [item]))
            except Exception as exc:
                logger.debug("%s failed on %r: %r", signature.name, item, exc)
                return CallResult(values=tuple(collected), error=exc)
        return CallResult(values=tuple(collected))

    return _invoke
