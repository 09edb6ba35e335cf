"""Signature model shared by the dispatcher and the source scanner.

A signature describes the argument and result shape of one catalog function.
Each argument or result is a :class:`ValueSpec`: a bare identifier type tagged
with a :class:`ListKind`. The same model drives argument marshalling, usage
text, and the scanner's output.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from busypy.exceptions import SignatureError

ERROR_TYPE = "error"
LIST_MARKER = "..."
VARIADIC_SENTINEL = "[...]"

_ARRAY_PREFIX = "[]"
_VARIADIC_PREFIX = "..."


class ListKind(str, Enum):
    SCALAR = "scalar"
    ARRAY = "array"
    VARIADIC = "variadic"


@dataclass(frozen=True)
class ValueSpec:
    type_name: str
    list_kind: ListKind = ListKind.SCALAR
    name: str | None = None

    def __post_init__(self) -> None:
        if not self.type_name.isidentifier():
            raise SignatureError(f"type name is not a bare identifier: {self.type_name!r}")
        if self.name is not None and not self.name.isidentifier():
            raise SignatureError(f"invalid name: {self.name!r}")
        object.__setattr__(self, "list_kind", ListKind(self.list_kind))

    @property
    def is_list(self) -> bool:
        return self.list_kind is not ListKind.SCALAR

    def tokens(self) -> list[str]:
        """Usage tokens: the name (or type when unnamed), then a marker for lists."""
        out = [self.name or self.type_name]
        if self.is_list:
            out.append(LIST_MARKER)
        return out

    def type_text(self) -> str:
        if self.list_kind is ListKind.ARRAY:
            return f"{_ARRAY_PREFIX}{self.type_name}"
        if self.list_kind is ListKind.VARIADIC:
            return f"{_VARIADIC_PREFIX}{self.type_name}"
        return self.type_name

    def declaration(self) -> str:
        if self.name is None:
            return self.type_text()
        return f"{self.name} {self.type_text()}"


ArgSpec = ValueSpec
RetSpec = ValueSpec


def _split_type(text: str) -> tuple[ListKind, str]:
    if text.startswith(_ARRAY_PREFIX):
        return ListKind.ARRAY, text[len(_ARRAY_PREFIX):]
    if text.startswith(_VARIADIC_PREFIX):
        return ListKind.VARIADIC, text[len(_VARIADIC_PREFIX):]
    return ListKind.SCALAR, text


def parse_fields(text: str) -> tuple[ValueSpec, ...]:
    """Parse a compact field list such as ``"p, prefix str"`` or ``"str, error"``.

    When any field carries a name, single-word fields are names sharing the
    type of the next typed field. Otherwise every field is a type.
    """
    parts = [part.strip() for part in text.split(",")]
    if parts == [""]:
        return ()
    words = [part.split() for part in parts]
    if any(len(field) not in (1, 2) for field in words):
        raise SignatureError(f"cannot parse field list: {text!r}")
    if all(len(field) == 1 for field in words):
        specs = []
        for (type_text,) in words:
            kind, type_name = _split_type(type_text)
            specs.append(ValueSpec(type_name=type_name, list_kind=kind))
        return tuple(specs)
    specs = []
    pending: list[str] = []
    for field in words:
        if len(field) == 1:
            pending.append(field[0])
            continue
        name, type_text = field
        kind, type_name = _split_type(type_text)
        for pending_name in (*pending, name):
            specs.append(ValueSpec(type_name=type_name, list_kind=kind, name=pending_name))
        pending = []
    if pending:
        raise SignatureError(f"names without a type in field list: {text!r}")
    return tuple(specs)


@dataclass(frozen=True)
class FunctionSignature:
    name: str
    args: tuple[ArgSpec, ...] = ()
    rets: tuple[RetSpec, ...] = ()
    repeats: bool = False

    def __post_init__(self) -> None:
        if not self.name.isidentifier():
            raise SignatureError(f"invalid function name: {self.name!r}")
        object.__setattr__(self, "args", tuple(self.args))
        object.__setattr__(self, "rets", tuple(self.rets))
        for ret in self.rets:
            if ret.list_kind is ListKind.VARIADIC:
                raise SignatureError(f"{self.name}: variadic result {ret.declaration()!r}")
        if self.repeats and (len(self.args) != 1 or self.args[0].is_list):
            raise SignatureError(f"{self.name}: repeated functions take exactly one scalar argument")

    @classmethod
    def parse(
        cls,
        name: str,
        args: str = "",
        rets: str = "",
        *,
        repeats: bool = False,
    ) -> FunctionSignature:
        return cls(name=name, args=parse_fields(args), rets=parse_fields(rets), repeats=repeats)

    @property
    def is_variadic(self) -> bool:
        return self.repeats or any(
            arg.list_kind is ListKind.VARIADIC for arg in self.args
        )

    def arg_tokens(self) -> list[str]:
        tokens: list[str] = []
        for arg in self.args:
            tokens.extend(arg.tokens())
        if self.is_variadic:
            tokens.append(VARIADIC_SENTINEL)
        return tokens

    def return_tokens(self) -> list[str]:
        tokens: list[str] = []
        for ret in self.rets:
            tokens.extend(ret.tokens())
        return tokens

    def arg_signature(self) -> str:
        return ", ".join(arg.declaration() for arg in self.args)

    def return_signature(self) -> str:
        text = ", ".join(ret.declaration() for ret in self.rets)
        if len(self.rets) > 1:
            return f"({text})"
        return text

    def declaration(self) -> str:
        head = f"func {self.name}({self.arg_signature()})"
        returns = self.return_signature()
        if not returns:
            return head
        return f"{head} {returns}"

    def __str__(self) -> str:
        return self.declaration()
