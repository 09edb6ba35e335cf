"""Classification of annotation expressions into signature value specs.

Only three shapes are representable: a bare identifier, a homogeneous
container of a bare identifier, and a variadic parameter annotated with a bare
identifier. Everything else classifies as ``None``.
"""

from __future__ import annotations

import ast

from busypy.signature import ListKind

ARRAY_CONTAINERS = frozenset(
    {
        "Collection",
        "Iterable",
        "List",
        "MutableSequence",
        "Sequence",
        "list",
    }
)
TUPLE_CONTAINERS = frozenset({"Tuple", "tuple"})

Classified = tuple[ListKind, str]


def _string_annotation(node: ast.expr) -> ast.expr | None:
    if not (isinstance(node, ast.Constant) and isinstance(node.value, str)):
        return None
    try:
        return ast.parse(node.value, mode="eval").body
    except SyntaxError:
        return None


def _homogeneous_tuple_element(node: ast.expr) -> ast.expr | None:
    # tuple[X, ...]
    if not isinstance(node, ast.Tuple) or len(node.elts) != 2:
        return None
    element, rest = node.elts
    if isinstance(rest, ast.Constant) and rest.value is Ellipsis:
        return element
    return None


def _array_element(node: ast.Subscript) -> ast.expr | None:
    if not isinstance(node.value, ast.Name):
        return None
    container = node.value.id
    if container in ARRAY_CONTAINERS:
        return node.slice
    if container in TUPLE_CONTAINERS:
        return _homogeneous_tuple_element(node.slice)
    return None


def classify(annotation: ast.expr | None, *, variadic: bool = False) -> Classified | None:
    if annotation is None:
        return None
    parsed = _string_annotation(annotation)
    if parsed is not None:
        return classify(parsed, variadic=variadic)
    if isinstance(annotation, ast.Name):
        kind = ListKind.VARIADIC if variadic else ListKind.SCALAR
        return kind, annotation.id
    if variadic or not isinstance(annotation, ast.Subscript):
        return None
    element = _array_element(annotation)
    if isinstance(element, ast.Name):
        return ListKind.ARRAY, element.id
    return None


def is_none_annotation(annotation: ast.expr | None) -> bool:
    if annotation is None:
        return False
    parsed = _string_annotation(annotation)
    if parsed is not None:
        annotation = parsed
    return isinstance(annotation, ast.Constant) and annotation.value is None


def fixed_tuple_elements(annotation: ast.expr | None) -> list[ast.expr] | None:
    """Elements of ``tuple[A, B]``; ``None`` for any other shape."""
    if annotation is None:
        return None
    parsed = _string_annotation(annotation)
    if parsed is not None:
        annotation = parsed
    if not isinstance(annotation, ast.Subscript):
        return None
    if not (isinstance(annotation.value, ast.Name) and annotation.value.id in TUPLE_CONTAINERS):
        return None
    if _homogeneous_tuple_element(annotation.slice) is not None:
        return None
    if isinstance(annotation.slice, ast.Tuple):
        return list(annotation.slice.elts)
    return [annotation.slice]


def describe(annotation: ast.expr | None) -> str:
    if annotation is None:
        return "<unannotated>"
    return ast.unparse(annotation)
