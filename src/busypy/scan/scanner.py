from __future__ import annotations

import ast
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from busypy.exceptions import ScanParseError
from busypy.scan.annotations import (
    classify,
    describe,
    fixed_tuple_elements,
    is_none_annotation,
)
from busypy.scan.package_list import PackageList, check_directories
from busypy.signature import ArgSpec, FunctionSignature, RetSpec

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".py", ".pyi")
TEST_FILE_NAMES = frozenset({"conftest.py"})
TEST_FILE_PREFIX = "test_"
TEST_FILE_SUFFIXES = ("_test.py", "_tests.py")

FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


@dataclass(frozen=True)
class ScannedPackage:
    path: tuple[str, ...]
    directory: Path
    functions: tuple[FunctionSignature, ...]

    @property
    def path_text(self) -> str:
        return "/".join(self.path)


def is_exported(name: str) -> bool:
    """Externally visible by naming convention: no leading underscore."""
    return bool(name) and not name.startswith("_")


def is_test_file(path: Path) -> bool:
    name = path.name
    if name in TEST_FILE_NAMES:
        return True
    if name.startswith(TEST_FILE_PREFIX):
        return True
    return name.endswith(TEST_FILE_SUFFIXES)


def source_files(directory: Path) -> list[Path]:
    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix in SOURCE_SUFFIXES and not is_test_file(path)
    )


class ExportedFunctionVisitor(ast.NodeVisitor):
    """Collect exported module-level functions.

    Module-level ``if``/``try`` blocks are walked; class and function bodies
    are not. The first definition of a name wins.
    """

    def __init__(self, *, label: str = "") -> None:
        self.label = label
        self.functions: list[FunctionSignature] = []
        self._seen: set[str] = set()

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        return

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._record(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._record(node)

    def _record(self, node: FunctionNode) -> None:
        if not is_exported(node.name):
            return
        if node.name in self._seen:
            logger.debug("%s: skipping repeated definition of %s", self.label, node.name)
            return
        self._seen.add(node.name)
        self.functions.append(
            FunctionSignature(
                name=node.name,
                args=tuple(self._arguments(node)),
                rets=tuple(self._results(node)),
            )
        )

    def _omit(self, node: FunctionNode, what: str, annotation: ast.expr | None) -> None:
        logger.debug(
            "%s: %s: omitting %s with unclassifiable type %s",
            self.label,
            node.name,
            what,
            describe(annotation),
        )

    def _arguments(self, node: FunctionNode) -> list[ArgSpec]:
        args = node.args
        specs: list[ArgSpec] = []

        def _add(arg: ast.arg, *, variadic: bool = False) -> None:
            classified = classify(arg.annotation, variadic=variadic)
            if classified is None:
                self._omit(node, f"parameter {arg.arg!r}", arg.annotation)
                return
            kind, type_name = classified
            specs.append(ArgSpec(type_name=type_name, list_kind=kind, name=arg.arg))

        for arg in args.posonlyargs + args.args:
            _add(arg)
        if args.vararg is not None:
            _add(args.vararg, variadic=True)
        for arg in args.kwonlyargs:
            _add(arg)
        if args.kwarg is not None:
            self._omit(node, f"parameter '**{args.kwarg.arg}'", args.kwarg.annotation)
        return specs

    def _results(self, node: FunctionNode) -> list[RetSpec]:
        annotation = node.returns
        if is_none_annotation(annotation):
            return []
        elements = fixed_tuple_elements(annotation)
        if elements is None:
            elements = [annotation]
        specs: list[RetSpec] = []
        for element in elements:
            classified = classify(element)
            if classified is None:
                self._omit(node, "result", element)
                continue
            kind, type_name = classified
            specs.append(RetSpec(type_name=type_name, list_kind=kind))
        return specs


def parse_directory(directory: Path) -> list[tuple[Path, ast.Module]]:
    modules: list[tuple[Path, ast.Module]] = []
    for path in source_files(directory):
        try:
            source = path.read_text(encoding="utf-8")
            modules.append((path, ast.parse(source, filename=str(path))))
        except (OSError, UnicodeDecodeError, SyntaxError, ValueError) as exc:
            raise ScanParseError(
                f"failed to parse: {str(directory)!r}: {path.name}: {exc}",
                directory=directory,
                path=path,
            ) from exc
    return modules


def scan_directory(directory: Path, *, package: Sequence[str] = ()) -> ScannedPackage:
    path = tuple(package) or (directory.name,)
    visitor = ExportedFunctionVisitor(label="/".join(path))
    for source_path, module in parse_directory(directory):
        logger.debug("%s: visiting %s", visitor.label, source_path.name)
        visitor.visit(module)
    return ScannedPackage(path=path, directory=directory, functions=tuple(visitor.functions))


def scan(directories: Iterable[Path]) -> list[ScannedPackage]:
    """Scan each directory in order; every directory is checked before parsing."""
    checked = check_directories(list(directories))
    return [scan_directory(directory) for directory in checked]


def scan_packages(packages: PackageList, root: Path) -> list[ScannedPackage]:
    directories = check_directories(packages.with_prefix(root))
    return [
        scan_directory(directory, package=value.split("/"))
        for value, directory in zip(packages, directories)
    ]
