from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import pytest

from busypy.config import CONFIG_ENV
from busypy.marshal import CallResult
from busypy.registry import Package, Registry, RegistryEntry
from busypy.signature import FunctionSignature


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "absent-busypy.toml"))


def _abs_impl(args: Sequence[str]) -> CallResult:
    if list(args) == ["rel/path"]:
        return CallResult(values=("/abs/path",))
    return CallResult(values=tuple(f"/abs/{arg}" for arg in args))


def _echo_impl(args: Sequence[str]) -> CallResult:
    return CallResult(values=tuple(args))


def _partial_impl(args: Sequence[str]) -> CallResult:
    return CallResult(values=("partial",), error=ValueError("boom"))


def _entry(
    path: tuple[str, ...],
    signature: FunctionSignature,
    implementation: Callable[[Sequence[str]], CallResult],
) -> RegistryEntry:
    return RegistryEntry(package=path, signature=signature, implementation=implementation)


@pytest.fixture
def path_registry() -> Registry:
    filepath = ("path", "filepath")
    tools = ("tools",)
    return Registry(
        [
            Package(
                path=filepath,
                entries=(
                    _entry(
                        filepath,
                        FunctionSignature.parse("Abs", "path string", "string, error", repeats=True),
                        _abs_impl,
                    ),
                    _entry(
                        filepath,
                        FunctionSignature.parse("Join", "elem ...string", "string"),
                        _echo_impl,
                    ),
                    _entry(
                        filepath,
                        FunctionSignature.parse("Split", "path string", "dir, file string"),
                        _echo_impl,
                    ),
                ),
            ),
            Package(
                path=tools,
                entries=(
                    _entry(tools, FunctionSignature.parse("Echo", "words ...string", "[]string"), _echo_impl),
                    _entry(tools, FunctionSignature.parse("Partial", "", "string, error"), _partial_impl),
                    _entry(tools, FunctionSignature.parse("Split", "s string", "[]string"), _echo_impl),
                ),
            ),
        ]
    )
