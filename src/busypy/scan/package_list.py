from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from busypy.exceptions import ScanConfigError

PACKAGE_SEPARATOR = "/"


def _valid_package_char(char: str) -> bool:
    return char.isalpha() or char.isdigit() or char == PACKAGE_SEPARATOR


def validate_package(value: str) -> str:
    # basic sanity checks, not a full package-name grammar
    if not value.strip():
        raise ScanConfigError("(empty)")
    if not all(_valid_package_char(char) for char in value):
        raise ScanConfigError(f"package name: {value!r}")
    return value


class PackageList:
    """Ordered, duplicate-free list of package paths relative to a root."""

    def __init__(self, values: Iterable[str] = ()) -> None:
        self._values: list[str] = []
        for value in values:
            self.add(value)

    def add(self, value: str) -> None:
        validate_package(value)
        if value in self._values:
            raise ScanConfigError(f"duplicate name: {value!r}")
        self._values.append(value)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    def __str__(self) -> str:
        return "[" + ", ".join(f'"{value}"' for value in self._values) + "]"

    def __repr__(self) -> str:
        return f"PackageList({self._values!r})"

    def with_prefix(self, *prefix: Path | str) -> list[Path]:
        base = Path(*prefix) if prefix else Path()
        return [base.joinpath(*value.split(PACKAGE_SEPARATOR)) for value in self._values]


def check_directories(paths: Iterable[Path]) -> list[Path]:
    """Fail on the first path that is not an existing directory."""
    checked: list[Path] = []
    for path in paths:
        if not path.is_dir():
            raise ScanConfigError(f"invalid package source directory: {str(path)!r}")
        checked.append(path)
    return checked
