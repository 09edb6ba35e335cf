from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence

from busypy.exceptions import RegistryError
from busypy.marshal import CallResult, Implementation, adapt
from busypy.signature import FunctionSignature

logger = logging.getLogger(__name__)

PACKAGE_SEPARATOR = "/"
QUERY_SEPARATOR = "."


@dataclass(frozen=True)
class RegistryEntry:
    package: tuple[str, ...]
    signature: FunctionSignature
    implementation: Implementation

    @property
    def name(self) -> str:
        return self.signature.name

    @property
    def package_path(self) -> str:
        return PACKAGE_SEPARATOR.join(self.package)

    def __call__(self, args: Sequence[str]) -> CallResult:
        return self.implementation(args)


@dataclass(frozen=True)
class Package:
    path: tuple[str, ...]
    entries: tuple[RegistryEntry, ...]

    @property
    def path_text(self) -> str:
        return PACKAGE_SEPARATOR.join(self.path)


@dataclass(frozen=True)
class Resolution:
    package: str
    entry: RegistryEntry

    @property
    def signature(self) -> FunctionSignature:
        return self.entry.signature


@dataclass(frozen=True)
class FunctionDef:
    """An entry waiting for the package that will own it."""

    signature: FunctionSignature
    implementation: Implementation


def function(
    func: Callable[..., object],
    name: str,
    args: str = "",
    rets: str = "",
    *,
    repeats: bool = False,
) -> FunctionDef:
    """Describe a pass-through catalog function using the compact field syntax."""
    signature = FunctionSignature.parse(name, args, rets, repeats=repeats)
    return FunctionDef(signature=signature, implementation=adapt(signature, func))


def package(path: Sequence[str], *functions: FunctionDef) -> Package:
    owner = tuple(path)
    return Package(
        path=owner,
        entries=tuple(
            RegistryEntry(
                package=owner,
                signature=item.signature,
                implementation=item.implementation,
            )
            for item in functions
        ),
    )


def _split_query(query: str) -> tuple[str, str]:
    parts = query.split(QUERY_SEPARATOR)
    name = parts[-1]
    package_filter = PACKAGE_SEPARATOR.join(parts[:-1])
    return package_filter.lower(), name.lower()


def package_matches(package_path: str, package_filter: str) -> bool:
    """Suffix match on path-segment boundaries; an empty filter matches all."""
    if not package_filter:
        return True
    if package_path == package_filter:
        return True
    return package_path.endswith(PACKAGE_SEPARATOR + package_filter)


class Registry:
    """Ordered, immutable collection of catalog packages."""

    def __init__(self, packages: Iterable[Package]) -> None:
        self._packages = tuple(packages)
        for pkg in self._packages:
            seen: set[str] = set()
            for entry in pkg.entries:
                key = entry.name.lower()
                if key in seen:
                    raise RegistryError(
                        f"duplicate function {entry.name!r} in package {pkg.path_text!r}"
                    )
                seen.add(key)

    @property
    def packages(self) -> tuple[Package, ...]:
        return self._packages

    def __iter__(self) -> Iterator[RegistryEntry]:
        for pkg in self._packages:
            yield from pkg.entries

    def __len__(self) -> int:
        return sum(len(pkg.entries) for pkg in self._packages)

    def resolve(self, query: str) -> Resolution | None:
        """Find the first entry matching ``[pkg.]name``, ignoring case.

        Package segments may be given with dots or slashes and match the
        registered package path by suffix. Returns ``None`` when nothing
        matches.
        """
        package_filter, name = _split_query(query)
        if not name:
            return None
        for pkg in self._packages:
            package_path = pkg.path_text.lower()
            if not package_matches(package_path, package_filter):
                continue
            for entry in pkg.entries:
                if entry.name.lower() == name:
                    logger.debug("resolved %r to %s.%s", query, package_path, entry.name)
                    return Resolution(package=package_path, entry=entry)
        logger.debug("no function matches %r", query)
        return None
