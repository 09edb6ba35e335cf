"""Exception taxonomy for busypy."""

from __future__ import annotations

from pathlib import Path


class BusypyError(Exception):
    """Base class for every error raised by busypy itself."""


class SignatureError(BusypyError, ValueError):
    """A signature model violates its invariants.

    Raised for type names that are not bare identifiers, variadic results, and
    textual field lists that cannot be parsed.
    """


class RegistryError(BusypyError, ValueError):
    """A registry was built with conflicting entries."""


class ArgumentError(BusypyError, TypeError):
    """Command-line arguments do not fit the signature of the called function."""


class ScanConfigError(BusypyError, ValueError):
    """The scanner was configured with an invalid package or directory.

    Always raised before any source file is parsed.
    """


class ScanParseError(BusypyError):
    """A source file in a scanned directory could not be read or parsed."""

    def __init__(self, message: str, *, directory: Path, path: Path | None = None):
        super().__init__(message)
        self.directory = directory
        self.path = path
