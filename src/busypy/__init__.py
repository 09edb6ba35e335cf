"""busypy package root."""

from busypy.registry import Registry, RegistryEntry, Resolution
from busypy.signature import ArgSpec, FunctionSignature, ListKind, RetSpec, ValueSpec

__all__ = [
    "__version__",
    "ArgSpec",
    "FunctionSignature",
    "ListKind",
    "Registry",
    "RegistryEntry",
    "Resolution",
    "RetSpec",
    "ValueSpec",
]

__version__ = "0.1.0"
