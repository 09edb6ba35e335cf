from __future__ import annotations

from typing import Any, Iterable, Sequence

from busypy.registry import Registry, Resolution
from busypy.signature import FunctionSignature

CATALOG_HEADING = "The following library functions are supported:"


def flag_lines(command: Any) -> list[str]:
    """Render a command's options as an indented two-line listing.

    Options are selected by ``param_type_name`` rather than by class.
    """
    lines: list[str] = []
    for param in command.params:
        if getattr(param, "param_type_name", None) != "option":
            continue
        names = ", ".join(param.opts + param.secondary_opts)
        if not param.is_flag:
            names = f"{names} {param.metavar or param.name}"
        lines.append(f"  {names}")
        help_text = param.help or ""
        if not param.is_flag and param.default not in (None, "", ()):
            help_text = f"{help_text} (default {param.default!r})".strip()
        if help_text:
            lines.append(f"    \t{help_text}")
    return lines


def package_lines(packages: Iterable[tuple[str, Sequence[FunctionSignature]]]) -> list[str]:
    lines: list[str] = []
    for path, signatures in packages:
        lines.append(f'\tpackage "{path}"')
        for signature in signatures:
            lines.append(f"\t\t{signature.declaration()}")
    return lines


def render_general(
    registry: Registry,
    *,
    invoked_as: str,
    flags: Sequence[str] = (),
) -> str:
    lines = [f"Usage of {invoked_as}:", *flags, "", CATALOG_HEADING]
    lines.extend(
        package_lines(
            (pkg.path_text, [entry.signature for entry in pkg.entries])
            for pkg in registry.packages
        )
    )
    return "\n".join(lines)


def render_function(resolution: Resolution) -> str:
    signature = resolution.signature
    name = signature.name.lower()
    lines = [
        f'Usage of ("{resolution.package}") {name}:',
        "\t" + " ".join([name, *signature.arg_tokens()]),
    ]
    returns = signature.return_tokens()
    if returns:
        lines.append(f"\t\treturns: {', '.join(returns)}")
    return "\n".join(lines)
