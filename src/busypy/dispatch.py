"""Multi-call entry point.

The dispatch key comes from the name the process was invoked as. Under the
generic name ``busypy`` the ``-f`` flag supplies the key instead, and it always
takes precedence over the invocation name.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

import typer

from busypy.catalog import default_registry
from busypy.config import dispatch_aliases, dispatch_defaults
from busypy.logging import configure_logging, level_from_env
from busypy.marshal import CallResult
from busypy.registry import Registry
from busypy.usage import flag_lines, render_function, render_general

logger = logging.getLogger(__name__)

BASE_NAME = "busypy"
GENERIC_NAMES = frozenset({BASE_NAME, "__main__"})
HELP_FLAGS = ("-h", "--help")
END_OF_OPTIONS = "--"
_STRIPPED_SUFFIXES = (".exe", ".py")

EXIT_OK = 0
EXIT_CALL_FAILED = 1

app = typer.Typer(add_completion=False)


@dataclass(frozen=True)
class Invocation:
    invoked_as: str
    query: str | None
    args: tuple[str, ...] = ()
    help_requested: bool = False


def invocation_name(argv0: str) -> str:
    path = Path(argv0)
    if path.suffix.lower() in _STRIPPED_SUFFIXES:
        return path.stem
    return path.name


def is_generic_name(name: str) -> bool:
    return name.lower() in GENERIC_NAMES


def multicall_invocation(invoked_as: str, args: Sequence[str]) -> Invocation:
    raw = list(args)
    if raw and raw[0] in HELP_FLAGS:
        return Invocation(invoked_as=invoked_as, query=invoked_as, help_requested=True)
    if raw and raw[0] == END_OF_OPTIONS:
        raw = raw[1:]
    return Invocation(invoked_as=invoked_as, query=invoked_as, args=tuple(raw))


def _configured_aliases() -> dict[str, str]:
    return dispatch_aliases(dispatch_defaults())


def emit_result(result: CallResult) -> int:
    if result.error is not None:
        typer.echo(str(result.error) or type(result.error).__name__, err=True)
    if result.values:
        typer.echo(" ".join(result.values))
    return EXIT_CALL_FAILED if result.failed else EXIT_OK


def run(
    invocation: Invocation,
    *,
    registry: Registry,
    flags: Sequence[str] = (),
    aliases: Mapping[str, str] | None = None,
) -> int:
    """Resolve and invoke; fall back to general usage when nothing resolves."""
    if invocation.query is None:
        typer.echo(render_general(registry, invoked_as=BASE_NAME, flags=flags))
        return EXIT_OK
    if aliases is None:
        aliases = _configured_aliases()
    query = aliases.get(invocation.query.lower(), invocation.query)
    resolution = registry.resolve(query)
    if resolution is None:
        logger.debug("%s: unknown function %r", invocation.invoked_as, query)
        typer.echo(render_general(registry, invoked_as=BASE_NAME, flags=flags))
        return EXIT_OK
    if invocation.help_requested:
        typer.echo(render_function(resolution))
        return EXIT_OK
    return emit_result(resolution.entry(invocation.args))


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
        "help_option_names": [],
    }
)
def busypy(
    ctx: typer.Context,
    func: Optional[str] = typer.Option(
        None, "-f", metavar="func", help="invoke function named `func`"
    ),
    show_help: bool = typer.Option(False, "-h", "--help", help="show usage and exit"),
    args: Optional[List[str]] = typer.Argument(None),
) -> None:
    """Run a library function named by -f with the remaining arguments."""
    registry = ctx.obj if isinstance(ctx.obj, Registry) else default_registry()
    invocation = Invocation(
        invoked_as=BASE_NAME,
        query=func,
        args=(*(args or ()), *ctx.args),
        help_requested=show_help,
    )
    code = run(invocation, registry=registry, flags=flag_lines(ctx.command))
    raise typer.Exit(code=code)


def main(argv: Sequence[str] | None = None) -> None:
    argv = list(sys.argv if argv is None else argv)
    configure_logging(level_from_env())
    invoked_as = invocation_name(argv[0]) if argv else BASE_NAME
    if is_generic_name(invoked_as):
        app(args=argv[1:], prog_name=BASE_NAME)
        return
    code = run(
        multicall_invocation(invoked_as, argv[1:]),
        registry=default_registry(),
        flags=flag_lines(typer.main.get_command(app)),
    )
    raise SystemExit(code)
