"""busypy-gen: derive catalog signatures from Python source directories.

The output is a development-time scaffold for maintaining the catalog; the
dispatcher never reads it.
"""

from __future__ import annotations

import logging
import sysconfig
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

import typer

from busypy.config import generate_defaults, generate_packages, generate_root, merge_payload
from busypy.exceptions import ScanConfigError, ScanParseError
from busypy.logging import configure_logging
from busypy.scan import PackageList, ScannedPackage, scan_packages
from busypy.schema import FunctionRecordDTO, ValueSpecDTO
from busypy.signature import FunctionSignature, ValueSpec
from busypy.usage import package_lines

logger = logging.getLogger(__name__)

# Override with -pkg, once per package ("-pkg json -pkg email/mime ...").
DEFAULT_PACKAGES = ("json",)

EXIT_SCAN_FAILED = 1
EXIT_CONFIG_INVALID = 2

app = typer.Typer(add_completion=False)


class OutputFormat(str, Enum):
    JSON = "json"
    USAGE = "usage"


def default_root() -> Path:
    return Path(sysconfig.get_path("stdlib"))


def _value_dto(spec: ValueSpec) -> ValueSpecDTO:
    return ValueSpecDTO(name=spec.name, list_kind=spec.list_kind.value, type_name=spec.type_name)


def function_record(scanned: ScannedPackage, signature: FunctionSignature) -> FunctionRecordDTO:
    return FunctionRecordDTO(
        package=scanned.path_text,
        directory=str(scanned.directory),
        name=signature.name,
        args=[_value_dto(arg) for arg in signature.args],
        rets=[_value_dto(ret) for ret in signature.rets],
        declaration=signature.declaration(),
    )


def render_records(packages: Sequence[ScannedPackage]) -> str:
    lines = [
        function_record(scanned, signature).model_dump_json()
        for scanned in packages
        for signature in scanned.functions
    ]
    return "\n".join(lines)


def render_usage(packages: Sequence[ScannedPackage]) -> str:
    return "\n".join(
        package_lines((scanned.path_text, scanned.functions) for scanned in packages)
    )


def _validate_packages(values: Optional[List[str]]) -> Optional[List[str]]:
    if not values:
        return values
    try:
        PackageList(values)
    except ScanConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return values


def resolve_settings(
    *,
    root: Optional[Path],
    packages: Optional[Sequence[str]],
    config_path: Optional[Path] = None,
) -> tuple[Path, PackageList]:
    """Merge CLI values over config values over built-in defaults."""
    section = generate_defaults(config_path=config_path)
    defaults = {
        "root": str(generate_root(section) or default_root()),
        "packages": generate_packages(section) or list(DEFAULT_PACKAGES),
    }
    payload = {
        "root": str(root) if root is not None else None,
        "packages": list(packages) if packages else None,
    }
    merged = merge_payload(payload, defaults)
    return Path(str(merged["root"])), PackageList(merged["packages"])


def _write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        if text:
            typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n" if text else "", encoding="utf-8")


@app.command()
def generate(
    root: Optional[Path] = typer.Option(
        None,
        "-root",
        "--root",
        help="directory containing the packages (default: the Python standard library)",
    ),
    pkg: Optional[List[str]] = typer.Option(
        None,
        "-pkg",
        "--pkg",
        metavar="path",
        callback=_validate_packages,
        help="scan package `path`; may be given multiple times",
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.JSON, "--format"),
    output: Optional[Path] = typer.Option(None, "-o", "--output"),
    config: Optional[Path] = typer.Option(None, "--config"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="log omitted signature shapes"),
) -> None:
    """Scan package directories and dump the signatures of exported functions."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    try:
        scan_root, packages = resolve_settings(root=root, packages=pkg, config_path=config)
        logger.debug("scanning %s under %s", packages, scan_root)
        scanned = scan_packages(packages, scan_root)
    except ScanConfigError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_INVALID)
    except ScanParseError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=EXIT_SCAN_FAILED)
    if output_format is OutputFormat.USAGE:
        text = render_usage(scanned)
    else:
        text = render_records(scanned)
    _write_output(text, output)


def main() -> None:
    app(prog_name="busypy-gen")
