"""
fxexpr CLI Utilities.

Shared helpers for the CLI commands: version display, logging setup and
type declaration handling.
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import typer

from fxexpr._version import get_version
from fxexpr.core.errors import ManifestError
from fxexpr.core.ir.types import ReturnType
from fxexpr.core.manifest import MANIFEST_FILENAME, ExprManifest, load_manifest, parse_type_name


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"fxexpr {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    # Log to stderr so command output stays clean
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_declarations(entries: list[str], option: str) -> dict[str, ReturnType]:
    """Parse repeated ``NAME=TYPE`` option values."""
    declared: dict[str, ReturnType] = {}
    for entry in entries:
        name, sep, type_name = entry.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"expected NAME=TYPE, got {entry!r}", param_hint=option)
        try:
            declared[name.strip()] = parse_type_name(type_name)
        except ManifestError as e:
            raise typer.BadParameter(e.message, param_hint=option) from e
    return declared


def resolve_manifest(path: Path | None) -> ExprManifest:
    """Load the given manifest, or ./fxexpr.toml when present, or an empty one."""
    if path is None:
        default = Path.cwd() / MANIFEST_FILENAME
        if not default.exists():
            return ExprManifest()
        path = default
    return load_manifest(path)
