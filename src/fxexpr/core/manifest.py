"""
Loader for ``fxexpr.toml`` manifests.

A manifest declares the attribute and property types an effect exposes
to its expressions:

    [attributes]
    position = "vec3"
    age = "float"

    [properties]
    gravity = "float"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fxexpr.core.errors import ManifestError
from fxexpr.core.ir.types import ReturnType

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "fxexpr.toml"

# ERROR is an inference result, never a declared type
DECLARABLE_TYPES = tuple(t for t in ReturnType if t != ReturnType.ERROR)


@dataclass
class ExprManifest:
    """Declared attribute and property types."""

    attributes: dict[str, ReturnType] = field(default_factory=dict)
    properties: dict[str, ReturnType] = field(default_factory=dict)


def parse_type_name(name: str) -> ReturnType:
    """Map a declared type spelling (``"vec3"``) to its ReturnType."""
    try:
        declared = ReturnType(name.strip().lower())
    except ValueError:
        declared = None
    if declared is None or declared == ReturnType.ERROR:
        allowed = ", ".join(t.value for t in DECLARABLE_TYPES)
        raise ManifestError(f"Unknown type '{name}' (expected one of: {allowed})")
    return declared


def _parse_section(data: dict[str, Any], section: str) -> dict[str, ReturnType]:
    table = data.get(section, {})
    if not isinstance(table, dict):
        raise ManifestError(f"[{section}] must be a table of name = \"type\" entries")

    declared: dict[str, ReturnType] = {}
    for name, type_name in table.items():
        if not isinstance(type_name, str):
            raise ManifestError(f"{section}.{name}: type must be a string, got {type_name!r}")
        try:
            declared[name] = parse_type_name(type_name)
        except ManifestError as e:
            raise ManifestError(f"{section}.{name}: {e.message}") from e
    return declared


def load_manifest(path: Path) -> ExprManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"{path}: invalid TOML: {e}") from e

    manifest = ExprManifest(
        attributes=_parse_section(data, "attributes"),
        properties=_parse_section(data, "properties"),
    )
    logger.debug(
        "Loaded %s: %d attributes, %d properties",
        path,
        len(manifest.attributes),
        len(manifest.properties),
    )
    return manifest
