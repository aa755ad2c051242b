"""
Prefix completion for expression input fields.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from fxexpr.core.expression_lang.printer import to_string
from fxexpr.core.expression_lang.tokenizer import is_identifier
from fxexpr.core.ir.expressions import AttrRef, PropRef
from fxexpr.core.ir.ops import lookup_builtin, lookup_function


class CompletionKind(StrEnum):
    FUNCTION = "function"
    BUILTIN = "builtin"
    ATTRIBUTE = "attribute"
    PROPERTY = "property"


@dataclass(frozen=True)
class CompletionItem:
    """A completion suggestion."""

    label: str
    kind: CompletionKind
    detail: str | None
    insert_text: str


# (name, insert text, detail)
_FUNCTIONS: list[tuple[str, str, str]] = [
    ("sin", "sin(1.0)", "Sine function"),
    ("cos", "cos(1.0)", "Cosine function"),
    ("abs", "abs(1.0)", "Absolute value"),
    ("norm", "norm(vec2(1.0, 1.0))", "Normalize vector"),
    ("all", "all(vec2(1.0, 1.0))", "Check if all components are true"),
    ("any", "any(vec2(1.0, 1.0))", "Check if any component is true"),
    ("dot", "dot(vec2(1.0, 1.0), vec2(1.0, 1.0))", "Dot product"),
    ("cross", "cross(vec3(1.0, 1.0, 1.0), vec3(1.0, 1.0, 1.0))", "Cross product"),
    ("min", "min(1.0, 1.0)", "Minimum value"),
    ("max", "max(1.0, 1.0)", "Maximum value"),
    ("vec2", "vec2(1.0, 1.0)", "2D vector constructor"),
    ("vec3", "vec3(1.0, 1.0, 1.0)", "3D vector constructor"),
    ("attr", 'attr("name")', "Access particle attribute"),
    ("prop", 'prop("name")', "Access effect property"),
]

_BUILTINS: list[tuple[str, str]] = [
    ("time", "Current simulation time"),
    ("delta_time", "Time since last update"),
    ("rand", "Random value [0, 1]"),
    ("alpha_cutoff", "Alpha mask threshold"),
    ("particle_id", "Unique particle identifier"),
]

DEFAULT_ATTRIBUTES: dict[str, str] = {
    "position": "Particle position",
    "velocity": "Particle velocity",
    "lifetime": "Particle lifetime",
    "age": "Particle age",
    "color": "Particle color",
    "size": "Particle size",
}


def get_completions(
    prefix: str,
    attributes: Iterable[str] | None = None,
    properties: Iterable[str] | None = None,
) -> list[CompletionItem]:
    """Completion suggestions whose label starts with ``prefix``.

    Functions come first, then built-ins, attributes and properties.
    Without ``attributes`` the standard particle attributes are offered.
    Properties are inserted in ``prop(...)`` form since a bare name
    would read as an attribute.
    """
    items: list[CompletionItem] = []

    for name, insert, detail in _FUNCTIONS:
        if name.startswith(prefix):
            items.append(CompletionItem(name, CompletionKind.FUNCTION, detail, insert))

    for name, detail in _BUILTINS:
        if name.startswith(prefix):
            items.append(CompletionItem(name, CompletionKind.BUILTIN, detail, name))

    if attributes is None:
        attribute_details: dict[str, str | None] = dict(DEFAULT_ATTRIBUTES)
    else:
        attribute_details = {name: "Particle attribute" for name in attributes}
    for name, attr_detail in attribute_details.items():
        if name.startswith(prefix):
            items.append(
                CompletionItem(name, CompletionKind.ATTRIBUTE, attr_detail, _attribute_insert(name))
            )

    for name in properties or ():
        if name.startswith(prefix):
            insert = to_string(PropRef(name=name))
            items.append(CompletionItem(name, CompletionKind.PROPERTY, "Effect property", insert))

    return items


def _attribute_insert(name: str) -> str:
    """Bare name where it reads back as the attribute, ``attr(...)`` otherwise."""
    if is_identifier(name) and lookup_function(name) is None and lookup_builtin(name) is None:
        return name
    return to_string(AttrRef(name=name))
