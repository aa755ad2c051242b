"""
Literal values for the fxexpr expression tree.

Values are tagged 32-bit numbers: a float, a signed integer, or a 2D/3D
float vector. Float components are rounded to IEEE-754 binary32 when the
model is built and compare bitwise, so ``-0.0`` and ``0.0`` are distinct.
"""

from __future__ import annotations

import math
import struct
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fxexpr.core.ir.types import ReturnType

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def to_f32(value: float) -> float:
    """Round a Python float to the nearest binary32 value."""
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def f32_bits(value: float) -> int:
    return struct.unpack("<I", struct.pack("<f", value))[0]


def fits_f32(value: float) -> bool:
    """True when the value stays finite after rounding to binary32."""
    return math.isfinite(to_f32(value))


class _FloatComponents(BaseModel):
    """Shared bitwise equality for models made of float components."""

    model_config = ConfigDict(frozen=True)

    def _components(self) -> tuple[float, ...]:
        return tuple(getattr(self, name) for name in type(self).model_fields)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        theirs = cast(_FloatComponents, other)._components()
        return [f32_bits(c) for c in self._components()] == [f32_bits(c) for c in theirs]

    def __hash__(self) -> int:
        return hash((type(self).__name__, tuple(f32_bits(c) for c in self._components())))

    @field_validator("*", mode="after")
    @classmethod
    def _round_to_f32(cls, value: float) -> float:
        return to_f32(value)


class FloatValue(_FloatComponents):
    """A 32-bit float literal."""

    value: float = Field(description="Component value, rounded to binary32")

    @property
    def return_type(self) -> ReturnType:
        return ReturnType.FLOAT


class IntValue(BaseModel):
    """A 32-bit signed integer literal."""

    value: int = Field(ge=INT32_MIN, le=INT32_MAX, description="Integer value")

    model_config = ConfigDict(frozen=True)

    @property
    def return_type(self) -> ReturnType:
        return ReturnType.INTEGER


class Vec2Value(_FloatComponents):
    """A 2D float vector literal."""

    x: float
    y: float

    @property
    def return_type(self) -> ReturnType:
        return ReturnType.VEC2


class Vec3Value(_FloatComponents):
    """A 3D float vector literal."""

    x: float
    y: float
    z: float

    @property
    def return_type(self) -> ReturnType:
        return ReturnType.VEC3


Value = FloatValue | IntValue | Vec2Value | Vec3Value


def value_of(raw: Any) -> Value:
    """Coerce a Python number or tuple into a literal value.

    ``float`` → FloatValue, ``int`` → IntValue, 2-tuple → Vec2Value,
    3-tuple → Vec3Value. Existing values pass through unchanged.
    """
    if isinstance(raw, (FloatValue, IntValue, Vec2Value, Vec3Value)):
        return raw
    if isinstance(raw, bool):
        raise TypeError("bool is not a literal value")
    if isinstance(raw, int):
        return IntValue(value=raw)
    if isinstance(raw, float):
        return FloatValue(value=raw)
    if isinstance(raw, tuple):
        if len(raw) == 2:
            return Vec2Value(x=float(raw[0]), y=float(raw[1]))
        if len(raw) == 3:
            return Vec3Value(x=float(raw[0]), y=float(raw[1]), z=float(raw[2]))
    raise TypeError(f"Cannot build a literal value from {raw!r}")
