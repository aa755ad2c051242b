"""Return type lattice for fxexpr expressions."""

from __future__ import annotations

from enum import StrEnum


class ReturnType(StrEnum):
    """Types an expression can produce.

    ERROR is a real answer ("ill-typed combination"), not "unknown";
    inference reports unknown types as ``None``.
    """

    FLOAT = "float"
    INTEGER = "integer"
    VEC2 = "vec2"
    VEC3 = "vec3"
    ERROR = "error"

    @property
    def is_scalar(self) -> bool:
        return self in (ReturnType.FLOAT, ReturnType.INTEGER)

    @property
    def is_vector(self) -> bool:
        return self in (ReturnType.VEC2, ReturnType.VEC3)
