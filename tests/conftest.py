"""Shared pytest fixtures for fxexpr tests."""

import pytest

from fxexpr.core.ir import ReturnType


@pytest.fixture
def attribute_types() -> dict[str, ReturnType]:
    """Attribute types of a typical particle system."""
    return {
        "position": ReturnType.VEC3,
        "velocity": ReturnType.VEC3,
        "uv": ReturnType.VEC2,
        "age": ReturnType.FLOAT,
        "lifetime": ReturnType.FLOAT,
        "seed": ReturnType.INTEGER,
    }


@pytest.fixture
def property_types() -> dict[str, ReturnType]:
    """Effect property types."""
    return {
        "gravity": ReturnType.FLOAT,
        "wind": ReturnType.VEC3,
        "count": ReturnType.INTEGER,
    }
