"""Closed set of element kinds and their counterpart mappings."""

from __future__ import annotations

import numbers
from enum import Enum
from typing import Final

import jax.numpy as jnp

from .errors import UnsupportedOperationError


class ElementKind(str, Enum):
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"

    @property
    def dtype(self) -> jnp.dtype:
        return jnp.dtype(self.value)

    @property
    def is_complex(self) -> bool:
        return self in (ElementKind.COMPLEX64, ElementKind.COMPLEX128)

    @property
    def is_double(self) -> bool:
        return self in (ElementKind.FLOAT64, ElementKind.COMPLEX128)

    @property
    def real_of(self) -> "ElementKind":
        return _REAL_OF[self]

    @property
    def complex_of(self) -> "ElementKind":
        return _COMPLEX_OF[self]

    @property
    def single_of(self) -> "ElementKind":
        return _SINGLE_OF[self]

    @property
    def double_of(self) -> "ElementKind":
        return _DOUBLE_OF[self]

    @classmethod
    def from_dtype(cls, dtype: object) -> "ElementKind":
        try:
            name = jnp.dtype(dtype).name
        except TypeError as err:
            raise UnsupportedOperationError(f"{dtype!r} is not a supported element kind") from err
        kind = _BY_NAME.get(name)
        if kind is None:
            raise UnsupportedOperationError(f"dtype {name} is not a supported element kind")
        return kind

    @classmethod
    def from_name(cls, name: str) -> "ElementKind":
        kind = _BY_NAME.get(name.lower())
        if kind is None:
            raise UnsupportedOperationError(f"unknown element kind name {name!r}")
        return kind


_REAL_OF: Final[dict[ElementKind, ElementKind]] = {
    ElementKind.FLOAT32: ElementKind.FLOAT32,
    ElementKind.FLOAT64: ElementKind.FLOAT64,
    ElementKind.COMPLEX64: ElementKind.FLOAT32,
    ElementKind.COMPLEX128: ElementKind.FLOAT64,
}

_COMPLEX_OF: Final[dict[ElementKind, ElementKind]] = {
    ElementKind.FLOAT32: ElementKind.COMPLEX64,
    ElementKind.FLOAT64: ElementKind.COMPLEX128,
    ElementKind.COMPLEX64: ElementKind.COMPLEX64,
    ElementKind.COMPLEX128: ElementKind.COMPLEX128,
}

_SINGLE_OF: Final[dict[ElementKind, ElementKind]] = {
    ElementKind.FLOAT32: ElementKind.FLOAT32,
    ElementKind.FLOAT64: ElementKind.FLOAT32,
    ElementKind.COMPLEX64: ElementKind.COMPLEX64,
    ElementKind.COMPLEX128: ElementKind.COMPLEX64,
}

_DOUBLE_OF: Final[dict[ElementKind, ElementKind]] = {
    ElementKind.FLOAT32: ElementKind.FLOAT64,
    ElementKind.FLOAT64: ElementKind.FLOAT64,
    ElementKind.COMPLEX64: ElementKind.COMPLEX128,
    ElementKind.COMPLEX128: ElementKind.COMPLEX128,
}

_BY_NAME: Final[dict[str, ElementKind]] = {
    "float32": ElementKind.FLOAT32,
    "float64": ElementKind.FLOAT64,
    "complex64": ElementKind.COMPLEX64,
    "complex128": ElementKind.COMPLEX128,
    # aliases
    "float": ElementKind.FLOAT32,
    "single": ElementKind.FLOAT32,
    "double": ElementKind.FLOAT64,
    "real": ElementKind.FLOAT64,
    "complex": ElementKind.COMPLEX128,
}

DEFAULT_KIND: Final[ElementKind] = ElementKind.FLOAT64


def join_kinds(left: ElementKind, right: ElementKind) -> ElementKind:
    """Smallest kind able to hold values of both kinds."""
    kind = left
    if right.is_complex:
        kind = kind.complex_of
    if right.is_double:
        kind = kind.double_of
    return kind


def kind_of_scalar(value: object, *, like: ElementKind = DEFAULT_KIND) -> ElementKind:
    """Kind a bare Python/NumPy scalar takes when combined with a `like` container."""
    if isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real):
        return like.complex_of
    dtype = getattr(value, "dtype", None)
    if dtype is not None and jnp.issubdtype(dtype, jnp.complexfloating):
        return like.complex_of
    return like


def coerce_scalar(value: object, kind: ElementKind):
    """Convert a scalar to the Python type matching `kind`."""
    if isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real):
        if not kind.is_complex:
            raise UnsupportedOperationError(f"complex value {value!r} cannot be stored in a {kind.value} container")
        return complex(value)
    if hasattr(value, "item"):
        return coerce_scalar(value.item(), kind)
    if not isinstance(value, numbers.Number):
        raise UnsupportedOperationError(f"{type(value).__name__} is not a numeric element")
    return complex(value) if kind.is_complex else float(value)
