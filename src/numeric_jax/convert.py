"""Element-kind conversions between real/complex and single/double precision."""

from __future__ import annotations

from jax import lax
import jax.numpy as jnp

from .errors import ShapeReport, UnsupportedOperationError
from .kinds import ElementKind
from .matrix import Matrix
from .storage import check_kind_available
from .vector import Vector

Container = Vector | Matrix


def _shape(c: Container) -> tuple[int, ...]:
    return (c.dim,) if isinstance(c, Vector) else c.shape


def _rewrap(c: Container, data: jnp.ndarray, kind: ElementKind) -> Container:
    return type(c)(data, kind)


def to_kind(kind: ElementKind, c: Container) -> Container:
    """Widen or narrow `c` to `kind`. Dropping an imaginary part is refused."""
    kind = ElementKind(kind)
    if c.kind == kind:
        return c
    if c.kind.is_complex and not kind.is_complex:
        raise UnsupportedOperationError(
            f"converting {c.kind.value} to {kind.value} would drop the imaginary part; use from_complex"
        )
    check_kind_available(kind)
    return _rewrap(c, c.data.astype(kind.dtype), kind)


def real(c: Container, kind: ElementKind | None = None) -> Container:
    """Embed a real container into `kind`, whose real counterpart is `c.kind`."""
    if c.kind.is_complex:
        raise UnsupportedOperationError(f"real expects a real container, got {c.kind.value}")
    if kind is None:
        return c
    kind = ElementKind(kind)
    if kind.real_of != c.kind:
        raise UnsupportedOperationError(f"{c.kind.value} is not the real counterpart of {kind.value}")
    return to_kind(kind, c)


def complex_(c: Container) -> Container:
    return to_kind(c.kind.complex_of, c)


def single(c: Container) -> Container:
    return to_kind(c.kind.single_of, c)


def double(c: Container) -> Container:
    return to_kind(c.kind.double_of, c)


def to_complex(parts: tuple[Container, Container]) -> Container:
    re, im = parts
    if type(re) is not type(im):
        raise UnsupportedOperationError(
            f"to_complex: cannot pair {type(re).__name__} with {type(im).__name__}"
        )
    for part in (re, im):
        if part.kind.is_complex:
            raise UnsupportedOperationError(f"to_complex expects real parts, got {part.kind.value}")
    if re.kind != im.kind:
        raise UnsupportedOperationError(f"to_complex: parts have kinds {re.kind.value} and {im.kind.value}")
    if _shape(re) != _shape(im):
        raise ShapeReport(actual=_shape(im), requested=_shape(re)).error(
            f"to_complex: real part {_shape(re)} and imaginary part {_shape(im)} differ in shape"
        )
    kind = re.kind.complex_of
    return _rewrap(re, lax.complex(re.data, im.data), kind)


def from_complex(c: Container) -> tuple[Container, Container]:
    if not c.kind.is_complex:
        raise UnsupportedOperationError(f"from_complex expects a complex container, got {c.kind.value}")
    kind = c.kind.real_of
    return _rewrap(c, jnp.real(c.data), kind), _rewrap(c, jnp.imag(c.data), kind)
