"""Vector container: a fixed-length, immutable, 0-indexed sequence of one element kind."""

from __future__ import annotations

import numbers
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass

import jax.numpy as jnp

from . import storage
from ._operators import NumericOperators
from .errors import IndexOutOfRangeError, ShapeMismatchError, UnsupportedOperationError
from .kinds import DEFAULT_KIND, ElementKind
from .traits import traits_for


@dataclass(frozen=True, eq=False)
class Vector(NumericOperators):
    data: jnp.ndarray
    kind: ElementKind

    def __post_init__(self) -> None:
        if self.data.ndim != 1:
            raise ShapeMismatchError(f"Vector storage must be rank 1, got rank {self.data.ndim}")

    @classmethod
    def from_list(cls, values: Iterable[object], kind: ElementKind = DEFAULT_KIND) -> "Vector":
        kind = ElementKind(kind)
        return cls(storage.from_values(list(values), kind), kind)

    @classmethod
    def from_array(cls, data: object, kind: ElementKind | None = None) -> "Vector":
        arr = jnp.asarray(data)
        if kind is None:
            kind = ElementKind.from_dtype(arr.dtype) if jnp.issubdtype(arr.dtype, jnp.inexact) else DEFAULT_KIND
        kind = ElementKind(kind)
        return cls(storage.as_buffer(arr, kind, ndim=1), kind)

    @property
    def dim(self) -> int:
        return storage.length(self.data)

    def tolist(self) -> list:
        return self.data.tolist()

    def __len__(self) -> int:
        return self.dim

    def __iter__(self) -> Iterator:
        return iter(self.tolist())

    def __getitem__(self, i: int):
        if isinstance(i, slice):
            return Vector(self.data[i], self.kind)
        return at_index(self, i)

    def __repr__(self) -> str:
        return f"Vector({self.tolist()!r}, kind={self.kind.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return equal(self, other)

    __hash__ = None  # type: ignore[assignment]


def require_same_kind(op: str, *vs: Vector) -> ElementKind:
    kind = vs[0].kind
    for v in vs[1:]:
        if v.kind != kind:
            raise UnsupportedOperationError(f"{op}: element kinds {kind.value} and {v.kind.value} differ")
    return kind


def _lift_scalar(op: str, e: object, v: Vector) -> Vector:
    fn = getattr(traits_for(v.kind), op)
    return Vector(fn(e, v.data), v.kind)


def _zip(op: str, v: Vector, w: Vector) -> Vector:
    kind = require_same_kind(op, v, w)
    fn = getattr(traits_for(kind), op)
    return Vector(fn(v.data, w.data), kind)


# construction


def scalar(e: object, kind: ElementKind = DEFAULT_KIND) -> Vector:
    return Vector.from_list([e], kind)


def konst(e: object, n: int, kind: ElementKind = DEFAULT_KIND) -> Vector:
    kind = ElementKind(kind)
    return Vector(storage.allocate(n, e, kind), kind)


def build(n: int, f: Callable[[int], object], kind: ElementKind = DEFAULT_KIND) -> Vector:
    n = storage.check_size(n)
    return Vector.from_list([f(k) for k in range(n)], kind)


def assoc(
    n: int,
    default: object,
    overrides: Iterable[tuple[int, object]],
    kind: ElementKind = DEFAULT_KIND,
) -> Vector:
    kind = ElementKind(kind)
    with storage.staging(storage.check_size(n), default, kind) as buf:
        for k, x in overrides:
            buf.write((as_index(k),), x)
    return Vector(buf.result, kind)


def as_index(i: object) -> int:
    if isinstance(i, bool) or not isinstance(i, numbers.Integral):
        raise IndexOutOfRangeError(f"index {i!r} is not an integer")
    return int(i)


# indexing and search


def at_index(v: Vector, i: int):
    return storage.read(v.data, as_index(i))


def find(predicate: Callable[[object], bool], v: Vector) -> list[int]:
    return [k for k, x in enumerate(v.tolist()) if predicate(x)]


def cmap(f: Callable[[object], object], v: Vector, kind: ElementKind | None = None) -> Vector:
    values = [f(x) for x in v.tolist()]
    if kind is None:
        produces_complex = any(_is_complex_value(x) for x in values)
        kind = v.kind.complex_of if produces_complex else v.kind.real_of
    return Vector.from_list(values, kind)


# elementwise arithmetic


def scale(e: object, v: Vector) -> Vector:
    return _lift_scalar("scale", e, v)


def scale_recip(e: object, v: Vector) -> Vector:
    return _lift_scalar("scale_recip", e, v)


def add_constant(e: object, v: Vector) -> Vector:
    return _lift_scalar("add_constant", e, v)


def add(v: Vector, w: Vector) -> Vector:
    return _zip("add", v, w)


def sub(v: Vector, w: Vector) -> Vector:
    return _zip("sub", v, w)


def mul(v: Vector, w: Vector) -> Vector:
    return _zip("mul", v, w)


def divide(v: Vector, w: Vector) -> Vector:
    return _zip("divide", v, w)


def power(v: Vector, w: Vector) -> Vector:
    return _zip("power", v, w)


def arctan2(v: Vector, w: Vector) -> Vector:
    return _zip("arctan2", v, w)


def conj(v: Vector) -> Vector:
    return Vector(traits_for(v.kind).conj(v.data), v.kind)


def abs_(v: Vector) -> Vector:
    return Vector(traits_for(v.kind).abs(v.data), v.kind)


def signum(v: Vector) -> Vector:
    return Vector(traits_for(v.kind).signum(v.data), v.kind)


def vmap_float(name: str, v: Vector) -> Vector:
    return Vector(traits_for(v.kind).map(name, v.data), v.kind)


def step(v: Vector) -> Vector:
    return Vector(traits_for(v.kind).step(v.data), v.kind)


def cond(a: Vector, b: Vector, lt: Vector, eq: Vector, gt: Vector) -> Vector:
    """Elementwise three-way select over equal-length operands.

    Picks `lt`, `eq` or `gt` depending on how `a` compares to `b`. Use
    `numeric_jax.conform.cond` when operands need broadcasting first.
    """
    kind = require_same_kind("cond", a, b, lt, eq, gt)
    return Vector(traits_for(kind).cond(a.data, b.data, lt.data, eq.data, gt.data), kind)


# reductions


def sum_elements(v: Vector):
    return traits_for(v.kind).sum_elements(v.data)


def prod_elements(v: Vector):
    return traits_for(v.kind).prod_elements(v.data)


def min_index(v: Vector) -> int:
    return traits_for(v.kind).min_index(v.data)


def max_index(v: Vector) -> int:
    return traits_for(v.kind).max_index(v.data)


def min_element(v: Vector):
    return traits_for(v.kind).min_element(v.data)


def max_element(v: Vector):
    return traits_for(v.kind).max_element(v.data)


def equal(v: Vector, w: Vector) -> bool:
    if v.kind != w.kind:
        return False
    return traits_for(v.kind).equal(v.data, w.data)


def join(vs: Sequence[Vector]) -> Vector:
    """Concatenate vectors of one kind end to end."""
    if not vs:
        return Vector.from_list([])
    kind = require_same_kind("join", *vs)
    return Vector(jnp.concatenate([v.data for v in vs]), kind)


def _is_complex_value(x: object) -> bool:
    if isinstance(x, numbers.Complex) and not isinstance(x, numbers.Real):
        return True
    dtype = getattr(x, "dtype", None)
    return dtype is not None and jnp.issubdtype(dtype, jnp.complexfloating)
