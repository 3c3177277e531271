"""Uniform container operations over Vector and Matrix.

Each function picks the vector or matrix implementation from its container
argument (or, for constructors, from the size: an `int` builds a Vector and a
`(rows, cols)` pair builds a Matrix). None of these broadcast; see `conform`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from types import ModuleType

from . import conform
from . import matrix as M
from . import vector as V
from .errors import ShapeMismatchError, UnsupportedOperationError
from .kinds import DEFAULT_KIND, ElementKind
from .matrix import Matrix
from .vector import Vector

Container = Vector | Matrix
Index = int | tuple[int, int]


def _impl(c: object) -> ModuleType:
    if isinstance(c, Vector):
        return V
    if isinstance(c, Matrix):
        return M
    raise UnsupportedOperationError(f"{type(c).__name__} is not a Vector or Matrix")


def _impl2(op: str, a: object, b: object) -> ModuleType:
    impl = _impl(a)
    if _impl(b) is not impl:
        raise UnsupportedOperationError(f"{op}: cannot combine {type(a).__name__} with {type(b).__name__}")
    return impl


def _impl_for_size(size: object) -> ModuleType:
    if isinstance(size, tuple):
        if len(size) != 2:
            raise ShapeMismatchError(f"matrix size must be (rows, cols), got {size!r}")
        return M
    return V


# construction


def scalar(e: object, kind: ElementKind = DEFAULT_KIND, *, like: type = Vector) -> Container:
    if like is Matrix:
        return M.scalar(e, kind)
    return V.scalar(e, kind)


def konst(e: object, size: Index, kind: ElementKind = DEFAULT_KIND) -> Container:
    return _impl_for_size(size).konst(e, size, kind)


def build(size: Index, f: Callable[..., object], kind: ElementKind = DEFAULT_KIND) -> Container:
    return _impl_for_size(size).build(size, f, kind)


def assoc(
    size: Index,
    default: object,
    overrides: Iterable[tuple[Index, object]],
    kind: ElementKind = DEFAULT_KIND,
) -> Container:
    return _impl_for_size(size).assoc(size, default, overrides, kind)


# elementwise


def conj(c: Container) -> Container:
    return _impl(c).conj(c)


def scale(e: object, c: Container) -> Container:
    return _impl(c).scale(e, c)


def scale_recip(e: object, c: Container) -> Container:
    return _impl(c).scale_recip(e, c)


def add_constant(e: object, c: Container) -> Container:
    return _impl(c).add_constant(e, c)


def add(a: Container, b: Container) -> Container:
    return _impl2("add", a, b).add(a, b)


def sub(a: Container, b: Container) -> Container:
    return _impl2("sub", a, b).sub(a, b)


def mul(a: Container, b: Container) -> Container:
    return _impl2("mul", a, b).mul(a, b)


def divide(a: Container, b: Container) -> Container:
    return _impl2("divide", a, b).divide(a, b)


def power(a: Container, b: Container) -> Container:
    return _impl2("power", a, b).power(a, b)


def arctan2(a: Container, b: Container) -> Container:
    return _impl2("arctan2", a, b).arctan2(a, b)


def equal(a: Container, b: Container) -> bool:
    return _impl2("equal", a, b).equal(a, b)


def cmap(f: Callable[[object], object], c: Container, kind: ElementKind | None = None) -> Container:
    return _impl(c).cmap(f, c, kind)


def abs_(c: Container) -> Container:
    return _impl(c).abs_(c)


def signum(c: Container) -> Container:
    return _impl(c).signum(c)


def vmap_float(name: str, c: Container) -> Container:
    """Apply the named elementwise function (`sin`, `exp`, `sqrt`, ...)."""
    return _impl(c).vmap_float(name, c)


def step(c: Container) -> Container:
    return _impl(c).step(c)


def cond(a, b, lt, eq, gt) -> Container:
    return conform.cond(a, b, lt, eq, gt)


# indexing and reductions


def at_index(c: Container, i: Index):
    return _impl(c).at_index(c, i)


def find(predicate: Callable[[object], bool], c: Container) -> list:
    return _impl(c).find(predicate, c)


def min_index(c: Container) -> Index:
    return _impl(c).min_index(c)


def max_index(c: Container) -> Index:
    return _impl(c).max_index(c)


def min_element(c: Container):
    return _impl(c).min_element(c)


def max_element(c: Container):
    return _impl(c).max_element(c)


def sum_elements(c: Container):
    return _impl(c).sum_elements(c)


def prod_elements(c: Container):
    return _impl(c).prod_elements(c)


def size(c: Container) -> Index:
    if isinstance(c, Vector):
        return c.dim
    if isinstance(c, Matrix):
        return c.shape
    raise UnsupportedOperationError(f"{type(c).__name__} is not a Vector or Matrix")


# joining


def join_h(a: Container, b: Container) -> Matrix:
    """Side by side; vectors are taken as columns."""
    left = M.as_column(a) if isinstance(a, Vector) else a
    right = M.as_column(b) if isinstance(b, Vector) else b
    return M.from_blocks([[left, right]])


def join_v(a: Container, b: Container) -> Matrix:
    """One above the other; vectors are taken as rows."""
    top = M.as_row(a) if isinstance(a, Vector) else a
    bottom = M.as_row(b) if isinstance(b, Vector) else b
    return M.from_blocks([[top], [bottom]])
