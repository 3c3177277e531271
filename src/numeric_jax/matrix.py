"""Matrix container.

A Matrix is a rows x cols grid stored row-major. It is not a Vector: every
elementwise operation flattens to a Vector, runs the Vector operation and
reshapes the result back. Flat index `i` addresses element
`(i // cols, i % cols)`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

import jax.numpy as jnp

from . import storage
from . import vector as V
from ._operators import NumericOperators
from .errors import IndexOutOfRangeError, ShapeMismatchError, ShapeReport, UnsupportedOperationError
from .kinds import DEFAULT_KIND, ElementKind
from .vector import Vector

MatrixIndex = tuple[int, int]


@dataclass(frozen=True, eq=False)
class Matrix(NumericOperators):
    data: jnp.ndarray
    kind: ElementKind

    def __post_init__(self) -> None:
        if self.data.ndim != 2:
            raise ShapeMismatchError(f"Matrix storage must be rank 2, got rank {self.data.ndim}")

    @classmethod
    def from_lists(cls, rows_: Iterable[Iterable[object]], kind: ElementKind = DEFAULT_KIND) -> "Matrix":
        return from_rows([Vector.from_list(row, kind) for row in rows_], kind)

    @classmethod
    def from_array(cls, data: object, kind: ElementKind | None = None) -> "Matrix":
        arr = jnp.asarray(data)
        if kind is None:
            kind = ElementKind.from_dtype(arr.dtype) if jnp.issubdtype(arr.dtype, jnp.inexact) else DEFAULT_KIND
        kind = ElementKind(kind)
        return cls(storage.as_buffer(arr, kind, ndim=2), kind)

    @property
    def rows(self) -> int:
        return int(self.data.shape[0])

    @property
    def cols(self) -> int:
        return int(self.data.shape[1])

    @property
    def shape(self) -> MatrixIndex:
        return (self.rows, self.cols)

    def tolist(self) -> list[list]:
        return self.data.tolist()

    def __getitem__(self, index: MatrixIndex):
        return at_index(self, index)

    def __repr__(self) -> str:
        return f"Matrix({self.rows}><{self.cols}, {self.tolist()!r}, kind={self.kind.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return equal(self, other)

    __hash__ = None  # type: ignore[assignment]


def shape_text(m: Matrix) -> str:
    return f"({m.rows}><{m.cols})"


# structural


def flatten(m: Matrix) -> Vector:
    return Vector(storage.flatten(m.data), m.kind)


def reshape(c: int, v: Vector) -> Matrix:
    return Matrix(storage.reshape(v.data, c), v.kind)


def trans(m: Matrix) -> Matrix:
    return Matrix(storage.transpose(m.data), m.kind)


def as_row(v: Vector) -> Matrix:
    return Matrix(jnp.reshape(v.data, (1, v.dim)), v.kind)


def as_column(v: Vector) -> Matrix:
    return Matrix(jnp.reshape(v.data, (v.dim, 1)), v.kind)


def from_rows(vs: Sequence[Vector], kind: ElementKind | None = None) -> Matrix:
    if not vs:
        kind = ElementKind(kind or DEFAULT_KIND)
        storage.check_kind_available(kind)
        return Matrix(jnp.zeros((0, 0), dtype=kind.dtype), kind)
    kind = V.require_same_kind("from_rows", *vs)
    width = vs[0].dim
    for k, v in enumerate(vs):
        if v.dim != width:
            raise ShapeMismatchError(
                f"from_rows: row {k} has dim={v.dim}, expected dim={width}",
                actual=(v.dim,),
                requested=(width,),
            )
    return Matrix(jnp.stack([v.data for v in vs]), kind)


def from_columns(vs: Sequence[Vector], kind: ElementKind | None = None) -> Matrix:
    return trans(from_rows(vs, kind))


def to_rows(m: Matrix) -> list[Vector]:
    return [Vector(m.data[i], m.kind) for i in range(m.rows)]


def to_columns(m: Matrix) -> list[Vector]:
    return to_rows(trans(m))


def from_blocks(blocks: Sequence[Sequence[Matrix]]) -> Matrix:
    """Assemble a matrix from a grid of blocks.

    Blocks in one block-row must share their row count, and every block-row
    must add up to the same width.
    """
    if not blocks or not any(blocks):
        return from_rows([])
    kinds = {b.kind for row in blocks for b in row}
    if len(kinds) != 1:
        raise UnsupportedOperationError(f"from_blocks: mixed element kinds {sorted(k.value for k in kinds)}")
    width: int | None = None
    strips = []
    for r, row in enumerate(blocks):
        heights = {b.rows for b in row}
        if len(heights) != 1:
            raise ShapeMismatchError(f"from_blocks: blocks in block-row {r} have row counts {sorted(heights)}")
        row_width = sum(b.cols for b in row)
        if width is None:
            width = row_width
        elif row_width != width:
            raise ShapeMismatchError(
                f"from_blocks: block-row {r} is {row_width} wide, expected {width}",
                actual=(heights.pop(), row_width),
                requested=(row[0].rows, width),
            )
        strips.append(jnp.concatenate([b.data for b in row], axis=1))
    return Matrix(jnp.concatenate(strips, axis=0), kinds.pop())


def rep_rows(n: int, m: Matrix) -> Matrix:
    """`n` copies of `flatten(m)` stacked as rows."""
    n = storage.check_size(n)
    return Matrix(jnp.tile(storage.flatten(m.data)[None, :], (n, 1)), m.kind)


def rep_cols(n: int, m: Matrix) -> Matrix:
    """`n` copies of `flatten(m)` placed side by side as columns."""
    n = storage.check_size(n)
    return Matrix(jnp.tile(storage.flatten(m.data)[:, None], (1, n)), m.kind)


# lifting


def _lift(fn: Callable[[Vector], Vector], m: Matrix) -> Matrix:
    out = fn(flatten(m))
    return Matrix(jnp.reshape(out.data, m.shape), out.kind)


def _lift2(op: str, fn: Callable[[Vector, Vector], Vector], a: Matrix, b: Matrix) -> Matrix:
    if a.shape != b.shape:
        raise ShapeReport(actual=b.shape, requested=a.shape).error(
            f"{op}: nonconformant matrices {shape_text(a)} and {shape_text(b)}"
        )
    return _lift(lambda fa: fn(fa, flatten(b)), a)


# construction


def scalar(e: object, kind: ElementKind = DEFAULT_KIND) -> Matrix:
    return reshape(1, V.scalar(e, kind))


def konst(e: object, shape: MatrixIndex, kind: ElementKind = DEFAULT_KIND) -> Matrix:
    r, c = shape
    r = storage.check_size(r, where="rows")
    c = storage.check_size(c, where="cols")
    v = V.konst(e, r * c, kind)
    return Matrix(jnp.reshape(v.data, (r, c)), v.kind)


def build(shape: MatrixIndex, f: Callable[[int, int], object], kind: ElementKind = DEFAULT_KIND) -> Matrix:
    r, c = shape
    r = storage.check_size(r, where="rows")
    c = storage.check_size(c, where="cols")
    v = Vector.from_list([f(i, j) for i in range(r) for j in range(c)], kind)
    return Matrix(jnp.reshape(v.data, (r, c)), v.kind)


def assoc(
    shape: MatrixIndex,
    default: object,
    overrides: Iterable[tuple[MatrixIndex, object]],
    kind: ElementKind = DEFAULT_KIND,
) -> Matrix:
    kind = ElementKind(kind)
    with storage.staging(tuple(shape), default, kind) as buf:
        for (i, j), x in overrides:
            buf.write((V.as_index(i), V.as_index(j)), x)
    return Matrix(buf.result, kind)


# indexing and search


def at_index(m: Matrix, index: MatrixIndex):
    try:
        i, j = index
    except (TypeError, ValueError) as err:
        raise IndexOutOfRangeError(f"matrix index must be a (row, col) pair, got {index!r}") from err
    i, j = V.as_index(i), V.as_index(j)
    if not (0 <= i < m.rows and 0 <= j < m.cols):
        raise IndexOutOfRangeError(f"index ({i}, {j}) out of range for {shape_text(m)} matrix")
    return m.data[i, j].item()


def _to_pair(m: Matrix, k: int) -> MatrixIndex:
    return divmod(k, m.cols)


def find(predicate: Callable[[object], bool], m: Matrix) -> list[MatrixIndex]:
    return [_to_pair(m, k) for k in V.find(predicate, flatten(m))]


def cmap(f: Callable[[object], object], m: Matrix, kind: ElementKind | None = None) -> Matrix:
    return _lift(lambda v: V.cmap(f, v, kind), m)


# elementwise arithmetic


def scale(e: object, m: Matrix) -> Matrix:
    return _lift(lambda v: V.scale(e, v), m)


def scale_recip(e: object, m: Matrix) -> Matrix:
    return _lift(lambda v: V.scale_recip(e, v), m)


def add_constant(e: object, m: Matrix) -> Matrix:
    return _lift(lambda v: V.add_constant(e, v), m)


def add(a: Matrix, b: Matrix) -> Matrix:
    return _lift2("add", V.add, a, b)


def sub(a: Matrix, b: Matrix) -> Matrix:
    return _lift2("sub", V.sub, a, b)


def mul(a: Matrix, b: Matrix) -> Matrix:
    return _lift2("mul", V.mul, a, b)


def divide(a: Matrix, b: Matrix) -> Matrix:
    return _lift2("divide", V.divide, a, b)


def power(a: Matrix, b: Matrix) -> Matrix:
    return _lift2("power", V.power, a, b)


def arctan2(a: Matrix, b: Matrix) -> Matrix:
    return _lift2("arctan2", V.arctan2, a, b)


def conj(m: Matrix) -> Matrix:
    return _lift(V.conj, m)


def abs_(m: Matrix) -> Matrix:
    return _lift(V.abs_, m)


def signum(m: Matrix) -> Matrix:
    return _lift(V.signum, m)


def vmap_float(name: str, m: Matrix) -> Matrix:
    return _lift(lambda v: V.vmap_float(name, v), m)


def step(m: Matrix) -> Matrix:
    return _lift(V.step, m)


def cond(a: Matrix, b: Matrix, lt: Matrix, eq: Matrix, gt: Matrix) -> Matrix:
    for other in (b, lt, eq, gt):
        if other.shape != a.shape:
            raise ShapeReport(actual=other.shape, requested=a.shape).error(
                f"cond: nonconformant matrices {shape_text(a)} and {shape_text(other)}"
            )
    out = V.cond(flatten(a), flatten(b), flatten(lt), flatten(eq), flatten(gt))
    return Matrix(jnp.reshape(out.data, a.shape), out.kind)


# reductions


def sum_elements(m: Matrix):
    return V.sum_elements(flatten(m))


def prod_elements(m: Matrix):
    return V.prod_elements(flatten(m))


def min_index(m: Matrix) -> MatrixIndex:
    return _to_pair(m, V.min_index(flatten(m)))


def max_index(m: Matrix) -> MatrixIndex:
    return _to_pair(m, V.max_index(flatten(m)))


def min_element(m: Matrix):
    return at_index(m, min_index(m))


def max_element(m: Matrix):
    return at_index(m, max_index(m))


def equal(a: Matrix, b: Matrix) -> bool:
    # column count plus flattened contents; row counts are not compared separately
    return a.cols == b.cols and V.equal(flatten(a), flatten(b))
