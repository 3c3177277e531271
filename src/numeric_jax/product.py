"""Matrix products and the reductions built on them.

Everything here derives from one primitive per element kind, `multiply`:

    mxv(a, v)       == flatten(a @ as_column(v))
    vxm(v, a)       == flatten(as_row(v) @ a)
    outer(u, v)     == as_column(u) @ as_row(v)
    kronecker(a, b) == outer(flatten(a), flatten(b)), cut into cols(b)-wide
                       blocks and regrouped cols(a) blocks per block-row

Example:

    >>> outer(Vector.from_list([1, 2, 3]), Vector.from_list([5, 2, 3])).tolist()
    [[5.0, 2.0, 3.0], [10.0, 4.0, 6.0], [15.0, 6.0, 9.0]]
"""

from __future__ import annotations

from . import matrix as M
from . import storage
from . import vector as V
from .errors import UnsupportedOperationError
from .kinds import DEFAULT_KIND, ElementKind
from .matrix import Matrix, as_column, as_row, flatten
from .traits import traits_for
from .vector import Vector


def _same_kind(op: str, a: Matrix | Vector, b: Matrix | Vector) -> ElementKind:
    if a.kind != b.kind:
        raise UnsupportedOperationError(f"{op}: element kinds {a.kind.value} and {b.kind.value} differ")
    return a.kind


def multiply(a: Matrix, b: Matrix) -> Matrix:
    kind = _same_kind("multiply", a, b)
    return Matrix(traits_for(kind).multiply(a.data, b.data), kind)


mxm = multiply


def mxv(a: Matrix, v: Vector) -> Vector:
    return flatten(multiply(a, as_column(v)))


def vxm(v: Vector, a: Matrix) -> Vector:
    return flatten(multiply(as_row(v), a))


def outer(u: Vector, v: Vector) -> Matrix:
    return multiply(as_column(u), as_row(v))


def kronecker(a: Matrix, b: Matrix) -> Matrix:
    kind = _same_kind("kronecker", a, b)
    if 0 in a.shape or 0 in b.shape:
        return M.konst(0, (a.rows * b.rows, a.cols * b.cols), kind)
    blocks = [M.reshape(b.cols, row) for row in M.to_rows(outer(flatten(a), flatten(b)))]
    return M.from_blocks([blocks[k : k + a.cols] for k in range(0, len(blocks), a.cols)])


# vector reductions


def dot(u: Vector, v: Vector):
    """Unconjugated inner product `sum(u_i * v_i)`."""
    kind = _same_kind("dot", u, v)
    return traits_for(kind).dot(u.data, v.data)


def abs_sum(v: Vector) -> float:
    """Sum of absolute values; `|re| + |im|` per element for complex kinds."""
    return traits_for(v.kind).abs_sum(v.data)


def norm1(v: Vector) -> float:
    return traits_for(v.kind).norm1(v.data)


def norm2(v: Vector) -> float:
    return traits_for(v.kind).norm2(v.data)


def norm_inf(v: Vector) -> float:
    return traits_for(v.kind).norm_inf(v.data)


# basic matrices


def diag(v: Vector) -> Matrix:
    """Square matrix with `v` on the diagonal."""
    n = v.dim
    return M.assoc((n, n), 0, (((k, k), x) for k, x in enumerate(v.tolist())), v.kind)


def ident(n: int, kind: ElementKind = DEFAULT_KIND) -> Matrix:
    return diag(V.konst(1, storage.check_size(n), kind))


def ctrans(m: Matrix) -> Matrix:
    """Conjugate transpose."""
    return M.conj(M.trans(m))
