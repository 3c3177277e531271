"""Shape conformance and broadcasting.

Container operations are strict: both operands must have the same shape. This
module is the one place where shapes get reconciled, either explicitly
(`conform_vector_to`, `conform_matrix_to`, `cond`) or through the Python
operators (`broadcast_binary`).

Expansion rules:

- a vector conforms to length `n` if it already has length `n` or length 1;
- a matrix conforms to `(r, c)` if it already is `(r, c)`, is `(1, 1)`, is a
  single column `(r, 1)` (copied across `c` columns) or a single row `(1, c)`
  (copied down `r` rows).

Anything else raises `ShapeMismatchError` naming both shapes.
"""

from __future__ import annotations

import logging
import numbers
from typing import Final

import jax.numpy as jnp

from . import matrix as M
from . import vector as V
from .convert import to_kind
from .errors import ShapeReport, UnsupportedOperationError
from .kinds import ElementKind, join_kinds, kind_of_scalar
from .matrix import Matrix
from .vector import Vector

logger = logging.getLogger(__name__)

BINARY_OPS: Final[tuple[str, ...]] = ("add", "sub", "mul", "divide", "power", "arctan2")


def conform_vector_to(n: int, v: Vector) -> Vector:
    if v.dim == n:
        return v
    if v.dim == 1:
        logger.debug("expanding dim=1 vector to dim=%d", n)
        return V.konst(V.at_index(v, 0), n, v.kind)
    raise ShapeReport(actual=(v.dim,), requested=(n,)).error(
        f"vector of dim={v.dim} cannot be expanded to dim={n}"
    )


def conform_matrix_to(shape: tuple[int, int], m: Matrix) -> Matrix:
    r, c = shape
    if m.shape == (r, c):
        return m
    if m.shape == (1, 1):
        logger.debug("expanding (1><1) matrix to (%d><%d)", r, c)
        return M.konst(M.at_index(m, (0, 0)), (r, c), m.kind)
    if m.shape == (r, 1):
        return M.rep_cols(c, m)
    if m.shape == (1, c):
        return M.rep_rows(r, m)
    raise ShapeReport(actual=m.shape, requested=(r, c)).error(
        f"matrix {M.shape_text(m)} cannot be expanded to ({r}><{c})"
    )


def _require_real(containers) -> None:
    for x in containers:
        if x.kind.is_complex:
            raise UnsupportedOperationError(f"cond is not defined for {x.kind.value} elements")


def cond_vector(a: Vector, b: Vector, lt: Vector, eq: Vector, gt: Vector) -> Vector:
    operands = (a, b, lt, eq, gt)
    _require_real(operands)
    n = max(x.dim for x in operands)
    return V.cond(*(conform_vector_to(n, x) for x in operands))


def cond_matrix(a: Matrix, b: Matrix, lt: Matrix, eq: Matrix, gt: Matrix) -> Matrix:
    operands = (a, b, lt, eq, gt)
    _require_real(operands)
    r = max(x.rows for x in operands)
    c = max(x.cols for x in operands)
    flat = [M.flatten(conform_matrix_to((r, c), x)) for x in operands]
    out = V.cond(*flat)
    return Matrix(jnp.reshape(out.data, (r, c)), out.kind)


def cond(a, b, lt, eq, gt):
    """Elementwise `lt if a < b, eq if a == b, gt if a > b`, after broadcasting.

    Operands may mix containers of one type with bare real scalars; scalars
    take the kind of the first container operand.
    """
    operands = (a, b, lt, eq, gt)
    containers = [x for x in operands if isinstance(x, (Vector, Matrix))]
    if not containers:
        raise UnsupportedOperationError("cond needs at least one Vector or Matrix operand")
    like = containers[0]
    if isinstance(like, Vector):
        if any(isinstance(x, Matrix) for x in containers):
            raise UnsupportedOperationError("cond cannot mix Vector and Matrix operands")
        return cond_vector(*(_as_container(x, like) for x in operands))
    if any(isinstance(x, Vector) for x in containers):
        raise UnsupportedOperationError("cond cannot mix Vector and Matrix operands")
    return cond_matrix(*(_as_container(x, like) for x in operands))


def _as_container(x, like):
    if isinstance(x, (Vector, Matrix)):
        return x
    if not isinstance(x, numbers.Number):
        raise UnsupportedOperationError(f"{type(x).__name__} is not a container or numeric scalar")
    if isinstance(like, Vector):
        return V.scalar(x, kind_of_scalar(x, like=like.kind))
    return M.scalar(x, kind_of_scalar(x, like=like.kind))


def _scalar_like(x: object, other: Vector | Matrix) -> Vector | Matrix:
    kind = kind_of_scalar(x, like=other.kind)
    if isinstance(other, Vector):
        return V.konst(x, other.dim, kind)
    return M.konst(x, other.shape, kind)


def broadcast_binary(op: str, x, y):
    """Apply strict binary `op` after lifting scalars and conforming shapes.

    Bare scalars are filled out to the other operand's shape. Operands of
    different element kinds are first converted to their joint kind
    (for instance float32 with complex128 gives complex128).
    """
    if op not in BINARY_OPS:
        raise UnsupportedOperationError(f"unknown binary container operation {op!r}")
    x_is = isinstance(x, (Vector, Matrix))
    y_is = isinstance(y, (Vector, Matrix))
    if not x_is and not y_is:
        raise UnsupportedOperationError("broadcast_binary needs at least one container operand")
    if not x_is:
        if not isinstance(x, numbers.Number):
            return NotImplemented
        x = _scalar_like(x, y)
    if not y_is:
        if not isinstance(y, numbers.Number):
            return NotImplemented
        y = _scalar_like(y, x)
    if isinstance(x, Vector) != isinstance(y, Vector):
        raise UnsupportedOperationError(
            f"{op}: cannot combine {type(x).__name__} with {type(y).__name__}; use as_row/as_column first"
        )

    kind: ElementKind = join_kinds(x.kind, y.kind)
    x, y = to_kind(kind, x), to_kind(kind, y)

    if isinstance(x, Vector):
        n = max(x.dim, y.dim)
        return getattr(V, op)(conform_vector_to(n, x), conform_vector_to(n, y))

    shape = (max(x.rows, y.rows), max(x.cols, y.cols))
    return getattr(M, op)(conform_matrix_to(shape, x), conform_matrix_to(shape, y))
