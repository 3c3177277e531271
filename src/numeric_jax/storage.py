"""Dense buffer primitives backed by immutable JAX arrays.

Buffers are plain `jnp.ndarray` values of rank 1 (vector storage) or rank 2
(matrix storage, row-major). Writes only happen through `StagingBuffer`, which
collects them and freezes into a single new array when its scope closes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import jax.numpy as jnp

from .config import x64_enabled
from .errors import IndexOutOfRangeError, InvalidSizeError, ShapeMismatchError, UnsupportedOperationError
from .kinds import ElementKind, coerce_scalar

logger = logging.getLogger(__name__)


def check_kind_available(kind: ElementKind) -> None:
    if kind.is_double and not x64_enabled():
        raise UnsupportedOperationError(
            f"{kind.value} requires JAX 64-bit mode (unset NUMERIC_JAX_DISABLE_X64)"
        )


def check_size(n: int, *, where: str = "size") -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        try:
            n = int(n)
        except (TypeError, ValueError) as err:
            raise InvalidSizeError(f"{where} must be an integer, got {n!r}") from err
    if n < 0:
        raise InvalidSizeError(f"{where} must be non-negative, got {n}")
    return n


def allocate(n: int, fill: object, kind: ElementKind) -> jnp.ndarray:
    n = check_size(n)
    check_kind_available(kind)
    return jnp.full((n,), coerce_scalar(fill, kind), dtype=kind.dtype)


def from_values(values: Sequence[object], kind: ElementKind) -> jnp.ndarray:
    check_kind_available(kind)
    items = [coerce_scalar(v, kind) for v in values]
    if not items:
        return jnp.zeros((0,), dtype=kind.dtype)
    return jnp.asarray(items, dtype=kind.dtype)


def as_buffer(data: object, kind: ElementKind, *, ndim: int) -> jnp.ndarray:
    check_kind_available(kind)
    arr = jnp.asarray(data)
    if arr.ndim != ndim:
        raise ShapeMismatchError(f"expected rank-{ndim} storage, got rank {arr.ndim}")
    if jnp.issubdtype(arr.dtype, jnp.complexfloating) and not kind.is_complex:
        raise UnsupportedOperationError(f"complex data cannot be stored as {kind.value}")
    if arr.dtype != kind.dtype:
        arr = arr.astype(kind.dtype)
    return arr


def length(buf: jnp.ndarray) -> int:
    return int(buf.shape[0])


def read(buf: jnp.ndarray, i: int):
    n = length(buf)
    if not 0 <= i < n:
        raise IndexOutOfRangeError(f"index {i} out of range for length {n}")
    return buf[i].item()


def flatten(buf2d: jnp.ndarray) -> jnp.ndarray:
    return jnp.ravel(buf2d)


def reshape(buf: jnp.ndarray, cols: int) -> jnp.ndarray:
    n = length(buf)
    if cols <= 0:
        if n == 0:
            return jnp.reshape(buf, (0, max(cols, 0)))
        raise InvalidSizeError(f"cannot reshape dim={n} into {cols} columns")
    if n % cols != 0:
        raise ShapeMismatchError(f"dim={n} is not a multiple of {cols} columns", actual=(n,), requested=(n // cols, cols))
    return jnp.reshape(buf, (n // cols, cols))


def transpose(buf2d: jnp.ndarray) -> jnp.ndarray:
    return jnp.transpose(buf2d)


class StagingBuffer:
    """Scoped write buffer used while building a container.

    Writes are recorded in order, so a later write to the same index wins.
    The frozen array is only available after the scope closes; the staging
    object rejects writes from then on.
    """

    def __init__(self, shape: tuple[int, ...], fill: object, kind: ElementKind) -> None:
        for dim in shape:
            check_size(dim, where="dimension")
        check_kind_available(kind)
        self.shape = shape
        self.kind = kind
        self._fill = coerce_scalar(fill, kind)
        self._writes: dict[tuple[int, ...], object] = {}
        self._open = False
        self._result: jnp.ndarray | None = None

    def __enter__(self) -> "StagingBuffer":
        self._open = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._open = False
        if exc_type is None:
            self._result = self._freeze()
        self._writes = {}

    def write(self, index: tuple[int, ...], value: object) -> None:
        if not self._open:
            raise RuntimeError("staging buffer is closed")
        if len(index) != len(self.shape):
            raise IndexOutOfRangeError(f"index {index} does not address a buffer of shape {self.shape}")
        for i, dim in zip(index, self.shape, strict=True):
            if not 0 <= i < dim:
                raise IndexOutOfRangeError(f"index {index} out of range for shape {self.shape}")
        self._writes[index] = coerce_scalar(value, self.kind)

    @property
    def result(self) -> jnp.ndarray:
        if self._result is None:
            raise RuntimeError("staging buffer has not been finalized")
        return self._result

    def _freeze(self) -> jnp.ndarray:
        base = jnp.full(self.shape, self._fill, dtype=self.kind.dtype)
        if not self._writes:
            return base
        # single scatter over de-duplicated positions, insertion order keeps the last write
        positions = tuple(jnp.asarray(axis, dtype=jnp.int32) for axis in zip(*self._writes.keys(), strict=True))
        values = jnp.asarray(list(self._writes.values()), dtype=self.kind.dtype)
        logger.debug("freezing staging buffer %s with %d writes", self.shape, len(self._writes))
        return base.at[positions].set(values)


def staging(shape: int | tuple[int, ...], fill: object, kind: ElementKind) -> StagingBuffer:
    if isinstance(shape, int):
        shape = (shape,)
    return StagingBuffer(tuple(shape), fill, kind)
