"""Per-element-kind tables of primitive numeric kernels.

Each `KindTraits` bundles the atomic operations one element kind supports.
Kernels work on raw storage buffers and are compiled with `jax.jit` on first
use, then memoised per (kind, op). Reductions hand back Python scalars.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Final

import jax
from jax import lax
import jax.numpy as jnp

from .config import USE_JITTED_KERNELS
from .errors import (
    ContainerError,
    InvalidSizeError,
    ShapeMismatchError,
    UnsupportedOperationError,
    classify_exception,
)
from .kinds import ElementKind, coerce_scalar

logger = logging.getLogger(__name__)

Buffer = jnp.ndarray

_JITTED_KERNELS: dict[tuple[ElementKind, str], Callable[..., Buffer]] = {}


def _compiled(kind: ElementKind, name: str, fn: Callable[..., Buffer]) -> Callable[..., Buffer]:
    if not USE_JITTED_KERNELS:
        return fn
    key = (kind, name)
    kernel = _JITTED_KERNELS.get(key)
    if kernel is None:
        logger.debug("compiling %s kernel for %s", name, kind.value)
        kernel = jax.jit(fn)
        _JITTED_KERNELS[key] = kernel
    return kernel


def kernel_cache_size() -> int:
    return len(_JITTED_KERNELS)


def clear_kernel_cache() -> None:
    _JITTED_KERNELS.clear()


def _magnitude_squared(v: Buffer) -> Buffer:
    return jnp.real(v * jnp.conjugate(v))


def _complex_abs(v: Buffer) -> Buffer:
    return lax.complex(jnp.abs(v), jnp.zeros(v.shape, dtype=jnp.real(v).dtype))


def _complex_signum(v: Buffer) -> Buffer:
    mag = jnp.abs(v)
    safe = jnp.where(mag == 0, 1, mag)
    return jnp.where(mag == 0, jnp.zeros_like(v), v / safe.astype(v.dtype))


_FLOATING_MAPS: Final[dict[str, Callable[[Buffer], Buffer]]] = {
    "negate": lambda v: -v,
    "sin": jnp.sin,
    "cos": jnp.cos,
    "tan": jnp.tan,
    "asin": jnp.arcsin,
    "acos": jnp.arccos,
    "atan": jnp.arctan,
    "sinh": jnp.sinh,
    "cosh": jnp.cosh,
    "tanh": jnp.tanh,
    "asinh": jnp.arcsinh,
    "acosh": jnp.arccosh,
    "atanh": jnp.arctanh,
    "exp": jnp.exp,
    "log": jnp.log,
    "sqrt": jnp.sqrt,
}

FLOATING_MAP_NAMES: Final[tuple[str, ...]] = tuple(_FLOATING_MAPS)


@dataclass(frozen=True)
class KindTraits:
    """Primitive operation table for one element kind."""

    kind: ElementKind

    def _kernel(self, name: str, fn: Callable[..., Buffer]) -> Callable[..., Buffer]:
        kernel = _compiled(self.kind, name, fn)

        def run(*buffers: Buffer) -> Buffer:
            try:
                return kernel(*buffers)
            except ContainerError:
                raise
            except Exception as err:
                raise classify_exception(err) from err

        return run

    def _scalar(self, e: object) -> Buffer:
        return jnp.asarray(coerce_scalar(e, self.kind), dtype=self.kind.dtype)

    def _require_real(self, op: str) -> None:
        if self.kind.is_complex:
            raise UnsupportedOperationError(f"{op} is not defined for {self.kind.value} elements")

    def _require_same_length(self, op: str, *buffers: Buffer) -> None:
        n = buffers[0].shape[0]
        for buf in buffers[1:]:
            if buf.shape[0] != n:
                raise ShapeMismatchError(
                    f"{op}: dim={n} and dim={buf.shape[0]} are not the same length",
                    actual=(int(buf.shape[0]),),
                    requested=(int(n),),
                )

    def _require_nonempty(self, op: str, v: Buffer) -> None:
        if v.shape[0] == 0:
            raise InvalidSizeError(f"{op} of an empty container")

    # scalar-vector maps

    def scale(self, e: object, v: Buffer) -> Buffer:
        return self._kernel("scale", lambda s, x: s * x)(self._scalar(e), v)

    def scale_recip(self, e: object, v: Buffer) -> Buffer:
        return self._kernel("scale_recip", lambda s, x: s / x)(self._scalar(e), v)

    def add_constant(self, e: object, v: Buffer) -> Buffer:
        return self._kernel("add_constant", lambda s, x: s + x)(self._scalar(e), v)

    # zips

    def add(self, v: Buffer, w: Buffer) -> Buffer:
        self._require_same_length("add", v, w)
        return self._kernel("add", lambda x, y: x + y)(v, w)

    def sub(self, v: Buffer, w: Buffer) -> Buffer:
        self._require_same_length("sub", v, w)
        return self._kernel("sub", lambda x, y: x - y)(v, w)

    def mul(self, v: Buffer, w: Buffer) -> Buffer:
        self._require_same_length("mul", v, w)
        return self._kernel("mul", lambda x, y: x * y)(v, w)

    def divide(self, v: Buffer, w: Buffer) -> Buffer:
        self._require_same_length("divide", v, w)
        return self._kernel("divide", lambda x, y: x / y)(v, w)

    def power(self, v: Buffer, w: Buffer) -> Buffer:
        self._require_same_length("power", v, w)
        return self._kernel("power", lambda x, y: x**y)(v, w)

    def arctan2(self, v: Buffer, w: Buffer) -> Buffer:
        self._require_real("arctan2")
        self._require_same_length("arctan2", v, w)
        return self._kernel("arctan2", lambda x, y: jnp.arctan2(x, y))(v, w)

    # unary maps

    def conj(self, v: Buffer) -> Buffer:
        if not self.kind.is_complex:
            return v
        return self._kernel("conj", lambda x: jnp.conjugate(x))(v)

    def abs(self, v: Buffer) -> Buffer:
        if self.kind.is_complex:
            return self._kernel("abs", _complex_abs)(v)
        return self._kernel("abs", lambda x: jnp.abs(x))(v)

    def signum(self, v: Buffer) -> Buffer:
        if self.kind.is_complex:
            return self._kernel("signum", _complex_signum)(v)
        return self._kernel("signum", lax.sign)(v)

    def map(self, name: str, v: Buffer) -> Buffer:
        fn = _FLOATING_MAPS.get(name)
        if fn is None:
            raise UnsupportedOperationError(f"unknown elementwise function {name!r}")
        return self._kernel(f"map:{name}", lambda x: fn(x))(v)

    def step(self, v: Buffer) -> Buffer:
        self._require_real("step")
        return self._kernel("step", lambda x: jnp.where(x > 0, 1, 0).astype(x.dtype))(v)

    def cond(self, a: Buffer, b: Buffer, lt: Buffer, eq: Buffer, gt: Buffer) -> Buffer:
        self._require_real("cond")
        self._require_same_length("cond", a, b, lt, eq, gt)

        def select(a_, b_, l_, e_, t_):
            return jnp.where(a_ < b_, l_, jnp.where(a_ == b_, e_, t_))

        return self._kernel("cond", select)(a, b, lt, eq, gt)

    # reductions

    def sum_elements(self, v: Buffer):
        return self._kernel("sum", lambda x: jnp.sum(x))(v).item()

    def prod_elements(self, v: Buffer):
        return self._kernel("prod", lambda x: jnp.prod(x))(v).item()

    def min_index(self, v: Buffer) -> int:
        self._require_nonempty("min_index", v)
        if self.kind.is_complex:
            return int(self._kernel("min_index", lambda x: jnp.argmin(_magnitude_squared(x)))(v))
        return int(self._kernel("min_index", lambda x: jnp.argmin(x))(v))

    def max_index(self, v: Buffer) -> int:
        self._require_nonempty("max_index", v)
        if self.kind.is_complex:
            return int(self._kernel("max_index", lambda x: jnp.argmax(_magnitude_squared(x)))(v))
        return int(self._kernel("max_index", lambda x: jnp.argmax(x))(v))

    def min_element(self, v: Buffer):
        if self.kind.is_complex:
            return v[self.min_index(v)].item()
        self._require_nonempty("min_element", v)
        return self._kernel("min", lambda x: jnp.min(x))(v).item()

    def max_element(self, v: Buffer):
        if self.kind.is_complex:
            return v[self.max_index(v)].item()
        self._require_nonempty("max_element", v)
        return self._kernel("max", lambda x: jnp.max(x))(v).item()

    def equal(self, v: Buffer, w: Buffer) -> bool:
        if v.shape[0] != w.shape[0]:
            return False
        if v.shape[0] == 0:
            return True
        diff = self._kernel("max_abs_diff", lambda x, y: jnp.max(jnp.abs(x - y)))(v, w)
        return bool(diff == 0)

    # products and norms

    def multiply(self, a: Buffer, b: Buffer) -> Buffer:
        if a.shape[1] != b.shape[0]:
            raise ShapeMismatchError(
                f"multiply: ({a.shape[0]}><{a.shape[1]}) by ({b.shape[0]}><{b.shape[1]}) has inner dimension mismatch",
                actual=(int(b.shape[0]), int(b.shape[1])),
                requested=(int(a.shape[1]), int(b.shape[1])),
            )
        return self._kernel("multiply", lambda x, y: jnp.matmul(x, y, precision=lax.Precision.HIGHEST))(a, b)

    def dot(self, v: Buffer, w: Buffer):
        self._require_same_length("dot", v, w)
        return self._kernel("dot", lambda x, y: jnp.dot(x, y, precision=lax.Precision.HIGHEST))(v, w).item()

    def abs_sum(self, v: Buffer) -> float:
        if self.kind.is_complex:
            return float(self._kernel("abs_sum", lambda x: jnp.sum(jnp.abs(jnp.real(x)) + jnp.abs(jnp.imag(x))))(v))
        return float(self._kernel("abs_sum", lambda x: jnp.sum(jnp.abs(x)))(v))

    def norm1(self, v: Buffer) -> float:
        return float(self._kernel("norm1", lambda x: jnp.sum(jnp.abs(x)))(v))

    def norm2(self, v: Buffer) -> float:
        return float(self._kernel("norm2", lambda x: jnp.sqrt(jnp.sum(_magnitude_squared(x))))(v))

    def norm_inf(self, v: Buffer) -> float:
        if v.shape[0] == 0:
            return 0.0
        return float(self._kernel("norm_inf", lambda x: jnp.max(jnp.abs(x)))(v))


_TRAITS: Final[dict[ElementKind, KindTraits]] = {kind: KindTraits(kind) for kind in ElementKind}


def traits_for(kind: ElementKind) -> KindTraits:
    try:
        return _TRAITS[ElementKind(kind)]
    except (KeyError, ValueError) as err:
        raise UnsupportedOperationError(f"no kernel table for element kind {kind!r}") from err
