"""Python operator surface shared by Vector and Matrix.

Operators lift through the conformance engine, so `m + 1`, `row * col` and
`v / scalar(2)` broadcast the way `conform.broadcast_binary` describes. The
strict container operations in `vector`/`matrix` never broadcast.
"""

from __future__ import annotations


def _broadcast(op: str, left, right):
    from .conform import broadcast_binary

    return broadcast_binary(op, left, right)


def _unary(name: str, value):
    from .container import abs_, vmap_float

    if name == "abs":
        return abs_(value)
    return vmap_float(name, value)


class NumericOperators:
    __slots__ = ()

    def __add__(self, other):
        return _broadcast("add", self, other)

    def __radd__(self, other):
        return _broadcast("add", other, self)

    def __sub__(self, other):
        return _broadcast("sub", self, other)

    def __rsub__(self, other):
        return _broadcast("sub", other, self)

    def __mul__(self, other):
        return _broadcast("mul", self, other)

    def __rmul__(self, other):
        return _broadcast("mul", other, self)

    def __truediv__(self, other):
        return _broadcast("divide", self, other)

    def __rtruediv__(self, other):
        return _broadcast("divide", other, self)

    def __pow__(self, other):
        return _broadcast("power", self, other)

    def __rpow__(self, other):
        return _broadcast("power", other, self)

    def __neg__(self):
        return _unary("negate", self)

    def __abs__(self):
        return _unary("abs", self)
