"""Structured error types for container operations."""

from __future__ import annotations

from dataclasses import dataclass


class ContainerError(Exception):
    """Base class for structured numeric-jax errors."""


class ShapeMismatchError(ContainerError, ValueError):
    """Operand shapes are incompatible and cannot be broadcast.

    `actual` and `requested` carry the offending shapes when the failure comes
    from a conformance or product check, so callers can report both.
    """

    def __init__(
        self,
        message: str,
        *,
        actual: tuple[int, ...] | None = None,
        requested: tuple[int, ...] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.actual = actual
        self.requested = requested


@dataclass(frozen=True)
class ShapeReport:
    """Actual-versus-requested shape pair used in mismatch diagnostics."""

    actual: tuple[int, ...]
    requested: tuple[int, ...]

    def __str__(self) -> str:
        return f"{shape_text(self.actual)} vs requested {shape_text(self.requested)}"

    def error(self, message: str) -> ShapeMismatchError:
        return ShapeMismatchError(message, actual=self.actual, requested=self.requested)


class IndexOutOfRangeError(ContainerError, IndexError):
    """Construction-time or access-time index outside the valid bounds."""


class InvalidSizeError(ContainerError, ValueError):
    """Negative (or otherwise unusable) length or dimension requested."""


class UnsupportedOperationError(ContainerError, TypeError):
    """Operation is not defined for the element kind it was applied to."""


def shape_text(shape: tuple[int, ...]) -> str:
    if len(shape) == 2:
        return f"({shape[0]}><{shape[1]})"
    return f"dim={shape[0]}"


def classify_exception(err: Exception) -> ContainerError:
    """Best-effort classification of low-level kernel failures."""
    if isinstance(err, ContainerError):
        return err
    message = str(err)
    lowered = message.lower()

    if isinstance(err, IndexError) or "out of bounds" in lowered or "out-of-bounds" in lowered:
        return IndexOutOfRangeError(message)

    shape_markers = (
        "shape",
        "incompatible",
        "broadcast",
        "dimension",
        "reshape",
        "size",
    )
    if any(marker in lowered for marker in shape_markers):
        return ShapeMismatchError(message)

    type_markers = (
        "dtype",
        "complex",
        "not supported",
        "unsupported",
        "type",
    )
    if any(marker in lowered for marker in type_markers):
        return UnsupportedOperationError(message)

    return ContainerError(message)
