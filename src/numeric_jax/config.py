"""Environment-driven runtime switches.

All switches are read once at import time:

- `NUMERIC_JAX_DISABLE_X64=1` keeps JAX in its default 32-bit mode. Double
  precision kinds are then rejected when a container is built.
- `NUMERIC_JAX_DISABLE_JIT=1` runs every kernel eagerly instead of through
  `jax.jit`.
- `NUMERIC_JAX_LOG_LEVEL` sets the level of the package logger (name or number).
"""

from __future__ import annotations

import logging
import os
from typing import Final

import jax
import jax.numpy as jnp

PACKAGE_LOGGER_NAME: Final[str] = "numeric_jax"

USE_X64: Final[bool] = os.environ.get("NUMERIC_JAX_DISABLE_X64", "0") != "1"
USE_JITTED_KERNELS: Final[bool] = os.environ.get("NUMERIC_JAX_DISABLE_JIT", "0") != "1"
LOG_LEVEL: Final[str] = os.environ.get("NUMERIC_JAX_LOG_LEVEL", "WARNING")

logger = logging.getLogger(__name__)


def enable_x64() -> bool:
    """Switch JAX to 64-bit mode unless disabled; returns the effective state."""
    if USE_X64:
        jax.config.update("jax_enable_x64", True)
    return x64_enabled()


def x64_enabled() -> bool:
    return jax.dtypes.canonicalize_dtype(jnp.float64) == jnp.dtype(jnp.float64)


def configure_logging() -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())
    level = LOG_LEVEL.upper()
    package_logger.setLevel(int(level) if level.isdigit() else level)
    return package_logger


def setup() -> None:
    configure_logging()
    state = enable_x64()
    logger.debug("numeric_jax configured: x64=%s jit=%s", state, USE_JITTED_KERNELS)
