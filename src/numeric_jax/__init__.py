"""numeric-jax public API."""

from .config import setup as _setup

_setup()

from .errors import (  # noqa: E402
    ContainerError,
    IndexOutOfRangeError,
    InvalidSizeError,
    ShapeMismatchError,
    UnsupportedOperationError,
)
from .kinds import ElementKind  # noqa: E402
from .vector import Vector  # noqa: E402
from .matrix import (  # noqa: E402
    Matrix,
    as_column,
    as_row,
    flatten,
    from_blocks,
    from_columns,
    from_rows,
    reshape,
    to_columns,
    to_rows,
    trans,
)
from .container import (  # noqa: E402
    abs_,
    add,
    add_constant,
    arctan2,
    assoc,
    at_index,
    build,
    cmap,
    conj,
    divide,
    equal,
    find,
    join_h,
    join_v,
    konst,
    max_element,
    max_index,
    min_element,
    min_index,
    mul,
    power,
    prod_elements,
    scalar,
    scale,
    scale_recip,
    signum,
    size,
    step,
    sub,
    sum_elements,
    vmap_float,
)
from .conform import broadcast_binary, cond, conform_matrix_to, conform_vector_to  # noqa: E402
from .product import (  # noqa: E402
    abs_sum,
    ctrans,
    diag,
    dot,
    ident,
    kronecker,
    multiply,
    mxm,
    mxv,
    norm1,
    norm2,
    norm_inf,
    outer,
    vxm,
)
from .convert import complex_, double, from_complex, real, single, to_complex, to_kind  # noqa: E402

FLOAT32 = ElementKind.FLOAT32
FLOAT64 = ElementKind.FLOAT64
COMPLEX64 = ElementKind.COMPLEX64
COMPLEX128 = ElementKind.COMPLEX128

__all__ = [
    "ElementKind",
    "FLOAT32",
    "FLOAT64",
    "COMPLEX64",
    "COMPLEX128",
    "Vector",
    "Matrix",
    "scalar",
    "konst",
    "build",
    "assoc",
    "at_index",
    "find",
    "cmap",
    "conj",
    "scale",
    "scale_recip",
    "add_constant",
    "add",
    "sub",
    "mul",
    "divide",
    "power",
    "arctan2",
    "equal",
    "abs_",
    "signum",
    "vmap_float",
    "step",
    "cond",
    "min_index",
    "max_index",
    "min_element",
    "max_element",
    "sum_elements",
    "prod_elements",
    "size",
    "join_h",
    "join_v",
    "flatten",
    "reshape",
    "trans",
    "as_row",
    "as_column",
    "from_rows",
    "from_columns",
    "to_rows",
    "to_columns",
    "from_blocks",
    "conform_vector_to",
    "conform_matrix_to",
    "broadcast_binary",
    "multiply",
    "mxm",
    "mxv",
    "vxm",
    "outer",
    "kronecker",
    "dot",
    "abs_sum",
    "norm1",
    "norm2",
    "norm_inf",
    "ident",
    "diag",
    "ctrans",
    "real",
    "complex_",
    "single",
    "double",
    "to_complex",
    "from_complex",
    "to_kind",
    "ContainerError",
    "ShapeMismatchError",
    "IndexOutOfRangeError",
    "InvalidSizeError",
    "UnsupportedOperationError",
]
