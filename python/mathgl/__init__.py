"""Dense matrix algebra over a closed set of numeric element types."""
from __future__ import annotations

from typing import Any

from ._version import version as __version__

from ._internal import batch as _batch
from ._internal import factories as _factories
from ._internal import formatting as _formatting
from ._internal import observability as _observability
from ._internal import runtime as _runtime_mod
from ._internal.dtypes import DTYPES, normalize_dtype
from ._internal.elements import ElementType, element_type, matches
from ._internal.errors import (
    DimensionError,
    MathGLError,
    OutOfBoundsError,
    ShapeError,
    StaleOperandError,
    TypeMismatchError,
)
from ._internal.warnings import (
    MathGLOverflowRiskWarning,
    MathGLPerformanceWarning,
    MathGLWarning,
)
from .matrix import Matrix, add, identity, multiply, subtract
from .vector import Vector

# Public dtype tokens (NumPy-like). These are simple sentinels accepted by
# every constructor and factory.
int32 = "int32"
int64 = "int64"
uint32 = "uint32"
float32 = "float32"
float64 = "float64"
complex_float32 = "complex_float32"
complex_float64 = "complex_float64"
complex64 = "complex_float32"
complex128 = "complex_float64"

_runtime = _runtime_mod.default_runtime()
_runtime.register_cleanup()
_formatting.configure(edge_items=_runtime.edge_items())

matmul = multiply
batch_multiply = _batch.batch_multiply


def matrix(data: Any, dtype: Any = None) -> Matrix:
    """Create a matrix from rows or a 2-D NumPy array.

    Args:
        data: Nested sequence of rows, or a 2-D ``numpy.ndarray``.
        dtype: Element type token (``"int32"``, ``mathgl.float64``, ``float``,
            ``np.complex64``, ...). Inferred from the data when omitted.
    """

    return _factories.matrix_factory(data, dtype=dtype, Matrix=Matrix)


def vector(data: Any, dtype: Any = None) -> Vector:
    """Create a vector from a flat sequence or a 1-D NumPy array."""

    return _factories.vector_factory(data, dtype=dtype, Vector=Vector)


def zeros(rows: int, cols: int, dtype: Any = "float64") -> Matrix:
    return Matrix(rows, cols, dtype)


def set_max_workers(value: int) -> None:
    """Resize the shared worker pool used by :func:`batch_multiply`."""
    _runtime.set_max_workers(value)


def get_max_workers() -> int:
    return _runtime.max_workers()


def set_print_options(*, edge_items: int | None = None) -> None:
    if edge_items is not None:
        _formatting.configure(edge_items=edge_items)


def get_print_options() -> dict[str, int]:
    return {"edge_items": _formatting.edge_items()}


def last_batch_trace() -> dict[str, Any] | None:
    """Trace of the most recent :func:`batch_multiply` call, or None."""
    return _observability.default_instance().last("batch_multiply")


def clear_batch_traces() -> None:
    _observability.default_instance().clear()


__all__ = [
    "DTYPES",
    "DimensionError",
    "ElementType",
    "MathGLError",
    "MathGLOverflowRiskWarning",
    "MathGLPerformanceWarning",
    "MathGLWarning",
    "Matrix",
    "OutOfBoundsError",
    "ShapeError",
    "StaleOperandError",
    "TypeMismatchError",
    "Vector",
    "add",
    "batch_multiply",
    "clear_batch_traces",
    "complex128",
    "complex64",
    "complex_float32",
    "complex_float64",
    "element_type",
    "float32",
    "float64",
    "get_max_workers",
    "get_print_options",
    "identity",
    "int32",
    "int64",
    "last_batch_trace",
    "matches",
    "matmul",
    "matrix",
    "multiply",
    "normalize_dtype",
    "set_max_workers",
    "set_print_options",
    "subtract",
    "uint32",
    "vector",
    "zeros",
]
