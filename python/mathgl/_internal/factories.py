from __future__ import annotations

from typing import Any

import numpy as np

from .coercion import coerce_nested, is_sequence_like
from .elements import infer_dtype
from .errors import TypeMismatchError


def _dtype_from_first(value: Any) -> str:
    dtype = infer_dtype(value)
    if dtype is None:
        raise TypeMismatchError(f"cannot infer an element type from {value!r} ({type(value).__name__})")
    return dtype


def matrix_factory(data: Any, *, dtype: Any, Matrix: Any) -> Any:
    """Build a matrix from rows (nested sequence) or a 2-D ndarray.

    Without ``dtype`` the element type comes from the array, or from the first
    element of the first row: Python ``int`` -> int64, ``float`` -> float64,
    ``complex`` -> complex_float64, NumPy scalars -> their own type.
    """

    # 1) NumPy input keeps its dtype
    if isinstance(data, np.ndarray):
        return Matrix.from_numpy(data, dtype=dtype)

    # 2) Nested rows
    rows = coerce_nested(data, outer="row", inner="column")
    if dtype is None:
        dtype = _dtype_from_first(rows[0][0])
    return Matrix.from_rows(dtype, rows)


def vector_factory(data: Any, *, dtype: Any, Vector: Any) -> Any:
    if isinstance(data, np.ndarray):
        if dtype is None:
            dtype = data.dtype
        return Vector.of(dtype, data)

    if not is_sequence_like(data):
        raise TypeError("Vector data must be a sequence of entries or a NumPy array.")
    items = list(data)
    if dtype is None and items:
        dtype = _dtype_from_first(items[0])
    return Vector.of(dtype if dtype is not None else "float64", items)
