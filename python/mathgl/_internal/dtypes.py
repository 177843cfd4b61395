from __future__ import annotations

from typing import Any

import numpy as np


DTYPES: tuple[str, ...] = (
    "int32",
    "int64",
    "uint32",
    "float32",
    "float64",
    "complex_float32",
    "complex_float64",
)


def normalize_dtype(dtype: Any) -> str | None:
    """Normalize user-provided dtype tokens into internal tag strings.

    Returns one of:
        {"int32", "int64", "uint32", "float32", "float64",
         "complex_float32", "complex_float64"}
    or None.

    Accepted inputs include:
    - Case-insensitive strings: "int32", "I32", "f64", "double", "complex", ...
    - Python builtins: int, float, complex
    - NumPy dtypes/scalars: np.int32, np.dtype("float32"), np.complex128, ...
    """

    if dtype is None:
        return None

    if dtype is bool:
        return None
    if dtype is int:
        return "int64"
    if dtype is float:
        return "float64"
    if dtype is complex:
        return "complex_float64"

    if isinstance(dtype, str):
        s = dtype.strip().lower()
        if s in ("int32", "i32", "int"):
            return "int32"
        if s in ("int64", "i64", "long"):
            return "int64"
        if s in ("uint32", "u32", "uint"):
            return "uint32"
        if s in ("float32", "f32", "single"):
            return "float32"
        if s in ("float", "float64", "f64", "double"):
            return "float64"
        if s in ("complex_float32", "complex64", "c64"):
            return "complex_float32"
        if s in ("complex_float64", "complex128", "c128", "complex"):
            return "complex_float64"
        return None

    try:
        np_dtype = np.dtype(dtype)
    except (TypeError, ValueError):
        return None

    if np_dtype == np.dtype("int32"):
        return "int32"
    if np_dtype == np.dtype("int64"):
        return "int64"
    if np_dtype == np.dtype("uint32"):
        return "uint32"
    if np_dtype == np.dtype("float32"):
        return "float32"
    if np_dtype == np.dtype("float64"):
        return "float64"
    if np_dtype == np.dtype("complex64"):
        return "complex_float32"
    if np_dtype == np.dtype("complex128"):
        return "complex_float64"

    # Narrower or wider kinds (int8, float16, longdouble, ...) have no variant.
    return None
