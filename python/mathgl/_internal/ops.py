"""Arithmetic kernels over flat row-major storage.

Operands are validated here (matching element type, matching shape) and the
result is built through the unchecked constructor, since its invariants hold
by construction. Failures raise; no operation returns an empty placeholder.
"""

from __future__ import annotations

import warnings
from typing import Any

from .errors import DimensionError, TypeMismatchError
from .warnings import MathGLOverflowRiskWarning


def _require_matrix(obj: Any, *, op: str, cls: type) -> None:
    if not isinstance(obj, cls):
        raise TypeError(f"{op} expects {cls.__name__} operands, got {type(obj).__name__}")


def _check_same_type(a: Any, b: Any, *, op: str) -> None:
    if a.element_type != b.element_type:
        raise TypeMismatchError(f"{op}: element types differ ({a.dtype} vs {b.dtype})")


def check_elementwise(a: Any, b: Any, *, op: str) -> None:
    _require_matrix(b, op=op, cls=type(a))
    _check_same_type(a, b, op=op)
    if a.shape != b.shape:
        raise DimensionError(f"{op}: shapes differ ({a.shape} vs {b.shape})")


def check_multiply(a: Any, b: Any, *, op: str = "multiply") -> None:
    _require_matrix(b, op=op, cls=type(a))
    _check_same_type(a, b, op=op)
    if a.cols() != b.rows():
        raise DimensionError(
            f"{op}: inner dimensions differ ({a.shape} @ {b.shape}); "
            "left columns must equal right rows"
        )


def add(a: Any, b: Any) -> Any:
    check_elementwise(a, b, op="add")
    kind = a.element_type
    data = kind.add(a._data, b._data)
    return type(a)._from_flat_unchecked(kind, data, a.rows(), a.cols())


def subtract(a: Any, b: Any) -> Any:
    check_elementwise(a, b, op="subtract")
    kind = a.element_type
    data = kind.subtract(a._data, b._data)
    return type(a)._from_flat_unchecked(kind, data, a.rows(), a.cols())


def multiply(a: Any, b: Any) -> Any:
    check_multiply(a, b)
    kind = a.element_type
    m, inner, n = a.rows(), a.cols(), b.cols()

    if kind.matmul_overflow_risk(a._data, b._data, inner):
        warnings.warn(
            f"integer matmul of {a.shape} @ {b.shape} ({kind.name}) may overflow; "
            "results wrap around at the dtype boundary",
            MathGLOverflowRiskWarning,
            stacklevel=3,
        )

    # out[i*n + j] = sum_k a[i*inner + k] * b[k*n + j], accumulated in k order.
    out = kind.zeros(m * n)
    for k in range(inner):
        a_col = a._data[k::inner]  # a[i, k] for every row i
        b_row = b._data[k * n:(k + 1) * n]  # b[k, j] for every column j
        out = kind.add(out, kind.multiply(a_col[:, None], b_row[None, :]).reshape(-1))
    return type(a)._from_flat_unchecked(kind, out, m, n)
