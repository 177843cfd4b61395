"""Internal: executable dtype/op support matrix.

Makes "what is supported" explicit and enforceable. ``SUPPORTED`` cases must
succeed; ``REJECTED`` cases must raise ``TypeMismatchError`` because matrices
of different element types never combine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .dtypes import DTYPES


@dataclass(frozen=True)
class SupportCase:
    kind: str  # "matrix" | "vector" | "batch"
    op: str
    a_dtype: str
    b_dtype: str | None = None


_MATRIX_OPS: List[str] = ["add", "sub", "matmul"]
_VECTOR_OPS: List[str] = ["add", "sub", "dot"]
_UNARY_OPS: List[str] = ["transpose", "to_vector"]


def _same_dtype_cases() -> List[SupportCase]:
    cases: List[SupportCase] = []
    for dt in DTYPES:
        for op in _MATRIX_OPS:
            cases.append(SupportCase("matrix", op, dt, dt))
        for op in _VECTOR_OPS:
            cases.append(SupportCase("vector", op, dt, dt))
        for op in _UNARY_OPS:
            cases.append(SupportCase("matrix", op, dt, None))
        cases.append(SupportCase("batch", "batch_multiply", dt, dt))
    return cases


def _mixed_dtype_pairs() -> List[tuple[str, str]]:
    # Representative neighbours: width changes, signedness, int/float, real/complex.
    pairs: List[tuple[str, str]] = [
        ("int32", "int64"),
        ("int32", "uint32"),
        ("int64", "float64"),
        ("int32", "float32"),
        ("float32", "float64"),
        ("float64", "complex_float64"),
        ("complex_float32", "complex_float64"),
    ]

    # Include reverse direction to catch order bugs.
    pairs += [(b, a) for (a, b) in pairs if a != b]
    return pairs


def _rejected_cases() -> List[SupportCase]:
    cases: List[SupportCase] = []
    for a_dt, b_dt in _mixed_dtype_pairs():
        for op in _MATRIX_OPS:
            cases.append(SupportCase("matrix", op, a_dt, b_dt))
        for op in _VECTOR_OPS:
            cases.append(SupportCase("vector", op, a_dt, b_dt))
        cases.append(SupportCase("batch", "batch_multiply", a_dt, b_dt))
    return cases


SUPPORTED: List[SupportCase] = _same_dtype_cases()
REJECTED: List[SupportCase] = _rejected_cases()


def summarize() -> Dict[str, int]:
    out: Dict[str, int] = {}
    for c in SUPPORTED:
        key = f"{c.kind}:{c.op}"
        out[key] = out.get(key, 0) + 1
    return out
