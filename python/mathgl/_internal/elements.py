"""Element variants (the closed set of numeric kinds a matrix can hold).

Each variant wraps one NumPy scalar type. Arithmetic stays inside the variant:
int32 wraps around like a fixed-width integer, float32 rounds to single
precision, and so on. The helpers accept scalars of the variant as well as
flat storage arrays, so the matrix kernels call them once per pass instead of
once per element.

Type checking (``matches``) happens at construction and in the setter only.
The arithmetic helpers assume both operands already belong to the variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import numpy as np

from .dtypes import DTYPES, normalize_dtype
from .errors import TypeMismatchError


@dataclass(frozen=True)
class ElementType:
    name: str
    scalar_type: type
    kind: str  # "int" | "float" | "complex"

    @property
    def np_dtype(self) -> np.dtype:
        return np.dtype(self.scalar_type)

    @property
    def is_integer(self) -> bool:
        return self.kind == "int"

    def matches(self, value: Any) -> bool:
        # NumPy scalars carry their variant; it must be exactly ours.
        if isinstance(value, np.generic):
            return value.dtype == self.np_dtype
        # bool is an int subclass but never a numeric element here.
        if isinstance(value, bool):
            return False
        if self.kind == "int":
            if not isinstance(value, int):
                return False
            info = np.iinfo(self.np_dtype)
            return int(info.min) <= value <= int(info.max)
        if self.kind == "float":
            return isinstance(value, float) and self._in_range(value)
        if not isinstance(value, complex):
            return False
        return self._in_range(value.real) and self._in_range(value.imag)

    def _in_range(self, component: float) -> bool:
        # Finite values past the variant's max would round to inf on store.
        if not np.isfinite(component):
            return True
        return abs(component) <= float(np.finfo(self.np_dtype).max)

    def coerce(self, value: Any) -> Any:
        return self.scalar_type(value)

    def array(self, values: Iterable[Any]) -> np.ndarray:
        return np.fromiter(values, dtype=self.np_dtype)

    def zeros(self, count: int) -> np.ndarray:
        return np.zeros(count, dtype=self.np_dtype)

    def add(self, a: Any, b: Any) -> Any:
        with np.errstate(over="ignore"):
            return np.add(a, b, dtype=self.np_dtype)

    def subtract(self, a: Any, b: Any) -> Any:
        with np.errstate(over="ignore"):
            return np.subtract(a, b, dtype=self.np_dtype)

    def multiply(self, a: Any, b: Any) -> Any:
        with np.errstate(over="ignore"):
            return np.multiply(a, b, dtype=self.np_dtype)

    def matmul_overflow_risk(self, a: np.ndarray, b: np.ndarray, inner: int) -> bool:
        """Cheap upper bound check: can sum_k |a| * |b| leave the integer range?"""

        if not self.is_integer or a.size == 0 or b.size == 0:
            return False
        amax = max(abs(int(a.max())), abs(int(a.min())))
        bmax = max(abs(int(b.max())), abs(int(b.min())))
        return amax * bmax * int(inner) > int(np.iinfo(self.np_dtype).max)


_VARIANTS: dict[str, ElementType] = {
    "int32": ElementType("int32", np.int32, "int"),
    "int64": ElementType("int64", np.int64, "int"),
    "uint32": ElementType("uint32", np.uint32, "int"),
    "float32": ElementType("float32", np.float32, "float"),
    "float64": ElementType("float64", np.float64, "float"),
    "complex_float32": ElementType("complex_float32", np.complex64, "complex"),
    "complex_float64": ElementType("complex_float64", np.complex128, "complex"),
}

assert tuple(_VARIANTS) == DTYPES


def element_type(dtype: Any) -> ElementType:
    """Resolve a dtype token (or an ElementType) to its variant."""

    if isinstance(dtype, ElementType):
        return dtype
    tag = normalize_dtype(dtype)
    if tag is None:
        raise TypeMismatchError(f"unsupported dtype: {dtype!r}")
    return _VARIANTS[tag]


def matches(dtype: Any, value: Any) -> bool:
    """Whether ``value`` belongs to the variant named by ``dtype``."""

    return element_type(dtype).matches(value)


def infer_dtype(value: Any) -> str | None:
    """Best guess of the variant for a single value (used when dtype is omitted)."""

    if isinstance(value, np.generic):
        return normalize_dtype(value.dtype)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return "int64"
    if isinstance(value, float):
        return "float64"
    if isinstance(value, complex):
        return "complex_float64"
    return None
