from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

import numpy as np

from ._internal.coercion import coerce_flat
from ._internal.elements import ElementType, element_type
from ._internal.errors import DimensionError, OutOfBoundsError, TypeMismatchError
from ._internal.formatting import vector_str

if TYPE_CHECKING:
    from .matrix import Matrix


class Vector:
    """One-dimensional run of elements of a single element type.

    Vectors returned by ``Matrix.to_vector`` are read-only views over the
    matrix's storage; ``Vector.of`` builds an owned vector.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, kind: ElementType, data: np.ndarray) -> None:
        self._kind = kind
        self._data = data

    @classmethod
    def of(cls, dtype: Any, data: Sequence[Any]) -> "Vector":
        kind = element_type(dtype)
        if isinstance(data, np.ndarray):
            if data.ndim != 1:
                raise DimensionError(f"vector data must be one-dimensional, got {data.ndim} dimensions")
            if data.dtype != kind.np_dtype:
                raise TypeMismatchError(f"array dtype {data.dtype} does not match vector type {kind.name}")
            values = data.copy()
        else:
            items = coerce_flat(data)
            for index, value in enumerate(items):
                if not kind.matches(value):
                    raise TypeMismatchError(
                        f"element {index} ({value!r}, {type(value).__name__}) "
                        f"does not match vector type {kind.name}"
                    )
            values = kind.array(items)
        if values.size == 0:
            raise DimensionError("vector data must not be empty")
        return cls(kind, values)

    @classmethod
    def _view(cls, kind: ElementType, data: np.ndarray) -> "Vector":
        return cls(kind, data)

    @property
    def dtype(self) -> str:
        return self._kind.name

    @property
    def element_type(self) -> ElementType:
        return self._kind

    def size(self) -> int:
        return int(self._data.size)

    def __len__(self) -> int:
        return self.size()

    def get(self, i: int) -> Any:
        if isinstance(i, bool) or not isinstance(i, (int, np.integer)):
            raise TypeError("vector indices must be integers")
        if not (0 <= int(i) < self.size()):
            raise OutOfBoundsError(f"index {i} out of bounds for vector of size {self.size()}")
        return self._data[int(i)]

    def __getitem__(self, i: int) -> Any:
        return self.get(i)

    def __iter__(self):
        return iter(self._data)

    def _check_operand(self, other: Any, op: str) -> None:
        if not isinstance(other, Vector):
            raise TypeError(f"{op} expects Vector operands, got {type(other).__name__}")
        if self._kind != other._kind:
            raise TypeMismatchError(f"{op}: element types differ ({self.dtype} vs {other.dtype})")
        if self.size() != other.size():
            raise DimensionError(f"{op}: sizes differ ({self.size()} vs {other.size()})")

    def add(self, other: "Vector") -> "Vector":
        self._check_operand(other, "add")
        return Vector(self._kind, self._kind.add(self._data, other._data))

    def subtract(self, other: "Vector") -> "Vector":
        self._check_operand(other, "subtract")
        return Vector(self._kind, self._kind.subtract(self._data, other._data))

    def dot(self, other: "Vector") -> Any:
        self._check_operand(other, "dot")
        products = self._kind.multiply(self._data, other._data)
        total = self._kind.coerce(0)
        for value in products:
            total = self._kind.add(total, value)
        return total

    def __add__(self, other: Any) -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> "Vector":
        if not isinstance(other, Vector):
            return NotImplemented
        return self.subtract(other)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._kind == other._kind and bool(np.array_equal(self._data, other._data))

    def as_row(self) -> "Matrix":
        from .matrix import Matrix

        return Matrix._from_flat_unchecked(self._kind, self._data.copy(), 1, self.size())

    def as_column(self) -> "Matrix":
        from .matrix import Matrix

        return Matrix._from_flat_unchecked(self._kind, self._data.copy(), self.size(), 1)

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def to_list(self) -> list[Any]:
        return self._data.tolist()

    def __str__(self) -> str:
        return vector_str(self)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} size={self.size()} dtype={self.dtype}>"
