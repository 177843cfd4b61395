"""Dense matrices over a single element type, stored flat in row-major order."""

from __future__ import annotations

import threading
from typing import Any, Iterable, Sequence

import numpy as np

from ._internal import ops as _ops
from ._internal.coercion import coerce_flat, coerce_nested
from ._internal.elements import ElementType, element_type
from ._internal.errors import DimensionError, OutOfBoundsError, ShapeError, TypeMismatchError
from ._internal.formatting import MatrixMixin
from .vector import Vector


def _check_dims(m: int, n: int) -> tuple[int, int]:
    if isinstance(m, bool) or isinstance(n, bool) or not isinstance(m, (int, np.integer)) or not isinstance(
        n, (int, np.integer)
    ):
        raise TypeError("matrix dimensions must be integers")
    m, n = int(m), int(n)
    if m <= 0 or n <= 0:
        raise DimensionError(f"matrix dimensions must be positive, got ({m}, {n})")
    return m, n


def _checked_values(kind: ElementType, values: Iterable[Any], *, where: Any) -> np.ndarray:
    checked: list[Any] = []
    for index, value in enumerate(values):
        if not kind.matches(value):
            raise TypeMismatchError(
                f"element {where(index)} ({value!r}, {type(value).__name__}) "
                f"does not match matrix type {kind.name}"
            )
        checked.append(value)
    return kind.array(checked)


class Matrix(MatrixMixin):
    """An ``m x n`` matrix of one element type.

    Matrices are values: arithmetic returns new matrices and the only mutation
    is the bounds-checked :meth:`set_element`. Storage is a flat NumPy array in
    row-major order no matter which authoring format built the matrix, so the
    element at row ``i``, column ``j`` lives at offset ``i * cols + j``.

    ``Matrix(m, n, dtype)`` builds a zero-filled matrix; the ``from_*``
    classmethods build one from data.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: int, cols: int, dtype: Any = "float64") -> None:
        kind = element_type(dtype)
        m, n = _check_dims(rows, cols)
        self._init(kind, kind.zeros(m * n), m, n)

    def _init(self, kind: ElementType, data: np.ndarray, m: int, n: int) -> None:
        self._kind = kind
        self._data = data
        self._rows = m
        self._cols = n
        self._version = 0
        self._lock = threading.Lock()

    # Construction

    @classmethod
    def from_columns(cls, dtype: Any, columns: Sequence[Sequence[Any]]) -> "Matrix":
        """Build from a sequence of columns (column-major authoring).

        ``[[1, 0], [1, 1]]`` describes the matrix whose first column is
        ``(1, 0)`` and second column is ``(1, 1)``, i.e. rows ``[1, 1]`` and
        ``[0, 1]``.
        """

        kind = element_type(dtype)
        cols_data = coerce_nested(columns, outer="column", inner="row")
        n = len(cols_data)
        m = len(cols_data[0])
        row_major = (cols_data[j][i] for i in range(m) for j in range(n))
        data = _checked_values(kind, row_major, where=lambda idx: (idx // n, idx % n))
        return cls._from_flat_unchecked(kind, data, m, n)

    @classmethod
    def from_rows(cls, dtype: Any, rows: Sequence[Sequence[Any]]) -> "Matrix":
        """Build from a sequence of rows (row-major authoring)."""

        kind = element_type(dtype)
        rows_data = coerce_nested(rows, outer="row", inner="column")
        m = len(rows_data)
        n = len(rows_data[0])
        row_major = (value for row in rows_data for value in row)
        data = _checked_values(kind, row_major, where=lambda idx: (idx // n, idx % n))
        return cls._from_flat_unchecked(kind, data, m, n)

    @classmethod
    def from_flat(cls, dtype: Any, data: Any, m: int, n: int) -> "Matrix":
        """Build from flat row-major data of length ``m * n``.

        A one-dimensional writeable ndarray of the matching dtype is adopted as
        storage without copying; later writes through either handle are shared.
        Read-only arrays (broadcasts, ``np.frombuffer`` over bytes) are copied.
        """

        kind = element_type(dtype)
        m, n = _check_dims(m, n)

        if isinstance(data, np.ndarray):
            if data.ndim != 1:
                raise DimensionError(f"flat data must be one-dimensional, got {data.ndim} dimensions")
            if data.size != m * n:
                raise DimensionError(f"flat data has {data.size} elements; ({m}, {n}) needs {m * n}")
            if data.dtype != kind.np_dtype:
                raise TypeMismatchError(f"array dtype {data.dtype} does not match matrix type {kind.name}")
            if not data.flags.writeable:
                data = data.copy()
            return cls._from_flat_unchecked(kind, data, m, n)

        values = coerce_flat(data)
        if len(values) != m * n:
            raise DimensionError(f"flat data has {len(values)} elements; ({m}, {n}) needs {m * n}")
        array = _checked_values(kind, values, where=lambda idx: (idx // n, idx % n))
        return cls._from_flat_unchecked(kind, array, m, n)

    @classmethod
    def _from_flat_unchecked(cls, dtype: Any, data: np.ndarray, m: int, n: int) -> "Matrix":
        # Internal: callers guarantee len(data) == m * n and the element dtype.
        obj = cls.__new__(cls)
        obj._init(element_type(dtype), data, int(m), int(n))
        return obj

    @classmethod
    def from_numpy(cls, array: Any, dtype: Any = None) -> "Matrix":
        """Build from a 2-D ndarray (copied). ``dtype`` defaults to the array's."""

        arr = np.asarray(array)
        if arr.ndim != 2:
            raise DimensionError(f"expected a 2-D array, got {arr.ndim} dimensions")
        kind = element_type(arr.dtype if dtype is None else dtype)
        if arr.dtype != kind.np_dtype:
            raise TypeMismatchError(f"array dtype {arr.dtype} does not match matrix type {kind.name}")
        m, n = _check_dims(arr.shape[0], arr.shape[1])
        return cls._from_flat_unchecked(kind, np.array(arr, dtype=kind.np_dtype).reshape(-1), m, n)

    @classmethod
    def zeros(cls, m: int, n: int, dtype: Any = "float64") -> "Matrix":
        return cls(m, n, dtype)

    @classmethod
    def identity(cls, n: int, dtype: Any = "float64") -> "Matrix":
        kind = element_type(dtype)
        n, _ = _check_dims(n, n)
        data = kind.zeros(n * n)
        data[:: n + 1] = kind.coerce(1)
        return cls._from_flat_unchecked(kind, data, n, n)

    # Shape and metadata

    def rows(self) -> int:
        return self._rows

    def cols(self) -> int:
        return self._cols

    def size(self) -> int:
        return self._rows * self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def dtype(self) -> str:
        return self._kind.name

    @property
    def element_type(self) -> ElementType:
        return self._kind

    @property
    def version(self) -> int:
        """Bumped by every successful :meth:`set_element`."""
        return self._version

    @property
    def is_vector(self) -> bool:
        return self._rows == 1 or self._cols == 1

    @property
    def is_scalar(self) -> bool:
        return self._rows == 1 and self._cols == 1

    # Element access

    def _offset(self, i: Any, j: Any) -> int:
        if isinstance(i, bool) or isinstance(j, bool) or not isinstance(i, (int, np.integer)) or not isinstance(
            j, (int, np.integer)
        ):
            raise TypeError("matrix indices must be integers")
        i, j = int(i), int(j)
        if not (0 <= i < self._rows) or not (0 <= j < self._cols):
            raise OutOfBoundsError(f"index ({i}, {j}) out of bounds for shape {self.shape}")
        return i * self._cols + j

    def get(self, i: int, j: int) -> Any:
        return self._data[self._offset(i, j)]

    def set_element(self, i: int, j: int, value: Any) -> None:
        """Overwrite element ``(i, j)``.

        Concurrent calls on the same matrix are serialized by a per-matrix lock.
        Do not mutate a matrix while it is an operand of a running computation.
        """

        offset = self._offset(i, j)
        if not self._kind.matches(value):
            raise TypeMismatchError(
                f"value {value!r} ({type(value).__name__}) does not match matrix type {self._kind.name}"
            )
        with self._lock:
            self._data[offset] = self._kind.coerce(value)
            self._version += 1

    def __getitem__(self, key: Any) -> Any:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("matrix indices must be provided as [row, col]")
        return self.get(*key)

    def __setitem__(self, key: Any, value: Any) -> None:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("matrix indices must be provided as [row, col]")
        self.set_element(key[0], key[1], value)

    # Reductions

    def to_vector(self) -> Vector:
        """Read-only vector view over this matrix's data (1 x n or n x 1 only)."""

        if not self.is_vector:
            raise ShapeError(f"matrix of shape {self.shape} is not 1-dimensional in either direction")
        view = self._data.view()
        view.flags.writeable = False
        return Vector._view(self._kind, view)

    def to_scalar(self) -> Any | None:
        if not self.is_scalar:
            return None
        return self._data[0]

    # Arithmetic

    def add(self, other: "Matrix") -> "Matrix":
        return _ops.add(self, other)

    def subtract(self, other: "Matrix") -> "Matrix":
        return _ops.subtract(self, other)

    def multiply(self, other: "Matrix") -> "Matrix":
        return _ops.multiply(self, other)

    def __add__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return _ops.add(self, other)

    def __sub__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return _ops.subtract(self, other)

    def __matmul__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return _ops.multiply(self, other)

    # Conversions

    def transpose(self) -> "Matrix":
        data = self._data.reshape(self._rows, self._cols).T.flatten()
        return Matrix._from_flat_unchecked(self._kind, data, self._cols, self._rows)

    @property
    def T(self) -> "Matrix":
        return self.transpose()

    def copy(self) -> "Matrix":
        return Matrix._from_flat_unchecked(self._kind, self._data.copy(), self._rows, self._cols)

    def to_numpy(self) -> np.ndarray:
        return self._data.reshape(self._rows, self._cols).copy()

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        if copy is False:
            raise ValueError("Matrix cannot be exported to NumPy without a copy")
        out = self.to_numpy()
        if dtype is not None:
            out = out.astype(dtype)
        return out

    def to_rows(self) -> list[list[Any]]:
        return self._data.reshape(self._rows, self._cols).tolist()

    def to_columns(self) -> list[list[Any]]:
        return self._data.reshape(self._rows, self._cols).T.tolist()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return (
            self._kind == other._kind
            and self.shape == other.shape
            and bool(np.array_equal(self._data, other._data))
        )


def _require_matrix(obj: Any, op: str) -> None:
    if not isinstance(obj, Matrix):
        raise TypeError(f"{op} expects Matrix operands, got {type(obj).__name__}")


def add(a: Matrix, b: Matrix) -> Matrix:
    _require_matrix(a, "add")
    return _ops.add(a, b)


def subtract(a: Matrix, b: Matrix) -> Matrix:
    _require_matrix(a, "subtract")
    return _ops.subtract(a, b)


def multiply(a: Matrix, b: Matrix) -> Matrix:
    _require_matrix(a, "multiply")
    return _ops.multiply(a, b)


def identity(n: int, dtype: Any = "float64") -> Matrix:
    return Matrix.identity(n, dtype)
