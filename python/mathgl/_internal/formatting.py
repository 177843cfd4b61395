from __future__ import annotations

from typing import Any

import numpy as np


_EDGE_ITEMS: int = 4


def configure(*, edge_items: int = 4) -> None:
    global _EDGE_ITEMS
    if int(edge_items) < 1:
        raise ValueError("edge_items must be at least 1")
    _EDGE_ITEMS = int(edge_items)


def edge_items() -> int:
    return _EDGE_ITEMS


def _edge_indices(length: int) -> tuple[list[int], list[int], bool]:
    if length <= _EDGE_ITEMS * 2:
        return list(range(length)), [], False
    head = list(range(_EDGE_ITEMS))
    tail = list(range(length - _EDGE_ITEMS, length))
    return head, tail, True


def _format_value(value: Any) -> str:
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:g}"
    if isinstance(value, complex):
        return f"{value.real:g}{value.imag:+g}j"
    return str(value)


def _format_matrix_row(
    matrix: Any,
    row_index: int,
    col_head: list[int],
    col_tail: list[int],
    truncated: bool,
) -> str:
    entries: list[str] = [_format_value(matrix.get(row_index, col)) for col in col_head]
    if truncated:
        entries.append("...")
    entries.extend(_format_value(matrix.get(row_index, col)) for col in col_tail)
    return " ".join(entries)


def matrix_str(self: Any) -> str:
    rows = self.rows()
    cols = self.cols()

    header = f"{self.__class__.__name__}(shape=({rows}, {cols}), dtype={self.dtype})"

    row_head, row_tail, rows_truncated = _edge_indices(rows)
    col_head, col_tail, cols_truncated = _edge_indices(cols)

    lines = [header, "["]
    for row_index in row_head:
        row_repr = _format_matrix_row(self, row_index, col_head, col_tail, cols_truncated)
        lines.append(f" [{row_repr}]")
    if rows_truncated:
        lines.append(" ...")
    for row_index in row_tail:
        row_repr = _format_matrix_row(self, row_index, col_head, col_tail, cols_truncated)
        lines.append(f" [{row_repr}]")
    lines.append("]")
    return "\n".join(lines)


def vector_str(self: Any) -> str:
    head, tail, truncated = _edge_indices(len(self))
    entries = [_format_value(self.get(i)) for i in head]
    if truncated:
        entries.append("...")
    entries.extend(_format_value(self.get(i)) for i in tail)
    return f"{self.__class__.__name__}(size={len(self)}, dtype={self.dtype})\n[{' '.join(entries)}]"


class MatrixMixin:
    def __str__(self) -> str:
        return matrix_str(self)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} shape={self.shape} dtype={self.dtype}>"
