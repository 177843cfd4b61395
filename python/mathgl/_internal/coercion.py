from __future__ import annotations

from collections.abc import Sequence as _SequenceABC
from typing import Any

from .errors import DimensionError


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def coerce_nested(candidate: Any, *, outer: str, inner: str) -> list[list[Any]]:
    """Validate a rectangular nested sequence and return it as a list of lists.

    ``outer``/``inner`` name the axes ("row"/"column") for error messages only;
    the caller decides how to lay the result out.
    """

    if not is_sequence_like(candidate):
        raise TypeError(f"Matrix data must be provided as a nested sequence of {outer}s.")
    groups = [group for group in candidate]
    if not groups:
        raise DimensionError(f"Matrix data must contain at least one {outer}.")
    out: list[list[Any]] = []
    width: int | None = None
    for index, group in enumerate(groups):
        if not is_sequence_like(group):
            raise TypeError(f"Each matrix {outer} must be a sequence of entries.")
        entries = list(group)
        if width is None:
            width = len(entries)
            if width == 0:
                raise DimensionError(f"Matrix {outer}s must not be empty.")
        elif len(entries) != width:
            raise DimensionError(
                f"Matrix {outer} {index} has {len(entries)} entries; expected {width} "
                f"(every {outer} must span the same number of {inner}s)."
            )
        out.append(entries)
    return out


def coerce_flat(candidate: Any) -> list[Any]:
    if not is_sequence_like(candidate):
        raise TypeError("Flat matrix data must be a sequence of entries.")
    return list(candidate)
