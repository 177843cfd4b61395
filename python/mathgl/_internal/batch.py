"""Fork-join product of a chain of matrices.

Matrix multiplication is associative, so a chain ``A0 @ A1 @ ... @ An`` can be
split at the midpoint and both halves reduced independently. Each fork hands
the left half to a worker and reduces the right half in the calling thread;
the worker's future is the one-shot channel for its partial product. Halves
are disjoint slices of the chain and nothing else is shared between them.

The pool is bounded. Forking stops once the number of submitted tasks would
exceed the pool size, and a joiner whose task has not started yet cancels it
and reduces that half itself, so a busy pool never blocks the join.
"""

from __future__ import annotations

import warnings
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Sequence

from . import ops as _ops
from .errors import DimensionError, StaleOperandError, TypeMismatchError
from .observability import BatchTrace, default_instance
from .runtime import default_runtime
from .warnings import MathGLPerformanceWarning


@dataclass(frozen=True)
class _Context:
    pool: Executor | None
    trace: BatchTrace


def fork_depth_for(workers: int) -> int:
    # A depth-d tree submits 2**d - 1 tasks; keep that within the pool.
    return (int(workers) + 1).bit_length() - 1


def check_chain(chain: Sequence[Any]) -> None:
    first = chain[0]
    for index in range(1, len(chain)):
        left, right = chain[index - 1], chain[index]
        if left.element_type != first.element_type or right.element_type != first.element_type:
            raise TypeMismatchError(
                f"batch_multiply: matrix {index} has element type {right.dtype}; "
                f"expected {first.dtype}"
            )
        if left.cols() != right.rows():
            raise DimensionError(
                f"batch_multiply: matrices {index - 1} {left.shape} and {index} {right.shape} "
                "are not multiplication-compatible"
            )


def _reduce(chain: Sequence[Any], depth: int, ctx: _Context) -> Any:
    if len(chain) == 1:
        return chain[0]
    if len(chain) == 2:
        return _ops.multiply(chain[0], chain[1])

    mid = len(chain) // 2
    left, right = chain[:mid], chain[mid:]
    if depth <= 0:
        return _ops.multiply(_reduce(left, 0, ctx), _reduce(right, 0, ctx))

    try:
        future = ctx.pool.submit(_reduce, left, depth - 1, ctx)
    except RuntimeError:
        # Pool was shut down (resized or interpreter exit); finish here.
        ctx.trace.event("inline", f"{len(left)}x", reason="pool unavailable")
        return _ops.multiply(_reduce(left, 0, ctx), _reduce(right, 0, ctx))
    ctx.trace.event("fork", f"{len(left)}|{len(right)}", depth=depth)

    try:
        right_result = _reduce(right, depth - 1, ctx)
    except BaseException:
        future.cancel()
        raise

    if future.cancel():
        ctx.trace.event("inline", f"{len(left)}x", reason="task not started")
        left_result = _reduce(left, depth - 1, ctx)
    else:
        left_result = future.result()
    ctx.trace.event("join", f"{left_result.shape}@{right_result.shape}")
    return _ops.multiply(left_result, right_result)


def batch_multiply(matrices: Sequence[Any], *, max_workers: int | None = None) -> Any:
    """Product of ``matrices`` in the given order, computed fork-join.

    The result equals the left-to-right product. Incompatible neighbours or
    mixed element types are rejected before any work is scheduled. Errors from
    a worker are re-raised here. ``max_workers`` runs the call on a private
    pool of that size instead of the shared one.
    """

    from ..matrix import Matrix

    chain = list(matrices)
    if not chain:
        raise ValueError("batch_multiply requires at least one matrix")
    for index, item in enumerate(chain):
        if not isinstance(item, Matrix):
            raise TypeError(f"batch_multiply: item {index} is {type(item).__name__}, not Matrix")
    check_chain(chain)

    runtime = default_runtime()
    if max_workers is not None:
        workers = int(max_workers)
        if workers < 1:
            raise ValueError("max_workers must be at least 1")
        if len(chain) < 3:
            warnings.warn(
                f"batch_multiply over {len(chain)} matrices has nothing to run in parallel; "
                "max_workers is ignored",
                MathGLPerformanceWarning,
                stacklevel=2,
            )
    else:
        workers = runtime.max_workers()

    depth = fork_depth_for(workers)
    observability = default_instance()
    trace = observability.start("batch_multiply", chain, max_workers=workers, fork_depth=depth)
    pins = [(item, item.version) for item in chain]

    result = None
    try:
        if len(chain) < 3:
            result = _reduce(chain, 0, _Context(pool=None, trace=trace))
        elif max_workers is not None:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mathgl-batch") as pool:
                result = _reduce(chain, depth, _Context(pool=pool, trace=trace))
        else:
            result = _reduce(chain, depth, _Context(pool=runtime.executor(), trace=trace))
    finally:
        # Failed calls are recorded too, with no result shape.
        trace.finish(None if result is None else result.shape)
        observability.commit(trace)

    for index, (item, version) in enumerate(pins):
        if item.version != version:
            raise StaleOperandError(
                f"batch_multiply: matrix {index} was modified during the computation "
                f"(version {version} -> {item.version})"
            )
    return result
