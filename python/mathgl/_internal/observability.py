from __future__ import annotations

import threading
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass
class OperandSnapshot:
    shape: Tuple[int, int]
    dtype: str
    version: int


@dataclass
class BatchRecord:
    op: str
    trace_tag: str
    count: int
    dtype: str
    operands: List[OperandSnapshot]
    result_shape: Tuple[int, int] | None = None
    max_workers: int = 1
    fork_depth: int = 0
    forked_tasks: int = 0
    inline_fallbacks: int = 0
    elapsed_s: float | None = None
    events: List[Dict[str, Any]] = field(default_factory=list)
    timestamp: float = field(default_factory=time.time)


def snapshot(obj: Any) -> OperandSnapshot:
    return OperandSnapshot(shape=tuple(obj.shape), dtype=str(obj.dtype), version=int(obj.version))


class BatchTrace:
    """Mutable trace for one batch call; safe to update from worker threads."""

    def __init__(self, record: BatchRecord) -> None:
        self.record = record
        self._lock = threading.Lock()
        self._start = time.perf_counter()

    def event(self, event_type: str, detail: str, **extra: Any) -> None:
        payload: Dict[str, Any] = {"type": event_type, "detail": detail}
        payload.update(extra)
        with self._lock:
            self.record.events.append(payload)
            if event_type == "fork":
                self.record.forked_tasks += 1
            elif event_type == "inline":
                self.record.inline_fallbacks += 1

    def finish(self, result_shape: Tuple[int, int] | None) -> None:
        self.record.result_shape = result_shape
        self.record.elapsed_s = time.perf_counter() - self._start


class BatchObservability:
    def __init__(self) -> None:
        self._counter = 0
        self._last: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def clear(self) -> None:
        with self._lock:
            self._last.clear()

    def start(self, op: str, operands: List[Any], *, max_workers: int, fork_depth: int) -> BatchTrace:
        with self._lock:
            self._counter += 1
            tag = f"{op}:{self._counter}"
        snapshots = [snapshot(obj) for obj in operands]
        record = BatchRecord(
            op=op,
            trace_tag=tag,
            count=len(snapshots),
            dtype=snapshots[0].dtype if snapshots else "",
            operands=snapshots,
            max_workers=int(max_workers),
            fork_depth=int(fork_depth),
        )
        return BatchTrace(record)

    def commit(self, trace: BatchTrace) -> dict[str, Any]:
        payload = asdict(trace.record)
        with self._lock:
            self._last["__latest__"] = payload
            self._last[trace.record.op] = payload
        return payload

    def last(self, op: str | None = None) -> dict[str, Any] | None:
        key = op or "__latest__"
        with self._lock:
            payload = self._last.get(key)
        if payload is None:
            return None
        return dict(payload)


# Module-level singleton helpers (optional convenience)
_default_observability = BatchObservability()


def default_instance() -> BatchObservability:
    return _default_observability
