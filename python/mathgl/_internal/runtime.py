from __future__ import annotations

import atexit
import os
import threading
import warnings
from concurrent.futures import ThreadPoolExecutor

from .warnings import MathGLWarning

_DEFAULT_EDGE_ITEMS = 4


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


class Runtime:
    """Process-wide settings and the shared batch-multiplication worker pool."""

    def __init__(
        self,
        *,
        workers_env_var: str = "MATHGL_MAX_WORKERS",
        edge_items_env_var: str = "MATHGL_PRINT_EDGE_ITEMS",
    ) -> None:
        self._workers_env_var = workers_env_var
        self._edge_items_env_var = edge_items_env_var
        self._max_workers: int | None = None
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    def max_workers(self) -> int:
        if self._max_workers is None:
            self._max_workers = _env_int(self._workers_env_var, os.cpu_count() or 1)
        return self._max_workers

    def set_max_workers(self, value: int) -> None:
        value = int(value)
        if value < 1:
            raise ValueError("max_workers must be at least 1")
        with self._lock:
            old, self._executor = self._executor, None
            self._max_workers = value
        if old is not None:
            old.shutdown(wait=False)

    def edge_items(self) -> int:
        # Printing only; a bad value falls back to the default.
        try:
            return _env_int(self._edge_items_env_var, _DEFAULT_EDGE_ITEMS)
        except ValueError as exc:
            warnings.warn(
                f"{exc}; using {_DEFAULT_EDGE_ITEMS}",
                MathGLWarning,
                stacklevel=2,
            )
            return _DEFAULT_EDGE_ITEMS

    def executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers(),
                    thread_name_prefix="mathgl-batch",
                )
            return self._executor

    def shutdown(self) -> None:
        with self._lock:
            old, self._executor = self._executor, None
        if old is not None:
            old.shutdown(wait=True)

    def register_cleanup(self) -> None:
        atexit.register(self.shutdown)


_default_runtime = Runtime()


def default_runtime() -> Runtime:
    return _default_runtime
