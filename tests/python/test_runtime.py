import os
import subprocess
import sys
from pathlib import Path

import pytest

from mathgl._internal.runtime import Runtime
from mathgl._internal.warnings import MathGLWarning

PYTHON_DIR = Path(__file__).resolve().parents[2] / "python"


def test_max_workers_from_env(monkeypatch):
    monkeypatch.setenv("MATHGL_TEST_WORKERS", "3")
    rt = Runtime(workers_env_var="MATHGL_TEST_WORKERS")
    assert rt.max_workers() == 3
    try:
        assert rt.executor()._max_workers == 3
    finally:
        rt.shutdown()


def test_max_workers_default(monkeypatch):
    monkeypatch.delenv("MATHGL_TEST_WORKERS", raising=False)
    rt = Runtime(workers_env_var="MATHGL_TEST_WORKERS")
    assert rt.max_workers() >= 1


@pytest.mark.parametrize("raw", ["abc", "0", "-2"])
def test_invalid_env_values(monkeypatch, raw):
    monkeypatch.setenv("MATHGL_TEST_WORKERS", raw)
    rt = Runtime(workers_env_var="MATHGL_TEST_WORKERS")
    with pytest.raises(ValueError, match="MATHGL_TEST_WORKERS"):
        rt.max_workers()


def test_blank_env_value_uses_default(monkeypatch):
    monkeypatch.setenv("MATHGL_TEST_WORKERS", "  ")
    rt = Runtime(workers_env_var="MATHGL_TEST_WORKERS")
    assert rt.max_workers() >= 1


def test_edge_items_from_env(monkeypatch):
    monkeypatch.setenv("MATHGL_TEST_EDGE", "2")
    rt = Runtime(edge_items_env_var="MATHGL_TEST_EDGE")
    assert rt.edge_items() == 2


@pytest.mark.parametrize("raw", ["abc", "0"])
def test_invalid_edge_items_falls_back_with_warning(monkeypatch, raw):
    monkeypatch.setenv("MATHGL_TEST_EDGE", raw)
    rt = Runtime(edge_items_env_var="MATHGL_TEST_EDGE")
    with pytest.warns(MathGLWarning, match="MATHGL_TEST_EDGE"):
        assert rt.edge_items() == 4


def test_import_survives_bad_edge_items(monkeypatch):
    monkeypatch.setenv("MATHGL_PRINT_EDGE_ITEMS", "abc")
    code = "import mathgl; print(mathgl.get_print_options()['edge_items'])"
    proc = subprocess.run(
        [sys.executable, "-W", "ignore", "-c", code],
        capture_output=True,
        text=True,
        env={**os.environ, "PYTHONPATH": str(PYTHON_DIR)},
    )
    assert proc.returncode == 0, proc.stderr
    assert proc.stdout.strip() == "4"


def test_set_max_workers_replaces_executor():
    rt = Runtime(workers_env_var="MATHGL_TEST_WORKERS_UNSET")
    first = rt.executor()
    assert rt.executor() is first
    rt.set_max_workers(2)
    second = rt.executor()
    try:
        assert second is not first
        assert second._max_workers == 2
        with pytest.raises(RuntimeError):
            first.submit(lambda: None)
    finally:
        rt.shutdown()


def test_shutdown_is_idempotent():
    rt = Runtime(workers_env_var="MATHGL_TEST_WORKERS_UNSET")
    rt.executor()
    rt.shutdown()
    rt.shutdown()
