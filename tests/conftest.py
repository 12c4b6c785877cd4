"""Shared fixtures for the test suite."""

from __future__ import annotations

import importlib
import logging
import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from lib_typed_settings.observability import bind_trace_id


@pytest.fixture(autouse=True)
def _clear_trace_id():
    """Each test starts without a bound trace identifier."""

    bind_trace_id(None)
    yield
    bind_trace_id(None)


@pytest.fixture()
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture every record emitted by the package logger."""

    caplog.set_level(logging.DEBUG, logger="lib_typed_settings")
    return caplog


@pytest.fixture()
def schema_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str, str], str]:
    """Write an importable module holding a schema and return its module name.

    The module body is dedented so tests can inline it naturally.
    """

    monkeypatch.syspath_prepend(str(tmp_path))

    def _write(name: str, body: str) -> str:
        (tmp_path / f"{name}.py").write_text(textwrap.dedent(body), encoding="utf-8")
        sys.modules.pop(name, None)
        importlib.invalidate_caches()
        return name

    return _write
