"""Tests for gitloc.core.logging — processors and configuration."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

import pytest
import structlog

from gitloc.core.logging import _path_render_processor, configure_logging


def test_path_values_rendered_as_posix() -> None:
    event = {"event": "x", "marker": PurePosixPath("/repo/.git"), "count": 2}
    out = _path_render_processor(None, "warning", event)
    assert out["marker"] == "/repo/.git"
    assert out["count"] == 2


def test_non_path_values_untouched() -> None:
    event = {"event": "x", "reason": "dangling-redirect"}
    assert _path_render_processor(None, "info", dict(event)) == event


@pytest.fixture()
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.usefixtures("_restore_logging")
def test_configure_logging_sets_level_and_handler() -> None:
    configure_logging(level="debug", json_output=False)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)


@pytest.mark.usefixtures("_restore_logging")
def test_configure_logging_json_output(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="INFO", json_output=True)
    structlog.get_logger("gitloc.test").warning("marker_unusable", marker=Path("/r/.git"))
    err = capsys.readouterr().err
    assert '"event": "marker_unusable"' in err
    assert '"marker": "/r/.git"' in err


@pytest.mark.usefixtures("_restore_logging")
def test_configure_logging_console_output(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="INFO", json_output=False)
    structlog.get_logger("gitloc.test").warning("repository_not_found", path=Path("/r/f.ts"))
    err = capsys.readouterr().err
    assert "repository_not_found" in err
    assert "path=/r/f.ts" in err
    assert not err.lstrip().startswith("{")


@pytest.mark.usefixtures("_restore_logging")
def test_configure_logging_level_filters(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="WARNING", json_output=True)
    structlog.get_logger("gitloc.test").info("repository_resolved")
    assert capsys.readouterr().err == ""
