"""Structured logging for gitloc (structlog).

Configures structlog once at process start so every module can do::

    import structlog
    logger = structlog.get_logger()
    logger.warning("marker_unusable", marker=path, reason="dangling-redirect")

Output is JSON by default (``GITLOC_LOG_JSON=true``) for machine
consumption, with a human-friendly console renderer available for
development (``GITLOC_LOG_JSON=false``).

Path values are rendered as POSIX strings before output so log lines
look the same on every platform.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, MutableMapping
from pathlib import PurePath
from typing import Any

import structlog


def _path_render_processor(
    _logger: Any,
    _method: str,
    event_dict: MutableMapping[str, Any],
) -> Mapping[str, Any]:
    """Replace every :class:`~pathlib.PurePath` value with its POSIX string."""
    for k, v in event_dict.items():
        if isinstance(v, PurePath):
            event_dict[k] = v.as_posix()
    return event_dict


def configure_logging(*, level: str = "INFO", json_output: bool = True) -> None:
    """Set up structlog + stdlib integration.

    Parameters
    ----------
    level:
        Root log level (``DEBUG``, ``INFO``, ``WARNING``, etc.).
    json_output:
        If *True*, render as JSON lines.  If *False*, use coloured console
        output (dev mode).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Shared processors (run for every log event).
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _path_render_processor,
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)
