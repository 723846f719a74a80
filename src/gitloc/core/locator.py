"""Marker locator — the upward walk.

Algorithm
---------
Starting at a directory, probe ``<dir>/.git`` at every level.  The first
marker the classifier accepts wins, which is what makes resolution
submodule aware: a file inside a submodule meets the submodule's own
redirect file before it could ever reach the superproject's ``.git``.

An unusable marker (dangling redirect, unreadable file) is logged and
skipped; the walk continues from the parent.

The walk ends after probing the filesystem anchor (``/`` or a drive
root), or as soon as ``parent`` stops changing the directory.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from gitloc.core.fs import FileSystem, LocalFileSystem
from gitloc.core.marker import REDIRECT_PREFIX, Classified, classify
from gitloc.core.models import ResolvedRepository

logger = structlog.get_logger()

MARKER_NAME = ".git"


def _is_anchor(path: Path) -> bool:
    return bool(path.anchor) and path == Path(path.anchor)


def locate_marker(
    start: Path,
    fs: FileSystem | None = None,
    *,
    marker_name: str = MARKER_NAME,
    redirect_prefix: str = REDIRECT_PREFIX,
) -> ResolvedRepository | None:
    """Walk upward from directory *start*; return the nearest usable repository.

    Returns ``None`` when the walk reaches the filesystem root without
    finding one.  Never raises for missing or malformed markers.
    """
    fs = fs or LocalFileSystem()
    current = start
    while True:
        candidate = current / marker_name
        try:
            present = fs.exists(candidate)
        except OSError as exc:
            logger.warning("marker_probe_failed", marker=candidate, error=f"{type(exc).__name__}: {exc}")
            present = False

        if present:
            outcome = classify(candidate, fs, prefix=redirect_prefix)
            if isinstance(outcome, Classified):
                return outcome.repository
            logger.warning(
                "marker_unusable",
                marker=candidate,
                reason=outcome.reason,
                detail=outcome.detail,
            )

        parent = fs.parent(current)
        if _is_anchor(current) or parent == current:
            return None
        current = parent
