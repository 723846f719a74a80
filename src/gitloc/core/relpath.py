"""Path relativizer.

Pure segment arithmetic, no filesystem access.  Output is always
``/``-separated with no leading separator, so it can be dropped straight
into a search query regardless of host platform.  Case is preserved.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePath

from gitloc.core.models import RelativeLocation


def _segments(path: PurePath) -> tuple[str, tuple[str, ...]]:
    normalised = PurePath(os.path.normpath(path))
    parts = normalised.parts
    if normalised.anchor:
        return normalised.anchor, parts[1:]
    return "", parts


def relativize(path: PurePath, root: PurePath) -> str:
    """Return *path* relative to *root* as a ``/``-separated string.

    ``path == root`` yields ``"."``.  A *path* outside *root* yields a
    lexical answer with ``..`` segments rather than an error.
    """
    path_anchor, path_parts = _segments(path)
    root_anchor, root_parts = _segments(root)

    common = 0
    if path_anchor == root_anchor:
        for ours, theirs in zip(path_parts, root_parts):
            if ours != theirs:
                break
            common += 1

    segments = [".."] * (len(root_parts) - common) + list(path_parts[common:])
    return "/".join(segments) or "."


def relative_location(path: Path, root: Path) -> RelativeLocation:
    return RelativeLocation(relative_path=relativize(path, root), root=root)
