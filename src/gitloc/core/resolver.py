"""Public entry points: path in, repository root (and relative path) out.

Usage
-----
::

    from gitloc.core.resolver import resolve_file_location

    loc = resolve_file_location(Path("/repo/libs/sub/x.ts"))
    loc.root            # Path("/repo/libs/sub")
    loc.relative_path   # "x.ts"

``None`` means "no repository owns this path"; one ``repository_not_found``
warning is logged for it.  Nothing is cached: every call walks the tree
again, since submodules can be initialised or removed between calls.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

import structlog

from gitloc.core.errors import InvalidStartPath
from gitloc.core.fs import FileSystem
from gitloc.core.locator import locate_marker
from gitloc.core.models import ElementKind, RelativeLocation, ResolvedRepository
from gitloc.core.relpath import relative_location
from gitloc.core.settings import Settings, get_settings

logger = structlog.get_logger()


def _absolute(path: Path | str) -> Path:
    candidate = Path(path)
    if not candidate.is_absolute():
        raise InvalidStartPath(str(path))
    return Path(os.path.normpath(candidate))


def find_repository(
    path: Path | str,
    kind: ElementKind = ElementKind.FILE,
    *,
    fs: FileSystem | None = None,
    settings: Settings | None = None,
) -> ResolvedRepository | None:
    """Return the repository owning *path*, with marker details.

    Raises
    ------
    InvalidStartPath
        If *path* is not absolute.
    """
    element = _absolute(path)
    s = settings or get_settings()
    start = element.parent if kind is ElementKind.FILE else element

    repo = locate_marker(
        start,
        fs,
        marker_name=s.marker_name,
        redirect_prefix=s.redirect_prefix,
    )
    if repo is None:
        logger.warning("repository_not_found", path=element, kind=kind.value)
        return None

    logger.debug(
        "repository_resolved",
        path=element,
        root=repo.working_tree_root,
        submodule=repo.is_submodule,
    )
    return repo


def resolve_repository(
    path: Path | str,
    kind: ElementKind = ElementKind.FILE,
    *,
    fs: FileSystem | None = None,
    settings: Settings | None = None,
) -> Path | None:
    """Return the working-tree root owning *path*, or ``None``."""
    repo = find_repository(path, kind, fs=fs, settings=settings)
    return repo.working_tree_root if repo else None


def resolve_file_location(
    path: Path | str,
    *,
    fs: FileSystem | None = None,
    settings: Settings | None = None,
) -> RelativeLocation | None:
    """Return *path* relative to the working-tree root that owns it, or ``None``."""
    repo = find_repository(path, ElementKind.FILE, fs=fs, settings=settings)
    if repo is None:
        return None
    return relative_location(_absolute(path), repo.working_tree_root)


def resolve_workspace(
    folders: Sequence[Path],
    active_file: Path | None = None,
    *,
    fs: FileSystem | None = None,
    settings: Settings | None = None,
) -> Path | None:
    """Pick the repository to open for an editor workspace.

    A single workspace folder is resolved as a directory.  Otherwise the
    active file decides.  With neither, there is nothing to resolve.
    """
    if len(folders) == 1:
        return resolve_repository(folders[0], ElementKind.DIRECTORY, fs=fs, settings=settings)
    if active_file is not None:
        location = resolve_file_location(active_file, fs=fs, settings=settings)
        return location.root if location else None

    logger.warning("workspace_ambiguous", folder_count=len(folders))
    return None
