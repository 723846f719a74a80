"""Marker classifier.

Given a ``.git`` entry found during the walk, decide what it is:

``Directory``
    An ordinary repository.  The working-tree root is the entry's parent.

``RedirectFile``
    A submodule (or linked worktree) link: a one-line text file of the
    form ``gitdir: <path>`` (the bare ``<path>`` form is accepted too).
    The path is resolved against the marker's directory and must name an
    existing directory.

Every outcome is returned as a value: :class:`Classified` or
:class:`Unusable`.  Filesystem and decoding errors are converted to
``Unusable`` here and never escape, so the locator can simply move on to
the parent directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from gitloc.core.fs import FileSystem, LocalFileSystem
from gitloc.core.models import MarkerKind, RepositoryMarker, ResolvedRepository

# Literal, case-sensitive keyword that may open a redirect file.
REDIRECT_PREFIX = "gitdir: "


@dataclass(frozen=True)
class Classified:
    repository: ResolvedRepository


@dataclass(frozen=True)
class Unusable:
    """The marker exists but cannot identify a repository."""

    marker_path: Path
    reason: str  # short machine-readable tag, e.g. "dangling-redirect"
    detail: str = ""


Classification = Classified | Unusable


def parse_redirect(content: str, *, prefix: str = REDIRECT_PREFIX) -> str:
    """Return the target path written in a redirect file.

    Surrounding whitespace is stripped; *prefix* is removed only when it
    opens the content.  An empty string means the file names no target.
    """
    text = content.strip()
    if text.startswith(prefix):
        text = text[len(prefix):].strip()
    return text


def resolve_redirect_target(marker_path: Path, target: str) -> Path:
    """Make *target* absolute relative to the marker's directory (lexically)."""
    candidate = Path(target)
    if not candidate.is_absolute():
        candidate = marker_path.parent / candidate
    return Path(os.path.normpath(candidate))


def classify(
    marker_path: Path,
    fs: FileSystem | None = None,
    *,
    prefix: str = REDIRECT_PREFIX,
) -> Classification:
    """Classify the ``.git`` entry at *marker_path*."""
    fs = fs or LocalFileSystem()
    try:
        if fs.is_dir(marker_path):
            marker = RepositoryMarker(marker_path=marker_path, kind=MarkerKind.DIRECTORY)
            return Classified(ResolvedRepository(fs.parent(marker_path), marker))

        if not fs.is_file(marker_path):
            return Unusable(marker_path, "unsupported-entry", "neither a directory nor a regular file")

        target = parse_redirect(fs.read_text(marker_path), prefix=prefix)
        if not target:
            return Unusable(marker_path, "empty-redirect")

        redirect_target = resolve_redirect_target(marker_path, target)
        if not fs.is_dir(redirect_target):
            return Unusable(marker_path, "dangling-redirect", str(redirect_target))

    except (OSError, UnicodeDecodeError) as exc:
        return Unusable(marker_path, "io-error", f"{type(exc).__name__}: {exc}")

    marker = RepositoryMarker(
        marker_path=marker_path,
        kind=MarkerKind.REDIRECT_FILE,
        redirect_target=redirect_target,
    )
    return Classified(ResolvedRepository(fs.parent(marker_path), marker))
