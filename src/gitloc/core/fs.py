"""Filesystem provider used by the resolver.

The core needs only five primitives: existence, file/dir type checks, a
small text read, and parent computation.  :class:`LocalFileSystem` backs
them with :mod:`pathlib`; tests can pass any object matching
:class:`FileSystem` instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    def exists(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...

    def parent(self, path: Path) -> Path: ...


class LocalFileSystem:
    """The real, local filesystem."""

    def exists(self, path: Path) -> bool:
        # lexists: a dangling symlink is still an entry, just an unusable one.
        return path.is_symlink() or path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def parent(self, path: Path) -> Path:
        return path.parent
