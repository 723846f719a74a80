"""gitloc domain models — enums and immutable value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ElementKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class MarkerKind(str, Enum):
    DIRECTORY = "directory"
    REDIRECT_FILE = "redirect_file"


@dataclass(frozen=True)
class RepositoryMarker:
    """A ``.git`` entry found during the walk."""

    marker_path: Path
    kind: MarkerKind
    redirect_target: Path | None = None  # only for REDIRECT_FILE


@dataclass(frozen=True)
class ResolvedRepository:
    """A working-tree root plus the marker that identified it."""

    working_tree_root: Path
    marker: RepositoryMarker

    @property
    def metadata_dir(self) -> Path:
        """The real metadata directory (the redirect target for submodules)."""
        if self.marker.redirect_target is not None:
            return self.marker.redirect_target
        return self.marker.marker_path

    @property
    def is_submodule(self) -> bool:
        return self.marker.kind is MarkerKind.REDIRECT_FILE


@dataclass(frozen=True)
class RelativeLocation:
    """A file path expressed relative to its working-tree root."""

    relative_path: str  # always ``/``-separated
    root: Path
