"""gitloc runtime settings (Pydantic v2 Settings).

Centralises everything configurable so that:

* The merge-tool binary is an explicit value handed to whoever builds a
  command, never module-level state.
* Environment overrides work (``GITLOC_MERGE_BINARY``, ``GITLOC_LOG_LEVEL``, etc.).
* Tests can inject values directly: ``Settings(marker_name=".hg")``.

Usage
-----
::

    from gitloc.core.settings import get_settings

    s = get_settings()
    s.merge_binary        # override or the platform default
"""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitloc.core.locator import MARKER_NAME
from gitloc.core.marker import REDIRECT_PREFIX

_DEFAULT_BINARIES: dict[str, Path] = {
    "win32": Path("smerge"),
    "darwin": Path("/Applications/Sublime Merge.app/Contents/SharedSupport/bin/smerge"),
}
_FALLBACK_BINARY = Path("/opt/sublime_merge/sublime_merge")


def default_merge_binary(platform: str | None = None) -> Path:
    """Where Sublime Merge's CLI usually lives on *platform* (default: this one)."""
    return _DEFAULT_BINARIES.get(platform or sys.platform, _FALLBACK_BINARY)


class Settings(BaseSettings):
    """All runtime configuration for gitloc."""

    model_config = SettingsConfigDict(
        env_prefix="GITLOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Markers ─────────────────────────────────────────────
    marker_name: str = MARKER_NAME
    redirect_prefix: str = REDIRECT_PREFIX

    # ── Merge tool ──────────────────────────────────────────
    merge_binary: Path | None = None

    # ── Logging ─────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool = True  # structured JSON by default

    @model_validator(mode="after")
    def _fill_binary(self) -> "Settings":
        """Fall back to the platform default when no binary was configured."""
        if self.merge_binary is None:
            self.merge_binary = default_merge_binary()
        return self

    @model_validator(mode="after")
    def _check_markers(self) -> "Settings":
        if not self.marker_name or "/" in self.marker_name or "\\" in self.marker_name:
            raise ValueError(f"marker_name must be a single path segment: {self.marker_name!r}")
        if not self.redirect_prefix:
            raise ValueError("redirect_prefix must not be empty")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached :class:`Settings` instance.

    In tests, construct ``Settings(...)`` directly and pass it in.
    """
    return Settings()
