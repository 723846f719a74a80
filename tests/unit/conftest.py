"""Shared fixtures: small on-disk repository layouts."""

from __future__ import annotations

from pathlib import Path

import pytest

from gitloc.core.settings import Settings


@pytest.fixture()
def settings() -> Settings:
    return Settings(merge_binary=Path("/usr/bin/smerge"))


@pytest.fixture()
def repo(tmp_path: Path) -> Path:
    """``<tmp>/repo`` with a ``.git`` directory and ``src/a.ts``."""
    root = tmp_path / "repo"
    (root / ".git").mkdir(parents=True)
    (root / "src").mkdir()
    (root / "src" / "a.ts").write_text("export {}\n", encoding="utf-8")
    return root


@pytest.fixture()
def submodule(repo: Path) -> Path:
    """``repo/libs/sub`` linked to ``repo/.git/modules/sub`` via a redirect file."""
    (repo / ".git" / "modules" / "sub").mkdir(parents=True)
    sub = repo / "libs" / "sub"
    sub.mkdir(parents=True)
    (sub / ".git").write_text("gitdir: ../../.git/modules/sub\n", encoding="utf-8")
    (sub / "x.ts").write_text("", encoding="utf-8")
    return sub
