"""Tests for gitloc.core.locator — the upward marker walk."""

from __future__ import annotations

from pathlib import Path

from structlog.testing import capture_logs

from gitloc.core.locator import locate_marker


class RecordingFS:
    """In-memory filesystem that records every existence probe."""

    def __init__(self, dirs: set[Path] | None = None, files: dict[Path, str] | None = None) -> None:
        self.dirs = dirs or set()
        self.files = files or {}
        self.probes: list[Path] = []

    def exists(self, path: Path) -> bool:
        self.probes.append(path)
        return path in self.dirs or path in self.files

    def is_file(self, path: Path) -> bool:
        return path in self.files

    def is_dir(self, path: Path) -> bool:
        return path in self.dirs

    def read_text(self, path: Path) -> str:
        return self.files[path]

    def parent(self, path: Path) -> Path:
        return path.parent


def test_finds_marker_in_start_dir(repo: Path) -> None:
    found = locate_marker(repo)
    assert found is not None
    assert found.working_tree_root == repo


def test_finds_marker_from_deep_subdirectory(repo: Path) -> None:
    deep = repo / "src" / "a" / "b"
    deep.mkdir(parents=True)
    found = locate_marker(deep)
    assert found is not None
    assert found.working_tree_root == repo


def test_nearest_marker_wins(repo: Path, submodule: Path) -> None:
    """A submodule's redirect is met before the superproject's .git."""
    nested = submodule / "pkg"
    nested.mkdir()
    found = locate_marker(nested)
    assert found is not None
    assert found.working_tree_root == submodule
    assert found.is_submodule


def test_nested_plain_repository_wins(repo: Path) -> None:
    inner = repo / "vendor" / "inner"
    (inner / ".git").mkdir(parents=True)
    found = locate_marker(inner)
    assert found is not None
    assert found.working_tree_root == inner


def test_unusable_marker_is_skipped(repo: Path) -> None:
    broken = repo / "libs" / "broken"
    broken.mkdir(parents=True)
    (broken / ".git").write_text("gitdir: ../../.git/modules/missing", encoding="utf-8")

    with capture_logs() as logs:
        found = locate_marker(broken)

    assert found is not None
    assert found.working_tree_root == repo
    warnings = [e for e in logs if e["log_level"] == "warning"]
    assert len(warnings) == 1
    assert warnings[0]["event"] == "marker_unusable"
    assert warnings[0]["reason"] == "dangling-redirect"
    assert warnings[0]["marker"] == broken / ".git"


def test_returns_none_without_marker(tmp_path: Path) -> None:
    isolated = tmp_path / "no_marker_here"
    isolated.mkdir()
    assert locate_marker(isolated) is None


def test_filesystem_root_probed_once() -> None:
    """Starting at / terminates and probes /.git exactly once."""
    fs = RecordingFS()
    assert locate_marker(Path("/"), fs) is None
    assert fs.probes == [Path("/.git")]


def test_walk_probes_every_level_then_stops() -> None:
    fs = RecordingFS()
    assert locate_marker(Path("/a/b/c"), fs) is None
    assert fs.probes == [Path("/a/b/c/.git"), Path("/a/b/.git"), Path("/a/.git"), Path("/.git")]


def test_marker_at_filesystem_root() -> None:
    fs = RecordingFS(dirs={Path("/.git")})
    found = locate_marker(Path("/a/b"), fs)
    assert found is not None
    assert found.working_tree_root == Path("/")


def test_probe_error_is_skipped() -> None:
    class FlakyFS(RecordingFS):
        def exists(self, path: Path) -> bool:
            if path == Path("/w/sub/.git"):
                raise PermissionError(13, "Permission denied")
            return super().exists(path)

    fs = FlakyFS(dirs={Path("/w/.git")})
    with capture_logs() as logs:
        found = locate_marker(Path("/w/sub"), fs)

    assert found is not None
    assert found.working_tree_root == Path("/w")
    assert [e["event"] for e in logs] == ["marker_probe_failed"]


def test_custom_marker_name(tmp_path: Path) -> None:
    (tmp_path / ".hg").mkdir()
    (tmp_path / "src").mkdir()
    found = locate_marker(tmp_path / "src", marker_name=".hg")
    assert found is not None
    assert found.working_tree_root == tmp_path
