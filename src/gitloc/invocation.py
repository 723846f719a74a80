"""Merge-tool command builder.

Turns a resolved root / relative location into the argument vector and
working directory a Sublime Merge launcher needs.  Nothing here spawns a
process; callers decide how (and whether) to run :attr:`Invocation.command`.

The argument shapes follow ``smerge``'s command line:

* ``smerge .``                                  open the repository
* ``smerge search 'file:"<path>"'``             file history
* ``smerge search 'file:"<path>" line:<a>-<b>'`` line history
* ``smerge blame <path>``                       blame
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gitloc.core.errors import InvalidLineRange
from gitloc.core.models import RelativeLocation


@dataclass(frozen=True)
class Invocation:
    binary: Path
    args: tuple[str, ...]
    cwd: Path

    @property
    def command(self) -> list[str]:
        return [str(self.binary), *self.args]


def open_repository(binary: Path, root: Path) -> Invocation:
    return Invocation(binary=binary, args=(".",), cwd=root)


def file_history(binary: Path, location: RelativeLocation) -> Invocation:
    return Invocation(
        binary=binary,
        args=("search", f'file:"{location.relative_path}"'),
        cwd=location.root,
    )


def blame_file(binary: Path, location: RelativeLocation) -> Invocation:
    return Invocation(binary=binary, args=("blame", location.relative_path), cwd=location.root)


def line_history(binary: Path, location: RelativeLocation, start: int, end: int) -> Invocation:
    """History of lines *start*..*end* (1-based, inclusive) of *location*.

    Raises
    ------
    InvalidLineRange
        If the range is empty, reversed, or starts below line 1.
    """
    if start < 1 or end < start:
        raise InvalidLineRange(start, end)
    return Invocation(
        binary=binary,
        args=("search", f'file:"{location.relative_path}" line:{start}-{end}'),
        cwd=location.root,
    )
