"""Filter a list of files by their properties."""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TextIO

from .errors import UsageError
from .options import parse_flags

PATH_MAX = 4096
_SIMPLE_FLAGS = {
    "a": "hidden",
    "b": "block",
    "c": "character",
    "d": "directory",
    "e": "exists",
    "f": "regular",
    "g": "setgid",
    "h": "symlink",
    "l": "list_directories",
    "p": "pipe",
    "q": "quiet",
    "r": "readable",
    "s": "nonempty",
    "u": "setuid",
    "v": "invert",
    "w": "writable",
    "x": "executable",
}


@dataclass
class Criteria:
    """The tests a file must pass to be printed."""

    hidden: bool = False
    block: bool = False
    character: bool = False
    directory: bool = False
    exists: bool = False
    regular: bool = False
    setgid: bool = False
    symlink: bool = False
    list_directories: bool = False
    newer_than: int | None = None
    older_than: int | None = None
    pipe: bool = False
    quiet: bool = False
    readable: bool = False
    nonempty: bool = False
    setuid: bool = False
    invert: bool = False
    writable: bool = False
    executable: bool = False


def _is_symlink(path: str) -> bool:
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except OSError:
        return False


class Tester:
    """Applies criteria to files and prints the names of those that pass."""

    def __init__(self, criteria: Criteria, out: TextIO | None = None) -> None:
        self.criteria = criteria
        self.out = out
        self.matched = False

    def _passes(self, path: str, name: str, st: os.stat_result) -> bool:
        c = self.criteria
        mode = st.st_mode
        mtime = int(st.st_mtime)
        checks = (
            (True, lambda: c.hidden or not name.startswith(".")),
            (c.block, lambda: stat.S_ISBLK(mode)),
            (c.character, lambda: stat.S_ISCHR(mode)),
            (c.directory, lambda: stat.S_ISDIR(mode)),
            (c.exists, lambda: os.access(path, os.F_OK)),
            (c.regular, lambda: stat.S_ISREG(mode)),
            (c.setgid, lambda: bool(mode & stat.S_ISGID)),
            (c.symlink, lambda: _is_symlink(path)),
            (c.newer_than is not None, lambda: mtime > c.newer_than),
            (c.older_than is not None, lambda: mtime < c.older_than),
            (c.pipe, lambda: stat.S_ISFIFO(mode)),
            (c.readable, lambda: os.access(path, os.R_OK)),
            (c.nonempty, lambda: st.st_size > 0),
            (c.setuid, lambda: bool(mode & stat.S_ISUID)),
            (c.writable, lambda: os.access(path, os.W_OK)),
            (c.executable, lambda: os.access(path, os.X_OK)),
        )
        return all(check() for enabled, check in checks if enabled)

    def test(self, path: str, name: str) -> bool:
        """Test one file; print and return True if it is selected."""
        try:
            st = os.stat(path)
        except OSError:
            passed = False
        else:
            passed = self._passes(path, name, st)
        if passed == self.criteria.invert:
            return False
        self.matched = True
        if not self.criteria.quiet:
            print(name, file=self.out if self.out is not None else sys.stdout)
        return True

    def _candidates(self, operands: Sequence[str],
                    stream: Iterable[str] | None) -> Iterator[tuple[str, str]]:
        if not operands:
            lines = stream if stream is not None else sys.stdin
            for line in lines:
                line = line.removesuffix("\n")
                yield line, line
            return
        for operand in operands:
            if self.criteria.list_directories:
                try:
                    entries = os.listdir(operand)
                except OSError:
                    entries = None
                if entries is not None:
                    for entry in [".", "..", *entries]:
                        path = f"{operand}/{entry}"
                        if len(os.fsencode(path)) < PATH_MAX:
                            yield path, entry
                    continue
            yield operand, operand

    def run(self, operands: Sequence[str], stream: Iterable[str] | None = None) -> int:
        """Test the operands, or the lines of stream when there are none.

        Returns the exit status: 0 if anything was selected, else 1.
        """
        for path, name in self._candidates(operands, stream):
            if self.test(path, name) and self.criteria.quiet:
                return 0
        return 0 if self.matched else 1


def _reference_mtime(file: str) -> int | None:
    try:
        return int(os.stat(file).st_mtime)
    except OSError as err:
        print(f"{file}: {err.strerror}", file=sys.stderr)
        return None


def parse_args(argv: Sequence[str]) -> tuple[Criteria, list[str]]:
    """Build criteria and the operand list from a command line."""
    parsed = parse_flags(argv, "no")
    criteria = Criteria()
    for flag, value in parsed.flags:
        if flag == "n":
            criteria.newer_than = _reference_mtime(value)
        elif flag == "o":
            criteria.older_than = _reference_mtime(value)
        elif flag in _SIMPLE_FLAGS:
            setattr(criteria, _SIMPLE_FLAGS[flag], True)
        else:
            raise UsageError(f"unknown option -- {flag}")
    return criteria, parsed.operands


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; returns its exit status."""
    if argv is None:
        argv = sys.argv
    program = argv[0] if argv else "stest"
    try:
        criteria, operands = parse_args(argv)
    except UsageError as err:
        print(f"usage: {program} [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]",
              file=sys.stderr)
        return err.status
    return Tester(criteria).run(operands, sys.stdin)


if __name__ == "__main__":
    raise SystemExit(main())