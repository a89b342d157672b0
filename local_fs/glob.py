"""Glob patterns: compile shell-style patterns to anchored regexes and match file names.

Supported syntax: ``*`` (any run of non-separator characters), ``?`` (one non-separator
character), ``{a,b}`` alternation, ``[...]`` character classes and ``\\`` escapes. Names
starting with a dot only match patterns that start with a dot.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .host import LOCAL
from .paths import file, split

if TYPE_CHECKING:
    from collections.abc import Callable

    from .host import HostFileSystem
    from .paths import StrPath

_ESCAPED = frozenset(".()|+^$@%")
_NOT_HIDDEN = r"(?=[^\.])"


@runtime_checkable
class Matcher(Protocol):
    """Predicate over base file names."""

    def matches(self, name: str) -> bool: ...


class RegexMatcher:
    """Matcher backed by a compiled regular expression."""

    def __init__(self, pattern: re.Pattern[str]) -> None:
        self.pattern = pattern

    def matches(self, name: str) -> bool:
        return self.pattern.fullmatch(name) is not None

    def __repr__(self) -> str:
        return f"RegexMatcher({self.pattern.pattern!r})"


def glob_to_regex(pattern: str) -> str:
    """Translate a glob pattern into anchored regex source.

    Braces are not balanced-checked here; an unbalanced pattern yields regex source that
    ``re.compile`` rejects.
    """
    out: list[str] = []
    curly_depth = 0
    i = 0
    n = len(pattern)

    while i < n:
        c = pattern[i]
        nxt = pattern[i + 1] if i + 1 < n else None

        if c == "\\":
            if nxt is None:
                out.append(re.escape(c))
            else:
                out.append(re.escape(nxt))
                i += 1
        elif c == "/":
            out.append("/" if nxt == "." else "/" + _NOT_HIDDEN)
        elif c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "{":
            out.append("(")
            curly_depth += 1
        elif c == "}":
            out.append(")")
            curly_depth -= 1
        elif c == "," and curly_depth > 0:
            out.append("|")
        elif c in _ESCAPED:
            out.append("\\" + c)
        else:
            out.append(c)
        i += 1

    # Only file names are matched, so the whole name must match
    prefix = "" if pattern.startswith(".") else _NOT_HIDDEN
    return "^" + prefix + "".join(out) + "$"


def compile_glob(pattern: str) -> Matcher:
    """Compile ``pattern`` into a Matcher. Raises ``re.error`` for malformed patterns."""
    return RegexMatcher(re.compile(glob_to_regex(pattern)))


def glob(
    pattern: str,
    root: StrPath | None = None,
    *,
    cwd: StrPath | None = None,
    host: HostFileSystem | None = None,
) -> list[Path]:
    """Direct children of a directory whose names match the last segment of ``pattern``.

    Without ``root`` the leading segments of ``pattern`` name the directory (``cwd`` when
    there are none). Matching is single level; there is no ``**``.
    """
    host = host or LOCAL
    if root is None:
        parts = split(pattern)
        directory = file(*parts[:-1], cwd=cwd) if len(parts) > 1 else file(".", cwd=cwd)
        pattern = parts[-1]
    else:
        directory = file(root, cwd=cwd)

    if not host.is_directory(directory):
        return []

    matcher = compile_glob(pattern)
    return [child for child in host.list_children(directory) if matcher.matches(child.name)]


def find_files_by(path: StrPath, predicate: Callable[[Path], bool], *, cwd: StrPath | None = None) -> list[Path]:
    """Every path in the tree under ``path`` (inclusive) satisfying ``predicate``."""
    root = file(path, cwd=cwd)
    found = [root] if predicate(root) else []
    if root.is_dir():
        for current, dirnames, filenames in root.walk():
            dirnames.sort()
            for name in sorted([*dirnames, *filenames]):
                candidate = current / name
                if predicate(candidate):
                    found.append(candidate)
    return found


def find_files(path: StrPath, pattern: str | re.Pattern[str], *, cwd: StrPath | None = None) -> list[Path]:
    """Every path in the tree under ``path`` whose name fully matches the regex ``pattern``."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    return find_files_by(path, lambda p: regex.fullmatch(p.name) is not None, cwd=cwd)
