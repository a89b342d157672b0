"""Depth-first directory tree walking and full-subtree listings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from .host import LOCAL
from .paths import file
from .types import DirectoryListing, TreeEntry

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from .host import HostFileSystem
    from .paths import StrPath

T = TypeVar("T")


class TreeWalk(Generic[T]):
    """Lazy, re-iterable depth-first pre-order walk over the directories under ``root``.

    Each iteration re-reads the file system. Symbolic links to directories are followed,
    so a link cycle recurses until Python's recursion limit is hit.
    """

    def __init__(
        self,
        root: Path,
        func: Callable[[Path, frozenset[str], frozenset[str]], T],
        host: HostFileSystem,
    ) -> None:
        self.root = root
        self._func = func
        self._host = host

    def __iter__(self) -> Iterator[T]:
        if not self._host.is_directory(self.root):
            return
        for entry in self._visit(self.root):
            yield self._func(*entry.as_tuple())

    def _visit(self, directory: Path) -> Iterator[TreeEntry]:
        subdirs: list[Path] = []
        files: list[Path] = []
        for child in self._host.list_children(directory):
            if self._host.is_directory(child):
                subdirs.append(child)
            else:
                files.append(child)

        yield TreeEntry(
            root=directory,
            dirs=frozenset(d.name for d in subdirs),
            files=frozenset(f.name for f in files),
        )
        for subdir in sorted(subdirs):
            yield from self._visit(subdir)


def _entry(root: Path, dirs: frozenset[str], files: frozenset[str]) -> TreeEntry:
    return TreeEntry(root=root, dirs=dirs, files=files)


def iterate_dir(
    path: StrPath,
    *,
    cwd: StrPath | None = None,
    host: HostFileSystem | None = None,
) -> TreeWalk[TreeEntry]:
    """Every directory under ``path`` (inclusive) with its immediate subdirectory and file names."""
    return TreeWalk(file(path, cwd=cwd), _entry, host or LOCAL)


def walk(
    func: Callable[[Path, frozenset[str], frozenset[str]], T],
    path: StrPath,
    *,
    cwd: StrPath | None = None,
    host: HostFileSystem | None = None,
) -> TreeWalk[T]:
    """Lazily walk depth-first from ``path``, calling ``func(root, dirs, files)`` per directory."""
    return TreeWalk(file(path, cwd=cwd), func, host or LOCAL)


def recursive_files_and_directories(
    path: StrPath,
    *,
    nofollow_links: bool = False,
    cwd: StrPath | None = None,
    host: HostFileSystem | None = None,
) -> DirectoryListing:
    """List the whole subtree under ``path``, root included.

    Entries are classified with ``is_directory`` (links followed unless ``nofollow_links``);
    only entries classified as directories are descended into.
    """
    host = host or LOCAL
    directories: list[str] = []
    files: list[str] = []

    pending = [file(path, cwd=cwd)]
    while pending:
        current = pending.pop()
        if host.is_directory(current, follow_links=not nofollow_links):
            directories.append(str(current))
            pending.extend(host.list_children(current))
        else:
            files.append(str(current))

    return DirectoryListing(directories=sorted(directories), files=sorted(files))
