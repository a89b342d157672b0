"""A base directory bound to the path-resolving operations.

``Workspace`` replaces a mutable "current directory": it is an immutable value passed down a
call tree, and ``chdir`` returns a new one.
"""

from __future__ import annotations

import contextlib
from pathlib import Path
from typing import TYPE_CHECKING

from .copy import copy_recursively
from .create import children, list_dir
from .delete import delete_recursively
from .glob import glob
from .paths import base_dir, file
from .predicates import exists, is_directory
from .shell import exec_command
from .walk import TreeWalk, iterate_dir, walk

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from .paths import StrPath
    from .types import CopyOptions, DeleteOptions, ExecResult, TreeEntry


class Workspace:
    """Resolve relative paths against ``base`` instead of the process working directory."""

    def __init__(self, base: StrPath | None = None) -> None:
        self.base = base_dir(base)

    def __repr__(self) -> str:
        return f"Workspace({str(self.base)!r})"

    def chdir(self, path: StrPath) -> Workspace:
        return Workspace(self.file(path))

    def file(self, path: StrPath, *paths: StrPath) -> Path:
        return file(path, *paths, cwd=self.base)

    def exists(self, path: StrPath, *, nofollow_links: bool = False) -> bool:
        return exists(self.file(path), nofollow_links=nofollow_links)

    def is_directory(self, path: StrPath, *, nofollow_links: bool = False) -> bool:
        return is_directory(self.file(path), nofollow_links=nofollow_links)

    def children(self, path: StrPath = ".") -> list[str]:
        return children(path, cwd=self.base)

    def list_dir(self, path: StrPath = ".") -> list[Path]:
        return list_dir(path, cwd=self.base)

    def glob(self, pattern: str) -> list[Path]:
        return glob(pattern, cwd=self.base)

    def iterate_dir(self, path: StrPath = ".") -> TreeWalk[TreeEntry]:
        return iterate_dir(path, cwd=self.base)

    def walk(
        self,
        func: Callable[[Path, frozenset[str], frozenset[str]], object],
        path: StrPath = ".",
    ) -> TreeWalk[object]:
        return walk(func, path, cwd=self.base)

    def copy_recursively(
        self,
        from_: StrPath,
        to: StrPath,
        options: CopyOptions | None = None,
        *,
        into_existing: bool = False,
    ) -> Path:
        return copy_recursively(from_, to, options, cwd=self.base, into_existing=into_existing)

    def delete_recursively(self, path: StrPath, options: DeleteOptions | None = None) -> None:
        delete_recursively(path, options, cwd=self.base)

    def exec(self, *args: str) -> ExecResult:
        return exec_command(*args, cwd=self.base)


@contextlib.contextmanager
def with_cwd(path: StrPath, workspace: Workspace | None = None) -> Iterator[Workspace]:
    """Scope a block to a workspace rooted at ``path`` (relative to ``workspace`` when given)."""
    if workspace is not None:
        yield workspace.chdir(path)
    else:
        yield Workspace(path)
