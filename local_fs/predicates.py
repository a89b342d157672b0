"""Existence, type and access predicates."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from .paths import as_path, file, parents

if TYPE_CHECKING:
    from .paths import StrPath


def exists(path: StrPath, *, nofollow_links: bool = False) -> bool:
    """Return True if ``path`` exists (a dangling link counts only with ``nofollow_links``)."""
    if nofollow_links:
        return os.path.lexists(path)
    return os.path.exists(path)


def is_directory(path: StrPath, *, nofollow_links: bool = False) -> bool:
    p = as_path(path)
    if nofollow_links and p.is_symlink():
        return False
    return p.is_dir()


def is_regular_file(path: StrPath, *, nofollow_links: bool = False) -> bool:
    p = as_path(path)
    if nofollow_links and p.is_symlink():
        return False
    return p.is_file()


is_file = is_regular_file


def is_symlink(path: StrPath) -> bool:
    return as_path(path).is_symlink()


def is_executable(path: StrPath) -> bool:
    return os.access(path, os.X_OK)


def is_readable(path: StrPath) -> bool:
    return os.access(path, os.R_OK)


def is_writable(path: StrPath) -> bool:
    return os.access(path, os.W_OK)


def is_hidden(path: StrPath) -> bool:
    """Unix convention: the final segment starts with a dot."""
    return as_path(path).name.startswith(".")


def is_same_file(path1: StrPath, path2: StrPath) -> bool:
    """True if both paths locate the same file; raises FileNotFoundError if either is missing."""
    if as_path(path1) == as_path(path2):
        return True
    return os.path.samefile(path1, path2)


def is_child_of(parent_dir: StrPath, child: StrPath, *, cwd: StrPath | None = None) -> bool:
    """True if ``parent_dir`` is one of the ancestors of ``child``."""
    target = file(parent_dir, cwd=cwd)
    return any(p == target for p in parents(child, cwd=cwd))


def is_absolute_path(path: StrPath) -> bool:
    return Path(path).is_absolute()


def is_relative_path(path: StrPath) -> bool:
    return not is_absolute_path(path)
