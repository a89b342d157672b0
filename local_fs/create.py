"""Directory and file creation, links and directory listings."""

from __future__ import annotations

import os
import time as _time
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from .attributes import to_posix_permissions
from .paths import file
from .types import PosixPermission

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .attributes import PermissionsLike
    from .paths import StrPath


def _mode(permissions: PermissionsLike | None, default: int) -> int:
    if permissions is None:
        return default
    return PosixPermission.to_mode(to_posix_permissions(permissions))


def mkdir(path: StrPath, *, cwd: StrPath | None = None) -> bool:
    """Create one directory. False if it exists or its parent is missing."""
    try:
        file(path, cwd=cwd).mkdir()
    except (FileExistsError, FileNotFoundError):
        return False
    return True


def mkdirs(path: StrPath, *, cwd: StrPath | None = None) -> bool:
    """Create a directory and its missing parents. False if it already exists."""
    try:
        file(path, cwd=cwd).mkdir(parents=True)
    except FileExistsError:
        return False
    return True


def create_directory(path: StrPath, *, permissions: PermissionsLike | None = None) -> Path:
    """Create one directory, failing if it exists.

    Permissions passed here are filtered by the process umask; set them again afterwards
    if the exact bits matter.
    """
    target = Path(path)
    os.mkdir(target, _mode(permissions, 0o777))
    return target


def create_directories(path: StrPath, *, permissions: PermissionsLike | None = None) -> Path:
    """Create a directory with its parents; an existing directory is fine.

    Permissions are filtered by the process umask, as with ``create_directory``.
    """
    target = Path(path)
    target.mkdir(mode=_mode(permissions, 0o777), parents=True, exist_ok=True)
    return target


def create_dir_if_not_exists(path: StrPath) -> bool:
    """Create ``path`` (with parents) unless it exists. Returns whether it was created."""
    if os.path.exists(path):
        return False
    create_directories(path)
    return True


def create(path: StrPath, *, cwd: StrPath | None = None) -> bool:
    """Atomically create an empty file. False if something already exists at ``path``."""
    try:
        fd = os.open(file(path, cwd=cwd), os.O_WRONLY | os.O_CREAT | os.O_EXCL)
    except FileExistsError:
        return False
    os.close(fd)
    return True


def touch(path: StrPath, time: datetime | float | None = None, *, cwd: StrPath | None = None) -> Path:
    """Create ``path`` if missing, otherwise set its modification time (default now)."""
    target = file(path, cwd=cwd)
    if not create(target):
        if time is None:
            mtime = _time.time()
        elif isinstance(time, datetime):
            mtime = time.timestamp()
        else:
            mtime = float(time)
        os.utime(target, (os.stat(target).st_atime, mtime))
    return target


def append_to_file(path: StrPath, content: str | bytes) -> None:
    if isinstance(content, bytes):
        with open(path, "ab") as f:
            f.write(content)
    else:
        with open(path, "a", encoding="utf-8") as f:
            f.write(content)


def create_file(
    path: StrPath,
    *,
    permissions: PermissionsLike | None = None,
    content: str | bytes | None = None,
) -> Path:
    """Create a new file, failing if it exists, optionally writing ``content``.

    Permissions are filtered by the process umask, as with ``create_directory``.
    """
    target = Path(path)
    fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_EXCL, _mode(permissions, 0o666))
    os.close(fd)
    if content:
        append_to_file(target, content)
    return target


def create_link(link_path: StrPath, target_path: StrPath) -> Path:
    """Create a hard link at ``link_path`` pointing to ``target_path``."""
    os.link(target_path, link_path)
    return Path(link_path)


def create_symlink(link_path: StrPath, target_path: StrPath) -> Path:
    os.symlink(target_path, link_path)
    return Path(link_path)


def children(path: StrPath = ".", *, cwd: StrPath | None = None) -> list[str]:
    """Names of the entries in a directory, sorted."""
    return sorted(os.listdir(file(path, cwd=cwd)))


def list_dir(path: StrPath, *, cwd: StrPath | None = None) -> list[Path]:
    """Paths of the entries in a directory, sorted."""
    directory = file(path, cwd=cwd)
    return [directory / name for name in sorted(os.listdir(directory))]


def files_seq(path: StrPath) -> Iterator[Path]:
    """Lazily yield the entries of a directory; the handle is closed when iteration ends."""
    with os.scandir(path) as entries:
        for entry in entries:
            yield Path(entry.path)
