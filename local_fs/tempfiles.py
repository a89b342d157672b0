"""Temporary files and directories."""

from __future__ import annotations

import atexit
import contextlib
import os
import random
import tempfile
import time
from pathlib import Path
from typing import TYPE_CHECKING

from .attributes import set_posix_file_permissions
from .config import load_config
from .create import append_to_file, create, mkdirs
from .delete import delete_dir, delete_recursively
from .logger import logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from .attributes import PermissionsLike
    from .paths import StrPath


def tmpdir() -> Path:
    """The temporary directory (``LOCAL_FS_TMPDIR`` or the platform default). Not created."""
    return load_config().tmpdir


def temp_name(prefix: str, suffix: str = "") -> str:
    """A file name like the ones ``temp_file`` and ``temp_dir`` create."""
    return f"{prefix}{int(time.time() * 1000)}-{random.randrange(0x100000000)}{suffix}"


def _temp_create(prefix: str, suffix: str, tries: int | None, create_fn: Callable[[Path], bool]) -> Path | None:
    attempts = tries if tries is not None else load_config().temp_tries
    for _ in range(attempts):
        candidate = tmpdir() / temp_name(prefix, suffix)
        if create_fn(candidate):
            return candidate
    logger.warning("Could not create temporary entry", prefix=prefix, suffix=suffix, tries=attempts)
    return None


def temp_file(prefix: str, suffix: str = "", tries: int | None = None) -> Path | None:
    """Create a temporary file; None if no free name was found after ``tries`` attempts."""
    return _temp_create(prefix, suffix, tries, create)


def temp_dir(prefix: str, suffix: str = "", tries: int | None = None) -> Path | None:
    """Create a temporary directory; None if no free name was found after ``tries`` attempts."""
    return _temp_create(prefix, suffix, tries, mkdirs)


def _remove_at_exit(path: Path, remove: Callable[[Path], None]) -> None:
    def _cleanup() -> None:
        with contextlib.suppress(FileNotFoundError):
            remove(path)

    atexit.register(_cleanup)


def ephemeral_file(prefix: str, suffix: str = "", tries: int | None = None) -> Path | None:
    """Like ``temp_file``, but removed when the interpreter exits."""
    created = temp_file(prefix, suffix, tries)
    if created is not None:
        _remove_at_exit(created, os.unlink)
    return created


def ephemeral_dir(prefix: str, suffix: str = "", tries: int | None = None) -> Path | None:
    """Like ``temp_dir``, but removed (with its contents) when the interpreter exits."""
    created = temp_dir(prefix, suffix, tries)
    if created is not None:
        _remove_at_exit(created, delete_dir)
    return created


def create_temp_directory(prefix: str, *, permissions: PermissionsLike | None = None) -> Path:
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=tmpdir()))
    if permissions is not None:
        set_posix_file_permissions(path, permissions)
    return path


def create_temp_file(
    prefix: str,
    suffix: str,
    *,
    permissions: PermissionsLike | None = None,
    content: str | bytes | None = None,
    directory: StrPath | None = None,
) -> Path:
    fd, name = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=directory or tmpdir())
    os.close(fd)
    path = Path(name)
    if permissions is not None:
        set_posix_file_permissions(path, permissions)
    if content:
        append_to_file(path, content)
    return path


@contextlib.contextmanager
def with_temp_directory() -> Iterator[Path]:
    """Yield the canonical path of a fresh temporary directory, deleted afterwards."""
    directory = create_temp_directory(load_config().temp_prefix).resolve()
    try:
        yield directory
    finally:
        delete_recursively(directory)


@contextlib.contextmanager
def with_temp_file() -> Iterator[tuple[Path, Path]]:
    """Yield ``(directory, file)``: a temporary file inside its own temporary directory."""
    with with_temp_directory() as directory:
        yield directory, create_temp_file("tmp", "tmp", directory=directory).resolve()
