"""Copy, move and rename, including recursive tree copies."""

from __future__ import annotations

import os
import shutil
from typing import TYPE_CHECKING

from .constants import FILE_SEPARATOR
from .host import LOCAL
from .logger import logger
from .paths import file
from .types import CopyOptions
from .walk import recursive_files_and_directories, walk

if TYPE_CHECKING:
    from pathlib import Path

    from .host import HostFileSystem
    from .paths import StrPath


def copy(
    from_: StrPath,
    to: StrPath,
    options: CopyOptions | None = None,
    *,
    cwd: StrPath | None = None,
    host: HostFileSystem | None = None,
) -> StrPath:
    """Copy a single entry and return ``to``. A directory is copied without its contents."""
    (host or LOCAL).copy_entry(file(from_, cwd=cwd), file(to, cwd=cwd), options or CopyOptions())
    return to


def copy_with_parents(src: StrPath, dest: StrPath, *, cwd: StrPath | None = None) -> StrPath:
    """Copy ``src`` to ``dest``, creating the parent directories of ``dest`` first."""
    file(dest, cwd=cwd).parent.mkdir(parents=True, exist_ok=True)
    return copy(src, dest, cwd=cwd)


def copy_recursively(
    from_: StrPath,
    to: StrPath,
    options: CopyOptions | None = None,
    *,
    cwd: StrPath | None = None,
    host: HostFileSystem | None = None,
    into_existing: bool = False,
) -> Path:
    """Copy the tree rooted at ``from_`` to ``to`` and return the destination root.

    When ``to`` is an existing directory the tree lands in ``to/<basename of from_>``, unless
    ``to`` is a string ending in a separator or ``into_existing`` is set; then ``to`` itself is
    the destination root. A ``Path`` never keeps a trailing separator, so pass
    ``into_existing=True`` to copy onto an existing directory given as a ``Path``.

    Directories are created before any file is copied. The first failing entry aborts the
    copy; entries already copied are left in place.
    """
    options = options or CopyOptions()
    host = host or LOCAL

    source = file(from_, cwd=cwd)
    target = file(to, cwd=cwd)
    listing = recursive_files_and_directories(source, nofollow_links=options.nofollow_links, host=host)

    if host.is_directory(target) and not (into_existing or str(to).endswith(FILE_SEPARATOR)):
        target = target / source.name

    source_root = str(source)
    target_root = str(target)

    logger.debug(
        "Copying tree",
        source=source_root,
        dest=target_root,
        directories=len(listing.directories),
        files=len(listing.files),
    )

    for src in [*listing.directories, *listing.files]:
        dst = target_root + src[len(source_root) :]
        try:
            host.copy_entry(src, dst, options)
        except OSError as err:
            logger.warning("Recursive copy aborted", entry=src, dest=dst, error=str(err))
            raise

    return target


def copy_dir(
    from_: StrPath,
    to: StrPath,
    *,
    cwd: StrPath | None = None,
    host: HostFileSystem | None = None,
) -> Path:
    """Copy a directory tree while walking it, without buffering the full listing.

    If ``to`` already exists the tree is copied to ``to/<basename of from_>``. An existing
    file at a destination raises FileExistsError. Returns the destination root.
    """
    host = host or LOCAL
    source = file(from_, cwd=cwd)
    target = file(to, cwd=cwd)

    if not host.exists(source):
        raise FileNotFoundError(f"Source not found: {source}")
    if host.exists(target) and not host.is_directory(target):
        raise NotADirectoryError(f"{to} is a file")

    if host.exists(target):
        target = target / source.name
    host.make_directories(target.parent)
    if not host.exists(target):
        host.copy_entry(source, target, CopyOptions())

    def dest(path: Path) -> Path:
        return target / path.relative_to(source)

    for root, dirs, files in walk(lambda *entry: entry, source, host=host):
        for name in sorted(dirs):
            if not host.exists(dest(root / name)):
                host.copy_entry(root / name, dest(root / name), CopyOptions())
        for name in sorted(files):
            host.copy_entry(root / name, dest(root / name), CopyOptions())

    return target


def copy_dir_into(
    from_: StrPath,
    to: StrPath,
    *,
    cwd: StrPath | None = None,
    host: HostFileSystem | None = None,
) -> Path:
    """Merge the contents of ``from_`` into ``to``.

    A missing ``to`` is created by ``copy_dir``. Otherwise subdirectories are merged
    recursively and files are copied over whatever is already there.
    """
    host = host or LOCAL
    source = file(from_, cwd=cwd)
    target = file(to, cwd=cwd)

    if not host.exists(target):
        return copy_dir(source, target, host=host)

    for child in host.list_children(source):
        dest = target / child.name
        if host.is_directory(child):
            copy_dir_into(child, dest, host=host)
        else:
            host.copy_entry(child, dest, CopyOptions(replace_existing=True))

    return target


def copy_file_if_changed(source: StrPath, dest: StrPath) -> bool:
    """Copy with attributes unless ``dest`` exists with the same modification time.

    Returns True when a copy was made.
    """
    if os.path.exists(dest) and os.stat(source).st_mtime == os.stat(dest).st_mtime:
        return False
    LOCAL.copy_entry(source, dest, CopyOptions(replace_existing=True, copy_attributes=True))
    return True


def copy_files(source_dir: StrPath, dest_dir: StrPath) -> list[Path]:
    """Copy every direct child of ``source_dir`` into ``dest_dir`` when it changed.

    Returns the destinations that were written.
    """
    copied: list[Path] = []
    for source in LOCAL.list_children(source_dir):
        target = file(dest_dir) / source.name
        if copy_file_if_changed(source, target):
            copied.append(target)
    return copied


def safe_copy(from_: StrPath, to: StrPath, *, replace_existing: bool = False) -> bool | str:
    """Copy file contents without raising.

    Returns True when copied, False when ``to`` exists and ``replace_existing`` is off,
    or ``"exception: <message>"`` when the copy failed.
    """
    if not replace_existing and os.path.exists(to):
        return False
    try:
        shutil.copyfile(from_, to)
    except OSError as err:
        logger.warning("Safe copy failed", source=str(from_), dest=str(to), error=str(err))
        return f"exception: {err}"
    return True


def move(
    from_: StrPath,
    to: StrPath,
    *,
    replace_existing: bool = False,
    atomic_move: bool = False,
) -> StrPath:
    """Move or rename an entry and return ``to``.

    ``atomic_move`` uses a single rename, which fails across file systems.
    """
    if os.path.lexists(to):
        if not replace_existing:
            raise FileExistsError(f"Destination already exists: {to}")
        if not atomic_move:
            LOCAL.delete_entry(to)

    if atomic_move:
        os.replace(from_, to)
    else:
        shutil.move(os.fspath(from_), os.fspath(to))
    return to


def rename(old_path: StrPath, new_path: StrPath, *, cwd: StrPath | None = None) -> bool:
    """Rename a file; returns False instead of raising when the rename fails."""
    try:
        os.rename(file(old_path, cwd=cwd), file(new_path, cwd=cwd))
    except OSError as err:
        logger.debug("Rename failed", old=str(old_path), new=str(new_path), error=str(err))
        return False
    return True


def safe_rename(
    current_path: StrPath,
    new_name: str,
    *,
    replace_existing: bool = False,
    atomic_move: bool = False,
) -> Path:
    """Rename ``current_path`` to ``new_name`` within the same directory."""
    target = file(current_path).with_name(new_name)
    move(current_path, target, replace_existing=replace_existing, atomic_move=atomic_move)
    return target
