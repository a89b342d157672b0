"""Single and recursive deletion."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .host import LOCAL
from .logger import logger
from .paths import file
from .types import DeleteOptions
from .walk import recursive_files_and_directories

if TYPE_CHECKING:
    from .host import HostFileSystem
    from .paths import StrPath


def delete(path: StrPath, *, cwd: StrPath | None = None, host: HostFileSystem | None = None) -> None:
    """Delete a file, link or empty directory. Raises FileNotFoundError if missing."""
    (host or LOCAL).delete_entry(file(path, cwd=cwd))


def delete_if_exists(path: StrPath, *, cwd: StrPath | None = None, host: HostFileSystem | None = None) -> bool:
    """Delete ``path`` when present; returns whether anything was deleted."""
    host = host or LOCAL
    target = file(path, cwd=cwd)
    if not host.exists(target, follow_links=False):
        return False
    host.delete_entry(target)
    return True


def delete_recursively(
    path: StrPath,
    options: DeleteOptions | None = None,
    *,
    cwd: StrPath | None = None,
    host: HostFileSystem | None = None,
) -> None:
    """Delete the tree rooted at ``path`` from a precomputed listing.

    All files go first, then directories deepest first. Symbolic links are removed, not
    followed, unless ``options.nofollow_links`` is turned off. The first failure aborts.
    """
    options = options or DeleteOptions()
    host = host or LOCAL
    listing = recursive_files_and_directories(path, nofollow_links=options.nofollow_links, cwd=cwd, host=host)

    logger.debug(
        "Deleting tree",
        path=str(path),
        directories=len(listing.directories),
        files=len(listing.files),
    )

    for entry in [*listing.files, *reversed(listing.directories)]:
        try:
            host.delete_entry(entry)
        except OSError as err:
            logger.warning("Recursive delete aborted", entry=entry, error=str(err))
            raise


def delete_dir(path: StrPath, *, cwd: StrPath | None = None, host: HostFileSystem | None = None) -> None:
    """Delete a directory tree by direct recursion, children before their parent.

    Symbolic links to directories are deleted as links.
    """
    host = host or LOCAL
    root = file(path, cwd=cwd)
    if host.is_directory(root, follow_links=False):
        for child in host.list_children(root):
            delete_dir(child, host=host)
    host.delete_entry(root)
