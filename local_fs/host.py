"""Host file-system abstraction: Protocol + local implementation."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .paths import StrPath
    from .types import CopyOptions


class HostFileSystem(Protocol):
    """Capabilities the walk/copy/delete engine needs from the file system."""

    def exists(self, path: StrPath, follow_links: bool = True) -> bool: ...

    def is_directory(self, path: StrPath, follow_links: bool = True) -> bool: ...

    def list_children(self, path: StrPath) -> list[Path]:
        """Immediate children of a directory."""
        ...

    def copy_entry(self, src: StrPath, dst: StrPath, options: CopyOptions) -> None:
        """Copy one entry; a directory is created empty, never copied with its contents."""
        ...

    def make_directories(self, path: StrPath) -> None:
        """Create a directory and any missing parents; an existing directory is left alone."""
        ...

    def delete_entry(self, path: StrPath) -> None:
        """Delete a file, link or empty directory."""
        ...

    def read_bytes(self, path: StrPath) -> bytes: ...

    def write_bytes(self, path: StrPath, data: bytes) -> None: ...


class LocalFileSystem:
    """The operating system's file system."""

    def exists(self, path: StrPath, follow_links: bool = True) -> bool:
        if follow_links:
            return os.path.exists(path)
        return os.path.lexists(path)

    def is_directory(self, path: StrPath, follow_links: bool = True) -> bool:
        if follow_links:
            return os.path.isdir(path)
        return os.path.isdir(path) and not os.path.islink(path)

    def list_children(self, path: StrPath) -> list[Path]:
        with os.scandir(path) as entries:
            return sorted(Path(entry.path) for entry in entries)

    def copy_entry(self, src: StrPath, dst: StrPath, options: CopyOptions) -> None:
        follow = not options.nofollow_links
        if self.exists(dst, follow_links=False):
            if not options.replace_existing:
                raise FileExistsError(f"Destination already exists: {dst}")
            if self.is_directory(src, follow_links=follow) and self.is_directory(dst, follow_links=False):
                # Replacing a directory with a directory keeps the existing one
                if options.copy_attributes:
                    shutil.copystat(src, dst, follow_symlinks=follow)
                return
            self.delete_entry(dst)

        if self.is_directory(src, follow_links=follow):
            os.mkdir(dst)
            if options.copy_attributes:
                shutil.copystat(src, dst, follow_symlinks=follow)
        elif options.copy_attributes:
            shutil.copy2(src, dst, follow_symlinks=follow)
        else:
            shutil.copyfile(src, dst, follow_symlinks=follow)

    def make_directories(self, path: StrPath) -> None:
        os.makedirs(path, exist_ok=True)

    def delete_entry(self, path: StrPath) -> None:
        if self.is_directory(path, follow_links=False):
            os.rmdir(path)
        else:
            os.unlink(path)

    def read_bytes(self, path: StrPath) -> bytes:
        return Path(path).read_bytes()

    def write_bytes(self, path: StrPath, data: bytes) -> None:
        Path(path).write_bytes(data)


LOCAL = LocalFileSystem()
