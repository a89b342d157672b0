"""local-fs domain types."""

from __future__ import annotations

import stat
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class PosixPermission(Enum):
    OWNER_READ = stat.S_IRUSR
    OWNER_WRITE = stat.S_IWUSR
    OWNER_EXECUTE = stat.S_IXUSR
    GROUP_READ = stat.S_IRGRP
    GROUP_WRITE = stat.S_IWGRP
    GROUP_EXECUTE = stat.S_IXGRP
    OTHERS_READ = stat.S_IROTH
    OTHERS_WRITE = stat.S_IWOTH
    OTHERS_EXECUTE = stat.S_IXOTH

    @classmethod
    def from_mode(cls, mode: int) -> frozenset[PosixPermission]:
        """Permissions whose bit is set in a st_mode value."""
        return frozenset(p for p in cls if mode & p.value)

    @classmethod
    def to_mode(cls, permissions: frozenset[PosixPermission] | set[PosixPermission]) -> int:
        mode = 0
        for p in permissions:
            mode |= p.value
        return mode


class CopyOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    replace_existing: bool = False
    copy_attributes: bool = False
    nofollow_links: bool = False


class DeleteOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    nofollow_links: bool = True


class TreeEntry(BaseModel):
    """One visited directory: its path plus the names of its immediate children."""

    model_config = ConfigDict(frozen=True)

    root: Path
    dirs: frozenset[str]
    files: frozenset[str]

    def as_tuple(self) -> tuple[Path, frozenset[str], frozenset[str]]:
        return self.root, self.dirs, self.files


class DirectoryListing(BaseModel):
    """Every directory and file under a root (root included), each sorted on the path string."""

    model_config = ConfigDict(frozen=True)

    directories: list[str]
    files: list[str]


class FileAttributes(BaseModel):
    model_config = ConfigDict(frozen=True)

    size: int
    last_modified_time: datetime
    last_access_time: datetime
    creation_time: datetime
    is_directory: bool
    is_regular_file: bool
    is_symbolic_link: bool
    is_other: bool
    permissions: frozenset[PosixPermission]
    inode: int
    device: int
    link_count: int
    owner: str | None = None
    group: str | None = None


class ExecResult(BaseModel):
    exit: int
    out: str
    err: str
