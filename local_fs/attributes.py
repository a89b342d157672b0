"""File attributes: permissions, ownership, timestamps and size."""

from __future__ import annotations

import grp
import os
import pwd
import re
import stat
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

from .logger import logger
from .types import FileAttributes, PosixPermission

if TYPE_CHECKING:
    from .paths import StrPath

PermissionsLike = str | int | set[PosixPermission] | frozenset[PosixPermission]

_DIGIT_TO_PERMISSIONS = {
    7: "rwx",
    6: "rw-",
    5: "r-x",
    4: "r--",
    3: "-wx",
    2: "-w-",
    1: "--x",
    0: "---",
}

# Permission bits in the order of an ls-style permissions string
_STRING_ORDER = [
    PosixPermission.OWNER_READ,
    PosixPermission.OWNER_WRITE,
    PosixPermission.OWNER_EXECUTE,
    PosixPermission.GROUP_READ,
    PosixPermission.GROUP_WRITE,
    PosixPermission.GROUP_EXECUTE,
    PosixPermission.OTHERS_READ,
    PosixPermission.OTHERS_WRITE,
    PosixPermission.OTHERS_EXECUTE,
]

_PERMISSION_STRING_RE = re.compile(r"^([r-][w-][x-]){3}$")
_OCTAL_MODE_RE = re.compile(r"^\d{3}$")
_SYMBOLIC_MODE_RE = re.compile(r"^(u?)([+-])([rwx]{1,3})$")


# -------------------- Permission conversions --------------------


def octal_to_string_permissions(permissions: int | str) -> str:
    """``755`` -> ``"rwxr-xr-x"``. Each decimal digit is one permission class."""
    try:
        return "".join(_DIGIT_TO_PERMISSIONS[int(d)] for d in str(permissions))
    except KeyError as err:
        raise ValueError(f"Invalid permissions: {permissions}") from err


def to_posix_permissions(permissions: PermissionsLike) -> frozenset[PosixPermission]:
    """Coerce a permissions string (``"rw-r--r--"``), an octal-looking int (``644``) or a set."""
    if isinstance(permissions, (set, frozenset)):
        return frozenset(permissions)
    if isinstance(permissions, str):
        if not _PERMISSION_STRING_RE.match(permissions):
            raise ValueError(f"Invalid permissions string: {permissions!r}")
        return frozenset(p for p, c in zip(_STRING_ORDER, permissions, strict=True) if c != "-")
    if isinstance(permissions, int) and not isinstance(permissions, bool):
        return to_posix_permissions(octal_to_string_permissions(permissions))
    raise ValueError(f"Invalid permissions: {permissions!r}")


def permissions_to_octal(permissions: PermissionsLike) -> int:
    """Set of permissions -> decimal-looking octal, e.g. ``755``."""
    perms = to_posix_permissions(permissions)
    digits = []
    for who in ("OWNER", "GROUP", "OTHERS"):
        digit = 0
        for name, value in (("READ", 4), ("WRITE", 2), ("EXECUTE", 1)):
            if PosixPermission[f"{who}_{name}"] in perms:
                digit += value
        digits.append(digit)
    return digits[0] * 100 + digits[1] * 10 + digits[2]


def permissions_to_string(permissions: PermissionsLike) -> str:
    return octal_to_string_permissions(f"{permissions_to_octal(permissions):03d}")


def get_posix_file_permissions(
    path: StrPath,
    *,
    nofollow_links: bool = False,
    format: Literal["octal", "string"] | None = None,
) -> frozenset[PosixPermission] | int | str:
    """Permissions of a file or directory, as a set, an octal-looking int or a string."""
    mode = os.stat(path, follow_symlinks=not nofollow_links).st_mode
    permissions = PosixPermission.from_mode(mode)
    if format == "octal":
        return permissions_to_octal(permissions)
    if format == "string":
        return permissions_to_string(permissions)
    return permissions


def set_posix_file_permissions(path: StrPath, permissions: PermissionsLike, *, nofollow_links: bool = False) -> None:
    mode = PosixPermission.to_mode(to_posix_permissions(permissions))
    if nofollow_links:
        os.chmod(path, mode, follow_symlinks=False)
    else:
        os.chmod(path, mode)


def _class_bits(permission: str, owner_only: bool) -> int:
    classes = ("OWNER",) if owner_only else ("OWNER", "GROUP", "OTHERS")
    name = {"r": "READ", "w": "WRITE", "x": "EXECUTE"}[permission]
    bits = 0
    for who in classes:
        bits |= PosixPermission[f"{who}_{name}"].value
    return bits


def chmod(mode: str, path: StrPath) -> StrPath:
    """Change file permissions and return ``path``.

    ``mode`` is either three octal digits (group and world digits must be equal) or a
    symbolic change: optional ``u`` (owner only), ``+`` or ``-``, then any of ``rwx``.

        chmod("+x", "/tmp/foo")    # executable for everyone
        chmod("u-wx", "/tmp/foo")  # owner loses write and execute
    """
    current = stat.S_IMODE(os.stat(path).st_mode)

    if _OCTAL_MODE_RE.match(mode):
        user, group, world = (int(c) for c in mode)
        if max(user, group, world) > 7:
            raise ValueError(f"Bad mode: {mode}")
        if group != world:
            raise ValueError("Bad mode. Group permissions must be equal to world permissions")
        new_mode = (current & ~0o777) | (user << 6) | (world << 3) | world
    else:
        match = _SYMBOLIC_MODE_RE.match(mode)
        if match is None:
            raise ValueError(f"Bad mode: {mode}")
        owner_only, op, perms = match.groups()
        bits = 0
        for perm in set(perms):
            bits |= _class_bits(perm, bool(owner_only))
        new_mode = current | bits if op == "+" else current & ~bits

    os.chmod(path, new_mode)
    return path


# -------------------- Users and groups --------------------


def require_user(user_name: str) -> int:
    """uid for ``user_name``; raises LookupError when there is no such user."""
    try:
        return pwd.getpwnam(user_name).pw_uid
    except KeyError as err:
        raise LookupError(f"User not found: {user_name}") from err


def lookup_user(user_name: str) -> int | None:
    try:
        return require_user(user_name)
    except LookupError:
        return None


def require_group(group_name: str) -> int:
    """gid for ``group_name``; raises LookupError when there is no such group."""
    try:
        return grp.getgrnam(group_name).gr_gid
    except KeyError as err:
        raise LookupError(f"Group not found: {group_name}") from err


def lookup_group(group_name: str) -> int | None:
    try:
        return require_group(group_name)
    except LookupError:
        return None


def set_owner(path: StrPath, user_name: str, *, nofollow_links: bool = False) -> None:
    os.chown(path, require_user(user_name), -1, follow_symlinks=not nofollow_links)


def set_group(path: StrPath, group_name: str, *, nofollow_links: bool = False) -> None:
    os.chown(path, -1, require_group(group_name), follow_symlinks=not nofollow_links)


def _user_name(uid: int) -> str | None:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return None


def _group_name(gid: int) -> str | None:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return None


# -------------------- Stat attributes --------------------


def _timestamp(value: float) -> datetime:
    return datetime.fromtimestamp(value, UTC)


def _to_epoch(value: datetime | float) -> float:
    if isinstance(value, datetime):
        return value.timestamp()
    return float(value)


def read_attributes(path: StrPath, *, nofollow_links: bool = False) -> FileAttributes:
    st = os.stat(path, follow_symlinks=not nofollow_links)
    # Creation time falls back to the modification time where the platform has no birth time
    birthtime = getattr(st, "st_birthtime", None)
    return FileAttributes(
        size=st.st_size,
        last_modified_time=_timestamp(st.st_mtime),
        last_access_time=_timestamp(st.st_atime),
        creation_time=_timestamp(birthtime if birthtime is not None else st.st_mtime),
        is_directory=stat.S_ISDIR(st.st_mode),
        is_regular_file=stat.S_ISREG(st.st_mode),
        is_symbolic_link=stat.S_ISLNK(st.st_mode),
        is_other=not (stat.S_ISDIR(st.st_mode) or stat.S_ISREG(st.st_mode) or stat.S_ISLNK(st.st_mode)),
        permissions=PosixPermission.from_mode(st.st_mode),
        inode=st.st_ino,
        device=st.st_dev,
        link_count=st.st_nlink,
        owner=_user_name(st.st_uid),
        group=_group_name(st.st_gid),
    )


def get_attribute(path: StrPath, attribute: str, *, nofollow_links: bool = False) -> object:
    if attribute not in FileAttributes.model_fields:
        raise ValueError(f"Unknown attribute: {attribute}")
    return getattr(read_attributes(path, nofollow_links=nofollow_links), attribute)


def set_attribute(path: StrPath, attribute: str, value: object, *, nofollow_links: bool = False) -> None:
    """Set one of the writable attributes: times, permissions, owner or group."""
    if attribute == "last_modified_time":
        set_last_modified_time(path, value, nofollow_links=nofollow_links)  # type: ignore[arg-type]
    elif attribute == "last_access_time":
        set_last_access_time(path, value, nofollow_links=nofollow_links)  # type: ignore[arg-type]
    elif attribute == "permissions":
        set_posix_file_permissions(path, value, nofollow_links=nofollow_links)  # type: ignore[arg-type]
    elif attribute == "owner":
        set_owner(path, str(value), nofollow_links=nofollow_links)
    elif attribute == "group":
        set_group(path, str(value), nofollow_links=nofollow_links)
    elif attribute in FileAttributes.model_fields:
        logger.warning("Attribute is read-only", attribute=attribute, path=str(path))
        raise ValueError(f"Attribute is read-only: {attribute}")
    else:
        raise ValueError(f"Unknown attribute: {attribute}")


def last_modified_time(path: StrPath, *, nofollow_links: bool = False) -> datetime:
    return _timestamp(os.stat(path, follow_symlinks=not nofollow_links).st_mtime)


def set_last_modified_time(path: StrPath, time: datetime | float, *, nofollow_links: bool = False) -> None:
    st = os.stat(path, follow_symlinks=not nofollow_links)
    os.utime(path, (st.st_atime, _to_epoch(time)), follow_symlinks=not nofollow_links)


def last_access_time(path: StrPath, *, nofollow_links: bool = False) -> datetime:
    return _timestamp(os.stat(path, follow_symlinks=not nofollow_links).st_atime)


def set_last_access_time(path: StrPath, time: datetime | float, *, nofollow_links: bool = False) -> None:
    st = os.stat(path, follow_symlinks=not nofollow_links)
    os.utime(path, (_to_epoch(time), st.st_mtime), follow_symlinks=not nofollow_links)


def creation_time(path: StrPath, *, nofollow_links: bool = False) -> datetime:
    return read_attributes(path, nofollow_links=nofollow_links).creation_time


def size(path: StrPath) -> int | None:
    """Size in bytes, or None when ``path`` does not exist."""
    try:
        return os.path.getsize(path)
    except FileNotFoundError:
        return None
