"""Path manipulation helpers.

Relative paths are resolved against an explicit ``cwd`` argument, falling back to the
process working directory. Nothing here mutates the process working directory; see
``local_fs.workspace`` for binding a base directory across several calls.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from .constants import FILE_SEPARATOR, UNIX_ROOT

if TYPE_CHECKING:
    from collections.abc import Iterator

StrPath = str | os.PathLike[str]


def base_dir(cwd: StrPath | None = None) -> Path:
    """The directory relative paths are resolved against."""
    if cwd is None:
        return Path.cwd()
    return Path(cwd).absolute()


def home(user: str | None = None) -> Path:
    """Home directory of the current user, or of ``user``.

    Another user's home is naively assumed to be a sibling of the current home directory.
    """
    homedir = Path.home()
    if not user:
        return homedir
    return homedir.parent / user


def expand_home(path: StrPath) -> str:
    """Expand a leading ``~`` or ``~user`` to the matching home directory."""
    path = str(path)
    if not path.startswith("~"):
        return path
    sep = path.find(FILE_SEPARATOR)
    if sep < 0:
        return str(home(path[1:]))
    return str(home(path[1:sep]) / path[sep + 1 :])


def file(path: StrPath, *paths: StrPath, cwd: StrPath | None = None) -> Path:
    """Build a Path from segments, anchoring relative results at ``cwd``.

    A lone ``"."`` stands for ``cwd`` itself.
    """
    first = base_dir(cwd) if str(path) == "." else Path(path)
    result = first.joinpath(*paths)
    if result.is_absolute():
        return result
    return base_dir(cwd) / result


def as_path(path: StrPath, *paths: StrPath) -> Path:
    """Build a Path from segments without resolving it."""
    return Path(path).joinpath(*paths)


def append_to_path(path: StrPath, *components: str) -> Path:
    result = Path(path)
    for component in components:
        result = result / component
    return result


def base_name(path: StrPath, trim_ext: str | bool | None = None, *, cwd: StrPath | None = None) -> str:
    """Final segment of ``path``.

    A string ``trim_ext`` is removed when the name ends with it; ``True`` trims any extension.
    """
    base = file(path, cwd=cwd).name
    if isinstance(trim_ext, str):
        return base[: -len(trim_ext)] if trim_ext and base.endswith(trim_ext) else base
    if trim_ext:
        dot = base.rfind(".")
        return base[:dot] if dot > 0 else base
    return base


def parent(path: StrPath, *, cwd: StrPath | None = None) -> Path | None:
    """Parent directory, or None for a filesystem root."""
    resolved = file(path, cwd=cwd)
    if resolved.parent == resolved:
        return None
    return resolved.parent


def parents(path: StrPath, *, cwd: StrPath | None = None) -> Iterator[Path]:
    """Lazily yield every ancestor of ``path``, nearest first."""
    current = parent(path, cwd=cwd)
    while current is not None:
        yield current
        current = parent(current)


def absolute(path: StrPath, *, cwd: StrPath | None = None) -> Path:
    return file(path, cwd=cwd)


def normalized(path: StrPath, *, cwd: StrPath | None = None) -> Path:
    """Canonical path: symbolic links resolved, ``.``/``..`` removed."""
    return file(path, cwd=cwd).resolve()


def split(path: StrPath) -> list[str]:
    """Split ``path`` into its components; an absolute unix path keeps ``/`` as the first one."""
    pathstr = str(path)
    if pathstr == UNIX_ROOT:
        return [UNIX_ROOT]
    if UNIX_ROOT and pathstr.startswith(UNIX_ROOT):
        return [UNIX_ROOT, *_split_segments(pathstr[1:])]
    return _split_segments(pathstr)


def _split_segments(pathstr: str) -> list[str]:
    parts = pathstr.split(FILE_SEPARATOR)
    # Trailing empty segments are dropped, a fully empty input keeps one
    while len(parts) > 1 and parts[-1] == "":
        parts.pop()
    return parts


def _segments(path: StrPath) -> list[str]:
    p = Path(path)
    return [part for part in p.parts if part != p.anchor]


def first_path_segment(path: StrPath) -> str | None:
    segments = _segments(path)
    return segments[0] if segments else None


def split_path(path: StrPath) -> list[str]:
    return _segments(path) or [""]


def last_path_segment(path: StrPath) -> str:
    return Path(path).name


def join_paths(path: StrPath, *paths: StrPath) -> str:
    """Join segments into a single path string (an absolute segment restarts the path)."""
    return str(Path(path).joinpath(*paths))


def filename(path: StrPath) -> str | None:
    """Last segment, or None when the path names a directory by ending in a separator."""
    if str(path).endswith(FILE_SEPARATOR):
        return None
    return last_path_segment(path)


def parent_path(path: StrPath) -> str | None:
    pathstr = os.path.normpath(str(path))
    result = os.path.dirname(pathstr)
    if not result or result == pathstr:
        return None
    return result


def parent_paths(path: StrPath) -> Iterator[str]:
    current = parent_path(path)
    while current is not None:
        yield current
        current = parent_path(current)


def without_extension(path: StrPath) -> str:
    """Drop the extension of the final segment, keeping dot-files and trailing dots intact."""
    pathstr = str(path)
    name = filename(pathstr)
    if name is None:
        return pathstr
    dot_index = name.rfind(".")
    if dot_index > 0 and dot_index != len(name) - 1:
        return pathstr[: len(pathstr) - (len(name) - dot_index)]
    return pathstr


def normalize_path(path: StrPath) -> str:
    pathstr = str(path)
    if not pathstr:
        return pathstr
    return os.path.normpath(pathstr)


def absolute_path(path: StrPath, *, cwd: StrPath | None = None) -> str:
    return str(file(path, cwd=cwd))


def canonical_path(path: StrPath, *, cwd: StrPath | None = None) -> str:
    return str(normalized(path, cwd=cwd))


def split_ext(path: StrPath) -> tuple[str, str | None]:
    """Return ``(name, extension)``; the extension keeps its dot and is None when absent."""
    base = Path(path).name
    i = base.rfind(".")
    if i > 0:
        return base[:i], base[i:]
    return base, None


def extension(path: StrPath) -> str | None:
    return split_ext(path)[1]


def stem(path: StrPath) -> str:
    return split_ext(path)[0]


def module_path(module: str, *, cwd: StrPath | None = None) -> Path:
    """Source file for a dotted module name, relative to ``cwd``."""
    return file(module.replace("-", "_").replace(".", FILE_SEPARATOR) + ".py", cwd=cwd)


def path_module(path: StrPath) -> str:
    """Dotted module name for a relative source path."""
    pathstr = str(path)
    if pathstr.endswith(".py"):
        pathstr = pathstr[:-3]
    return pathstr.replace(FILE_SEPARATOR, ".")
