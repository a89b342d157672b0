"""Zip and tar helpers: packing, extraction and reading archive members."""

from __future__ import annotations

import bz2
import contextlib
import gzip
import importlib.resources
import lzma
import os
import shutil
import tarfile
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING

from .constants import ARCHIVE_SUFFIXES
from .host import LOCAL
from .logger import logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .host import HostFileSystem
    from .paths import StrPath

_STREAM_OPENERS = {
    ".gz": gzip.open,
    ".bz2": bz2.open,
    ".xz": lzma.open,
}


def _safe_member_path(dest_dir: Path, member: str) -> Path:
    """Resolve an archive member inside ``dest_dir``, rejecting escapes."""
    resolved = (dest_dir / member).resolve()
    root_resolved = dest_dir.resolve()
    if resolved != root_resolved and not str(resolved).startswith(str(root_resolved) + os.sep):
        raise ValueError(f"Archive entry escapes target directory: {member}")
    return resolved


def _member_name(components: tuple[str, ...]) -> str:
    return "/".join(c.strip("/") for c in components if c.strip("/"))


def zip_files(from_files: Iterable[StrPath], to_path: StrPath, *, host: HostFileSystem | None = None) -> Path:
    """Zip the given files, each stored under its base name."""
    host = host or LOCAL
    target = Path(to_path)
    with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for source in from_files:
            info = zipfile.ZipInfo.from_file(source, arcname=Path(source).name)
            zf.writestr(info, host.read_bytes(source), compress_type=zipfile.ZIP_DEFLATED)
    return target


def unzip_file(zip_file: StrPath, to_dir: StrPath) -> list[Path]:
    """Extract every file member of ``zip_file`` under ``to_dir``; returns the written paths."""
    dest_dir = Path(to_dir)
    written: list[Path] = []
    with zipfile.ZipFile(zip_file) as zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            out_file = _safe_member_path(dest_dir, info.filename)
            out_file.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as src, open(out_file, "wb") as dst:
                shutil.copyfileobj(src, dst)
            written.append(out_file)
    return written


def file_exists_in_archive(archive_path: StrPath, *path_components: str) -> bool:
    with zipfile.ZipFile(archive_path) as zf:
        return zipfile.Path(zf).joinpath(_member_name(path_components)).exists()


def read_file_from_archive(archive_path: StrPath, *path_components: str) -> str | None:
    """Text of one archive member, or None when it is missing or a directory."""
    with zipfile.ZipFile(archive_path) as zf:
        member = zipfile.Path(zf).joinpath(_member_name(path_components))
        if not member.exists() or not member.is_file():
            return None
        return member.read_text(encoding="utf-8")


def extract_dir_from_archive(archive_path: StrPath, from_dir: str, to: StrPath) -> list[Path]:
    """Copy the members under ``from_dir/`` out of a zip archive into ``to``, keeping their paths."""
    dest_dir = Path(to)
    prefix = from_dir.rstrip("/") + "/"
    written: list[Path] = []
    with zipfile.ZipFile(archive_path) as zf:
        for info in zf.infolist():
            if not info.filename.startswith(prefix):
                continue
            target = _safe_member_path(dest_dir, info.filename)
            if info.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as src, open(target, "wb") as dst:
                shutil.copyfileobj(src, dst)
            written.append(target)
    return written


def decompress_archive(archive: StrPath, dest_dir: StrPath) -> Path:
    """Unpack a tar (optionally compressed), zip, or single gz/bz2/xz stream into ``dest_dir``."""
    source = Path(archive)
    dest = Path(dest_dir)
    dest.mkdir(parents=True, exist_ok=True)

    if zipfile.is_zipfile(source):
        unzip_file(source, dest)
    elif tarfile.is_tarfile(source):
        with tarfile.open(source) as tf:
            tf.extractall(dest, filter="data")
    elif source.suffix in _STREAM_OPENERS:
        out_file = _safe_member_path(dest, source.stem)
        with _STREAM_OPENERS[source.suffix](source, "rb") as src, open(out_file, "wb") as dst:
            shutil.copyfileobj(src, dst)
    else:
        raise ValueError(f"Unsupported archive format: {source.name}")

    return dest


def extract_env_from_archive(
    archive_path: StrPath,
    path_component: str,
    dest_dir: StrPath,
    *,
    host: HostFileSystem | None = None,
) -> Path | None:
    """Extract one environment packed inside a zip archive into ``dest_dir``.

    A member ending in .gz/.bz2/.xz/.zip is copied out and decompressed; any other member is
    treated as a directory and copied out as is. Returns the environment directory, named after
    the member up to its first dot, or None when the member is absent.
    """
    host = host or LOCAL
    dest = Path(dest_dir)
    dest_path = _safe_member_path(dest, path_component)
    env_name = path_component.split(".")[0]
    env_path = dest / env_name
    is_archive = path_component.endswith(ARCHIVE_SUFFIXES)

    logger.info("Extract env archive", archive=str(archive_path), member=path_component, dest=str(env_path))

    with zipfile.ZipFile(archive_path) as zf:
        member = zipfile.Path(zf).joinpath(path_component)
        if not member.exists():
            logger.warning("Env archive member not found", archive=str(archive_path), member=path_component)
            return None

        logger.info(
            "If loading the environment fails, remove its directory and retry",
            env=env_name,
            path=str(env_path),
        )

        if is_archive:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            host.write_bytes(dest_path, zf.read(path_component))

    if is_archive:
        decompress_archive(dest_path, dest)
    else:
        extract_dir_from_archive(archive_path, path_component, dest)

    return env_path


@contextlib.contextmanager
def open_resource_path(package: str, resource: str) -> Iterator[Path]:
    """Yield a real file-system path to a package resource, cleaned up afterwards.

    Raises FileNotFoundError if the resource does not exist.
    """
    traversable = importlib.resources.files(package).joinpath(resource)
    if not traversable.is_file() and not traversable.is_dir():
        raise FileNotFoundError(f"Resource does not exist: {package}/{resource}")
    with importlib.resources.as_file(traversable) as path:
        yield path
