"""Shared fixtures for local_fs tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from local_fs.host import LocalFileSystem

if TYPE_CHECKING:
    from pathlib import Path

    from local_fs.types import CopyOptions


@pytest.fixture()
def fs_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temp directory and chdir into it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def sample_tree(fs_tmp: Path) -> Path:
    """Build src/{a.txt, b/c.txt, b/d/e.txt, .hidden} under the temp directory."""
    return create_tree(
        fs_tmp / "src",
        {
            "a.txt": "a",
            "b/c.txt": "c",
            "b/d/e.txt": "e",
            ".hidden": "h",
        },
    )


def create_tree(root: Path, files: dict[str, str]) -> Path:
    """Write ``files`` (relative path -> content) under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for rel_path, content in files.items():
        full_path = root / rel_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
    return root


def read_tree(root: Path) -> dict[str, str]:
    """Map every file under ``root`` to its content, keyed by relative posix path."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


class RecordingFileSystem(LocalFileSystem):
    """Local file system that records each copy_entry, make_directories and delete_entry call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def copy_entry(self, src, dst, options: CopyOptions) -> None:  # type: ignore[no-untyped-def]
        self.calls.append(("copy", str(src)))
        super().copy_entry(src, dst, options)

    def make_directories(self, path) -> None:  # type: ignore[no-untyped-def]
        self.calls.append(("mkdir", str(path)))
        super().make_directories(path)

    def delete_entry(self, path) -> None:  # type: ignore[no-untyped-def]
        self.calls.append(("delete", str(path)))
        super().delete_entry(path)
