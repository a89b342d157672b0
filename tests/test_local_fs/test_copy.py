"""Tests for copying single entries and whole trees."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from local_fs.copy import (
    copy,
    copy_dir,
    copy_dir_into,
    copy_file_if_changed,
    copy_files,
    copy_recursively,
    copy_with_parents,
    move,
    rename,
    safe_copy,
    safe_rename,
)
from local_fs.host import LocalFileSystem
from local_fs.types import CopyOptions

from .conftest import RecordingFileSystem, create_tree, read_tree

if TYPE_CHECKING:
    from pathlib import Path


class FailingFileSystem(LocalFileSystem):
    """Raises PermissionError when copying an entry with the given name."""

    def __init__(self, fail_on: str) -> None:
        self.fail_on = fail_on

    def copy_entry(self, src, dst, options: CopyOptions) -> None:  # type: ignore[no-untyped-def]
        if os.path.basename(src) == self.fail_on:
            raise PermissionError(f"denied: {src}")
        super().copy_entry(src, dst, options)


class TestCopyRecursively:
    @pytest.fixture(autouse=True)
    def _setup(self, sample_tree: Path) -> None:
        self.src = sample_tree
        self.root = sample_tree.parent

    def test_copies_tree_to_new_destination(self) -> None:
        result = copy_recursively(self.src, self.root / "dst")
        assert result == self.root / "dst"
        assert read_tree(self.root / "dst") == read_tree(self.src)

    def test_existing_destination_receives_source_by_name(self) -> None:
        (self.root / "dst").mkdir()
        result = copy_recursively(self.src, self.root / "dst")
        assert result == self.root / "dst" / "src"
        assert read_tree(self.root / "dst" / "src") == read_tree(self.src)

    def test_relative_paths_use_cwd(self) -> None:
        copy_recursively("src", "dst", cwd=self.root)
        assert read_tree(self.root / "dst") == read_tree(self.src)

    def test_single_file(self) -> None:
        result = copy_recursively(self.src / "a.txt", self.root / "copy.txt")
        assert result == self.root / "copy.txt"
        assert (self.root / "copy.txt").read_text() == "a"

    def test_missing_source_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            copy_recursively(self.root / "missing", self.root / "dst")

    def test_rerun_without_replace_raises(self) -> None:
        dest = str(self.root / "dst") + os.sep
        copy_recursively(self.src, dest)
        (self.src / "a.txt").write_text("changed")
        before = read_tree(self.root / "dst")

        host = RecordingFileSystem()
        with pytest.raises(FileExistsError):
            copy_recursively(self.src, dest, host=host)

        # The destination root itself is the first entry refused
        assert host.calls == [("copy", str(self.src))]
        assert read_tree(self.root / "dst") == before
        assert before["a.txt"] == "a"

    def test_rerun_with_replace_updates_files(self) -> None:
        dest = str(self.root / "dst") + os.sep
        copy_recursively(self.src, dest)
        (self.src / "a.txt").write_text("changed")

        copy_recursively(self.src, dest, CopyOptions(replace_existing=True))
        assert read_tree(self.root / "dst") == read_tree(self.src)
        assert (self.root / "dst" / "a.txt").read_text() == "changed"

    def test_path_destination_into_existing(self) -> None:
        dst = self.root / "dst"
        copy_recursively(self.src, dst)
        (self.src / "a.txt").write_text("changed")

        result = copy_recursively(self.src, dst, CopyOptions(replace_existing=True), into_existing=True)
        assert result == dst
        assert not (dst / "src").exists()
        assert read_tree(dst) == read_tree(self.src)

    def test_path_destination_without_flag_nests_source(self) -> None:
        dst = self.root / "dst"
        dst.mkdir()
        assert copy_recursively(self.src, dst) == dst / "src"

    def test_directories_copied_before_files(self) -> None:
        host = RecordingFileSystem()
        copy_recursively(self.src, self.root / "dst", host=host)

        copied = [path for _, path in host.calls]
        dirs = [i for i, path in enumerate(copied) if os.path.isdir(path)]
        files = [i for i, path in enumerate(copied) if not os.path.isdir(path)]
        assert len(copied) == 7
        assert max(dirs) < min(files)

    def test_copy_attributes_keeps_modification_time(self) -> None:
        os.utime(self.src / "a.txt", (1_000_000, 1_000_000))
        copy_recursively(self.src, self.root / "dst", CopyOptions(copy_attributes=True))
        assert os.stat(self.root / "dst" / "a.txt").st_mtime == 1_000_000

    def test_failure_aborts_and_keeps_partial_copy(self) -> None:
        with pytest.raises(PermissionError):
            copy_recursively(self.src, self.root / "dst", host=FailingFileSystem("c.txt"))

        dst = self.root / "dst"
        assert (dst / "b" / "d").is_dir()
        assert (dst / "a.txt").exists()
        assert not (dst / "b" / "c.txt").exists()
        assert not (dst / "b" / "d" / "e.txt").exists()

    def test_nofollow_links_copies_link_as_link(self) -> None:
        os.symlink(self.src / "b", self.src / "link")
        copy_recursively(self.src, self.root / "dst", CopyOptions(nofollow_links=True))
        assert (self.root / "dst" / "link").is_symlink()


class TestCopyDir:
    @pytest.fixture(autouse=True)
    def _setup(self, sample_tree: Path) -> None:
        self.src = sample_tree
        self.root = sample_tree.parent

    def test_copies_to_new_destination(self) -> None:
        result = copy_dir(self.src, self.root / "dst")
        assert result == self.root / "dst"
        assert read_tree(result) == read_tree(self.src)

    def test_existing_destination_receives_source_by_name(self) -> None:
        (self.root / "dst").mkdir()
        result = copy_dir(self.src, self.root / "dst")
        assert result == self.root / "dst" / "src"
        assert read_tree(result) == read_tree(self.src)

    def test_destination_root_created_through_host(self) -> None:
        host = RecordingFileSystem()
        result = copy_dir(self.src, self.root / "nested" / "dst", host=host)

        assert host.calls[:2] == [("mkdir", str(result.parent)), ("copy", str(self.src))]
        assert sum(1 for kind, _ in host.calls if kind == "copy") == 7
        assert read_tree(result) == read_tree(self.src)

    def test_missing_source_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            copy_dir(self.root / "missing", self.root / "dst")

    def test_file_destination_raises(self) -> None:
        (self.root / "dst").write_text("x")
        with pytest.raises(NotADirectoryError):
            copy_dir(self.src, self.root / "dst")


class TestCopyDirInto:
    @pytest.fixture(autouse=True)
    def _setup(self, sample_tree: Path) -> None:
        self.src = sample_tree
        self.root = sample_tree.parent

    def test_merges_into_existing_directory(self) -> None:
        dst = create_tree(self.root / "dst", {"a.txt": "old", "keep.txt": "k", "b/other.txt": "o"})
        copy_dir_into(self.src, dst)

        tree = read_tree(dst)
        assert tree["a.txt"] == "a"
        assert tree["keep.txt"] == "k"
        assert tree["b/other.txt"] == "o"
        assert tree["b/d/e.txt"] == "e"

    def test_missing_destination_is_created(self) -> None:
        copy_dir_into(self.src, self.root / "dst")
        assert read_tree(self.root / "dst") == read_tree(self.src)


class TestSingleCopies:
    @pytest.fixture(autouse=True)
    def _setup(self, fs_tmp: Path) -> None:
        self.tmp_dir = fs_tmp
        (fs_tmp / "a.txt").write_text("a")

    def test_copy_returns_destination(self) -> None:
        assert copy("a.txt", "b.txt") == "b.txt"
        assert (self.tmp_dir / "b.txt").read_text() == "a"

    def test_copy_existing_destination_raises(self) -> None:
        (self.tmp_dir / "b.txt").write_text("b")
        with pytest.raises(FileExistsError):
            copy("a.txt", "b.txt")

    def test_copy_with_parents(self) -> None:
        copy_with_parents("a.txt", "x/y/a.txt")
        assert (self.tmp_dir / "x" / "y" / "a.txt").read_text() == "a"

    def test_copy_file_if_changed(self) -> None:
        assert copy_file_if_changed("a.txt", "b.txt") is True
        assert copy_file_if_changed("a.txt", "b.txt") is False

        os.utime(self.tmp_dir / "a.txt", (2_000_000, 2_000_000))
        assert copy_file_if_changed("a.txt", "b.txt") is True

    def test_copy_files_reports_written(self) -> None:
        create_tree(self.tmp_dir / "in", {"one.txt": "1", "two.txt": "2"})
        (self.tmp_dir / "out").mkdir()

        written = copy_files("in", "out")
        assert [p.name for p in written] == ["one.txt", "two.txt"]
        assert copy_files("in", "out") == []

    def test_safe_copy(self) -> None:
        assert safe_copy("a.txt", "b.txt") is True
        assert safe_copy("a.txt", "b.txt") is False
        assert safe_copy("a.txt", "b.txt", replace_existing=True) is True

    def test_safe_copy_reports_failure(self) -> None:
        result = safe_copy("missing.txt", "b.txt")
        assert isinstance(result, str)
        assert result.startswith("exception:")


class TestMoveAndRename:
    @pytest.fixture(autouse=True)
    def _setup(self, fs_tmp: Path) -> None:
        self.tmp_dir = fs_tmp
        (fs_tmp / "a.txt").write_text("a")
        (fs_tmp / "b.txt").write_text("b")

    def test_move(self) -> None:
        move("a.txt", "c.txt")
        assert not (self.tmp_dir / "a.txt").exists()
        assert (self.tmp_dir / "c.txt").read_text() == "a"

    def test_move_onto_existing_raises(self) -> None:
        with pytest.raises(FileExistsError):
            move("a.txt", "b.txt")

    @pytest.mark.parametrize("atomic_move", [False, True])
    def test_move_replace_existing(self, atomic_move: bool) -> None:
        move("a.txt", "b.txt", replace_existing=True, atomic_move=atomic_move)
        assert (self.tmp_dir / "b.txt").read_text() == "a"
        assert not (self.tmp_dir / "a.txt").exists()

    def test_rename(self) -> None:
        assert rename("a.txt", "c.txt") is True
        assert (self.tmp_dir / "c.txt").exists()

    def test_rename_missing_returns_false(self) -> None:
        assert rename("missing.txt", "c.txt") is False

    def test_safe_rename_keeps_directory(self) -> None:
        (self.tmp_dir / "sub").mkdir()
        (self.tmp_dir / "sub" / "old.txt").write_text("o")

        result = safe_rename(self.tmp_dir / "sub" / "old.txt", "new.txt")
        assert result == self.tmp_dir / "sub" / "new.txt"
        assert result.read_text() == "o"
