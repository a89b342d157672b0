"""Tests for path manipulation helpers."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from local_fs.paths import (
    append_to_path,
    as_path,
    base_name,
    expand_home,
    extension,
    file,
    filename,
    first_path_segment,
    home,
    join_paths,
    last_path_segment,
    module_path,
    normalize_path,
    normalized,
    parent,
    parent_path,
    parent_paths,
    parents,
    path_module,
    split,
    split_ext,
    split_path,
    stem,
    without_extension,
)


class TestBaseName:
    def test_plain(self) -> None:
        assert base_name("data/test.csv") == "test.csv"

    def test_missing_file_still_named(self) -> None:
        assert base_name("data/not-found.csv") == "not-found.csv"

    def test_trim_matching_extension(self) -> None:
        assert base_name("data/test.csv", ".csv") == "test"

    def test_trim_without_dot_keeps_dot(self) -> None:
        assert base_name("data/test.csv", "csv") == "test."

    def test_no_extension(self) -> None:
        assert base_name("data/test") == "test"

    def test_trim_any_extension(self) -> None:
        assert base_name("data/archive.tar.gz", True) == "archive.tar"

    def test_trim_leaves_dot_files(self) -> None:
        assert base_name(".bashrc", True) == ".bashrc"


class TestFile:
    def test_relative_anchored_at_cwd(self, tmp_path: Path) -> None:
        assert file("a", "b.txt", cwd=tmp_path) == tmp_path / "a" / "b.txt"

    def test_dot_is_cwd(self, tmp_path: Path) -> None:
        assert file(".", cwd=tmp_path) == tmp_path

    def test_absolute_ignores_cwd(self, tmp_path: Path) -> None:
        assert file("/etc/hosts", cwd=tmp_path) == Path("/etc/hosts")

    def test_defaults_to_process_cwd(self, fs_tmp: Path) -> None:
        assert file("x") == Path.cwd() / "x"

    def test_as_path_does_not_resolve(self) -> None:
        assert as_path("a", "b") == Path("a/b")

    def test_append_to_path(self) -> None:
        assert append_to_path("/tmp", "a", "b") == Path("/tmp/a/b")


class TestHome:
    def test_current_user(self) -> None:
        assert home() == Path.home()

    def test_other_user_is_sibling(self) -> None:
        assert home("alice") == Path.home().parent / "alice"

    def test_expand_home(self) -> None:
        assert expand_home("~/notes.txt") == str(Path.home() / "notes.txt")
        assert expand_home("~") == str(Path.home())
        assert expand_home("~bob/x") == str(Path.home().parent / "bob" / "x")
        assert expand_home("/abs/~") == "/abs/~"


class TestParents:
    def test_parent(self) -> None:
        assert parent("/a/b/c") == Path("/a/b")

    def test_root_has_no_parent(self) -> None:
        assert parent("/") is None

    def test_parents_nearest_first(self) -> None:
        assert list(parents("/a/b/c")) == [Path("/a/b"), Path("/a"), Path("/")]

    def test_parent_path_strings(self) -> None:
        assert parent_path("a/b/c") == "a/b"
        assert parent_path("a") is None
        assert list(parent_paths("a/b/c")) == ["a/b", "a"]

    def test_normalized_resolves_dots(self, tmp_path: Path) -> None:
        (tmp_path / "a").mkdir()
        assert normalized("a/../a/./", cwd=tmp_path) == (tmp_path / "a").resolve()


class TestSplitting:
    def test_split_absolute_keeps_root(self) -> None:
        assert split("/a/b") == ["/", "a", "b"]

    def test_split_root(self) -> None:
        assert split("/") == ["/"]

    def test_split_relative(self) -> None:
        assert split("a/b/") == ["a", "b"]

    def test_split_empty(self) -> None:
        assert split("") == [""]

    def test_segments(self) -> None:
        assert first_path_segment("/a/b") == "a"
        assert first_path_segment("/") is None
        assert split_path("a/b/c") == ["a", "b", "c"]
        assert split_path("") == [""]
        assert last_path_segment("a/b/c.txt") == "c.txt"

    def test_join_paths(self) -> None:
        assert join_paths("a", "b", "c") == os.path.join("a", "b", "c")
        assert join_paths("a", "/b") == "/b"

    def test_filename(self) -> None:
        assert filename("a/b.txt") == "b.txt"
        assert filename("a/b/") is None


class TestExtensions:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("a/b.txt", "a/b"),
            ("a/b.tar.gz", "a/b.tar"),
            ("a/.bashrc", "a/.bashrc"),
            ("a/b.", "a/b."),
            ("a.d/b", "a.d/b"),
            ("a/b/", "a/b/"),
        ],
    )
    def test_without_extension(self, path: str, expected: str) -> None:
        assert without_extension(path) == expected

    def test_split_ext(self) -> None:
        assert split_ext("a/b.txt") == ("b", ".txt")
        assert split_ext("a/b") == ("b", None)
        assert split_ext(".bashrc") == (".bashrc", None)

    def test_extension_and_stem(self) -> None:
        assert extension("x.tar.gz") == ".gz"
        assert extension("README") is None
        assert stem("x.tar.gz") == "x.tar"

    def test_normalize_path(self) -> None:
        assert normalize_path("a/./b/../c") == "a/c"
        assert normalize_path("") == ""


class TestModulePaths:
    def test_module_path(self, tmp_path: Path) -> None:
        assert module_path("my-pkg.sub.mod", cwd=tmp_path) == tmp_path / "my_pkg" / "sub" / "mod.py"

    def test_path_module(self) -> None:
        assert path_module("my_pkg/sub/mod.py") == "my_pkg.sub.mod"
