"""Tests for FsPath and FsPathListWithError."""

from __future__ import annotations

import dataclasses

import pytest

from s3dirfs._path import FsPath, FsPathListWithError


class TestFsPathParse:
    def test_strips_scheme(self) -> None:
        assert FsPath.parse("s3:///a/b").path == "/a/b"

    def test_plain_path_unchanged(self) -> None:
        assert FsPath.parse("/a/b").path == "/a/b"

    def test_extra_fields(self) -> None:
        p = FsPath.parse("s3:///a/", is_dir=True)
        assert p.is_dir is True
        assert p.length == 0

    def test_defaults(self) -> None:
        p = FsPath("/x")
        assert p.is_dir is False
        assert p.length == 0
        assert p.modification_time == 0
        assert p.owner is None


class TestFsPathProperties:
    def test_uri(self) -> None:
        assert FsPath("/a/b").uri == "s3:///a/b"
        assert FsPath("a/b").uri == "s3:///a/b"

    def test_name(self) -> None:
        assert FsPath("/a/b.txt").name == "b.txt"
        assert FsPath("/a/b/").name == "b"

    def test_parent(self) -> None:
        parent = FsPath("/a/b/c.txt").parent
        assert parent is not None
        assert parent.path == "/a/b"
        assert parent.is_dir is True

    def test_parent_of_top_level_is_root(self) -> None:
        parent = FsPath("/a").parent
        assert parent is not None
        assert parent.path == "/"

    def test_parent_of_directory_entry(self) -> None:
        parent = FsPath("/a/b/").parent
        assert parent is not None
        assert parent.path == "/a"

    def test_root_has_no_parent(self) -> None:
        assert FsPath("/").parent is None

    def test_str(self) -> None:
        assert str(FsPath("/a/b")) == "/a/b"


class TestFsPathImmutability:
    def test_frozen(self) -> None:
        p = FsPath("/a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.length = 10  # type: ignore[misc]

    def test_replace_annotates_copy(self) -> None:
        p = FsPath("/a")
        annotated = dataclasses.replace(p, owner="alice")
        assert annotated.owner == "alice"
        assert p.owner is None

    def test_equality_by_value(self) -> None:
        assert FsPath("/a", length=3) == FsPath("/a", length=3)
        assert FsPath("/a", length=3) != FsPath("/a", length=4)


class TestFsPathListWithError:
    def test_defaults(self) -> None:
        result = FsPathListWithError()
        assert result.paths == []
        assert result.error == ""

    def test_iter_and_len(self) -> None:
        result = FsPathListWithError([FsPath("/a"), FsPath("/b")], "")
        assert len(result) == 2
        assert [p.path for p in result] == ["/a", "/b"]
