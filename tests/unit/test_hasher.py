"""Tests for content digests of files and directory trees."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from librarian.core import hasher as hasher_module
from librarian.core.hasher import (
    CHUNK_SIZE,
    Hasher,
    content_digest,
    directory_digest,
    file_digest,
)
from librarian.errors import HashingError, LibrarianIOError


def _sha1(*parts: bytes) -> str:
    return hashlib.sha1(b"".join(parts)).hexdigest()


class TestFileDigest:
    def test_matches_sha1_of_content(self, tmp_path: Path):
        path = tmp_path / "report.pdf"
        path.write_bytes(b"%PDF-1.4 hello")
        assert file_digest(path) == _sha1(b"%PDF-1.4 hello")

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert file_digest(path) == _sha1(b"")

    def test_multi_chunk_file(self, tmp_path: Path):
        data = bytes(range(256)) * (CHUNK_SIZE // 64 + 3)
        path = tmp_path / "big.bin"
        path.write_bytes(data)
        assert len(data) > CHUNK_SIZE
        assert file_digest(path) == _sha1(data)

    def test_name_does_not_matter(self, tmp_path: Path):
        (tmp_path / "a").write_bytes(b"same")
        (tmp_path / "b").write_bytes(b"same")
        assert file_digest(tmp_path / "a") == file_digest(tmp_path / "b")

    def test_missing_file_raises_hashing_error(self, tmp_path: Path):
        with pytest.raises(HashingError) as excinfo:
            file_digest(tmp_path / "gone")
        assert isinstance(excinfo.value, LibrarianIOError)
        assert isinstance(excinfo.value, OSError)
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)


class TestDirectoryDigest:
    def test_folds_in_relative_paths_and_contents(self, tmp_path: Path):
        root = tmp_path / "site"
        (root / "sub").mkdir(parents=True)
        (root / "a.txt").write_bytes(b"A")
        (root / "sub" / "b.txt").write_bytes(b"B")
        expected = _sha1(b"a.txt", b"A", b"sub", b"sub/b.txt", b"B")
        assert directory_digest(root) == expected

    def test_children_sort_before_longer_sibling_names(self, tmp_path: Path):
        root = tmp_path / "tree"
        (root / "a").mkdir(parents=True)
        (root / "a" / "b").write_bytes(b"x")
        (root / "a.txt").write_bytes(b"y")
        expected = _sha1(b"a", b"a/b", b"x", b"a.txt", b"y")
        assert directory_digest(root) == expected

    def test_identical_trees_in_different_places(self, tmp_path: Path):
        for name in ("one", "two"):
            root = tmp_path / name
            (root / "img").mkdir(parents=True)
            (root / "index.html").write_bytes(b"<html></html>")
            (root / "img" / "logo.png").write_bytes(b"\x89PNG")
        assert directory_digest(tmp_path / "one") == directory_digest(tmp_path / "two")

    def test_renaming_a_nested_file_changes_digest(self, tmp_path: Path):
        root = tmp_path / "site"
        root.mkdir()
        (root / "index.html").write_bytes(b"<html></html>")
        before = directory_digest(root)
        (root / "index.html").rename(root / "home.html")
        assert directory_digest(root) != before

    def test_editing_a_nested_file_changes_digest(self, tmp_path: Path):
        root = tmp_path / "site"
        (root / "css").mkdir(parents=True)
        (root / "css" / "style.css").write_bytes(b"body {}")
        before = directory_digest(root)
        (root / "css" / "style.css").write_bytes(b"body { margin: 0 }")
        assert directory_digest(root) != before

    def test_empty_subdirectory_counts(self, tmp_path: Path):
        root = tmp_path / "site"
        root.mkdir()
        (root / "index.html").write_bytes(b"x")
        before = directory_digest(root)
        (root / "empty").mkdir()
        assert directory_digest(root) != before

    def test_file_and_non_empty_directory_with_same_name_differ(self, tmp_path: Path):
        as_file = tmp_path / "f"
        as_file.mkdir()
        (as_file / "x").write_bytes(b"")
        as_dir = tmp_path / "d"
        (as_dir / "x").mkdir(parents=True)
        (as_dir / "x" / "y").write_bytes(b"")
        assert directory_digest(as_file) != directory_digest(as_dir)

    def test_dangling_symlink_contributes_only_its_path(self, tmp_path: Path):
        root = tmp_path / "site"
        root.mkdir()
        (root / "index.html").write_bytes(b"<html/>")
        (root / "link").symlink_to(root / "gone")
        assert directory_digest(root) == _sha1(b"index.html", b"<html/>", b"link")

    def test_entry_vanishing_mid_traversal_raises(self, tmp_path: Path, monkeypatch):
        root = tmp_path / "site"
        root.mkdir()
        (root / "a.txt").write_bytes(b"A")
        (root / "b.txt").write_bytes(b"B")
        original_walk = hasher_module._walk_sorted

        def walk_then_delete(path: Path) -> list[Path]:
            entries = original_walk(path)
            (root / "b.txt").unlink()
            return entries

        monkeypatch.setattr(hasher_module, "_walk_sorted", walk_then_delete)
        with pytest.raises(HashingError):
            directory_digest(root)


class TestContentDigest:
    def test_dispatches_on_file(self, tmp_path: Path):
        path = tmp_path / "note.txt"
        path.write_bytes(b"note")
        assert content_digest(path) == file_digest(path)

    def test_dispatches_on_directory(self, tmp_path: Path):
        root = tmp_path / "dir"
        root.mkdir()
        (root / "note.txt").write_bytes(b"note")
        assert content_digest(root) == directory_digest(root)

    def test_digest_is_forty_hex_chars(self, tmp_path: Path):
        path = tmp_path / "x"
        path.write_bytes(b"x")
        digest = content_digest(path)
        assert len(digest) == 40
        assert all(c in "0123456789abcdef" for c in digest)


class TestHasher:
    def test_counts_calls(self, tmp_path: Path):
        path = tmp_path / "x"
        path.write_bytes(b"x")
        hasher = Hasher()
        assert hasher.calls == 0
        assert hasher(path) == content_digest(path)
        hasher(path)
        assert hasher.calls == 2
