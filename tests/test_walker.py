"""Tests for the source tree walker."""

import os

import pytest

from storage_sync.sync.walker import walk_source_files


def _collect(root):
    visited = []
    walk_source_files(
        str(root),
        lambda path: visited.append(("file", os.path.relpath(path, root))),
        lambda path: visited.append(("dir", os.path.relpath(path, root))),
    )
    return visited


def test_preorder_lexical_traversal(tmp_path):
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "z.txt").write_text("z")
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "c.txt").write_text("c")

    assert _collect(tmp_path) == [
        ("dir", "."),
        ("file", "a.txt"),
        ("dir", "b"),
        ("file", os.path.join("b", "z.txt")),
        ("file", "c.txt"),
    ]


def test_single_file_root(tmp_path):
    target = tmp_path / "only.txt"
    target.write_text("1")
    files = []

    walk_source_files(str(target), files.append, lambda path: pytest.fail("no dirs expected"))

    assert files == [str(target)]


def test_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        walk_source_files(str(tmp_path / "missing"), lambda p: None, lambda p: None)


def test_callback_error_stops_walk(tmp_path):
    for name in ("a.txt", "b.txt", "c.txt"):
        (tmp_path / name).write_text(name)
    seen = []

    def on_file(path):
        seen.append(os.path.basename(path))
        if path.endswith("b.txt"):
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        walk_source_files(str(tmp_path), on_file, lambda p: None)

    assert seen == ["a.txt", "b.txt"]


def test_directory_callback_error_skips_contents(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "inner.txt").write_text("i")
    files = []

    def on_dir(path):
        if path.endswith("sub"):
            raise PermissionError("denied")

    with pytest.raises(PermissionError):
        walk_source_files(str(tmp_path), files.append, on_dir)

    assert files == []


def test_symlinked_directory_reported_as_file(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    (real / "f.txt").write_text("f")
    link_root = tmp_path / "root"
    link_root.mkdir()
    (link_root / "link").symlink_to(real, target_is_directory=True)

    visited = _collect(link_root)

    assert visited == [("dir", "."), ("file", "link")]
