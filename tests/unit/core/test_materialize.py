"""Tests for recursive directory copy."""

import os
from pathlib import Path

import pytest

from extgallery.core.errors import MaterializeError
from extgallery.core.materialize import copy_tree
from tests.test_utils.site_builders import snapshot_tree


def _populate(root: Path) -> dict[str, bytes]:
    files = {
        "a.txt": b"alpha",
        "nested/b.bin": bytes(range(256)),
        "nested/deeper/c.js": b"console.log('c');\n",
        "empty.txt": b"",
    }
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    return files


def test_copy_tree_copies_every_file(tmp_path: Path) -> None:
    source = tmp_path / "src"
    files = _populate(source)

    copied = copy_tree(source, tmp_path / "dst")

    assert copied == len(files)
    assert snapshot_tree(tmp_path / "dst") == files


def test_copy_tree_creates_missing_ancestors(tmp_path: Path) -> None:
    source = tmp_path / "src"
    _populate(source)
    destination = tmp_path / "out" / "deep" / "dst"

    copy_tree(source, destination)

    assert (destination / "nested" / "deeper" / "c.js").exists()


def test_copy_tree_empty_directories_are_created(tmp_path: Path) -> None:
    source = tmp_path / "src"
    (source / "only-dir").mkdir(parents=True)

    copied = copy_tree(source, tmp_path / "dst")

    assert copied == 0
    assert (tmp_path / "dst" / "only-dir").is_dir()


def test_copy_tree_overwrites_existing_files(tmp_path: Path) -> None:
    source = tmp_path / "src"
    _populate(source)
    destination = tmp_path / "dst"
    destination.mkdir()
    (destination / "a.txt").write_bytes(b"stale content that is longer")
    (destination / "extra.txt").write_bytes(b"left alone")

    copy_tree(source, destination)

    assert (destination / "a.txt").read_bytes() == b"alpha"
    assert (destination / "extra.txt").read_bytes() == b"left alone"


def test_copy_tree_is_idempotent(tmp_path: Path) -> None:
    source = tmp_path / "src"
    _populate(source)
    destination = tmp_path / "dst"

    copy_tree(source, destination)
    first = snapshot_tree(destination)
    copy_tree(source, destination)

    assert snapshot_tree(destination) == first


def test_copy_tree_missing_source_fails(tmp_path: Path) -> None:
    with pytest.raises(MaterializeError, match="Cannot read directory"):
        copy_tree(tmp_path / "missing", tmp_path / "dst")


def test_copy_tree_follows_file_symlinks(tmp_path: Path) -> None:
    source = tmp_path / "src"
    source.mkdir()
    real = tmp_path / "real.txt"
    real.write_bytes(b"linked")
    (source / "link.txt").symlink_to(real)

    copy_tree(source, tmp_path / "dst")

    copied = tmp_path / "dst" / "link.txt"
    assert not copied.is_symlink()
    assert copied.read_bytes() == b"linked"


def test_copy_tree_follows_directory_symlinks(tmp_path: Path) -> None:
    source = tmp_path / "src"
    source.mkdir()
    shared = tmp_path / "shared"
    shared.mkdir()
    (shared / "x.txt").write_bytes(b"x")
    (source / "shared").symlink_to(shared, target_is_directory=True)

    copy_tree(source, tmp_path / "dst")

    assert (tmp_path / "dst" / "shared" / "x.txt").read_bytes() == b"x"


def test_copy_tree_dangling_symlink_fails(tmp_path: Path) -> None:
    source = tmp_path / "src"
    source.mkdir()
    (source / "dangling").symlink_to(tmp_path / "gone")

    with pytest.raises(MaterializeError, match="Cannot stat"):
        copy_tree(source, tmp_path / "dst")


def test_copy_tree_symlink_cycle_fails(tmp_path: Path) -> None:
    source = tmp_path / "src"
    (source / "inner").mkdir(parents=True)
    (source / "inner" / "loop").symlink_to(source, target_is_directory=True)

    with pytest.raises(MaterializeError, match="cycle"):
        copy_tree(source, tmp_path / "dst")


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="requires os.mkfifo")
def test_copy_tree_special_file_fails(tmp_path: Path) -> None:
    source = tmp_path / "src"
    source.mkdir()
    os.mkfifo(source / "pipe")

    with pytest.raises(MaterializeError, match="Not a regular file or directory"):
        copy_tree(source, tmp_path / "dst")
