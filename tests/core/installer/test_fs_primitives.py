"""Tests for the installer's filesystem primitives."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from skillcascade.core.installer.fs import (
    copy_tree,
    create_symlink,
    path_present,
    relative_link_target,
    remove_path,
)
from skillcascade.exceptions import FileSystemError


class TestFsPrimitives:
    """OSErrors surface as FileSystemError; symlinks are never followed."""

    def test_relative_link_target(self, tmp_path: Path) -> None:
        target = tmp_path / "skills" / "react"
        link = tmp_path / ".agents" / "skills" / "react"
        assert relative_link_target(target, link) == os.path.join("..", "..", "skills", "react")

    def test_path_present_sees_dangling_links(self, tmp_path: Path) -> None:
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "nowhere")
        assert path_present(link) is True
        assert path_present(tmp_path / "absent") is False

    def test_create_symlink_makes_parents(self, tmp_path: Path) -> None:
        (tmp_path / "src").mkdir()
        link = tmp_path / "a" / "b" / "link"
        create_symlink("../../src", link)
        assert link.resolve() == (tmp_path / "src").resolve()

    def test_create_symlink_over_existing_raises(self, tmp_path: Path) -> None:
        link = tmp_path / "link"
        link.mkdir()
        with pytest.raises(FileSystemError) as exc_info:
            create_symlink("elsewhere", link)
        assert exc_info.value.path == link

    def test_remove_symlink_keeps_target(self, tmp_path: Path) -> None:
        real = tmp_path / "real"
        real.mkdir()
        (real / "file.txt").write_text("keep")
        link = tmp_path / "link"
        link.symlink_to(real, target_is_directory=True)

        remove_path(link)

        assert not os.path.lexists(link)
        assert (real / "file.txt").read_text() == "keep"

    def test_remove_tree(self, tmp_path: Path) -> None:
        tree = tmp_path / "tree"
        (tree / "nested").mkdir(parents=True)
        (tree / "nested" / "f").write_text("x")
        remove_path(tree)
        assert not tree.exists()

    def test_remove_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileSystemError, match="Failed to remove"):
            remove_path(tmp_path / "missing")

    def test_copy_tree(self, tmp_path: Path) -> None:
        source = tmp_path / "source"
        source.mkdir()
        (source / "SKILL.md").write_text("content")
        copy_tree(source, tmp_path / "out" / "copy")
        assert (tmp_path / "out" / "copy" / "SKILL.md").read_text() == "content"

    def test_copy_tree_missing_source(self, tmp_path: Path) -> None:
        with pytest.raises(FileSystemError, match="Failed to copy"):
            copy_tree(tmp_path / "missing", tmp_path / "copy")

    def test_failed_copy_leaves_no_partial_tree(self, tmp_path: Path) -> None:
        source = tmp_path / "source"
        source.mkdir()
        (source / "SKILL.md").write_text("content")
        os.symlink("does-not-exist", source / "dangling")
        destination = tmp_path / "out" / "copy"

        with pytest.raises(FileSystemError, match="Failed to copy"):
            copy_tree(source, destination)

        assert not os.path.lexists(destination)

    def test_failed_copy_keeps_existing_destination(self, tmp_path: Path) -> None:
        source = tmp_path / "source"
        source.mkdir()
        destination = tmp_path / "copy"
        destination.mkdir()
        (destination / "keep.txt").write_text("mine")

        with pytest.raises(FileSystemError):
            copy_tree(source, destination)

        assert (destination / "keep.txt").read_text() == "mine"
