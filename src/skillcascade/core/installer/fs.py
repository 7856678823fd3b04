"""Filesystem primitives for the installer.

Every helper converts ``OSError`` into ``FileSystemError`` so a failed
mutation always surfaces as the one error type that triggers rollback.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from skillcascade.exceptions import FileSystemError


def path_present(path: Path) -> bool:
    """True if anything occupies ``path``, including a dangling symlink."""
    return os.path.lexists(path)


def ensure_dir(path: Path) -> None:
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileSystemError(f"Failed to create directory {path}: {exc}", path) from exc


def relative_link_target(target: Path, link_path: Path) -> str:
    """Path of ``target`` relative to the directory that will hold ``link_path``."""
    return os.path.relpath(target, Path(link_path).parent)


def create_symlink(target: str, link_path: Path) -> None:
    """Create ``link_path`` pointing at ``target``, creating parent directories."""
    link_path = Path(link_path)
    ensure_dir(link_path.parent)
    try:
        os.symlink(target, link_path, target_is_directory=True)
    except OSError as exc:
        raise FileSystemError(
            f"Failed to create symlink {link_path} -> {target}: {exc}", link_path
        ) from exc


def remove_path(path: Path) -> None:
    """Remove a symlink, file, or directory tree. Symlinks are never followed."""
    path = Path(path)
    try:
        if path.is_symlink() or not path.is_dir():
            path.unlink()
        else:
            shutil.rmtree(path)
    except OSError as exc:
        raise FileSystemError(f"Failed to remove {path}: {exc}", path) from exc


def copy_tree(source: Path, destination: Path) -> None:
    """Recursively copy ``source`` to ``destination``.

    A copy that fails partway is removed before the error is raised. An
    occupant that was already at ``destination`` is never touched.
    """
    ensure_dir(Path(destination).parent)
    preexisting = path_present(destination)
    try:
        shutil.copytree(source, destination)
    except OSError as exc:
        message = f"Failed to copy directory {source} to {destination}: {exc}"
        if not preexisting and path_present(destination):
            try:
                remove_path(destination)
            except FileSystemError as cleanup_exc:
                message += f" (partial copy left behind: {cleanup_exc})"
        raise FileSystemError(message, destination) from exc
