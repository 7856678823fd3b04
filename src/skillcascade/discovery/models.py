"""Data models for the discovery module."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class InstalledSkill:
    """A skill entry found in a model's ``skills/`` directory.

    Attributes:
        name: Entry name (the skill name).
        path: Absolute path of the entry.
        is_symlink: True for cascade installs, False for copies.
        version: Version read from the entry's ``SKILL.md``, or None if it
            could not be read.
    """

    name: str
    path: Path
    is_symlink: bool
    version: str | None = None
