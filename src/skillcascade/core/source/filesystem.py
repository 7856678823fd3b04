"""Directory-backed skill sources.

Both sources read ``<root>/skills/<name>/SKILL.md``. ``LocalSkillSource`` is
rooted at a project checkout; ``CachedSkillSource`` is rooted at an external
repository that something else has already cloned into a cache directory.
Fetching that checkout is not this module's concern.
"""

from __future__ import annotations

from pathlib import Path

from skillcascade.constants import SKILL_FILENAME, SKILLS_DIR
from skillcascade.core.metadata import SkillMetadata, parse_skill_file


def _skill_file(skills_dir: Path, skill_name: str) -> Path:
    return skills_dir / skill_name / SKILL_FILENAME


def _list_skill_dirs(skills_dir: Path) -> set[str]:
    """Names of non-hidden subdirectories that contain a ``SKILL.md`` file."""
    if not skills_dir.is_dir():
        return set()
    return {
        entry.name
        for entry in skills_dir.iterdir()
        if not entry.name.startswith(".") and (entry / SKILL_FILENAME).is_file()
    }


class LocalSkillSource:
    """Skills living under ``<base_dir>/skills/`` in the working tree."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)
        self.skills_dir = self.base_dir / SKILLS_DIR

    def exists(self, skill_name: str) -> bool:
        return self.get_skill_path(skill_name).is_file()

    def get_skill_path(self, skill_name: str) -> Path:
        return _skill_file(self.skills_dir, skill_name)

    def list_skills(self) -> set[str]:
        return _list_skill_dirs(self.skills_dir)

    def get_skill_metadata(self, skill_name: str) -> SkillMetadata:
        return parse_skill_file(self.get_skill_path(skill_name))

    def __repr__(self) -> str:
        return f"LocalSkillSource({str(self.base_dir)!r})"


class CachedSkillSource:
    """Skills living under ``<cache_dir>/skills/`` of a cached external checkout."""

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = Path(cache_dir)
        self.skills_dir = self.cache_dir / SKILLS_DIR

    def exists(self, skill_name: str) -> bool:
        return self.get_skill_path(skill_name).is_file()

    def get_skill_path(self, skill_name: str) -> Path:
        return _skill_file(self.skills_dir, skill_name)

    def list_skills(self) -> set[str]:
        return _list_skill_dirs(self.skills_dir)

    def get_skill_metadata(self, skill_name: str) -> SkillMetadata:
        return parse_skill_file(self.get_skill_path(skill_name))

    def __repr__(self) -> str:
        return f"CachedSkillSource({str(self.cache_dir)!r})"
