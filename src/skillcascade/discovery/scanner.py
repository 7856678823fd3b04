"""Filesystem scanner for installed skills.

There is no install registry: what is installed is whatever the model
``skills/`` directories contain right now.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from skillcascade.constants import SKILL_FILENAME, SKILLS_DIR
from skillcascade.core.metadata import parse_skill_file
from skillcascade.discovery.models import InstalledSkill
from skillcascade.exceptions import ParseError

logger = logging.getLogger(__name__)


def _try_get_version(skill_path: Path) -> str | None:
    skill_file = skill_path / SKILL_FILENAME
    if not skill_file.is_file():
        return None
    try:
        return parse_skill_file(skill_file).version
    except ParseError:
        logger.debug("Could not read version of %s", skill_path, exc_info=True)
        return None


def scan_model_directory(model_dir: Path) -> list[InstalledSkill]:
    """List the skills installed in one model directory.

    Hidden entries and dangling symlinks are ignored.
    """
    skills_dir = Path(model_dir) / SKILLS_DIR
    if not skills_dir.is_dir():
        return []

    installed: list[InstalledSkill] = []
    for entry in sorted(skills_dir.iterdir()):
        if entry.name.startswith(".") or not entry.exists():
            continue
        installed.append(
            InstalledSkill(
                name=entry.name,
                path=entry,
                is_symlink=entry.is_symlink(),
                version=_try_get_version(entry),
            )
        )
    return installed


def scan_all_models(base_dir: Path, model_dirs: Iterable[str]) -> dict[str, list[InstalledSkill]]:
    """Scan several model directories under ``base_dir``.

    Returns:
        Model directory (as given) -> installed skills. Models with no
        skills, or whose directory does not exist, are omitted.
    """
    results: dict[str, list[InstalledSkill]] = {}
    for model_dir in model_dirs:
        full_path = Path(base_dir) / model_dir
        if not full_path.is_dir():
            continue
        skills = scan_model_directory(full_path)
        if skills:
            results[model_dir] = skills
    return results


def is_skill_installed(base_dir: Path, skill_name: str, model_dirs: Iterable[str]) -> bool:
    """True if any of the model directories has an entry for the skill."""
    return any(
        (Path(base_dir) / model_dir / SKILLS_DIR / skill_name).exists()
        for model_dir in model_dirs
    )


def get_installed_skill_names(base_dir: Path, model_dirs: Iterable[str]) -> list[str]:
    """Sorted, de-duplicated names of skills installed in any model directory."""
    names: set[str] = set()
    for skills in scan_all_models(base_dir, model_dirs).values():
        names.update(skill.name for skill in skills)
    return sorted(names)
