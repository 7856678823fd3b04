"""Model directories and installed-skill discovery.

Public API::

    from skillcascade.discovery import known_model_directories, scan_all_models

    installed = scan_all_models(Path("."), known_model_directories())
    for model_dir, skills in installed.items():
        print(model_dir, [s.name for s in skills])
"""

from __future__ import annotations

from skillcascade.discovery.model_registry import (
    MODEL_PROFILES,
    ModelProfile,
    detect_installed_models,
    get_profile,
    known_model_directories,
    model_directory,
    model_skills_directory,
)
from skillcascade.discovery.models import InstalledSkill
from skillcascade.discovery.scanner import (
    get_installed_skill_names,
    is_skill_installed,
    scan_all_models,
    scan_model_directory,
)

__all__ = [
    "InstalledSkill",
    "MODEL_PROFILES",
    "ModelProfile",
    "detect_installed_models",
    "get_installed_skill_names",
    "get_profile",
    "is_skill_installed",
    "known_model_directories",
    "model_directory",
    "model_skills_directory",
    "scan_all_models",
    "scan_model_directory",
]
