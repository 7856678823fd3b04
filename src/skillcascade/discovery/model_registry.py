"""Static registry of supported models and their project directories.

Each ``ModelProfile`` says where an AI assistant looks for skills inside a
project: ``<project>/<directory>/skills/``. A model name that is not in the
registry maps to ``.<name>``, so new assistants work without a code change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from skillcascade.constants import SKILLS_DIR


@dataclass(frozen=True)
class ModelProfile:
    """Where one AI assistant keeps its project-level configuration.

    Attributes:
        name: Human-readable display name (e.g., "Claude").
        short_name: Identifier accepted on the command line (e.g., "claude").
        directory: Model root relative to the project (e.g., ".claude").
        aliases: Other identifiers that select this profile.
    """

    name: str
    short_name: str
    directory: str
    aliases: tuple[str, ...] = field(default_factory=tuple)


def _build_profiles() -> list[ModelProfile]:
    return [
        ModelProfile(
            name="GitHub Copilot",
            short_name="github-copilot",
            directory=".github",
            aliases=("copilot",),
        ),
        ModelProfile(name="Claude", short_name="claude", directory=".claude"),
        ModelProfile(name="Codex (OpenAI)", short_name="codex", directory=".codex"),
        ModelProfile(name="Gemini", short_name="gemini", directory=".gemini"),
        ModelProfile(name="Cursor", short_name="cursor", directory=".cursor"),
    ]


MODEL_PROFILES: list[ModelProfile] = _build_profiles()

_BY_NAME: dict[str, ModelProfile] = {}
for _profile in MODEL_PROFILES:
    _BY_NAME[_profile.short_name] = _profile
    for _alias in _profile.aliases:
        _BY_NAME[_alias] = _profile


def get_profile(model_name: str) -> ModelProfile | None:
    """Look up a profile by short name or alias (case-insensitive)."""
    return _BY_NAME.get(model_name.strip().lower())


def model_directory(model_name: str) -> str:
    """Return the model root relative to the project, e.g. ``".claude"``.

    Unknown models map to ``"." + name``.
    """
    normalized = model_name.strip().lower()
    profile = _BY_NAME.get(normalized)
    return profile.directory if profile else f".{normalized}"


def known_model_directories() -> list[str]:
    """Distinct directories of every registered model, in registry order."""
    return list(dict.fromkeys(p.directory for p in MODEL_PROFILES))


def detect_installed_models(project_dir: Path) -> list[ModelProfile]:
    """Return the profiles whose model root exists in the project."""
    project_dir = Path(project_dir)
    return [p for p in MODEL_PROFILES if (project_dir / p.directory).is_dir()]


def model_skills_directory(project_dir: Path, model_name: str) -> Path:
    """Return ``<project>/<model root>/skills`` for a model name."""
    return Path(project_dir) / model_directory(model_name) / SKILLS_DIR
