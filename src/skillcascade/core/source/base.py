"""The ``SkillSource`` capability consumed by the dependency resolver.

A skill source answers four read-only questions about a tree of skills.
Anything that answers them can feed the resolver; there is deliberately no
shared base class, only the structural ``Protocol`` below.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from skillcascade.core.metadata import SkillMetadata


@runtime_checkable
class SkillSource(Protocol):
    """Read-only view over a directory of skills."""

    def exists(self, skill_name: str) -> bool:
        """Return True if the skill has a ``SKILL.md`` file in this source."""
        ...

    def get_skill_path(self, skill_name: str) -> Path:
        """Return the path of the skill's ``SKILL.md`` (which may not exist)."""
        ...

    def list_skills(self) -> set[str]:
        """Return the names of all skills that have a ``SKILL.md`` file."""
        ...

    def get_skill_metadata(self, skill_name: str) -> SkillMetadata:
        """Parse and return the skill's metadata.

        Raises:
            ParseError: If the skill file is missing or malformed.
            ValidationError: If the metadata violates the contract.
        """
        ...
