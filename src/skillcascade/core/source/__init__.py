"""Skill sources: where the resolver reads skills from.

Public API::

    from skillcascade.core.source import LocalSkillSource

    source = LocalSkillSource(Path("."))
    for name in sorted(source.list_skills()):
        print(name, source.get_skill_metadata(name).version)
"""

from skillcascade.core.source.base import SkillSource
from skillcascade.core.source.filesystem import CachedSkillSource, LocalSkillSource

__all__ = [
    "CachedSkillSource",
    "LocalSkillSource",
    "SkillSource",
]
