"""skillcascade exception hierarchy.

All public exceptions inherit from SkillCascadeError, giving callers a single
base class to catch when they want to handle any skillcascade-specific
failure without swallowing unrelated errors.

``MissingSkillWarning`` is the one exception to that rule: it is a soft
condition. The resolver collects instances instead of raising them, because
a missing skill must never abort graph construction.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from skillcascade.core.dependency.graph import DependencyCycle


class SkillCascadeError(Exception):
    """Base exception for all skillcascade errors.

    Attributes:
        rollback: The ``RollbackReport`` of the batch this error aborted,
            or None if it was not raised out of a batch.
    """

    rollback: Any = None


class ParseError(SkillCascadeError):
    """Raised when a skill definition file cannot be parsed.

    Covers a missing ``SKILL.md``, a file without a frontmatter block,
    malformed YAML, and a version field that is absent after legacy
    normalization. Fatal for the skill being parsed only.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message + (f" (at {path})" if path else ""))


class ValidationError(ParseError):
    """Raised when parsed metadata violates the frontmatter contract.

    Covers malformed version strings and dependency names that are not
    lowercase-with-hyphens. Values are never coerced into shape.
    """


class CycleError(SkillCascadeError):
    """Raised when no installation order exists because of circular dependencies.

    Only computing an installation order raises this; building the graph
    never does.

    Attributes:
        cycles: Every distinct cycle that was found.
    """

    def __init__(self, cycles: list[DependencyCycle]) -> None:
        self.cycles = list(cycles)
        if self.cycles:
            detail = "\n".join(c.formatted for c in self.cycles)
        else:
            detail = "topological sort did not visit every skill"
        super().__init__(f"Circular dependencies detected:\n{detail}")


class FileSystemError(SkillCascadeError):
    """Raised when a symlink, copy, or remove operation fails.

    Fatal for the current batch and triggers its rollback.

    Attributes:
        path: The filesystem path the failing operation targeted.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class MissingSkillWarning(UserWarning):
    """A requested skill or declared dependency does not exist in the source.

    Collected by the resolver rather than raised. The skill is dropped from
    the graph and any node that lists it keeps a dangling edge, which
    ``validate_graph`` later reports as missing.

    Attributes:
        skill_name: The skill that could not be found.
        required_by: The skill that declared it, or None for a root request.
    """

    def __init__(self, skill_name: str, required_by: str | None = None) -> None:
        self.skill_name = skill_name
        self.required_by = required_by
        if required_by:
            message = f'Skill "{skill_name}" (required by "{required_by}") not found, skipping'
        else:
            message = f'Skill "{skill_name}" not found, skipping'
        super().__init__(message)
