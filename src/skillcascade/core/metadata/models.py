"""Data models for parsed skill metadata.

``SkillMetadata`` is the normalized result of reading a ``SKILL.md``
frontmatter block. Whatever layout the file used, callers always receive the
current layout; the layout that was actually detected is carried on the
result (``schema`` and ``legacy_fields``) so tests and tooling can assert on
it instead of scraping log output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class FrontmatterSchema(Enum):
    """Frontmatter layout detected at parse time.

    - **CURRENT**: version, skill dependencies, package ranges, and tool
      allow-list all nested under ``metadata``.
    - **LEGACY**: one or more of those fields declared at the top level.
    """

    CURRENT = "current"
    LEGACY = "legacy"


@dataclass
class SkillMetadata:
    """Normalized identity, version, and dependencies of one skill.

    Attributes:
        name: Skill identifier as declared in the frontmatter.
        description: Short human-readable summary.
        version: ``major.minor`` or ``major.minor.patch``.
        dependencies: Names of other skills this skill requires, in
            declaration order.
        package_dependencies: External package name -> range expression
            (e.g. ``{"react": "^18.0.0"}``).
        license: Declared license identifier, if any.
        allowed_tools: Tool names the skill may use.
        schema: Layout the frontmatter was written in.
        legacy_fields: Top-level legacy keys migrated into ``metadata``,
            in the order they were migrated. Empty for the current layout.
        source_path: The ``SKILL.md`` file this was parsed from.
    """

    name: str
    description: str
    version: str
    dependencies: list[str] = field(default_factory=list)
    package_dependencies: dict[str, str] = field(default_factory=dict)
    license: str | None = None
    allowed_tools: list[str] = field(default_factory=list)
    schema: FrontmatterSchema = FrontmatterSchema.CURRENT
    legacy_fields: tuple[str, ...] = ()
    source_path: Path | None = None

    @property
    def is_legacy(self) -> bool:
        """True if any legacy top-level field had to be migrated."""
        return self.schema is FrontmatterSchema.LEGACY


@dataclass
class LintResult:
    """Outcome of linting a single skill file.

    Attributes:
        valid: True when there are no errors (warnings are allowed).
        errors: Contract violations.
        warnings: Recommendations that do not fail validation.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
