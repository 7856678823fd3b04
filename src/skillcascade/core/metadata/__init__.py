"""Skill metadata parsing.

Reads the YAML frontmatter of ``SKILL.md`` files and normalizes it into
``SkillMetadata``. Legacy top-level layouts are migrated at parse time and
reported on the result through ``schema`` and ``legacy_fields``.
"""

from skillcascade.core.metadata.frontmatter import (
    extract_frontmatter,
    has_frontmatter,
    read_frontmatter,
)
from skillcascade.core.metadata.models import (
    FrontmatterSchema,
    LintResult,
    SkillMetadata,
)
from skillcascade.core.metadata.parser import (
    LEGACY_FIELDS,
    extract_dependencies,
    extract_package_dependencies,
    extract_version,
    lint_frontmatter,
    lint_skill_file,
    normalize_frontmatter,
    parse_frontmatter,
    parse_skill_file,
    parse_skill_text,
)

__all__ = [
    "FrontmatterSchema",
    "LEGACY_FIELDS",
    "LintResult",
    "SkillMetadata",
    "extract_dependencies",
    "extract_frontmatter",
    "extract_package_dependencies",
    "extract_version",
    "has_frontmatter",
    "lint_frontmatter",
    "lint_skill_file",
    "normalize_frontmatter",
    "parse_frontmatter",
    "parse_skill_file",
    "parse_skill_text",
    "read_frontmatter",
]
