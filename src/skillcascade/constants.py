"""Filesystem layout and baseline skill set shared across skillcascade.

The layout has exactly three layers the installer may touch:

- ``<base>/skills/<name>``: canonical skill sources (read-only).
- ``<base>/.agents/skills/<name>``: shared staging links, one per skill.
- ``<model-root>/skills/<name>``: per-model entries (link or copy).
"""

from __future__ import annotations

SKILLS_DIR = "skills"
SKILL_FILENAME = "SKILL.md"
STAGING_DIR = ".agents/skills"
AGENTS_FILENAME = "AGENTS.md"

# Always pulled into every resolution pass unless the caller opts out.
META_SKILLS: tuple[str, ...] = (
    "conventions",
    "a11y",
    "architecture-patterns",
    "english-writing",
    "critical-partner",
)

# Frontmatter contract patterns.
VERSION_PATTERN = r"^[0-9]+\.[0-9]+(\.[0-9]+)?$"
SKILL_NAME_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"

# Lint thresholds for ``skillcascade validate``.
MAX_DESCRIPTION_LENGTH = 150
TRIGGER_CLAUSE = "Trigger:"
