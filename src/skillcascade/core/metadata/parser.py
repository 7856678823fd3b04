"""Parser and linter for ``SKILL.md`` frontmatter.

Parsing is a tagged, two-step process:

1. **Normalize.** Detect the layout by shape. Legacy files declare
   ``version``, ``skills``, ``dependencies`` or ``allowed-tools`` at the top
   level; each such field is migrated under ``metadata`` and recorded.
   Migration logs a warning but never fails, so old skills keep building
   while the debt stays visible.
2. **Validate.** Check the normalized block against the frontmatter
   contract. Bad values raise; nothing is coerced into shape.

Current layout::

    ---
    name: react
    description: "React patterns. Trigger: when writing React components."
    license: MIT
    metadata:
      version: "1.2"
      skills: [javascript, typescript]
      dependencies:
        react: "^18.0.0"
      allowed_tools: [Read, Edit]
    ---
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from skillcascade.constants import (
    MAX_DESCRIPTION_LENGTH,
    SKILL_NAME_PATTERN,
    TRIGGER_CLAUSE,
    VERSION_PATTERN,
)
from skillcascade.core.metadata.frontmatter import extract_frontmatter, read_frontmatter
from skillcascade.core.metadata.models import FrontmatterSchema, LintResult, SkillMetadata
from skillcascade.exceptions import ParseError, ValidationError

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(VERSION_PATTERN)
_SKILL_NAME_RE = re.compile(SKILL_NAME_PATTERN)

# (top-level legacy key, key under ``metadata``), in migration order.
LEGACY_FIELDS: tuple[tuple[str, str], ...] = (
    ("version", "version"),
    ("skills", "skills"),
    ("dependencies", "dependencies"),
    ("allowed-tools", "allowed_tools"),
)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def normalize_frontmatter(
    frontmatter: dict[str, Any],
    path: Path | None = None,
) -> tuple[dict[str, Any], tuple[str, ...]]:
    """Fold legacy top-level fields into the ``metadata`` block.

    Legacy values take precedence over values already nested under
    ``metadata``. The input mapping is not modified.

    Args:
        frontmatter: Raw frontmatter mapping.
        path: Optional path, used in log and error messages.

    Returns:
        Tuple of (normalized metadata block, migrated legacy keys).

    Raises:
        ValidationError: If ``metadata`` is present but is not a mapping.
    """
    block = frontmatter.get("metadata")
    if block is None:
        block = {}
    elif not isinstance(block, dict):
        raise ValidationError('"metadata" must be a mapping', path)
    block = dict(block)

    migrated: list[str] = []
    for legacy_key, target_key in LEGACY_FIELDS:
        if legacy_key in frontmatter:
            logger.warning(
                'Legacy format detected: top-level "%s" field. Migrating to metadata.%s%s',
                legacy_key,
                target_key,
                f" ({path})" if path else "",
            )
            block[target_key] = frontmatter[legacy_key]
            migrated.append(legacy_key)

    return block, tuple(migrated)


def _string_list(value: Any, field_name: str, path: Path | None) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f'"{field_name}" must be a list of strings', path)
    return list(value)


def _range_mapping(value: Any, field_name: str, path: Path | None) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError(f'"{field_name}" must be a mapping of package to version range', path)
    ranges: dict[str, str] = {}
    for package, expression in value.items():
        if isinstance(expression, bool) or not isinstance(expression, (str, int, float)):
            raise ValidationError(
                f'Invalid version range for package "{package}": {expression!r}', path
            )
        ranges[str(package)] = str(expression)
    return ranges


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_frontmatter(frontmatter: dict[str, Any], path: Path | None = None) -> SkillMetadata:
    """Build normalized ``SkillMetadata`` from a raw frontmatter mapping.

    Args:
        frontmatter: Raw frontmatter mapping as loaded from YAML.
        path: Optional source path, recorded on the result and used in
            error messages.

    Returns:
        The normalized ``SkillMetadata``.

    Raises:
        ParseError: If no version is declared in either layout.
        ValidationError: If a required field is missing or malformed, the
            version does not match ``major.minor[.patch]``, or a dependency
            name is not lowercase-with-hyphens.
    """
    block, legacy_fields = normalize_frontmatter(frontmatter, path)

    version = block.get("version")
    if version is None or version == "":
        raise ParseError("Missing metadata.version field", path)
    if not isinstance(version, str):
        raise ValidationError(
            f'Invalid version {version!r}: versions must be quoted strings such as "1.0"', path
        )
    if not _VERSION_RE.match(version):
        raise ValidationError(
            f'Invalid version format: "{version}". Use "1.0" or "1.0.0"', path
        )

    name = frontmatter.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError('Missing or invalid "name" field', path)

    description = frontmatter.get("description")
    if not isinstance(description, str) or not description.strip():
        raise ValidationError('Missing or invalid "description" field', path)

    dependencies = _string_list(block.get("skills"), "metadata.skills", path)
    for dep in dependencies:
        if not _SKILL_NAME_RE.match(dep):
            raise ValidationError(
                f'Invalid skill name in dependencies: "{dep}". Use lowercase-with-hyphens', path
            )

    license_ = frontmatter.get("license")

    return SkillMetadata(
        name=name,
        description=description,
        version=version,
        dependencies=dependencies,
        package_dependencies=_range_mapping(
            block.get("dependencies"), "metadata.dependencies", path
        ),
        license=str(license_) if license_ is not None else None,
        allowed_tools=_string_list(block.get("allowed_tools"), "metadata.allowed_tools", path),
        schema=FrontmatterSchema.LEGACY if legacy_fields else FrontmatterSchema.CURRENT,
        legacy_fields=legacy_fields,
        source_path=path,
    )


def parse_skill_text(content: str, path: Path | None = None) -> SkillMetadata:
    """Parse skill metadata from the full text of a ``SKILL.md`` file.

    Raises:
        ParseError: If the text has no frontmatter block.
        ValidationError: See ``parse_frontmatter``.
    """
    frontmatter = extract_frontmatter(content, path)
    if frontmatter is None:
        raise ParseError("No frontmatter found", path)
    return parse_frontmatter(frontmatter, path)


def parse_skill_file(path: Path) -> SkillMetadata:
    """Parse and normalize the metadata of a ``SKILL.md`` file.

    Raises:
        ParseError: If the file is missing, has no frontmatter block, or
            declares no version.
        ValidationError: See ``parse_frontmatter``.
    """
    path = Path(path)
    return parse_frontmatter(read_frontmatter(path), path)


def extract_version(path: Path) -> str:
    """Return the declared version of a skill file."""
    return parse_skill_file(path).version


def extract_dependencies(path: Path) -> list[str]:
    """Return the skill dependencies declared by a skill file."""
    return parse_skill_file(path).dependencies


def extract_package_dependencies(path: Path) -> dict[str, str]:
    """Return the external package ranges declared by a skill file."""
    return parse_skill_file(path).package_dependencies


# ---------------------------------------------------------------------------
# Linting
# ---------------------------------------------------------------------------


def lint_frontmatter(frontmatter: dict[str, Any]) -> LintResult:
    """Check a raw frontmatter mapping against the authoring guidelines.

    Unlike ``parse_frontmatter`` this collects every problem instead of
    stopping at the first, and it is stricter: legacy top-level fields are
    errors here, because linting is where authors are told to migrate.
    """
    errors: list[str] = []
    warnings: list[str] = []

    name = frontmatter.get("name")
    if not isinstance(name, str) or not name:
        errors.append('Missing or invalid "name" field')
    elif not _SKILL_NAME_RE.match(name):
        errors.append('Name must be lowercase with hyphens only (e.g., "my-skill-name")')

    description = frontmatter.get("description")
    if not isinstance(description, str) or not description:
        errors.append('Missing or invalid "description" field')
    else:
        if TRIGGER_CLAUSE not in description:
            errors.append(f'Description must include "{TRIGGER_CLAUSE}" clause')
        if len(description) > MAX_DESCRIPTION_LENGTH:
            warnings.append(
                f"Description is {len(description)} characters "
                f"(recommended: <{MAX_DESCRIPTION_LENGTH})"
            )

    deprecated = [key for key, _ in LEGACY_FIELDS if key in frontmatter]
    if deprecated:
        errors.append(
            f"Found deprecated top-level fields: {', '.join(deprecated)}. "
            'These should be under "metadata"'
        )

    if not frontmatter.get("license"):
        warnings.append('Missing "license" field (recommended)')

    try:
        parse_frontmatter(frontmatter)
    except ParseError as exc:
        message = str(exc)
        if message not in errors:
            errors.append(message)

    return LintResult(valid=not errors, errors=errors, warnings=warnings)


def lint_skill_file(path: Path) -> LintResult:
    """Lint a ``SKILL.md`` file, reporting unreadable files as errors."""
    try:
        frontmatter = read_frontmatter(Path(path))
    except ParseError as exc:
        return LintResult(valid=False, errors=[str(exc)])
    return lint_frontmatter(frontmatter)
