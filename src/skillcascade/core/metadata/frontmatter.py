"""YAML frontmatter extraction for ``SKILL.md`` files.

A frontmatter block is the YAML text between a ``---`` line at the very top
of the file and the next ``---`` line. Only the block is parsed; the Markdown
body is skill prose and is ignored here.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from skillcascade.exceptions import ParseError

_FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def extract_frontmatter(content: str, path: Path | None = None) -> dict[str, Any] | None:
    """Parse the frontmatter block of a skill definition.

    Args:
        content: Full text of the skill file.
        path: Optional path, used only in error messages.

    Returns:
        The frontmatter mapping, or None if the text has no frontmatter
        block or the block is empty.

    Raises:
        ParseError: If the block is present but is not valid YAML, or
            parses to something other than a mapping.
    """
    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        return None

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise ParseError(f"Malformed YAML frontmatter: {exc}", path) from exc

    if data is None:
        return None
    if not isinstance(data, dict):
        raise ParseError("Frontmatter must be a YAML mapping", path)
    return data


def read_frontmatter(path: Path) -> dict[str, Any]:
    """Read a skill file and return its frontmatter mapping.

    Raises:
        ParseError: If the file is missing or unreadable, or has no
            frontmatter block.
    """
    path = Path(path)
    if not path.is_file():
        raise ParseError("Skill file not found", path)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"Failed to read skill file: {exc}", path) from exc

    frontmatter = extract_frontmatter(content, path)
    if frontmatter is None:
        raise ParseError("No frontmatter found", path)
    return frontmatter


def has_frontmatter(path: Path) -> bool:
    """Return True if the file starts with a frontmatter block."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return False
    return _FRONTMATTER_PATTERN.match(content) is not None
