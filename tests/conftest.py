"""Shared fixtures for skillcascade tests.

``make_skill`` writes ``<project>/skills/<name>/SKILL.md`` in the current
frontmatter layout; ``project`` is the project root it writes into.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest


def skill_markdown(
    name: str,
    version: str = "1.0",
    deps: Sequence[str] = (),
    description: str | None = None,
    license: str | None = "MIT",
) -> str:
    """Render a current-layout ``SKILL.md``."""
    lines = [
        "---",
        f"name: {name}",
        f"description: \"{description or f'{name} patterns. Trigger: when working with {name}.'}\"",
    ]
    if license:
        lines.append(f"license: {license}")
    lines += ["metadata:", f'  version: "{version}"']
    if deps:
        lines.append(f"  skills: [{', '.join(deps)}]")
    lines += ["---", "", f"# {name}", "", "Guidance goes here.", ""]
    return "\n".join(lines)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project root with a ``skills/`` directory."""
    (tmp_path / "skills").mkdir()
    return tmp_path


@pytest.fixture
def make_skill(project: Path) -> Callable[..., Path]:
    """Factory writing a skill into ``project`` and returning its directory."""

    def _make(name: str, version: str = "1.0", deps: Sequence[str] = (), **kwargs) -> Path:
        skill_dir = project / "skills" / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        (skill_dir / "SKILL.md").write_text(
            skill_markdown(name, version, deps, **kwargs), encoding="utf-8"
        )
        return skill_dir

    return _make
