"""Shared fixtures for CLI tests.

``skill_project`` holds three skills: ``react`` depends on ``javascript``
and ``typescript``. No meta skills exist, so commands run with
``--no-meta`` unless a test is about the baseline.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def skill_project(project: Path, make_skill) -> Path:
    make_skill("react", "1.2", deps=["javascript", "typescript"])
    make_skill("javascript", "1.0")
    make_skill("typescript", "5.0")
    return project
