"""Tests for the directory-backed skill sources."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillcascade.core.source import CachedSkillSource, LocalSkillSource, SkillSource
from skillcascade.exceptions import ParseError


@pytest.fixture(params=[LocalSkillSource, CachedSkillSource])
def source_cls(request):
    return request.param


class TestSkillSources:
    """Both sources behave identically over ``<root>/skills``."""

    def test_satisfies_protocol(self, source_cls, project: Path) -> None:
        assert isinstance(source_cls(project), SkillSource)

    def test_exists(self, source_cls, project: Path, make_skill) -> None:
        make_skill("react")
        source = source_cls(project)
        assert source.exists("react") is True
        assert source.exists("vue") is False

    def test_directory_without_skill_file_does_not_exist(
        self, source_cls, project: Path
    ) -> None:
        (project / "skills" / "empty").mkdir()
        source = source_cls(project)
        assert source.exists("empty") is False
        assert source.list_skills() == set()

    def test_get_skill_path(self, source_cls, project: Path) -> None:
        path = source_cls(project).get_skill_path("react")
        assert path == project / "skills" / "react" / "SKILL.md"

    def test_list_skills_skips_hidden_and_files(
        self, source_cls, project: Path, make_skill
    ) -> None:
        make_skill("react")
        make_skill("typescript")
        hidden = project / "skills" / ".draft"
        hidden.mkdir()
        (hidden / "SKILL.md").write_text("---\nname: draft\n---\n")
        (project / "skills" / "README.md").write_text("notes")

        assert source_cls(project).list_skills() == {"react", "typescript"}

    def test_list_skills_without_skills_dir(self, source_cls, tmp_path: Path) -> None:
        assert source_cls(tmp_path).list_skills() == set()

    def test_get_skill_metadata(self, source_cls, project: Path, make_skill) -> None:
        make_skill("react", "2.1", deps=["javascript"])
        meta = source_cls(project).get_skill_metadata("react")
        assert meta.version == "2.1"
        assert meta.dependencies == ["javascript"]

    def test_metadata_of_missing_skill_raises(self, source_cls, project: Path) -> None:
        with pytest.raises(ParseError):
            source_cls(project).get_skill_metadata("missing")

    def test_source_is_never_written(self, source_cls, project: Path, make_skill) -> None:
        skill_dir = make_skill("react")
        before = (skill_dir / "SKILL.md").stat().st_mtime_ns
        source = source_cls(project)
        source.list_skills()
        source.get_skill_metadata("react")
        assert (skill_dir / "SKILL.md").stat().st_mtime_ns == before
        assert sorted(p.name for p in skill_dir.iterdir()) == ["SKILL.md"]
