"""Tests for ``skillcascade validate``."""

from __future__ import annotations

from pathlib import Path

from skillcascade.cli.main import cli
from skillcascade.core.installer import Installer, InstallMode


def _validate(runner, base: Path, *args: str):
    return runner.invoke(cli, ["validate", "--base-dir", str(base), *args])


class TestValidateSkill:
    """``--skill NAME``."""

    def test_valid_skill(self, runner, skill_project: Path) -> None:
        result = _validate(runner, skill_project, "--skill", "react")
        assert result.exit_code == 0, result.output
        assert "1.2" in result.output
        assert "javascript, typescript" in result.output

    def test_unknown_skill(self, runner, skill_project: Path) -> None:
        result = _validate(runner, skill_project, "--skill", "vue")
        assert result.exit_code == 1
        assert "Skill not found: vue" in result.output

    def test_lint_errors(self, runner, project: Path, make_skill) -> None:
        make_skill("vague", description="Does things.")
        result = _validate(runner, project, "--skill", "vague")
        assert result.exit_code == 1
        assert "Trigger:" in result.output


class TestValidateAll:
    """``--all`` lints every skill and checks the combined graph."""

    def test_clean_tree(self, runner, skill_project: Path) -> None:
        result = _validate(runner, skill_project, "--all")
        assert result.exit_code == 0, result.output
        assert "No circular dependencies detected" in result.output

    def test_cycle_fails(self, runner, project: Path, make_skill) -> None:
        make_skill("a", deps=["b"])
        make_skill("b", deps=["a"])
        result = _validate(runner, project, "--all")
        assert result.exit_code == 1
        assert "a -> b -> a" in result.output

    def test_missing_dependency_is_a_warning(self, runner, project: Path, make_skill) -> None:
        make_skill("react", deps=["ghost"])
        result = _validate(runner, project, "--all")
        assert result.exit_code == 0
        assert "react -> ghost" in result.output


class TestValidateInstalled:
    """``--installed`` compares model entries with their sources."""

    def test_symlinks_always_current(self, runner, skill_project: Path) -> None:
        Installer(skill_project).install_skill("react", skill_project / ".claude")
        result = _validate(runner, skill_project, "--installed")
        assert result.exit_code == 0
        assert "always up to date" in result.output

    def test_copy_version_mismatch_warns(self, runner, skill_project: Path, make_skill) -> None:
        Installer(skill_project).install_skill(
            "javascript", skill_project / ".codex", InstallMode.EXTERNAL
        )
        make_skill("javascript", "2.0")
        result = _validate(runner, skill_project, "--installed")
        assert result.exit_code == 0
        assert "Version mismatch" in result.output

    def test_nothing_installed(self, runner, project: Path) -> None:
        result = _validate(runner, project, "--installed")
        assert result.exit_code == 0
        assert "No skills installed" in result.output


def test_requires_a_mode(runner, project: Path) -> None:
    result = _validate(runner, project)
    assert result.exit_code == 1
    assert "Specify --skill, --all, or --installed" in result.output
