"""Tests for ``skillcascade list`` and ``skillcascade graph``."""

from __future__ import annotations

import json
from pathlib import Path

from skillcascade.cli.main import cli
from skillcascade.core.installer import Installer, InstallMode


class TestListCommand:
    """Installed skills, re-derived from the filesystem."""

    def test_empty(self, runner, project: Path) -> None:
        result = runner.invoke(cli, ["list", "--base-dir", str(project)])
        assert result.exit_code == 0
        assert "No skills installed" in result.output

    def test_json(self, runner, skill_project: Path) -> None:
        installer = Installer(skill_project)
        installer.install_skill("react", skill_project / ".claude")
        installer.install_skill("typescript", skill_project / ".codex", InstallMode.EXTERNAL)

        result = runner.invoke(cli, ["list", "--base-dir", str(skill_project), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[".claude"] == [{"name": "react", "version": "1.2", "type": "symlink"}]
        assert data[".codex"] == [{"name": "typescript", "version": "5.0", "type": "copy"}]

    def test_table(self, runner, skill_project: Path) -> None:
        Installer(skill_project).install_skill("react", skill_project / ".claude")
        result = runner.invoke(cli, ["list", "--base-dir", str(skill_project)])
        assert result.exit_code == 0
        assert "react" in result.output
        assert "Claude" in result.output


class TestGraphCommand:
    """Resolved graph and installation order."""

    def test_text(self, runner, skill_project: Path) -> None:
        result = runner.invoke(
            cli, ["graph", "--base-dir", str(skill_project), "--no-meta", "-s", "react"]
        )
        assert result.exit_code == 0, result.output
        assert "Installation order" in result.output
        assert "3. react" in result.output

    def test_json(self, runner, skill_project: Path) -> None:
        result = runner.invoke(
            cli,
            ["graph", "--base-dir", str(skill_project), "--no-meta", "-s", "react", "--format", "json"],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["order"][-1] == "react"
        assert set(data["order"][:2]) == {"javascript", "typescript"}
        assert data["missing"] == []
        assert data["cycles"] == []
        assert [n["source"] for n in data["nodes"]] == ["requested", "transitive", "transitive"]

    def test_cycle_exits_1(self, runner, project: Path, make_skill) -> None:
        make_skill("a", deps=["b"])
        make_skill("b", deps=["a"])
        result = runner.invoke(
            cli, ["graph", "--base-dir", str(project), "--no-meta", "-s", "a", "--format", "json"]
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["order"] is None

    def test_verbose_flag(self, runner, skill_project: Path) -> None:
        result = runner.invoke(
            cli, ["-v", "graph", "--base-dir", str(skill_project), "--no-meta", "-s", "javascript"]
        )
        assert result.exit_code == 0
