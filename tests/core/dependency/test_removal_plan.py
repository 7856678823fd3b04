"""Tests for DependencyResolver.plan_removal.

The plan works on names only: what is installed is passed in, and the
dependency edges come from the skill sources.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from skillcascade.core.dependency import DependencyResolver, RemovalPlan
from skillcascade.core.source import LocalSkillSource


@pytest.fixture
def resolver(project: Path, make_skill) -> DependencyResolver:
    make_skill("react", deps=["javascript", "typescript"])
    make_skill("vue", deps=["javascript"])
    make_skill("typescript", deps=["javascript"])
    make_skill("javascript")
    make_skill("docs")
    return DependencyResolver(LocalSkillSource(project), always_included=())


class TestBlockedRemoval:
    """A skill that something remaining depends on cannot go."""

    def test_dependency_of_remaining_skill(self, resolver) -> None:
        plan = resolver.plan_removal(["javascript"], ["react", "javascript", "typescript"])

        assert not plan.allowed
        assert plan.blocked == {"javascript": ["react", "typescript"]}

    def test_transitive_dependent_blocks(self, resolver) -> None:
        plan = resolver.plan_removal(["javascript"], ["react", "javascript"])
        assert plan.blocked == {"javascript": ["react"]}

    def test_removing_dependents_together_is_allowed(self, resolver) -> None:
        plan = resolver.plan_removal(
            ["react", "typescript", "javascript"],
            ["react", "javascript", "typescript", "docs"],
        )
        assert plan.allowed
        assert plan.orphaned == []
        assert plan.kept == []

    def test_unrelated_skill_is_not_blocked(self, resolver) -> None:
        plan = resolver.plan_removal(["docs"], ["react", "javascript", "typescript", "docs"])
        assert plan == RemovalPlan(remove=["docs"])


class TestOrphanedDependencies:
    """Dependencies left behind by a removal are orphaned or kept."""

    def test_all_dependencies_orphaned(self, resolver) -> None:
        plan = resolver.plan_removal(["react"], ["react", "javascript", "typescript"])

        assert plan.allowed
        assert plan.orphaned == ["javascript", "typescript"]
        assert plan.kept == []

    def test_shared_dependency_kept(self, resolver) -> None:
        plan = resolver.plan_removal(["react"], ["react", "vue", "javascript", "typescript"])

        assert plan.orphaned == ["typescript"]
        assert plan.kept == ["javascript"]

    def test_uninstalled_dependencies_ignored(self, resolver) -> None:
        plan = resolver.plan_removal(["react"], ["react", "typescript"])
        assert plan.orphaned == ["typescript"]

    def test_not_installed_request_strands_nothing(self, resolver) -> None:
        plan = resolver.plan_removal(["react"], ["javascript", "typescript"])

        assert plan.allowed
        assert plan.orphaned == []
        assert plan.kept == []

    def test_missing_source_is_tolerated(self, resolver) -> None:
        plan = resolver.plan_removal(["ghost"], ["ghost", "javascript"])

        assert plan.allowed
        assert plan.orphaned == []
