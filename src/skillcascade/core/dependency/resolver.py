"""Dependency resolution over a ``SkillSource``.

``DependencyResolver`` builds the skill graph from declared metadata and
turns it into an installation plan.

The two phases fail differently, and callers rely on that:

- **Building the graph is lenient.** A requested skill or dependency that
  the source does not have is logged, recorded as a ``MissingSkillWarning``
  and dropped; a skill whose metadata does not parse is logged, recorded in
  ``errors`` and dropped. The partial graph can still be inspected and
  reported on.
- **Ordering the graph is strict.** Any cycle raises ``CycleError``,
  because no valid installation order exists.

Do not make the two symmetric.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from skillcascade.constants import META_SKILLS
from skillcascade.core.dependency.constraints import satisfies_all, version_satisfies
from skillcascade.core.dependency.graph import (
    DependencyCycle,
    DependencyNode,
    Graph,
    NodeSource,
    detect_cycles,
    find_missing,
    installation_order,
)
from skillcascade.core.metadata import SkillMetadata
from skillcascade.core.source import SkillSource
from skillcascade.exceptions import MissingSkillWarning, ParseError

logger = logging.getLogger(__name__)

_AVAILABLE_SKILLS_SECTION = re.compile(r"^## Available Skills[ \t]*$(.*?)(?=^##\s|\Z)", re.MULTILINE | re.DOTALL)
_SKILL_LINK = re.compile(r"\[([a-z0-9-]+)\]\(skills/[^)]+\)")


@dataclass
class GraphValidation:
    """Structural health of a dependency graph.

    Attributes:
        valid: True when nothing is missing and there are no cycles.
        missing: Dangling edges as ``"dependent -> dependency"``.
        cycles: Distinct dependency cycles.
    """

    valid: bool
    missing: list[str] = field(default_factory=list)
    cycles: list[DependencyCycle] = field(default_factory=list)


@dataclass
class RemovalPlan:
    """What removing a set of installed skills would do.

    Attributes:
        remove: Skills asked to be removed, in request order.
        blocked: Requested skill -> remaining installed skills that still
            depend on it. Any entry blocks the whole removal.
        orphaned: Installed dependencies of the removed skills that nothing
            remaining needs.
        kept: Installed dependencies of the removed skills that remaining
            skills still need.
    """

    remove: list[str]
    blocked: dict[str, list[str]] = field(default_factory=dict)
    orphaned: list[str] = field(default_factory=list)
    kept: list[str] = field(default_factory=list)

    @property
    def allowed(self) -> bool:
        return not self.blocked


class DependencyResolver:
    """Builds and orders the dependency graph of a set of skills.

    Args:
        source: Where skills and their metadata are read from.
        always_included: Baseline skills pulled into every ``build_graph``
            call that does not override them. Defaults to ``META_SKILLS``.

    Attributes:
        warnings: Missing skills seen by the most recent ``build_graph``.
        errors: Parse/validation failures seen by the most recent
            ``build_graph``, keyed by skill name.
    """

    def __init__(
        self,
        source: SkillSource,
        always_included: Iterable[str] = META_SKILLS,
    ) -> None:
        self.source = source
        self.always_included: tuple[str, ...] = tuple(always_included)
        self.warnings: list[MissingSkillWarning] = []
        self.errors: dict[str, ParseError] = {}

    # -- Graph construction -------------------------------------------------

    def build_graph(
        self,
        requested: Iterable[str],
        always_included: Iterable[str] | None = None,
    ) -> Graph:
        """Build the dependency graph for the requested skills.

        The starting set is the requested names followed by the
        always-included names, duplicates removed, order kept. Each is
        visited recursively; a name already in the graph is not visited
        again, which handles diamond dependencies.

        Args:
            requested: Skills explicitly asked for.
            always_included: Baseline skills for this call. None uses the
                resolver's default set; pass ``[]`` to opt out.

        Returns:
            Mapping of skill name to ``DependencyNode`` in visit order.
        """
        baseline = self.always_included if always_included is None else tuple(always_included)
        baseline_set = set(baseline)
        self.warnings = []
        self.errors = {}

        graph: Graph = {}
        for name in dict.fromkeys([*requested, *baseline]):
            self._visit(name, graph, baseline_set, NodeSource.REQUESTED, None)
        return graph

    def _visit(
        self,
        name: str,
        graph: Graph,
        baseline: set[str],
        source: NodeSource,
        required_by: str | None,
    ) -> None:
        if name in graph or name in self.errors:
            return

        if not self.source.exists(name):
            warning = MissingSkillWarning(name, required_by)
            logger.warning("%s", warning)
            self.warnings.append(warning)
            return

        try:
            metadata = self.source.get_skill_metadata(name)
        except ParseError as exc:
            logger.error('Failed to process skill "%s": %s', name, exc)
            self.errors[name] = exc
            return

        graph[name] = DependencyNode(
            name=name,
            version=metadata.version,
            dependencies=list(metadata.dependencies),
            source=NodeSource.ALWAYS_INCLUDED if name in baseline else source,
        )

        for dep in metadata.dependencies:
            self._visit(dep, graph, baseline, NodeSource.TRANSITIVE, name)

    # -- Graph analysis -----------------------------------------------------

    def detect_cycles(self, graph: Graph) -> list[DependencyCycle]:
        """Return every distinct cycle in the graph (empty if acyclic)."""
        return detect_cycles(graph)

    def get_installation_order(self, graph: Graph) -> list[str]:
        """Return skill names with every dependency before its dependents.

        Raises:
            CycleError: If the graph contains any cycle.
        """
        return installation_order(graph)

    def validate_graph(self, graph: Graph) -> GraphValidation:
        """Report dangling edges and cycles without raising."""
        missing = find_missing(graph)
        cycles = detect_cycles(graph)
        return GraphValidation(valid=not missing and not cycles, missing=missing, cycles=cycles)

    @staticmethod
    def version_satisfies(current: str, required: str) -> bool:
        """See ``skillcascade.core.dependency.constraints.version_satisfies``."""
        return version_satisfies(current, required)

    @staticmethod
    def check_package_constraints(
        metadata: SkillMetadata,
        available: Mapping[str, str],
    ) -> list[str]:
        """Find declared package ranges that the available versions do not meet.

        Compound ranges such as ``>=1.2 <2.0`` are split and every part
        must hold.

        Args:
            metadata: Skill whose ``package_dependencies`` are checked.
            available: Package name -> installed version.

        Returns:
            One message per unsatisfied or absent package, in declaration
            order. Empty when every range is met.
        """
        problems: list[str] = []
        for package, expression in metadata.package_dependencies.items():
            installed = available.get(package)
            if installed is None:
                problems.append(f"{package}: required {expression}, not installed")
                continue
            try:
                ok = satisfies_all(installed, expression)
            except ValueError as exc:
                problems.append(f"{package}: {exc}")
                continue
            if not ok:
                problems.append(f"{package}: required {expression}, found {installed}")
        return problems

    @staticmethod
    def nodes_by_source(graph: Graph) -> dict[NodeSource, list[DependencyNode]]:
        """Group graph nodes by why they were included, in graph order."""
        grouped: dict[NodeSource, list[DependencyNode]] = {s: [] for s in NodeSource}
        for node in graph.values():
            grouped[node.source].append(node)
        return grouped

    # -- Removal planning ---------------------------------------------------

    def plan_removal(self, to_remove: Iterable[str], installed: Iterable[str]) -> RemovalPlan:
        """Check which installed skills a removal would break or strand.

        Dependencies are followed transitively and without the baseline
        skills. A requested skill that is not installed blocks nothing and
        strands nothing. Overwrites ``warnings`` and ``errors``.

        Args:
            to_remove: Skills the caller wants gone.
            installed: Every skill currently installed.

        Returns:
            The plan. ``blocked`` is filled when a remaining skill still
            depends on a removed one.
        """
        remove = list(dict.fromkeys(to_remove))
        remove_set = set(remove)
        installed_set = set(installed)
        remaining = sorted(installed_set - remove_set)

        closures: dict[str, set[str]] = {}

        def closure(name: str) -> set[str]:
            if name not in closures:
                closures[name] = set(self.build_graph([name], always_included=()))
            return closures[name]

        plan = RemovalPlan(remove=remove)
        for name in remove:
            users = [other for other in remaining if name in closure(other)]
            if users:
                plan.blocked[name] = users

        candidates: list[str] = []
        for name in remove:
            if name not in installed_set:
                continue
            for dep in sorted(closure(name) - {name}):
                if dep in installed_set and dep not in remove_set and dep not in candidates:
                    candidates.append(dep)

        needed: set[str] = set()
        for other in remaining:
            if other not in candidates:
                needed |= closure(other)

        plan.orphaned = [dep for dep in candidates if dep not in needed]
        plan.kept = [dep for dep in candidates if dep in needed]
        logger.debug(
            "Removal of %s: blocked=%s orphaned=%s kept=%s",
            remove, sorted(plan.blocked), plan.orphaned, plan.kept,
        )
        return plan

    # -- AGENTS.md discovery ------------------------------------------------

    @staticmethod
    def parse_agents_md(path: Path) -> list[str]:
        """Extract skill names linked from the ``## Available Skills`` section.

        Links look like ``[react](skills/react/SKILL.md)``. A missing file
        or section yields an empty list and a logged warning.
        """
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return []

        section = _AVAILABLE_SKILLS_SECTION.search(content)
        if section is None:
            logger.warning('No "Available Skills" section found in %s', path)
            return []

        return list(dict.fromkeys(_SKILL_LINK.findall(section.group(1))))

    def discover_all_skills(self, agents_md_path: Path) -> Graph:
        """Build the graph for every skill listed in AGENTS.md plus the baseline."""
        requested = self.parse_agents_md(agents_md_path)
        logger.info("Found %d skills in %s", len(requested), agents_md_path)
        graph = self.build_graph(requested)
        logger.info("Built dependency graph with %d total skills", len(graph))
        return graph
