"""Skill dependency graph: node types and graph algorithms.

A graph is a plain ``dict[str, DependencyNode]`` keyed by skill name. Edges
are the names in each node's ``dependencies`` list. An edge whose target is
not a key of the graph is *dangling*: the dependency was missing from the
skill source when the graph was built. Dangling edges are tolerated by every
algorithm here and reported by ``find_missing``; they are never treated as
satisfied.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum

from skillcascade.exceptions import CycleError


# ---------------------------------------------------------------------------
# Node and cycle types
# ---------------------------------------------------------------------------


class NodeSource(Enum):
    """Why a node entered the graph."""

    REQUESTED = "requested"
    ALWAYS_INCLUDED = "always-included"
    TRANSITIVE = "transitive"


@dataclass
class DependencyNode:
    """One skill participating in a resolution pass.

    Attributes:
        name: Skill name (lowercase-with-hyphens).
        version: Declared ``major.minor[.patch]`` version.
        dependencies: Names of required skills, in declaration order.
        source: Why this node was added to the graph.
    """

    name: str
    version: str
    dependencies: list[str] = field(default_factory=list)
    source: NodeSource = NodeSource.REQUESTED


@dataclass(frozen=True)
class DependencyCycle:
    """A dependency loop, e.g. ``a -> b -> a``.

    Attributes:
        path: Skill names along the loop; the first name is repeated last.
        formatted: ``" -> "``-joined path, the canonical form used to
            collapse duplicate discoveries of the same loop.
    """

    path: tuple[str, ...]
    formatted: str

    @classmethod
    def from_path(cls, path: list[str]) -> DependencyCycle:
        return cls(path=tuple(path), formatted=" -> ".join(path))

    @property
    def members(self) -> frozenset[str]:
        """Distinct skill names on the loop."""
        return frozenset(self.path)


Graph = dict[str, DependencyNode]


# ---------------------------------------------------------------------------
# Algorithms
# ---------------------------------------------------------------------------


def find_missing(graph: Graph) -> list[str]:
    """List every dangling edge as ``"dependent -> dependency"``.

    Returns:
        Dangling edges in graph order, then declaration order.
    """
    return [
        f"{node.name} -> {dep}"
        for node in graph.values()
        for dep in node.dependencies
        if dep not in graph
    ]


def detect_cycles(graph: Graph) -> list[DependencyCycle]:
    """Find dependency cycles with a depth-first search.

    Tracks a visited set and the set of names on the active recursion path.
    A dependency found on the active path closes a cycle: the sub-path from
    that dependency's position to the current node, with the dependency
    appended again. Dangling edges are skipped. Cycles reached through
    different DFS paths are de-duplicated on ``formatted``.

    Returns:
        Distinct cycles in discovery order. Empty if the graph is acyclic.
    """
    visited: set[str] = set()
    on_stack: set[str] = set()
    cycles: list[DependencyCycle] = []
    seen: set[str] = set()

    def _visit(name: str, path: list[str]) -> None:
        visited.add(name)
        on_stack.add(name)
        path.append(name)

        for dep in graph[name].dependencies:
            if dep not in graph:
                continue
            if dep not in visited:
                _visit(dep, path)
            elif dep in on_stack:
                cycle = DependencyCycle.from_path(path[path.index(dep):] + [dep])
                if cycle.formatted not in seen:
                    seen.add(cycle.formatted)
                    cycles.append(cycle)

        path.pop()
        on_stack.discard(name)

    for name in graph:
        if name not in visited:
            _visit(name, [])

    return cycles


def installation_order(graph: Graph) -> list[str]:
    """Order skills so every dependency precedes the skills that need it.

    Kahn's algorithm over inverted in-degrees: a node's in-degree is the
    number of graph nodes that depend on it. Nodes nobody depends on are
    emitted first; each emitted node releases its own dependencies. The
    sorted list is reversed before returning, which turns "least depended
    upon first" into "dependencies first".

    Ties are broken by graph insertion order, so the result is stable for a
    fixed input.

    Raises:
        CycleError: If the graph contains a cycle. Cycles are checked up
            front; the length check after sorting is a second guard.
    """
    cycles = detect_cycles(graph)
    if cycles:
        raise CycleError(cycles)

    in_degree: dict[str, int] = {name: 0 for name in graph}
    for node in graph.values():
        for dep in node.dependencies:
            if dep in graph:
                in_degree[dep] += 1

    queue: deque[str] = deque(name for name, degree in in_degree.items() if degree == 0)
    ordered: list[str] = []

    while queue:
        current = queue.popleft()
        ordered.append(current)
        for dep in graph[current].dependencies:
            if dep not in graph:
                continue
            in_degree[dep] -= 1
            if in_degree[dep] == 0:
                queue.append(dep)

    if len(ordered) != len(graph):
        raise CycleError(detect_cycles(graph))

    ordered.reverse()
    return ordered
