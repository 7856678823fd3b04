"""Property-based tests for the dependency graph algorithms.

- Ordering: every dependency precedes its dependents, and the result is
  stable for a fixed graph.
- Cycles: ordering any cyclic graph raises, and reported cycles are
  distinct and really are loops.
- Missing: every dangling edge is reported, nothing else is.
"""
from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from skillcascade.core.dependency import (
    DependencyNode,
    detect_cycles,
    find_missing,
    installation_order,
)
from skillcascade.exceptions import CycleError


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

skill_names = st.sampled_from([
    "alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta", "theta",
])


@st.composite
def acyclic_graph(draw: st.DrawFn) -> dict[str, DependencyNode]:
    """Each skill may only depend on skills drawn before it, then shuffle."""
    names = draw(st.lists(skill_names, min_size=1, max_size=8, unique=True))
    nodes = []
    for index, name in enumerate(names):
        deps = draw(st.lists(st.sampled_from(names[:index]), unique=True)) if index else []
        nodes.append(DependencyNode(name=name, version="1.0", dependencies=deps))
    nodes = draw(st.permutations(nodes))
    return {node.name: node for node in nodes}


@st.composite
def any_graph(draw: st.DrawFn) -> dict[str, DependencyNode]:
    """Arbitrary edges, including self-loops and dangling names."""
    names = draw(st.lists(skill_names, min_size=1, max_size=6, unique=True))
    targets = st.sampled_from(names + ["ghost", "phantom"])
    return {
        name: DependencyNode(
            name=name,
            version="1.0",
            dependencies=draw(st.lists(targets, max_size=4, unique=True)),
        )
        for name in names
    }


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestOrderingProperties:
    """Installation order invariants on acyclic graphs."""

    @given(graph=acyclic_graph())
    @settings(max_examples=100)
    def test_dependencies_first(self, graph: dict[str, DependencyNode]) -> None:
        order = installation_order(graph)
        position = {name: i for i, name in enumerate(order)}
        assert sorted(order) == sorted(graph)
        for node in graph.values():
            for dep in node.dependencies:
                assert position[dep] < position[node.name]

    @given(graph=acyclic_graph())
    @settings(max_examples=50)
    def test_deterministic(self, graph: dict[str, DependencyNode]) -> None:
        assert installation_order(graph) == installation_order(graph)

    @given(graph=acyclic_graph())
    @settings(max_examples=50)
    def test_acyclic_has_no_cycles(self, graph: dict[str, DependencyNode]) -> None:
        assert detect_cycles(graph) == []


class TestCycleProperties:
    """Cycle detection on arbitrary graphs."""

    @given(graph=any_graph())
    @settings(max_examples=150)
    def test_cycles_are_distinct_loops(self, graph: dict[str, DependencyNode]) -> None:
        cycles = detect_cycles(graph)
        formatted = [c.formatted for c in cycles]
        assert len(formatted) == len(set(formatted))
        for cycle in cycles:
            assert cycle.path[0] == cycle.path[-1]
            for src, dst in zip(cycle.path, cycle.path[1:]):
                assert dst in graph[src].dependencies

    @given(graph=any_graph())
    @settings(max_examples=150)
    def test_ordering_fails_iff_cyclic(self, graph: dict[str, DependencyNode]) -> None:
        if detect_cycles(graph):
            with pytest.raises(CycleError):
                installation_order(graph)
        else:
            assert sorted(installation_order(graph)) == sorted(graph)

    @given(graph=any_graph())
    @settings(max_examples=100)
    def test_every_dangling_edge_reported(self, graph: dict[str, DependencyNode]) -> None:
        expected = {
            f"{node.name} -> {dep}"
            for node in graph.values()
            for dep in node.dependencies
            if dep not in graph
        }
        assert set(find_missing(graph)) == expected
