"""Skill dependency graph, cycle detection, ordering, and version comparators.

Graph construction reads from a ``SkillSource`` and never fails on missing
skills; ordering fails hard on cycles. See ``resolver`` for why the two
phases differ.
"""

from skillcascade.core.dependency.constraints import (
    parse_version,
    satisfies_all,
    version_satisfies,
)
from skillcascade.core.dependency.graph import (
    DependencyCycle,
    DependencyNode,
    Graph,
    NodeSource,
    detect_cycles,
    find_missing,
    installation_order,
)
from skillcascade.core.dependency.resolver import (
    DependencyResolver,
    GraphValidation,
    RemovalPlan,
)

__all__ = [
    "DependencyCycle",
    "DependencyNode",
    "DependencyResolver",
    "Graph",
    "GraphValidation",
    "NodeSource",
    "RemovalPlan",
    "detect_cycles",
    "find_missing",
    "installation_order",
    "parse_version",
    "satisfies_all",
    "version_satisfies",
]
