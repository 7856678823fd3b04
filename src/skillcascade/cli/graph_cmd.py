"""``skillcascade graph`` - Show the resolved dependency graph.

Prints every node grouped by why it was included and, when the graph has
no cycles, the installation order. Missing skills and dangling edges are
reported but do not fail the command; cycles do.

Exit Codes:
    0 - Graph printed; an installation order exists.
    1 - The graph contains a cycle.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from skillcascade.cli.options import base_dir_option, split_names
from skillcascade.cli.output import print_cycles, print_graph, print_json, print_warning
from skillcascade.constants import AGENTS_FILENAME, META_SKILLS
from skillcascade.core.dependency import DependencyResolver
from skillcascade.core.source import LocalSkillSource


@click.command("graph")
@click.option("--skills", "-s", default=None, help="Comma-separated skill names.")
@click.option("--no-meta", is_flag=True, help="Do not add the meta skills.")
@base_dir_option
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
)
def graph_command(
    skills: str | None,
    no_meta: bool,
    base_dir: str,
    output_format: str,
) -> None:
    """Resolve dependencies and show the graph and installation order."""
    base = Path(base_dir).absolute()
    resolver = DependencyResolver(
        LocalSkillSource(base),
        always_included=() if no_meta else META_SKILLS,
    )
    requested = split_names(skills) or resolver.parse_agents_md(base / AGENTS_FILENAME)
    graph = resolver.build_graph(requested)
    validation = resolver.validate_graph(graph)
    order = None if validation.cycles else resolver.get_installation_order(graph)

    if output_format == "json":
        print_json({
            "nodes": [
                {
                    "name": node.name,
                    "version": node.version,
                    "source": node.source.value,
                    "dependencies": node.dependencies,
                }
                for node in graph.values()
            ],
            "order": order,
            "missing": validation.missing,
            "cycles": [c.formatted for c in validation.cycles],
        })
    else:
        print_graph(resolver.nodes_by_source(graph), order)
        for warning in resolver.warnings:
            print_warning(str(warning))
        for edge in validation.missing:
            print_warning(f"Missing dependency: {edge}")
        if validation.cycles:
            print_cycles(validation.cycles)

    if validation.cycles:
        sys.exit(1)
