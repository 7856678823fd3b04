"""Rich output formatting helpers for the skillcascade CLI.

User-facing output goes through the module-level ``console``; diagnostics
go through ``logging``. Skill names, paths and error messages are escaped
before they are embedded in markup.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from skillcascade.core.dependency import DependencyCycle, GraphValidation, NodeSource, RemovalPlan
from skillcascade.core.installer import RollbackReport
from skillcascade.core.metadata import LintResult, SkillMetadata
from skillcascade.discovery import InstalledSkill

_SOURCE_STYLES: dict[NodeSource, str] = {
    NodeSource.REQUESTED: "bold",
    NodeSource.ALWAYS_INCLUDED: "cyan",
    NodeSource.TRANSITIVE: "dim",
}

console = Console()


def print_section(title: str) -> None:
    console.print(Panel(Text(title, style="bold")))


def print_key_value(key: str, value: str) -> None:
    console.print(f"  [bold]{escape(key)}:[/bold] {escape(value)}")


def print_error(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_success(message: str) -> None:
    console.print(Text(message, style="green"))


def print_item(text: str, style: str = "") -> None:
    """Print one indented ``- item`` line."""
    console.print(Text(f"  - {text}", style=style))


def print_graph_problems(validation: GraphValidation) -> None:
    """Print the cycles and dangling edges of an invalid graph."""
    if validation.cycles:
        print_cycles(validation.cycles)
    if validation.missing:
        console.print("[red]Missing dependencies:[/red]")
        for edge in validation.missing:
            print_item(edge, "red")


def print_cycles(cycles: list[DependencyCycle]) -> None:
    console.print("[red]Circular dependencies detected:[/red]")
    for cycle in cycles:
        print_item(cycle.formatted, "red")


def print_rollback_report(report: RollbackReport | None) -> None:
    """Print what a failed batch rolled back and what it could not.

    Args:
        report: The report attached to the failing exception, or None if the
            failure did not come out of a batch.
    """
    if report is None:
        return

    console.print(
        f"Rolled back [bold]{len(report.reverted)}[/bold] installation(s)."
    )
    for transaction in report.reverted:
        print_item(transaction.skill_name, "dim")
    for transaction, reason in report.failed:
        print_item(f"Could not roll back {transaction.skill_name}: {reason}", "red")
    for transaction in report.unrecoverable:
        print_item(f"Removed skill cannot be restored: {transaction.skill_name}", "yellow")


def print_removal_plan(plan: RemovalPlan) -> None:
    """Print blocked removals, or what will go and which dependencies stay."""
    if plan.blocked:
        console.print("[red]Cannot remove the following skills due to dependencies:[/red]")
        for name, users in plan.blocked.items():
            print_item(f"{name} (required by: {', '.join(users)})", "red")
        return

    for name in plan.remove:
        print_item(name, "bold")
    if plan.orphaned:
        console.print(
            Text(f"  Dependencies no longer required: {', '.join(plan.orphaned)}", style="dim")
        )
    if plan.kept:
        console.print(
            Text(f"  Dependencies kept (used by other skills): {', '.join(plan.kept)}", style="dim")
        )


def print_install_summary(rows: list[tuple[str, int, int]], dry_run: bool) -> None:
    """Print per-model install counts.

    Args:
        rows: ``(model directory, installed, skipped)`` per model.
        dry_run: Whether nothing was actually written.
    """
    title = "Installation Summary (dry run)" if dry_run else "Installation Summary"
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Model", style="bold")
    table.add_column("Installed", justify="right")
    table.add_column("Skipped", justify="right")
    for model_dir, installed, skipped in rows:
        table.add_row(Text(model_dir), str(installed), str(skipped))
    console.print(table)


def print_lint_result(name: str, result: LintResult) -> None:
    """Print one skill's lint verdict followed by its errors and warnings."""
    if result.valid:
        console.print(Text.assemble(("OK   ", "bold green"), (name, "")))
    else:
        console.print(Text.assemble(("FAIL ", "bold red"), (name, "")))
    for error in result.errors:
        print_item(error, "red")
    for warning in result.warnings:
        print_item(warning, "yellow")


def print_skill_metadata(metadata: SkillMetadata) -> None:
    print_key_value("Name", metadata.name)
    print_key_value("Version", metadata.version)
    print_key_value("License", metadata.license or "N/A")
    if metadata.dependencies:
        print_key_value("Dependencies", ", ".join(metadata.dependencies))


def print_installed_skills(installed: dict[str, list[InstalledSkill]]) -> None:
    """Print a table of installed skills per model directory."""
    if not installed:
        console.print("[dim]No skills installed.[/dim]")
        return

    table = Table(title="Installed Skills", show_header=True, header_style="bold")
    table.add_column("Model", style="bold")
    table.add_column("Skill")
    table.add_column("Version")
    table.add_column("Type", style="dim")
    for model_dir, skills in installed.items():
        for skill in skills:
            table.add_row(
                Text(model_dir),
                Text(skill.name),
                Text(skill.version or "-"),
                "symlink" if skill.is_symlink else "copy",
            )
    console.print(table)


def print_graph(grouped: dict[NodeSource, list[Any]], order: list[str] | None) -> None:
    """Print graph nodes grouped by inclusion reason, then the install order."""
    table = Table(title="Dependency Graph", show_header=True, header_style="bold")
    table.add_column("Skill")
    table.add_column("Version")
    table.add_column("Included", style="dim")
    table.add_column("Depends on")
    for source, nodes in grouped.items():
        for node in nodes:
            table.add_row(
                Text(node.name, style=_SOURCE_STYLES[source]),
                Text(node.version),
                source.value,
                Text(", ".join(node.dependencies) or "-"),
            )
    console.print(table)

    if order is not None:
        console.print("[bold]Installation order:[/bold]")
        for index, name in enumerate(order, start=1):
            console.print(Text(f"  {index}. {name}"))


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    console.print_json(json.dumps(data, default=str))
