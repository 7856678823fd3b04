"""``skillcascade install`` - Resolve skills and install them into models.

Skills come from ``--skills`` or, when omitted, from the ``## Available
Skills`` section of ``AGENTS.md``. The meta skills are added unless
``--no-meta`` is given. Every dependency is resolved, the graph is
validated, and the resulting order is installed into each model with
rollback.

Exit Codes:
    0 - Installation succeeded (or nothing to install).
    1 - Dependency validation failed, or an installation was rolled back.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from skillcascade.cli.options import base_dir_option, split_names
from skillcascade.cli.output import (
    console,
    print_error,
    print_graph_problems,
    print_install_summary,
    print_key_value,
    print_rollback_report,
    print_section,
    print_success,
    print_warning,
)
from skillcascade.constants import AGENTS_FILENAME, META_SKILLS
from skillcascade.core.dependency import DependencyResolver
from skillcascade.core.installer import Installer, InstallMode
from skillcascade.core.source import LocalSkillSource
from skillcascade.discovery import model_directory
from skillcascade.exceptions import SkillCascadeError

logger = logging.getLogger(__name__)


@click.command("install")
@click.option(
    "--models", "-m",
    required=True,
    help="Comma-separated model names (e.g. claude,codex).",
)
@click.option("--skills", "-s", default=None, help="Comma-separated skill names.")
@click.option(
    "--type", "install_type",
    type=click.Choice([m.value for m in InstallMode]),
    default=InstallMode.LOCAL.value,
    show_default=True,
    help="local links through .agents/skills; external copies.",
)
@base_dir_option
@click.option("--no-meta", is_flag=True, help="Do not add the meta skills.")
@click.option("--dry-run", is_flag=True, help="Show what would change without writing.")
def install_command(
    models: str,
    skills: str | None,
    install_type: str,
    base_dir: str,
    no_meta: bool,
    dry_run: bool,
) -> None:
    """Install skills and their dependencies into model directories."""
    base = Path(base_dir).absolute()
    mode = InstallMode(install_type)
    model_names = split_names(models)

    print_section("Installation")
    print_key_value("Type", mode.value)
    print_key_value("Base directory", str(base))
    print_key_value("Models", ", ".join(model_names))
    print_key_value("Dry run", "Yes" if dry_run else "No")

    resolver = DependencyResolver(
        LocalSkillSource(base),
        always_included=() if no_meta else META_SKILLS,
    )

    requested = split_names(skills)
    if not requested:
        requested = resolver.parse_agents_md(base / AGENTS_FILENAME)
        logger.info("Discovered %d skills from %s", len(requested), AGENTS_FILENAME)

    graph = resolver.build_graph(requested)
    for warning in resolver.warnings:
        print_warning(str(warning))
    for name, exc in resolver.errors.items():
        print_error(f'Skipping "{name}": {exc}')

    if not graph:
        print_warning("No skills to install.")
        return

    validation = resolver.validate_graph(graph)
    if not validation.valid:
        print_graph_problems(validation)
        print_error("Dependency validation failed")
        sys.exit(1)

    order = resolver.get_installation_order(graph)
    console.print(f"Installation order: [bold]{len(order)}[/bold] skills")

    installer = Installer(base, dry_run=dry_run)
    rows: list[tuple[str, int, int]] = []
    for name in model_names:
        model_dir = base / model_directory(name)
        try:
            installer.setup_model(model_dir)
            result = installer.install_with_rollback(order, model_dir, mode)
        except SkillCascadeError as exc:
            print_error(f"Installation into {model_dir.name} failed: {exc}")
            print_rollback_report(exc.rollback)
            sys.exit(1)
        rows.append((model_dir.name, result.installed, result.skipped))

    print_install_summary(rows, dry_run)
    if dry_run:
        print_warning("DRY RUN - no changes were made")
    else:
        print_success("Installation completed successfully!")
