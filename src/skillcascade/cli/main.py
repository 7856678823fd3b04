"""skillcascade CLI - Install agent skills into model directories.

Entry point for the ``skillcascade`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    install    - Resolve dependencies and install skills into models.
    uninstall  - Remove skills from models.
    validate   - Lint skill sources or check installed skills.
    list       - Show installed skills per model.
    graph      - Show the dependency graph and installation order.
    sync       - Link already installed skills into more models.

Usage::

    skillcascade install --models claude,codex
    skillcascade install --models claude --skills react --dry-run
    skillcascade uninstall --all --models claude
    skillcascade sync --models codex,gemini
    skillcascade validate --all
    skillcascade graph --skills react --format json
"""

from __future__ import annotations

import logging

import click

from skillcascade import __version__
from skillcascade.cli.graph_cmd import graph_command
from skillcascade.cli.install import install_command
from skillcascade.cli.list_cmd import list_command
from skillcascade.cli.sync import sync_command
from skillcascade.cli.uninstall import uninstall_command
from skillcascade.cli.validate import validate_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """skillcascade: Install agent skills into AI model directories.

    Skills under skills/ are resolved with their dependencies and linked
    into each model's skills/ directory through the shared .agents/skills
    staging area.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register all subcommands
cli.add_command(install_command)
cli.add_command(uninstall_command)
cli.add_command(validate_command)
cli.add_command(list_command)
cli.add_command(graph_command)
cli.add_command(sync_command)
