"""``skillcascade sync`` - Give more models the skills already installed.

The installed set is the union of what every known model directory
contains. Each name is linked into the target models through the
``.agents/skills`` staging area, in one rollback batch per model. Links
already present are skipped, so syncing twice changes nothing. A copied
skill in a target model is replaced by a link.

Exit Codes:
    0 - Every target model now has the installed skills.
    1 - Nothing is installed yet, or a batch failed and was rolled back.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from skillcascade.cli.options import base_dir_option, split_names
from skillcascade.cli.output import (
    print_error,
    print_install_summary,
    print_key_value,
    print_rollback_report,
    print_section,
    print_success,
    print_warning,
)
from skillcascade.core.installer import Installer, InstallMode
from skillcascade.core.source import LocalSkillSource
from skillcascade.discovery import (
    get_installed_skill_names,
    known_model_directories,
    model_directory,
)
from skillcascade.exceptions import SkillCascadeError


@click.command("sync")
@click.option(
    "--models", "-m",
    required=True,
    help="Comma-separated model names to bring in line.",
)
@base_dir_option
@click.option("--dry-run", is_flag=True, help="Show what would change without writing.")
def sync_command(models: str, base_dir: str, dry_run: bool) -> None:
    """Link every installed skill into the given models."""
    base = Path(base_dir).absolute()
    source = LocalSkillSource(base)

    names: list[str] = []
    for name in get_installed_skill_names(base, known_model_directories()):
        if source.exists(name):
            names.append(name)
        else:
            print_warning(f"Source not found for installed skill: {name}")

    if not names:
        print_error("No skills installed. Run `skillcascade install` first.")
        sys.exit(1)

    model_dirs = list(dict.fromkeys(model_directory(m) for m in split_names(models)))
    print_section("Sync")
    print_key_value("Base directory", str(base))
    print_key_value("Models", ", ".join(model_dirs))
    print_key_value("Skills", ", ".join(names))

    installer = Installer(base, dry_run=dry_run)
    rows: list[tuple[str, int, int]] = []
    for model_dir_name in model_dirs:
        model_dir = base / model_dir_name
        try:
            installer.setup_model(model_dir)
            result = installer.install_with_rollback(names, model_dir, InstallMode.LOCAL)
        except SkillCascadeError as exc:
            print_error(f"Sync into {model_dir_name} failed: {exc}")
            print_rollback_report(exc.rollback)
            sys.exit(1)
        rows.append((model_dir_name, result.installed, result.skipped))

    print_install_summary(rows, dry_run)
    if dry_run:
        print_warning("DRY RUN - no changes were made")
    else:
        print_success(f"Synced {len(names)} skill(s) to {len(model_dirs)} model(s)")
