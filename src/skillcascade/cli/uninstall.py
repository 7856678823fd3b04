"""``skillcascade uninstall`` - Remove installed skills from model directories.

There is no install registry to consult: ``--all`` removes whatever the
model directories currently contain. With ``--skills``, each model is
checked first. If a skill that stays installed depends on one being
removed, nothing is removed anywhere. Dependencies that only the removed
skills needed are reported, and removed too with ``--with-dependencies``.

Each removal is independent; a failure is reported and the remaining
removals still run. Sources and staging links are never touched.

Exit Codes:
    0 - Every requested removal succeeded (absent skills count as done).
    1 - Neither ``--skills`` nor ``--all`` was given, a removal was
        blocked by a dependent skill, or a removal failed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.text import Text

from skillcascade.cli.options import base_dir_option, split_names
from skillcascade.cli.output import (
    console,
    print_error,
    print_key_value,
    print_removal_plan,
    print_section,
    print_success,
    print_warning,
)
from skillcascade.core.dependency import DependencyResolver, RemovalPlan
from skillcascade.core.installer import Installer
from skillcascade.core.source import LocalSkillSource
from skillcascade.discovery import (
    get_installed_skill_names,
    known_model_directories,
    model_directory,
    scan_model_directory,
)
from skillcascade.exceptions import FileSystemError


def _plan_per_model(
    base: Path,
    model_dirs: list[str],
    names: list[str],
) -> dict[str, RemovalPlan]:
    resolver = DependencyResolver(LocalSkillSource(base), always_included=())
    plans: dict[str, RemovalPlan] = {}
    for model_dir in model_dirs:
        installed = [skill.name for skill in scan_model_directory(base / model_dir)]
        plans[model_dir] = resolver.plan_removal(names, installed)
    return plans


@click.command("uninstall")
@click.option("--skills", "-s", default=None, help="Comma-separated skill names.")
@click.option("--all", "remove_all", is_flag=True, help="Remove every installed skill.")
@click.option(
    "--models", "-m",
    default=None,
    help="Comma-separated model names (default: every known model).",
)
@click.option(
    "--with-dependencies",
    is_flag=True,
    help="Also remove dependencies no remaining skill needs.",
)
@base_dir_option
@click.option("--dry-run", is_flag=True, help="Show what would be removed without writing.")
def uninstall_command(
    skills: str | None,
    remove_all: bool,
    models: str | None,
    with_dependencies: bool,
    base_dir: str,
    dry_run: bool,
) -> None:
    """Remove skills from model directories."""
    base = Path(base_dir).absolute()
    if models:
        model_dirs = list(dict.fromkeys(model_directory(m) for m in split_names(models)))
    else:
        model_dirs = known_model_directories()

    if remove_all:
        names = get_installed_skill_names(base, model_dirs)
        if not names:
            print_warning("No skills installed")
            return
    elif skills:
        names = split_names(skills)
    else:
        print_error("Specify --skills or --all")
        sys.exit(1)

    print_section("Uninstalling Skills")
    print_key_value("Base directory", str(base))
    print_key_value("Models", ", ".join(model_dirs))
    print_key_value("Skills", ", ".join(names))

    targets = {model_dir: list(names) for model_dir in model_dirs}
    if not remove_all:
        plans = _plan_per_model(base, model_dirs, names)
        blocked = False
        for model_dir, plan in plans.items():
            if not (plan.blocked or plan.orphaned or plan.kept):
                continue
            console.print(Text(model_dir, style="bold"))
            print_removal_plan(plan)
            blocked = blocked or not plan.allowed
        if blocked:
            print_error("Remove the dependent skills first, or remove them together")
            sys.exit(1)
        for model_dir, plan in plans.items():
            if with_dependencies:
                targets[model_dir].extend(plan.orphaned)
            elif plan.orphaned:
                print_warning(
                    f"Keeping unused dependencies in {model_dir}: {', '.join(plan.orphaned)} "
                    "(use --with-dependencies to remove them)"
                )

    installer = Installer(base, dry_run=dry_run)
    removed = absent = failed = 0
    for model_dir, model_names in targets.items():
        for name in model_names:
            try:
                if installer.uninstall_skill(name, base / model_dir):
                    removed += 1
                else:
                    absent += 1
            except FileSystemError as exc:
                print_error(f"Failed to remove {name} from {model_dir}: {exc}")
                failed += 1

    print_key_value("Removed", str(removed))
    print_key_value("Not installed", str(absent))
    print_key_value("Failed", str(failed))

    if failed:
        print_error(f"Uninstallation completed with {failed} failure(s)")
        sys.exit(1)
    if dry_run:
        console.print("[yellow]DRY RUN - no changes were made[/yellow]")
    else:
        print_success("Uninstallation completed successfully!")
