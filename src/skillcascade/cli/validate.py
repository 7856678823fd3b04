"""``skillcascade validate`` - Lint skill sources or check installed skills.

Modes (exactly one is used, in this precedence):

- ``--skill NAME``: lint one skill and show its metadata.
- ``--all``: lint every skill, then check the combined dependency graph
  for cycles (errors) and missing dependencies (warnings).
- ``--installed``: check what the model directories contain against the
  sources. Symlinks are always current; copies are compared by version.

Exit Codes:
    0 - Everything checked is valid (warnings allowed).
    1 - At least one error, or no mode was given.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from skillcascade.cli.options import base_dir_option
from skillcascade.cli.output import (
    console,
    print_cycles,
    print_error,
    print_item,
    print_key_value,
    print_lint_result,
    print_section,
    print_skill_metadata,
    print_success,
    print_warning,
)
from skillcascade.core.dependency import DependencyResolver
from skillcascade.core.metadata import lint_skill_file
from skillcascade.core.source import LocalSkillSource
from skillcascade.discovery import known_model_directories, scan_all_models
from skillcascade.exceptions import ParseError


def _validate_skill(source: LocalSkillSource, name: str) -> bool:
    if not source.exists(name):
        print_error(f"Skill not found: {name}")
        return False

    result = lint_skill_file(source.get_skill_path(name))
    print_lint_result(name, result)
    if result.valid:
        print_skill_metadata(source.get_skill_metadata(name))
    return result.valid


def _validate_all(source: LocalSkillSource) -> bool:
    names = sorted(source.list_skills())
    console.print(f"Found [bold]{len(names)}[/bold] skills")

    invalid = 0
    warnings = 0
    for name in names:
        result = lint_skill_file(source.get_skill_path(name))
        print_lint_result(name, result)
        if not result.valid:
            invalid += 1
        warnings += len(result.warnings)

    resolver = DependencyResolver(source, always_included=())
    validation = resolver.validate_graph(resolver.build_graph(names))
    if validation.cycles:
        print_cycles(validation.cycles)
        invalid += 1
    else:
        print_success("No circular dependencies detected")
    for edge in validation.missing:
        print_warning(f"Missing dependency: {edge}")
        warnings += 1

    print_key_value("Total skills", str(len(names)))
    print_key_value("Invalid", str(invalid))
    print_key_value("Warnings", str(warnings))
    return invalid == 0


def _validate_installed(source: LocalSkillSource, base: Path) -> bool:
    installed = scan_all_models(base, known_model_directories())
    if not installed:
        print_warning("No skills installed")
        return True

    errors: list[str] = []
    warnings: list[str] = []
    for model_dir, skills in installed.items():
        print_key_value("Model", model_dir)
        for skill in skills:
            if not source.exists(skill.name):
                warnings.append(f"Source not found for installed skill: {skill.name}")
                continue
            if skill.is_symlink:
                print_item(f"{skill.name}: valid (symlinked, always up to date)")
                continue
            try:
                current = source.get_skill_metadata(skill.name).version
            except ParseError as exc:
                errors.append(f"Failed to validate {skill.name}: {exc}")
                continue
            if current != skill.version:
                warnings.append(
                    f"Version mismatch for {skill.name}: installed "
                    f"{skill.version or 'unknown'}, current {current}"
                )
            else:
                print_item(f"{skill.name}: valid ({current})")

    for error in errors:
        print_error(error)
    for warning in warnings:
        print_warning(warning)
    print_key_value("Errors", str(len(errors)))
    print_key_value("Warnings", str(len(warnings)))
    return not errors


@click.command("validate")
@click.option("--skill", "skill_name", default=None, help="Validate a single skill.")
@click.option("--all", "validate_all", is_flag=True, help="Validate every skill source.")
@click.option("--installed", is_flag=True, help="Validate installed skills.")
@base_dir_option
def validate_command(
    skill_name: str | None,
    validate_all: bool,
    installed: bool,
    base_dir: str,
) -> None:
    """Validate skill frontmatter, dependencies, or installed skills."""
    base = Path(base_dir).absolute()
    source = LocalSkillSource(base)
    print_section("Validation")

    if skill_name:
        ok = _validate_skill(source, skill_name)
    elif validate_all:
        ok = _validate_all(source)
    elif installed:
        ok = _validate_installed(source, base)
    else:
        print_error("Specify --skill, --all, or --installed")
        sys.exit(1)

    if not ok:
        print_error("Validation failed")
        sys.exit(1)
    print_success("Validation passed")
