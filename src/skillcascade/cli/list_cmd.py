"""``skillcascade list`` - Show installed skills per model directory."""

from __future__ import annotations

from pathlib import Path

import click

from skillcascade.cli.options import base_dir_option
from skillcascade.cli.output import console, print_installed_skills, print_json
from skillcascade.discovery import detect_installed_models, known_model_directories, scan_all_models


@click.command("list")
@base_dir_option
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON.")
def list_command(base_dir: str, json_output: bool) -> None:
    """List installed skills in every known model directory."""
    base = Path(base_dir).absolute()
    installed = scan_all_models(base, known_model_directories())

    if json_output:
        print_json({
            model_dir: [
                {
                    "name": s.name,
                    "version": s.version,
                    "type": "symlink" if s.is_symlink else "copy",
                }
                for s in skills
            ]
            for model_dir, skills in installed.items()
        })
        return

    print_installed_skills(installed)
    models = detect_installed_models(base)
    if models:
        console.print(f"Models: {', '.join(p.name for p in models)}")
