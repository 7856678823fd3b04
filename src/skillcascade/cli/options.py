"""Options and argument helpers shared by skillcascade commands."""

from __future__ import annotations

import click

base_dir_option = click.option(
    "--base-dir",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    help="Project root holding skills/ and the model directories.",
)


def split_names(value: str | None) -> list[str]:
    """Split a comma-separated option into trimmed, non-empty names."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
