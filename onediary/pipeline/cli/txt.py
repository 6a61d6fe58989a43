"""
Plain-Text Import Command
-------------------------

Commands:
    - import-txt: Import a 1Diary .txt export into the vault
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional

from onediary.core.paths import VAULT_DIR
from onediary.core.logging_manager import DiaryLogger, handle_cli_error
from onediary.pipeline.txt2md import convert_txt_file, parse_txt_file

from .common import echo_preview, echo_stats, record_import_time, resolve_settings


@click.command("import-txt")
@click.argument("input", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--vault",
    type=click.Path(file_okay=False),
    default=str(VAULT_DIR),
    help="Vault root directory",
)
@click.option(
    "--group-by-year/--flat",
    default=None,
    help="Put notes in per-year subfolders (default from settings)",
)
@click.option(
    "--title/--no-title",
    default=None,
    help="Write a weekday · weather heading (default from settings)",
)
@click.option("--dry-run", is_flag=True, help="Preview entries without writing files")
@click.pass_context
def import_txt(
    ctx: click.Context,
    input: str,
    vault: str,
    group_by_year: Optional[bool],
    title: Optional[bool],
    dry_run: bool,
) -> None:
    """
    Import a 1Diary plain-text export.

    Each day becomes one note; days that already have a note are merged.
    """
    logger: DiaryLogger = ctx.obj["logger"]
    settings = resolve_settings(ctx, group_by_year=group_by_year, add_title=title)

    try:
        if dry_run:
            click.echo("📝 Importing text export (DRY RUN - no files will be modified)...")
            click.echo()
            echo_preview(parse_txt_file(Path(input), logger), settings)
            return

        click.echo("📝 Importing text export...")
        stats = convert_txt_file(
            input_path=Path(input),
            vault_dir=Path(vault),
            settings=settings,
            logger=logger,
        )
        echo_stats(stats)
        record_import_time(ctx, logger)

    except Exception as e:
        handle_cli_error(
            ctx,
            e,
            "import_txt",
            additional_context={"input": input, "vault": vault},
        )


__all__ = ["import_txt"]
