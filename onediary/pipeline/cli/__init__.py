#!/usr/bin/env python3
"""
OneDiary Import CLI
-------------------

Command-line interface for importing 1Diary exports into a Markdown vault.

Commands:
    - import-txt: Plain-text export → daily notes
    - import-pdf: PDF export → daily notes with page images

Usage:
    # Plain-text export into the default vault
    onediary import-txt ~/Downloads/1Diary.txt

    # PDF export, flat folder, preview only
    onediary import-pdf export.pdf -o ~/vault --flat --dry-run

    # Orphan image pages dealt out in turn
    onediary import-pdf export.pdf --fallback round-robin
"""
from __future__ import annotations

import click
from pathlib import Path

from onediary.core.paths import CONFIG_PATH, LOG_DIR
from onediary.core.cli import setup_logger
from onediary.core.exceptions import ConfigurationError
from onediary.core.logging_manager import handle_cli_error
from onediary.core.settings import load_settings


@click.group()
@click.option(
    "--log-dir",
    type=click.Path(),
    default=str(LOG_DIR),
    help="Directory for log files",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    default=str(CONFIG_PATH),
    show_default=True,
    help="Settings YAML file",
)
@click.pass_context
def cli(ctx: click.Context, log_dir: str, verbose: bool, config: str) -> None:
    """OneDiary Export Importer"""
    ctx.ensure_object(dict)
    ctx.obj["log_dir"] = Path(log_dir)
    ctx.obj["verbose"] = verbose
    logger = setup_logger(Path(log_dir), "cli")
    ctx.obj["logger"] = logger
    ctx.call_on_close(logger.close)
    ctx.obj["config_path"] = Path(config)

    try:
        ctx.obj["settings"] = load_settings(Path(config))
    except ConfigurationError as e:
        handle_cli_error(ctx, e, "load_settings", {"config": config})


# Import and register commands from submodules
from .txt import import_txt
from .pdf import import_pdf

cli.add_command(import_txt)
cli.add_command(import_pdf)


if __name__ == "__main__":
    cli(obj={})
