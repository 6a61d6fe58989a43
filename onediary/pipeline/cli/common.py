"""
Shared helpers for the import commands.

- resolve_settings: Apply command-line overrides to the loaded settings
- echo_preview: Dry-run preview of a parse
- echo_stats: Completion summary
- record_import_time: Persist the last import timestamp
"""
from __future__ import annotations

import time
from typing import Any

import click

from onediary.core.cli import ConversionStats
from onediary.core.logging_manager import DiaryLogger
from onediary.core.settings import ImportSettings, save_settings
from onediary.dataclasses.parse_result import ParseResult

PREVIEW_ENTRIES = 3
PREVIEW_CHARS = 60


def resolve_settings(ctx: click.Context, **overrides: Any) -> ImportSettings:
    """Loaded settings with every flag the user actually passed."""
    settings: ImportSettings = ctx.obj.get("settings") or ImportSettings()
    return settings.with_overrides(**overrides)


def echo_preview(result: ParseResult, settings: ImportSettings) -> None:
    click.echo(f"Would import {len(result.entries)} entries:")
    for entry in result.entries[:PREVIEW_ENTRIES]:
        snippet = entry.content.replace("\n", " ")
        if len(snippet) > PREVIEW_CHARS:
            snippet = snippet[:PREVIEW_CHARS] + "…"
        click.echo(f"  • {entry.file_name(settings.date_format)}  {entry.title()}")
        click.echo(f"      {snippet}")
        if entry.attachments:
            click.echo(f"      {len(entry.attachments)} attachments")
    if len(result.entries) > PREVIEW_ENTRIES:
        click.echo(f"  … and {len(result.entries) - PREVIEW_ENTRIES} more")

    if result.errors:
        click.echo(f"\n⚠️  {len(result.errors)} parse diagnostics (see log)")

    click.echo(f"\nOutput folder: {settings.output_folder}")
    click.echo(f"Group by year: {settings.group_by_year}")
    click.echo("\n💡 Run without --dry-run to execute import")


def echo_stats(stats: ConversionStats) -> None:
    click.echo("\n✅ Import complete:")
    click.echo(f"  Entries parsed: {stats.entries_parsed}")
    click.echo(f"  Notes created: {stats.entries_created}")
    click.echo(f"  Notes updated: {stats.entries_updated}")
    click.echo(f"  Notes unchanged: {stats.entries_skipped}")
    if stats.images_imported:
        click.echo(f"  Images imported: {stats.images_imported}")
    if stats.parse_warnings:
        click.echo(f"  Parse warnings: {stats.parse_warnings}")
    if stats.errors:
        click.echo(f"  Errors: {stats.errors}")
    click.echo(f"  Duration: {stats.duration():.2f}s")


def record_import_time(ctx: click.Context, logger: DiaryLogger) -> None:
    """Store the import time in the settings file, if one is in use."""
    config_path = ctx.obj.get("config_path")
    settings: ImportSettings = ctx.obj.get("settings") or ImportSettings()
    if config_path is None or not config_path.exists():
        return
    save_settings(settings.with_overrides(last_import_time=time.time()), config_path)
    logger.log_debug("Recorded last import time", {"config": str(config_path)})
