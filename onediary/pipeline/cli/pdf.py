"""
PDF Import Command
------------------

Commands:
    - import-pdf: Import a 1Diary .pdf export, with page images, into the vault

Images on pages that belong to no entry are attributed with --fallback:
    containment   leave them out
    nearest       give them to the closest earlier entry (default)
    round-robin   deal them out to entries in turn
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional

from onediary.core.paths import VAULT_DIR
from onediary.core.logging_manager import DiaryLogger, handle_cli_error
from onediary.parsers.positions import PageAttribution
from onediary.pipeline.pdf2md import convert_pdf_file, parse_pdf_file

from .common import echo_preview, echo_stats, record_import_time, resolve_settings


@click.command("import-pdf")
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
@click.option(
    "--attachments/--no-attachments",
    default=None,
    help="Extract page images (default from settings)",
)
@click.option(
    "--attachment-folder",
    default=None,
    help="Vault-relative folder for images (default from settings)",
)
@click.option(
    "--fallback",
    type=click.Choice([s.value for s in PageAttribution]),
    default=PageAttribution.NEAREST.value,
    show_default=True,
    help="Attribution of image pages outside every entry",
)
@click.option("--dry-run", is_flag=True, help="Preview entries without writing files")
@click.pass_context
def import_pdf(
    ctx: click.Context,
    input: str,
    vault: str,
    group_by_year: Optional[bool],
    title: Optional[bool],
    attachments: Optional[bool],
    attachment_folder: Optional[str],
    fallback: str,
    dry_run: bool,
) -> None:
    """
    Import a 1Diary PDF export.

    The PDF's text layer is rebuilt line by line, garbled dates are
    repaired, and wrapped sentences are joined back into paragraphs.
    """
    logger: DiaryLogger = ctx.obj["logger"]
    settings = resolve_settings(
        ctx,
        group_by_year=group_by_year,
        add_title=title,
        import_attachments=attachments,
        attachment_folder=attachment_folder,
    )

    try:
        if dry_run:
            click.echo("📝 Importing PDF export (DRY RUN - no files will be modified)...")
            click.echo()
            document, result = parse_pdf_file(Path(input), extract_images=False, logger=logger)
            click.echo(f"Pages: {document.page_count}")
            echo_preview(result, settings)
            return

        click.echo("📝 Importing PDF export...")
        stats = convert_pdf_file(
            input_path=Path(input),
            vault_dir=Path(vault),
            settings=settings,
            logger=logger,
            strategy=PageAttribution(fallback),
        )
        echo_stats(stats)
        record_import_time(ctx, logger)

    except Exception as e:
        handle_cli_error(
            ctx,
            e,
            "import_pdf",
            additional_context={"input": input, "vault": vault},
        )


__all__ = ["import_pdf"]
