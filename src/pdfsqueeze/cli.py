from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from .defaults import (
    GS_DEFAULTS, OUTPUT_DEFAULTS, PRESET_MENU, DEFAULT_PRESET, QualityPreset,
    apply_ghostscript_overrides, preset_from_choice,
)
from .compress_core import FileResult, RunStats, compress_directory
from .tools import ghostscript_tools as GS
from .tools.size_tools import format_size

app = typer.Typer(
    add_completion=False,
    help="pdfsqueeze: batch-compress the PDFs in a directory with Ghostscript.",
)


# ---------------------- MENU ----------------------
def _print_menu() -> None:
    rprint("Select compression quality:")
    width = max(len(p.value) for _, p, _ in PRESET_MENU)
    for key, preset, description in PRESET_MENU:
        rprint(f"{key}) {preset.value:<{width + 1}} - {description}")


def _presets_table() -> Table:
    table = Table(title="Quality presets")
    table.add_column("Choice", justify="center")
    table.add_column("Preset")
    table.add_column("Description")
    for key, preset, description in PRESET_MENU:
        name = f"{preset.value} (default)" if preset is DEFAULT_PRESET else preset.value
        table.add_row(key, name, description)
    return table


def ask_preset() -> QualityPreset:
    """Show the menu and read one answer; no retry on bad input."""
    _print_menu()
    try:
        answer = Prompt.ask("Enter choice (1-4, default 1)", default="", show_default=False)
    except EOFError:
        answer = ""
    return preset_from_choice(answer)


# ---------------------- REPORTING ----------------------
def _report_start(pdf: Path) -> None:
    rprint(f"[blue]Compressing:[/blue] {escape(pdf.name)}")


def _report_result(result: FileResult) -> None:
    if result.ok:
        rprint("[green]✓ Success![/green]")
        rprint(f"  Original: {format_size(result.original_size)}")
        rprint(f"  Compressed: {format_size(result.compressed_size)}")
        rprint(f"  Saved: {format_size(result.saved)} ({result.saved_percent}%)")
    else:
        rprint(f"[red]✗ Failed to compress {escape(result.source.name)}[/red]")
    rprint()


def _report_dir_created(out_dir: Path) -> None:
    rprint(f"Created directory: [green]{escape(out_dir.name)}[/green]\n")


def _report_summary(stats: RunStats, directory: Path, output_dir: str) -> None:
    rprint("[yellow]Compression Summary[/yellow]")
    rprint("[yellow]===================[/yellow]")

    if stats.files_seen == 0:
        where = "current directory" if directory == Path(".") else escape(str(directory))
        rprint(f"[red]No PDF files found in {where}[/red]")
        return

    rprint(f"Total files processed: {stats.files_seen}")
    rprint(f"Successful compressions: [green]{stats.successes}[/green]")
    if stats.failures:
        rprint(f"Failed compressions: [red]{stats.failures}[/red]")

    if stats.successes > 0:
        rprint(f"Total original size: {format_size(stats.input_bytes)}")
        rprint(f"Total compressed size: {format_size(stats.output_bytes)}")
        rprint(f"Total space saved: [green]{format_size(stats.saved)} ({stats.saved_percent}%)[/green]")
        rprint()
        rprint(f"Compressed files are in the '[green]{escape(output_dir)}[/green]' directory")


# ---------------------- COMPRESS ----------------------
@app.command()
def compress(
    directory: Path = typer.Argument(
        Path("."), exists=True, file_okay=False, dir_okay=True,
        help="Directory whose *.pdf files are compressed",
    ),
    quality: Optional[QualityPreset] = typer.Option(
        None, "--quality", "-q", case_sensitive=False,
        help="Preset to use; skips the interactive menu",
    ),
    output_dir: str = typer.Option(
        OUTPUT_DEFAULTS.dir_name, "--output-dir", "-o",
        help="Output subdirectory (relative to DIRECTORY unless absolute)",
    ),
    gs: Optional[str] = typer.Option(
        None, "--gs", envvar="PDFSQUEEZE_GS",
        help="Ghostscript executable (default: gs on PATH, then /opt/homebrew/bin/gs)",
    ),
    list_presets: bool = typer.Option(False, "--list-presets", help="Show the quality presets and exit"),
    color_dpi: Optional[int] = typer.Option(
        None, "--color-dpi", min=1, help=f"Color image resolution cap (default {GS_DEFAULTS.color_image_resolution})",
    ),
    gray_dpi: Optional[int] = typer.Option(
        None, "--gray-dpi", min=1, help=f"Grayscale image resolution cap (default {GS_DEFAULTS.gray_image_resolution})",
    ),
    mono_dpi: Optional[int] = typer.Option(
        None, "--mono-dpi", min=1, help=f"Monochrome image resolution cap (default {GS_DEFAULTS.mono_image_resolution})",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log Ghostscript commands and exit codes"),
):
    """
    Compress every PDF in DIRECTORY into an output subdirectory using Ghostscript.
    """
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("pdfsqueeze").setLevel(logging.DEBUG if verbose else logging.WARNING)

    if list_presets:
        rprint(_presets_table())
        raise typer.Exit()

    gs_defaults = apply_ghostscript_overrides(
        color_image_resolution=color_dpi,
        gray_image_resolution=gray_dpi,
        mono_image_resolution=mono_dpi,
    )

    rprint("[yellow]PDF Compression[/yellow]")
    rprint("[yellow]===============[/yellow]")
    rprint()

    try:
        gs_path = GS.ensure_ghostscript(gs, gs_defaults)
    except GS.GhostscriptNotFoundError as e:
        rprint(f"[red]Error: {escape(str(e))}[/red]")
        rprint(e.hint)
        raise typer.Exit(code=1)

    try:
        preset = quality if quality is not None else ask_preset()
        rprint(f"\nUsing quality setting: [green]{preset.value}[/green]\n")

        stats = compress_directory(
            directory,
            preset,
            gs_path,
            output_dir=output_dir,
            gs_defaults=gs_defaults,
            on_dir_created=_report_dir_created,
            on_start=_report_start,
            on_result=_report_result,
        )
    except KeyboardInterrupt:
        # click may turn a bare KeyboardInterrupt into Abort (exit 1)
        rprint("\n[red]Interrupted[/red]")
        raise typer.Exit(code=130)

    _report_summary(stats, directory, output_dir)
    rprint("\n[green]Done![/green]")


# ------------------------------- MAIN --------------------------------
def app_main() -> None:
    """Entry point for console_scripts."""
    try:
        app()
    except KeyboardInterrupt:
        rprint("\n[red]Interrupted[/red]")
        sys.exit(130)


if __name__ == "__main__":
    app_main()
