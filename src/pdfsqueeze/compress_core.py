#!/usr/bin/env python3
"""
Batch compression of the PDFs in one directory.

Files are handled strictly one after another. A failed Ghostscript run
only marks that file as failed; the batch carries on with the next one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Union

from .defaults import GS_DEFAULTS, OUTPUT_DEFAULTS, GhostscriptDefaults, QualityPreset
from .tools import ghostscript_tools as GS
from .tools.size_tools import file_size, savings_percent

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Outcome of compressing a single PDF"""
    source: Path
    output: Path
    original_size: int
    compressed_size: Optional[int] = None  # None when the run failed
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and self.compressed_size is not None

    @property
    def saved(self) -> int:
        if self.compressed_size is None:
            return 0
        return self.original_size - self.compressed_size

    @property
    def saved_percent(self) -> int:
        if self.compressed_size is None:
            return 0
        return savings_percent(self.original_size, self.compressed_size)


@dataclass
class RunStats:
    """Running totals for one batch. Byte totals only count successful files."""
    files_seen: int = 0
    successes: int = 0
    input_bytes: int = 0
    output_bytes: int = 0
    failed: List[Path] = field(default_factory=list)

    def record(self, result: FileResult) -> None:
        self.files_seen += 1
        if result.ok:
            self.successes += 1
            self.input_bytes += result.original_size
            self.output_bytes += result.compressed_size
        else:
            self.failed.append(result.source)

    @property
    def failures(self) -> int:
        return self.files_seen - self.successes

    @property
    def saved(self) -> int:
        return self.input_bytes - self.output_bytes

    @property
    def saved_percent(self) -> int:
        return savings_percent(self.input_bytes, self.output_bytes)


def find_pdfs(workdir: Union[str, Path], pattern: str = OUTPUT_DEFAULTS.pattern) -> List[Path]:
    """Regular files in `workdir` (not recursive) matching `pattern`, sorted by name."""
    workdir = Path(workdir)
    return sorted(p for p in workdir.glob(pattern) if p.is_file())


def output_path_for(pdf: Path, out_dir: Path, suffix: str = OUTPUT_DEFAULTS.suffix) -> Path:
    """
    Examples:
        >>> output_path_for(Path("talk.pdf"), Path("compressed")).as_posix()
        'compressed/talk_compressed.pdf'
    """
    return out_dir / f"{pdf.stem}{suffix}.pdf"


def ensure_output_dir(out_dir: Path) -> bool:
    """Create `out_dir` if it is missing. Returns True if it was created."""
    if out_dir.is_dir():
        return False
    out_dir.mkdir()
    logger.info("Created output directory %s", out_dir)
    return True


def compress_file(
    pdf: Path,
    output: Path,
    preset: QualityPreset,
    gs_path: str,
    gs_defaults: GhostscriptDefaults = GS_DEFAULTS,
) -> FileResult:
    """Compress one PDF with Ghostscript and collect its before/after sizes."""
    original = file_size(pdf)
    rc = GS.run_ghostscript(gs_path, pdf, output, preset, gs_defaults)
    result = FileResult(source=pdf, output=output, original_size=original, returncode=rc)

    if rc != 0:
        logger.warning("Ghostscript failed on %s (exit status %d)", pdf.name, rc)
        return result

    try:
        result.compressed_size = file_size(output)
    except FileNotFoundError:
        logger.warning("Ghostscript reported success but %s was not written", output)
    return result


def compress_directory(
    workdir: Union[str, Path],
    preset: QualityPreset,
    gs_path: str,
    output_dir: Optional[Union[str, Path]] = None,
    gs_defaults: GhostscriptDefaults = GS_DEFAULTS,
    on_dir_created: Optional[Callable[[Path], None]] = None,
    on_start: Optional[Callable[[Path], None]] = None,
    on_result: Optional[Callable[[FileResult], None]] = None,
) -> RunStats:
    """
    Compress every PDF in `workdir` into `output_dir`.

    Args:
        workdir: Directory scanned for *.pdf files
        preset: Ghostscript quality preset
        gs_path: Ghostscript executable (already preflighted)
        output_dir: Where results go; relative paths are taken from
                    workdir. Defaults to OUTPUT_DEFAULTS.dir_name.
        on_dir_created / on_start / on_result: optional progress callbacks

    Returns:
        RunStats for the batch. The output directory is only created
        when there is at least one PDF to compress.
    """
    workdir = Path(workdir)
    out_dir = Path(output_dir) if output_dir is not None else Path(OUTPUT_DEFAULTS.dir_name)
    if not out_dir.is_absolute():
        out_dir = workdir / out_dir

    stats = RunStats()
    pdfs = find_pdfs(workdir)
    logger.debug("Found %d PDF(s) in %s", len(pdfs), workdir)
    if not pdfs:
        return stats

    if ensure_output_dir(out_dir) and on_dir_created:
        on_dir_created(out_dir)

    for pdf in pdfs:
        if on_start:
            on_start(pdf)
        result = compress_file(pdf, output_path_for(pdf, out_dir), preset, gs_path, gs_defaults)
        stats.record(result)
        if on_result:
            on_result(result)

    return stats


__all__ = [
    "FileResult",
    "RunStats",
    "find_pdfs",
    "output_path_for",
    "ensure_output_dir",
    "compress_file",
    "compress_directory",
]
