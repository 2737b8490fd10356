#!/usr/bin/env python3
"""
pdfsqueeze
ghostscript_tools.py
Locate the Ghostscript binary and run it on a single PDF.

Ghostscript does all of the actual compression; this module only builds
its argument list and reports the exit status.
"""
from __future__ import annotations

import logging
import os
import platform
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from ..defaults import GS_DEFAULTS, GhostscriptDefaults, QualityPreset

logger = logging.getLogger(__name__)


class GhostscriptNotFoundError(FileNotFoundError):
    """The Ghostscript binary is missing or not executable."""

    def __init__(self, path: str, hint: str):
        super().__init__(f"Ghostscript not found at {path}")
        self.path = path
        self.hint = hint


def install_hint() -> str:
    """Platform-appropriate instructions for installing Ghostscript."""
    system = platform.system()

    if system == "Darwin":  # macOS
        return "Please install it with: brew install ghostscript"
    elif system == "Windows":
        return "Please install it from https://ghostscript.com/releases/gsdnld.html"
    else:  # Linux and others
        return "Please install it with your package manager (e.g. sudo apt install ghostscript)"


def resolve_ghostscript(gs: Optional[str] = None,
                        defaults: GhostscriptDefaults = GS_DEFAULTS) -> str:
    """
    Work out where Ghostscript should live.

    Priority:
    1. Explicit path or command name (CLI option / PDFSQUEEZE_GS)
    2. `gs` on PATH
    3. defaults.fallback_path

    A bare command name is looked up on PATH; if it is not there the
    name is returned unchanged so the preflight reports it.
    """
    if gs:
        if os.sep in gs or (os.altsep and os.altsep in gs):
            return str(Path(gs).expanduser())
        return shutil.which(gs) or gs

    found = shutil.which(defaults.command_name)
    if found:
        return found
    return defaults.fallback_path


def is_executable(path: Union[str, Path]) -> bool:
    p = Path(path)
    return p.is_file() and os.access(p, os.X_OK)


def ensure_ghostscript(gs: Optional[str] = None,
                       defaults: GhostscriptDefaults = GS_DEFAULTS) -> str:
    """
    Preflight check: resolve the binary and make sure it can be run.

    Returns:
        Path to the executable.

    Raises:
        GhostscriptNotFoundError: if nothing executable is found.
    """
    path = resolve_ghostscript(gs, defaults)
    if not is_executable(path):
        raise GhostscriptNotFoundError(path, install_hint())
    logger.debug("Using Ghostscript at %s", path)
    return path


def build_command(
    gs_path: str,
    input_pdf: Union[str, Path],
    output_pdf: Union[str, Path],
    preset: QualityPreset,
    defaults: GhostscriptDefaults = GS_DEFAULTS,
) -> List[str]:
    """Full argument vector for one Ghostscript run."""
    preset = QualityPreset(preset)
    down = defaults.downsample_type
    return [
        gs_path,
        f"-sDEVICE={defaults.device}",
        f"-dCompatibilityLevel={defaults.compatibility_level}",
        f"-dPDFSETTINGS=/{preset.value}",
        "-dNOPAUSE",
        "-dQUIET",
        "-dBATCH",
        f"-dColorImageResolution={defaults.color_image_resolution}",
        f"-dGrayImageResolution={defaults.gray_image_resolution}",
        f"-dMonoImageResolution={defaults.mono_image_resolution}",
        f"-dColorImageDownsampleType=/{down}",
        f"-dGrayImageDownsampleType=/{down}",
        f"-dMonoImageDownsampleType=/{down}",
        f"-dOptimize={'true' if defaults.optimize else 'false'}",
        f"-sOutputFile={output_pdf}",
        str(input_pdf),
    ]


def run_ghostscript(
    gs_path: str,
    input_pdf: Union[str, Path],
    output_pdf: Union[str, Path],
    preset: QualityPreset,
    defaults: GhostscriptDefaults = GS_DEFAULTS,
) -> int:
    """Run Ghostscript on one file, wait for it and return its exit status."""
    cmd = build_command(gs_path, input_pdf, output_pdf, preset, defaults)
    logger.debug("Running: %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd)
    except OSError as e:
        # Could not even start the binary; count it like any other failed run
        logger.warning("Could not start Ghostscript for %s: %s", input_pdf, e)
        return 127
    logger.debug("Ghostscript exited with %d for %s", proc.returncode, input_pdf)
    return proc.returncode


__all__ = [
    "GhostscriptNotFoundError",
    "install_hint",
    "resolve_ghostscript",
    "is_executable",
    "ensure_ghostscript",
    "build_command",
    "run_ghostscript",
]
