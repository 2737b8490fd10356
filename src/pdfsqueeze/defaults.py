#!/usr/bin/env python3
"""
Default settings for pdfsqueeze.

Holds the quality presets offered in the interactive menu, the fixed
Ghostscript arguments used for every file, and the output naming rules.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple


class QualityPreset(str, Enum):
    """Ghostscript -dPDFSETTINGS values, best quality first."""
    PREPRESS = "prepress"
    PRINTER = "printer"
    EBOOK = "ebook"
    SCREEN = "screen"


DEFAULT_PRESET = QualityPreset.PREPRESS

# (menu key, preset, description) in the order the menu shows them
PRESET_MENU: Tuple[Tuple[str, QualityPreset, str], ...] = (
    ("1", QualityPreset.PREPRESS, "High quality for printing (recommended)"),
    ("2", QualityPreset.PRINTER, "Good quality for general printing"),
    ("3", QualityPreset.EBOOK, "Medium quality for screen viewing"),
    ("4", QualityPreset.SCREEN, "Lower quality for web/email"),
)


def preset_from_choice(choice: Optional[str]) -> QualityPreset:
    """
    Map a menu answer to a preset.

    Anything that is not one of the menu keys (including empty input)
    falls back to DEFAULT_PRESET; there is no retry.

    Examples:
        >>> preset_from_choice("3")
        <QualityPreset.EBOOK: 'ebook'>
        >>> preset_from_choice("x")
        <QualityPreset.PREPRESS: 'prepress'>
    """
    choice = (choice or "").strip()
    for key, preset, _ in PRESET_MENU:
        if choice == key:
            return preset
    return DEFAULT_PRESET


@dataclass(frozen=True)
class GhostscriptDefaults:
    device: str = "pdfwrite"
    compatibility_level: str = "1.4"
    color_image_resolution: int = 300
    gray_image_resolution: int = 300
    mono_image_resolution: int = 1200
    downsample_type: str = "Bicubic"
    optimize: bool = True
    fallback_path: str = "/opt/homebrew/bin/gs"
    command_name: str = "gs"


@dataclass(frozen=True)
class OutputDefaults:
    dir_name: str = "compressed"
    suffix: str = "_compressed"
    pattern: str = "*.pdf"


GS_DEFAULTS = GhostscriptDefaults()
OUTPUT_DEFAULTS = OutputDefaults()


def apply_ghostscript_overrides(**overrides) -> GhostscriptDefaults:
    """Return GS_DEFAULTS with any non-None keyword overrides applied."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    return replace(GS_DEFAULTS, **changes)


__all__ = [
    "QualityPreset",
    "DEFAULT_PRESET",
    "PRESET_MENU",
    "preset_from_choice",
    "GhostscriptDefaults",
    "OutputDefaults",
    "GS_DEFAULTS",
    "OUTPUT_DEFAULTS",
    "apply_ghostscript_overrides",
]
