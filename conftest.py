import subprocess
import sys
from pathlib import Path

import pytest

# Add src to path so the package imports without an install
sys.path.insert(0, str(Path(__file__).parent / "src"))

from pdfsqueeze.tools import ghostscript_tools as GS  # noqa: E402


class FakeGhostscript:
    """
    Stand-in for subprocess.run inside ghostscript_tools.

    outcomes maps an input file name to (exit status, output size). Files
    not listed succeed and come out at half their size.
    """

    def __init__(self):
        self.outcomes = {}
        self.calls = []

    def __call__(self, cmd, *args, **kwargs):
        self.calls.append(list(cmd))
        src = Path(cmd[-1])
        out = next(Path(a.split("=", 1)[1]) for a in cmd if a.startswith("-sOutputFile="))
        rc, size = self.outcomes.get(src.name, (0, src.stat().st_size // 2))
        if rc == 0 and size is not None:
            out.write_bytes(b"\0" * size)
        return subprocess.CompletedProcess(cmd, rc)

    @property
    def inputs(self):
        return [Path(c[-1]).name for c in self.calls]

    def preset_of(self, call_index=0):
        arg = next(a for a in self.calls[call_index] if a.startswith("-dPDFSETTINGS="))
        return arg.split("/", 1)[1]


@pytest.fixture
def fake_gs(monkeypatch):
    fake = FakeGhostscript()
    monkeypatch.setattr(GS.subprocess, "run", fake)
    return fake


@pytest.fixture
def gs_binary(tmp_path):
    """An executable file that passes the preflight check."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    gs = bin_dir / "gs"
    gs.write_text("#!/bin/sh\nexit 0\n")
    gs.chmod(0o755)
    return str(gs)


@pytest.fixture
def pdf_dir(tmp_path):
    """Working directory, separate from the fake binary's location."""
    work = tmp_path / "work"
    work.mkdir()
    return work


def make_pdf(directory: Path, name: str, size: int) -> Path:
    p = directory / name
    p.write_bytes(b"%" * size)
    return p


@pytest.fixture
def make_file():
    return make_pdf


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("PDFSQUEEZE_GS", raising=False)
    # keep rich output free of ANSI styling
    monkeypatch.delenv("FORCE_COLOR", raising=False)
