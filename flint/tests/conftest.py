import os
import plistlib
import signal
import stat
from pathlib import Path

import pytest

from flint import launchctl
from flint.config import FlintPaths
from flint.processes import find_pids


@pytest.fixture(autouse=True)
def no_launchctl(monkeypatch):
    """Never talk to the real launchd from tests."""
    monkeypatch.setattr(launchctl, "LAUNCHCTL", "flint-test-no-such-launchctl")


@pytest.fixture
def paths(tmp_path) -> FlintPaths:
    home = tmp_path / "home"
    home.mkdir()
    return FlintPaths(home=home, homebrew_root=tmp_path / "opt", state_root=tmp_path / "state")


@pytest.fixture
def write_homebrew(paths):
    """Install a fake Homebrew formula with the given descriptor dict."""
    def _write(formula: str, descriptor: dict | None) -> Path:
        formula_dir = paths.homebrew_root / formula
        formula_dir.mkdir(parents=True, exist_ok=True)
        plist_path = formula_dir / f"homebrew.mxcl.{formula}.plist"
        if descriptor is not None:
            plist_path.write_bytes(plistlib.dumps(descriptor))
        return plist_path
    return _write


@pytest.fixture
def write_agent(paths):
    """Register a fake user launch agent file."""
    def _write(file_name: str, descriptor: dict) -> Path:
        paths.launch_agents_dir.mkdir(parents=True, exist_ok=True)
        plist_path = paths.launch_agents_dir / file_name
        plist_path.write_bytes(plistlib.dumps(descriptor))
        return plist_path
    return _write


@pytest.fixture
def sleeper(tmp_path):
    """
    An executable script that prints a line and keeps running until SIGTERM.
    Yields its path; any leftover processes are killed afterwards.
    """
    script = tmp_path / "bin" / "flint-sleeper"
    script.parent.mkdir()
    script.write_text("#!/bin/sh\ntrap 'exit 0' TERM\necho hello\nwhile :; do sleep 0.1; done\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    yield script
    for pid in find_pids(script.name):
        try:
            os.kill(pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
