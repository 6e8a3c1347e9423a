"""Filesystem roots used by the service manager."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, Field

from .errors import MissingEnvironmentVariable

HOMEBREW_ROOT = Path("/opt/homebrew/opt")
STATE_ROOT = Path("/tmp/flint")


class FlintPaths(BaseModel):
    """Every directory the manager reads or writes, resolved once per invocation."""

    home: Path
    homebrew_root: Path = Field(default=HOMEBREW_ROOT, description="Package-manager installation root")
    state_root: Path = Field(default=STATE_ROOT, description="Directory holding <formula>.state.json files")

    @property
    def launch_agents_dir(self) -> Path:
        return self.home / "Library" / "LaunchAgents"

    @property
    def config_dir(self) -> Path:
        return self.home / ".config" / "flint"

    @property
    def log_dir(self) -> Path:
        return self.home / "Library" / "Logs" / "Flint"

    @property
    def app_log_file(self) -> Path:
        return self.home / ".flint" / "log.txt"

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> FlintPaths:
        """Build the paths from ``HOME``; raises MissingEnvironmentVariable if unset."""
        env = os.environ if environ is None else environ
        home = env.get("HOME")
        if not home:
            raise MissingEnvironmentVariable("HOME")
        return cls(home=Path(home))


__all__ = ["FlintPaths", "HOMEBREW_ROOT", "STATE_ROOT"]
