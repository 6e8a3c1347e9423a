"""
state.py
--------
The per-formula run-state file, /tmp/flint/<formula>.state.json.

This is the only state flint keeps between invocations. There is no locking:
two invocations on the same formula can interleave their read-modify-write
and lose an update.
"""

from __future__ import annotations

import logging
import os
import tempfile
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, PositiveInt, ValidationError

from .config import FlintPaths
from .errors import StateDecodeError

logger = logging.getLogger(__name__)


class ServiceStatus(str, Enum):
    RUNNING = "Running"
    STOPPED = "Stopped"
    STALE = "Stale"

    def __str__(self) -> str:
        return self.value


class RunState(BaseModel):
    """Last known pid set and status of a formula."""

    pids: list[PositiveInt]
    status: ServiceStatus

    @property
    def is_running(self) -> bool:
        return self.status == ServiceStatus.RUNNING


class StateStore:
    """Read and write the run state of one formula."""

    def __init__(self, formula: str, paths: FlintPaths):
        self.formula = formula
        self.path: Path = paths.state_root / f"{formula}.state.json"

    def read(self) -> RunState:
        """
        Return the stored state.
        A missing or unreadable file is a Stale state; a file that exists but
        does not parse raises StateDecodeError.
        """
        try:
            contents = self.path.read_bytes()
        except OSError as exc:
            logger.debug(f"No readable state for '{self.formula}' ({exc}), reporting Stale")
            return RunState(pids=[], status=ServiceStatus.STALE)
        try:
            return RunState.model_validate_json(contents)
        except ValidationError as exc:
            raise StateDecodeError(self.path, str(exc)) from exc

    def write_running(self, pids: list[int]) -> None:
        self._write(RunState(pids=list(pids), status=ServiceStatus.RUNNING))

    def write_stopped(self) -> None:
        state = self.read()
        self._write(RunState(pids=state.pids, status=ServiceStatus.STOPPED))

    def _write(self, state: RunState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = state.model_dump_json(indent=2)
        # write next to the target, then rename over it
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.formula}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug(f"Wrote state for '{self.formula}' to {self.path}: {payload}")


__all__ = ["RunState", "ServiceStatus", "StateStore"]
