"""Where a service's stdout and stderr go."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from .config import FlintPaths
from .errors import LogConfigError
from .launchd import ServiceDescriptor

logger = logging.getLogger(__name__)


class LogConfig(BaseModel):
    """Per-formula override read from ~/.config/flint/<formula>.json."""

    standard_out_path: str | None = None
    standard_error_path: str | None = None


class ServiceLog:
    """
    Resolve the log files of one formula.

    Precedence: the per-formula JSON override, then the descriptor's
    StandardOutPath/StandardErrorPath, then ~/Library/Logs/Flint/<formula>.log
    and <formula>_error.log. A stream left unset by the winning source gets
    its default file.
    """

    def __init__(self, formula: str, descriptor: ServiceDescriptor, paths: FlintPaths):
        self.formula = formula
        self.config_path = paths.config_dir / f"{formula}.json"
        self.default_stdout = paths.log_dir / f"{formula}.log"
        self.default_stderr = paths.log_dir / f"{formula}_error.log"
        self.stdout_path, self.stderr_path = self._resolve_paths(descriptor)

    def _resolve_paths(self, descriptor: ServiceDescriptor) -> tuple[Path, Path]:
        if self.config_path.exists():
            config = load_log_config(self.config_path)
            logger.debug(f"Using log override {self.config_path} for '{self.formula}'")
            return self._or_default(config.standard_out_path, config.standard_error_path)
        if descriptor.stdout_path is not None or descriptor.stderr_path is not None:
            return self._or_default(descriptor.stdout_path, descriptor.stderr_path)
        return self.default_stdout, self.default_stderr

    def _or_default(self, stdout: str | None, stderr: str | None) -> tuple[Path, Path]:
        return (
            Path(stdout) if stdout else self.default_stdout,
            Path(stderr) if stderr else self.default_stderr,
        )

    def create_log_dirs(self) -> None:
        for path in (self.stdout_path, self.stderr_path):
            path.parent.mkdir(parents=True, exist_ok=True)


def load_log_config(path: Path) -> LogConfig:
    raw = path.read_text()
    try:
        payload = _load_text_payload(raw)
    except json.JSONDecodeError as exc:
        raise LogConfigError(path, str(exc)) from exc
    if not isinstance(payload, dict):
        raise LogConfigError(path, "expected an object")
    try:
        return LogConfig.model_validate(payload)
    except ValidationError as exc:
        raise LogConfigError(path, str(exc)) from exc


def _load_text_payload(text: str) -> Any:
    """Interpret raw text as YAML first, falling back to JSON."""
    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError:
        return json.loads(text)


__all__ = ["LogConfig", "ServiceLog", "load_log_config"]
