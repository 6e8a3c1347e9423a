"""Pydantic model for launchd-style service descriptors (plist files)."""

from __future__ import annotations

import logging
import plistlib
from pathlib import Path
from typing import Any
from xml.parsers.expat import ExpatError

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import DescriptorDecodeError

logger = logging.getLogger(__name__)


class ServiceDescriptor(BaseModel):
    """How to launch one service.

    A descriptor names its executable either with ``Program`` (and then
    ``ProgramArguments`` are the arguments), or only with
    ``ProgramArguments`` whose first element is the executable.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    program_path: str | None = Field(default=None, validation_alias=AliasChoices("Program", "program"))
    arguments: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("ProgramArguments", "args", "arguments")
    )
    working_directory: str = Field(
        default=".", validation_alias=AliasChoices("WorkingDirectory", "working_directory")
    )
    stdout_path: str | None = Field(default=None, validation_alias=AliasChoices("StandardOutPath", "stdout_path"))
    stderr_path: str | None = Field(default=None, validation_alias=AliasChoices("StandardErrorPath", "stderr_path"))

    @model_validator(mode="after")
    def _check_program(self) -> ServiceDescriptor:
        if self.program_path is None and not self.arguments:
            raise ValueError("either Program or a non-empty ProgramArguments is required")
        return self

    @property
    def program(self) -> str:
        if self.program_path is not None:
            return self.program_path
        return self.arguments[0]

    @property
    def args(self) -> list[str]:
        if self.program_path is not None:
            return list(self.arguments)
        return list(self.arguments[1:])

    @property
    def binary_name(self) -> str:
        return Path(self.program).name

    def program_exists(self) -> bool:
        return Path(self.program).exists()


def decode(data: bytes, source: Any = "<bytes>") -> ServiceDescriptor:
    """Decode plist bytes (XML or binary) into a ServiceDescriptor.

    Raises DescriptorDecodeError for unreadable documents or documents that do
    not describe a program.
    """
    try:
        payload = plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError) as exc:
        raise DescriptorDecodeError(source, str(exc) or type(exc).__name__) from exc
    if not isinstance(payload, dict):
        raise DescriptorDecodeError(source, "top-level object is not a dictionary")
    try:
        return ServiceDescriptor.model_validate(payload)
    except ValidationError as exc:
        raise DescriptorDecodeError(source, str(exc)) from exc


def load(path: str | Path) -> ServiceDescriptor:
    """Read and decode the descriptor at ``path``. OSError propagates."""
    data = Path(path).read_bytes()
    descriptor = decode(data, source=path)
    logger.debug(f"Loaded descriptor {path}: program={descriptor.program!r} args={descriptor.args!r}")
    return descriptor


__all__ = ["ServiceDescriptor", "decode", "load"]
