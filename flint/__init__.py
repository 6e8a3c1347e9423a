"""flint: start, stop and inspect Homebrew services and user launch agents."""

from .config import FlintPaths
from .errors import (
    DescriptorNotFound,
    FlintError,
    FormulaNotFound,
    ProgramNotFound,
    ServiceFailedToStart,
    ServiceFailedToStop,
)
from .launchd import ServiceDescriptor
from .manager import ServiceManager
from .providers import HomebrewService, ServiceSource, UserAgentService
from .state import RunState, ServiceStatus, StateStore

__all__ = [
    "DescriptorNotFound",
    "FlintError",
    "FlintPaths",
    "FormulaNotFound",
    "HomebrewService",
    "ProgramNotFound",
    "RunState",
    "ServiceDescriptor",
    "ServiceFailedToStart",
    "ServiceFailedToStop",
    "ServiceManager",
    "ServiceSource",
    "ServiceStatus",
    "StateStore",
    "UserAgentService",
]
