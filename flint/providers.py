"""
providers.py
------------
Locate the service descriptor behind a formula name.

Two providers exist and are tried in a fixed order:
    HomebrewProvider   - <homebrew_root>/<formula>/homebrew.mxcl.<formula>.plist
    UserAgentProvider  - any file in ~/Library/LaunchAgents ending in <formula>.plist

A successful lookup yields a ServiceSource, which is either a HomebrewService
or a UserAgentService.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union

from .config import FlintPaths
from .errors import DescriptorNotFound, FormulaNotFound

logger = logging.getLogger(__name__)

HOMEBREW_NAMESPACE = "homebrew.mxcl"
# short names starting with this come from Homebrew's own agents
RESERVED_PREFIX = "mxcl."
DESCRIPTOR_SUFFIX = ".plist"


def homebrew_label(formula: str) -> str:
    return f"{HOMEBREW_NAMESPACE}.{formula}"


def check_formula(formula: str) -> None:
    """Reject names that are empty or would leave the provider directories."""
    if not formula or formula in (".", "..") or "/" in formula or os.sep in formula:
        raise FormulaNotFound(formula)


@dataclass(frozen=True)
class HomebrewService:
    """A service installed by the package manager."""

    formula: str
    descriptor_path: Path


@dataclass(frozen=True)
class UserAgentService:
    """A service registered as a per-user launch agent."""

    formula: str
    descriptor_path: Path


ServiceSource = Union[HomebrewService, UserAgentService]


class DescriptorProvider(Protocol):
    """Interface shared by the two descriptor providers."""

    title: str

    def resolve(self, formula: str) -> ServiceSource: ...
    def formulas(self) -> list[str]: ...


class HomebrewProvider:
    title = "Homebrew service"

    def __init__(self, paths: FlintPaths):
        self.root = paths.homebrew_root

    def descriptor_path(self, formula: str) -> Path:
        return self.root / formula / f"{homebrew_label(formula)}{DESCRIPTOR_SUFFIX}"

    def resolve(self, formula: str) -> HomebrewService:
        """
        Raises FormulaNotFound if the formula is not installed,
        DescriptorNotFound if it is installed without a descriptor.
        """
        check_formula(formula)
        if not (self.root / formula).exists():
            raise FormulaNotFound(formula)
        path = self.descriptor_path(formula)
        if not path.exists():
            raise DescriptorNotFound(formula)
        return HomebrewService(formula=formula, descriptor_path=path)

    def formulas(self) -> list[str]:
        """Installed formulas that ship a descriptor, sorted by name."""
        if not self.root.is_dir():
            logger.debug(f"Homebrew root {self.root} does not exist")
            return []
        found = []
        with os.scandir(self.root) as entries:
            for entry in entries:
                if self.descriptor_path(entry.name).exists():
                    found.append(entry.name)
        return sorted(found)


class UserAgentProvider:
    title = "Service user agent"

    def __init__(self, paths: FlintPaths):
        self.agents_dir = paths.launch_agents_dir

    def find_descriptor(self, formula: str) -> Path | None:
        """Return the first agent file whose name ends in <formula>.plist.

        The first match in directory iteration order wins; when several agents
        share a suffix, which one is returned depends on the filesystem.
        """
        suffix = f"{formula}{DESCRIPTOR_SUFFIX}"
        with os.scandir(self.agents_dir) as entries:
            for entry in entries:
                if entry.name.endswith(suffix):
                    return Path(entry.path)
        return None

    def resolve(self, formula: str) -> UserAgentService:
        check_formula(formula)
        try:
            path = self.find_descriptor(formula)
        except (FileNotFoundError, NotADirectoryError):
            logger.debug(f"Launch agents directory {self.agents_dir} does not exist")
            path = None
        if path is None or not path.exists():
            raise DescriptorNotFound(formula)
        return UserAgentService(formula=formula, descriptor_path=path)

    def formulas(self) -> list[str]:
        """Short names of every agent descriptor, without Homebrew's own agents."""
        if not self.agents_dir.is_dir():
            logger.debug(f"Launch agents directory {self.agents_dir} does not exist")
            return []
        found = []
        with os.scandir(self.agents_dir) as entries:
            for entry in entries:
                if not entry.name.endswith(DESCRIPTOR_SUFFIX):
                    continue
                formula = short_name(entry.name)
                if formula.startswith(RESERVED_PREFIX):
                    continue
                found.append(formula)
        return sorted(found)


def short_name(file_name: str) -> str:
    """
    Turn an agent file name into a formula name.
    'com.example.app.plist' -> 'example.app', 'local.app.plist' -> 'app', 'app.plist' -> 'app'
    """
    name = file_name.removesuffix(DESCRIPTOR_SUFFIX)
    parts = name.split(".")
    if len(parts) >= 3:
        return ".".join(parts[-2:])
    if len(parts) == 2:
        return parts[-1]
    return name


def providers(paths: FlintPaths) -> list[DescriptorProvider]:
    """The providers in resolution order: Homebrew first, then user agents."""
    return [HomebrewProvider(paths), UserAgentProvider(paths)]


def resolve(formula: str, paths: FlintPaths) -> ServiceSource:
    """
    Resolve a formula against each provider in turn.
    A provider that cannot find the formula or its descriptor falls through to
    the next one; FormulaNotFound is raised when none of them can.
    """
    check_formula(formula)
    for provider in providers(paths):
        try:
            source = provider.resolve(formula)
        except (FormulaNotFound, DescriptorNotFound) as exc:
            logger.debug(f"{provider.title}: {exc.message}")
            continue
        logger.debug(f"Resolved '{formula}' to {source.descriptor_path}")
        return source
    raise FormulaNotFound(formula)


__all__ = [
    "DescriptorProvider",
    "HomebrewProvider",
    "HomebrewService",
    "ServiceSource",
    "UserAgentProvider",
    "UserAgentService",
    "check_formula",
    "homebrew_label",
    "providers",
    "resolve",
    "short_name",
]
