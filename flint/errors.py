"""Exceptions raised by the flint service manager."""

import logging

mylogger = logging.getLogger(__name__)


class FlintError(Exception):
    """Base exception with a human-readable message."""
    def __init__(self, message="A flint error occurred", log=False):
        self.message = message
        super().__init__(self.message)
        if log:
            mylogger.error(message)


# resolution errors

class FormulaNotFound(FlintError):
    def __init__(self, formula: str, log=False):
        self.formula = formula
        super().__init__(f"No available formula with the name '{formula}'", log)


class DescriptorNotFound(FlintError):
    def __init__(self, formula: str, log=False):
        self.formula = formula
        super().__init__(f"No plist found for formula '{formula}'", log)


# precondition errors

class ProgramNotFound(FlintError):
    def __init__(self, formula: str, program: str, log=False):
        self.formula = formula
        self.program = program
        super().__init__(f"Program '{program}' not found for formula '{formula}'", log)


# runtime errors

class ServiceFailedToStart(FlintError):
    def __init__(self, formula: str, code: int, log=False):
        self.formula = formula
        self.code = code
        super().__init__(f"Service '{formula}' failed to start with exit code {code}", log)


class ServiceFailedToStop(FlintError):
    def __init__(self, formula: str, pid: int, reason: str, log=False):
        self.formula = formula
        self.pid = pid
        self.reason = reason
        super().__init__(f"Service '{formula}' with PID {pid} failed to stop: {reason}", log)


# decode / environment errors

class DescriptorDecodeError(FlintError):
    def __init__(self, path, reason: str, log=False):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid service descriptor '{path}': {reason}", log)


class StateDecodeError(FlintError):
    def __init__(self, path, reason: str, log=False):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid state file '{path}': {reason}", log)


class LogConfigError(FlintError):
    def __init__(self, path, reason: str, log=False):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid log config '{path}': {reason}", log)


class MissingEnvironmentVariable(FlintError):
    def __init__(self, name: str, log=False):
        self.name = name
        super().__init__(f"Environment variable '{name}' is not set", log)


__all__ = [
    "FlintError",
    "FormulaNotFound",
    "DescriptorNotFound",
    "ProgramNotFound",
    "ServiceFailedToStart",
    "ServiceFailedToStop",
    "DescriptorDecodeError",
    "StateDecodeError",
    "LogConfigError",
    "MissingEnvironmentVariable",
]
