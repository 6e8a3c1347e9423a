"""
manager.py
----------
Start, stop and report on one formula.

A ServiceManager is built per invocation: it resolves the formula to a
descriptor, decodes it, and works against the state file and the live process
table. There is no resident supervisor; the state file is the only thing that
survives between runs.
"""

from __future__ import annotations

import logging
import subprocess
import time

from common.app_setup import print_and_log, print_error

from . import launchctl, processes
from .config import FlintPaths
from .errors import FlintError, ProgramNotFound, ServiceFailedToStart, ServiceFailedToStop
from .launchd import ServiceDescriptor, load
from .providers import ServiceSource, homebrew_label, providers, resolve
from .service_log import ServiceLog
from .state import RunState, StateStore

logger = logging.getLogger(__name__)

# seconds to wait after spawning / signalling before looking again
GRACE_PERIOD = 0.5


class ServiceManager:
    """Lifecycle operations for a single formula."""

    def __init__(self, formula: str, paths: FlintPaths | None = None):
        self.paths = paths or FlintPaths.from_environment()
        self.service: ServiceSource = resolve(formula, self.paths)
        self.descriptor: ServiceDescriptor = load(self.service.descriptor_path)
        self.log = ServiceLog(formula, self.descriptor, self.paths)
        self.state = StateStore(formula, self.paths)

    @property
    def formula(self) -> str:
        return self.service.formula

    def start(self) -> None:
        """
        Launch the service unless the state file already says it is running.

        The child gets GRACE_PERIOD to crash; if it is still up, the pids of
        every process named like the descriptor's binary are recorded.
        """
        if self.state.read().is_running:
            print_and_log(f"Service '{self.formula}' is already running.")
            return

        if not self.descriptor.program_exists():
            raise ProgramNotFound(self.formula, self.descriptor.program)

        self.log.create_log_dirs()
        print_and_log(f"Logging into paths:\n{self.log.stdout_path}\n{self.log.stderr_path}")
        cmd = [self.descriptor.program, *self.descriptor.args]
        logger.debug(f"Spawning {cmd} in {self.descriptor.working_directory}")
        with open(self.log.stdout_path, "w") as out, open(self.log.stderr_path, "w") as err:
            proc = subprocess.Popen(
                cmd,
                cwd=self.descriptor.working_directory,
                stdin=subprocess.DEVNULL,
                stdout=out,
                stderr=err,
                close_fds=True,
                start_new_session=True,
            )

        time.sleep(GRACE_PERIOD)
        returncode = proc.poll()
        if returncode is not None:
            # negative return codes mean the child was killed by a signal
            code = returncode if returncode >= 0 else -1
            print_and_log(f"Service exited early with status: {returncode}")
            raise ServiceFailedToStart(self.formula, code)

        pids = processes.find_pids(self.descriptor.binary_name)
        if not pids:
            logger.warning(f"No process named {self.descriptor.binary_name!r} found, recording spawned PID {proc.pid}")
            pids = [proc.pid]
        self.state.write_running(pids)
        print_and_log(f"Service '{self.formula}' started")

    def stop(self) -> None:
        """
        Unload from launchd if it manages the formula, then SIGTERM every
        recorded pid that is still alive. The first pid that cannot be
        signalled aborts the stop with ServiceFailedToStop.
        """
        if launchctl.is_managed(homebrew_label(self.formula)):
            launchctl.unload(self.service.descriptor_path)

        for pid in self.state.read().pids:
            if not processes.pid_running(pid):
                logger.debug(f"PID {pid} of '{self.formula}' is not running, skipping")
                continue
            try:
                processes.terminate(pid)
            except OSError as exc:
                raise ServiceFailedToStop(self.formula, pid, exc.strerror or str(exc)) from exc

        time.sleep(GRACE_PERIOD)
        self.state.write_stopped()
        print_and_log(f"Service '{self.formula}' stopped successfully.")

    def status(self) -> RunState:
        """Report what the state file says. Pids are not re-probed."""
        state = self.state.read()
        if state.is_running:
            print_and_log(f"Service '{self.formula}' is running.")
        else:
            print_and_log(f"Service '{self.formula}' is not running.")
        return state

    def status_line(self) -> str:
        return f"{self.formula:<20} {self.state.read().status}"


def collect_managers(paths: FlintPaths) -> list[tuple[str, list[ServiceManager]]]:
    """
    Every listable formula, grouped by provider (Homebrew first).
    Formulas that fail to resolve or decode are left out.
    """
    sections = []
    for provider in providers(paths):
        managers = []
        for formula in provider.formulas():
            try:
                managers.append(ServiceManager(formula, paths))
            except (FlintError, OSError) as exc:
                logger.debug(f"Skipping '{formula}': {exc}")
        sections.append((provider.title, managers))
    return sections


def print_states(paths: FlintPaths) -> None:
    for title, managers in collect_managers(paths):
        print_and_log("-" * 30)
        print_and_log(title)
        print_and_log("-" * 30)
        for manager in managers:
            try:
                print_and_log(manager.status_line())
            except FlintError as exc:
                print_error(f"Error printing state: {exc.message}")


__all__ = ["GRACE_PERIOD", "ServiceManager", "collect_managers", "print_states"]
