"""
processes.py
------------
Process-table helpers: find a service's pids with psutil, probe and signal pids.
"""

import logging
import os
import signal

import psutil

logger = logging.getLogger(__name__)


def find_pids(binary_name: str) -> list[int]:
    """Pids of live processes named ``binary_name`` (pgrep-style), sorted. Zombies are skipped."""
    if not binary_name:
        return []
    pids = []
    for proc in psutil.process_iter(['pid', 'name', 'cmdline', 'status']):
        try:
            if proc.info['status'] == psutil.STATUS_ZOMBIE:
                continue
            cmdline = proc.info['cmdline'] or []
            if proc.info['name'] == binary_name or \
                    (cmdline and os.path.basename(cmdline[0]) == binary_name):
                pids.append(proc.info['pid'])
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    logger.debug(f"Processes matching {binary_name!r}: {pids}")
    return sorted(pids)


def pid_running(pid: int) -> bool:
    """Signal-0 probe. A pid owned by another user still counts as running."""
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


def terminate(pid: int) -> bool:
    """
    Send SIGTERM to ``pid``.
    Returns False if the process was already gone; other OSErrors propagate.
    """
    try:
        os.kill(pid, signal.SIGTERM)
    except ProcessLookupError:
        logger.debug(f"PID {pid} exited before SIGTERM could be delivered")
        return False
    logger.debug(f"Sent SIGTERM to {pid}")
    return True


__all__ = ["find_pids", "pid_running", "terminate"]
