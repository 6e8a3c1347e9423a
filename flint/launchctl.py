"""
launchctl.py
------------
Thin wrapper over the macOS ``launchctl`` command.

Only two things are needed: whether launchd currently manages a label, and
unloading a descriptor. On hosts without launchctl nothing is managed.
"""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

LAUNCHCTL = "launchctl"


def is_managed(label: str) -> bool:
    """True if ``launchctl list`` mentions ``label``."""
    try:
        proc = subprocess.run([LAUNCHCTL, "list"], stdout=subprocess.PIPE, stderr=subprocess.DEVNULL, text=True)
    except FileNotFoundError:
        logger.debug("launchctl not available, assuming nothing is managed by launchd")
        return False
    return label in proc.stdout


def unload(descriptor_path: Path) -> None:
    """Best-effort ``launchctl unload``; failures are logged and ignored."""
    try:
        proc = subprocess.run(
            [LAUNCHCTL, "unload", str(descriptor_path)],
            stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, text=True,
        )
    except OSError as exc:
        logger.debug(f"launchctl unload {descriptor_path} failed: {exc}")
        return
    if proc.returncode != 0:
        logger.debug(f"launchctl unload {descriptor_path} exited with {proc.returncode}: {proc.stderr.strip()}")
    else:
        logger.info(f"Unloaded {descriptor_path} from launchd")


__all__ = ["is_managed", "unload"]
