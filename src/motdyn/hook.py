"""
Login hook management for motdyn.

Installs a script into the system-wide profile directory so login shells run
``motdyn``, removes it again, and reports whether it is present.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger("motdyn.hook")

PROFILE_DIR = "/etc/profile.d"
SCRIPT_NAME = "motdyn.sh"
SCRIPT_MODE = 0o755

HOOK_SCRIPT = """#!/bin/sh
# This script is auto-generated by 'motdyn install'.
# It will run 'motdyn' on login.
if [ -x "$(command -v motdyn)" ]; then
    motdyn
fi
"""


class HookError(Exception):
    """Raised when the login hook cannot be installed or removed."""


def script_path(profile_dir: str = PROFILE_DIR) -> Path:
    return Path(profile_dir) / SCRIPT_NAME


def install(profile_dir: str = PROFILE_DIR) -> Path:
    """Write the hook script and make it executable."""
    directory = Path(profile_dir)
    if not directory.exists():
        raise HookError(f"Directory '{profile_dir}' not found, cannot install system-wide script.")

    path = script_path(profile_dir)
    try:
        path.write_text(HOOK_SCRIPT, encoding="utf-8")
        os.chmod(path, SCRIPT_MODE)
    except OSError as e:
        raise HookError(str(e)) from e
    logger.info("Installed login hook: %s", path)
    return path


def uninstall(profile_dir: str = PROFILE_DIR) -> bool:
    """Remove the hook script; returns whether there was one to remove."""
    path = script_path(profile_dir)
    if not path.exists():
        return False
    try:
        path.unlink()
    except OSError as e:
        raise HookError(str(e)) from e
    logger.info("Removed login hook: %s", path)
    return True


def status(profile_dir: str = PROFILE_DIR) -> bool:
    return script_path(profile_dir).exists()


def status_message(profile_dir: str = PROFILE_DIR) -> str:
    path = script_path(profile_dir)
    if status(profile_dir):
        return f"The system IS installed with motdyn script at {path}"
    return f"The system is NOT installed with motdyn (no {path})."
