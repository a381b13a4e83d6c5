"""Shell detection: name the command of the process that invoked the installer."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path


def normalize_shell_name(command: str) -> str:
    """Reduce a process command such as ``/bin/bash`` or ``-zsh`` to ``bash``/``zsh``."""
    command = command.strip()
    if not command:
        return ""
    return Path(command.split()[0]).name.lstrip("-")


def parent_process_command(ppid: int | None = None) -> str | None:
    """Return the command name of the parent process via ``ps``, or None on failure."""
    if ppid is None:
        ppid = os.getppid()
    try:
        result = subprocess.run(
            ["ps", "-p", str(ppid), "-o", "comm="],
            capture_output=True,
            text=True,
            timeout=2,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def detect_shell(environ: dict[str, str] | None = None) -> str:
    """Resolve the invoking shell's name.

    The parent process command is read first. When ``ps`` is unavailable,
    the basename of ``$SHELL`` is used instead. Returns an empty string if
    neither source is available.
    """
    command = parent_process_command()
    if command:
        return normalize_shell_name(command)

    if environ is None:
        environ = dict(os.environ)
    return normalize_shell_name(environ.get("SHELL", ""))
