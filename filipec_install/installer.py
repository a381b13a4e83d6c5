"""Install flow: pick the rc file for the invoking shell and register the alias."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TextIO

from filipec_install.config import InstallerConfig
from filipec_install.rcfile import WriteAction, append_alias, build_alias_line, replace_alias
from filipec_install.types import frozen_slots


class InstallError(Exception):
    """Base class for failures that abort an install."""


class MissingResourceFileError(InstallError):
    """The shell is supported but its rc file does not exist."""

    def __init__(self, shell: str, rc_file: Path) -> None:
        super().__init__(f"{rc_file} not found; cannot register the alias for {shell}.")
        self.shell = shell
        self.rc_file = rc_file


class UnrecognizedShellError(InstallError):
    """The invoking shell is neither of the supported shells."""

    def __init__(self, shell: str, supported: tuple[str, ...]) -> None:
        shown = shell or "<unknown>"
        super().__init__(
            f"Unrecognized shell '{shown}'. Supported shells: {', '.join(supported)}."
        )
        self.shell = shell


@frozen_slots
class InstallResult:
    """Outcome of a successful install."""

    shell: str
    rc_file: Path
    alias_line: str
    action: WriteAction

    @property
    def reload_command(self) -> str:
        return f"source {self.rc_file}"


def install(config: InstallerConfig, shell: str) -> InstallResult:
    """Register the alias in the rc file of *shell*.

    Args:
        config: Runtime configuration (alias name, script path, home, rc mapping).
        shell: Name of the invoking shell, e.g. ``"bash"``.

    Returns:
        What was written and where.

    Raises:
        UnrecognizedShellError: *shell* has no rc file mapping.
        MissingResourceFileError: the rc file does not exist. It is never created.
    """
    rc_file = config.rc_file_for(shell)
    if rc_file is None:
        raise UnrecognizedShellError(shell, config.supported_shells)
    if not rc_file.is_file():
        raise MissingResourceFileError(shell, rc_file)

    alias_line = build_alias_line(config.alias_name, config.script_path)
    if config.dedupe:
        action = replace_alias(rc_file, config.alias_name, alias_line)
    else:
        action = append_alias(rc_file, alias_line)

    return InstallResult(shell=shell, rc_file=rc_file, alias_line=alias_line, action=action)


def install_and_report(
    config: InstallerConfig,
    shell: str,
    out: TextIO = sys.stdout,
) -> InstallResult | None:
    """Run install and write the outcome to *out*.

    Returns:
        The result, or None if the install failed (the error is written to out).
    """
    try:
        result = install(config, shell)
    except InstallError as exc:
        if config.output_format == "json":
            format_error_json(exc, out)
        else:
            out.write(f"Error: {exc}\n")
        return None

    if config.output_format == "json":
        format_json(result, out)
    else:
        format_human(result, out)
    return result


_HUMAN_MESSAGES = {
    WriteAction.APPENDED: "Added alias to {rc}:",
    WriteAction.REPLACED: "Updated alias in {rc}:",
    WriteAction.UNCHANGED: "Alias already present in {rc}:",
}


def format_human(result: InstallResult, out: TextIO) -> None:
    """Write a human-readable install summary."""
    out.write(_HUMAN_MESSAGES[result.action].format(rc=result.rc_file) + "\n")
    out.write(f"  {result.alias_line}\n")
    # A child process cannot change the calling shell's aliases.
    out.write(f"Run '{result.reload_command}' or open a new terminal to use it.\n")


def format_json(result: InstallResult, out: TextIO) -> None:
    """Write a JSON-formatted install summary."""
    data = {
        "ok": True,
        "shell": result.shell,
        "rc_file": str(result.rc_file),
        "alias_line": result.alias_line,
        "action": result.action.value,
        "reload_command": result.reload_command,
    }
    json.dump(data, out, indent=2)
    out.write("\n")


def format_error_json(exc: InstallError, out: TextIO) -> None:
    data = {
        "ok": False,
        "error": type(exc).__name__,
        "message": str(exc),
    }
    json.dump(data, out, indent=2)
    out.write("\n")
