"""Shell rc file management: build, find and write ``alias`` definitions."""

from __future__ import annotations

import enum
import os
import re
import shutil
import tempfile
from pathlib import Path

BACKUP_SUFFIX = ".filipec-backup"


class WriteAction(enum.Enum):
    """What happened to the rc file during an install."""

    APPENDED = "appended"
    REPLACED = "replaced"
    UNCHANGED = "unchanged"


def build_alias_line(alias_name: str, script_path: Path | str) -> str:
    """Build the alias definition, quoted verbatim with no further escaping."""
    return f'alias {alias_name}="{script_path}"'


def _definition_pattern(alias_name: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*alias\s+{re.escape(alias_name)}=")


def find_alias_definitions(content: str, alias_name: str) -> list[int]:
    """Return the 0-based indices of lines that define *alias_name*."""
    pattern = _definition_pattern(alias_name)
    return [i for i, line in enumerate(content.splitlines()) if pattern.match(line)]


def _backup(rc_file: Path) -> Path | None:
    """Create a one-time backup of the rc file. Returns backup path or None if already backed up."""
    backup_path = rc_file.parent / f"{rc_file.name}{BACKUP_SUFFIX}"
    if not backup_path.exists() and rc_file.exists():
        shutil.copy2(rc_file, backup_path)
        return backup_path
    return None


def append_alias(rc_file: Path, alias_line: str) -> WriteAction:
    """Append *alias_line* to the end of *rc_file*, whatever it already contains."""
    with open(rc_file, "rb") as f:
        f.seek(0, 2)
        needs_newline = False
        if f.tell() > 0:
            f.seek(-1, 2)
            needs_newline = f.read(1) != b"\n"

    with open(rc_file, "a", encoding="utf-8", errors="surrogateescape") as f:
        if needs_newline:
            f.write("\n")
        f.write(f"{alias_line}\n")
    return WriteAction.APPENDED


def _read_rc(rc_file: Path) -> str:
    """Read *rc_file* so that undecodable bytes and line endings survive a rewrite."""
    with open(rc_file, encoding="utf-8", errors="surrogateescape", newline="") as f:
        return f.read()


def _write_rc(rc_file: Path, content: str) -> None:
    """Replace *rc_file* with *content* through a sibling temp file."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{rc_file.name}.", dir=rc_file.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(content)
        shutil.copymode(rc_file, tmp_path)
        os.replace(tmp_path, rc_file)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def _line_ending(line: str) -> str:
    body = line.rstrip("\r\n")
    return line[len(body):] or "\n"


def replace_alias(rc_file: Path, alias_name: str, alias_line: str) -> WriteAction:
    """Ensure *rc_file* holds exactly one definition of *alias_name*, equal to *alias_line*.

    Appends when no definition exists. Otherwise the first definition is
    rewritten in place, keeping its line ending, and any later ones are
    dropped. Every other byte of the file is left as it was.
    """
    content = _read_rc(rc_file)
    indices = find_alias_definitions(content, alias_name)
    if not indices:
        return append_alias(rc_file, alias_line)

    lines = content.splitlines(keepends=True)
    if len(indices) == 1 and lines[indices[0]].rstrip("\r\n") == alias_line:
        return WriteAction.UNCHANGED

    _backup(rc_file)

    first = indices[0]
    drop = set(indices[1:])
    result = []
    for i, line in enumerate(lines):
        if i == first:
            result.append(alias_line + _line_ending(line))
        elif i not in drop:
            result.append(line)
    _write_rc(rc_file, "".join(result))
    return WriteAction.REPLACED
