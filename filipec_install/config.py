"""Configuration handling for filipec-install."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from filipec_install.types import RcFileMap, frozen_slots

DEFAULT_ALIAS = "filipec"
DEFAULT_SCRIPT = Path("scripts") / "filipec"
DEFAULT_RC_FILES: RcFileMap = (
    ("bash", ".bashrc"),
    ("zsh", ".zshrc"),
)


@frozen_slots
class InstallerConfig:
    """Runtime configuration for a single install run."""

    script_path: Path
    home: Path
    alias_name: str = DEFAULT_ALIAS
    rc_files: RcFileMap = DEFAULT_RC_FILES
    dedupe: bool = True
    output_format: str = "human"

    @property
    def supported_shells(self) -> tuple[str, ...]:
        return tuple(shell for shell, _ in self.rc_files)

    def rc_file_for(self, shell: str) -> Path | None:
        """Return the rc file for *shell*, or None if the shell is not supported."""
        for name, rc_name in self.rc_files:
            if name == shell:
                return self.home / rc_name
        return None


def is_valid_alias_name(name: str) -> bool:
    """Return True if *name* can stand on the left of ``alias <name>=``."""
    return bool(name) and not any(c.isspace() or c in "='\"" for c in name)


class ConfigFileError(Exception):
    """Raised when pyproject.toml contains invalid filipec configuration."""


_TOML_KEY_TO_FIELD: dict[str, str] = {
    "alias": "alias_name",
    "script": "script_path",
    "dedupe": "dedupe",
    "format": "output_format",
}


def _require_string(toml_key: str, value: object) -> str:
    if not isinstance(value, str):
        raise ConfigFileError(
            f"[tool.filipec] '{toml_key}' must be a string, got {type(value).__name__}"
        )
    return value


def _convert_value(toml_key: str, field_name: str, value: object) -> object:
    """Validate and convert a single TOML value to its InstallerConfig-compatible type."""
    if field_name == "alias_name":
        name = _require_string(toml_key, value)
        if not is_valid_alias_name(name):
            raise ConfigFileError(
                f"[tool.filipec] '{toml_key}' is not a valid alias name: '{name}'"
            )
        return name

    if field_name == "script_path":
        return Path(_require_string(toml_key, value))

    if field_name == "dedupe":
        if not isinstance(value, bool):
            raise ConfigFileError(
                f"[tool.filipec] '{toml_key}' must be a boolean, got {type(value).__name__}"
            )
        return value

    if field_name == "output_format":
        fmt = _require_string(toml_key, value)
        if fmt not in {"human", "json"}:
            raise ConfigFileError(
                f"[tool.filipec] '{toml_key}' must be 'human' or 'json', got '{fmt}'"
            )
        return fmt

    raise ConfigFileError(f"[tool.filipec] unhandled field '{toml_key}'")


def _parse_toml_section(section: dict[str, Any]) -> dict[str, object]:
    """Validate and convert a [tool.filipec] dict into InstallerConfig-compatible fields."""
    result: dict[str, object] = {}
    for toml_key, value in section.items():
        field_name = _TOML_KEY_TO_FIELD.get(toml_key)
        if field_name is None:
            raise ConfigFileError(f"[tool.filipec] unknown key '{toml_key}'")
        result[field_name] = _convert_value(toml_key, field_name, value)
    return result


def load_file_config(path: Path | None = None) -> dict[str, object]:
    """Read [tool.filipec] from pyproject.toml, returning an InstallerConfig-compatible dict.

    Returns an empty dict if the file doesn't exist or has no [tool.filipec] section.
    """
    if path is None:
        path = Path("pyproject.toml")
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileError(f"Invalid TOML in {path}: {exc}") from None
    section = data.get("tool", {}).get("filipec")
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigFileError("[tool.filipec] must be a table")
    return _parse_toml_section(section)


def build_config(
    cli_overrides: dict[str, object],
    file_config: dict[str, object],
    *,
    cwd: Path,
    home: Path,
) -> InstallerConfig:
    """Merge file config and CLI overrides into an InstallerConfig.

    CLI values always win. *cwd* and *home* are captured once by the caller;
    the script path defaults to ``<cwd>/scripts/filipec`` and relative
    script paths are resolved against *cwd*.
    """
    merged: dict[str, object] = {"home": home}
    merged.update(file_config)
    merged.update(cli_overrides)

    script = merged.get("script_path", DEFAULT_SCRIPT)
    assert isinstance(script, Path)
    merged["script_path"] = script if script.is_absolute() else cwd / script

    return InstallerConfig(**merged)
