"""CLI interface for filipec-install using Click."""

import sys
from pathlib import Path

import click

from filipec_install import __version__
from filipec_install.config import (
    ConfigFileError,
    build_config,
    is_valid_alias_name,
    load_file_config,
)
from filipec_install.detect import detect_shell, normalize_shell_name
from filipec_install.installer import install_and_report


def _collect_explicit_args(ctx: click.Context, **kwargs: object) -> dict[str, object]:
    """Return only the kwargs whose values were explicitly set on the command line."""
    explicit: dict[str, object] = {}
    for param_name, value in kwargs.items():
        source = ctx.get_parameter_source(param_name)
        if source is click.core.ParameterSource.COMMANDLINE:
            if param_name == "append_always":
                explicit["dedupe"] = not value
            elif param_name == "script":
                explicit["script_path"] = Path(value)
            elif param_name == "alias":
                explicit["alias_name"] = value
            elif param_name == "home":
                explicit["home"] = Path(value)
            else:
                explicit[param_name] = value
    return explicit


def _validate_alias(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if not is_valid_alias_name(value):
        raise click.BadParameter(f"'{value}' is not a valid alias name.")
    return value


def _normalize_shell(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is None:
        return None
    return normalize_shell_name(value)


@click.command()
@click.version_option(version=__version__, prog_name="filipec-install")
@click.option(
    "--shell",
    default=None,
    callback=_normalize_shell,
    help="Shell to install for (default: detected from the parent process).",
)
@click.option(
    "--script",
    type=click.Path(dir_okay=False),
    default=None,
    help="Script the alias points at (default: ./scripts/filipec).",
)
@click.option(
    "--alias",
    default="filipec",
    callback=_validate_alias,
    show_default=True,
    help="Alias name to register.",
)
@click.option(
    "--home",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Home directory holding the rc files (default: ~).",
)
@click.option(
    "--append-always",
    is_flag=True,
    default=False,
    help="Append the alias even if a definition already exists.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    show_default=True,
    help="Output format.",
)
@click.pass_context
def main(ctx, shell, script, alias, home, append_always, output_format):
    """Register the filipec alias in your bash or zsh rc file.

    The shell is detected from the invoking process and the alias is
    written to ~/.bashrc or ~/.zshrc, which must already exist.
    """
    cli_overrides = _collect_explicit_args(
        ctx,
        script=script,
        alias=alias,
        home=home,
        append_always=append_always,
        output_format=output_format,
    )

    try:
        file_config = load_file_config()
    except ConfigFileError as exc:
        raise click.ClickException(str(exc)) from None

    config = build_config(cli_overrides, file_config, cwd=Path.cwd(), home=Path.home())

    if shell is None:
        shell = detect_shell()

    result = install_and_report(config, shell, out=sys.stdout)
    raise SystemExit(0 if result is not None else 1)
