"""CLI adapter for ``lib_container_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators inspect the merged result of a set of configuration files without
writing Python: dump the whole tree, read one dotted path, or list every key.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_read` – prints the merged configuration as JSON.
* :func:`cli_get` – prints the value stored under one dotted path.
* :func:`cli_keys` – prints every dotted key, one per line.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls
:func:`lib_container_config.core.read_config` and lets library errors travel to
``lib_cli_exit_tools``, which renders them and chooses the exit code.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import read_config

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

_pattern_option = click.option(
    "--pattern",
    "-p",
    "patterns",
    multiple=True,
    required=True,
    help="Glob pattern of configuration files (repeatable; later files win)",
)
_separator_option = click.option(
    "--separator",
    default=".",
    show_default=True,
    help="Separator used in dotted paths",
)
_indent_option = click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_container_config")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Layered configuration loader and container wiring helper",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_container_config",
    message="lib_container_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for error rendering."""

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_container_config")
    except metadata.PackageNotFoundError:
        click.echo("lib_container_config (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_container_config')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("read", context_settings=CLICK_CONTEXT_SETTINGS)
@_pattern_option
@_separator_option
@_indent_option
def cli_read(patterns: Sequence[str], separator: str, indent: Optional[int]) -> None:
    """Merge the matching files and print the result as JSON."""

    click.echo(read_config(patterns, separator=separator).to_json(indent=indent))


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@_pattern_option
@_separator_option
@_indent_option
def cli_get(key: str, patterns: Sequence[str], separator: str, indent: Optional[int]) -> None:
    """Print the value stored under KEY as JSON."""

    value = read_config(patterns, separator=separator).get(key)
    click.echo(json.dumps(value, indent=indent, separators=(",", ":"), ensure_ascii=False))


@cli.command("keys", context_settings=CLICK_CONTEXT_SETTINGS)
@_pattern_option
@_separator_option
def cli_keys(patterns: Sequence[str], separator: str) -> None:
    """Print every dotted key of the merged configuration, one per line."""

    for key in read_config(patterns, separator=separator).keys():
        click.echo(key)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_container_config",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
