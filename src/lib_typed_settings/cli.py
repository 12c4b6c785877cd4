"""CLI adapter for ``lib_typed_settings`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators validate an application's settings schema against real data
sources (``.env`` files, JSON/TOML/YAML files, the environment) without
writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_check` – resolves a schema and prints values, results or issues.
* :func:`cli_dotenv` – prints the data object scanned from a ``.env`` file.
* :func:`cli_schema` – prints the description tree of a schema.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The outermost layer. It imports schemas by ``module:attribute`` reference and
calls the composition root (:mod:`lib_typed_settings.core`) only.
"""

from __future__ import annotations

import importlib
import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.dotenv.default import DefaultDotEnvLoader
from .application.resolve import Schema
from .core import DataBuilder, Settings, parse_results, parse_values
from .domain.errors import VariableError
from .domain.result import Result, Success
from .domain.variables.base import Variable

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DIST_NAME: Final[str] = "lib_typed_settings"


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when metadata is missing."""

    try:
        return metadata.version(_DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Typed settings parsing and validation",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DIST_NAME,
    message="lib_typed_settings version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata(_DIST_NAME)
    except metadata.PackageNotFoundError:
        click.echo(f"{_DIST_NAME} (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DIST_NAME)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.11')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("check", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("schema_ref", metavar="SCHEMA")
@click.option(
    "--dotenv",
    "dotenv_files",
    multiple=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help=".env file to read (repeatable, missing files are skipped)",
)
@click.option(
    "--json",
    "json_files",
    multiple=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="JSON file to read (repeatable, missing files are skipped)",
)
@click.option(
    "--file",
    "files",
    multiple=True,
    type=click.Path(path_type=Path, exists=True, dir_okay=False, readable=True),
    help="JSON/TOML/YAML file chosen by suffix (repeatable, must exist)",
)
@click.option("--env/--no-env", "use_env", default=True, show_default=True, help="Read the process environment last")
@click.option("--prefix", default=None, help="Only read environment variables starting with PREFIX_")
@click.option(
    "--results/--values",
    "show_results",
    default=False,
    help="Print per-field results instead of resolved values",
)
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
@click.pass_context
def cli_check(
    ctx: click.Context,
    schema_ref: str,
    dotenv_files: Sequence[Path],
    json_files: Sequence[Path],
    files: Sequence[Path],
    use_env: bool,
    prefix: Optional[str],
    show_results: bool,
    indent: Optional[int],
) -> None:
    """Resolve SCHEMA (``module:attribute``) and print the outcome as JSON.

    Sources are applied in order ``--dotenv``, ``--json``, ``--file``, then the
    environment, so later sources override earlier keys. Validation issues are
    printed as JSON and the command exits with status 1.
    """

    schema = load_schema(schema_ref)
    builder = DataBuilder()
    for path in dotenv_files:
        builder = builder.dotenv_file(str(path))
    for path in json_files:
        builder = builder.json_file(str(path))
    for path in files:
        builder = builder.file(str(path), optional=False)
    if use_env:
        builder = builder.env(prefix)

    if show_results:
        results = parse_results(schema, builder)
        click.echo(_dumps(results_to_json(results), indent))
        return
    try:
        values = parse_values(schema, builder)
    except VariableError as exc:
        click.echo(_dumps({"issues": [issue.as_dict() for issue in exc.issues]}, indent))
        ctx.exit(1)
    click.echo(_dumps(values, indent))


@cli.command("dotenv", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_dotenv(path: Path, indent: Optional[int]) -> None:
    """Scan the ``.env`` file at PATH and print its data object as JSON."""

    click.echo(_dumps(DefaultDotEnvLoader().load(str(path)), indent))


@cli.command("schema", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("schema_ref", metavar="SCHEMA")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indent size")
def cli_schema(schema_ref: str, indent: Optional[int]) -> None:
    """Print the description tree of SCHEMA (``module:attribute``)."""

    click.echo(_dumps(Settings(load_schema(schema_ref)).describe(), indent))


def load_schema(reference: str) -> Schema:
    """Import ``module:attribute`` and return the schema it names.

    Accepts a :class:`Settings`, a mapping/list schema or a named variable.
    Dotted attributes (``module:Config.schema``) are followed.
    """

    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter("Expected MODULE:ATTRIBUTE", param_hint="SCHEMA")
    try:
        target: Any = importlib.import_module(module_name)
        for part in attribute.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as exc:
        raise click.BadParameter(f"Cannot load {reference}: {exc}", param_hint="SCHEMA") from exc
    if isinstance(target, Settings):
        return target.schema
    if isinstance(target, (Variable, dict, list, tuple)):
        return target
    raise click.BadParameter(f"{reference} is not a settings schema", param_hint="SCHEMA")


def results_to_json(node: Any) -> Any:
    """Convert a result tree into JSON-friendly ``{"success": ...}`` records.

    Examples
    --------
    >>> from lib_typed_settings.domain.result import failure, success
    >>> results_to_json({"a": success(1), "b": [{"c": failure("is required")}]})
    {'a': {'success': True, 'value': 1}, 'b': [{'c': {'success': False, 'issues': ['is required']}}]}
    """

    if isinstance(node, dict):
        return {key: results_to_json(child) for key, child in node.items()}
    if isinstance(node, list):
        return [results_to_json(child) for child in node]
    result: Result[Any] = node
    if isinstance(result, Success):
        return {"success": True, "value": result.value}
    return {"success": False, "issues": list(result.error)}


def _dumps(payload: Any, indent: Optional[int]) -> str:
    """Serialise *payload*; dates, models and other objects fall back to ``str``."""

    return json.dumps(payload, indent=indent, default=str)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DIST_NAME,
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
