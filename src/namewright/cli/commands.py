"""CLI commands for namewright.

- preview: run a rename script against a JSON context and print the filename.
- place: pick the destination folder for a file described by a JSON context.
- check: parse a rename script and show how every line was understood.
- config get/set: read and persist settings in config.toml.
- version: print the installed version.

Design:
- Annotated is used for CLI argument/option definitions.
- Context files are validated with the pydantic request models, so a bad
  context is reported the same way as a failed rename.
- Exit codes are defined as an Enum.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Optional

import tomli
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.traceback import install as install_traceback

from namewright.cli.renderer import render_destination, render_script_check
from namewright.errors import RenameError
from namewright.models.requests import PlacementRequest, RenameRequest
from namewright.models.script import RenameScript
from namewright.rules.expression import LineKind, parse_script
from namewright.rules.legacy import LegacyRenamer
from namewright.utils.config import get_setting, load_settings, set_setting
from namewright.utils.debug import DEBUG_ON, debug, setup_logger

install_traceback(show_locals=True)

app = typer.Typer(
    name="namewright",
    help="Compute library filenames and destinations from rename scripts.",
    add_completion=True,
)
config_app = typer.Typer(help="Read and write persistent settings.")
app.add_typer(config_app, name="config")

console = Console()


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


SCRIPT_PATH = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Rename script file",
    ),
]

CONTEXT_PATH = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="JSON file describing the file to rename or place",
    ),
]

MAX_EPISODE_LENGTH = Annotated[
    Optional[int],
    typer.Option(
        "--max-episode-length",
        min=2,
        help="Truncate episode titles longer than this",
    ),
]

SKIP_DISK_SPACE_CHECKS = Annotated[
    Optional[bool],
    typer.Option(
        "--skip-disk-space-checks/--check-disk-space",
        help="Do not check free space on destination folders",
    ),
]


def _load_context(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("context must be a JSON object")
    return data


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging. Can also be set with NAMEWRIGHT_DEBUG=1.",
    ),
) -> None:
    """Top-level CLI callback adding global options."""
    if verbose or DEBUG_ON:
        setup_logger(verbose=verbose)


@app.command()
def preview(
    script: SCRIPT_PATH,
    context: CONTEXT_PATH,
    max_episode_length: MAX_EPISODE_LENGTH = None,
) -> None:
    """Run SCRIPT against CONTEXT and print the new filename."""
    settings = load_settings(max_episode_length=max_episode_length)
    rename_script = RenameScript.from_file(script)
    try:
        request = RenameRequest.model_validate(
            {**_load_context(context), "script": rename_script}
        )
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Error: Invalid context {context}: {escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)
    debug(f"Previewing {request.file.path} with script {rename_script.name}")

    try:
        filename = LegacyRenamer(settings).get_filename(request)
    except RenameError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)

    if filename is None:
        console.print(
            f"[yellow]Script is written for renamer "
            f"{rename_script.renamer_type!r}; nothing to preview.[/yellow]"
        )
        raise typer.Exit(ExitCode.ERROR)
    console.print(filename, markup=False, highlight=False, soft_wrap=True)


@app.command()
def place(
    context: CONTEXT_PATH,
    script: Annotated[
        Optional[Path],
        typer.Option("--script", "-s", exists=True, dir_okay=False, help="Rename script file"),
    ] = None,
    skip_disk_space_checks: SKIP_DISK_SPACE_CHECKS = None,
) -> None:
    """Print the destination folder and sub-path for the file in CONTEXT."""
    settings = load_settings(skip_disk_space_checks=skip_disk_space_checks)
    rename_script = RenameScript.from_file(script) if script else RenameScript(script="")
    try:
        request = PlacementRequest.model_validate(
            {**_load_context(context), "script": rename_script}
        )
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Error: Invalid context {context}: {escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)
    debug(f"Placing {request.location.absolute_path}")

    try:
        destination = LegacyRenamer(settings).get_destination(request)
    except RenameError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)

    render_destination(destination, console=console)


@app.command()
def check(script: SCRIPT_PATH) -> None:
    """Parse SCRIPT and show how each line is understood."""
    lines = parse_script(RenameScript.from_file(script).lines)
    render_script_check(lines, console=console)
    if any(line.kind == LineKind.INVALID for line in lines):
        raise typer.Exit(ExitCode.ERROR)


def _parse_value(raw: str) -> Any:
    """Interpret *raw* as a TOML value, falling back to a plain string."""
    try:
        return tomli.loads(f"value = {raw}")["value"]
    except tomli.TOMLDecodeError:
        return raw


@config_app.command("get")
def config_get(key: str) -> None:
    """Print the value of KEY from config.toml."""
    value = get_setting(key)
    if value is None:
        console.print(f"[yellow]{key} is not set[/yellow]")
        raise typer.Exit(ExitCode.ERROR)
    console.print(f"{key} = {value!r}", markup=False, highlight=False)


@config_app.command("set")
def config_set(key: str, value: str) -> None:
    """Persist VALUE under KEY in config.toml."""
    set_setting(key, _parse_value(value))
    console.print(f"[green]Set {key}[/green]")


@app.command()
def version() -> None:
    """Show the version of namewright."""
    from namewright.__about__ import __version__

    console.print(f"Namewright version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
