"""Renderer for CLI output.

Renders parsed rename scripts and placement results with Rich.
"""

from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from namewright.models.requests import Destination
from namewright.rules.expression import (
    ActionKind,
    LineKind,
    ScriptLine,
    first_test,
    iter_tests,
)


def describe_condition(line: ScriptLine) -> str:
    """Condition of *line* as ``A(1) ; F(2) , S(en)`` style text."""
    if line.kind != LineKind.CONDITIONAL:
        return ""
    parts = []
    first = first_test(line.condition)
    parts.append(f"{first[0]}({first[1]})" if first else "?")
    for separator in (";", ","):
        for test in iter_tests(line.condition, separator):
            parts.append(separator)
            parts.append(f"{test[0]}({test[1]})" if test else "?")
    return " ".join(parts)


def render_script_check(lines: List[ScriptLine], console: Console | None = None) -> None:
    """Render one table row per parsed script line.

    Args:
        lines: Parsed, non-blank script lines.
        console: Optional Console instance to use for rendering.
    """
    console = console or Console()

    table = Table(title="Rename Script")
    table.add_column("#", justify="right")
    table.add_column("Kind", style="bold")
    table.add_column("Tests", style="cyan")
    table.add_column("Action", style="green")
    table.add_column("Parameter", style="yellow")

    kind_styles = {
        LineKind.UNCONDITIONAL: "white",
        LineKind.CONDITIONAL: "white",
        LineKind.INVALID: "red bold",
    }

    for index, line in enumerate(lines, start=1):
        action = line.action.kind
        table.add_row(
            str(index),
            line.kind.value,
            escape(describe_condition(line)),
            "" if line.kind == LineKind.INVALID else action.value,
            escape(line.action.parameter) if action != ActionKind.UNKNOWN else "",
            style=kind_styles[line.kind],
        )

    console.print(table)

    invalid = len([line for line in lines if line.kind == LineKind.INVALID])
    unknown = len(
        [
            line
            for line in lines
            if line.kind != LineKind.INVALID and line.action.kind == ActionKind.UNKNOWN
        ]
    )
    console.print(f"Lines: {len(lines)} | Invalid: {invalid} | Unknown actions: {unknown}")


def render_destination(destination: Destination, console: Console | None = None) -> None:
    console = console or Console()
    console.print(
        f"Folder: [bold]{escape(str(destination.folder.path))}[/bold]", soft_wrap=True
    )
    console.print(
        f"Subfolder: [green]{escape(destination.subfolder)}[/green]", soft_wrap=True
    )
