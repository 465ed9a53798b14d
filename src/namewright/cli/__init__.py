"""Command-line interface for namewright.

- app: The Typer application object holding every command.
- console: Rich Console instance shared by all commands.
- main: Console-script entry point.
"""

from namewright.cli.commands import app, console, main

__all__ = ["app", "console", "main"]

if __name__ == "__main__":
    main()
