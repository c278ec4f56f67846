"""Root Typer app: global options and command group registration."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from easyredir_cli import __version__
from easyredir_cli.commands import config_cmd, host, rule

app = typer.Typer(
    name="easyredir",
    help="CLI tool for the EasyRedir redirect management API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"easyredir-cli {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through Rich."""
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger = logging.getLogger("easyredir_cli")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP requests and pagination."),
) -> None:
    """EasyRedir CLI: manage redirect rules and hosts."""
    configure_logging(verbose)


# Register command groups
app.add_typer(config_cmd.app, name="config")
app.add_typer(rule.app, name="rule")
app.add_typer(host.app, name="host")


def main() -> None:
    app()
