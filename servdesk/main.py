#!/usr/bin/env python3
"""
Main CLI entry point for servdesk
"""

import logging

import typer

from servdesk import __version__
from servdesk.commands import palette, session
from servdesk.config.settings import (
    get_log_level,
    get_session_path,
    load_environment,
    validate_all_env_vars,
)
from servdesk.ui.gui import gui
from servdesk.utils.logging_utils import get_logger
from servdesk.utils.output import console


def version():
    """Show servdesk version"""
    typer.echo(f"servdesk version {__version__}")


def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    servdesk - Service management administration console

    [bold]Examples:[/bold]

    Open the console:
        [cyan]servdesk gui[/cyan]

    Search customers, devices and pages:
        [cyan]servdesk search "acme" --role MANAGER[/cyan]

    See what the palette offers a role:
        [cyan]servdesk routes --role TECHNICIAN[/cyan]
    """
    load_environment()
    for error in validate_all_env_vars():
        console.print(f"[yellow]Warning: {error}[/yellow]")

    level = logging.DEBUG if verbose else get_log_level()
    get_logger("servdesk", level=level, log_dir=get_session_path().parent)


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(help="Service management administration console", rich_markup_mode="rich")
    app.callback()(main)

    app.command()(gui)
    app.command()(palette.routes)
    app.command()(palette.search)
    app.command()(session.login)
    app.command()(session.logout)
    app.command()(session.whoami)
    app.command()(version)

    return app


# Create the app instance
app = create_app()


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
