"""
GUI entry point for servdesk - the Textual console
"""

import logging
from typing import Optional

import typer

from servdesk.auth.session import StaticRoleContext
from servdesk.config.settings import get_log_level, get_session_path
from servdesk.utils.logging_utils import setup_tui_logging
from servdesk.utils.output import console

app = typer.Typer()


@app.command()
def gui(
    role: Optional[str] = typer.Option(
        None, "--role", "-r", help="Use this role instead of the logged-in user's role"
    ),
    path: str = typer.Option("/dashboard", "--path", help="Page to open first"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to tui_debug.log"),
):
    """Open the interactive console (Ctrl+K searches)."""
    from servdesk.navigation.router import Router
    from servdesk.ui.console_app import ServdeskApp

    setup_tui_logging(
        __name__,
        level=logging.DEBUG if verbose else get_log_level(),
        log_dir=get_session_path().parent,
    )

    try:
        role_context = StaticRoleContext(role.upper()) if role else None
        ServdeskApp(role_context=role_context, router=Router(path)).run()
    except KeyboardInterrupt:
        pass
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e
