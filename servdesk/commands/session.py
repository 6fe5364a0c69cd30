"""Session commands: store and clear the local login."""

from typing import Optional

import typer

from servdesk.auth.session import SessionStore
from servdesk.exceptions import SessionError
from servdesk.navigation.nav_config import ALL_ROLES
from servdesk.utils.output import console


def login(
    token: str = typer.Option(..., "--token", "-t", help="Access token issued by the auth service"),
    role: str = typer.Option(..., "--role", "-r", help=f"Role name ({', '.join(ALL_ROLES)})"),
    email: Optional[str] = typer.Option(None, "--email", "-e", help="Account email"),
):
    """Store an access token and user role for later commands."""
    role = role.upper()
    if role not in ALL_ROLES:
        console.print(f"[yellow]Warning: unknown role '{role}'[/yellow]")

    user = {"email": email or "", "role": {"name": role}}
    try:
        SessionStore().save(token, user)
    except SessionError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e
    console.print(f"[green]✅ Logged in as {email or 'user'} ({role})[/green]")


def logout():
    """Remove the stored session."""
    try:
        removed = SessionStore().clear()
    except SessionError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e
    if removed:
        console.print("[green]Logged out[/green]")
    else:
        console.print("[dim]No session to remove[/dim]")


def whoami():
    """Show the stored session's role."""
    store = SessionStore()
    if not store.is_authenticated():
        console.print("[dim]Not logged in[/dim]")
        raise typer.Exit(1)
    user = store.get_current_user() or {}
    console.print(f"{user.get('email') or 'user'} ({store.get_current_role() or 'no role'})")
