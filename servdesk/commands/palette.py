"""Palette commands: inspect the static index and run searches headlessly."""

import asyncio
from typing import Any, Optional

import typer
from rich.markup import escape
from rich.table import Table

from servdesk.auth.session import RoleContext, SessionStore, StaticRoleContext
from servdesk.exceptions import ServdeskError
from servdesk.navigation.router import Router
from servdesk.services.api_client import BackendClient
from servdesk.ui.command_palette.palette_fanout import RemoteFanout
from servdesk.ui.command_palette.palette_index import build_static_items
from servdesk.ui.command_palette.palette_merger import GroupedResults
from servdesk.ui.command_palette.palette_session import PaletteSession
from servdesk.utils.output import console, print_json


def _role_context(role: Optional[str]) -> RoleContext:
    if role:
        return StaticRoleContext(role.upper())
    return SessionStore()


def _grouped_to_json(grouped: GroupedResults) -> list[dict[str, Any]]:
    return [
        {"id": item.id, "group": group.value, "title": item.title, "subtitle": item.subtitle}
        for group, bucket in grouped
        for item in bucket
    ]


def routes(
    role: Optional[str] = typer.Option(None, "--role", "-r", help="Role to build the index for"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List the palette destinations and actions visible to a role."""
    role_context = _role_context(role)
    current = role_context.get_current_role()
    items = build_static_items(current, Router().navigate)

    if json_output:
        print_json([{"id": i.id, "group": i.group.value, "title": i.title, "subtitle": i.subtitle} for i in items])
        return

    table = Table(title=f"Palette index for {current or 'anonymous'}")
    table.add_column("Group", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Target", style="dim")
    for item in items:
        table.add_row(item.group.value, escape(item.title), escape(item.subtitle or ""))
    console.print(table)


async def _search(query: str, role_context: RoleContext) -> GroupedResults:
    store = SessionStore()
    async with BackendClient(token_provider=store.get_access_token) as client:
        session = PaletteSession(role_context, RemoteFanout.from_client(client), Router().navigate)
        return await session.search_once(query)


def search(
    query: str = typer.Argument(..., help="Text to search for"),
    role: Optional[str] = typer.Option(None, "--role", "-r", help="Search as this role"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Run one palette search against the backend and print grouped results."""
    role_context = _role_context(role)
    if not SessionStore().is_authenticated():
        console.print("[yellow]Not logged in: record search will return nothing[/yellow]")

    try:
        grouped = asyncio.run(_search(query.strip(), role_context))
    except ServdeskError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    if json_output:
        print_json(_grouped_to_json(grouped))
        return

    if not grouped:
        console.print("[dim]No results[/dim]")
        return

    for group, bucket in grouped:
        table = Table(title=group.value, title_justify="left", show_header=False, box=None)
        table.add_column("Title", style="bold")
        table.add_column("Detail", style="dim")
        for item in bucket:
            table.add_row(escape(f"{item.icon} {item.title}".strip()), escape(item.subtitle or ""))
        console.print(table)
