"""
Commandes CLI de diagnostic : check et endpoints.
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape
from rich.table import Table

from kassistant.adapters.cli.helpers import console, suppress_loguru, with_client
from kassistant.adapters.openapi_catalog import OpenApiCatalog
from kassistant.config import Settings


def check(
    username: Annotated[
        Optional[str], typer.Option("--username", "-u", help="Nom d'utilisateur (defaut: memorise)")
    ] = None,
    password: Annotated[
        Optional[str], typer.Option("--password", "-p", help="Mot de passe (defaut: memorise)")
    ] = None,
) -> None:
    """Execute la suite de diagnostic des endpoints Kavita."""
    asyncio.run(_check_async(username, password))


@with_client(login=False)
async def _check_async(container, client, username: Optional[str], password: Optional[str]) -> None:
    """Implementation async de la commande check."""
    saved = container.credential_store().load()
    username = username or saved.username
    password = password or saved.password
    if not username:
        console.print("[red]Aucun identifiant : utiliser --username/--password ou login --remember.[/red]")
        raise typer.Exit(code=1)

    with suppress_loguru():
        results = await container.diagnostics_service().run_all(username, password)

    table = Table(title=f"Diagnostic {client.session.base_url}")
    table.add_column("Verification")
    table.add_column("Statut", justify="center")
    table.add_column("Message")
    table.add_column("Duree", justify="right")
    for result in results:
        status = "[green]✓[/green]" if result.success else "[red]✗[/red]"
        table.add_row(
            result.name,
            status,
            escape(result.message),
            f"{result.duration.total_seconds() * 1000:.0f} ms",
        )
    console.print(table)

    if not all(r.success for r in results):
        raise typer.Exit(code=1)


def endpoints(
    document: Annotated[
        Optional[Path], typer.Option("--document", "-d", help="Document OpenAPI (JSON)")
    ] = None,
) -> None:
    """Liste les endpoints decrits par le document OpenAPI."""
    path = document or Settings().openapi_document
    if path is None:
        console.print("[yellow]Aucun document OpenAPI configure.[/yellow]")
        raise typer.Exit(code=1)

    catalog = OpenApiCatalog.load(path)
    if not catalog.is_loaded:
        console.print(f"[red]Document OpenAPI inutilisable : {path}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[bold]{catalog.title or path.name}[/bold]")
    for api_path in catalog.available_paths():
        methods = ", ".join(catalog.operations(api_path))
        console.print(f"  [cyan]{methods:<12}[/cyan] {api_path}")
