"""
Commandes CLI de consultation : bibliotheques, series et recherche.
"""

import asyncio
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from kassistant.adapters.cli.helpers import console, suppress_loguru, with_client


def libraries() -> None:
    """Liste les bibliotheques du serveur."""
    asyncio.run(_libraries_async())


@with_client()
async def _libraries_async(container, client) -> None:
    """Implementation async de la commande libraries."""
    result = await client.get_libraries() or []
    if not result:
        console.print("[yellow]Aucune bibliotheque.[/yellow]")
        return

    table = Table(title="Bibliotheques")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Nom", style="bold")
    table.add_column("Type", justify="right")
    for library in result:
        table.add_row(str(library.id), library.name, str(library.type))
    console.print(table)


def series(
    library_id: Annotated[
        int,
        typer.Option("--library-id", "-l", help="Bibliotheque (0 = toutes les bibliotheques)"),
    ] = 0,
    page: Annotated[int, typer.Option("--page", help="Numero de page")] = 0,
    page_size: Annotated[int, typer.Option("--page-size", min=1, help="Taille de page")] = 20,
) -> None:
    """Liste les series d'une bibliotheque ou de toutes les bibliotheques."""
    asyncio.run(_series_async(library_id, page, page_size))


@with_client()
async def _series_async(container, client, library_id: int, page: int, page_size: int) -> None:
    """Implementation async de la commande series."""
    failures = []
    with suppress_loguru():
        if library_id > 0:
            result = await client.get_all_series(library_id, page, page_size)
        else:
            aggregation = await client.aggregator.aggregate(page, page_size)
            result = aggregation.page
            failures = aggregation.failures
            if aggregation.enumeration_error is not None:
                console.print(
                    f"[yellow]Bibliotheques non enumerees :[/yellow] {escape(str(aggregation.enumeration_error))}"
                )

    if result is None or not result.result:
        console.print("[yellow]Aucune serie.[/yellow]")
    else:
        table = Table(title=f"Series ({result.total_count}, {result.total_pages} page(s))")
        table.add_column("ID", justify="right", style="cyan")
        table.add_column("Nom", style="bold")
        table.add_column("Bibliotheque", justify="right")
        table.add_column("Pages", justify="right")
        for item in result.result:
            table.add_row(str(item.id), item.name, str(item.library_id), f"{item.pages_read}/{item.pages}")
        console.print(table)

    for failure in failures:
        console.print(f"  [red]✗[/red] {failure.library_name} - {escape(str(failure.cause))}")


def search(
    query: Annotated[str, typer.Argument(help="Texte recherche")],
) -> None:
    """Recherche des series par nom."""
    asyncio.run(_search_async(query))


@with_client()
async def _search_async(container, client, query: str) -> None:
    """Implementation async de la commande search."""
    result = await client.search(query)
    matches = result.series if result is not None else []
    console.print(f"[bold]{len(matches)}[/bold] serie(s) pour '{query}'")
    for item in matches:
        library = f" [dim]({item.library_name})[/dim]" if item.library_name else ""
        console.print(f"  [cyan]{item.series_id}[/cyan] {item.name}{library}")
