"""
Commandes CLI de connexion : login et logout.
"""

import asyncio
from typing import Annotated

import typer

from kassistant.adapters.cli.helpers import console, with_client
from kassistant.adapters.credential_store import SavedCredentials
from kassistant.container import Container


def login(
    username: Annotated[str, typer.Option("--username", "-u", prompt=True, help="Nom d'utilisateur")],
    password: Annotated[
        str, typer.Option("--password", "-p", prompt=True, hide_input=True, help="Mot de passe")
    ],
    remember: Annotated[
        bool, typer.Option("--remember", help="Memoriser l'adresse et les identifiants")
    ] = False,
) -> None:
    """Se connecte au serveur Kavita et memorise optionnellement les identifiants."""
    asyncio.run(_login_async(username, password, remember))


@with_client(login=False)
async def _login_async(container, client, username: str, password: str, remember: bool) -> None:
    """Implementation async de la commande login."""
    user = await client.login(username, password)
    if user is None or not user.token:
        console.print("[red]Echec du login : aucun jeton renvoye.[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]Connecte en tant que[/green] [bold]{user.username}[/bold]")

    if remember:
        store = container.credential_store()
        store.save(
            SavedCredentials(
                server_url=client.session.base_url,
                username=username,
                password=password,
                remember_credentials=True,
            )
        )
        console.print(f"[dim]Identifiants memorises dans {store.path}[/dim]")


def logout() -> None:
    """Supprime les identifiants memorises."""
    store = Container().credential_store()
    store.clear()
    console.print("[green]Identifiants supprimes.[/green]")
