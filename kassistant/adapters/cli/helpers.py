"""
Utilitaires partages pour les commandes CLI de KAssistant.

Ce module fournit :
- console : instance Rich Console partagee
- state : options globales positionnees par le callback principal
- suppress_loguru : context manager pour desactiver/reactiver les logs des services
- with_client : decorateur injectant container et client connecte
- print_api_error : affichage d'un echec API (message + detail)
"""

from contextlib import contextmanager
from functools import wraps
from typing import Any, Optional

import typer
from loguru import logger as loguru_logger
from rich.console import Console
from rich.markup import escape

from kassistant.adapters.api.errors import HttpStatusError, KavitaApiError
from kassistant.container import Container

console = Console()

# Modules dont les logs sont coupes par suppress_loguru
SERVICES_LOGGER = "kassistant.services"

# Etat global pour les options du callback principal
state: dict[str, Any] = {"verbose": 0, "quiet": False, "server_url": None}


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs des services pendant l'affichage Rich.

    Seul le package kassistant.services est coupe : le journal des requetes
    (kassistant.adapters.api) continue d'alimenter la console et le fichier.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable(SERVICES_LOGGER)
    try:
        yield
    finally:
        loguru_logger.enable(SERVICES_LOGGER)


def print_api_error(error: KavitaApiError) -> None:
    """Affiche un message d'etat et, si disponible, le detail de l'echec."""
    console.print(f"[red]Erreur :[/red] {escape(str(error))}")
    if isinstance(error, HttpStatusError) and error.body:
        console.print(f"[dim]{escape(error.body[:500])}[/dim]")


def resolve_server_url(container: Container, override: Optional[str] = None) -> str:
    """Adresse cible : option CLI, puis identifiants memorises, puis configuration."""
    if override:
        return override
    saved = container.credential_store().load()
    if saved.remember_credentials and saved.server_url:
        return saved.server_url
    return container.config().server_url


def with_client(login: bool = True):
    """
    Decorateur qui injecte un container et un client Kavita prets a l'emploi.

    La session est ouverte pour la duree de la commande puis fermee. Si des
    identifiants sont memorises et login=True, le login est fait avant
    l'appel. Une erreur API termine la commande avec le code 1.

    Args:
        login: Si True (defaut), se connecte avec les identifiants memorises.

    Usage:
        @with_client()
        async def my_command(container, client, ...):
            libraries = await client.get_libraries()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            session = container.session()
            async with session:
                await session.set_target(resolve_server_url(container, state["server_url"]))
                client = container.kavita_client()
                try:
                    if login:
                        saved = container.credential_store().load()
                        if saved.remember_credentials and saved.username:
                            await client.login(saved.username, saved.password)
                    return await func(container, client, *args, **kwargs)
                except KavitaApiError as e:
                    print_api_error(e)
                    raise typer.Exit(code=1)
        return wrapper
    return decorator
