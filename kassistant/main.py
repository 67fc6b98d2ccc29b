"""
Point d'entrée CLI de KAssistant.

Configure le logging à partir des paramètres et fournit les commandes CLI.
"""

from typing import Annotated, Optional

import typer
from loguru import logger

from .adapters.cli.commands import (
    check,
    endpoints,
    libraries,
    login,
    logout,
    search,
    series,
)
from .adapters.cli.helpers import state
from .config import Settings
from .container import Container
from .logging_config import configure_logging

__version__ = "0.1.0"

app = typer.Typer(
    name="kassistant",
    help="Client de bibliothèque Kavita",
)
container = Container()


def _console_level(settings: Settings) -> str:
    """Niveau console selon les options -v / -q."""
    if state["quiet"]:
        return "ERROR"
    if state["verbose"] >= 1:
        return "DEBUG"
    return settings.log_level


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
    server: Annotated[
        Optional[str],
        typer.Option("--server", "-s", help="Adresse du serveur Kavita"),
    ] = None,
) -> None:
    """KAssistant - Client de bibliotheque Kavita."""
    state["quiet"] = quiet
    state["verbose"] = 0 if quiet else verbose
    state["server_url"] = server.rstrip("/") if server else None

    settings = get_config()
    configure_logging(
        log_level=_console_level(settings),
        log_dir=settings.log_dir,
        log_to_file=settings.log_to_file,
        retention_days=settings.log_retention_days,
    )


# Commandes de compte
app.command()(login)
app.command()(logout)

# Commandes de consultation
app.command()(libraries)
app.command()(series)
app.command()(search)

# Commandes de diagnostic
app.command()(check)
app.command()(endpoints)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.debug("Configuration KAssistant")
    typer.echo(f"Serveur : {config.server_url}")
    typer.echo(f"Timeout : {config.request_timeout} s")
    typer.echo(f"Taille de page : {config.default_page_size}")
    typer.echo(f"Lot d'agrégation : {config.aggregation_batch_size}")
    typer.echo(f"Journal : {config.log_dir if config.log_to_file else 'désactivé'}")
    typer.echo(f"Identifiants : {config.credentials_file}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"KAssistant v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
