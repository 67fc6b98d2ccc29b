"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : configuration,
journal des requetes, session, executeur, facade Kavita et services.
"""

from dependency_injector import containers, providers

from .adapters.api.executor import RequestExecutor
from .adapters.api.kavita_client import KavitaApiClient
from .adapters.api.request_log import RequestLog
from .adapters.api.session import KavitaSession
from .adapters.credential_store import CredentialStore
from .config import Settings
from .services.diagnostics import DiagnosticsService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        async with container.session() as session:
            client = container.kavita_client()
            libraries = await client.get_libraries()

    La session est un Singleton : sa fermeture (async with / aclose) reste
    a la charge de l'appelant.
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Journal des requetes - partage par tous les appels
    request_log = providers.Singleton(
        RequestLog,
        request_preview_limit=config.provided.request_preview_limit,
        response_preview_limit=config.provided.response_preview_limit,
        error_capture_limit=config.provided.error_capture_limit,
    )

    # Session - une seule connexion active par processus
    session = providers.Singleton(
        KavitaSession,
        base_url=config.provided.server_url,
        timeout=config.provided.request_timeout,
    )

    executor = providers.Singleton(
        RequestExecutor,
        session=session,
        request_log=request_log,
    )

    kavita_client = providers.Singleton(
        KavitaApiClient,
        executor=executor,
        aggregation_batch_size=config.provided.aggregation_batch_size,
    )

    # Agregateur porte par le client (vue "toutes les bibliotheques")
    series_aggregator = kavita_client.provided.aggregator

    # Services
    diagnostics_service = providers.Factory(
        DiagnosticsService,
        client=kavita_client,
    )

    credential_store = providers.Factory(
        CredentialStore,
        settings_dir=config.provided.settings_dir,
    )
