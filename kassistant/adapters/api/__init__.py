"""
Client de l'API REST Kavita.

Ce module fournit :
- KavitaSession : adresse cible, jeton Bearer et client httpx partage
- RequestExecutor : execution, chronometrage et classification des appels
- RequestLog : journal REQUEST / RESPONSE / ERROR avec troncature
- KavitaApiClient : facade typee des endpoints (implemente ISeriesSource)

Erreurs : KavitaApiError et ses sous-classes (voir errors.py).
"""

from kassistant.adapters.api.errors import (
    ConnectivityError,
    DeserializationError,
    HttpStatusError,
    KavitaApiError,
    PartialAggregationError,
    RequestTimeoutError,
    SessionNotConfiguredError,
)
from kassistant.adapters.api.executor import ApiResult, RequestExecutor
from kassistant.adapters.api.request_log import LogEntry, LogEntryKind, RequestLog
from kassistant.adapters.api.session import KavitaSession

# Import paresseux : kavita_client depend de services/, qui importe errors.py

__all__ = [
    "KavitaSession",
    "RequestExecutor",
    "ApiResult",
    "RequestLog",
    "LogEntry",
    "LogEntryKind",
    "KavitaApiClient",
    "KavitaApiError",
    "ConnectivityError",
    "RequestTimeoutError",
    "HttpStatusError",
    "DeserializationError",
    "SessionNotConfiguredError",
    "PartialAggregationError",
]


def __getattr__(name: str):
    """Import paresseux pour KavitaApiClient."""
    if name == "KavitaApiClient":
        from kassistant.adapters.api.kavita_client import KavitaApiClient

        return KavitaApiClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
