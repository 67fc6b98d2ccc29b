"""
Journal structure des requetes envoyees au serveur Kavita.

Trois types d'entrees : REQUEST (avant l'envoi), RESPONSE (apres reception,
quel que soit le statut) et ERROR (echec classe). Les corps sont tronques
avec un marqueur explicite "... [truncated, total length: N]".

Les entrees sont emises via loguru avec l'extra "api_event" : la console les
affiche toujours, le fichier journalier les recoit si son initialisation a
reussi (voir logging_config). Loguru serialise les ecritures par handler,
deux entrees concurrentes ne se melangent jamais.

Usage:
    log = RequestLog()
    log.record_request("GET", "/api/Library/libraries")
    log.record_response("GET", "/api/Library/libraries", 200, body, 12.5)
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from loguru import logger

from kassistant.logging_config import API_EVENT_KEY


class LogEntryKind(str, Enum):
    """Type d'entree du journal des requetes."""

    REQUEST = "REQUEST"
    RESPONSE = "RESPONSE"
    ERROR = "ERROR"


@dataclass(frozen=True)
class LogEntry:
    """Entree du journal des requetes."""

    kind: LogEntryKind
    method: str
    path: str
    timestamp: datetime = field(default_factory=datetime.now)
    body: Optional[str] = None
    status_code: Optional[int] = None
    elapsed_ms: Optional[float] = None
    error_type: Optional[str] = None
    message: Optional[str] = None


def truncate_for_log(content: Optional[str], max_length: int) -> str:
    """
    Tronque un contenu pour le journal.

    Args:
        content: Texte a tronquer (None ou vide -> chaine vide)
        max_length: Nombre maximum de caracteres conserves

    Returns:
        Le texte inchange s'il tient dans la limite, sinon les max_length
        premiers caracteres suivis du marqueur de troncature.
    """
    if not content:
        return ""
    if len(content) <= max_length:
        return content
    return f"{content[:max_length]}... [truncated, total length: {len(content)}]"


class RequestLog:
    """
    Enregistreur des evenements REQUEST / RESPONSE / ERROR.

    Conserve les dernieres entrees en memoire (historique borne) pour
    l'affichage des details d'un echec.

    Attributes:
        REQUEST_PREVIEW_LIMIT: Apercu du corps envoye (500)
        RESPONSE_PREVIEW_LIMIT: Apercu du corps recu (300)
        ERROR_CAPTURE_LIMIT: Corps captures en cas d'erreur (2000)
    """

    REQUEST_PREVIEW_LIMIT = 500
    RESPONSE_PREVIEW_LIMIT = 300
    ERROR_CAPTURE_LIMIT = 2000

    def __init__(
        self,
        enabled: bool = True,
        request_preview_limit: int = REQUEST_PREVIEW_LIMIT,
        response_preview_limit: int = RESPONSE_PREVIEW_LIMIT,
        error_capture_limit: int = ERROR_CAPTURE_LIMIT,
        history_size: int = 200,
    ) -> None:
        self.enabled = enabled
        self._request_limit = request_preview_limit
        self._response_limit = response_preview_limit
        self._error_limit = error_capture_limit
        self._history: deque[LogEntry] = deque(maxlen=history_size)

    @property
    def entries(self) -> list[LogEntry]:
        """Entrees recentes, de la plus ancienne a la plus recente."""
        return list(self._history)

    def clear(self) -> None:
        self._history.clear()

    def record_request(
        self, method: str, path: str, body: Optional[str] = None
    ) -> Optional[LogEntry]:
        """Enregistre l'envoi d'une requete."""
        if not self.enabled:
            return None
        entry = LogEntry(
            kind=LogEntryKind.REQUEST,
            method=method,
            path=path,
            body=truncate_for_log(body, self._request_limit) or None,
        )
        self._emit(entry, "DEBUG", f"[REQUEST] {method} {path}")
        return entry

    def record_response(
        self,
        method: str,
        path: str,
        status_code: int,
        body: Optional[str],
        elapsed_ms: float,
    ) -> Optional[LogEntry]:
        """Enregistre la reception d'une reponse (succes ou non)."""
        if not self.enabled:
            return None
        entry = LogEntry(
            kind=LogEntryKind.RESPONSE,
            method=method,
            path=path,
            body=truncate_for_log(body, self._response_limit) or None,
            status_code=status_code,
            elapsed_ms=elapsed_ms,
        )
        self._emit(
            entry,
            "DEBUG",
            f"[RESPONSE] {method} {path} | Status: {status_code} | Time: {elapsed_ms:.0f}ms",
        )
        return entry

    def record_error(
        self,
        method: str,
        path: str,
        error: BaseException,
        request_body: Optional[str] = None,
        response_body: Optional[str] = None,
        status_code: Optional[int] = None,
        elapsed_ms: Optional[float] = None,
    ) -> Optional[LogEntry]:
        """
        Enregistre un echec classe.

        Le corps retenu est celui de la reponse s'il existe, sinon celui
        de la requete, tronque a ERROR_CAPTURE_LIMIT.
        """
        if not self.enabled:
            return None
        body = response_body if response_body else request_body
        entry = LogEntry(
            kind=LogEntryKind.ERROR,
            method=method,
            path=path,
            body=truncate_for_log(body, self._error_limit) or None,
            status_code=status_code,
            elapsed_ms=elapsed_ms,
            error_type=type(error).__name__,
            message=str(error),
        )
        self._emit(entry, "ERROR", f"[ERROR] {method} {path} | {type(error).__name__}: {error}")
        return entry

    def _emit(self, entry: LogEntry, level: str, message: str) -> None:
        self._history.append(entry)
        logger.bind(
            **{API_EVENT_KEY: entry.kind.value},
            method=entry.method,
            path=entry.path,
            status_code=entry.status_code,
            elapsed_ms=entry.elapsed_ms,
            body=entry.body,
            error_type=entry.error_type,
        ).log(level, message)
