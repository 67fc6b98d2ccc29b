"""
Execution des requetes HTTP vers le serveur Kavita.

RequestExecutor est l'unique frontiere de classification : chaque appel
produit un ApiResult (succes ou type d'echec) et journalise son issue une
seule fois. Les appelants qui preferent les exceptions utilisent
ApiResult.unwrap() ou execute(), qui relevent l'erreur deja journalisee.

Politique :
- 2xx avec corps vide -> valeur absente (None), pas une erreur
- 2xx avec corps -> valide contre le type attendu (DeserializationError sinon)
- statut hors 2xx -> HttpStatusError(status, corps)
- echec reseau -> ConnectivityError ; delai depasse -> RequestTimeoutError
  (delai global de l'appel, reception du corps comprise)
- une seule tentative par appel, jamais de relance automatique

Usage:
    executor = RequestExecutor(session, RequestLog())
    libraries = await executor.execute("GET", "/api/Library/libraries", response_type=list[Library])
"""

import asyncio
import json
import time
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from kassistant.adapters.api.errors import (
    ConnectivityError,
    DeserializationError,
    HttpStatusError,
    KavitaApiError,
    RequestTimeoutError,
)
from kassistant.adapters.api.request_log import RequestLog, truncate_for_log
from kassistant.adapters.api.session import KavitaSession
from kassistant.core.entities.base import KavitaModel
from kassistant.core.value_objects.envelopes import RequestEnvelope, ResponseEnvelope

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """
    Resultat etiquete d'un appel.

    Attributes:
        value: Valeur deserialisee (None si absente ou en cas d'echec)
        error: Erreur classee, None en cas de succes
        response: Reponse recue, None si aucune reponse (reseau, delai)
    """

    value: Optional[T] = None
    error: Optional[KavitaApiError] = None
    response: Optional[ResponseEnvelope] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Optional[T]:
        """Retourne la valeur ou leve l'erreur classee."""
        if self.error is not None:
            raise self.error
        return self.value


def serialize_body(body: Any) -> Optional[str]:
    """Serialise un corps de requete en JSON (None omis)."""
    if body is None:
        return None
    if isinstance(body, KavitaModel):
        return json.dumps(body.to_wire())
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True, exclude_none=True)
    if isinstance(body, dict):
        return json.dumps({k: v for k, v in body.items() if v is not None})
    return json.dumps(body)


class RequestExecutor:
    """
    Primitive GET / POST / DELETE au-dessus d'une KavitaSession.

    Chaque appel ecrit une entree REQUEST, puis une entree RESPONSE des
    qu'une reponse est recue, puis une entree ERROR en cas d'echec.
    """

    def __init__(self, session: KavitaSession, request_log: RequestLog) -> None:
        self._session = session
        self._log = request_log

    @property
    def session(self) -> KavitaSession:
        return self._session

    async def execute(
        self,
        method: str,
        path: str,
        body: Any = None,
        response_type: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Execute un appel et retourne la valeur, ou leve l'erreur classee.

        Raises:
            KavitaApiError: Sous-classe correspondant a l'echec
        """
        result = await self.send(method, path, body, response_type, params)
        return result.unwrap()

    async def send(
        self,
        method: str,
        path: str,
        body: Any = None,
        response_type: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> ApiResult:
        """
        Execute un appel et retourne un ApiResult (ne leve jamais d'erreur API).

        Args:
            method: Methode HTTP (GET, POST, DELETE)
            path: Chemin relatif a l'adresse du serveur
            body: Corps optionnel (modele, dict ou valeur JSON)
            response_type: Type attendu du corps (None = corps ignore)
            params: Parametres de requete (None omis)
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        display_path = _display_path(path, query)
        envelope = RequestEnvelope(method=method.upper(), path=display_path, body=body)
        request_json = serialize_body(envelope.body)

        self._log.record_request(envelope.method, display_path, request_json)
        started = time.perf_counter()

        try:
            client = await self._session.client()
            # Delai global de l'appel, reception du corps comprise
            response = await asyncio.wait_for(
                client.request(
                    envelope.method,
                    path,
                    params=query or None,
                    content=request_json.encode("utf-8") if request_json is not None else None,
                    headers=self._request_headers(request_json is not None),
                ),
                timeout=self._session.timeout,
            )
        except KavitaApiError as e:
            e.method, e.path = envelope.method, display_path
            return self._failure(envelope, request_json, e, started)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            error = RequestTimeoutError(envelope.method, display_path, self._session.timeout)
            return self._failure(envelope, request_json, error, started)
        except httpx.TransportError as e:
            error = ConnectivityError(
                f"Serveur injoignable pour {envelope.method} {display_path}: {e}",
                envelope.method,
                display_path,
            )
            return self._failure(envelope, request_json, error, started)

        reply = ResponseEnvelope(
            status_code=response.status_code,
            text=response.text,
            elapsed_ms=_elapsed_ms(started),
        )
        self._log.record_response(
            envelope.method, display_path, reply.status_code, reply.text, reply.elapsed_ms
        )

        if not reply.is_success:
            error = HttpStatusError(envelope.method, display_path, reply.status_code, reply.text)
            self._log_error(envelope, request_json, error, reply)
            return ApiResult(error=error, response=reply)

        if reply.is_empty or response_type is None:
            return ApiResult(value=None, response=reply)

        if response_type is str and not _is_json(response):
            return ApiResult(value=reply.text, response=reply)

        try:
            value = TypeAdapter(response_type).validate_json(reply.text)
        except ValidationError as e:
            error = DeserializationError(
                envelope.method,
                display_path,
                truncate_for_log(reply.text, 500),
                reason=str(e.errors(include_url=False)[:3]),
            )
            self._log_error(envelope, request_json, error, reply)
            return ApiResult(error=error, response=reply)

        return ApiResult(value=value, response=reply)

    def _request_headers(self, has_body: bool) -> dict[str, str]:
        headers = self._session.auth_headers()
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _failure(
        self,
        envelope: RequestEnvelope,
        request_json: Optional[str],
        error: KavitaApiError,
        started: float,
    ) -> ApiResult:
        self._log.record_error(
            envelope.method,
            envelope.path,
            error,
            request_body=request_json,
            elapsed_ms=_elapsed_ms(started),
        )
        return ApiResult(error=error)

    def _log_error(
        self,
        envelope: RequestEnvelope,
        request_json: Optional[str],
        error: KavitaApiError,
        reply: ResponseEnvelope,
    ) -> None:
        self._log.record_error(
            envelope.method,
            envelope.path,
            error,
            request_body=request_json,
            response_body=reply.text,
            status_code=reply.status_code,
            elapsed_ms=reply.elapsed_ms,
        )


def _display_path(path: str, query: dict[str, Any]) -> str:
    if not query:
        return path
    return f"{path}?{httpx.QueryParams(query)}"


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def _is_json(response: httpx.Response) -> bool:
    return "json" in response.headers.get("content-type", "")
