"""
Session de connexion au serveur Kavita.

La session possede l'adresse cible, le jeton Bearer et le client HTTP
partage. Le client est cree a la premiere utilisation et detruit a chaque
changement d'adresse ; construction et remise a zero passent par un verrou
asyncio, l'envoi des requetes ne le tient pas.

Usage:
    async with KavitaSession("http://localhost:5000") as session:
        client = await session.client()
        session.set_token(token)
"""

import asyncio
from typing import Optional

import httpx
from loguru import logger

from kassistant.adapters.api.errors import SessionNotConfiguredError

DEFAULT_TIMEOUT_SECONDS = 30.0


class KavitaSession:
    """
    Contexte de connexion et d'authentification.

    Invariants :
    - changer l'adresse invalide le client HTTP (recree au prochain appel)
    - le jeton, une fois defini, accompagne chaque appel suivant jusqu'a
      clear_token() ou un nouveau set_token()
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialise la session.

        Args:
            base_url: Adresse du serveur (peut etre definie plus tard)
            timeout: Delai fixe par requete, en secondes
            transport: Transport httpx optionnel (tests)
        """
        self._base_url = base_url.rstrip("/") if base_url else None
        self._token: Optional[str] = None
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> "KavitaSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    @property
    def base_url(self) -> Optional[str]:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        """Vrai si un jeton non vide est defini."""
        return bool(self._token)

    async def set_target(self, base_url: str) -> None:
        """
        Change l'adresse du serveur.

        Ferme et oublie le client existant ; le prochain appel en recree
        un lie a la nouvelle adresse.
        """
        async with self._lock:
            self._base_url = base_url.rstrip("/")
            await self._discard_client()
        logger.debug(f"Adresse du serveur : {self._base_url}")

    def set_token(self, token: Optional[str]) -> None:
        """Remplace le jeton attache aux appels suivants."""
        self._token = token or None

    def clear_token(self) -> None:
        self._token = None

    def auth_headers(self) -> dict[str, str]:
        """En-tetes d'authentification du prochain appel."""
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    async def client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Raises:
            SessionNotConfiguredError: Si aucune adresse n'est definie
        """
        async with self._lock:
            if self._client is None or self._client.is_closed:
                if not self._base_url:
                    raise SessionNotConfiguredError()
                self._client = httpx.AsyncClient(
                    base_url=self._base_url,
                    headers={"Accept": "application/json"},
                    timeout=httpx.Timeout(self._timeout),
                    transport=self._transport,
                )
            return self._client

    def build_url(self, path: str) -> str:
        """URL absolue d'un chemin (liens d'images)."""
        return f"{self._base_url or ''}{path}"

    async def aclose(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau (fait automatiquement par async with).
        """
        async with self._lock:
            await self._discard_client()

    async def _discard_client(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
