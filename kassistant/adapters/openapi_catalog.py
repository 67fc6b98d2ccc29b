"""
Catalogue des endpoints decrits par un document OpenAPI (JSON).

Collaborateur optionnel, utilise uniquement pour l'introspection
(commande CLI `endpoints`). Il ne participe jamais a l'execution des
requetes.
"""

import json
from pathlib import Path
from typing import Any, Optional

from loguru import logger

HTTP_METHODS = ("get", "post", "put", "delete", "patch")


class OpenApiCatalog:
    """
    Vue en lecture seule d'un document OpenAPI.

    Example:
        catalog = OpenApiCatalog.load(Path("kavita_api.json"))
        for path in catalog.available_paths():
            print(path, catalog.operations(path))
    """

    def __init__(self, document: Optional[dict[str, Any]] = None) -> None:
        self._document = document or {}

    @classmethod
    def load(cls, path: Path) -> "OpenApiCatalog":
        """Charge un document ; catalogue vide si absent ou invalide."""
        if not path.exists():
            logger.warning(f"Document OpenAPI introuvable : {path}")
            return cls()
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Document OpenAPI illisible : {e}")
            return cls()
        if not isinstance(document, dict):
            logger.warning(f"Document OpenAPI inattendu : {path}")
            return cls()
        return cls(document)

    @property
    def is_loaded(self) -> bool:
        return bool(self._document)

    @property
    def title(self) -> Optional[str]:
        return self._document.get("info", {}).get("title")

    def available_paths(self) -> list[str]:
        return sorted(self._document.get("paths", {}))

    def path_info(self, path: str) -> Optional[dict[str, Any]]:
        return self._document.get("paths", {}).get(path)

    def operations(self, path: str) -> list[str]:
        """Methodes HTTP declarees pour un chemin, en majuscules."""
        info = self.path_info(path) or {}
        return [method.upper() for method in HTTP_METHODS if method in info]
