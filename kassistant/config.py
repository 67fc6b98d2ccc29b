"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe KASSISTANT_,
et peut optionnellement être fournie via un fichier .env.

L'adresse du serveur définie ici n'est qu'une valeur par défaut : les identifiants
sauvegardés (voir CredentialStore) ou les options CLI la remplacent.
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de kassistant/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


def _default_settings_dir() -> Path:
    """Répertoire de configuration utilisateur (XDG_CONFIG_HOME si défini)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path("~/.config")
    return root / "kassistant"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe KASSISTANT_.
    Exemple : KASSISTANT_SERVER_URL=http://nas:5000

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="KASSISTANT_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Serveur Kavita
    server_url: str = Field(default="http://localhost:5000")
    request_timeout: float = Field(default=30.0, gt=0)

    # Pagination et agrégation
    default_page_size: int = Field(default=20, ge=1)
    aggregation_batch_size: int = Field(default=100, ge=1)

    # Troncature des corps dans le journal des requêtes
    request_preview_limit: int = Field(default=500, ge=1)
    response_preview_limit: int = Field(default=300, ge=1)
    error_capture_limit: int = Field(default=2000, ge=1)

    # Logging (console + fichier journalier kavita_api_YYYY-MM-DD.log)
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))
    log_to_file: bool = Field(default=True)
    log_retention_days: int = Field(default=7, ge=1)

    # Identifiants sauvegardés et description OpenAPI optionnelle
    settings_dir: Path = Field(default_factory=_default_settings_dir)
    openapi_document: Optional[Path] = Field(default=None)

    @field_validator("log_dir", "settings_dir", "openapi_document", mode="before")
    @classmethod
    def expand_path(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Étend ~ vers le répertoire home dans les chemins."""
        if v is None:
            return None
        return Path(v).expanduser()

    @field_validator("server_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Supprime le slash final de l'adresse du serveur."""
        return v.rstrip("/")

    @property
    def credentials_file(self) -> Path:
        """Chemin du fichier d'identifiants sauvegardés."""
        return self.settings_dir / "settings.json"
