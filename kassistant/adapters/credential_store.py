"""
Stockage local des identifiants de connexion.

Fichier JSON settings.json dans le repertoire de configuration utilisateur :
adresse du serveur, nom d'utilisateur, mot de passe (si memorise) et
indicateur "se souvenir de moi".
"""

import json
from pathlib import Path

from loguru import logger
from pydantic import Field, ValidationError

from kassistant.core.entities.base import KavitaModel


class SavedCredentials(KavitaModel):
    """Contenu du fichier d'identifiants."""

    server_url: str = Field(default="http://localhost:5000")
    username: str = ""
    password: str = ""
    remember_credentials: bool = False


class CredentialStore:
    """
    Lecture / ecriture / suppression du fichier d'identifiants.

    Example:
        store = CredentialStore(Path("~/.config/kassistant").expanduser())
        saved = store.load()
        store.save(saved.model_copy(update={"username": "admin"}))
    """

    FILENAME = "settings.json"

    def __init__(self, settings_dir: Path) -> None:
        self._path = Path(settings_dir) / self.FILENAME

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> SavedCredentials:
        """Charge les identifiants ; valeurs par defaut si absent ou illisible."""
        if not self._path.exists():
            return SavedCredentials()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return SavedCredentials.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Erreur de lecture des identifiants : {e}")
            return SavedCredentials()

    def save(self, credentials: SavedCredentials) -> None:
        """Ecrit les identifiants (les erreurs d'ecriture remontent)."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(credentials.model_dump(mode="json", by_alias=True), indent=2),
            encoding="utf-8",
        )
        logger.debug(f"Identifiants sauvegardes dans {self._path}")

    def clear(self) -> None:
        """Supprime le fichier d'identifiants s'il existe."""
        self._path.unlink(missing_ok=True)
