"""Enveloppes immutables d'une requete et de sa reponse."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class RequestEnvelope:
    """Requete a executer : methode, chemin et corps optionnel."""

    method: str
    path: str
    body: Optional[Any] = None


@dataclass(frozen=True)
class ResponseEnvelope:
    """
    Reponse recue : produite une fois par appel, jamais modifiee.

    Attributs :
        status_code : Code HTTP
        text : Corps brut
        elapsed_ms : Duree de l'aller-retour en millisecondes
    """

    status_code: int
    text: str
    elapsed_ms: float

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()
