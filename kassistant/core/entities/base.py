"""
Modele de base pour les objets echanges avec le serveur Kavita.

Conventions du format JSON de Kavita :
- noms de proprietes en camelCase sur le fil (casse preservee a l'ecriture)
- lecture insensible a la casse ("Name", "name" et "NAME" sont equivalents)
- champs inconnus ignores
- champs a None omis a l'ecriture
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class KavitaModel(BaseModel):
    """
    Base commune des modeles Kavita.

    Example:
        library = Library.model_validate({"ID": 1, "Name": "Manga"})
        payload = library.to_wire()  # {"id": 1, "name": "Manga", ...}
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        """Renomme les cles recues vers l'alias du champ correspondant."""
        if not isinstance(data, dict):
            return data

        known: dict[str, str] = {}
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            known[alias.lower()] = alias
            known[name.lower()] = alias

        normalized: dict[str, Any] = {}
        for key, value in data.items():
            target = known.get(key.lower(), key) if isinstance(key, str) else key
            # Premiere occurrence conservee en cas de doublon de casse
            normalized.setdefault(target, value)
        return normalized

    def to_wire(self) -> dict[str, Any]:
        """Serialise le modele pour l'envoi (alias camelCase, sans None)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
