"""
Enveloppe de pagination renvoyee par les endpoints de series.

PaginatedResult est construit directement depuis la reponse du serveur,
ou synthetiquement par l'agregateur quand il combine plusieurs bibliotheques.
"""

import math
from typing import Generic, TypeVar

from pydantic import Field

from kassistant.core.entities.base import KavitaModel

T = TypeVar("T")


class PaginatedResult(KavitaModel, Generic[T]):
    """
    Page de resultats.

    Attributs :
        current_page : Numero de page demande par l'appelant
        page_size : Taille de page demandee
        total_count : Nombre total d'elements
        total_pages : ceil(total_count / page_size)
        result : Elements de la page, dans l'ordre
    """

    current_page: int = 0
    page_size: int = 0
    total_count: int = 0
    total_pages: int = 0
    result: list[T] = Field(default_factory=list)

    @classmethod
    def empty(cls, page_number: int, page_size: int) -> "PaginatedResult[T]":
        """Page vide (aucun element, aucune page)."""
        return cls(current_page=page_number, page_size=page_size)

    @classmethod
    def from_items(
        cls, items: list[T], page_number: int, page_size: int
    ) -> "PaginatedResult[T]":
        """Construit une page synthetique contenant tous les elements."""
        if page_size < 1:
            raise ValueError(f"page_size doit etre >= 1 (recu {page_size})")
        return cls(
            current_page=page_number,
            page_size=page_size,
            total_count=len(items),
            total_pages=math.ceil(len(items) / page_size),
            result=list(items),
        )
