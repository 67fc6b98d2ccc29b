"""Modeles de recherche et de filtrage."""

from typing import Optional

from pydantic import Field

from kassistant.core.entities.base import KavitaModel


class SearchResultItem(KavitaModel):
    """Resultat individuel d'une recherche."""

    series_id: int = 0
    name: str = ""
    original_name: Optional[str] = None
    localized_name: Optional[str] = None
    sort_name: Optional[str] = None
    format: int = 0
    library_id: int = 0
    library_name: Optional[str] = None


class SearchResultGroup(KavitaModel):
    """Resultats de recherche regroupes par type d'entite."""

    series: list[SearchResultItem] = Field(default_factory=list)
    collections: list[dict] = Field(default_factory=list)
    reading_lists: list[dict] = Field(default_factory=list)
    persons: list[dict] = Field(default_factory=list)
    genres: list[dict] = Field(default_factory=list)
    tags: list[dict] = Field(default_factory=list)
    files: list[dict] = Field(default_factory=list)
    chapters: list[dict] = Field(default_factory=list)
    libraries: list[dict] = Field(default_factory=list)


class FilterStatement(KavitaModel):
    """Condition elementaire d'un filtre v2."""

    comparison: int = 0
    field: int = 0
    value: str = ""


class SortOptions(KavitaModel):
    """Options de tri d'un filtre v2."""

    sort_field: int = 1
    is_ascending: bool = True


class FilterV2(KavitaModel):
    """Filtre envoye aux endpoints de series v2 (vide = pas de filtre)."""

    id: Optional[int] = None
    name: Optional[str] = None
    statements: Optional[list[FilterStatement]] = None
    combination: Optional[int] = None
    sort_options: Optional[SortOptions] = None
    limit_to: Optional[int] = None
