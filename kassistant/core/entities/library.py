"""
Modeles des bibliotheques et de leur contenu (series, volumes, chapitres).

Une Library est le conteneur de premier niveau cote serveur ; une Series
appartient a une seule Library mais son id est unique sur tout le serveur.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from kassistant.core.entities.base import KavitaModel


class Library(KavitaModel):
    """Bibliotheque Kavita (conteneur de series)."""

    id: int
    name: str = ""
    type: int = 0
    folder_watching: bool = False
    last_scanned: Optional[datetime] = None


class Series(KavitaModel):
    """
    Serie Kavita.

    Attributs principaux :
        id : Identifiant unique sur tout le serveur (cle de deduplication)
        name : Nom affiche (cle de tri)
        library_id : Bibliotheque proprietaire
        pages / pages_read : Progression de lecture
    """

    id: int
    name: str = ""
    original_name: Optional[str] = None
    localized_name: Optional[str] = None
    sort_name: Optional[str] = None
    summary: Optional[str] = None
    library_id: int = 0
    pages: int = 0
    pages_read: int = 0
    word_count: int = 0
    min_hours_to_read: int = 0
    max_hours_to_read: int = 0
    avg_hours_to_read: int = 0
    format: int = 0
    folder_path: Optional[str] = None
    created: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    last_chapter_added: Optional[datetime] = None
    latest_read_date: Optional[datetime] = None
    user_rating: Optional[float] = None
    cover_image: Optional[str] = None


class MangaFile(KavitaModel):
    """Fichier physique rattache a un chapitre."""

    id: int
    file_path: str = ""
    pages: int = 0
    format: int = 0
    bytes: int = 0


class Chapter(KavitaModel):
    """Chapitre d'un volume."""

    id: int
    title: str = ""
    min_number: Optional[str] = None
    max_number: Optional[str] = None
    range: Optional[str] = None
    pages: int = 0
    pages_read: int = 0
    word_count: int = 0
    volume_id: int = 0
    is_special: bool = False
    sort_order: float = 0.0
    release_date: Optional[datetime] = None
    summary: Optional[str] = None
    title_name: Optional[str] = None
    files: list[MangaFile] = Field(default_factory=list)


class Volume(KavitaModel):
    """Volume d'une serie."""

    id: int
    name: str = ""
    min_number: float = 0.0
    max_number: float = 0.0
    pages: int = 0
    pages_read: int = 0
    word_count: int = 0
    series_id: int = 0
    chapters: list[Chapter] = Field(default_factory=list)


class SeriesDetail(KavitaModel):
    """Detail d'une serie : volumes, chapitres et specials."""

    specials: list[Chapter] = Field(default_factory=list)
    chapters: list[Chapter] = Field(default_factory=list)
    volumes: list[Volume] = Field(default_factory=list)
    storyline_chapters: list[Chapter] = Field(default_factory=list)
    total_count: int = 0
    unread_count: int = 0


class GenreTag(KavitaModel):
    """Genre ou tag de metadonnees."""

    id: int
    title: str = ""


class Person(KavitaModel):
    """Personne creditee (auteur, dessinateur, ...)."""

    id: int
    name: str = ""
    role: int = 0


class SeriesMetadata(KavitaModel):
    """Metadonnees editables d'une serie."""

    id: int = 0
    series_id: int = 0
    summary: Optional[str] = None
    genres: list[GenreTag] = Field(default_factory=list)
    tags: list[GenreTag] = Field(default_factory=list)
    age_rating: int = 0
    publication_status: int = 0
    language: Optional[str] = None
    release_year: int = 0
    total_count: int = 0
    max_count: int = 0
    writers: list[Person] = Field(default_factory=list)
    pencillers: list[Person] = Field(default_factory=list)
    cover_artists: list[Person] = Field(default_factory=list)
    publishers: list[Person] = Field(default_factory=list)
    characters: list[Person] = Field(default_factory=list)
    translators: list[Person] = Field(default_factory=list)


class Collection(KavitaModel):
    """Collection de series."""

    id: int
    title: str = ""
    summary: Optional[str] = None
    promoted: bool = False
    series_count: int = 0


class ReadingList(KavitaModel):
    """Liste de lecture."""

    id: int
    title: str = ""
    summary: Optional[str] = None
    promoted: bool = False
    cover_image_locked: bool = False
    item_count: int = 0
