"""Modeles de progression de lecture."""

from typing import Optional

from kassistant.core.entities.base import KavitaModel


class Progress(KavitaModel):
    """Position de lecture dans un chapitre."""

    volume_id: int
    chapter_id: int
    page_num: int
    series_id: int
    library_id: int
    bookmark_element: Optional[str] = None
