"""
Service d'agregation des series de toutes les bibliotheques.

Le serveur Kavita n'expose les series que bibliotheque par bibliotheque.
Quand l'appelant ne precise pas de bibliotheque (library_id <= 0), ce
service parcourt chaque bibliotheque par lots, fusionne les series sans
doublon, les trie par nom et reconstruit une enveloppe de pagination.

Une bibliotheque en echec est abandonnee (erreur journalisee et rapportee)
sans faire echouer l'ensemble.
"""

from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from kassistant.adapters.api.errors import KavitaApiError, PartialAggregationError
from kassistant.core.entities.library import Library, Series
from kassistant.core.ports.series_source import ISeriesSource
from kassistant.core.value_objects.pagination import PaginatedResult

FIRST_PAGE = 0


@dataclass
class LibraryContribution:
    """Apport d'une bibliotheque a l'agregation."""

    library_id: int
    library_name: str
    added: int = 0
    duplicates: int = 0
    pages_fetched: int = 0
    error: Optional[PartialAggregationError] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class AggregationResult:
    """
    Resultat complet d'une agregation.

    Attributs :
        page : Enveloppe renvoyee a l'appelant
        contributions : Apport de chaque bibliotheque, dans l'ordre d'enumeration
        enumeration_error : Erreur de l'enumeration des bibliotheques, le cas echeant
    """

    page: PaginatedResult[Series]
    contributions: list[LibraryContribution] = field(default_factory=list)
    enumeration_error: Optional[KavitaApiError] = None

    @property
    def failures(self) -> list[PartialAggregationError]:
        return [c.error for c in self.contributions if c.error is not None]


def sort_by_name(series: list[Series]) -> list[Series]:
    """Tri stable par nom croissant (comparaison ordinale)."""
    return sorted(series, key=lambda s: s.name)


class SeriesAggregatorService:
    """
    Reconstruit la vue "toutes les series" a partir des pages par bibliotheque.

    Les bibliotheques sont traitees sequentiellement, dans l'ordre renvoye
    par le serveur ; la premiere occurrence d'un id de serie l'emporte.

    Example:
        aggregator = SeriesAggregatorService(client)
        page = await aggregator.get_all_series(0, page_number=0, page_size=20)
    """

    DEFAULT_BATCH_SIZE = 100

    def __init__(self, source: ISeriesSource, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size doit etre >= 1 (recu {batch_size})")
        self._source = source
        self._batch_size = batch_size

    async def get_all_series(
        self,
        library_id: int,
        page_number: int = FIRST_PAGE,
        page_size: int = 20,
    ) -> Optional[PaginatedResult[Series]]:
        """
        Series d'une bibliotheque, ou de toutes si library_id <= 0.

        Args:
            library_id: Bibliotheque ciblee (<= 0 pour toutes)
            page_number: Numero de page demande
            page_size: Taille de page demandee (>= 1)

        Returns:
            Enveloppe de pagination ; None si une bibliotheque unique
            renvoie un corps vide.

        Raises:
            ValueError: Si page_size < 1
            KavitaApiError: Sur le chemin mono-bibliotheque uniquement
        """
        if library_id > 0:
            return await self.get_library_series(library_id, page_number, page_size)
        result = await self.aggregate(page_number, page_size)
        return result.page

    async def get_library_series(
        self, library_id: int, page_number: int, page_size: int
    ) -> Optional[PaginatedResult[Series]]:
        """Chemin rapide : une seule page, elements tries par nom."""
        if page_size < 1:
            raise ValueError(f"page_size doit etre >= 1 (recu {page_size})")
        page = await self._source.get_library_series_page(library_id, page_number, page_size)
        if page is not None:
            page.result = sort_by_name(page.result)
        return page

    async def aggregate(self, page_number: int = FIRST_PAGE, page_size: int = 20) -> AggregationResult:
        """
        Fusionne les series de toutes les bibliotheques.

        L'enveloppe renvoyee contient TOUTES les series fusionnees :
        current_page reprend page_number tel que demande, sans decoupage.
        """
        if page_size < 1:
            raise ValueError(f"page_size doit etre >= 1 (recu {page_size})")

        logger.info("Chargement des series de toutes les bibliotheques")
        try:
            libraries = await self._source.get_libraries()
        except KavitaApiError as e:
            logger.error(f"Enumeration des bibliotheques impossible : {e}")
            return AggregationResult(
                page=PaginatedResult[Series].empty(page_number, page_size),
                enumeration_error=e,
            )

        if not libraries:
            logger.info("Aucune bibliotheque trouvee")
            return AggregationResult(page=PaginatedResult[Series].empty(page_number, page_size))

        logger.info(f"{len(libraries)} bibliotheque(s) trouvee(s)")

        merged: list[Series] = []
        seen_ids: set[int] = set()
        contributions = []
        for library in libraries:
            contribution = await self._collect_library(library, merged, seen_ids)
            contributions.append(contribution)

        if merged:
            logger.info(f"{len(merged)} serie(s) chargee(s) au total")
        else:
            logger.warning("Aucune serie n'a pu etre chargee")

        page = PaginatedResult[Series].from_items(sort_by_name(merged), page_number, page_size)
        return AggregationResult(page=page, contributions=contributions)

    async def _collect_library(
        self,
        library: Library,
        merged: list[Series],
        seen_ids: set[int],
    ) -> LibraryContribution:
        """Parcourt une bibliotheque par lots et ajoute ses series inedites."""
        contribution = LibraryContribution(library_id=library.id, library_name=library.name)
        logger.debug(f"Chargement de la bibliotheque {library.name} (ID: {library.id})")

        current_page = FIRST_PAGE
        try:
            while True:
                batch = await self._source.get_library_series_page(
                    library.id, current_page, self._batch_size
                )
                if batch is None or not batch.result:
                    break
                contribution.pages_fetched += 1

                for series in batch.result:
                    if series.id in seen_ids:
                        contribution.duplicates += 1
                        continue
                    seen_ids.add(series.id)
                    merged.append(series)
                    contribution.added += 1

                current_page += 1
                if current_page >= batch.total_pages:
                    break
        except Exception as e:
            contribution.error = PartialAggregationError(library.id, library.name, e)
            logger.warning(f"Erreur dans {library.name} : {e}")
            return contribution

        if contribution.added:
            logger.debug(f"{contribution.added} serie(s) chargee(s) depuis {library.name}")
        else:
            logger.debug(f"Aucune serie dans {library.name}")
        return contribution
