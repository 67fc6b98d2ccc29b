"""
Interface port pour les sources de series paginees par bibliotheque.

Le serveur n'expose les series que bibliotheque par bibliotheque ;
l'agregateur s'appuie sur ce contrat pour reconstruire la vue
"toutes les bibliotheques" sans dependre du transport HTTP.
"""

from abc import ABC, abstractmethod
from typing import Optional

from kassistant.core.entities.library import Library, Series
from kassistant.core.value_objects.pagination import PaginatedResult


class ISeriesSource(ABC):
    """
    Interface des sources de series.

    Implementee par KavitaApiClient ; les tests fournissent des doublures.
    """

    @abstractmethod
    async def get_libraries(self) -> Optional[list[Library]]:
        """
        Enumere les bibliotheques du serveur.

        Retourne :
            Liste des bibliotheques, ou None si le serveur ne renvoie rien
        """
        ...

    @abstractmethod
    async def get_library_series_page(
        self,
        library_id: int,
        page_number: int,
        page_size: int,
    ) -> Optional[PaginatedResult[Series]]:
        """
        Recupere une page de series pour une bibliotheque.

        Args :
            library_id : Identifiant de la bibliotheque (> 0)
            page_number : Numero de page
            page_size : Taille de page

        Retourne :
            La page telle que renvoyee par le serveur, ou None si vide
        """
        ...
