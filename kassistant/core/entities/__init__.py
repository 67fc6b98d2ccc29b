"""
Modeles du domaine Kavita.

Tous les modeles derivent de KavitaModel : lecture insensible a la casse,
champs inconnus ignores, None omis a l'ecriture.

Exports:
- Library, Series : conteneurs et elements agreges
- SeriesDetail, SeriesMetadata, Volume, Chapter : detail d'une serie
- LoginRequest, UserDto, User : authentification et utilisateurs
- ServerInfo, ServerStats, UserStats : informations serveur
- SearchResultGroup, FilterV2 : recherche et filtrage
"""

from kassistant.core.entities.account import LoginRequest, User, UserDto
from kassistant.core.entities.base import KavitaModel
from kassistant.core.entities.library import (
    Chapter,
    Collection,
    Library,
    ReadingList,
    Series,
    SeriesDetail,
    SeriesMetadata,
    Volume,
)
from kassistant.core.entities.reader import Progress
from kassistant.core.entities.search import (
    FilterV2,
    SearchResultGroup,
    SearchResultItem,
)
from kassistant.core.entities.server import ServerInfo, ServerStats, UserStats

__all__ = [
    "KavitaModel",
    "Library",
    "Series",
    "SeriesDetail",
    "SeriesMetadata",
    "Volume",
    "Chapter",
    "Collection",
    "ReadingList",
    "LoginRequest",
    "UserDto",
    "User",
    "ServerInfo",
    "ServerStats",
    "UserStats",
    "SearchResultGroup",
    "SearchResultItem",
    "FilterV2",
    "Progress",
]
