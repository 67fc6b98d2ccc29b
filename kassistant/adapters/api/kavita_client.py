"""
Client de l'API REST Kavita.

Associe chaque operation du domaine (login, bibliotheques, series, recherche,
progression...) a un appel RequestExecutor. La vue "toutes les bibliotheques"
est deleguee a SeriesAggregatorService.

Usage:
    async with KavitaSession("http://localhost:5000") as session:
        client = KavitaApiClient(RequestExecutor(session, RequestLog()))
        user = await client.login("admin", "secret")
        page = await client.get_all_series(0)
"""

from typing import Optional

from loguru import logger

from kassistant.adapters.api.executor import RequestExecutor
from kassistant.adapters.api.session import KavitaSession
from kassistant.core.entities import (
    Chapter,
    Collection,
    FilterV2,
    Library,
    LoginRequest,
    Progress,
    ReadingList,
    SearchResultGroup,
    Series,
    SeriesDetail,
    SeriesMetadata,
    ServerInfo,
    ServerStats,
    User,
    UserDto,
    UserStats,
    Volume,
)
from kassistant.core.ports.series_source import ISeriesSource
from kassistant.core.value_objects.pagination import PaginatedResult
from kassistant.services.series_aggregator import SeriesAggregatorService


class KavitaApiClient(ISeriesSource):
    """
    Facade typee de l'API Kavita.

    Les erreurs d'un appel unique remontent telles quelles a l'appelant
    (deja journalisees par l'executeur). Les methodes qui renvoient un
    objet retournent None quand le serveur repond 2xx sans corps.

    Attributes:
        DEFAULT_PAGE_SIZE: Taille de page par defaut des listes paginees
        AGGREGATION_BATCH_SIZE: Taille des lots lors de l'agregation
    """

    DEFAULT_PAGE_SIZE = 20
    AGGREGATION_BATCH_SIZE = 100

    def __init__(
        self,
        executor: RequestExecutor,
        aggregation_batch_size: int = AGGREGATION_BATCH_SIZE,
    ) -> None:
        self._executor = executor
        self._aggregator = SeriesAggregatorService(self, batch_size=aggregation_batch_size)

    @property
    def session(self) -> KavitaSession:
        return self._executor.session

    @property
    def executor(self) -> RequestExecutor:
        return self._executor

    @property
    def aggregator(self) -> SeriesAggregatorService:
        """Agregateur utilise par get_all_series (rapport par bibliotheque)."""
        return self._aggregator

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    async def set_base_url(self, base_url: str) -> None:
        await self.session.set_target(base_url)

    def set_auth_token(self, token: str) -> None:
        self.session.set_token(token)

    def clear_auth_token(self) -> None:
        self.session.clear_token()

    # Authentification - /api/Account

    async def login(self, username: str, password: str) -> Optional[UserDto]:
        """
        POST /api/Account/login.

        Si la reponse contient un jeton, la session l'adopte pour les
        appels suivants.
        """
        user = await self._executor.execute(
            "POST",
            "/api/Account/login",
            body=LoginRequest(username=username, password=password),
            response_type=UserDto,
        )
        if user is not None and user.token:
            self.session.set_token(user.token)
            logger.info(f"Connecte en tant que {user.username}")
        return user

    async def get_current_user(self) -> Optional[UserDto]:
        return await self._executor.execute("GET", "/api/Account", response_type=UserDto)

    async def get_roles(self) -> Optional[list[str]]:
        return await self._executor.execute("GET", "/api/Account/roles", response_type=list[str])

    # Serveur - /api/Server, /api/Health, /api/Stats

    async def get_server_info(self) -> Optional[ServerInfo]:
        return await self._executor.execute(
            "GET", "/api/Server/server-info-slim", response_type=ServerInfo
        )

    async def health_check(self) -> Optional[str]:
        return await self._executor.execute("GET", "/api/Health", response_type=str)

    async def get_server_stats(self) -> Optional[ServerStats]:
        return await self._executor.execute(
            "GET", "/api/Stats/server/stats", response_type=ServerStats
        )

    async def get_user_stats(self, user_id: Optional[int] = None) -> Optional[UserStats]:
        return await self._executor.execute(
            "GET", "/api/Stats/user-read", params={"userId": user_id}, response_type=UserStats
        )

    # Bibliotheques - /api/Library

    async def get_libraries(self) -> Optional[list[Library]]:
        return await self._executor.execute(
            "GET", "/api/Library/libraries", response_type=list[Library]
        )

    async def get_library(self, library_id: int) -> Optional[Library]:
        return await self._executor.execute(
            "GET", "/api/Library", params={"libraryId": library_id}, response_type=Library
        )

    async def scan_library(self, library_id: int, force: bool = False) -> None:
        await self._executor.execute(
            "POST", "/api/Library/scan", params={"libraryId": library_id, "force": force}
        )

    # Series - /api/Series

    async def get_series(self, series_id: int) -> Optional[Series]:
        return await self._executor.execute("GET", f"/api/Series/{series_id}", response_type=Series)

    async def get_series_detail(self, series_id: int) -> Optional[SeriesDetail]:
        return await self._executor.execute(
            "GET",
            "/api/Series/series-detail",
            params={"seriesId": series_id},
            response_type=SeriesDetail,
        )

    async def get_series_metadata(self, series_id: int) -> Optional[SeriesMetadata]:
        return await self._executor.execute(
            "GET",
            "/api/Series/metadata",
            params={"seriesId": series_id},
            response_type=SeriesMetadata,
        )

    async def get_volumes(self, series_id: int) -> Optional[list[Volume]]:
        return await self._executor.execute(
            "GET", "/api/Series/volumes", params={"seriesId": series_id}, response_type=list[Volume]
        )

    async def get_chapter(self, chapter_id: int) -> Optional[Chapter]:
        return await self._executor.execute(
            "GET", "/api/Series/chapter", params={"chapterId": chapter_id}, response_type=Chapter
        )

    async def get_recently_added_series(
        self,
        page_number: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        library_id: Optional[int] = None,
    ) -> Optional[PaginatedResult[Series]]:
        """POST /api/Series/recently-added-v2, filtre optionnel par bibliotheque."""
        return await self._executor.execute(
            "POST",
            "/api/Series/recently-added-v2",
            body=FilterV2(),
            params={"PageNumber": page_number, "PageSize": page_size, "libraryId": library_id},
            response_type=PaginatedResult[Series],
        )

    async def get_on_deck_series(
        self,
        page_number: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        library_id: Optional[int] = None,
    ) -> Optional[PaginatedResult[Series]]:
        return await self._executor.execute(
            "POST",
            "/api/Series/on-deck",
            params={"PageNumber": page_number, "PageSize": page_size, "libraryId": library_id or 0},
            response_type=PaginatedResult[Series],
        )

    async def get_library_series_page(
        self,
        library_id: int,
        page_number: int,
        page_size: int,
    ) -> Optional[PaginatedResult[Series]]:
        """Page de series d'une bibliotheque (port ISeriesSource)."""
        return await self.get_recently_added_series(page_number, page_size, library_id)

    async def get_all_series(
        self,
        library_id: int,
        page_number: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Optional[PaginatedResult[Series]]:
        """
        Series d'une bibliotheque, ou de toutes si library_id <= 0.

        Voir SeriesAggregatorService.get_all_series.
        """
        return await self._aggregator.get_all_series(library_id, page_number, page_size)

    async def delete_series(self, series_id: int) -> Optional[bool]:
        return await self._executor.execute(
            "DELETE", f"/api/Series/{series_id}", response_type=bool
        )

    # Recherche - /api/Search

    async def search(
        self, query: str, include_chapter_and_files: bool = True
    ) -> Optional[SearchResultGroup]:
        return await self._executor.execute(
            "GET",
            "/api/Search/search",
            params={"queryString": query, "includeChapterAndFiles": include_chapter_and_files},
            response_type=SearchResultGroup,
        )

    # Lecture - /api/Reader

    async def get_progress(self, chapter_id: int) -> Optional[Progress]:
        return await self._executor.execute(
            "GET", "/api/Reader/get-progress", params={"chapterId": chapter_id}, response_type=Progress
        )

    async def save_progress(self, progress: Progress) -> None:
        await self._executor.execute("POST", "/api/Reader/progress", body=progress)

    async def mark_series_as_read(self, series_id: int) -> None:
        await self._executor.execute("POST", "/api/Reader/mark-read", body={"seriesId": series_id})

    async def mark_series_as_unread(self, series_id: int) -> None:
        await self._executor.execute("POST", "/api/Reader/mark-unread", body={"seriesId": series_id})

    # Collections, listes de lecture, utilisateurs

    async def get_collections(self, owned_only: bool = False) -> Optional[list[Collection]]:
        return await self._executor.execute(
            "GET", "/api/Collection", params={"ownedOnly": owned_only}, response_type=list[Collection]
        )

    async def get_reading_lists(
        self,
        page_number: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        include_promoted: bool = True,
    ) -> Optional[PaginatedResult[ReadingList]]:
        return await self._executor.execute(
            "POST",
            "/api/ReadingList/lists",
            params={
                "PageNumber": page_number,
                "PageSize": page_size,
                "includePromoted": include_promoted,
            },
            response_type=PaginatedResult[ReadingList],
        )

    async def get_users(self, include_pending: bool = False) -> Optional[list[User]]:
        return await self._executor.execute(
            "GET", "/api/Users", params={"includePending": include_pending}, response_type=list[User]
        )

    # A lire - /api/want-to-read

    async def add_to_want_to_read(self, *series_ids: int) -> None:
        await self._executor.execute(
            "POST", "/api/want-to-read/add-series", body={"seriesIds": list(series_ids)}
        )

    async def remove_from_want_to_read(self, *series_ids: int) -> None:
        await self._executor.execute(
            "POST", "/api/want-to-read/remove-series", body={"seriesIds": list(series_ids)}
        )

    # Images

    def get_series_cover_url(self, series_id: int, api_key: Optional[str] = None) -> str:
        return self._image_url(f"/api/Image/series-cover?seriesId={series_id}", api_key)

    def get_library_cover_url(self, library_id: int, api_key: Optional[str] = None) -> str:
        return self._image_url(f"/api/Image/library-cover?libraryId={library_id}", api_key)

    def _image_url(self, path: str, api_key: Optional[str]) -> str:
        if api_key:
            path += f"&apiKey={api_key}"
        return self.session.build_url(path)

