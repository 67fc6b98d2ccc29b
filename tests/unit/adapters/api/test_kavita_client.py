"""
Tests for KavitaApiClient - typed facade over RequestExecutor.

Uses respx to mock httpx calls and verifies endpoint paths, query
parameters and the token adoption on login.
"""

import json

import httpx
import pytest
import respx

from kassistant.adapters.api.errors import HttpStatusError
from kassistant.adapters.api.kavita_client import KavitaApiClient
from kassistant.core.entities import Progress
from kassistant.core.ports.series_source import ISeriesSource
from kassistant.services.series_aggregator import SeriesAggregatorService
from tests.fixtures.kavita_responses import (
    BASE_URL,
    KAVITA_LIBRARIES_RESPONSE,
    KAVITA_LOGIN_RESPONSE,
    KAVITA_RECENTLY_ADDED_RESPONSE,
    KAVITA_SEARCH_RESPONSE,
    KAVITA_SERVER_INFO_RESPONSE,
    KAVITA_SERVER_STATS_RESPONSE,
    paginated_json,
    series_json,
)


class TestKavitaApiClientInterface:
    """KavitaApiClient implements the series source port."""

    def test_implements_series_source(self, kavita_client: KavitaApiClient):
        assert isinstance(kavita_client, ISeriesSource)

    def test_exposes_aggregator(self, kavita_client: KavitaApiClient):
        assert isinstance(kavita_client.aggregator, SeriesAggregatorService)

    def test_package_exports_client(self):
        import kassistant.adapters.api as api

        assert api.KavitaApiClient is KavitaApiClient


class TestKavitaLogin:
    """Tests for login()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_login_adopts_token(self, kavita_client: KavitaApiClient):
        route = respx.post(f"{BASE_URL}/api/Account/login").mock(
            return_value=httpx.Response(200, json=KAVITA_LOGIN_RESPONSE)
        )

        user = await kavita_client.login("admin", "secret")

        assert user.username == "admin"
        assert user.api_key == "b7b9a1e2-api-key"
        assert kavita_client.is_authenticated
        assert json.loads(route.calls.last.request.content) == {
            "username": "admin",
            "password": "secret",
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_following_calls_carry_token(self, kavita_client: KavitaApiClient):
        respx.post(f"{BASE_URL}/api/Account/login").mock(
            return_value=httpx.Response(200, json=KAVITA_LOGIN_RESPONSE)
        )
        libraries = respx.get(f"{BASE_URL}/api/Library/libraries").mock(
            return_value=httpx.Response(200, json=KAVITA_LIBRARIES_RESPONSE)
        )

        await kavita_client.login("admin", "secret")
        await kavita_client.get_libraries()

        assert libraries.calls.last.request.headers["Authorization"] == (
            f"Bearer {KAVITA_LOGIN_RESPONSE['token']}"
        )

    @pytest.mark.asyncio
    @respx.mock
    async def test_login_without_token_keeps_session_anonymous(self, kavita_client: KavitaApiClient):
        respx.post(f"{BASE_URL}/api/Account/login").mock(
            return_value=httpx.Response(200, json={"username": "admin"})
        )

        user = await kavita_client.login("admin", "secret")

        assert user.token is None
        assert not kavita_client.is_authenticated

    @pytest.mark.asyncio
    @respx.mock
    async def test_login_failure_raises(self, kavita_client: KavitaApiClient):
        respx.post(f"{BASE_URL}/api/Account/login").mock(
            return_value=httpx.Response(401, text="Your account is locked")
        )

        with pytest.raises(HttpStatusError) as exc_info:
            await kavita_client.login("admin", "wrong")

        assert exc_info.value.body == "Your account is locked"


class TestKavitaEndpoints:
    """Endpoint paths and parameters."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_server_info(self, kavita_client: KavitaApiClient):
        respx.get(f"{BASE_URL}/api/Server/server-info-slim").mock(
            return_value=httpx.Response(200, json=KAVITA_SERVER_INFO_RESPONSE)
        )

        info = await kavita_client.get_server_info()

        assert info.kavita_version == "0.8.4.2"
        assert info.dot_net_version == "8.0.10"

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_libraries(self, kavita_client: KavitaApiClient):
        respx.get(f"{BASE_URL}/api/Library/libraries").mock(
            return_value=httpx.Response(200, json=KAVITA_LIBRARIES_RESPONSE)
        )

        libraries = await kavita_client.get_libraries()

        assert [(lib.id, lib.name) for lib in libraries] == [(1, "Manga"), (2, "Comics")]
        assert libraries[0].folder_watching is True

    @pytest.mark.asyncio
    @respx.mock
    async def test_recently_added_sends_paging_and_library(self, kavita_client: KavitaApiClient):
        route = respx.post(f"{BASE_URL}/api/Series/recently-added-v2").mock(
            return_value=httpx.Response(200, json=KAVITA_RECENTLY_ADDED_RESPONSE)
        )

        page = await kavita_client.get_recently_added_series(0, 20, library_id=1)

        params = route.calls.last.request.url.params
        assert params["PageNumber"] == "0"
        assert params["PageSize"] == "20"
        assert params["libraryId"] == "1"
        assert json.loads(route.calls.last.request.content) == {}
        assert [s.name for s in page.result] == ["Beta", "Alpha"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_all_series_single_library_sorted(self, kavita_client: KavitaApiClient):
        respx.post(f"{BASE_URL}/api/Series/recently-added-v2").mock(
            return_value=httpx.Response(200, json=KAVITA_RECENTLY_ADDED_RESPONSE)
        )

        page = await kavita_client.get_all_series(1, 0, 20)

        assert [s.name for s in page.result] == ["Alpha", "Beta"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_all_series_aggregates_libraries(self, kavita_client: KavitaApiClient):
        respx.get(f"{BASE_URL}/api/Library/libraries").mock(
            return_value=httpx.Response(200, json=KAVITA_LIBRARIES_RESPONSE)
        )
        respx.post(
            f"{BASE_URL}/api/Series/recently-added-v2", params={"libraryId": "1"}
        ).mock(
            return_value=httpx.Response(
                200, json=paginated_json([series_json(10, "Beta", 1), series_json(11, "Alpha", 1)])
            )
        )
        respx.post(
            f"{BASE_URL}/api/Series/recently-added-v2", params={"libraryId": "2"}
        ).mock(
            return_value=httpx.Response(
                200, json=paginated_json([series_json(11, "Alpha", 2)])
            )
        )

        page = await kavita_client.get_all_series(0, 0, 20)

        assert [(s.id, s.name) for s in page.result] == [(11, "Alpha"), (10, "Beta")]
        assert page.total_count == 2
        assert page.total_pages == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_search(self, kavita_client: KavitaApiClient):
        route = respx.get(f"{BASE_URL}/api/Search/search").mock(
            return_value=httpx.Response(200, json=KAVITA_SEARCH_RESPONSE)
        )

        result = await kavita_client.search("one")

        assert route.calls.last.request.url.params["queryString"] == "one"
        assert result.series[0].series_id == 42
        assert result.series[0].library_name == "Manga"

    @pytest.mark.asyncio
    @respx.mock
    async def test_get_server_stats(self, kavita_client: KavitaApiClient):
        respx.get(f"{BASE_URL}/api/Stats/server/stats").mock(
            return_value=httpx.Response(200, json=KAVITA_SERVER_STATS_RESPONSE)
        )

        stats = await kavita_client.get_server_stats()

        assert stats.total_series == 87

    @pytest.mark.asyncio
    @respx.mock
    async def test_delete_series(self, kavita_client: KavitaApiClient):
        route = respx.delete(f"{BASE_URL}/api/Series/42").mock(
            return_value=httpx.Response(200, json=True)
        )

        assert await kavita_client.delete_series(42) is True
        assert route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_save_progress_body(self, kavita_client: KavitaApiClient):
        route = respx.post(f"{BASE_URL}/api/Reader/progress").mock(
            return_value=httpx.Response(200)
        )

        await kavita_client.save_progress(
            Progress(volume_id=1, chapter_id=2, page_num=3, series_id=4, library_id=5)
        )

        assert json.loads(route.calls.last.request.content) == {
            "volumeId": 1,
            "chapterId": 2,
            "pageNum": 3,
            "seriesId": 4,
            "libraryId": 5,
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_mark_series_as_read(self, kavita_client: KavitaApiClient):
        route = respx.post(f"{BASE_URL}/api/Reader/mark-read").mock(
            return_value=httpx.Response(200)
        )

        await kavita_client.mark_series_as_read(7)

        assert json.loads(route.calls.last.request.content) == {"seriesId": 7}


class TestKavitaImageUrls:
    """Image links are built without any network call."""

    def test_series_cover_url(self, kavita_client: KavitaApiClient):
        assert kavita_client.get_series_cover_url(5) == (
            f"{BASE_URL}/api/Image/series-cover?seriesId=5"
        )

    def test_library_cover_url_with_api_key(self, kavita_client: KavitaApiClient):
        assert kavita_client.get_library_cover_url(2, api_key="k") == (
            f"{BASE_URL}/api/Image/library-cover?libraryId=2&apiKey=k"
        )
