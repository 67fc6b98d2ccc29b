"""
Tests for DiagnosticsService - endpoint check suite.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from kassistant.adapters.api.errors import ConnectivityError, HttpStatusError
from kassistant.adapters.api.kavita_client import KavitaApiClient
from kassistant.core.entities import Library, ServerInfo, ServerStats, UserDto, UserStats
from kassistant.core.value_objects import PaginatedResult
from kassistant.services.diagnostics import DiagnosticsService


@pytest.fixture
def mock_client() -> MagicMock:
    """KavitaApiClient mock answering every check successfully."""
    client = MagicMock(spec=KavitaApiClient)
    client.get_server_info = AsyncMock(
        return_value=ServerInfo(kavita_version="0.8.4.2", os="Linux")
    )
    client.login = AsyncMock(return_value=UserDto(username="admin", token="t"))
    client.get_libraries = AsyncMock(return_value=[Library(id=1, name="Manga")])
    client.get_recently_added_series = AsyncMock(return_value=PaginatedResult(total_count=3))
    client.get_on_deck_series = AsyncMock(return_value=PaginatedResult(total_count=1))
    client.get_collections = AsyncMock(return_value=[])
    client.get_reading_lists = AsyncMock(return_value=PaginatedResult(total_count=0))
    client.get_server_stats = AsyncMock(return_value=ServerStats(total_series=87, total_files=1250))
    client.get_user_stats = AsyncMock(return_value=UserStats(total_pages_read=10, chapters_read=2))
    client.get_users = AsyncMock(return_value=[])
    return client


@pytest.fixture
def diagnostics(mock_client: MagicMock) -> DiagnosticsService:
    return DiagnosticsService(mock_client)


class TestDiagnosticsChecks:
    """Individual checks."""

    @pytest.mark.asyncio
    async def test_connectivity_success(self, diagnostics: DiagnosticsService):
        result = await diagnostics.check_connectivity()

        assert result.success
        assert result.message == "Connected. Kavita version: 0.8.4.2"
        assert result.duration.total_seconds() >= 0

    @pytest.mark.asyncio
    async def test_connectivity_failure_reported(
        self, diagnostics: DiagnosticsService, mock_client: MagicMock
    ):
        mock_client.get_server_info.side_effect = ConnectivityError("refused")

        result = await diagnostics.check_connectivity()

        assert not result.success
        assert result.message == "refused"
        assert "ConnectivityError" in result.details

    @pytest.mark.asyncio
    async def test_login_without_token_fails(
        self, diagnostics: DiagnosticsService, mock_client: MagicMock
    ):
        mock_client.login.return_value = UserDto(username="admin")

        result = await diagnostics.check_login("admin", "pw")

        assert not result.success
        assert "no token" in result.message

    @pytest.mark.asyncio
    async def test_server_stats_message(self, diagnostics: DiagnosticsService):
        result = await diagnostics.check_server_stats()
        assert result.message == "Total Series: 87, Total Files: 1250"

    @pytest.mark.asyncio
    async def test_users_failure_mentions_admin_rights(
        self, diagnostics: DiagnosticsService, mock_client: MagicMock
    ):
        mock_client.get_users.side_effect = HttpStatusError("GET", "/api/Users", 403, "")

        result = await diagnostics.check_users()

        assert not result.success
        assert result.message.startswith("User may not have admin rights")


class TestDiagnosticsRunAll:
    """Full suite."""

    @pytest.mark.asyncio
    async def test_all_checks_run(self, diagnostics: DiagnosticsService):
        results = await diagnostics.run_all("admin", "pw")

        assert len(results) == 11
        assert all(r.success for r in results)
        assert results[0].name == "Connectivity Test"
        assert results[1].name == "Login Test"

    @pytest.mark.asyncio
    async def test_stops_after_failed_login(
        self, diagnostics: DiagnosticsService, mock_client: MagicMock
    ):
        mock_client.login.side_effect = HttpStatusError("POST", "/api/Account/login", 401, "")

        results = await diagnostics.run_all("admin", "wrong")

        assert [r.name for r in results] == ["Connectivity Test", "Login Test"]
        mock_client.get_libraries.assert_not_called()

    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_suite(
        self, diagnostics: DiagnosticsService, mock_client: MagicMock
    ):
        mock_client.get_collections.side_effect = HttpStatusError("GET", "/api/Collection", 500, "")

        results = await diagnostics.run_all("admin", "pw")

        assert len(results) == 11
        assert [r.name for r in results if not r.success] == ["Get Collections Test"]
