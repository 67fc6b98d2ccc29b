"""
Fixtures pytest partagees pour les tests KAssistant.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec repertoires temporaires
- Session, journal, executeur et client Kavita relies a une adresse de test
- Mock du port ISeriesSource pour l'agregateur
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from kassistant.adapters.api.executor import RequestExecutor
from kassistant.adapters.api.kavita_client import KavitaApiClient
from kassistant.adapters.api.request_log import RequestLog
from kassistant.adapters.api.session import KavitaSession
from kassistant.config import Settings
from kassistant.core.ports.series_source import ISeriesSource
from tests.fixtures.kavita_responses import BASE_URL


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Le fichier journalier et les identifiants sont isoles dans tmp_path.
    """
    return Settings(
        server_url=BASE_URL,
        log_dir=tmp_path / "logs",
        settings_dir=tmp_path / "config",
        log_to_file=False,
    )


@pytest.fixture
def request_log() -> RequestLog:
    """Journal des requetes avec les limites par defaut."""
    return RequestLog()


@pytest.fixture
def session() -> KavitaSession:
    """Session pointant vers le serveur de test (interceptes par respx)."""
    return KavitaSession(BASE_URL, timeout=5.0)


@pytest.fixture
def executor(session: KavitaSession, request_log: RequestLog) -> RequestExecutor:
    return RequestExecutor(session, request_log)


@pytest.fixture
def kavita_client(executor: RequestExecutor) -> KavitaApiClient:
    """KavitaApiClient relie au serveur de test."""
    return KavitaApiClient(executor)


@pytest.fixture
def mock_series_source() -> AsyncMock:
    """
    Mock de ISeriesSource pour les tests de l'agregateur.

    Les valeurs de retour doivent etre configurees dans chaque test.
    """
    mock = AsyncMock(spec=ISeriesSource)
    mock.get_libraries.return_value = []
    mock.get_library_series_page.return_value = None
    return mock
