"""
Service de diagnostic des endpoints Kavita.

Execute une suite de verifications (connectivite, login, bibliotheques,
statistiques...) et produit un CheckResult par verification. Aucune
verification ne leve d'exception : l'echec est rapporte dans le resultat.
"""

import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Awaitable, Callable, Optional

from loguru import logger

from kassistant.adapters.api.errors import KavitaApiError
from kassistant.adapters.api.kavita_client import KavitaApiClient


@dataclass
class CheckResult:
    """Resultat d'une verification."""

    name: str
    success: bool
    message: str
    details: Optional[str] = None
    duration: timedelta = timedelta(0)


class LoginFailedError(KavitaApiError):
    """Le login a repondu sans jeton."""


class DiagnosticsService:
    """
    Suite de verifications au-dessus de KavitaApiClient.

    Example:
        diagnostics = DiagnosticsService(client)
        results = await diagnostics.run_all("admin", "secret")
        failed = [r for r in results if not r.success]
    """

    def __init__(self, client: KavitaApiClient) -> None:
        self._client = client

    async def _run_check(self, name: str, action: Callable[[], Awaitable[str]]) -> CheckResult:
        started = time.perf_counter()
        try:
            message = await action()
        except Exception as e:
            logger.debug(f"Verification '{name}' en echec : {e}")
            return CheckResult(
                name=name,
                success=False,
                message=str(e),
                details=repr(e),
                duration=timedelta(seconds=time.perf_counter() - started),
            )
        return CheckResult(
            name=name,
            success=True,
            message=message,
            duration=timedelta(seconds=time.perf_counter() - started),
        )

    async def check_connectivity(self) -> CheckResult:
        async def action() -> str:
            info = await self._client.get_server_info()
            if info is None:
                return "Connected but no server info returned"
            return f"Connected. Kavita version: {info.kavita_version}"

        return await self._run_check("Connectivity Test", action)

    async def check_login(self, username: str, password: str) -> CheckResult:
        async def action() -> str:
            user = await self._client.login(username, password)
            if user is None or not user.token:
                raise LoginFailedError("Login failed - no token returned")
            return f"Logged in as {user.username}"

        return await self._run_check("Login Test", action)

    async def check_server_info(self) -> CheckResult:
        async def action() -> str:
            info = await self._client.get_server_info()
            if info is None:
                return "No server info returned"
            return f"Kavita {info.kavita_version} on {info.os}"

        return await self._run_check("Server Info Test", action)

    async def check_libraries(self) -> CheckResult:
        async def action() -> str:
            libraries = await self._client.get_libraries()
            if libraries is None:
                return "No libraries returned"
            return f"Found {len(libraries)} libraries"

        return await self._run_check("Get Libraries Test", action)

    async def check_recently_added(self) -> CheckResult:
        async def action() -> str:
            page = await self._client.get_recently_added_series(0, 20)
            if page is None:
                return "No recently added series returned"
            return f"Found {page.total_count} recently added series"

        return await self._run_check("Get Recently Added Test", action)

    async def check_on_deck(self) -> CheckResult:
        async def action() -> str:
            page = await self._client.get_on_deck_series(0, 20)
            if page is None:
                return "No on deck items returned"
            return f"Found {page.total_count} on deck items"

        return await self._run_check("Get On Deck Test", action)

    async def check_collections(self) -> CheckResult:
        async def action() -> str:
            collections = await self._client.get_collections()
            if collections is None:
                return "No collections returned"
            return f"Found {len(collections)} collections"

        return await self._run_check("Get Collections Test", action)

    async def check_reading_lists(self) -> CheckResult:
        async def action() -> str:
            page = await self._client.get_reading_lists()
            if page is None:
                return "No reading lists returned"
            return f"Found {page.total_count} reading lists"

        return await self._run_check("Get Reading Lists Test", action)

    async def check_server_stats(self) -> CheckResult:
        async def action() -> str:
            stats = await self._client.get_server_stats()
            if stats is None:
                return "No server stats returned"
            return f"Total Series: {stats.total_series}, Total Files: {stats.total_files}"

        return await self._run_check("Get Server Stats Test", action)

    async def check_user_stats(self) -> CheckResult:
        async def action() -> str:
            stats = await self._client.get_user_stats()
            if stats is None:
                return "No user stats returned"
            return f"Pages Read: {stats.total_pages_read}, Chapters Read: {stats.chapters_read}"

        return await self._run_check("Get User Stats Test", action)

    async def check_users(self) -> CheckResult:
        async def action() -> str:
            users = await self._client.get_users()
            if users is None:
                return "No users returned"
            return f"Found {len(users)} users"

        result = await self._run_check("Get Users Test", action)
        if not result.success:
            # Endpoint reserve aux administrateurs
            result.message = f"User may not have admin rights ({result.message})"
        return result

    async def run_all(self, username: str, password: str) -> list[CheckResult]:
        """
        Execute toute la suite.

        S'arrete apres le login si celui-ci echoue : les verifications
        suivantes exigent un jeton.
        """
        results = [await self.check_connectivity()]

        login = await self.check_login(username, password)
        results.append(login)
        if not login.success:
            return results

        for check in (
            self.check_server_info,
            self.check_libraries,
            self.check_recently_added,
            self.check_on_deck,
            self.check_collections,
            self.check_reading_lists,
            self.check_server_stats,
            self.check_user_stats,
            self.check_users,
        ):
            results.append(await check())

        passed = sum(1 for r in results if r.success)
        logger.info(f"Diagnostic termine : {passed}/{len(results)} verification(s) reussie(s)")
        return results
