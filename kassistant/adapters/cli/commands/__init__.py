"""Sous-package CLI commands - re-exporte les commandes publiques."""

from kassistant.adapters.cli.commands.account_commands import login, logout
from kassistant.adapters.cli.commands.diagnostics_commands import check, endpoints
from kassistant.adapters.cli.commands.library_commands import libraries, search, series

__all__ = [
    # compte
    "login",
    "logout",
    # consultation
    "libraries",
    "series",
    "search",
    # diagnostic
    "check",
    "endpoints",
]
