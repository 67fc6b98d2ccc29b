"""Modeles d'informations et de statistiques serveur."""

from kassistant.core.entities.base import KavitaModel


class ServerInfo(KavitaModel):
    """Informations non sensibles du serveur (server-info-slim)."""

    kavita_version: str = ""
    is_server_accessible: bool = False
    os: str = ""
    dot_net_version: str = ""


class ServerStats(KavitaModel):
    """Statistiques globales du serveur."""

    total_files: int = 0
    total_series: int = 0
    total_volumes: int = 0
    total_chapters: int = 0
    total_size: int = 0


class UserStats(KavitaModel):
    """Statistiques de lecture d'un utilisateur."""

    total_pages_read: int = 0
    total_words_read: int = 0
    time_spent_reading: int = 0
    chapters_read: int = 0
