"""
Configuration du logging de l'application via loguru.

Fournit un logging structuré avec :
- Sortie console : lisible par l'humain, colorée, toujours active
- Sortie fichier : un fichier par jour (kavita_api_YYYY-MM-DD.log), lignes JSON,
  réservée aux événements du journal des requêtes (extra "api_event")

Le fichier est best-effort : si son initialisation échoue, un avertissement
est émis et seule la console reste active.
"""

import sys
from pathlib import Path

from loguru import logger

API_EVENT_KEY = "api_event"


def _is_api_event(record: dict) -> bool:
    """Filtre loguru : ne garde que les entrées du journal des requêtes."""
    return API_EVENT_KEY in record["extra"]


def configure_logging(
    log_level: str = "INFO",
    log_dir: Path = Path("logs"),
    log_to_file: bool = True,
    retention_days: int = 7,
) -> bool:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_dir : Répertoire des fichiers journaliers
        log_to_file : Active le fichier journalier
        retention_days : Nombre de jours de fichiers à conserver

    Retourne :
        True si le fichier journalier est actif, False sinon.
    """
    # Supprime le handler par défaut
    logger.remove()

    # Handler console - lisible par l'humain
    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if not log_to_file:
        return False

    # Handler fichier - un fichier par jour, JSON pour l'analyse
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "kavita_api_{time:YYYY-MM-DD}.log",
            level="DEBUG",
            format="{message}",
            filter=_is_api_event,
            serialize=True,
            rotation="00:00",
            retention=f"{retention_days} days",
            enqueue=True,  # Ecritures serialisees par un seul consommateur
            catch=True,  # Une ecriture ratee ne remonte jamais a l'appelant
        )
    except (OSError, ValueError) as e:
        logger.warning(f"Impossible d'initialiser le fichier de log : {e}")
        return False

    logger.debug("Logging configuré", log_dir=str(log_dir))
    return True
