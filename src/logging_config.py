"""
Configuration du logging de l'application via loguru.

Fournit un logging structuré avec :
- Sortie console : lisible par l'humain, colorée, avec le contexte (title_id, provider)
- Sortie fichier : sérialisée en JSON, avec rotation, pour l'analyse historique

Les services loguent avec des arguments nommés (logger.warning("...", provider=...)) :
loguru les range dans record["extra"], affiché en console et conservé dans le JSON.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def console_level(default: str = "INFO", verbose: int = 0, quiet: bool = False) -> str:
    """Niveau console selon les options --verbose / --quiet (quiet l'emporte)."""
    if quiet:
        return "WARNING"
    if verbose:
        return "DEBUG"
    return default


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = Path("logs/airdates.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log (None = pas de fichier)
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB", "1 GB")
        retention_count : Nombre de fichiers rotatifs à conserver
    """
    # Supprime le handler par défaut
    logger.remove()

    # Handler console - lisible par l'humain, contexte en fin de ligne
    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
            "<level>{message}</level> <dim>{extra}</dim>"
        ),
        colorize=True,
    )

    if log_file is None:
        return

    # Handler fichier - JSON pour l'analyse
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",  # Capture la résolution épisode par épisode
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # Thread-safe (executor du cache disque)
    )

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)
