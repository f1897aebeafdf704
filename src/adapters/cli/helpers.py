"""
Utilitaires partages pour les commandes CLI d'airdates.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- parse_day : lecture d'une date YYYY-MM-DD passee en option
- build_window : fenetre du calendrier depuis les options de la commande
- system_locale : locale du systeme, pour deduire la region du spectateur
"""

import os
from contextlib import contextmanager
from datetime import date
from functools import wraps
from typing import Optional

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from src.container import Container
from src.core.entities.schedule import CalendarWindow

# Console globale pour tous les affichages
console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("src")
    try:
        yield
    finally:
        loguru_logger.enable("src")


def with_container():
    """
    Decorateur qui injecte un container initialise en premier argument.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


def parse_day(value: Optional[str], option: str) -> Optional[date]:
    """
    Convertit une option YYYY-MM-DD en date.

    Raises:
        typer.BadParameter: Si la valeur n'est pas une date ISO
    """
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"date invalide '{value}' (format YYYY-MM-DD)", param_hint=option) from e


def build_window(
    around: Optional[date],
    start: Optional[date],
    end: Optional[date],
    months: int,
    today: Optional[date] = None,
) -> CalendarWindow:
    """
    Fenetre du calendrier.

    --start/--end explicites priment; une borne manquante est completee
    depuis la fenetre de `months` mois autour de --date (aujourd'hui par defaut).

    Raises:
        typer.BadParameter: Si start > end
    """
    default = CalendarWindow.around(around or today or date.today(), months=months)
    try:
        return CalendarWindow(start=start or default.start, end=end or default.end)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--start/--end") from e


def system_locale() -> Optional[str]:
    """Locale du systeme (LC_ALL, LC_TIME, puis LANG), ou None."""
    for variable in ("LC_ALL", "LC_TIME", "LANG"):
        value = os.environ.get(variable)
        if value and value not in ("C", "POSIX"):
            return value
    return None
