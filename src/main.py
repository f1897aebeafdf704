"""
Point d'entrée CLI d'airdates.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import calendar
from .adapters.cli.helpers import system_locale
from .config import Settings
from .container import Container
from .logging_config import configure_logging, console_level

__version__ = "0.1.0"

app = typer.Typer(
    name="airdates",
    help="Calendrier des sorties de séries et de films",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (avertissements uniquement)"),
    ] = False,
) -> None:
    """Airdates - Calendrier des épisodes et sorties à venir."""
    state["quiet"] = quiet
    state["verbose"] = 0 if quiet else verbose

    settings = get_config()
    configure_logging(
        log_level=console_level(settings.log_level, verbose=state["verbose"], quiet=state["quiet"]),
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


app.command()(calendar)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    snapshot = config.snapshot(locale_tag=system_locale())
    logger.info("Configuration airdates")
    typer.echo(f"Région : {snapshot.viewer_region}")
    typer.echo(f"Fuseau horaire : {snapshot.viewer_timezone}")
    typer.echo(f"Décalage Amériques : {'activé' if config.time_shift_enabled else 'désactivé'}")
    typer.echo(f"Épisodes spéciaux : {'masqués' if config.ignore_specials else 'affichés'}")
    typer.echo(f"Sorties cinéma : {'masquées' if config.hide_theatrical else 'affichées'}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"API Trakt : {'activée' if config.trakt_enabled else 'désactivée'}")
    typer.echo(f"Cache : {config.cache_dir if config.cache_enabled else 'désactivé'}")
    typer.echo(f"Watchlist : {config.watchlist_file}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"airdates v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
