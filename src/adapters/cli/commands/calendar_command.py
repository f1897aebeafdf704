"""
Commande CLI calendar : calendrier des episodes et sorties a venir.
"""

import asyncio
import dataclasses
from typing import Annotated, Optional, Sequence

import typer
from rich.markup import escape
from rich.table import Table

from src.adapters.cli.helpers import (
    build_window,
    console,
    parse_day,
    suppress_loguru,
    system_locale,
    with_container,
)
from src.core.entities.schedule import CalendarWindow, ResolvedScheduleEntry
from src.core.errors import InvalidTitleReference
from src.core.value_objects.provider_record import ReleaseKind
from src.services.region_heuristics import resolve_viewer_timezone
from src.services.schedule_service import ScheduleResult

_RELEASE_LABELS = {
    ReleaseKind.THEATRICAL: "Cinema",
    ReleaseKind.DIGITAL: "Numerique",
}


def calendar(
    around: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Date centrale YYYY-MM-DD (defaut: aujourd'hui)"),
    ] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--start", help="Premier jour inclus YYYY-MM-DD"),
    ] = None,
    end: Annotated[
        Optional[str],
        typer.Option("--end", help="Dernier jour inclus YYYY-MM-DD"),
    ] = None,
    months: Annotated[
        int,
        typer.Option("--months", "-m", min=0, help="Mois avant et apres la date centrale"),
    ] = 1,
    region: Annotated[
        Optional[str],
        typer.Option("--region", "-r", help="Pays du spectateur (ex: GB), prioritaire"),
    ] = None,
) -> None:
    """Affiche le calendrier des episodes et sorties des titres suivis."""
    window = build_window(
        around=parse_day(around, "--date"),
        start=parse_day(start, "--start"),
        end=parse_day(end, "--end"),
        months=months,
    )
    asyncio.run(_calendar_async(window, region))


@with_container()
async def _calendar_async(container, window: CalendarWindow, region: Optional[str]) -> None:
    """Implementation async de la commande calendar."""
    config = container.config()
    settings = config.snapshot(locale_tag=system_locale())
    if region:
        viewer_region = region.strip().upper()
        settings = dataclasses.replace(
            settings,
            viewer_region=viewer_region,
            viewer_timezone=resolve_viewer_timezone(viewer_region, config.viewer_timezone),
        )

    source = container.watchlist_source()
    try:
        titles = source.list_titles()
    except ValueError as e:
        console.print(f"[red]Watchlist invalide:[/red] {e}")
        raise typer.Exit(code=1)
    rejected = source.rejected

    if not titles:
        console.print("[yellow]Aucun titre suivi.[/yellow]")
        console.print(f"[dim]Watchlist: {config.watchlist_file}[/dim]")
        _print_rejected(rejected)
        return

    service = container.schedule_service()
    try:
        with suppress_loguru():
            result = await service.resolve_schedule(titles, window, settings)
    finally:
        await service.close()
        container.api_cache().close()

    _display_result(result, window, settings.viewer_region, rejected)


def _entry_label(entry: ResolvedScheduleEntry) -> str:
    """S01E02 pour un episode, type de sortie pour un film."""
    if entry.is_movie:
        return _RELEASE_LABELS.get(entry.release_kind, "Sortie")
    return f"S{entry.season_number:02d}E{entry.episode_number:02d}"


def build_schedule_table(result: ScheduleResult, window: CalendarWindow, region: str) -> Table:
    """Construit la table Rich des entrees du calendrier."""
    table = Table(
        title=(
            f"Calendrier du {window.start.isoformat()} au {window.end.isoformat()}"
            f" ({region})"
        ),
        show_lines=False,
    )
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Titre", style="bold")
    table.add_column("Episode")
    table.add_column("Nom")
    table.add_column("Source", style="dim")

    for entry in result.entries:
        table.add_row(
            entry.canonical_date.isoformat(),
            entry.display.show_name,
            _entry_label(entry),
            entry.display.name if not entry.is_movie else "",
            entry.source_provider.value,
        )
    return table


def _display_result(
    result: ScheduleResult,
    window: CalendarWindow,
    region: str,
    rejected: Sequence[InvalidTitleReference] = (),
) -> None:
    if result.entries:
        console.print(build_schedule_table(result, window, region))
    else:
        console.print("[yellow]Aucune sortie dans la fenetre.[/yellow]")

    if result.partial_failures:
        degraded = ", ".join(provider.value for provider in result.partial_failures)
        console.print(f"[yellow]Precision degradee[/yellow] (fournisseurs indisponibles: {degraded})")

    if result.invalid_titles:
        ids = ", ".join(str(title_id) for title_id in result.invalid_titles)
        console.print(f"[red]Titres ignores[/red] (reference invalide): {ids}")

    _print_rejected(rejected)


def _print_rejected(rejected: Sequence[InvalidTitleReference]) -> None:
    """Entrees de la watchlist ecartees a la lecture."""
    for error in rejected:
        label = error.title_id if error.title_id is not None else "?"
        console.print(f"[red]Entree de watchlist ignoree[/red] ({label}): {escape(error.reason)}")
