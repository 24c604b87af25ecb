from __future__ import annotations

import asyncio

import typer

from statsheet_archiver.core.config import settings
from statsheet_archiver.core.logging_config import configure_logging
from statsheet_archiver.ingestion.errors import ArchiverError
from statsheet_archiver.ingestion.season import SeasonOrchestrator

app = typer.Typer(add_completion=False)


@app.command()
def archive_season(
    season: str | None = typer.Argument(
        None, metavar="SEASON", help="Season number, 1-based (e.g. 12)."
    ),
) -> None:
    """Fetch every game and player statsheet of a season into the output directory."""

    configure_logging(settings.log_level)

    try:
        result = asyncio.run(SeasonOrchestrator(settings).run(season))
    except ArchiverError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(
        " ".join(
            [
                f"Archived season {result.season + 1}:",
                f"days_with_games={result.days_with_games}",
                f"games_written={result.games_written}",
                f"player_batches={result.player_batches}",
                f"player_statsheets_written={result.player_statsheets_written}",
            ]
        )
    )
