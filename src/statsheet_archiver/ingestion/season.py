from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from statsheet_archiver.core.config import Settings, settings as default_settings

from .batch import BatchFetcher
from .client import AsyncHttpClient
from .concurrency import fail_fast
from .day_pipeline import DayPipeline, DayResult
from .errors import SeasonArgumentError
from .writer import RecordWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeasonResult:
    season: int
    days: list[DayResult] = field(default_factory=list)

    @property
    def days_with_games(self) -> int:
        return sum(1 for d in self.days if d.games_written)

    @property
    def games_written(self) -> int:
        return sum(d.games_written for d in self.days)

    @property
    def player_batches(self) -> int:
        return sum(d.player_batches for d in self.days)

    @property
    def player_statsheets_written(self) -> int:
        return sum(d.player_statsheets_written for d in self.days)


def parse_season(value: str | None) -> int:
    """Convert a 1-based season argument into the 0-based index the API expects."""
    if value is None or not value.strip():
        raise SeasonArgumentError("Missing season!")
    try:
        season = int(value.strip())
    except ValueError as e:
        raise SeasonArgumentError(f"Season must be a positive integer, got {value!r}") from e
    if season < 1:
        raise SeasonArgumentError(f"Season must be a positive integer, got {value!r}")
    return season - 1


class SeasonOrchestrator:
    """Run one DayPipeline per day of a season over a shared HTTP client.

    Days run concurrently; the first failing day cancels the rest and its
    error is re-raised.
    """

    def __init__(
        self,
        config: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or default_settings
        self.transport = transport

    async def run(self, season_arg: str | None) -> SeasonResult:
        season = parse_season(season_arg)
        cfg = self.config
        logger.info(
            "archiving season %d (index %d) days 0..%d into %s",
            season + 1,
            season,
            cfg.days_per_season - 1,
            cfg.output_dir,
        )

        async with AsyncHttpClient(
            base_url=cfg.base_url,
            timeout_s=cfg.timeout_s,
            connect_timeout_s=cfg.connect_timeout_s,
            max_concurrent_requests=cfg.max_concurrent_requests,
            transport=self.transport,
        ) as http:
            pipeline = DayPipeline(
                BatchFetcher(http),
                RecordWriter(cfg.output_dir, max_concurrent_writes=cfg.max_concurrent_writes),
                team_batch_size=cfg.team_batch_size,
            )
            days = await fail_fast(
                pipeline.run(season, day) for day in range(cfg.days_per_season)
            )

        result = SeasonResult(season=season, days=days)
        logger.info(
            "finished season %d: days_with_games=%d games=%d player_statsheets=%d",
            season + 1,
            result.days_with_games,
            result.games_written,
            result.player_statsheets_written,
        )
        return result
