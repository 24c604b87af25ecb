from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TypeVar

from .batch import BatchFetcher
from .concurrency import settle
from .endpoints import Endpoint
from .models import GameStatsheet, GameUpdate, PlayerStatsheet, TeamStatsheet
from .writer import RecordWriter

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TEAM_BATCH_SIZE = 5


@dataclass(frozen=True)
class DayResult:
    day: int
    games_written: int = 0
    player_batches: int = 0
    player_statsheets_written: int = 0


@dataclass(frozen=True)
class _ChainResult:
    player_batches: int = 0
    player_statsheets_written: int = 0


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Consecutive slices of at most ``size`` items; none for an empty sequence."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield items[start : start + size]


class DayPipeline:
    """
    Fetch and persist one day of a season.

    games -> gameStatsheets -> teamStatsheets -> playerSeasonStats, with the
    game writes and the statsheet chain running side by side, and one branch
    per batch of team statsheets. Branches are independent: the first failure
    is raised only after every branch of the day has finished.
    """

    def __init__(
        self,
        fetcher: BatchFetcher,
        writer: RecordWriter,
        *,
        team_batch_size: int = DEFAULT_TEAM_BATCH_SIZE,
    ) -> None:
        if team_batch_size < 1:
            raise ValueError(f"team_batch_size must be positive, got {team_batch_size}")
        self.fetcher = fetcher
        self.writer = writer
        self.team_batch_size = team_batch_size

    async def run(self, season: int, day: int) -> DayResult:
        logger.info("fetching day %d", day)
        games = await self.fetcher.fetch_games(season, day)
        logger.info("received day %d: %d game(s)", day, len(games))

        if not games:
            logger.info("finished day %d (no games)", day)
            return DayResult(day=day)

        writes = [self.writer.write_game(day, game) for game in games]
        results = await settle([self._fetch_statsheets(day, games), *writes])

        chain = results[0]
        result = DayResult(
            day=day,
            games_written=len(writes),
            player_batches=chain.player_batches,
            player_statsheets_written=chain.player_statsheets_written,
        )
        logger.info(
            "finished day %d: games=%d player_batches=%d players=%d",
            day,
            result.games_written,
            result.player_batches,
            result.player_statsheets_written,
        )
        return result

    async def _fetch_statsheets(self, day: int, games: Sequence[GameUpdate]) -> _ChainResult:
        logger.debug("fetching day %d game statsheets", day)
        game_stats = await self.fetcher.fetch(
            Endpoint.GAME_STATSHEETS, [g.statsheet for g in games], GameStatsheet
        )

        team_ids = [team_id for gs in game_stats for team_id in gs.team_statsheet_ids]

        logger.debug("fetching day %d team statsheets", day)
        team_stats = await self.fetcher.fetch(Endpoint.TEAM_STATSHEETS, team_ids, TeamStatsheet)

        batches = list(chunked(team_stats, self.team_batch_size))
        written = await settle(self._fetch_player_batch(day, batch) for batch in batches)
        return _ChainResult(player_batches=len(batches), player_statsheets_written=sum(written))

    async def _fetch_player_batch(self, day: int, team_stats: Sequence[TeamStatsheet]) -> int:
        player_ids = [pid for ts in team_stats for pid in ts.player_stats]

        logger.debug("fetching day %d player statsheets (%d ids)", day, len(player_ids))
        player_stats = await self.fetcher.fetch(
            Endpoint.PLAYER_STATSHEETS, player_ids, PlayerStatsheet
        )

        await settle(self.writer.write_player_statsheet(day, stats) for stats in player_stats)
        return len(player_stats)
