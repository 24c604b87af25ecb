from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest


@dataclass
class FakeDatabaseApi:
    """In-memory stand-in for the remote database API.

    Every request is recorded as ``(endpoint, params)`` in arrival order.
    """

    games: dict[tuple[int, int], list[dict[str, Any]]] = field(default_factory=dict)
    game_statsheets: dict[str, dict[str, Any]] = field(default_factory=dict)
    team_statsheets: dict[str, dict[str, Any]] = field(default_factory=dict)
    player_statsheets: dict[str, dict[str, Any]] = field(default_factory=dict)
    failing_ids: set[str] = field(default_factory=set)
    failing_days: set[int] = field(default_factory=set)
    requests: list[tuple[str, dict[str, str]]] = field(default_factory=list)

    def add_day(
        self,
        season: int,
        day: int,
        *,
        games: int,
        players_per_team: int = 2,
    ) -> None:
        day_games = []
        for i in range(games):
            gs_id = f"gs-{day}-{i}"
            away_ts, home_ts = f"ts-{day}-{i}-away", f"ts-{day}-{i}-home"
            day_games.append(
                {
                    "id": f"game-{day}-{i}",
                    "statsheet": gs_id,
                    "awayTeam": f"team-{i}-away",
                    "homeTeam": f"team-{i}-home",
                    "weather": 7,
                    "gameComplete": True,
                    "outcomes": [f"outcome {day}-{i}"],
                }
            )
            self.game_statsheets[gs_id] = {
                "id": gs_id,
                "awayTeamStats": away_ts,
                "homeTeamStats": home_ts,
            }
            for side, ts_id in (("away", away_ts), ("home", home_ts)):
                ps_ids = [f"ps-{day}-{i}-{side}-{k}" for k in range(players_per_team)]
                self.team_statsheets[ts_id] = {"id": ts_id, "playerStats": ps_ids}
                for k, ps_id in enumerate(ps_ids):
                    self.player_statsheets[ps_id] = {
                        "id": ps_id,
                        "playerId": f"player-{i}-{side}-{k}",
                        "teamId": f"team-{i}-{side}",
                        "hits": k,
                        "name": f"Player {i} {side} {k}",
                    }
        self.games[(season, day)] = day_games

    def endpoints(self) -> list[str]:
        return [endpoint for endpoint, _ in self.requests]

    def _lookup(self, table: dict[str, dict[str, Any]], ids: str) -> list[dict[str, Any]]:
        return [table[i] for i in ids.split(",") if i in table]

    def handler(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.path.rsplit("/", 1)[-1]
        params = dict(request.url.params)
        self.requests.append((endpoint, params))

        if endpoint == "games":
            day = int(params["day"])
            if day in self.failing_days:
                return httpx.Response(503, json={"error": "unavailable"})
            return httpx.Response(200, json=self.games.get((int(params["season"]), day), []))

        ids = params.get("ids", "")
        if self.failing_ids.intersection(ids.split(",")):
            return httpx.Response(500, json={"error": "boom"})

        tables = {
            "gameStatsheets": self.game_statsheets,
            "teamStatsheets": self.team_statsheets,
            "playerSeasonStats": self.player_statsheets,
        }
        if endpoint not in tables:
            return httpx.Response(404)
        return httpx.Response(200, json=self._lookup(tables[endpoint], ids))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api() -> FakeDatabaseApi:
    return FakeDatabaseApi()
