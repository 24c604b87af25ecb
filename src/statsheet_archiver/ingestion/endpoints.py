from __future__ import annotations

from enum import StrEnum


class Endpoint(StrEnum):
    GAMES = "games"
    GAME_STATSHEETS = "gameStatsheets"
    TEAM_STATSHEETS = "teamStatsheets"
    PLAYER_STATSHEETS = "playerSeasonStats"
