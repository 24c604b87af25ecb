"""Records served by the remote database API.

Attributes are snake_case and aliased to the camelCase wire names. Persisted
records (games and player statsheets) keep every field they do not declare
as passthrough and write it back unchanged.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Json = dict[str, Any]


class ApiRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel)


class PassthroughRecord(ApiRecord):
    """A record with declared fields plus an ordered map of unrecognized ones."""

    model_config = ConfigDict(extra="allow")

    @property
    def passthrough(self) -> Json:
        return dict(self.model_extra or {})

    def to_json_dict(self) -> Json:
        """Declared fields first (wire names), then passthrough fields.

        A declared field always wins over a passthrough key of the same name.
        """
        data = self.model_dump(by_alias=True, include=set(type(self).model_fields))
        for key, value in (self.model_extra or {}).items():
            data.setdefault(key, value)
        return data


class GameUpdate(PassthroughRecord):
    id: str
    statsheet: str
    away_team: str
    home_team: str


class GameStatsheet(ApiRecord):
    away_team_stats: str
    home_team_stats: str

    @property
    def team_statsheet_ids(self) -> list[str]:
        return [self.away_team_stats, self.home_team_stats]


class TeamStatsheet(ApiRecord):
    player_stats: list[str]


class PlayerStatsheet(PassthroughRecord):
    id: str
    player_id: str
    team_id: str
