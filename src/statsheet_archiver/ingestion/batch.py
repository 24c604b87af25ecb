from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .client import AsyncHttpClient
from .endpoints import Endpoint
from .errors import ProviderDecodeError
from .models import GameUpdate

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def join_ids(ids: Sequence[str]) -> str:
    # An empty list still yields a (blank) parameter.
    return ",".join(ids)


def decode_records(value: Any, model: type[RecordT], *, endpoint: str) -> list[RecordT]:
    if not isinstance(value, list):
        raise ProviderDecodeError(f"Expected JSON array from {endpoint}, got {type(value).__name__}")
    try:
        return TypeAdapter(list[model]).validate_python(value)
    except ValidationError as e:
        raise ProviderDecodeError(
            f"{endpoint} returned {e.error_count()} invalid {model.__name__} record(s): {e}"
        ) from e


class BatchFetcher:
    """Fetch records by id through the comma-joined ``ids`` query parameter.

    One call issues exactly one GET, whatever the number of ids. Records come
    back in whatever order the service returns them; callers must not pair
    them with ids by position.
    """

    ids_param = "ids"

    def __init__(self, http: AsyncHttpClient) -> None:
        self.http = http

    async def fetch(
        self, endpoint: Endpoint | str, ids: Sequence[str], model: type[RecordT]
    ) -> list[RecordT]:
        path = str(endpoint)
        value = await self.http.get_json_value(path, params={self.ids_param: join_ids(ids)})
        records = decode_records(value, model, endpoint=path)
        logger.debug("%s: requested %d id(s), received %d record(s)", path, len(ids), len(records))
        return records

    async def fetch_games(self, season: int, day: int) -> list[GameUpdate]:
        path = str(Endpoint.GAMES)
        value = await self.http.get_json_value(path, params={"season": season, "day": day})
        return decode_records(value, GameUpdate, endpoint=path)
