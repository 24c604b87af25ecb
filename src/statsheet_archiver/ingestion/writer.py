from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from .errors import ArchiveWriteError
from .models import GameUpdate, PassthroughRecord, PlayerStatsheet

logger = logging.getLogger(__name__)

GAMES = "games"
PLAYERS = "players"

_UNSAFE_CHARS = ("/", "\\", "\x00")


def record_path(root: Path, category: str, segments: Sequence[str]) -> Path:
    """``<root>/<category>/<segments...>.json``; the last segment names the file."""
    if not segments:
        raise ValueError("record_path needs at least one path segment")
    for segment in segments:
        if segment in ("", ".", "..") or any(c in segment for c in _UNSAFE_CHARS):
            raise ValueError(f"unsafe path segment {segment!r}")
    *dirs, name = segments
    return root.joinpath(category, *dirs, f"{name}.json")


def serialize_record(record: PassthroughRecord) -> str:
    return json.dumps(record.to_json_dict(), ensure_ascii=False, separators=(",", ":"))


def _write_file(path: Path, payload: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
    except OSError as e:
        raise ArchiveWriteError(path=path, cause=e) from e


class RecordWriter:
    """Persist records as individual JSON files under a root directory.

    Files are overwritten unconditionally. Disk work runs in worker threads,
    at most ``max_concurrent_writes`` at a time.
    """

    def __init__(self, root: Path | str = Path("out"), *, max_concurrent_writes: int = 64) -> None:
        self.root = Path(root)
        self._semaphore = asyncio.Semaphore(max_concurrent_writes)

    async def write(
        self, category: str, segments: Sequence[str], record: PassthroughRecord
    ) -> Path:
        try:
            path = record_path(self.root, category, segments)
        except ValueError as e:
            raise ArchiveWriteError(path=self.root / category, cause=e) from e
        payload = serialize_record(record)
        async with self._semaphore:
            logger.debug("writing %s", path)
            await asyncio.to_thread(_write_file, path, payload)
        logger.debug("written %s", path)
        return path

    async def write_game(self, day: int, game: GameUpdate) -> Path:
        return await self.write(GAMES, [str(day), game.home_team], game)

    async def write_player_statsheet(self, day: int, stats: PlayerStatsheet) -> Path:
        return await self.write(PLAYERS, [stats.player_id, str(day)], stats)
