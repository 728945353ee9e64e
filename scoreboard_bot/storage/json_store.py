"""
JSON file repository implementation.

Keeps every scoreboard in memory and rewrites the whole file on save,
replacing it atomically so readers never see a partial write.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from ..config.settings import ScoreboardDefaults
from ..models.scoreboard import ChannelEntry, default_entry
from ..utils.errors import StateStoreError
from ..utils.log_events import LogEvents
from .repository import ScoreboardRepository, guild_key

log = structlog.get_logger()


class JsonScoreboardRepository(ScoreboardRepository):
    """
    Flat-file scoreboard repository.

    Layout: ``{guild_id: {channel_id: {"messageId": str | null, "state": {...}}}}``
    """

    def __init__(
        self,
        path: str | Path,
        defaults: ScoreboardDefaults | None = None,
    ) -> None:
        """
        Initialize the repository.

        Args:
            path: State file location
            defaults: Values for newly created scoreboards
        """
        super().__init__()
        self.path = Path(path)
        self.defaults = defaults or ScoreboardDefaults()
        self._data: dict[str, dict[str, ChannelEntry]] = {}

    @property
    def entries(self) -> dict[str, dict[str, ChannelEntry]]:
        """The in-memory mapping."""
        return self._data

    def load(self) -> dict[str, dict[str, ChannelEntry]]:
        """Read the state file into memory; never raises."""
        self._data = self._read()
        log.info(
            LogEvents.STATE_LOADED,
            path=str(self.path),
            guilds=len(self._data),
            channels=sum(len(channels) for channels in self._data.values()),
        )
        return self._data

    def _read(self) -> dict[str, dict[str, ChannelEntry]]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            log.info(LogEvents.STATE_FILE_MISSING, path=str(self.path))
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            log.warning(
                LogEvents.STATE_FILE_CORRUPT,
                path=str(self.path),
                error_type=type(e).__name__,
                error=str(e),
            )
            return {}

        if not isinstance(raw, dict):
            log.warning(
                LogEvents.STATE_FILE_CORRUPT,
                path=str(self.path),
                error="root is not an object",
            )
            return {}

        data: dict[str, dict[str, ChannelEntry]] = {}
        for gid, channels in raw.items():
            if not isinstance(channels, dict):
                log.warning(LogEvents.STATE_ENTRY_INVALID, guild_id=gid)
                continue
            for cid, entry in channels.items():
                try:
                    parsed = ChannelEntry.model_validate(entry)
                except PydanticValidationError as e:
                    log.warning(
                        LogEvents.STATE_ENTRY_INVALID,
                        guild_id=gid,
                        channel_id=cid,
                        error_count=e.error_count(),
                    )
                    continue
                data.setdefault(str(gid), {})[str(cid)] = parsed
        return data

    def get_or_create(self, guild_id: int | str | None, channel_id: int | str) -> ChannelEntry:
        channels = self._data.setdefault(guild_key(guild_id), {})
        cid = str(channel_id)
        entry = channels.get(cid)
        if entry is None:
            entry = channels[cid] = default_entry(self.defaults)
            log.debug(LogEvents.STATE_ENTRY_CREATED, guild_id=guild_key(guild_id), channel_id=cid)
        return entry

    def to_dict(self) -> dict[str, Any]:
        """Serialisable snapshot of the whole mapping."""
        return {
            gid: {cid: entry.model_dump(mode="json", by_alias=True) for cid, entry in channels.items()}
            for gid, channels in self._data.items()
        }

    async def save(self) -> None:
        """
        Rewrite the state file.

        Raises:
            StateStoreError: If the file cannot be written
        """
        payload = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        try:
            await asyncio.to_thread(self._write, payload)
        except OSError as e:
            log.error(
                LogEvents.STATE_SAVE_FAILED,
                path=str(self.path),
                error_type=type(e).__name__,
                error=str(e),
            )
            raise StateStoreError(f"Could not write {self.path}: {e}", path=str(self.path)) from e
        log.debug(LogEvents.STATE_SAVED, path=str(self.path))

    def _write(self, payload: str) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


__all__ = ["JsonScoreboardRepository"]
