"""
Repository interface for scoreboard state.

Defines the abstract interface the command service depends on.
"""

import asyncio
from abc import ABC, abstractmethod

from ..models.scoreboard import ChannelEntry

# Key used in place of a guild id for interactions outside a guild (DMs)
DM_GUILD_KEY = "dm"


def guild_key(guild_id: int | str | None) -> str:
    """Normalise a guild id into the string key used by the store."""
    return str(guild_id) if guild_id is not None else DM_GUILD_KEY


class ScoreboardRepository(ABC):
    """
    Abstract repository for per-channel scoreboards.

    All mutations are in memory until ``save`` is awaited.
    """

    def __init__(self) -> None:
        self._locks: dict[tuple[str, str], asyncio.Lock] = {}

    @abstractmethod
    def load(self) -> dict[str, dict[str, ChannelEntry]]:
        """
        Load every stored scoreboard.

        Returns:
            Mapping of guild key -> channel id -> entry. Empty when nothing
            could be read.
        """

    @abstractmethod
    def get_or_create(self, guild_id: int | str | None, channel_id: int | str) -> ChannelEntry:
        """
        Get the entry for a channel, creating it with defaults if absent.

        Args:
            guild_id: Discord guild ID (None for DMs)
            channel_id: Discord channel ID

        Returns:
            The live entry; mutate it and call ``save``
        """

    @abstractmethod
    async def save(self) -> None:
        """Persist every entry."""

    def lock_for(self, guild_id: int | str | None, channel_id: int | str) -> asyncio.Lock:
        """
        Get the lock serialising command handling for one channel.

        Args:
            guild_id: Discord guild ID (None for DMs)
            channel_id: Discord channel ID

        Returns:
            A lock shared by every caller using the same pair
        """
        key = (guild_key(guild_id), str(channel_id))
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock
