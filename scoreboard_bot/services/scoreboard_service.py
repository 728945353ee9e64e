"""
Scoreboard service - business logic behind the slash commands.

Every operation runs under the channel's lock: read the entry, apply at
most one mutation, persist it, then publish. Persisting before publishing
means a publish failure never loses the mutation.
"""

from collections.abc import Callable

import discord
import structlog

from ..config.settings import ScoreboardDefaults
from ..core.publisher import PublishResult, ScoreboardPublisher
from ..models import scoreboard as model
from ..models.scoreboard import ChannelEntry, ScoreboardPatch, Side
from ..storage.repository import ScoreboardRepository

log = structlog.get_logger()

Mutation = Callable[[ChannelEntry], object]


class ScoreboardService:
    """
    Service for the scoreboard commands.

    Platform-independent apart from the channel handed to the publisher,
    so it can be exercised without a Discord connection.
    """

    def __init__(
        self,
        repository: ScoreboardRepository,
        publisher: ScoreboardPublisher | None = None,
        defaults: ScoreboardDefaults | None = None,
    ) -> None:
        """
        Initialize the scoreboard service.

        Args:
            repository: Store owning every channel entry
            publisher: Upsert controller (built on ``repository`` if omitted)
            defaults: Values restored by ``reset``
        """
        self.repository = repository
        self.publisher = publisher or ScoreboardPublisher(repository)
        self.defaults = defaults or ScoreboardDefaults()

    async def _run(
        self,
        guild_id: int | str | None,
        channel: discord.abc.Messageable,
        mutation: Mutation | None = None,
    ) -> PublishResult:
        channel_id = channel.id  # type: ignore[attr-defined]
        async with self.repository.lock_for(guild_id, channel_id):
            entry = self.repository.get_or_create(guild_id, channel_id)
            if mutation is not None:
                mutation(entry)
                await self.repository.save()
            return await self.publisher.publish(channel, entry)

    async def show(
        self, guild_id: int | str | None, channel: discord.abc.Messageable
    ) -> PublishResult:
        """Create or refresh the scoreboard message without changing it."""
        return await self._run(guild_id, channel)

    async def set(
        self,
        guild_id: int | str | None,
        channel: discord.abc.Messageable,
        patch: ScoreboardPatch,
    ) -> PublishResult:
        """Overwrite every field present in ``patch``."""
        return await self._run(guild_id, channel, lambda entry: model.apply_set(entry.state, patch))

    async def goal(
        self,
        guild_id: int | str | None,
        channel: discord.abc.Messageable,
        side: Side | str,
        delta: int = 1,
    ) -> PublishResult:
        """Add ``delta`` goals to ``side``, never going below zero."""
        return await self._run(
            guild_id, channel, lambda entry: model.apply_goal_delta(entry.state, side, delta)
        )

    async def time(
        self,
        guild_id: int | str | None,
        channel: discord.abc.Messageable,
        period: int | None = None,
        clock: str | None = None,
        status: str | None = None,
    ) -> PublishResult:
        """Overwrite period, clock and status where given."""
        return await self._run(
            guild_id,
            channel,
            lambda entry: model.apply_time(entry.state, period=period, clock=clock, status=status),
        )

    async def reset(
        self, guild_id: int | str | None, channel: discord.abc.Messageable
    ) -> PublishResult:
        """Restore default score, clock and status, keeping the message binding."""
        return await self._run(guild_id, channel, lambda entry: model.reset(entry, self.defaults))


__all__ = ["ScoreboardService"]
