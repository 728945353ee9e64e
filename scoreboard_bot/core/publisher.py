"""
Scoreboard message publishing.

Keeps exactly one live scoreboard message per channel: the stored message
is edited in place, and a new one is posted when there is none or the old
one can no longer be reached.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

import discord
import structlog

from ..models.scoreboard import ChannelEntry
from ..storage.repository import ScoreboardRepository
from ..utils.errors import PublishError
from ..utils.log_events import LogEvents
from .renderer import build_embed

log = structlog.get_logger()


class PublishAction(str, Enum):
    """What ``publish`` ended up doing."""

    POSTED = "posted"
    EDITED = "edited"
    REPOSTED = "reposted"


@dataclass(frozen=True)
class PublishResult:
    """Outcome of a publish call."""

    action: PublishAction
    message_id: str
    previous_message_id: str | None = None


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ScoreboardPublisher:
    """
    Posts or edits the scoreboard message for a channel.

    Recovery is a single fallback: when the stored message cannot be
    fetched or edited, one new message is posted. A failure of that post
    raises ``PublishError``.
    """

    def __init__(
        self,
        repository: ScoreboardRepository,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize the publisher.

        Args:
            repository: Store persisted after the message id changes
            now: Clock used for the embed timestamp
        """
        self.repository = repository
        self._now = now

    async def publish(
        self, channel: discord.abc.Messageable, entry: ChannelEntry
    ) -> PublishResult:
        """
        Edit the channel's scoreboard message, or post a new one.

        Args:
            channel: Channel the scoreboard lives in
            entry: Channel entry whose state is rendered; its ``message_id``
                is updated when a new message is posted

        Returns:
            The action taken and the id of the live message

        Raises:
            PublishError: If posting a new message fails
        """
        embed = build_embed(entry.state, timestamp=self._now())
        previous = entry.message_id

        if previous is None:
            message_id = await self._post(channel, entry, embed)
            return PublishResult(PublishAction.POSTED, message_id)

        if await self._try_edit(channel, previous, embed):
            log.info(LogEvents.SCOREBOARD_EDITED, message_id=previous)
            return PublishResult(PublishAction.EDITED, previous)

        message_id = await self._post(channel, entry, embed)
        log.info(LogEvents.SCOREBOARD_REPOSTED, message_id=message_id, previous_message_id=previous)
        return PublishResult(PublishAction.REPOSTED, message_id, previous_message_id=previous)

    async def _try_edit(
        self, channel: discord.abc.Messageable, message_id: str, embed: discord.Embed
    ) -> bool:
        """Edit the stored message in place; False when it cannot be reached."""
        try:
            message = await channel.fetch_message(int(message_id))
            await message.edit(embed=embed)
        except (discord.HTTPException, ValueError) as e:
            log.warning(
                LogEvents.SCOREBOARD_EDIT_FAILED,
                message_id=message_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return False
        return True

    async def _post(
        self, channel: discord.abc.Messageable, entry: ChannelEntry, embed: discord.Embed
    ) -> str:
        """Send a new scoreboard message, then store and persist its id."""
        previous = entry.message_id
        try:
            message = await channel.send(embed=embed)
        except discord.HTTPException as e:
            log.error(
                LogEvents.SCOREBOARD_POST_FAILED,
                previous_message_id=previous,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise PublishError(
                f"Could not post the scoreboard: {e}",
                channel_id=getattr(channel, "id", None),
                previous_message_id=previous,
            ) from e

        entry.message_id = str(message.id)
        await self.repository.save()
        log.info(LogEvents.SCOREBOARD_POSTED, message_id=entry.message_id)
        return entry.message_id


__all__ = ["PublishAction", "PublishResult", "ScoreboardPublisher"]
