"""Unit tests for ScoreboardPublisher (post-or-edit)."""

import json
from pathlib import Path
from unittest.mock import AsyncMock

import discord
import pytest

from scoreboard_bot.core.publisher import PublishAction, ScoreboardPublisher
from scoreboard_bot.core.renderer import render_description
from scoreboard_bot.storage.json_store import JsonScoreboardRepository
from scoreboard_bot.utils.errors import PublishError
from tests.conftest import FIXED_NOW
from tests.fixtures.discord_fakes import FakeChannel, http_error


@pytest.mark.unit
@pytest.mark.discord
class TestPublish:
    """Tests for the three publish paths."""

    async def test_first_publish_posts_and_stores_id(
        self,
        publisher: ScoreboardPublisher,
        repository: JsonScoreboardRepository,
        channel: FakeChannel,
        state_file: Path,
    ) -> None:
        entry = repository.get_or_create(1, channel.id)

        result = await publisher.publish(channel, entry)

        assert result.action is PublishAction.POSTED
        assert len(channel.sent) == 1
        assert entry.message_id == str(channel.sent[0].id) == result.message_id
        assert channel.sent[0].embed.timestamp == FIXED_NOW
        raw = json.loads(state_file.read_text(encoding="utf-8"))
        assert raw["1"][str(channel.id)]["messageId"] == entry.message_id

    async def test_second_publish_edits(
        self, publisher: ScoreboardPublisher, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        entry = repository.get_or_create(1, channel.id)
        first = await publisher.publish(channel, entry)
        entry.state.home.goals = 2

        result = await publisher.publish(channel, entry)

        assert result.action is PublishAction.EDITED
        assert result.message_id == first.message_id
        assert len(channel.sent) == 1
        message = channel.get(entry.message_id)
        assert message.edit_count == 1
        assert message.embed.description == render_description(entry.state)

    async def test_deleted_message_reposts(
        self, publisher: ScoreboardPublisher, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        entry = repository.get_or_create(1, channel.id)
        first = await publisher.publish(channel, entry)
        channel.delete(first.message_id)

        result = await publisher.publish(channel, entry)

        assert result.action is PublishAction.REPOSTED
        assert result.previous_message_id == first.message_id
        assert result.message_id != first.message_id
        assert entry.message_id == result.message_id
        assert len(channel.sent) == 2

    async def test_edit_forbidden_reposts(
        self, publisher: ScoreboardPublisher, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        entry = repository.get_or_create(1, channel.id)
        await publisher.publish(channel, entry)
        channel.fail_edit = True

        result = await publisher.publish(channel, entry)

        assert result.action is PublishAction.REPOSTED

    async def test_invalid_stored_id_reposts(
        self, publisher: ScoreboardPublisher, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        entry = repository.get_or_create(1, channel.id)
        entry.message_id = "not-a-snowflake"

        result = await publisher.publish(channel, entry)

        assert result.action is PublishAction.REPOSTED
        assert result.previous_message_id == "not-a-snowflake"
        assert entry.message_id == str(channel.sent[0].id)

    async def test_post_failure_raises_publish_error(
        self, publisher: ScoreboardPublisher, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        entry = repository.get_or_create(1, channel.id)
        channel.fail_send = True

        with pytest.raises(PublishError) as exc_info:
            await publisher.publish(channel, entry)

        assert entry.message_id is None
        assert exc_info.value.details["channel_id"] == str(channel.id)

    async def test_fallback_failure_is_not_retried(
        self, publisher: ScoreboardPublisher, repository: JsonScoreboardRepository
    ) -> None:
        channel = AsyncMock()
        channel.id = 5
        channel.fetch_message.side_effect = http_error(discord.NotFound, 404, "Unknown Message")
        channel.send.side_effect = http_error(discord.HTTPException, 500, "boom")
        entry = repository.get_or_create(1, 5)
        entry.message_id = "123"

        with pytest.raises(PublishError):
            await publisher.publish(channel, entry)

        assert channel.fetch_message.await_count == 1
        assert channel.send.await_count == 1
        assert entry.message_id == "123"

    async def test_edit_does_not_persist(
        self, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        publisher = ScoreboardPublisher(repository, now=lambda: FIXED_NOW)
        entry = repository.get_or_create(1, channel.id)
        await publisher.publish(channel, entry)
        repository.save = AsyncMock()

        await publisher.publish(channel, entry)

        repository.save.assert_not_awaited()

    async def test_default_clock_stamps_embed_with_current_time(
        self, repository: JsonScoreboardRepository, channel: FakeChannel, frozen_time
    ) -> None:
        publisher = ScoreboardPublisher(repository)
        entry = repository.get_or_create(1, channel.id)

        await publisher.publish(channel, entry)

        assert channel.sent[0].embed.timestamp == frozen_time
