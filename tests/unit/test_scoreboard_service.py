"""Unit tests for ScoreboardService."""

import asyncio
import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from scoreboard_bot.core.publisher import PublishAction, ScoreboardPublisher
from scoreboard_bot.models.scoreboard import ScoreboardPatch
from scoreboard_bot.services.scoreboard_service import ScoreboardService
from scoreboard_bot.storage.json_store import JsonScoreboardRepository
from scoreboard_bot.utils.errors import PublishError, ValidationError
from tests.fixtures.discord_fakes import FakeChannel

GUILD = 1


@pytest.mark.unit
class TestScoreboardService:
    """Tests for each service operation."""

    async def test_show_posts_without_mutating(
        self, service: ScoreboardService, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        result = await service.show(GUILD, channel)

        entry = repository.get_or_create(GUILD, channel.id)
        assert result.action is PublishAction.POSTED
        assert entry.state.home.goals == 0
        assert entry.message_id == result.message_id

    async def test_show_twice_edits(self, service: ScoreboardService, channel: FakeChannel) -> None:
        await service.show(GUILD, channel)

        result = await service.show(GUILD, channel)

        assert result.action is PublishAction.EDITED
        assert len(channel.sent) == 1

    async def test_set_applies_patch(
        self, service: ScoreboardService, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        await service.set(GUILD, channel, ScoreboardPatch.from_options(home_name="Sharks", period=3))

        state = repository.get_or_create(GUILD, channel.id).state
        assert state.home.name == "Sharks"
        assert state.period == 3
        assert "Sharks" in channel.sent[0].embed.description

    async def test_goal_clamps(
        self, service: ScoreboardService, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        await service.goal(GUILD, channel, "home", 2)
        await service.goal(GUILD, channel, "home", -5)

        assert repository.get_or_create(GUILD, channel.id).state.home.goals == 0

    async def test_goal_invalid_side(self, service: ScoreboardService, channel: FakeChannel) -> None:
        with pytest.raises(ValidationError):
            await service.goal(GUILD, channel, "left")

        assert channel.sent == []

    async def test_time_overwrites_given_fields(
        self, service: ScoreboardService, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        await service.time(GUILD, channel, period=2, clock="05:30")

        state = repository.get_or_create(GUILD, channel.id).state
        assert (state.period, state.clock, state.status) == (2, "05:30", "Waiting to start")

    async def test_reset_keeps_message_binding(
        self, service: ScoreboardService, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        first = await service.goal(GUILD, channel, "away", 3)

        result = await service.reset(GUILD, channel)

        entry = repository.get_or_create(GUILD, channel.id)
        assert entry.state.away.goals == 0
        assert entry.message_id == first.message_id
        assert result.action is PublishAction.EDITED

    async def test_mutation_persisted_before_publish_failure(
        self, service: ScoreboardService, channel: FakeChannel, state_file: Path
    ) -> None:
        channel.fail_send = True

        with pytest.raises(PublishError):
            await service.goal(GUILD, channel, "home", 1)

        raw = json.loads(state_file.read_text(encoding="utf-8"))
        assert raw[str(GUILD)][str(channel.id)]["state"]["home"]["goals"] == 1
        assert raw[str(GUILD)][str(channel.id)]["messageId"] is None

    async def test_show_does_not_save_before_publishing(
        self, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        publisher = AsyncMock(spec=ScoreboardPublisher)
        service = ScoreboardService(repository, publisher=publisher)
        repository.save = AsyncMock()

        await service.show(GUILD, channel)

        repository.save.assert_not_awaited()
        publisher.publish.assert_awaited_once()

    async def test_channels_are_independent(
        self, service: ScoreboardService, repository: JsonScoreboardRepository
    ) -> None:
        first, second = FakeChannel(1001), FakeChannel(1002)

        await service.goal(GUILD, first, "home", 1)
        await service.goal(GUILD, second, "away", 2)

        assert repository.get_or_create(GUILD, 1001).state.home.goals == 1
        assert repository.get_or_create(GUILD, 1001).state.away.goals == 0
        assert repository.get_or_create(GUILD, 1002).state.away.goals == 2

    async def test_concurrent_goals_do_not_lose_updates(
        self, service: ScoreboardService, repository: JsonScoreboardRepository, channel: FakeChannel
    ) -> None:
        await asyncio.gather(*(service.goal(GUILD, channel, "home", 1) for _ in range(10)))

        assert repository.get_or_create(GUILD, channel.id).state.home.goals == 10
        assert len(channel.sent) == 1
