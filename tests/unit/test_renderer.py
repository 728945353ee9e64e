"""Unit tests for scoreboard rendering."""

import pytest

from scoreboard_bot.core.renderer import EMBED_COLOR, EMBED_TITLE, build_embed, render_description
from scoreboard_bot.models.scoreboard import default_state
from tests.conftest import FIXED_NOW
from tests.fixtures.factories import ScoreboardFactory


@pytest.mark.unit
class TestRenderDescription:
    """Tests for render_description."""

    def test_default_layout(self) -> None:
        text = render_description(default_state())

        assert text == (
            "🦈 **Home Team** — Goals: 0\n"
            "⚡ vs\n"
            "🦅 **Away Team** — Goals: 0\n"
            "\n"
            "🕒 Time: 1º • 00:00\n"
            "**Status:** Waiting to start"
        )

    @pytest.mark.parametrize("status", ["", "   ", "\n"])
    def test_blank_status_line_omitted(self, status: str) -> None:
        state = default_state()
        state.status = status

        text = render_description(state)

        assert "Status" not in text
        assert text.endswith("🕒 Time: 1º • 00:00")

    def test_status_present(self) -> None:
        state = ScoreboardFactory.state(status="Extra time")

        assert render_description(state).endswith("**Status:** Extra time")

    def test_deterministic(self) -> None:
        state = ScoreboardFactory.state()

        assert render_description(state) == render_description(state.model_copy(deep=True))

    def test_does_not_mutate_state(self) -> None:
        state = ScoreboardFactory.state()
        before = state.model_copy(deep=True)

        render_description(state)

        assert state == before

    def test_shows_scores_period_and_clock(self) -> None:
        state = default_state()
        state.home.goals = 3
        state.away.goals = 1
        state.period = 2
        state.clock = "05:30"

        text = render_description(state)

        assert "Goals: 3" in text
        assert "Goals: 1" in text
        assert "2º • 05:30" in text


@pytest.mark.unit
class TestBuildEmbed:
    """Tests for build_embed."""

    def test_embed_fields(self) -> None:
        state = default_state()

        embed = build_embed(state, timestamp=FIXED_NOW)

        assert embed.title == EMBED_TITLE
        assert embed.description == render_description(state)
        assert embed.colour.value == EMBED_COLOR
        assert embed.timestamp == FIXED_NOW

    def test_same_inputs_same_embed(self) -> None:
        state = ScoreboardFactory.state()

        first = build_embed(state, timestamp=FIXED_NOW).to_dict()
        second = build_embed(state, timestamp=FIXED_NOW).to_dict()

        assert first == second

    def test_timestamp_optional(self) -> None:
        assert build_embed(default_state()).timestamp is None
