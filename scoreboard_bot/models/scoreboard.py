"""
Scoreboard data models for the scoreboard bot.

Defines the Pydantic schemas for a channel's scoreboard and the in-place
mutations applied by slash commands.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..config.settings import ScoreboardDefaults
from ..utils.errors import ValidationError


class Side(str, Enum):
    """Which team a goal adjustment applies to."""

    HOME = "home"
    AWAY = "away"


class TeamState(BaseModel):
    """One side of the scoreboard."""

    name: str = Field(..., description="Team display name")
    emoji: str = Field(..., description="Emoji shown before the name")
    goals: int = Field(default=0, description="Goals scored")


class ScoreboardState(BaseModel):
    """Score, clock and status for one channel."""

    home: TeamState
    away: TeamState
    period: int = Field(default=1, description="Display-only period number")
    clock: str = Field(default="00:00", description="Free-form clock text")
    status: str = Field(default="", description="Free-form status text, may be empty")


class ChannelEntry(BaseModel):
    """Persisted record for one (guild, channel) pair."""

    model_config = ConfigDict(populate_by_name=True)

    message_id: str | None = Field(
        None,
        alias="messageId",
        description="Id of the last scoreboard message posted in the channel",
    )
    state: ScoreboardState


class ScoreboardPatch(BaseModel):
    """
    Partial update for a scoreboard.

    Only fields explicitly given are applied; presence is tracked through
    ``model_fields_set`` so an empty string still overwrites.
    """

    model_config = ConfigDict(extra="forbid")

    home_name: str | None = None
    home_emoji: str | None = None
    home_goals: int | None = None
    away_name: str | None = None
    away_emoji: str | None = None
    away_goals: int | None = None
    period: int | None = None
    clock: str | None = None
    status: str | None = None

    @classmethod
    def from_options(cls, **options: Any) -> "ScoreboardPatch":
        """Build a patch from slash command options, where ``None`` means omitted."""
        return cls(**{key: value for key, value in options.items() if value is not None})

    def changes(self) -> dict[str, Any]:
        """Fields to apply, keyed by patch field name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)

    @property
    def is_empty(self) -> bool:
        return not self.changes()


# patch field -> (team attribute or None for top-level, field)
_PATCH_TARGETS: dict[str, tuple[str | None, str]] = {
    "home_name": ("home", "name"),
    "home_emoji": ("home", "emoji"),
    "home_goals": ("home", "goals"),
    "away_name": ("away", "name"),
    "away_emoji": ("away", "emoji"),
    "away_goals": ("away", "goals"),
    "period": (None, "period"),
    "clock": (None, "clock"),
    "status": (None, "status"),
}


def default_state(defaults: ScoreboardDefaults | None = None) -> ScoreboardState:
    """Build a fresh scoreboard from the configured defaults."""
    defaults = defaults or ScoreboardDefaults()
    return ScoreboardState(
        home=TeamState(name=defaults.home_name, emoji=defaults.home_emoji, goals=0),
        away=TeamState(name=defaults.away_name, emoji=defaults.away_emoji, goals=0),
        period=defaults.period,
        clock=defaults.clock,
        status=defaults.status,
    )


def default_entry(defaults: ScoreboardDefaults | None = None) -> ChannelEntry:
    """Build a channel entry that has never been published."""
    return ChannelEntry(message_id=None, state=default_state(defaults))


def apply_set(state: ScoreboardState, patch: ScoreboardPatch) -> ScoreboardState:
    """
    Overwrite every field present in ``patch``.

    Goals set this way are stored as given, negative values included.

    Args:
        state: Scoreboard to mutate in place
        patch: Fields to overwrite

    Returns:
        The same ``state`` instance
    """
    for key, value in patch.changes().items():
        team_attr, field = _PATCH_TARGETS[key]
        target = getattr(state, team_attr) if team_attr else state
        setattr(target, field, value)
    return state


def apply_goal_delta(state: ScoreboardState, side: Side | str, delta: int = 1) -> int:
    """
    Add ``delta`` goals to one side, clamping the total at zero.

    Args:
        state: Scoreboard to mutate in place
        side: "home" or "away"
        delta: Goals to add; negative to remove

    Returns:
        The side's new goal count

    Raises:
        ValidationError: If ``side`` is not home or away
    """
    try:
        side = Side(side)
    except ValueError as e:
        raise ValidationError(
            f"Invalid side: {side!r}. Must be 'home' or 'away'", field="side", value=side
        ) from e

    team = state.home if side is Side.HOME else state.away
    team.goals = max(0, team.goals + delta)
    return team.goals


def apply_time(
    state: ScoreboardState,
    period: int | None = None,
    clock: str | None = None,
    status: str | None = None,
) -> ScoreboardState:
    """Overwrite period, clock and status where given (``""`` counts as given)."""
    return apply_set(state, ScoreboardPatch.from_options(period=period, clock=clock, status=status))


def reset(entry: ChannelEntry, defaults: ScoreboardDefaults | None = None) -> ChannelEntry:
    """Restore score, clock and status defaults; the published message id is kept."""
    entry.state = default_state(defaults)
    return entry


__all__ = [
    "ChannelEntry",
    "ScoreboardPatch",
    "ScoreboardState",
    "Side",
    "TeamState",
    "apply_goal_delta",
    "apply_set",
    "apply_time",
    "default_entry",
    "default_state",
    "reset",
]
