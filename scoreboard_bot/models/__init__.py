"""Data models for the scoreboard bot."""

from .scoreboard import ChannelEntry, ScoreboardPatch, ScoreboardState, Side, TeamState

__all__ = ["ChannelEntry", "ScoreboardPatch", "ScoreboardState", "Side", "TeamState"]
