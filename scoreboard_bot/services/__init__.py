"""Service layer for the scoreboard bot."""

from .scoreboard_service import ScoreboardService

__all__ = ["ScoreboardService"]
