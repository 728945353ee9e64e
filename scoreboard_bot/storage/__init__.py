"""Storage layer for the scoreboard bot."""

from .json_store import JsonScoreboardRepository
from .repository import ScoreboardRepository

__all__ = ["JsonScoreboardRepository", "ScoreboardRepository"]
