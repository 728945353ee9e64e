"""Utility modules."""

from .errors import (
    ConfigurationError,
    PublishError,
    ScoreboardBotError,
    StateStoreError,
    ValidationError,
)
from .logger import get_logger, setup_logging

__all__ = [
    "ScoreboardBotError",
    "ConfigurationError",
    "PublishError",
    "StateStoreError",
    "ValidationError",
    "get_logger",
    "setup_logging",
]
