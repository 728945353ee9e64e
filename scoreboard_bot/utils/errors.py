"""
Custom exceptions for the scoreboard bot.

This module defines a hierarchy of exceptions for better error handling
and user-facing error messages.
"""

from typing import Any


class ScoreboardBotError(Exception):
    """Base exception for all scoreboard bot errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """
        Initialize a scoreboard bot error.

        Args:
            message: Human-readable error message
            details: Additional error context for logging/debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return the error message."""
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(ScoreboardBotError):
    """
    Exception raised when input validation fails.

    This includes invalid command arguments, malformed settings, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize a validation error.

        Args:
            message: Human-readable error message
            field: Field that failed validation
            value: The invalid value
            details: Additional error context
        """
        validation_details = {"field": field, "value": repr(value)}
        if details:
            validation_details.update(details)
        super().__init__(message, details=validation_details)
        self.field = field
        self.value = value


class StateStoreError(ScoreboardBotError):
    """
    Exception raised when the scoreboard state file cannot be written.

    Read failures never raise; they degrade to an empty store.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize a state store error.

        Args:
            message: Human-readable error message
            path: State file involved in the error
            details: Additional error context
        """
        store_details = {"path": path}
        if details:
            store_details.update(details)
        super().__init__(message, details=store_details)
        self.path = path


class PublishError(ScoreboardBotError):
    """
    Exception raised when the scoreboard message cannot be posted.

    Raised only after the edit-in-place attempt (if any) and the
    post-new fallback have both failed.
    """

    def __init__(
        self,
        message: str,
        *,
        channel_id: int | str | None = None,
        previous_message_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize a publish error.

        Args:
            message: Human-readable error message
            channel_id: Channel the scoreboard was being published to
            previous_message_id: Stored message id before the attempt
            details: Additional error context
        """
        publish_details = {
            "channel_id": str(channel_id) if channel_id is not None else None,
            "previous_message_id": previous_message_id,
        }
        if details:
            publish_details.update(details)
        super().__init__(message, details=publish_details)
        self.channel_id = channel_id
        self.previous_message_id = previous_message_id


class ConfigurationError(ScoreboardBotError):
    """
    Exception raised when configuration is invalid or missing.

    This includes a missing Discord token or application id.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize a configuration error.

        Args:
            message: Human-readable error message
            config_key: Configuration key that is problematic
            details: Additional error context
        """
        config_details = {"config_key": config_key}
        if details:
            config_details.update(details)
        super().__init__(message, details=config_details)
        self.config_key = config_key
