"""
UI error mapping utilities.

Maps exceptions raised while handling a slash command to the short
ephemeral text shown to the invoking user.
"""

from scoreboard_bot.utils.errors import PublishError, StateStoreError

# Discord caps message content at 2000 characters; leave room for the prefix.
MAX_ERROR_LENGTH = 1900


def truncate_error(error: BaseException, limit: int = MAX_ERROR_LENGTH) -> str:
    """Return ``str(error)`` cut down to ``limit`` characters."""
    text = str(error) or type(error).__name__
    return text[:limit]


def get_user_friendly_message(error: BaseException) -> str:
    """
    Map an exception to the ephemeral error reply.

    Args:
        error: The exception to map

    Returns:
        A formatted string safe for Discord display
    """
    if isinstance(error, PublishError):
        return f"❌ Error: could not post the scoreboard. {truncate_error(error, 1850)}"

    if isinstance(error, StateStoreError):
        return f"❌ Error: could not save the scoreboard. {truncate_error(error, 1850)}"

    return f"❌ Error: {truncate_error(error)}"
