"""Correlation ID management for request tracing.

A correlation ID ties together every log line emitted while handling a
single slash command interaction.

Format: {YYYYMMDD}_{HHMMSS}_{hostname}_{seq4}
Example: "20250227_143022_scoreboard_a1b2"
"""

from __future__ import annotations

import socket
import threading
from datetime import UTC, datetime

from structlog.contextvars import bind_contextvars, get_contextvars

_counter = 0
_counter_lock = threading.Lock()


def generate_correlation_id() -> str:
    """
    Generate a new unique correlation ID.

    Made of a UTC timestamp, the first 20 characters of the hostname and a
    4-digit hexadecimal sequence.
    """
    global _counter
    with _counter_lock:
        _counter = (_counter + 1) % 0x10000
        current_counter = _counter

    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    hostname = socket.gethostname().split(".")[0][:20]
    sequence = f"{current_counter:04x}"

    return f"{timestamp}_{hostname}_{sequence}"


def get_or_generate_correlation_id() -> str:
    """Return the correlation_id bound in the current context, or bind a new one."""
    ctx = get_contextvars()
    if "correlation_id" in ctx:
        return ctx["correlation_id"]  # type: ignore[return-value]

    new_id = generate_correlation_id()
    bind_contextvars(correlation_id=new_id)
    return new_id


def bind_interaction_context(
    interaction_id: int | str,
    user_id: int | str,
    guild_id: int | str | None = None,
    channel_id: int | str | None = None,
    command: str | None = None,
) -> str:
    """
    Bind the Discord interaction context and a correlation ID.

    Call at the start of every slash command so all logs emitted while
    handling it carry the same identifiers.

    Args:
        interaction_id: Discord interaction ID
        user_id: Discord user ID
        guild_id: Discord guild ID (None for DMs)
        channel_id: Discord channel ID
        command: Qualified command name, e.g. "scoreboard goal"

    Returns:
        The correlation ID in effect
    """
    correlation_id = get_or_generate_correlation_id()
    bind_contextvars(
        request_id=f"itx_{interaction_id}",
        user_id=str(user_id),
        guild_id=str(guild_id) if guild_id else None,
        channel_id=str(channel_id) if channel_id else None,
        command=command,
    )
    return correlation_id


__all__ = [
    "generate_correlation_id",
    "get_or_generate_correlation_id",
    "bind_interaction_context",
]
