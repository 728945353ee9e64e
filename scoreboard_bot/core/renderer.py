"""
Scoreboard rendering.

Turns a scoreboard into the embed posted in the channel. Rendering never
touches persisted state.
"""

from datetime import datetime

import discord

from ..models.scoreboard import ScoreboardState

EMBED_TITLE = "Official Scoreboard"
EMBED_COLOR = 0x5865F2


def render_description(state: ScoreboardState) -> str:
    """
    Format the scoreboard body.

    The status line is left out entirely when the status is blank.

    Args:
        state: Scoreboard to render

    Returns:
        Markdown text for the embed description
    """
    lines = [
        f"{state.home.emoji} **{state.home.name}** — Goals: {state.home.goals}",
        "⚡ vs",
        f"{state.away.emoji} **{state.away.name}** — Goals: {state.away.goals}",
        "",
        f"🕒 Time: {state.period}º • {state.clock}",
    ]
    if state.status.strip():
        lines.append(f"**Status:** {state.status}")
    return "\n".join(lines).strip()


def build_embed(state: ScoreboardState, timestamp: datetime | None = None) -> discord.Embed:
    """
    Build the scoreboard embed.

    Args:
        state: Scoreboard to render
        timestamp: Optional "last updated" time shown in the footer area

    Returns:
        Embed ready to send or edit into a message
    """
    return discord.Embed(
        title=EMBED_TITLE,
        description=render_description(state),
        color=EMBED_COLOR,
        timestamp=timestamp,
    )


__all__ = ["EMBED_COLOR", "EMBED_TITLE", "build_embed", "render_description"]
