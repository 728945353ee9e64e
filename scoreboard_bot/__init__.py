"""
Scoreboard bot - Discord bot that keeps one live scoreboard message per channel.

The bot stores each channel's score, clock and status in a JSON file and
edits the same message in place whenever a slash command changes them.
"""

__version__ = "1.0.0"
