#!/usr/bin/env python
"""
Minimal entry point for the scoreboard bot.

This file just imports and runs the main module.
"""

from scoreboard_bot.main import cli_main

if __name__ == "__main__":
    cli_main()
