"""
Main entry point for the scoreboard bot.

Loads configuration, starts the keepalive endpoint and runs the Discord
client until it stops or a shutdown signal arrives.
"""

import argparse
import asyncio

from dotenv import load_dotenv

# Load .env before the settings singleton is built
load_dotenv()

from .config.settings import Settings, settings  # noqa: E402
from .core.discord import ScoreboardBot  # noqa: E402
from .core.keepalive import KeepaliveServer  # noqa: E402
from .core.lifecycle import run_with_lifecycle  # noqa: E402
from .storage.json_store import JsonScoreboardRepository  # noqa: E402
from .utils.errors import ConfigurationError  # noqa: E402
from .utils.log_events import LogEvents  # noqa: E402
from .utils.logger import setup_logging  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="scoreboard-bot",
        description="Discord bot that keeps a live scoreboard message per channel",
    )
    parser.add_argument(
        "--no-keepalive",
        action="store_true",
        help="Do not start the keepalive HTTP endpoint",
    )
    parser.add_argument(
        "--state-file",
        metavar="PATH",
        help="Scoreboard state file (overrides SCOREBOARD_STORAGE__STATE_FILE)",
    )
    return parser.parse_args(argv)


def apply_cli_overrides(config: Settings, args: argparse.Namespace) -> Settings:
    """Return a copy of ``config`` with command-line overrides applied."""
    config = config.model_copy(deep=True)
    if args.state_file:
        config.storage.state_file = args.state_file
    if args.no_keepalive:
        config.keepalive.enabled = False
    return config


def require_credentials(config: Settings) -> str:
    """
    Check the settings needed to log in and register commands.

    Returns:
        The Discord token

    Raises:
        ConfigurationError: If the token or application id is missing
    """
    if not config.discord.token:
        raise ConfigurationError(
            "Discord token missing: set SCOREBOARD_DISCORD__TOKEN (or TOKEN)",
            config_key="discord.token",
        )
    if config.discord.application_id is None:
        raise ConfigurationError(
            "Discord application id missing: set SCOREBOARD_DISCORD__APPLICATION_ID (or CLIENT_ID)",
            config_key="discord.application_id",
        )
    return config.discord.token


async def run_discord_bot(config: Settings) -> None:
    """Run the Discord bot together with the keepalive endpoint."""
    log = setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        app_version=config.app_version,
        app_env=config.app_env,
        debug=config.debug,
    )
    token = require_credentials(config)

    repository = JsonScoreboardRepository(config.state_path, defaults=config.defaults)
    # Read once before login; shutdown never rewrites the file
    repository.load()
    bot = ScoreboardBot(repository=repository, config=config)

    keepalive: KeepaliveServer | None = None
    if config.keepalive.enabled:
        keepalive = KeepaliveServer(
            host=config.keepalive.host,
            port=config.keepalive.port,
            is_ready=bot.is_ready,
        )
        await keepalive.start()

    async def close_discord_connection() -> None:
        log.info(LogEvents.BOT_CLOSING)
        await bot.close()

    async def stop_keepalive() -> None:
        if keepalive is not None:
            await keepalive.stop()

    await run_with_lifecycle(
        start=lambda: bot.start(token),
        cleanup_tasks=[close_discord_connection, stop_keepalive],
    )

    log.info(LogEvents.BOT_STOPPED)


def cli_main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = parse_args(argv)
    config = apply_cli_overrides(settings, args)

    try:
        asyncio.run(run_discord_bot(config))
    except KeyboardInterrupt:
        print("\n👋 Scoreboard bot stopped.")
    except ConfigurationError as e:
        print(f"\n❌ Configuration error: {e}")
        raise SystemExit(1) from e
    except Exception as e:
        print(f"\n❌ Fatal error: {e}")
        raise


if __name__ == "__main__":
    cli_main()
