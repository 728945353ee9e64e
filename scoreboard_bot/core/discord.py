"""
Discord bot implementation using discord.py.

Registers the /ping and /scoreboard slash commands, wires them to the
scoreboard service and reports failures back to the invoking user.
"""

import math

import discord
import structlog
from discord import app_commands
from discord.ext import commands

from ..config.settings import Settings, settings
from ..models.scoreboard import ScoreboardPatch
from ..services.scoreboard_service import ScoreboardService
from ..storage.json_store import JsonScoreboardRepository
from ..storage.repository import ScoreboardRepository
from ..utils.errors import ValidationError
from ..utils.log_correlation import bind_interaction_context
from ..utils.log_events import LogEvents
from ..utils.logger import clear_request_context
from ..utils.ui_errors import get_user_friendly_message

log = structlog.get_logger()

SIDE_CHOICES = [
    app_commands.Choice(name="home", value="home"),
    app_commands.Choice(name="away", value="away"),
]


def _bind_interaction(interaction: discord.Interaction) -> None:
    """Start a fresh logging context for one interaction."""
    clear_request_context()
    command = interaction.command.qualified_name if interaction.command else None
    bind_interaction_context(
        interaction_id=interaction.id,
        user_id=interaction.user.id,
        guild_id=interaction.guild_id,
        channel_id=interaction.channel_id,
        command=command,
    )


def _require_channel(interaction: discord.Interaction) -> discord.abc.Messageable:
    channel = interaction.channel
    if channel is None or not hasattr(channel, "send"):
        raise ValidationError("This command must be used in a text channel.", field="channel")
    return channel  # type: ignore[return-value]


class UtilityCog(commands.Cog):
    """Commands that never touch scoreboard state."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    async def interaction_check(self, interaction: discord.Interaction) -> bool:  # type: ignore[override]
        _bind_interaction(interaction)
        return True

    @app_commands.command(name="ping", description="Check that the bot is alive")
    async def ping(self, interaction: discord.Interaction) -> None:
        """Reply with the gateway latency."""
        latency = self.bot.latency
        # inf or nan until the first heartbeat is acknowledged
        if math.isfinite(latency):
            content = f"🏓 Pong! {round(latency * 1000)}ms"
        else:
            content = "🏓 Pong!"
        await interaction.response.send_message(content, ephemeral=True)


class ScoreboardCog(
    commands.GroupCog,
    group_name="scoreboard",
    group_description="Pinned scoreboard the bot keeps editing",
):
    """The /scoreboard command group."""

    def __init__(self, bot: commands.Bot, service: ScoreboardService) -> None:
        self.bot = bot
        self.service = service

    async def interaction_check(self, interaction: discord.Interaction) -> bool:  # type: ignore[override]
        _bind_interaction(interaction)
        return True

    async def _acknowledge(self, interaction: discord.Interaction, content: str) -> None:
        await interaction.followup.send(content, ephemeral=True)
        log.info(LogEvents.COMMAND_COMPLETED)

    @app_commands.command(name="show", description="Create or refresh the scoreboard in this channel")
    async def show(self, interaction: discord.Interaction) -> None:
        channel = _require_channel(interaction)
        await interaction.response.defer(ephemeral=True, thinking=True)
        await self.service.show(interaction.guild_id, channel)
        await self._acknowledge(interaction, "📣 Scoreboard ready/updated!")

    @app_commands.command(name="set", description="Set or update scoreboard fields")
    @app_commands.describe(
        home_name="Home team name",
        home_emoji="Home team emoji",
        home_goals="Home team goals",
        away_name="Away team name",
        away_emoji="Away team emoji",
        away_goals="Away team goals",
        period="Period number",
        clock="Clock, e.g. 12:34",
        status="Free-form status",
    )
    async def set_(
        self,
        interaction: discord.Interaction,
        home_name: str | None = None,
        home_emoji: str | None = None,
        home_goals: int | None = None,
        away_name: str | None = None,
        away_emoji: str | None = None,
        away_goals: int | None = None,
        period: int | None = None,
        clock: str | None = None,
        status: str | None = None,
    ) -> None:
        channel = _require_channel(interaction)
        patch = ScoreboardPatch.from_options(
            home_name=home_name,
            home_emoji=home_emoji,
            home_goals=home_goals,
            away_name=away_name,
            away_emoji=away_emoji,
            away_goals=away_goals,
            period=period,
            clock=clock,
            status=status,
        )
        await interaction.response.defer(ephemeral=True, thinking=True)
        await self.service.set(interaction.guild_id, channel, patch)
        await self._acknowledge(interaction, "✅ Scoreboard updated!")

    @app_commands.command(name="goal", description="Add or remove goals")
    @app_commands.describe(side="home/away", delta="+1, -1, +2...")
    @app_commands.choices(side=SIDE_CHOICES)
    async def goal(
        self,
        interaction: discord.Interaction,
        side: app_commands.Choice[str],
        delta: int = 1,
    ) -> None:
        channel = _require_channel(interaction)
        await interaction.response.defer(ephemeral=True, thinking=True)
        await self.service.goal(interaction.guild_id, channel, side.value, delta)
        await self._acknowledge(interaction, "⚽ Updated!")

    @app_commands.command(name="time", description="Adjust period, clock or status")
    @app_commands.describe(period="Period number", clock="Clock, e.g. 12:34", status="Free-form status")
    async def time(
        self,
        interaction: discord.Interaction,
        period: int | None = None,
        clock: str | None = None,
        status: str | None = None,
    ) -> None:
        channel = _require_channel(interaction)
        await interaction.response.defer(ephemeral=True, thinking=True)
        await self.service.time(interaction.guild_id, channel, period=period, clock=clock, status=status)
        await self._acknowledge(interaction, "⏱️ Time adjusted!")

    @app_commands.command(name="reset", description="Reset score, clock and status")
    async def reset(self, interaction: discord.Interaction) -> None:
        channel = _require_channel(interaction)
        await interaction.response.defer(ephemeral=True, thinking=True)
        await self.service.reset(interaction.guild_id, channel)
        await self._acknowledge(interaction, "♻️ Reset!")


class ScoreboardBot(commands.Bot):
    """
    Main Discord bot class.

    Owns the state store and the scoreboard service, and registers the
    slash commands when it connects.
    """

    def __init__(
        self,
        repository: ScoreboardRepository | None = None,
        config: Settings | None = None,
    ) -> None:
        """Initialize the bot.

        Args:
            repository: Optional repository instance for dependency injection.
                        Defaults to the JSON file named in the settings.
            config: Optional settings (defaults to the process settings)
        """
        self.config = config or settings

        intents = discord.Intents.default()
        intents.guilds = True
        intents.guild_messages = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
            application_id=self.config.discord.application_id,
        )

        self.repository = repository or JsonScoreboardRepository(
            self.config.state_path, defaults=self.config.defaults
        )
        self.service = ScoreboardService(self.repository, defaults=self.config.defaults)
        self.tree.error(self.on_app_command_error)

        log.info(LogEvents.BOT_INITIALIZED, guild_id=self.config.discord.guild_id)

    async def setup_hook(self) -> None:
        """Add the command cogs and register the slash commands."""
        await self.add_cog(UtilityCog(self))
        await self.add_cog(ScoreboardCog(self, self.service))

        await self.sync_commands()

    async def sync_commands(self) -> list[app_commands.AppCommand]:
        """
        Register the slash commands with Discord.

        With a guild configured the commands are copied there and show up
        at once; otherwise they are registered globally and take a while
        to propagate.
        """
        guild_id = self.config.discord.guild_id
        if guild_id:
            guild = discord.Object(id=guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            log.info(LogEvents.COMMANDS_SYNCED_GUILD, guild_id=str(guild_id), count=len(synced))
        else:
            synced = await self.tree.sync()
            log.info(LogEvents.COMMANDS_SYNCED_GLOBAL, count=len(synced))
        return synced

    async def on_ready(self) -> None:
        """Called when the bot is ready."""
        if self.user is None:
            log.warning(LogEvents.BOT_READY_WITHOUT_USER)
            return

        log.info(
            LogEvents.BOT_READY,
            bot_id=str(self.user.id),
            bot_name=str(self.user),
            guild_count=len(self.guilds),
        )

    async def on_app_command_error(
        self, interaction: discord.Interaction, error: Exception
    ) -> None:
        """
        Global error handler for slash commands.

        Logs the failure and tells the invoker what went wrong; the bot
        keeps serving other commands.

        Args:
            interaction: Interaction that failed
            error: Exception that was raised
        """
        # Get original error if wrapped
        if hasattr(error, "original"):
            error = error.original  # type: ignore[assignment]

        log.error(
            LogEvents.COMMAND_FAILED,
            command=interaction.command.qualified_name if interaction.command else None,
            user_id=str(interaction.user.id),
            guild_id=str(interaction.guild_id) if interaction.guild_id else None,
            error_type=type(error).__name__,
            error_message=str(error),
            exc_info=error,
        )

        content = get_user_friendly_message(error)
        try:
            if interaction.response.is_done():
                await interaction.followup.send(content, ephemeral=True)
            else:
                await interaction.response.send_message(content, ephemeral=True)
        except discord.HTTPException as e:
            log.warning(
                LogEvents.COMMAND_ERROR_REPLY_FAILED,
                error_type=type(e).__name__,
                error=str(e),
            )
        finally:
            clear_request_context()


__all__ = ["ScoreboardBot", "ScoreboardCog", "UtilityCog"]
