"""
Configuration module for the scoreboard bot using Pydantic Settings.

This module uses environment variables with validation:
- Nested models for structured configuration
- Environment variable prefixing (SCOREBOARD_)
- Type validation with defaults
- Legacy unprefixed TOKEN / CLIENT_ID / GUILD_ID variables as fallbacks
- Extra fields are ignored (unknown SCOREBOARD_ env vars are logged as warning)
"""

import os
import typing
from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.errors import ValidationError
from ..utils.log_events import LogEvents

log = structlog.get_logger()

ENV_PREFIX = "SCOREBOARD_"

# Unprefixed names used by the first deployments of the bot
LEGACY_TOKEN_ENV = "TOKEN"
LEGACY_APPLICATION_ID_ENV = "CLIENT_ID"
LEGACY_GUILD_ID_ENV = "GUILD_ID"


class DiscordConfig(BaseModel):
    """Discord bot configuration."""

    token: str | None = Field(None, description="Discord bot token")
    application_id: int | None = Field(None, description="Discord application (client) id")
    guild_id: int | None = Field(
        None,
        description="Guild to register commands in instantly; global registration when unset",
    )


class StorageConfig(BaseModel):
    """Scoreboard state persistence configuration."""

    state_file: str = Field(default="state.json", description="JSON file holding all scoreboards")


class KeepaliveConfig(BaseModel):
    """Liveness HTTP endpoint configuration."""

    enabled: bool = Field(default=True, description="Serve the keepalive endpoint")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, ge=1, le=65535, description="Bind port")


class ScoreboardDefaults(BaseModel):
    """Values a fresh (or reset) scoreboard starts from."""

    home_name: str = Field(default="Home Team")
    home_emoji: str = Field(default="🦈")
    away_name: str = Field(default="Away Team")
    away_emoji: str = Field(default="🦅")
    period: int = Field(default=1)
    clock: str = Field(default="00:00")
    status: str = Field(default="Waiting to start")


class Settings(BaseSettings):
    """
    Main settings class for the scoreboard bot.

    Environment variables are prefixed with SCOREBOARD_
    Nested config uses double underscore: SCOREBOARD_DISCORD__TOKEN
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        env_ignore_empty=True,
        validate_default=True,
        extra="ignore",  # Ignore unknown fields with SCOREBOARD_ prefix (typos)
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Application
    app_name: str = Field(default="ScoreboardBot", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    app_env: str = Field(default="development", description="Environment: development/production")
    debug: bool = Field(default=False, description="Debug mode")

    # Logging
    log_level: str = Field(
        default="INFO", description="Log level: DEBUG/INFO/WARNING/ERROR/CRITICAL"
    )
    log_format: str = Field(default="json", description="Log format: json/text")

    # Nested configurations
    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    keepalive: KeepaliveConfig = Field(default_factory=KeepaliveConfig)
    defaults: ScoreboardDefaults = Field(default_factory=ScoreboardDefaults)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the valid values."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValidationError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        v_lower = v.lower()
        if v_lower not in {"json", "text"}:
            raise ValidationError(f"Invalid log format: {v}. Must be json or text")
        return v_lower

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate app environment."""
        valid_envs = {"development", "production", "testing"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValidationError(f"Invalid app_env: {v}. Must be one of {valid_envs}")
        return v_lower

    @model_validator(mode="after")
    def apply_legacy_discord_env(self) -> "Settings":
        """Fill Discord settings from TOKEN/CLIENT_ID/GUILD_ID when unset."""
        if self.discord.token is None:
            self.discord.token = os.environ.get(LEGACY_TOKEN_ENV) or None
        if self.discord.application_id is None:
            self.discord.application_id = _int_from_env(LEGACY_APPLICATION_ID_ENV)
        if self.discord.guild_id is None:
            self.discord.guild_id = _int_from_env(LEGACY_GUILD_ID_ENV)
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def state_path(self) -> Path:
        """Get the scoreboard state file path."""
        return Path(self.storage.state_file)


def _int_from_env(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError(f"Invalid {name}: {raw!r} is not a Discord id", field=name) from e


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    The cache is per-process; call ``get_settings.cache_clear()`` to reload.

    Returns:
        Settings: The application settings
    """
    _warn_unknown_env_vars()

    return Settings()


def _collect_fields(model: type[BaseModel], prefix: str = "") -> set[str]:
    """Recursively collect all field names from a Pydantic model."""
    fields = set()
    for field_name, field_info in model.model_fields.items():
        full_name = f"{prefix}{field_name}" if prefix else field_name
        fields.add(full_name.upper())
        field_type = field_info.annotation
        if hasattr(field_type, "__origin__"):
            # Optional[X] and similar
            for arg in typing.get_args(field_type):
                if isinstance(arg, type) and issubclass(arg, BaseModel):
                    fields.update(_collect_fields(arg, f"{full_name}__"))
        elif isinstance(field_type, type) and issubclass(field_type, BaseModel):
            fields.update(_collect_fields(field_type, f"{full_name}__"))
    return fields


def _warn_unknown_env_vars() -> list[str]:
    """
    Warn about SCOREBOARD_ environment variables that match no setting.

    Catches typos such as SCOREBOARD_DEBGU that would otherwise be ignored.
    """
    known_fields = _collect_fields(Settings)

    unknown_vars = [
        key
        for key in os.environ
        if key.upper().startswith(ENV_PREFIX) and key[len(ENV_PREFIX) :].upper() not in known_fields
    ]

    if unknown_vars:
        log.warning(
            LogEvents.UNKNOWN_ENV_VARS,
            vars=unknown_vars,
            hint="These environment variables will be ignored. Check for typos.",
        )
    return unknown_vars


# Export the singleton instance
settings = get_settings()
