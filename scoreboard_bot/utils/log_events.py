"""Standardised event names for structured logging."""

from __future__ import annotations


class LogEvents:
    """Event name constants for the scoreboard bot logs.

    Use these constants instead of string literals to avoid typos.
    """

    # Application
    APP_STARTED = "app_started"
    APP_STOPPED = "app_stopped"

    # Discord bot
    BOT_INITIALIZED = "bot_initialized"
    BOT_READY = "bot_ready"
    BOT_READY_WITHOUT_USER = "bot_ready_without_user"
    BOT_CLOSING = "bot_closing"
    BOT_STOPPED = "bot_stopped"
    COMMANDS_SYNCED_GUILD = "commands_synced_guild"
    COMMANDS_SYNCED_GLOBAL = "commands_synced_global"

    # Commands
    COMMAND_COMPLETED = "command_completed"
    COMMAND_FAILED = "command_failed"
    COMMAND_ERROR_REPLY_FAILED = "command_error_reply_failed"

    # Publisher
    SCOREBOARD_POSTED = "scoreboard_posted"
    SCOREBOARD_EDITED = "scoreboard_edited"
    SCOREBOARD_EDIT_FAILED = "scoreboard_edit_failed"
    SCOREBOARD_REPOSTED = "scoreboard_reposted"
    SCOREBOARD_POST_FAILED = "scoreboard_post_failed"

    # State store
    STATE_LOADED = "state_loaded"
    STATE_FILE_MISSING = "state_file_missing"
    STATE_FILE_CORRUPT = "state_file_corrupt"
    STATE_ENTRY_INVALID = "state_entry_invalid"
    STATE_SAVED = "state_saved"
    STATE_SAVE_FAILED = "state_save_failed"
    STATE_ENTRY_CREATED = "state_entry_created"

    # Keepalive
    KEEPALIVE_STARTED = "keepalive_started"
    KEEPALIVE_STOPPED = "keepalive_stopped"

    # Lifecycle
    CLEANUP_TASK_REGISTERED = "cleanup_task_registered"
    SIGNAL_HANDLERS_CONFIGURED = "signal_handlers_configured"
    SIGNAL_RECEIVED = "signal_received"
    FORCED_EXIT_TRIGGERED = "forced_exit_triggered"
    SHUTDOWN_STARTED = "shutdown_started"
    CLEANUP_STARTED = "cleanup_started"
    CLEANUP_TASK_RUNNING = "cleanup_task_running"
    CLEANUP_TASK_FAILED = "cleanup_task_failed"
    CLEANUP_FINISHED = "cleanup_finished"

    # Configuration
    UNKNOWN_ENV_VARS = "unknown_env_vars_detected"


__all__ = ["LogEvents"]
