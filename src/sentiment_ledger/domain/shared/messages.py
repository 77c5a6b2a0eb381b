"""Centralized message constants for error messages, logging, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Time/Date Validation Errors
    TIMEZONE_REQUIRED_UTC_DATETIME = "UtcDateTime requires a timezone-aware datetime"

    # Database Validation Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite:// or be ':memory:'"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Authentication/Security Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"

    # Ledger Persistence
    LEDGER_STATE_SAVED = "Saved voting session (open=%s, voters=%d)"
    LEDGER_STATE_LOADED = "Loaded voting session (open=%s, voters=%d)"
    LEDGER_STATE_EMPTY = "No persisted voting session found, starting fresh"
    LEDGER_RESTORED = "Restored voting ledger from persisted state"
    LEDGER_RESTORE_FAILED = "Failed to restore voting ledger: %r"
    LEDGER_STATE_SAVE_FAILED = "Failed to persist voting session after %s: %r"

    # Ledger Operations
    ADMIN_CLAIMED = "Administrator claimed by %s"
    ADMIN_CLAIM_IGNORED = "Administrator claim by %s ignored; already held by %s"
    VOTING_STARTED = "Voting started by %s on proposal %r"
    SENTIMENT_UPDATED = "Sentiment updated to %d by %s"
    VOTE_CAST = "Vote %s cast by %s"
    VOTING_ENDED = "Voting ended by %s: positive=%d negative=%d outcome=%s"
    OPERATION_REJECTED = "Rejected %s by %s: %s"

    # Event Bus
    EVENT_HANDLER_FAILED = "Error in handler for %s: %s"
    EVENT_RECEIVED = "Ledger event %s: %s"
    EVENT_ANNOUNCE_FAILED = "Failed to announce %s: %r"

    # Bot Lifecycle
    LEDGER_STARTING = "Starting sentiment voting ledger in %s mode"
    LEDGER_PERSISTENCE_MODE = "Ledger state persistence: %s"
    LEDGER_ANNOUNCE_CHANNEL = "Announcing proposals and outcomes in channel %s"
    BOT_SETUP = "Setting up bot..."
    BOT_CONTAINER_INITIALIZED = "Container initialized successfully"
    BOT_CONTAINER_INIT_FAILED = "Failed to initialize container: %s"
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Connecting ledger bot to Discord..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_CONTAINER_SHUTDOWN = "Container shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error during container shutdown: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"

    # Cogs
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Cogs loaded: %s success, %s failed"

    # Command Sync
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync to guild %s: %s"
    BOT_SYNCED_GLOBAL = "Synced %s commands globally"
    BOT_SYNC_GLOBAL_FAILED = "Failed to sync commands globally: %s"
    BOT_SYNC_ON_STARTUP_FAILED = "Failed to sync commands on startup: %s"

    # Errors
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"


class DiscordUIMessages:
    """User-facing strings sent back through Discord interactions."""

    ADMIN_CLAIMED = "✅ You are now the ledger administrator."
    ADMIN_ALREADY_CLAIMED = "ℹ️ The administrator role is already held by <@{administrator}>."

    VOTING_STARTED = "🗳️ Voting opened on: **{proposal}**"
    SENTIMENT_UPDATED = "📈 Sentiment score set to **{score}**."
    VOTE_RECORDED = "✅ Your **{option}** vote was recorded."

    VOTING_ENDED = (
        "🏁 Voting ended: **{outcome}**\n"
        "Weighted tallies: positive {positive_tally} vs negative {negative_tally}"
    )

    VOTE_COUNTS = "👍 {positive} · 👎 {negative} · 😐 {neutral}"
    STATUS_TITLE = "🗳️ Ledger Status"
    STATUS_NO_PROPOSAL = "(no proposal yet)"
    STATUS_NO_ADMIN = "(unclaimed)"
    STATUS_OPEN = "Open"
    STATUS_CLOSED = "Closed"

    ERROR_REJECTED = "❌ {message}"
    ERROR_GENERIC = "❌ An error occurred: {error}"

    ANNOUNCE_PROPOSAL_SET = "🗳️ New proposal: **{proposal}**"
    ANNOUNCE_VOTING_ENDED = (
        "🏁 Voting ended: **{outcome}** "
        "(positive {positive_tally} vs negative {negative_tally})"
    )
