"""Centralized message constants for error messages, validation, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Field Validation Errors (templates)
    FIELD_CANNOT_BE_EMPTY = "{field_name} cannot be empty"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Registry Errors
    QUEUE_ALREADY_REGISTERED = "A queue is already registered for guild {guild_id}"

    # Audio/Stream Errors
    NO_URL_IN_INFO_DICT = "No URL found in info dict"
    NO_STREAM_URL_FOR_LOCATOR = "No stream URL found for {locator}"
    CATALOG_LOOKUP_FAILED = "Catalog lookup failed for {url}"
    CATALOG_EMPTY_TITLE = "Catalog entry for {url} has no title"

    # Authentication/Security Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Cache Operations
    CACHE_HIT_URL = "Cache hit for URL: %s"
    CACHE_EXPIRED_CLEANED = "Cleaned %d expired cache entries"

    # Voice Operations
    VOICE_CONNECTED = "Connected to voice channel %s in %s"
    VOICE_DISCONNECTED = "Disconnected from voice in guild %s"
    VOICE_CONNECTION_TIMEOUT = "Timeout connecting to channel %s"
    VOICE_NO_PERMISSION = "No permission to connect to channel %s"
    VOICE_CLIENT_ERROR = "Client error connecting: %r"
    VOICE_RELEASE_ERROR = "Error releasing voice session in guild %s: %r"
    VOICE_SELF_DEAFEN_FAILED = "Failed to self-deafen in guild %s: %r"
    VOICE_RELOCATING = "Relocating to voice channel %s in guild %s"
    VOICE_RELOCATED = "Relocated to voice channel %s in guild %s"
    VOICE_RELOCATE_DENIED = "Missing Connect/Speak in channel %s of guild %s, staying put"
    VOICE_RELOCATE_FAILED = "Relocation to channel %s failed in guild %s: %s"
    VOICE_JOIN_FAILED = "Joining channel %s failed in guild %s: %s"
    VOICE_SESSION_DROPPED = "Voice session dropped in guild %s (channel %s)"
    VOICE_JOIN_SUPERSEDED = "Queue for guild %s was stopped while joining, releasing session"

    # Playback Operations
    PLAYBACK_STARTED = "Started playing '%s' in guild %s"
    PLAYBACK_STOPPED = "Stopped playback in guild %s"
    PLAYBACK_PAUSED = "Paused playback in guild %s"
    PLAYBACK_RESUMED = "Resumed playback in guild %s"
    PLAYBACK_ERROR = "Playback error in guild %s: %s"
    PLAYBACK_STREAM_FAILED = "Could not create stream for '%s' in guild %s: %s"
    PLAYBACK_TRANSPORT_FAILED = "Transport failure in guild %s: %s"
    PLAYBACK_FAILURE_LIMIT = "Giving up in guild %s after %d consecutive stream failures"
    PLAYBACK_SUPERSEDED = "Ignoring superseded start in guild %s (token %d)"
    PLAYBACK_STALE_COMPLETION = "Ignoring stale completion in guild %s (token %d)"
    PLAYBACK_IDLE = "Player idle in guild %s (token %d)"
    PLAYBACK_STALE_IDLE = "Dropping stale idle signal in guild %s"
    PLAYBACK_RESTART_AT = "Re-attaching player in guild %s at %.1fs"
    PLAYBACK_UNEXPECTED_ERROR = "Unexpected playback failure in guild %s, tearing the queue down"

    # Song Operations
    SONG_SKIPPED = "Skipped song '%s' in guild %s"
    SONG_SKIP_REQUESTED = "Skip requested for '%s' in guild %s"
    SONG_FINISHED = "Song finished: '%s' in guild %s (loop=%s, skipped=%s)"

    # Queue Operations
    QUEUE_CREATED = "Created queue for guild %s"
    QUEUE_ENQUEUED = "Enqueued '%s' at position %d in guild %s"
    QUEUE_WRAPPED = "Queue loop wrapped in guild %s, refilled %d songs"
    QUEUE_TORN_DOWN = "Tore down queue for guild %s"
    QUEUE_REGISTRY_REMOVED = "Removed queue for guild %s from registry"
    LOOP_MODE_CHANGED = "Loop mode changed to %s in guild %s"

    # Notifications
    NOTIFY_FAILED = "Failed to send notification in guild %s: %r"

    # Resolution/Search
    CATALOG_TRANSLATED = "Translated catalog link %s to query %r"
    CATALOG_FAILED = "Catalog lookup failed for %s: %r"
    YTDLP_NO_URL_IN_INFO_DICT = "No URL found in info dict"
    YTDLP_NO_STREAM_URL = "No stream URL found for %s"
    YTDLP_FAILED_EXTRACT_INFO = "Failed to extract info from %s"
    YTDLP_FAILED_SEARCH = "Failed to search for %r"
    YTDLP_MALFORMED_INFO = "Malformed extractor data for %s: %s"
    PLAY_FAILED = "Play command failed in guild %s for query %r"
    PLAY_UNEXPECTED_ERROR = "Unexpected error handling play in guild %s for query %r"

    # Application Lifecycle
    BOT_STARTING = "Starting Discord Jukebox in {environment} mode"
    BOT_SETUP = "Setting up bot..."
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_QUEUES_RELEASED = "Released %d active queues"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_READY = "Bot ready as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"

    # Bot Cog Management
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Cogs loaded: %s success, %s failed"

    # Bot Command Sync
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync to guild %s: %s"
    BOT_SYNCED_GLOBAL = "Synced %s commands globally"
    BOT_SYNC_GLOBAL_FAILED = "Failed to sync commands globally: %s"
    BOT_SYNC_ON_STARTUP_FAILED = "Failed to sync commands on startup: %s"

    # Bot Error Handling
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"


class DiscordUIMessages:
    """User-facing Discord messages and responses.

    These strings are shown directly to users in Discord interactions.
    Keep them concise, friendly, and include appropriate emoji.
    """

    # Action Messages
    ACTION_SKIPPED = "⏭ Skipped!"
    ACTION_PAUSED = "⏸ Paused!"
    ACTION_RESUMED = "▶ Resumed!"
    ACTION_STOPPED = "⏹ Stopped!"
    ACTION_LOOP_MODE_CHANGED = "🔁 Loop mode: **{mode}**"
    ACTION_SONG_QUEUED = "Added **{title}** to the queue."
    ACTION_NOW_PLAYING = "Now playing **{title}**."

    # State Messages
    STATE_NOTHING_PLAYING = "No music playing!"
    STATE_MUST_BE_IN_VOICE = "You must be in a voice channel!"
    STATE_SERVER_ONLY = "This command can only be used in a server."
    STATE_VERIFY_VOICE_FAILED = "Could not verify your voice state."
    STATE_QUEUE_ENDED = "Queue ended. Leaving the VC."
    STATE_VOICE_LOST = "Lost the voice connection. Stopping playback."
    STATE_NOTHING_TO_SKIP = "Nothing is playing right now."
    STATE_JOIN_CANCELLED = "Playback was stopped before I could join."

    # Error Messages
    ERROR_MISSING_VOICE_PERMISSIONS = "I need Connect & Speak permissions!"
    ERROR_NO_RESULTS = "No results found!"
    ERROR_TRACK = "Error playing this track."
    ERROR_CATALOG_LINK = "Couldn't read that Spotify link."
    ERROR_COULD_NOT_JOIN_VOICE = "I couldn't join your voice channel."
    ERROR_SONG_UNPLAYABLE = "⚠️ Couldn't play **{title}**, skipping."
    ERROR_OCCURRED = "❌ An error occurred: {error}"

    # Embed Content
    EMBED_QUEUE_TITLE = "🎶 Music Queue"
    EMBED_NOW_PLAYING_HEADER = "**Now Playing:**"
    EMBED_UP_NEXT_HEADER = "**Up Next:**"
    EMBED_NO_MORE_SONGS = "No more songs in queue"
    EMBED_SONG_LINE = "{title} | {duration} | Requested by {requester}"
    EMBED_QUEUE_ENTRY = "**{position}.** {line}"
    DURATION_UNKNOWN = "N/A"
