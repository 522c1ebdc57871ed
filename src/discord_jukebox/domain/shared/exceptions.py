"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class BusinessRuleViolationError(DomainError):
    """Raised when a business rule is violated."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        msg = message or f"Business rule violated: {rule}"
        super().__init__(msg, code="BUSINESS_RULE_VIOLATION")
        self.rule = rule


# ── Media resolution ────────────────────────────────────────────────


class ResolverError(DomainError):
    """Raised when a query cannot be turned into a playable song."""

    def __init__(self, query: str, message: str | None = None, code: str = "RESOLVER_ERROR") -> None:
        super().__init__(message or f"Could not resolve '{query}'", code=code)
        self.query = query


class CatalogLinkError(ResolverError):
    """Raised when a catalog link (e.g. Spotify) cannot be translated to a search query."""

    def __init__(self, query: str, message: str | None = None) -> None:
        super().__init__(
            query, message or f"Could not translate catalog link '{query}'", code="CATALOG_LINK_ERROR"
        )


class NoResultsError(ResolverError):
    """Raised when a search yields zero results."""

    def __init__(self, query: str) -> None:
        super().__init__(query, f"No results found for '{query}'", code="NO_RESULTS")


class TrackFetchError(ResolverError):
    """Raised when metadata or stream extraction fails downstream."""

    def __init__(self, query: str, message: str | None = None) -> None:
        super().__init__(
            query, message or f"Failed to fetch track for '{query}'", code="TRACK_FETCH_ERROR"
        )


# ── Voice transport ─────────────────────────────────────────────────


class TransportError(DomainError):
    """Raised when the voice transport fails."""

    def __init__(self, guild_id: int, message: str | None = None, code: str = "TRANSPORT_ERROR") -> None:
        super().__init__(message or f"Voice transport failed in guild {guild_id}", code=code)
        self.guild_id = guild_id


class VoiceConnectionError(TransportError):
    """Raised when a voice channel cannot be joined."""

    def __init__(self, guild_id: int, channel_id: int, message: str | None = None) -> None:
        super().__init__(
            guild_id,
            message or f"Could not join voice channel {channel_id} in guild {guild_id}",
            code="VOICE_CONNECTION_ERROR",
        )
        self.channel_id = channel_id

