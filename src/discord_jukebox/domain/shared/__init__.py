"""
Shared Domain Kernel

Contains constrained types, messages and exceptions shared across the package.
"""

from discord_jukebox.domain.shared.exceptions import (
    BusinessRuleViolationError,
    CatalogLinkError,
    DomainError,
    NoResultsError,
    ResolverError,
    TrackFetchError,
    TransportError,
    VoiceConnectionError,
)

__all__ = [
    "DomainError",
    "BusinessRuleViolationError",
    "ResolverError",
    "CatalogLinkError",
    "NoResultsError",
    "TrackFetchError",
    "TransportError",
    "VoiceConnectionError",
]
