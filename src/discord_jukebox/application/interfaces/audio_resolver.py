"""Port interfaces for resolving queries to songs and songs to audio streams."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from discord_jukebox.domain.shared.types import HttpUrlStr, NonEmptyStr

if TYPE_CHECKING:
    from ...domain.music.entities import Song


class AudioResource(BaseModel):
    """A playable stream derived from a song locator."""

    model_config = ConfigDict(frozen=True, strict=True)

    locator: HttpUrlStr
    stream_url: NonEmptyStr


class AudioResolver(ABC):
    """Interface for turning free text or URLs into songs, and songs into streams."""

    @abstractmethod
    async def resolve(self, query: NonEmptyStr) -> "Song":
        """Resolve a query, URL or catalog link to a song.

        Raises:
            CatalogLinkError: The catalog link could not be translated.
            NoResultsError: A text search returned nothing.
            TrackFetchError: Extraction failed downstream.
        """
        ...

    @abstractmethod
    async def create_resource(self, locator: HttpUrlStr) -> AudioResource:
        """Derive a fresh stream for a song locator.

        Raises:
            TrackFetchError: No stream could be produced.
        """
        ...

    @abstractmethod
    def is_url(self, query: NonEmptyStr) -> bool:
        ...


class CatalogTranslator(ABC):
    """Interface for translating third-party catalog links into search queries."""

    @abstractmethod
    def is_catalog_link(self, query: NonEmptyStr) -> bool:
        ...

    @abstractmethod
    async def translate(self, url: NonEmptyStr) -> str:
        """Return a search query (track name and artists) for a catalog link.

        Raises:
            CatalogLinkError: The lookup failed or returned nothing usable.
        """
        ...
