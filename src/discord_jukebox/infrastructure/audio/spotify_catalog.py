"""CatalogTranslator that turns Spotify track links into search queries.

Uses Spotify's public oEmbed endpoint, which needs no API credentials and
returns the track title (and usually the artist) for a share link.
"""

from __future__ import annotations

import logging
import re
from typing import Final

import httpx
from pydantic import BaseModel, ConfigDict, field_validator

from discord_jukebox.application.interfaces.audio_resolver import CatalogTranslator
from discord_jukebox.config.settings import ResolverSettings
from discord_jukebox.domain.shared.exceptions import CatalogLinkError
from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

OEMBED_ENDPOINT: Final[str] = "https://open.spotify.com/oembed"

SPOTIFY_LINK_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:https?://)?(?:open|play)\.spotify\.com/", re.IGNORECASE
)


class OEmbedInfo(BaseModel):
    """The parts of an oEmbed response used to build a search query."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str = ""
    author_name: str = ""

    @field_validator("title", "author_name", mode="before")
    @classmethod
    def _coerce_text(cls, v: object) -> str:
        return v.strip() if isinstance(v, str) else ""

    def to_query(self) -> str:
        return " ".join(part for part in (self.title, self.author_name) if part)


class SpotifyCatalogTranslator(CatalogTranslator):

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or ResolverSettings()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._settings.catalog_timeout_s,
                headers={
                    "User-Agent": self._settings.user_agent,
                    "Accept": "application/json",
                },
                follow_redirects=True,
            )
        return self._client

    def is_catalog_link(self, query: str) -> bool:
        return bool(SPOTIFY_LINK_PATTERN.match(query.strip()))

    async def translate(self, url: str) -> str:
        url = url.strip()
        try:
            response = await self._get_client().get(OEMBED_ENDPOINT, params={"url": url})
            response.raise_for_status()
            info = OEmbedInfo.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(LogTemplates.CATALOG_FAILED, url, exc)
            raise CatalogLinkError(
                url, ErrorMessages.CATALOG_LOOKUP_FAILED.format(url=url)
            ) from exc

        query = info.to_query()
        if not info.title:
            logger.warning(LogTemplates.CATALOG_FAILED, url, "empty title")
            raise CatalogLinkError(url, ErrorMessages.CATALOG_EMPTY_TITLE.format(url=url))

        logger.info(LogTemplates.CATALOG_TRANSLATED, url, query)
        return query

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
