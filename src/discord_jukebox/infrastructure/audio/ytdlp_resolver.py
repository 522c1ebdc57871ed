"""AudioResolver implementation using yt-dlp for URL resolution and search."""

from __future__ import annotations

import asyncio
import logging
import re
import time
from typing import Any, Final, cast

from pydantic import ValidationError
from yt_dlp import YoutubeDL

from discord_jukebox.application.interfaces.audio_resolver import (
    AudioResolver,
    AudioResource,
    CatalogTranslator,
)
from discord_jukebox.config.settings import AudioSettings, ResolverSettings
from discord_jukebox.domain.music.entities import Song
from discord_jukebox.domain.shared.exceptions import NoResultsError, TrackFetchError
from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates
from discord_jukebox.utils.reply import format_duration, truncate

from .models import (
    CACHE_MAX_SIZE,
    LOG_URL_TRUNCATE,
    CacheEntry,
    YtDlpOpts,
    YtDlpTrackInfo,
)

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH: Final[int] = 500

URL_PATTERNS: Final[list[re.Pattern[str]]] = [
    re.compile(r"^https?://"),
    re.compile(r"^www\."),
]


class YtDlpResolver(AudioResolver):
    """Resolves URLs by extraction and free text by taking the first search hit.

    Catalog links are translated to a text query first. Extraction results
    are cached per locator, so the stream derived right after a resolve does
    not hit the network twice.
    """

    def __init__(
        self,
        audio_settings: AudioSettings | None = None,
        resolver_settings: ResolverSettings | None = None,
        *,
        catalog_translator: CatalogTranslator | None = None,
    ) -> None:
        self._audio_settings = audio_settings or AudioSettings()
        self._resolver_settings = resolver_settings or ResolverSettings()
        self._catalog_translator = catalog_translator
        self._cache: dict[str, CacheEntry] = {}

        self._base_opts = YtDlpOpts(
            format=self._audio_settings.ytdlp_format,
            http_headers={"User-Agent": self._resolver_settings.user_agent},
        )

    def _get_opts(self, **overrides: Any) -> YtDlpOpts:
        if overrides:
            return self._base_opts.model_copy(update=overrides)
        return self._base_opts

    # ─────────────────────────────────────────────────────────────────
    # Cache
    # ─────────────────────────────────────────────────────────────────

    def _cache_get(self, key: str, now: float) -> YtDlpTrackInfo | None:
        cached = self._cache.get(key)
        if cached is None:
            return None
        if now - cached.cached_at < self._resolver_settings.info_cache_ttl_s:
            logger.debug(LogTemplates.CACHE_HIT_URL, key[:LOG_URL_TRUNCATE])
            return cached.info
        self._cache.pop(key, None)
        return None

    def _cache_put(self, key: str, info: YtDlpTrackInfo, now: float) -> None:
        if self._resolver_settings.info_cache_ttl_s <= 0:
            return
        self._cache[key] = CacheEntry(info=info, cached_at=now)

        if len(self._cache) > CACHE_MAX_SIZE:
            ttl = self._resolver_settings.info_cache_ttl_s
            expired = [k for k, entry in self._cache.items() if now - entry.cached_at >= ttl]
            for k in expired:
                self._cache.pop(k, None)
            if expired:
                logger.debug(LogTemplates.CACHE_EXPIRED_CLEANED, len(expired))

    # ─────────────────────────────────────────────────────────────────
    # Blocking yt-dlp calls (run in a worker thread)
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _parse_info(data: dict[str, Any], source: str) -> YtDlpTrackInfo:
        try:
            return YtDlpTrackInfo.model_validate(data)
        except ValidationError as exc:
            logger.warning(LogTemplates.YTDLP_MALFORMED_INFO, source[:LOG_URL_TRUNCATE], exc)
            raise TrackFetchError(source, str(exc)) from exc

    def _extract_info_sync(self, url: str) -> YtDlpTrackInfo:
        now = time.time()
        cached = self._cache_get(url, now)
        if cached is not None:
            return cached

        try:
            with YoutubeDL(params=cast(Any, self._get_opts().model_dump())) as ydl:
                data = ydl.extract_info(url, download=False)
        except Exception as exc:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url[:LOG_URL_TRUNCATE])
            raise TrackFetchError(url, str(exc)) from exc

        if not isinstance(data, dict):
            raise TrackFetchError(url)

        info = self._parse_info(dict(data), url)
        self._cache_put(url, info, now)
        if info.page_url and info.page_url != url:
            self._cache_put(info.page_url, info, now)
        return info

    def _search_sync(self, query: str) -> YtDlpTrackInfo | None:
        try:
            with YoutubeDL(params=cast(Any, self._get_opts().model_dump())) as ydl:
                data = ydl.extract_info(f"ytsearch1:{query}", download=False)
        except Exception as exc:
            logger.warning(LogTemplates.YTDLP_FAILED_SEARCH, query)
            raise TrackFetchError(query, str(exc)) from exc

        if not isinstance(data, dict):
            return None
        entries = data.get("entries") or []
        if not isinstance(entries, list):
            return None

        for entry in entries:
            if isinstance(entry, dict):
                info = self._parse_info(dict(entry), query)
                if info.page_url:
                    self._cache_put(info.page_url, info, time.time())
                return info
        return None

    # ─────────────────────────────────────────────────────────────────
    # AudioResolver
    # ─────────────────────────────────────────────────────────────────

    async def resolve(self, query: str) -> Song:
        query = query.strip()

        if self._catalog_translator is not None and self._catalog_translator.is_catalog_link(
            query
        ):
            query = await self._catalog_translator.translate(query)

        if self.is_url(query):
            info = await asyncio.to_thread(self._extract_info_sync, query)
            return self._info_to_song(info, fallback_locator=query)

        found = await asyncio.to_thread(self._search_sync, query)
        if found is None:
            raise NoResultsError(query)
        return self._info_to_song(found)

    def _info_to_song(self, info: YtDlpTrackInfo, fallback_locator: str | None = None) -> Song:
        locator = info.page_url or fallback_locator
        if not locator or not locator.startswith(("http://", "https://")):
            logger.warning(LogTemplates.YTDLP_NO_URL_IN_INFO_DICT)
            raise TrackFetchError(info.title, ErrorMessages.NO_URL_IN_INFO_DICT)

        return Song(
            title=truncate(info.title, MAX_TITLE_LENGTH),
            locator=locator,
            duration=format_duration(info.duration),
        )

    async def create_resource(self, locator: str) -> AudioResource:
        info = await asyncio.to_thread(self._extract_info_sync, locator)
        stream_url = info.stream_url
        if not stream_url:
            logger.warning(LogTemplates.YTDLP_NO_STREAM_URL, locator[:LOG_URL_TRUNCATE])
            raise TrackFetchError(
                locator, ErrorMessages.NO_STREAM_URL_FOR_LOCATOR.format(locator=locator)
            )
        return AudioResource(locator=locator, stream_url=stream_url)

    def is_url(self, query: str) -> bool:
        return any(pattern.search(query) for pattern in URL_PATTERNS)
