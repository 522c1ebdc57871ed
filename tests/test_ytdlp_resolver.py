"""
Unit Tests for YtDlpResolver

Tests for the yt-dlp based audio resolver:
- URL detection
- Info dict parsing and coercion
- Resolve (URL, search and catalog links)
- Stream derivation
- Caching behavior
- Error handling
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from discord_jukebox.config.settings import AudioSettings, ResolverSettings
from discord_jukebox.domain.shared.exceptions import NoResultsError, TrackFetchError
from discord_jukebox.infrastructure.audio.models import UNKNOWN_TITLE, YtDlpOpts, YtDlpTrackInfo
from discord_jukebox.infrastructure.audio.ytdlp_resolver import YtDlpResolver

VIDEO_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

INFO = {
    "webpage_url": VIDEO_URL,
    "title": "Never Gonna Give You Up",
    "url": "https://rr1.googlevideo.com/audio.webm",
    "duration": 212,
}

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def resolver():
    return YtDlpResolver(AudioSettings(), ResolverSettings())


@pytest.fixture
def mock_ydl():
    """Patch YoutubeDL and expose the object returned by its context manager."""
    with patch("discord_jukebox.infrastructure.audio.ytdlp_resolver.YoutubeDL") as mock_cls:
        ydl = mock_cls.return_value.__enter__.return_value
        ydl.extract_info.return_value = dict(INFO)
        yield ydl


# =============================================================================
# Model Tests
# =============================================================================


class TestYtDlpTrackInfo:
    def test_garbage_coerced(self):
        info = YtDlpTrackInfo.model_validate(
            {"webpage_url": "  ", "title": None, "duration": "abc", "formats": "nope"}
        )

        assert info.webpage_url is None
        assert info.title == UNKNOWN_TITLE
        assert info.duration is None
        assert info.formats == []

    def test_page_url_falls_back_to_original(self):
        info = YtDlpTrackInfo(original_url=VIDEO_URL)
        assert info.page_url == VIDEO_URL

    def test_stream_url_from_formats(self):
        info = YtDlpTrackInfo.model_validate(
            {
                "formats": [
                    {"url": "https://cdn/low", "acodec": "opus"},
                    {"url": "https://cdn/video-only", "acodec": "none"},
                    {"url": "https://cdn/high", "acodec": "mp4a"},
                ]
            }
        )
        assert info.stream_url == "https://cdn/high"

    def test_no_stream_url(self):
        assert YtDlpTrackInfo().stream_url is None


class TestYtDlpOpts:
    def test_base_opts_carry_format_and_user_agent(self):
        resolver = YtDlpResolver(
            AudioSettings(ytdlp_format="bestaudio"), ResolverSettings(user_agent="UA/1")
        )

        opts = resolver._get_opts()

        assert isinstance(opts, YtDlpOpts)
        assert opts.format == "bestaudio"
        assert opts.http_headers == {"User-Agent": "UA/1"}
        assert opts.noplaylist is True


# =============================================================================
# Resolve Tests
# =============================================================================


class TestIsUrl:
    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            (VIDEO_URL, True),
            ("http://example.com/a.mp3", True),
            ("www.youtube.com/watch?v=x", True),
            ("never gonna give you up", False),
        ],
    )
    def test_is_url(self, resolver, query, expected):
        assert resolver.is_url(query) is expected


class TestResolve:
    """Tests for turning queries into songs."""

    async def test_resolve_url(self, resolver, mock_ydl):
        song = await resolver.resolve(f"  {VIDEO_URL}  ")

        assert song.title == "Never Gonna Give You Up"
        assert song.locator == VIDEO_URL
        assert song.duration == "3:32"
        mock_ydl.extract_info.assert_called_once_with(VIDEO_URL, download=False)

    async def test_resolve_url_without_page_url_uses_query(self, resolver, mock_ydl):
        mock_ydl.extract_info.return_value = {"title": "Raw file", "url": "https://cdn/f.mp3"}

        song = await resolver.resolve("https://example.com/f.mp3")

        assert song.locator == "https://example.com/f.mp3"
        assert song.duration is None

    async def test_resolve_search_takes_first_hit(self, resolver, mock_ydl):
        mock_ydl.extract_info.return_value = {
            "entries": [dict(INFO), {**INFO, "title": "Second"}]
        }

        song = await resolver.resolve("rick astley")

        assert song.title == "Never Gonna Give You Up"
        mock_ydl.extract_info.assert_called_once_with("ytsearch1:rick astley", download=False)

    async def test_search_without_results(self, resolver, mock_ydl):
        mock_ydl.extract_info.return_value = {"entries": []}

        with pytest.raises(NoResultsError):
            await resolver.resolve("zzzz no such song")

    async def test_search_failure(self, resolver, mock_ydl):
        mock_ydl.extract_info.side_effect = RuntimeError("network down")

        with pytest.raises(TrackFetchError):
            await resolver.resolve("rick astley")

    async def test_extraction_failure(self, resolver, mock_ydl):
        mock_ydl.extract_info.side_effect = RuntimeError("Video unavailable")

        with pytest.raises(TrackFetchError):
            await resolver.resolve(VIDEO_URL)

    async def test_extraction_returns_nothing(self, resolver, mock_ydl):
        mock_ydl.extract_info.return_value = None

        with pytest.raises(TrackFetchError):
            await resolver.resolve(VIDEO_URL)

    async def test_long_title_truncated(self, resolver, mock_ydl):
        mock_ydl.extract_info.return_value = {**INFO, "title": "x" * 800}

        song = await resolver.resolve(VIDEO_URL)

        assert len(song.title) == 500

    async def test_catalog_link_translated(self, mock_ydl):
        translator = MagicMock()
        translator.is_catalog_link.return_value = True
        translator.translate = AsyncMock(return_value="Never Gonna Give You Up Rick Astley")
        mock_ydl.extract_info.return_value = {"entries": [dict(INFO)]}
        resolver = YtDlpResolver(catalog_translator=translator)

        song = await resolver.resolve("https://open.spotify.com/track/4cOdK2wGLETKBW3PvgPWqT")

        translator.translate.assert_awaited_once()
        mock_ydl.extract_info.assert_called_once_with(
            "ytsearch1:Never Gonna Give You Up Rick Astley", download=False
        )
        assert song.locator == VIDEO_URL


# =============================================================================
# Stream / Cache Tests
# =============================================================================


class TestCreateResource:
    async def test_resource_reuses_cached_extraction(self, resolver, mock_ydl):
        song = await resolver.resolve(VIDEO_URL)

        resource = await resolver.create_resource(song.locator)

        assert resource.stream_url == INFO["url"]
        assert resource.locator == VIDEO_URL
        assert mock_ydl.extract_info.call_count == 1

    async def test_search_hit_cached_by_page_url(self, resolver, mock_ydl):
        mock_ydl.extract_info.return_value = {"entries": [dict(INFO)]}
        await resolver.resolve("rick astley")

        await resolver.create_resource(VIDEO_URL)

        assert mock_ydl.extract_info.call_count == 1

    async def test_cache_disabled(self, mock_ydl):
        resolver = YtDlpResolver(resolver_settings=ResolverSettings(info_cache_ttl_s=0))

        await resolver.create_resource(VIDEO_URL)
        await resolver.create_resource(VIDEO_URL)

        assert mock_ydl.extract_info.call_count == 2

    async def test_expired_entry_refetched(self, resolver, mock_ydl):
        with patch("discord_jukebox.infrastructure.audio.ytdlp_resolver.time.time") as mock_time:
            mock_time.return_value = 1000.0
            await resolver.create_resource(VIDEO_URL)
            mock_time.return_value = 1000.0 + 3600
            await resolver.create_resource(VIDEO_URL)

        assert mock_ydl.extract_info.call_count == 2

    async def test_missing_stream_url(self, resolver, mock_ydl):
        mock_ydl.extract_info.return_value = {"webpage_url": VIDEO_URL, "title": "No audio"}

        with pytest.raises(TrackFetchError):
            await resolver.create_resource(VIDEO_URL)

    async def test_malformed_formats_rejected(self, resolver, mock_ydl):
        mock_ydl.extract_info.return_value = {**INFO, "formats": [{"url": "", "acodec": "opus"}]}

        with pytest.raises(TrackFetchError):
            await resolver.resolve(VIDEO_URL)
        with pytest.raises(TrackFetchError):
            await resolver.create_resource(VIDEO_URL)
