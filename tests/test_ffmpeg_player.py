"""
Tests for FFmpegAudioPlayer - Audio Playback Engine

Tests for the FFmpeg-based player including:
- FFmpeg option building
- Starting sources on a subscribed voice client
- One-shot idle callbacks and stale ``after`` filtering
- Pause / resume / stop
- Detach and re-subscribe at the elapsed position
- Transport errors
"""

from unittest.mock import MagicMock, patch

import discord
import pytest

from discord_jukebox.application.interfaces.audio_resolver import AudioResource
from discord_jukebox.config.settings import AudioSettings, ResolverSettings
from discord_jukebox.domain.shared.exceptions import TransportError
from discord_jukebox.infrastructure.audio.ffmpeg_player import FFmpegAudioPlayer, FFmpegConfig
from discord_jukebox.infrastructure.discord.adapters.voice_handle import DiscordVoiceHandle
from fakes import GUILD_ID, FakeHandle, drain

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def ffmpeg_config():
    return FFmpegConfig(
        before_options="-reconnect 1",
        options="-vn",
        user_agent="Agent Smith/1.0",
        default_volume=0.5,
    )


@pytest.fixture
def resource():
    return AudioResource(
        locator="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        stream_url="https://cdn.example.com/audio.webm",
    )


def make_voice_client() -> MagicMock:
    vc = MagicMock()
    vc.guild.id = GUILD_ID
    vc.is_connected.return_value = True
    vc.is_playing.return_value = False
    vc.is_paused.return_value = False
    return vc


@pytest.fixture
def ffmpeg_audio():
    """Patch FFmpeg source construction so no process is spawned."""
    with (
        patch.object(discord, "FFmpegPCMAudio") as mock_pcm,
        patch.object(discord, "PCMVolumeTransformer") as mock_volume,
    ):
        yield mock_pcm, mock_volume


@pytest.fixture
async def player(ffmpeg_config):
    return FFmpegAudioPlayer(GUILD_ID, ffmpeg_config)


def last_after(vc: MagicMock):
    return vc.play.call_args.kwargs["after"]


# =============================================================================
# FFmpegConfig Tests
# =============================================================================


class TestFFmpegConfig:
    def test_before_options_with_user_agent(self, ffmpeg_config):
        assert (
            ffmpeg_config.get_before_options()
            == "-reconnect 1 -user_agent 'Agent Smith/1.0'"
        )

    def test_before_options_with_offset(self, ffmpeg_config):
        assert ffmpeg_config.get_before_options(42.5).endswith("-ss 42.50")

    def test_from_settings(self):
        config = FFmpegConfig.from_settings(
            AudioSettings(default_volume=0.8), ResolverSettings(user_agent="UA")
        )

        assert config.default_volume == 0.8
        assert config.options == "-vn"
        assert config.user_agent == "UA"
        assert "-reconnect 1" in config.before_options

    def test_from_settings_without_resolver(self):
        assert FFmpegConfig.from_settings(AudioSettings()).user_agent == ""


# =============================================================================
# Playback Tests
# =============================================================================


class TestPlayback:
    """Starting, ending and replacing sources."""

    async def test_play_starts_source(self, player, resource, ffmpeg_audio):
        mock_pcm, mock_volume = ffmpeg_audio
        vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(vc))

        player.play(resource)

        mock_pcm.assert_called_once_with(
            resource.stream_url,
            before_options="-reconnect 1 -user_agent 'Agent Smith/1.0'",
            options="-vn",
        )
        mock_volume.assert_called_once_with(mock_pcm.return_value, volume=0.5)
        vc.play.assert_called_once()
        assert vc.play.call_args.args[0] is mock_volume.return_value
        assert player.is_active

    async def test_natural_end_fires_idle_once(self, player, resource, ffmpeg_audio):
        vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(vc))
        idle = MagicMock()
        player.once_idle(idle)
        player.play(resource)

        last_after(vc)(None)
        last_after(vc)(None)
        await drain()

        idle.assert_called_once_with()
        assert not player.is_active

    async def test_stale_after_ignored(self, player, resource, ffmpeg_audio):
        vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(vc))
        idle = MagicMock()
        player.once_idle(idle)
        player.play(resource)
        first_after = last_after(vc)
        player.play(resource)

        first_after(None)
        await drain()
        idle.assert_not_called()

        last_after(vc)(None)
        await drain()
        idle.assert_called_once()

    async def test_play_while_detached_waits_for_subscribe(
        self, player, resource, ffmpeg_audio
    ):
        mock_pcm, _ = ffmpeg_audio

        player.play(resource)
        assert player.is_active
        mock_pcm.assert_not_called()

        vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(vc))

        mock_pcm.assert_called_once()
        vc.play.assert_called_once()

    async def test_error_in_after_still_goes_idle(self, player, resource, ffmpeg_audio):
        vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(vc))
        idle = MagicMock()
        player.once_idle(idle)
        player.play(resource)

        last_after(vc)(RuntimeError("stream died"))
        await drain()

        idle.assert_called_once()


class TestControls:
    async def test_pause_and_unpause(self, player, resource, ffmpeg_audio):
        vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(vc))
        player.play(resource)
        vc.is_playing.return_value = True

        assert player.pause() is True
        assert player.pause() is False
        vc.pause.assert_called_once()
        assert player.is_paused

        vc.is_paused.return_value = True
        assert player.unpause() is True
        assert player.unpause() is False
        vc.resume.assert_called_once()

    async def test_pause_when_idle(self, player):
        assert player.pause() is False
        assert player.unpause() is False

    async def test_stop_fires_idle(self, player, resource, ffmpeg_audio):
        vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(vc))
        idle = MagicMock()
        player.once_idle(idle)
        player.play(resource)
        vc.is_playing.return_value = True
        stopped_after = last_after(vc)

        player.stop()
        stopped_after(None)
        await drain()

        vc.stop.assert_called_once()
        idle.assert_called_once()
        assert not player.is_active

    async def test_stop_while_detached_fires_idle(self, player, resource):
        idle = MagicMock()
        player.once_idle(idle)
        player.play(resource)

        player.stop()
        await drain()

        idle.assert_called_once()

    async def test_cancel_idle(self, player, resource):
        idle = MagicMock()
        player.once_idle(idle)
        player.cancel_idle()

        player.stop()
        await drain()

        idle.assert_not_called()


# =============================================================================
# Voice Session Tests
# =============================================================================


class TestVoiceSession:
    async def test_subscribe_rejects_foreign_handle(self, player):
        with pytest.raises(TypeError):
            player.subscribe(FakeHandle(GUILD_ID, 1))

    async def test_detach_does_not_fire_idle(self, player, resource, ffmpeg_audio):
        vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(vc))
        idle = MagicMock()
        player.once_idle(idle)
        player.play(resource)
        vc.is_playing.return_value = True

        player.detach()
        last_after(vc)(None)
        await drain()

        vc.stop.assert_called_once()
        idle.assert_not_called()
        assert player.is_active
        assert not player.is_subscribed

    async def test_resubscribe_resumes_at_position(self, player, resource, ffmpeg_audio):
        mock_pcm, _ = ffmpeg_audio
        player.subscribe(DiscordVoiceHandle(make_voice_client()))
        player.play(resource)
        player.detach()
        player._elapsed_base = 42.0

        new_vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(new_vc))

        assert mock_pcm.call_args.kwargs["before_options"].endswith("-ss 42.00")
        new_vc.play.assert_called_once()

    async def test_resubscribe_keeps_pause(self, player, resource, ffmpeg_audio):
        vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(vc))
        player.play(resource)
        vc.is_playing.return_value = True
        player.pause()
        player.detach()

        new_vc = make_voice_client()
        player.subscribe(DiscordVoiceHandle(new_vc))

        new_vc.pause.assert_called_once()
        assert player.is_paused

    async def test_disconnected_client_raises(self, player, resource, ffmpeg_audio):
        vc = make_voice_client()
        vc.is_connected.return_value = False
        player.subscribe(DiscordVoiceHandle(vc))

        with pytest.raises(TransportError):
            player.play(resource)

    async def test_client_exception_becomes_transport_error(
        self, player, resource, ffmpeg_audio
    ):
        vc = make_voice_client()
        vc.play.side_effect = discord.ClientException("Already playing audio.")
        player.subscribe(DiscordVoiceHandle(vc))

        with pytest.raises(TransportError):
            player.play(resource)
