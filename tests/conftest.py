import pytest

from discord_jukebox.application.services.playback_driver import PlaybackDriver
from discord_jukebox.application.services.residency_monitor import ResidencyMonitor
from discord_jukebox.domain.music.entities import GuildQueue
from discord_jukebox.infrastructure.state.queue_registry import InMemoryQueueRegistry
from fakes import GUILD_ID, FakePlayer, FakeResolver, FakeSink, FakeVoiceAdapter, make_song

# ============================================================================
# Port Fakes
# ============================================================================


@pytest.fixture
def registry():
    """Create an empty in-memory queue registry."""
    return InMemoryQueueRegistry()


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def voice_adapter():
    return FakeVoiceAdapter()


@pytest.fixture
def sink():
    return FakeSink()


# ============================================================================
# Application Services
# ============================================================================


@pytest.fixture
def driver(registry, resolver, voice_adapter):
    """Create a playback driver wired to the fakes."""
    return PlaybackDriver(
        registry=registry,
        audio_resolver=resolver,
        voice_adapter=voice_adapter,
        max_consecutive_failures=3,
    )


@pytest.fixture
def monitor(registry, voice_adapter, driver):
    return ResidencyMonitor(registry=registry, voice_adapter=voice_adapter, driver=driver)


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest.fixture
def sample_song():
    """Create a sample song for testing."""
    return make_song("sample", duration="3:33")


@pytest.fixture
def queue(sink):
    """Create an unregistered guild queue with a fake player."""
    return GuildQueue(guild_id=GUILD_ID, player=FakePlayer(GUILD_ID), notify_sink=sink)
