"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from discord_jukebox.application.interfaces.audio_resolver import (
    AudioResolver,
    AudioResource,
    CatalogTranslator,
)
from discord_jukebox.application.interfaces.notification_sink import NotificationSink
from discord_jukebox.application.interfaces.voice_adapter import (
    AudioPlayer,
    VoiceAdapter,
    VoiceHandle,
)

__all__ = [
    "AudioResolver",
    "AudioResource",
    "CatalogTranslator",
    "AudioPlayer",
    "VoiceAdapter",
    "VoiceHandle",
    "NotificationSink",
]
