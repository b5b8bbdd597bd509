"""
Framework audio integration.

Wires playback events to audio playback.
"""

from vnframework.audio.controller import NarrativeAudioController, AudioBackend, SoundBank

__all__ = [
    "NarrativeAudioController",
    "AudioBackend",
    "SoundBank",
]
