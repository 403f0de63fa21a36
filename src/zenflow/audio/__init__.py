"""Narration playback."""

from .player import AudioPlayer, SoundDevicePlayer, TimedPlayer, pcm_duration, write_wav

__all__ = ["AudioPlayer", "SoundDevicePlayer", "TimedPlayer", "pcm_duration", "write_wav"]
