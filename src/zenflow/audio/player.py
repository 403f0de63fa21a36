"""Narration playback."""

import asyncio
import logging
import wave
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

SAMPLE_RATE = 24000
SAMPLE_WIDTH = 2  # bytes, 16-bit
CHANNELS = 1


def pcm_duration(audio: bytes) -> float:
    """Length in seconds of 24 kHz 16-bit mono PCM."""
    return len(audio) / (SAMPLE_RATE * SAMPLE_WIDTH * CHANNELS)


def write_wav(audio: bytes, path: Path) -> Path:
    """Wrap raw narration PCM in a WAV container."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(CHANNELS)
        wav.setsampwidth(SAMPLE_WIDTH)
        wav.setframerate(SAMPLE_RATE)
        wav.writeframes(audio)
    return path


@runtime_checkable
class AudioPlayer(Protocol):
    """Plays narration audio."""

    async def play(self, audio: bytes) -> None:
        """Play audio, returning when it finishes or stop() is called."""
        ...

    def stop(self) -> None:
        """Halt playback immediately."""
        ...


class TimedPlayer:
    """Holds playback open for the length of the clip.

    Used where no audio device is available: the narration is written to a
    WAV file (when output_path is set) and the session stays in the playing
    state for as long as the clip would take.
    """

    def __init__(self, output_path: Path | None = None, speed: float = 1.0):
        self.output_path = output_path
        self.speed = speed
        self._stopped = asyncio.Event()

    async def play(self, audio: bytes) -> None:
        self._stopped = asyncio.Event()
        if self.output_path is not None:
            await asyncio.to_thread(write_wav, audio, self.output_path)
            logger.info("Narration written to %s", self.output_path)

        duration = pcm_duration(audio) / self.speed
        try:
            await asyncio.wait_for(self._stopped.wait(), timeout=duration)
        except asyncio.TimeoutError:
            pass

    def stop(self) -> None:
        self._stopped.set()


class SoundDevicePlayer:
    """Plays narration through the default output device.

    Requires the optional sounddevice package (pip install zenflow[audio]).
    """

    def __init__(self):
        self._stopped = False

    async def play(self, audio: bytes) -> None:
        import sounddevice as sd

        self._stopped = False
        stream = sd.RawOutputStream(
            samplerate=SAMPLE_RATE, channels=CHANNELS, dtype="int16"
        )
        chunk = SAMPLE_RATE * SAMPLE_WIDTH // 10  # 100 ms
        stream.start()
        try:
            for offset in range(0, len(audio), chunk):
                if self._stopped:
                    break
                # write blocks until the device accepts the chunk
                await asyncio.to_thread(stream.write, audio[offset:offset + chunk])
        finally:
            stream.stop()
            stream.close()

    def stop(self) -> None:
        self._stopped = True
