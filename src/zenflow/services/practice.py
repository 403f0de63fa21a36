"""Guided practice session: narration request and playback lifecycle."""

import asyncio
import logging
from enum import Enum

from ..audio.player import AudioPlayer
from ..clients.base import YogaAIClient
from ..errors import SessionFailure
from ..models.sequence import SequenceSnapshot

logger = logging.getLogger(__name__)

SESSION_ERROR = "Audio session could not be established."


class SessionState(Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    PLAYING = "playing"


class PracticeSession:
    """Single-flight narration for the current flow.

    IDLE -> REQUESTING -> PLAYING -> IDLE, plus PLAYING -> IDLE on stop().
    Only one session can be requesting or playing at a time.
    """

    def __init__(self, client: YogaAIClient, player: AudioPlayer):
        self.client = client
        self.player = player
        self.state = SessionState.IDLE
        self.script: str | None = None
        self.error: str | None = None
        self._session_id = 0

    @property
    def is_idle(self) -> bool:
        return self.state == SessionState.IDLE

    @property
    def is_playing(self) -> bool:
        return self.state == SessionState.PLAYING

    @property
    def is_requesting(self) -> bool:
        return self.state == SessionState.REQUESTING

    async def start(self, snapshot: SequenceSnapshot) -> bool:
        """Narrate the snapshot and play it through to the end.

        Returns False without changing state when the flow is empty or a
        session is already requesting or playing. Returns True once the
        session has run (including when it failed or was stopped).
        """
        if snapshot.is_empty:
            logger.debug("Not starting practice: flow is empty")
            return False
        if not self.is_idle:
            logger.debug("Not starting practice: session is %s", self.state.value)
            return False

        self._session_id += 1
        session_id = self._session_id
        self.state = SessionState.REQUESTING
        self.error = None

        poses = [item.pose for item in snapshot.items]
        try:
            guidance = await self.client.generate_practice_audio(snapshot.title, poses)
        except asyncio.CancelledError:
            self.state = SessionState.IDLE
            raise
        except Exception as e:
            if isinstance(e, SessionFailure):
                logger.warning("Practice session failed: %s", e)
            else:
                logger.exception("Unexpected error preparing practice session")
            self.error = SESSION_ERROR
            self.script = None
            self.state = SessionState.IDLE
            return True

        self.script = guidance.script
        self.state = SessionState.PLAYING
        logger.info("Practice started: %s (%d poses)", snapshot.title, len(poses))

        try:
            await self.player.play(guidance.audio)
        finally:
            # stop() may already have ended this session
            if self._session_id == session_id and self.is_playing:
                self.state = SessionState.IDLE
                self.script = None
                logger.info("Practice finished")

        return True

    def stop(self) -> bool:
        """Halt playback and discard the script. Only valid while playing."""
        if not self.is_playing:
            return False
        self.player.stop()
        self.state = SessionState.IDLE
        self.script = None
        logger.info("Practice stopped")
        return True

    async def toggle(self, snapshot: SequenceSnapshot) -> bool:
        """Stop when playing, start when idle, ignore while requesting."""
        if self.is_playing:
            return self.stop()
        if self.is_requesting:
            return False
        return await self.start(snapshot)

    def clear_script(self) -> None:
        """Drop displayed narration text without touching playback."""
        self.script = None
