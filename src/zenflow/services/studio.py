"""Application controller tying user actions to the flow components."""

import logging
from enum import Enum

from ..agents.sequence_builder import merge_with_catalog
from ..audio.player import AudioPlayer
from ..canvas.state import SequenceCanvas
from ..clients.base import YogaAIClient
from ..errors import GenerationFailure
from ..models.pose import Pose
from ..models.sequence import SequenceSnapshot
from .enrichment import ImageEnricher
from .practice import PracticeSession
from .safety import SafetyCheck, safety_report

logger = logging.getLogger(__name__)

GENERATION_ERROR = "Connection timeout or AI error. Please try again."


class AppStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


class FlowStudio:
    """Owns the canvas and routes every user action through it.

    Attributes:
        canvas: The flow being built
        enricher: Background image requests for generated poses
        session: Guided practice lifecycle
        status: State of the most recent AI generation
        error: User-visible message for the last failure, if any
        intent: Free-text intent kept for retry after a failed generation
    """

    def __init__(
        self,
        client: YogaAIClient,
        player: AudioPlayer,
        canvas: SequenceCanvas | None = None,
    ):
        self.client = client
        self.canvas = canvas or SequenceCanvas()
        self.enricher = ImageEnricher(client, self.canvas)
        self.session = PracticeSession(client, player)
        self.status = AppStatus.IDLE
        self.error: str | None = None
        self.intent = ""

    def snapshot(self) -> SequenceSnapshot:
        return self.canvas.snapshot()

    def safety(self) -> list[SafetyCheck]:
        """Safety checks for the flow in its current order."""
        return safety_report(self.canvas.snapshot())

    def add_pose(self, pose: Pose) -> str:
        """Append a catalog pose and return its canvas id."""
        return self.canvas.append(pose).canvas_id

    def remove(self, canvas_id: str) -> bool:
        return self.canvas.remove(canvas_id)

    def move(self, from_id: str, to_id: str) -> bool:
        return self.canvas.reorder(from_id, to_id)

    def clear(self) -> None:
        """Empty the flow and discard any displayed narration."""
        self.canvas.clear()
        self.session.clear_script()

    async def generate(self, intent: str | None = None) -> SequenceSnapshot | None:
        """Replace the flow with an AI-designed one and start drawing images.

        Blank intent is ignored. On failure the flow is left unchanged, the
        error message is set and the intent is kept for a retry.

        Returns:
            The new snapshot, or None if nothing was generated
        """
        if intent is not None:
            self.intent = intent
        if not self.intent.strip():
            return None

        self.status = AppStatus.LOADING
        self.error = None
        self.session.clear_script()

        try:
            result = await self.client.generate_sequence(self.intent)
        except Exception as e:
            if isinstance(e, GenerationFailure):
                logger.warning("Flow generation failed: %s", e)
            else:
                logger.exception("Unexpected error generating flow")
            self.error = GENERATION_ERROR
            self.status = AppStatus.ERROR
            return None

        items = self.canvas.make_items(merge_with_catalog(pose) for pose in result.poses)
        snapshot = self.canvas.replace_all(items, result.title, result.description)
        self.status = AppStatus.IDLE
        self.intent = ""

        self.enricher.schedule(snapshot.items)
        return snapshot

    async def toggle_practice(self) -> bool:
        """Start narration for the current flow, or stop it if playing."""
        if self.session.is_playing:
            return self.session.stop()
        if not self.session.is_idle:
            return False
        self.error = None
        started = await self.session.start(self.canvas.snapshot())
        if self.session.error:
            self.error = self.session.error
        return started
