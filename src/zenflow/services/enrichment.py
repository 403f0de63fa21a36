"""Background image generation for poses without a catalog image."""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..canvas.state import SequenceCanvas
from ..clients.base import YogaAIClient
from ..errors import ZenFlowError
from ..models.sequence import SequenceItem

logger = logging.getLogger(__name__)


@dataclass
class EnrichmentReport:
    """Outcome counts for a batch of image requests."""

    requested: int = 0
    succeeded: int = 0
    failed: int = 0
    discarded: int = 0  # item was removed before the response arrived


class ImageEnricher:
    """Fills in missing pose images after a flow is replaced.

    One independent task is started per item that still needs an image.
    Results are applied by canvas id, never by position, because the user
    may reorder or remove items while requests are outstanding. A failure
    marks only its own item; there is no retry at this layer.
    """

    def __init__(self, client: YogaAIClient, canvas: SequenceCanvas):
        self.client = client
        self.canvas = canvas
        self._tasks: set[asyncio.Task] = set()
        self._report = EnrichmentReport()

    @property
    def pending(self) -> int:
        """Number of image requests still in flight."""
        return len(self._tasks)

    def schedule(self, items: Iterable[SequenceItem]) -> list[asyncio.Task]:
        """Start one image request per item that is still loading.

        Must be called from within a running event loop.
        """
        started = []
        for item in items:
            if not item.image_loading:
                continue
            task = asyncio.create_task(
                self._enrich_one(item.canvas_id, item.image_prompt),
                name=f"pose-image-{item.canvas_id}",
            )
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            started.append(task)

        self._report.requested += len(started)
        if started:
            logger.debug("Requested %d pose images", len(started))
        return started

    async def wait(self) -> EnrichmentReport:
        """Wait for every outstanding request and return the totals so far."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
        report = self._report
        self._report = EnrichmentReport()
        return report

    async def enrich(self, items: Iterable[SequenceItem]) -> EnrichmentReport:
        """Schedule requests for items and wait for all of them."""
        self.schedule(items)
        return await self.wait()

    async def _enrich_one(self, canvas_id: str, prompt: str) -> None:
        try:
            image_url = await self.client.generate_pose_image(prompt)
        except Exception as e:
            if isinstance(e, ZenFlowError):
                logger.warning("Image for %r failed: %s", prompt, e)
            else:
                logger.exception("Unexpected error drawing %r", prompt)
            if self.canvas.mark_image_failed(canvas_id):
                self._report.failed += 1
            else:
                self._report.discarded += 1
            return

        if self.canvas.update_item_image(canvas_id, image_url):
            self._report.succeeded += 1
        else:
            self._report.discarded += 1
