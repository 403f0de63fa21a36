"""The sequence canvas: the ordered list of poses being built."""

import logging
from collections.abc import Callable, Collection, Iterable
from uuid import uuid4

from ..models.pose import Pose
from ..models.sequence import (
    DEFAULT_DESCRIPTION,
    DEFAULT_TITLE,
    SequenceItem,
    SequenceSnapshot,
)

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[SequenceSnapshot], None]


def new_canvas_id() -> str:
    """Generate a short random canvas id."""
    return uuid4().hex[:9]


class SequenceCanvas:
    """System of record for the flow being built.

    Items live in an arena keyed by canvas id; the order is a separate list
    of ids. Every method runs to completion without awaiting, so on a single
    event loop each mutation is atomic with respect to image callbacks.
    Each successful mutation publishes a new SequenceSnapshot.
    """

    def __init__(self, id_factory: Callable[[], str] = new_canvas_id):
        self._id_factory = id_factory
        self._items: dict[str, SequenceItem] = {}
        self._order: list[str] = []
        self._title = DEFAULT_TITLE
        self._description = DEFAULT_DESCRIPTION
        self._version = 0
        self._snapshot = SequenceSnapshot()
        self._listeners: list[SnapshotListener] = []

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, canvas_id: str) -> bool:
        return canvas_id in self._items

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    def snapshot(self) -> SequenceSnapshot:
        """Get the current snapshot."""
        return self._snapshot

    def get(self, canvas_id: str) -> SequenceItem | None:
        return self._items.get(canvas_id)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a listener for new snapshots.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def make_item(self, pose: Pose) -> SequenceItem:
        """Create an item for pose with a fresh canvas id (not yet placed)."""
        return SequenceItem.from_pose(pose, self._fresh_id())

    def make_items(self, poses: Iterable[Pose]) -> list[SequenceItem]:
        """Create items for a batch, with ids unique across the flow and the batch."""
        taken = set(self._items)
        items = []
        for pose in poses:
            canvas_id = self._fresh_id(taken)
            taken.add(canvas_id)
            items.append(SequenceItem.from_pose(pose, canvas_id))
        return items

    def append(self, pose: Pose) -> SequenceItem:
        """Add a pose to the end of the flow."""
        item = self.make_item(pose)
        self._items[item.canvas_id] = item
        self._order.append(item.canvas_id)
        self._publish()
        return item

    def remove(self, canvas_id: str) -> bool:
        """Remove one item. An unknown id is a no-op."""
        if canvas_id not in self._items:
            return False
        del self._items[canvas_id]
        self._order.remove(canvas_id)
        self._publish()
        return True

    def reorder(self, from_id: str, to_id: str) -> bool:
        """Move from_id to the position currently held by to_id.

        Other items keep their relative order. No-op if either id is
        unknown or both are the same.
        """
        if from_id == to_id or from_id not in self._items or to_id not in self._items:
            return False
        old_index = self._order.index(from_id)
        new_index = self._order.index(to_id)
        self._order.insert(new_index, self._order.pop(old_index))
        self._publish()
        return True

    def replace_all(
        self,
        items: Iterable[SequenceItem],
        title: str,
        description: str,
    ) -> SequenceSnapshot:
        """Swap the whole flow and its metadata in one step.

        Raises:
            ValueError: If two items share a canvas id
        """
        items = list(items)
        ids = [item.canvas_id for item in items]
        if len(set(ids)) != len(ids):
            raise ValueError("Canvas ids must be unique")

        self._items = {item.canvas_id: item for item in items}
        self._order = ids
        self._title = title
        self._description = description
        logger.debug("Replaced flow with %d poses: %s", len(items), title)
        return self._publish()

    def clear(self) -> None:
        """Empty the flow and restore the placeholder metadata."""
        self._items = {}
        self._order = []
        self._title = DEFAULT_TITLE
        self._description = DEFAULT_DESCRIPTION
        self._publish()

    def update_item_image(self, canvas_id: str, image_url: str) -> bool:
        """Attach a resolved image. Returns False if the item is gone."""
        item = self._items.get(canvas_id)
        if item is None:
            logger.debug("Discarding image for removed item %s", canvas_id)
            return False
        self._items[canvas_id] = item.with_image(image_url)
        self._publish()
        return True

    def mark_image_failed(self, canvas_id: str) -> bool:
        """Record a failed image request. Returns False if the item is gone."""
        item = self._items.get(canvas_id)
        if item is None:
            return False
        self._items[canvas_id] = item.with_image_error()
        self._publish()
        return True

    def _fresh_id(self, taken: Collection[str] | None = None) -> str:
        if taken is None:
            taken = self._items
        canvas_id = self._id_factory()
        while canvas_id in taken:
            canvas_id = self._id_factory()
        return canvas_id

    def _publish(self) -> SequenceSnapshot:
        self._version += 1
        self._snapshot = SequenceSnapshot(
            items=tuple(self._items[canvas_id] for canvas_id in self._order),
            title=self._title,
            description=self._description,
            version=self._version,
        )
        for listener in list(self._listeners):
            listener(self._snapshot)
        return self._snapshot
