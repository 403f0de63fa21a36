"""Sequence (flow) data models."""

from dataclasses import dataclass, field, replace

from .pose import Pose

DEFAULT_TITLE = "ZenFlow Personalized"
DEFAULT_DESCRIPTION = "Enter your physical focus to begin."


@dataclass(frozen=True)
class SequenceItem:
    """A pose placed on the canvas.

    The canvas_id is local to the canvas and independent of the pose id,
    so the same pose may appear more than once.
    """

    canvas_id: str
    pose: Pose
    image_url: str | None = None
    image_loading: bool = False
    image_error: bool = False

    @classmethod
    def from_pose(cls, pose: Pose, canvas_id: str) -> "SequenceItem":
        """Create an item, marking it as loading when the pose has no image."""
        return cls(
            canvas_id=canvas_id,
            pose=pose,
            image_url=pose.image_url,
            image_loading=pose.image_url is None,
        )

    @property
    def name(self) -> str:
        return self.pose.name

    @property
    def image_prompt(self) -> str:
        """Prompt for image generation, falling back to the pose name."""
        return self.pose.image_prompt or self.pose.name

    def with_image(self, image_url: str) -> "SequenceItem":
        return replace(self, image_url=image_url, image_loading=False, image_error=False)

    def with_image_error(self) -> "SequenceItem":
        return replace(self, image_loading=False, image_error=True)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        data = self.pose.to_dict()
        data.update(
            {
                "canvasId": self.canvas_id,
                "imageUrl": self.image_url,
                "imageLoading": self.image_loading,
                "imageError": self.image_error,
            }
        )
        return data


@dataclass(frozen=True)
class SequenceSnapshot:
    """An immutable view of the canvas at one point in time."""

    items: tuple[SequenceItem, ...] = ()
    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    version: int = 0

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def canvas_ids(self) -> list[str]:
        return [item.canvas_id for item in self.items]

    def get(self, canvas_id: str) -> SequenceItem | None:
        """Look up an item by canvas id."""
        for item in self.items:
            if item.canvas_id == canvas_id:
                return item
        return None

    def index_of(self, canvas_id: str) -> int | None:
        for index, item in enumerate(self.items):
            if item.canvas_id == canvas_id:
                return index
        return None

    def pending_images(self) -> list[SequenceItem]:
        """Items still waiting for an image."""
        return [item for item in self.items if item.image_loading]

    def get_summary(self) -> str:
        """Generate a plain-text summary of the flow."""
        summary = f"{self.title}\n"
        summary += f"{self.description}\n\n"

        for index, item in enumerate(self.items, start=1):
            pose = item.pose
            summary += f"  {index}. {pose.name} ({pose.duration})"
            summary += f" - {pose.category.value}, {pose.difficulty.value}\n"

        return summary


@dataclass
class GeneratedSequence:
    """A sequence returned by the text-generation service."""

    title: str
    description: str
    poses: list[Pose] = field(default_factory=list)


@dataclass
class PracticeGuidance:
    """Narration for a whole practice session.

    audio holds raw 16-bit mono PCM at 24 kHz.
    """

    script: str
    audio: bytes
