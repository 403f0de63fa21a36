"""Anatomical safety rules for pose ordering."""

from dataclasses import dataclass

from ..models.pose import Difficulty, Pose, PoseCategory
from ..models.sequence import SequenceItem, SequenceSnapshot

# Intensity above this is too much for an opening pose
MAX_OPENING_INTENSITY = 7

# Advanced poses need at least this many poses before them
WARMUP_POSES = 2

START_TOO_INTENSE = (
    "Safety Alert: This advanced pose is high-intensity for a start. Consider "
    "beginning with a gentle warmup like Child's Pose to prevent injury."
)
INVERSION_NEEDS_WARMUP = (
    "Anatomical Warning: Starting with an inversion requires significant warmup. "
    "Start with grounding poses first."
)
NOT_WARM_ENOUGH = "Caution: Your body may not be warm enough for this peak pose yet."


@dataclass(frozen=True)
class SafetyCheck:
    """Safety result for one position in a flow."""

    position: int
    item: SequenceItem
    warning: str | None

    @property
    def is_safe(self) -> bool:
        return self.warning is None


def check_anatomical_safety(pose: Pose, index: int) -> str | None:
    """Return a warning for placing pose at index, or None.

    Rules are checked in order and the first match wins.
    """
    if index == 0:
        if pose.difficulty == Difficulty.ADVANCED or pose.intensity > MAX_OPENING_INTENSITY:
            return START_TOO_INTENSE
        if pose.category == PoseCategory.INVERSION:
            return INVERSION_NEEDS_WARMUP
    if index < WARMUP_POSES and pose.difficulty == Difficulty.ADVANCED:
        return NOT_WARM_ENOUGH
    return None


def safety_report(snapshot: SequenceSnapshot) -> list[SafetyCheck]:
    """Evaluate every position of a snapshot in its current order."""
    return [
        SafetyCheck(
            position=index,
            item=item,
            warning=check_anatomical_safety(item.pose, index),
        )
        for index, item in enumerate(snapshot.items)
    ]


def warnings_for(snapshot: SequenceSnapshot) -> dict[str, str]:
    """Map canvas id to warning for every flagged position."""
    return {
        check.item.canvas_id: check.warning
        for check in safety_report(snapshot)
        if check.warning is not None
    }
