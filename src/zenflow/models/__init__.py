"""Data models for zenflow."""

from .pose import Difficulty, Pose, PoseCategory
from .sequence import GeneratedSequence, PracticeGuidance, SequenceItem, SequenceSnapshot

__all__ = [
    "Difficulty",
    "GeneratedSequence",
    "Pose",
    "PoseCategory",
    "PracticeGuidance",
    "SequenceItem",
    "SequenceSnapshot",
]
