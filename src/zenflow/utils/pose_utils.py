"""Utilities for pose name normalization and catalog matching."""

import re

from ..data.pose_library import POSE_LIBRARY
from ..models.pose import Pose


def normalize_pose_name(name: str) -> str:
    """Normalize a pose name for comparison.

    Converts to lowercase, strips, collapses whitespace and unifies
    typographic apostrophes.
    """
    normalized = name.lower().strip()
    normalized = normalized.replace("’", "'")
    return re.sub(r"\s+", " ", normalized)


def find_by_approximate_name(
    name: str,
    poses: tuple[Pose, ...] | list[Pose] | None = None,
) -> Pose | None:
    """Find the first catalog pose whose name contains, or is contained in, name.

    Matching is case-insensitive and bidirectional, and the first pose in
    catalog order wins. This is knowingly loose: "Cow" matches
    "Cat-Cow Stretch".

    Args:
        name: Pose name to look up
        poses: Poses to search (defaults to POSE_LIBRARY)

    Returns:
        The first matching Pose or None
    """
    if poses is None:
        poses = POSE_LIBRARY

    wanted = normalize_pose_name(name)
    if not wanted:
        return None

    for pose in poses:
        candidate = normalize_pose_name(pose.name)
        if wanted in candidate or candidate in wanted:
            return pose

    return None
