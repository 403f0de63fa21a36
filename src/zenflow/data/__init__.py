"""Pose catalog data."""

from .pose_library import CATEGORY_FILTERS, POSE_LIBRARY, filter_library, get_pose

__all__ = ["CATEGORY_FILTERS", "POSE_LIBRARY", "filter_library", "get_pose"]
