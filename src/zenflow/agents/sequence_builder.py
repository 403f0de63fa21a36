"""Convert generated sequence data into pose models."""

import json
import logging
import re
from dataclasses import replace

from ..errors import GenerationFailure
from ..models.pose import (
    DEFAULT_DIFFICULTY,
    DEFAULT_INTENSITY,
    MAX_INTENSITY,
    Difficulty,
    Pose,
    PoseCategory,
)
from ..models.sequence import GeneratedSequence
from ..utils.pose_utils import find_by_approximate_name

logger = logging.getLogger(__name__)


def parse_sequence_text(text: str | None) -> GeneratedSequence:
    """Parse the raw JSON text returned by the model.

    Raises:
        GenerationFailure: If the text is empty, not JSON, or lacks required fields
    """
    if not text:
        raise GenerationFailure("No response from AI")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GenerationFailure(f"AI response was not valid JSON: {e}") from e
    return build_sequence(data)


def build_sequence(data: dict) -> GeneratedSequence:
    """Convert AI output to a GeneratedSequence.

    Raises:
        GenerationFailure: If title, description or poses are missing
    """
    if not isinstance(data, dict):
        raise GenerationFailure("AI response must be a JSON object")

    missing = [key for key in ("title", "description", "poses") if key not in data]
    if missing:
        raise GenerationFailure(f"AI response missing fields: {', '.join(missing)}")

    poses_data = data["poses"]
    if not isinstance(poses_data, list):
        raise GenerationFailure("AI response 'poses' must be a list")

    poses = [_build_pose(pose_data, index) for index, pose_data in enumerate(poses_data)]

    return GeneratedSequence(
        title=str(data["title"]),
        description=str(data["description"]),
        poses=poses,
    )


def _build_pose(data: dict, index: int) -> Pose:
    if not isinstance(data, dict) or not data.get("name"):
        raise GenerationFailure(f"Pose {index + 1} has no name")

    name = str(data["name"])

    # Map category, tolerating case differences
    category = _lookup_enum(PoseCategory, data.get("category"))
    if category is None:
        logger.debug("Unknown category %r for %s, using Standing", data.get("category"), name)
        category = PoseCategory.STANDING

    difficulty = _lookup_enum(Difficulty, data.get("difficulty")) or DEFAULT_DIFFICULTY

    try:
        intensity = int(data.get("intensity", DEFAULT_INTENSITY))
    except (TypeError, ValueError):
        intensity = DEFAULT_INTENSITY
    intensity = min(max(intensity, 0), MAX_INTENSITY)

    return Pose(
        id=str(data.get("id") or _slugify(name)),
        name=name,
        category=category,
        difficulty=difficulty,
        intensity=intensity,
        duration=str(data.get("duration", "")),
        description=str(data.get("description", "")),
        benefits=str(data.get("benefits", "")),
        breathing_guidance=str(data.get("breathingGuidance", "")),
        image_prompt=data.get("imagePrompt") or None,
    )


def merge_with_catalog(pose: Pose) -> Pose:
    """Overlay catalog metadata onto a generated pose.

    A catalog match supplies the image, difficulty and intensity. Without a
    match the pose gets the default difficulty and intensity and no image,
    so it will be queued for image generation.
    """
    match = find_by_approximate_name(pose.name)
    if match is None:
        return replace(
            pose,
            image_url=None,
            difficulty=DEFAULT_DIFFICULTY,
            intensity=DEFAULT_INTENSITY,
        )
    return replace(
        pose,
        image_url=match.image_url,
        difficulty=match.difficulty,
        intensity=match.intensity,
    )


def _lookup_enum(enum_cls, value):
    if not isinstance(value, str):
        return None
    for member in enum_cls:
        if member.value.lower() == value.strip().lower():
            return member
    return None


def _slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")
