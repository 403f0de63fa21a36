"""Pose definitions and metadata."""

from dataclasses import dataclass
from enum import Enum


class PoseCategory(str, Enum):
    """Body orientation families used to group poses."""

    STANDING = "Standing"
    SEATED = "Seated"
    KNEELING = "Kneeling"
    INVERSION = "Inversion"
    BALANCE = "Balance"
    SUPINE = "Supine"
    PRONE = "Prone"


class Difficulty(str, Enum):
    """Practitioner level a pose is suited to."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


DEFAULT_DIFFICULTY = Difficulty.INTERMEDIATE
DEFAULT_INTENSITY = 5
MAX_INTENSITY = 10


@dataclass(frozen=True)
class Pose:
    """A yoga pose with its teaching metadata."""

    id: str
    name: str
    category: PoseCategory
    difficulty: Difficulty
    intensity: int  # 0-10
    duration: str  # display string, e.g. "45s" or "2 mins"
    description: str
    benefits: str
    breathing_guidance: str
    image_url: str | None = None
    image_prompt: str | None = None

    def __post_init__(self):
        if not 0 <= self.intensity <= MAX_INTENSITY:
            raise ValueError(f"Intensity must be 0-{MAX_INTENSITY}, got {self.intensity}")

    def to_dict(self) -> dict:
        """Convert to the camelCase shape used by the AI services."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "difficulty": self.difficulty.value,
            "intensity": self.intensity,
            "duration": self.duration,
            "description": self.description,
            "benefits": self.benefits,
            "breathingGuidance": self.breathing_guidance,
            "imageUrl": self.image_url,
            "imagePrompt": self.image_prompt,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Pose":
        """Create from dictionary.

        Missing difficulty and intensity fall back to the defaults; an
        unknown category or difficulty raises ValueError.
        """
        return cls(
            id=data["id"],
            name=data["name"],
            category=PoseCategory(data["category"]),
            difficulty=Difficulty(data.get("difficulty") or DEFAULT_DIFFICULTY.value),
            intensity=int(data.get("intensity", DEFAULT_INTENSITY)),
            duration=data.get("duration", ""),
            description=data.get("description", ""),
            benefits=data.get("benefits", ""),
            breathing_guidance=data.get("breathingGuidance", ""),
            image_url=data.get("imageUrl"),
            image_prompt=data.get("imagePrompt"),
        )
