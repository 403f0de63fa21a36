"""Structured output definitions for the sequence generator."""

from ..models.pose import Difficulty, PoseCategory

REQUIRED_POSE_FIELDS = [
    "id",
    "name",
    "category",
    "duration",
    "description",
    "benefits",
    "breathingGuidance",
]

pose_schema = {
    "type": "object",
    "properties": {
        "id": {"type": "string", "description": "A unique slug for the pose"},
        "name": {"type": "string"},
        "category": {"type": "string", "enum": [c.value for c in PoseCategory]},
        "difficulty": {"type": "string", "enum": [d.value for d in Difficulty]},
        "intensity": {"type": "integer", "minimum": 0, "maximum": 10},
        "duration": {"type": "string"},
        "description": {"type": "string"},
        "benefits": {"type": "string"},
        "breathingGuidance": {"type": "string"},
        "imagePrompt": {"type": "string"},
    },
    "required": REQUIRED_POSE_FIELDS,
}

sequence_schema = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "poses": {"type": "array", "items": pose_schema},
    },
    "required": ["title", "description", "poses"],
}

# response_format for chat completions
sequence_response_format = {
    "type": "json_schema",
    "json_schema": {
        "name": "yoga_sequence",
        "schema": sequence_schema,
        "strict": False,
    },
}
