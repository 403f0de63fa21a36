"""Prompt templates for flow generation and narration."""

from collections.abc import Sequence

from ..models.pose import Pose

SEQUENCE_SYSTEM = """You are a yoga master. Reply only with JSON matching the requested schema."""

SEQUENCE_PROMPT = """Create a sequence based on: "{intent}".
Return a professional sequence of 5-10 poses. For each pose, choose a realistic name, duration, and instructions.
Be creative but ensure the flow is logical (warmup -> peak -> cooldown).
Use one of these categories for every pose: {categories}.
Rate difficulty as Beginner, Intermediate or Advanced and intensity from 0 (restful) to 10 (peak effort).
Include a short imagePrompt describing how the pose looks, for an illustrator."""

NARRATION_PROMPT = """You are a professional yoga instructor. Write a cohesive, soothing guided script for a session titled "{title}".
Do not include any metadata, speaker labels, or formatting like asterisks. Just the spoken words.
Include these poses in order:
{pose_lines}

The script should start with a gentle welcome and end with "Namaste"."""

IMAGE_PROMPT = """A calm, instructional illustration of a person practicing yoga: {subject}. Clean background, full body visible."""


def format_sequence_prompt(intent: str, categories: Sequence[str]) -> str:
    """Build the user prompt for sequence generation."""
    return SEQUENCE_PROMPT.format(intent=intent.strip(), categories=", ".join(categories))


def format_pose_lines(poses: Sequence[Pose]) -> str:
    """Number each pose with its duration, breathing cue and focus."""
    return "\n".join(
        f"{i}. {p.name} ({p.duration}). Breathing: {p.breathing_guidance}. Focus: {p.description}"
        for i, p in enumerate(poses, start=1)
    )


def format_narration_prompt(title: str, poses: Sequence[Pose]) -> str:
    """Build the prompt for the guided practice script."""
    return NARRATION_PROMPT.format(title=title, pose_lines=format_pose_lines(poses))


def format_image_prompt(subject: str) -> str:
    return IMAGE_PROMPT.format(subject=subject)
