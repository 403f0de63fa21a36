"""OpenAI-backed implementation of the yoga AI services.

Async-first wrapper around AsyncOpenAI: chat completions for the flow and
the narration script, the Images API for pose drawings, and the speech
endpoint for narration audio. Every call goes through with_retry; failures
are translated into zenflow's error types.
"""

import base64
import logging
from collections.abc import Sequence

from openai import AsyncOpenAI, OpenAIError

from ...agents.output_specs import sequence_response_format
from ...agents.prompts import (
    SEQUENCE_SYSTEM,
    format_image_prompt,
    format_narration_prompt,
    format_sequence_prompt,
)
from ...agents.sequence_builder import parse_sequence_text
from ...config import Settings
from ...errors import EnrichmentFailure, GenerationFailure, SessionFailure
from ...models.pose import Pose, PoseCategory
from ...models.sequence import GeneratedSequence, PracticeGuidance
from ..base import with_retry

logger = logging.getLogger(__name__)

# Narration is requested as raw PCM: 24 kHz, 16-bit, mono
NARRATION_FORMAT = "pcm"


class OpenAIYogaClient:
    """Generates flows, pose images and narration with the OpenAI API.

    Args:
        settings: Model names and retry policy
        client: AsyncOpenAI instance (created from the environment if omitted)
    """

    def __init__(self, settings: Settings | None = None, client: AsyncOpenAI | None = None):
        self.settings = settings or Settings()
        self._client = client if client is not None else AsyncOpenAI()

    async def generate_sequence(self, intent: str) -> GeneratedSequence:
        """Design a flow from free-text intent.

        Raises:
            GenerationFailure: On transport error, empty or unparseable output
        """
        prompt = format_sequence_prompt(intent, [c.value for c in PoseCategory])

        async def call() -> GeneratedSequence:
            response = await self._client.chat.completions.create(
                model=self.settings.text_model,
                messages=[
                    {"role": "system", "content": SEQUENCE_SYSTEM},
                    {"role": "user", "content": prompt},
                ],
                response_format=sequence_response_format,
            )
            text = response.choices[0].message.content if response.choices else None
            return parse_sequence_text(text)

        try:
            sequence = await self._retry(call, "Sequence generation")
        except GenerationFailure:
            raise
        except OpenAIError as e:
            raise GenerationFailure(f"Sequence generation failed: {e}") from e

        logger.info("Generated flow %r with %d poses", sequence.title, len(sequence.poses))
        return sequence

    async def generate_pose_image(self, prompt: str) -> str:
        """Draw a pose and return it as a data URL (or hosted URL).

        Raises:
            EnrichmentFailure: If the image could not be produced
        """

        async def call() -> str:
            response = await self._client.images.generate(
                model=self.settings.image_model,
                prompt=format_image_prompt(prompt),
                n=1,
                size="1024x1024",
            )
            if not response.data:
                raise EnrichmentFailure("API returned empty data list")
            image = response.data[0]
            if image.b64_json:
                return f"data:image/png;base64,{image.b64_json}"
            if image.url:
                return image.url
            raise EnrichmentFailure("API returned no image payload")

        try:
            return await self._retry(call, "Pose image")
        except EnrichmentFailure:
            raise
        except OpenAIError as e:
            raise EnrichmentFailure(f"Pose image failed for {prompt!r}: {e}") from e

    async def generate_practice_audio(
        self, title: str, poses: Sequence[Pose]
    ) -> PracticeGuidance:
        """Write a guided script for the whole flow, then voice it.

        Raises:
            SessionFailure: If either step fails; nothing partial is returned
        """
        try:
            script = await self._retry(
                lambda: self._write_script(title, poses), "Practice script"
            )
            audio = await self._retry(lambda: self._speak(script), "Narration audio")
        except SessionFailure:
            raise
        except OpenAIError as e:
            raise SessionFailure(f"Audio session could not be established: {e}") from e

        logger.info("Narration ready: %d characters, %d audio bytes", len(script), len(audio))
        return PracticeGuidance(script=script, audio=audio)

    async def _write_script(self, title: str, poses: Sequence[Pose]) -> str:
        response = await self._client.chat.completions.create(
            model=self.settings.text_model,
            messages=[{"role": "user", "content": format_narration_prompt(title, poses)}],
        )
        text = response.choices[0].message.content if response.choices else None
        if not text:
            raise SessionFailure("Failed to generate practice script text")
        return text

    async def _speak(self, script: str) -> bytes:
        response = await self._client.audio.speech.create(
            model=self.settings.tts_model,
            voice=self.settings.voice,
            input=script,
            response_format=NARRATION_FORMAT,
        )
        audio = await response.aread()
        if not audio:
            raise SessionFailure("TTS model failed to generate audio")
        return audio

    async def _retry(self, fn, label: str):
        return await with_retry(
            fn,
            max_retries=self.settings.max_retries,
            delay=self.settings.retry_delay,
            label=label,
        )


def decode_data_url(image_url: str) -> bytes | None:
    """Decode a base64 data URL produced by generate_pose_image."""
    prefix, sep, payload = image_url.partition(";base64,")
    if not sep or not prefix.startswith("data:"):
        return None
    return base64.b64decode(payload)
