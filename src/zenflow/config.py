"""Runtime configuration loaded from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError

# Default output directory for narration audio
OUTPUT_DIR = Path.cwd() / "output"


@dataclass(frozen=True)
class Settings:
    """Model names, retry policy and output locations.

    The OpenAI API key itself is read by the SDK from OPENAI_API_KEY.
    """

    text_model: str = "gpt-4o-mini"
    image_model: str = "gpt-image-1"
    tts_model: str = "gpt-4o-mini-tts"
    voice: str = "alloy"
    max_retries: int = 3
    retry_delay: float = 1.0
    output_dir: Path = OUTPUT_DIR

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from ZENFLOW_* environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigError: If a numeric value cannot be parsed or is out of range
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        max_retries = _parse_number(env, "ZENFLOW_MAX_RETRIES", int, defaults.max_retries)
        if max_retries < 1:
            raise ConfigError("ZENFLOW_MAX_RETRIES must be at least 1")

        retry_delay = _parse_number(env, "ZENFLOW_RETRY_DELAY", float, defaults.retry_delay)
        if retry_delay < 0:
            raise ConfigError("ZENFLOW_RETRY_DELAY must not be negative")

        output_dir = env.get("ZENFLOW_OUTPUT_DIR")

        return cls(
            text_model=env.get("ZENFLOW_TEXT_MODEL", defaults.text_model),
            image_model=env.get("ZENFLOW_IMAGE_MODEL", defaults.image_model),
            tts_model=env.get("ZENFLOW_TTS_MODEL", defaults.tts_model),
            voice=env.get("ZENFLOW_VOICE", defaults.voice),
            max_retries=max_retries,
            retry_delay=retry_delay,
            output_dir=Path(output_dir) if output_dir else defaults.output_dir,
        )


def _parse_number(env, key: str, kind: type, default):
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be a {kind.__name__}, got {raw!r}") from e
