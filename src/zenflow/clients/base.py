"""Base protocol for the generative AI services."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol, TypeVar, runtime_checkable

from ..errors import ZenFlowError
from ..models.pose import Pose
from ..models.sequence import GeneratedSequence, PracticeGuidance

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class YogaAIClient(Protocol):
    """Protocol for the AI services the studio depends on."""

    async def generate_sequence(self, intent: str) -> GeneratedSequence:
        """Design a flow from free-text intent.

        Raises:
            GenerationFailure: On transport or parse failure
        """
        ...

    async def generate_pose_image(self, prompt: str) -> str:
        """Draw a pose and return an image reference.

        Raises:
            EnrichmentFailure: If this image could not be produced
        """
        ...

    async def generate_practice_audio(
        self, title: str, poses: Sequence[Pose]
    ) -> PracticeGuidance:
        """Write and voice a guided script covering every pose in order.

        Raises:
            SessionFailure: If either the script or the speech failed
        """
        ...


def status_code_of(error: BaseException) -> int | None:
    """Best-effort HTTP status of an exception."""
    status = getattr(error, "status_code", None)
    if status is None:
        status = getattr(error, "status", None)
    return status if isinstance(status, int) else None


def is_retryable(error: BaseException) -> bool:
    """Client errors (4xx) are not retried, except 429 rate limiting.

    zenflow errors raised inside the call (unusable output) are final too.
    """
    if isinstance(error, ZenFlowError):
        return False
    status = status_code_of(error)
    if status is not None and 400 <= status < 500 and status != 429:
        return False
    return True


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    max_retries: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    label: str = "API call",
) -> T:
    """Call fn until it succeeds, with exponential backoff.

    Args:
        fn: Zero-argument coroutine factory
        max_retries: Total attempts
        delay: Initial delay between attempts in seconds
        backoff: Multiplier applied to the delay after each failure
        label: Name used in log messages

    Returns:
        The first successful result

    Raises:
        The last error once attempts are exhausted, or a non-retryable
        error immediately
    """
    last_error: Exception | None = None

    for attempt in range(1, max_retries + 1):
        try:
            return await fn()
        except Exception as e:
            if not is_retryable(e):
                raise
            last_error = e
            logger.warning(
                "%s failed (attempt %d/%d): %s", label, attempt, max_retries, e
            )
            if attempt < max_retries:
                await asyncio.sleep(delay)
                delay *= backoff

    assert last_error is not None
    raise last_error
