"""Pytest configuration and fixtures."""

import asyncio
import itertools

import pytest

from zenflow.canvas.state import SequenceCanvas
from zenflow.errors import EnrichmentFailure
from zenflow.models.pose import Difficulty, Pose, PoseCategory
from zenflow.models.sequence import GeneratedSequence, PracticeGuidance


def make_pose(
    pose_id: str,
    name: str | None = None,
    category: PoseCategory = PoseCategory.STANDING,
    difficulty: Difficulty = Difficulty.BEGINNER,
    intensity: int = 2,
    image_url: str | None = None,
    image_prompt: str | None = None,
) -> Pose:
    """Build a pose with filler text fields."""
    return Pose(
        id=pose_id,
        name=name or pose_id.title(),
        category=category,
        difficulty=difficulty,
        intensity=intensity,
        duration="1 min",
        description=f"{pose_id} description",
        benefits=f"{pose_id} benefits",
        breathing_guidance=f"{pose_id} breathing",
        image_url=image_url,
        image_prompt=image_prompt,
    )


class FakeYogaClient:
    """In-memory stand-in for the AI services.

    Image requests can be held open with gates to simulate slow responses.
    """

    def __init__(self):
        self.sequence: GeneratedSequence | Exception | None = None
        self.guidance: PracticeGuidance | Exception = PracticeGuidance(
            script="Welcome. Breathe. Namaste.", audio=b"\x00\x00" * 100
        )
        self.intents: list[str] = []
        self.image_prompts: list[str] = []
        self.image_failures: set[str] = set()
        self.image_gates: dict[str, asyncio.Event] = {}
        self.audio_requests: list[tuple[str, list[str]]] = []
        self.audio_gate: asyncio.Event | None = None

    async def generate_sequence(self, intent: str) -> GeneratedSequence:
        self.intents.append(intent)
        if isinstance(self.sequence, Exception):
            raise self.sequence
        return self.sequence

    async def generate_pose_image(self, prompt: str) -> str:
        self.image_prompts.append(prompt)
        gate = self.image_gates.get(prompt)
        if gate is not None:
            await gate.wait()
        if prompt in self.image_failures:
            raise EnrichmentFailure(f"could not draw {prompt}")
        return f"data:image/png;base64,{prompt}"

    async def generate_practice_audio(self, title, poses) -> PracticeGuidance:
        self.audio_requests.append((title, [p.name for p in poses]))
        if self.audio_gate is not None:
            await self.audio_gate.wait()
        if isinstance(self.guidance, Exception):
            raise self.guidance
        return self.guidance


class FakePlayer:
    """Records playback; holds it open until finish() or stop() when asked."""

    def __init__(self, hold: bool = False):
        self.hold = hold
        self.played: list[bytes] = []
        self.stop_calls = 0
        self._done: asyncio.Event | None = None

    async def play(self, audio: bytes) -> None:
        self.played.append(audio)
        if not self.hold:
            return
        self._done = asyncio.Event()
        await self._done.wait()

    def stop(self) -> None:
        self.stop_calls += 1
        if self._done is not None:
            self._done.set()

    def finish(self) -> None:
        self._done.set()


async def wait_until(condition, attempts: int = 100) -> None:
    """Yield to the event loop until condition() holds."""
    for _ in range(attempts):
        if condition():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


@pytest.fixture
def id_factory():
    """Deterministic canvas ids: c1, c2, ..."""
    counter = itertools.count(1)
    return lambda: f"c{next(counter)}"


@pytest.fixture
def canvas(id_factory):
    return SequenceCanvas(id_factory=id_factory)


@pytest.fixture
def fake_client():
    return FakeYogaClient()


@pytest.fixture
def fake_player():
    return FakePlayer()


@pytest.fixture
def gentle_pose():
    """Beginner, low intensity."""
    return make_pose("gentle", "Gentle Stretch", difficulty=Difficulty.BEGINNER, intensity=2)


@pytest.fixture
def peak_pose():
    """Advanced, high intensity."""
    return make_pose(
        "peak", "Peak Arm Balance", category=PoseCategory.BALANCE,
        difficulty=Difficulty.ADVANCED, intensity=9,
    )


@pytest.fixture
def closing_pose():
    return make_pose("closing", "Closing Rest", category=PoseCategory.SUPINE, intensity=0)
