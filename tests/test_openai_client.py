"""Tests for the OpenAI-backed client and retry helper."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from zenflow.clients.base import is_retryable, with_retry
from zenflow.clients.openai.client import OpenAIYogaClient, decode_data_url
from zenflow.config import Settings
from zenflow.errors import EnrichmentFailure, GenerationFailure, SessionFailure

from .conftest import make_pose


class StatusError(Exception):
    """Exception carrying an HTTP status, like the SDK's APIStatusError."""

    def __init__(self, status_code: int):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


def chat_response(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


def image_response(b64_json=None, url=None):
    response = MagicMock()
    image = MagicMock()
    image.b64_json = b64_json
    image.url = url
    response.data = [image]
    return response


@pytest.fixture
def mock_openai():
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    client.images.generate = AsyncMock()
    client.audio.speech.create = AsyncMock()
    return client


@pytest.fixture
def client(mock_openai):
    settings = Settings(max_retries=2, retry_delay=0)
    return OpenAIYogaClient(settings=settings, client=mock_openai)


SEQUENCE_JSON = json.dumps({
    "title": "Gentle Morning",
    "description": "Wake up slowly",
    "poses": [
        {
            "id": "sukhasana",
            "name": "Easy Pose",
            "category": "Seated",
            "difficulty": "Beginner",
            "intensity": 1,
            "duration": "1 min",
            "description": "Sit cross-legged.",
            "benefits": "Calms the mind.",
            "breathingGuidance": "Slow breaths.",
        }
    ],
})


class TestGenerateSequence:
    """Tests for generate_sequence."""

    @pytest.mark.asyncio
    async def test_success(self, client, mock_openai):
        mock_openai.chat.completions.create.return_value = chat_response(SEQUENCE_JSON)

        sequence = await client.generate_sequence("gentle morning")

        assert sequence.title == "Gentle Morning"
        assert [p.name for p in sequence.poses] == ["Easy Pose"]
        kwargs = mock_openai.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert "gentle morning" in kwargs["messages"][-1]["content"]
        assert kwargs["response_format"]["type"] == "json_schema"

    @pytest.mark.asyncio
    async def test_empty_response(self, client, mock_openai):
        mock_openai.chat.completions.create.return_value = chat_response(None)

        with pytest.raises(GenerationFailure, match="No response from AI"):
            await client.generate_sequence("anything")
        assert mock_openai.chat.completions.create.call_count == 1

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, client, mock_openai):
        mock_openai.chat.completions.create.side_effect = [
            StatusError(503),
            chat_response(SEQUENCE_JSON),
        ]

        sequence = await client.generate_sequence("gentle morning")

        assert sequence.title == "Gentle Morning"
        assert mock_openai.chat.completions.create.call_count == 2


class TestGeneratePoseImage:
    """Tests for generate_pose_image."""

    @pytest.mark.asyncio
    async def test_returns_data_url(self, client, mock_openai):
        mock_openai.images.generate.return_value = image_response(b64_json="QUJD")

        url = await client.generate_pose_image("Lizard Lunge")

        assert url == "data:image/png;base64,QUJD"
        assert decode_data_url(url) == b"ABC"
        kwargs = mock_openai.images.generate.call_args.kwargs
        assert kwargs["model"] == "gpt-image-1"
        assert "Lizard Lunge" in kwargs["prompt"]

    @pytest.mark.asyncio
    async def test_hosted_url(self, client, mock_openai):
        mock_openai.images.generate.return_value = image_response(url="https://cdn.example/x.png")

        assert await client.generate_pose_image("x") == "https://cdn.example/x.png"

    @pytest.mark.asyncio
    async def test_empty_data(self, client, mock_openai):
        response = MagicMock()
        response.data = []
        mock_openai.images.generate.return_value = response

        with pytest.raises(EnrichmentFailure):
            await client.generate_pose_image("x")


class TestGeneratePracticeAudio:
    """Tests for generate_practice_audio."""

    @pytest.mark.asyncio
    async def test_script_then_speech(self, client, mock_openai):
        mock_openai.chat.completions.create.return_value = chat_response("Welcome. Namaste.")
        speech = MagicMock()
        speech.aread = AsyncMock(return_value=b"\x01\x02")
        mock_openai.audio.speech.create.return_value = speech
        poses = [make_pose("a", "Alpha"), make_pose("b", "Beta")]

        guidance = await client.generate_practice_audio("Morning", poses)

        assert guidance.script == "Welcome. Namaste."
        assert guidance.audio == b"\x01\x02"
        prompt = mock_openai.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert prompt.index("Alpha") < prompt.index("Beta")
        kwargs = mock_openai.audio.speech.create.call_args.kwargs
        assert kwargs["input"] == "Welcome. Namaste."
        assert kwargs["voice"] == "alloy"
        assert kwargs["response_format"] == "pcm"

    @pytest.mark.asyncio
    async def test_empty_script(self, client, mock_openai):
        mock_openai.chat.completions.create.return_value = chat_response("")

        with pytest.raises(SessionFailure, match="script"):
            await client.generate_practice_audio("Morning", [make_pose("a")])
        assert mock_openai.chat.completions.create.call_count == 1
        mock_openai.audio.speech.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_audio(self, client, mock_openai):
        mock_openai.chat.completions.create.return_value = chat_response("Welcome.")
        speech = MagicMock()
        speech.aread = AsyncMock(return_value=b"")
        mock_openai.audio.speech.create.return_value = speech

        with pytest.raises(SessionFailure):
            await client.generate_practice_audio("Morning", [make_pose("a")])


class TestWithRetry:
    """Tests for with_retry."""

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        fn = AsyncMock(side_effect=StatusError(500))

        with pytest.raises(StatusError):
            await with_retry(fn, max_retries=3, delay=0)
        assert fn.call_count == 3

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self):
        fn = AsyncMock(side_effect=StatusError(400))

        with pytest.raises(StatusError):
            await with_retry(fn, max_retries=3, delay=0)
        assert fn.call_count == 1

    @pytest.mark.asyncio
    async def test_rate_limit_retried(self):
        fn = AsyncMock(side_effect=[StatusError(429), "ok"])

        assert await with_retry(fn, max_retries=3, delay=0) == "ok"
        assert fn.call_count == 2

    @pytest.mark.asyncio
    async def test_domain_failure_not_retried(self):
        fn = AsyncMock(side_effect=GenerationFailure("No response from AI"))

        with pytest.raises(GenerationFailure):
            await with_retry(fn, max_retries=3, delay=0)
        assert fn.call_count == 1

    def test_is_retryable(self):
        assert is_retryable(ValueError("no status"))
        assert is_retryable(StatusError(502))
        assert not is_retryable(StatusError(404))
        assert not is_retryable(GenerationFailure("not JSON"))
        assert not is_retryable(EnrichmentFailure("empty payload"))


class TestDecodeDataUrl:
    """Tests for decode_data_url."""

    def test_not_a_data_url(self):
        assert decode_data_url("https://example.com/a.jpg") is None
