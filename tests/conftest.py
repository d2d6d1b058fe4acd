"""Shared fixtures for Hayat Ai tests."""

import io
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image

from hayat_ai.config import Settings


@pytest.fixture
def settings(tmp_path):
    """Settings with a dummy key, no polling delay and a temp artifact dir."""
    return Settings(
        API_KEY="test-key",
        artifact_dir=str(tmp_path / "artifacts"),
        video_poll_interval_seconds=0
    )


def make_image_bytes(width: int = 900, height: int = 600, color=(0, 0, 0), fmt: str = "PNG") -> bytes:
    """Encode a solid-color test image."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def image_bytes():
    """A 900x600 black PNG."""
    return make_image_bytes()


async def aiter_items(items):
    """Async iterator over a list, for faking streamed responses."""
    for item in items:
        yield item


def make_operation(done: bool, uri=None, error=None):
    """Fake google-genai video operation."""
    response = None
    if uri is not None:
        response = SimpleNamespace(generated_videos=[SimpleNamespace(video=SimpleNamespace(uri=uri))])
    return SimpleNamespace(done=done, response=response, error=error)


@pytest.fixture
def genai_client():
    """MagicMock standing in for google.genai.Client."""
    client = MagicMock()
    client.aio.models.generate_images = AsyncMock()
    client.aio.models.generate_content = AsyncMock()
    client.aio.models.generate_videos = AsyncMock()
    client.aio.operations.get = AsyncMock()
    return client


def chunk(text):
    """Fake streamed chat chunk."""
    return SimpleNamespace(text=text)
