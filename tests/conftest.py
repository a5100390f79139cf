"""
Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and provides common fixtures
and configuration for all test modules.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Import pytest for fixtures
import pytest

from storyglot.core.models import ImageBlock, ImageResponse, PageContent, TextBlock, VideoBlock


class FakeGateway:
    """In-memory gateway that prefixes text with the target language.

    Texts listed in ``fail_on`` raise, ``before_return`` (if set) is awaited
    before every answer so tests can suspend a run mid-page.
    """

    def __init__(self, fail_on=None, before_return=None):
        self.fail_on = set(fail_on or [])
        self.before_return = before_return
        self.calls = []
        self.closed = False

    async def translate(self, text, source_language, target_language):
        self.calls.append((text, source_language, target_language))
        if self.before_return is not None:
            await self.before_return()
        if text in self.fail_on:
            raise RuntimeError(f"gateway refused: {text}")
        return f"[{target_language}] {text}"

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_gateway():
    """Gateway that succeeds for every text."""
    return FakeGateway()


@pytest.fixture
def image_block():
    return ImageBlock(content=ImageResponse(b64_json="aGVsbG8=", timings={"inference": 1.5}),
                      prompt="a castle at dawn")


@pytest.fixture
def sample_pages(image_block):
    """Two pages: text + image, then text + video."""
    return [
        PageContent(blocks=[TextBlock("Hello"), image_block]),
        PageContent(blocks=[TextBlock("Once upon a time"),
                            VideoBlock(content="https://example.com/clip.mp4")]),
    ]


@pytest.fixture
def sample_pages_json():
    """Pages in the JSON shape the editor stores."""
    return [
        {"blocks": [
            {"type": "text", "content": "Hello", "generating": False},
            {"type": "image", "content": {"b64_json": "aGVsbG8="}, "generating": False,
             "prompt": "a castle"}
        ]},
        {"blocks": [
            {"type": "video", "content": "https://example.com/clip.mp4", "generating": False}
        ]}
    ]
