"""
Pytest configuration and shared fixtures.

Gemini is never contacted: HTTP-level tests inject a recording stub capability,
and GeminiCapability tests hand it a mocked client.
"""

from typing import Any, List, Optional

import pytest

from backend.ad_creator.logging_config import reset_metrics
from backend.ad_creator.models import Candidate, Content, InlineData, InlineImagePart, TextPart
from backend.ad_creator.upstream.base import UpstreamCapability


class StubCapability(UpstreamCapability):
    """Records every call and answers with canned candidates (or raises)."""

    name = "stub"

    def __init__(self, candidates: Optional[List[Candidate]] = None, error: Optional[Exception] = None):
        self.candidates = candidates if candidates is not None else []
        self.error = error
        self.calls: List[tuple] = []

    def _answer(self, method: str, operation, payload: Any) -> List[Candidate]:
        self.calls.append((method, operation, payload))
        if self.error is not None:
            raise self.error
        return self.candidates

    async def generate_content(self, operation, payload):
        return self._answer("generate_content", operation, payload)

    async def generate_image(self, operation, payload):
        return self._answer("generate_image", operation, payload)


def text_candidate(text: str) -> Candidate:
    return Candidate(content=Content(role="model", parts=[TextPart(text=text)]))


def image_candidate(data: str, leading_text: Optional[str] = None) -> Candidate:
    parts = [TextPart(text=leading_text)] if leading_text else []
    parts.append(InlineImagePart(inline_data=InlineData(mime_type="image/png", data=data)))
    return Candidate(content=Content(role="model", parts=parts))


@pytest.fixture(autouse=True)
def _clean_metrics():
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def stub_factory():
    return StubCapability


@pytest.fixture
def text_candidate_factory():
    return text_candidate


@pytest.fixture
def image_candidate_factory():
    return image_candidate
