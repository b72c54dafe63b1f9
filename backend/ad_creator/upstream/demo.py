# backend/ad_creator/upstream/demo.py

import asyncio
import json
import logging
from functools import lru_cache
from typing import Any, Dict, List

from ..models import (
    Candidate,
    Content,
    InlineData,
    InlineImagePart,
    OperationType,
    TextPart,
)
from ..utils import image_to_base64_png, render_placeholder_image
from .base import UpstreamCapability

log = logging.getLogger("ad-creator")


@lru_cache(maxsize=None)
def demo_image_b64() -> str:
    """Rendered on first use so live-mode cold starts never pay for Pillow."""
    return image_to_base64_png(render_placeholder_image("DEMO"))


_CAMPAIGN = [
    {
        "platform_name": "Facebook",
        "headline": "Unlock Your Natural Glow! ✨",
        "ad_copy": (
            "Discover the secret to radiant skin with our new Botanical Serum. "
            "Made with scientifically-proven natural extracts to nourish and revitalize. "
            "Your skin deserves the best!"
        ),
        "visual_concept": (
            "A sleek bottle of the serum resting on a bed of fresh green leaves and "
            "delicate flowers, with soft morning light filtering through."
        ),
        "call_to_action": "Shop Now & Glow Up",
    },
    {
        "platform_name": "Instagram",
        "headline": "Science Meets Nature.",
        "ad_copy": (
            "Purely botanical. Powerfully scientific. Our new serum is here to transform "
            "your skincare routine. Get ready for visible results. #BotanicalBeauty #ScienceOfSkin"
        ),
        "visual_concept": (
            "A minimalist flat-lay of the product next to a glass beaker containing a "
            "single green leaf. Clean, white marble background."
        ),
        "call_to_action": "Tap to Shop",
    },
]


def _text(text: str) -> Candidate:
    return Candidate(content=Content(role="model", parts=[TextPart(text=text)]))


def _image() -> Candidate:
    return Candidate(
        content=Content(
            role="model",
            parts=[InlineImagePart(inline_data=InlineData(mime_type="image/png", data=demo_image_b64()))],
        )
    )


@lru_cache(maxsize=None)
def demo_fixtures() -> Dict[OperationType, Candidate]:
    return {
        OperationType.PRODUCT_ANALYSIS: _text("a premium botanical skincare serum in a sleek bottle"),
        OperationType.AD_COPY: _text(
            "Headline: The Fusion of Nature & Science.\n"
            "Body: A fusion of nature's finest ingredients and scientific innovation for skin "
            "that feels as good as it looks. Experience the botanical brilliance."
        ),
        OperationType.CAMPAIGN_TEXT: _text(json.dumps(_CAMPAIGN, ensure_ascii=False)),
        OperationType.AD_IMAGE_COMPOSITE: _image(),
        OperationType.CAMPAIGN_VISUAL: _image(),
    }


class DemoCapability(UpstreamCapability):
    """
    Pitch-mode stand-in: never touches the network, ignores the payload and
    answers every operation with its canned candidate after a short pause.
    """

    name = "demo"

    def __init__(self, delay_seconds: float = 0.5):
        self.delay_seconds = delay_seconds

    async def _respond(self, operation: OperationType) -> List[Candidate]:
        await asyncio.sleep(self.delay_seconds)
        log.info(f"🎭 Pitch mode fixture for {operation.value}")
        return [demo_fixtures()[operation].model_copy(deep=True)]

    async def generate_content(self, operation: OperationType, payload: Any) -> List[Candidate]:
        return await self._respond(operation)

    async def generate_image(self, operation: OperationType, payload: Any) -> List[Candidate]:
        return await self._respond(operation)
