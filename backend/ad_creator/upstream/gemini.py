# backend/ad_creator/upstream/gemini.py

import base64
import binascii
import logging
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from ..config import Settings
from ..errors import BadRequest
from ..models import (
    Candidate,
    Content,
    InlineData,
    InlineImagePart,
    OperationType,
    Part,
    TextPart,
)
from .base import UpstreamCapability, parse_prompt_input, parse_structured_input

log = logging.getLogger("ad-creator")

IMAGE_MODALITIES = ["TEXT", "IMAGE"]


# --- Helpers: client wire shape <-> SDK types ---


def to_sdk_part(part: Part) -> types.Part:
    if isinstance(part, InlineImagePart):
        try:
            raw = base64.b64decode(part.inline_data.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BadRequest(f"inlineData.data is not valid base64: {e}") from e
        return types.Part.from_bytes(data=raw, mime_type=part.inline_data.mime_type)
    return types.Part.from_text(text=part.text)


def to_sdk_content(content: Content) -> types.Content:
    return types.Content(
        role=content.role or "user",
        parts=[to_sdk_part(p) for p in content.parts],
    )


def to_sdk_config(
    generation_config: Optional[Dict[str, Any]],
    operation: OperationType,
) -> Optional[types.GenerateContentConfig]:
    if not generation_config and operation is not OperationType.AD_IMAGE_COMPOSITE:
        return None
    try:
        config = types.GenerateContentConfig.model_validate(generation_config or {})
    except ValidationError as e:
        raise BadRequest(f"Invalid generationConfig: {e.error_count()} error(s): {e.errors()[0]['msg']}") from e
    if operation is OperationType.AD_IMAGE_COMPOSITE and not config.response_modalities:
        config.response_modalities = IMAGE_MODALITIES
    return config


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


def from_sdk_candidate(candidate: types.Candidate) -> Candidate:
    parts: List[Part] = []
    content = candidate.content
    for part in (content.parts if content and content.parts else []):
        if part.inline_data is not None and part.inline_data.data:
            parts.append(
                InlineImagePart(
                    inline_data=InlineData(
                        mime_type=part.inline_data.mime_type or "image/png",
                        data=_b64(part.inline_data.data),
                    )
                )
            )
        elif part.text is not None and not part.thought:
            parts.append(TextPart(text=part.text))

    finish_reason = candidate.finish_reason
    return Candidate(
        content=Content(role=content.role if content else None, parts=parts),
        finish_reason=getattr(finish_reason, "value", finish_reason),
    )


def from_sdk_images(generated: List[types.GeneratedImage]) -> List[Candidate]:
    """Imagen returns bare images; fold them into one candidate, one part each."""
    parts: List[Part] = []
    for item in generated:
        if item.image is None or not item.image.image_bytes:
            continue
        parts.append(
            InlineImagePart(
                inline_data=InlineData(
                    mime_type=item.image.mime_type or "image/png",
                    data=_b64(item.image.image_bytes),
                )
            )
        )
    if not parts:
        return []
    return [Candidate(content=Content(role="model", parts=parts))]


# --- Capability ---


class GeminiCapability(UpstreamCapability):
    """Live capability backed by one google-genai client for the whole process."""

    name = "gemini"

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None):
        if not settings.api_key:
            raise ValueError("GeminiCapability needs an API key.")
        self.settings = settings
        self._client = client or genai.Client(api_key=settings.api_key)

    async def generate_content(self, operation: OperationType, payload: Any) -> List[Candidate]:
        request = parse_structured_input(payload)
        model = self.settings.model_for(operation)
        contents = [to_sdk_content(c) for c in request.contents]
        config = to_sdk_config(request.generation_config, operation)

        log.info(f"🧠 generate_content model={model} turns={len(contents)}")
        resp = await self._client.aio.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )
        return [from_sdk_candidate(c) for c in (resp.candidates or [])]

    async def generate_image(self, operation: OperationType, payload: Any) -> List[Candidate]:
        request = parse_prompt_input(payload)
        model = self.settings.model_for(operation)

        if model.startswith("imagen"):
            log.info(f"🎨 generate_images model={model} samples={request.parameters.sample_count}")
            resp = await self._client.aio.models.generate_images(
                model=model,
                prompt=request.prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=request.parameters.sample_count,
                ),
            )
            return from_sdk_images(resp.generated_images or [])

        if request.parameters.sample_count > 1:
            raise BadRequest(
                f"parameters.sampleCount={request.parameters.sample_count} needs an Imagen model; "
                f"{model} returns one image per request."
            )

        log.info(f"🎨 generate_content (image) model={model}")
        resp = await self._client.aio.models.generate_content(
            model=model,
            contents=[types.Content(role="user", parts=[types.Part.from_text(text=request.prompt)])],
            config=types.GenerateContentConfig(response_modalities=IMAGE_MODALITIES),
        )
        return [from_sdk_candidate(c) for c in (resp.candidates or [])]
