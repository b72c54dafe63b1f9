# backend/ad_creator/models.py

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class OperationType(str, Enum):
    PRODUCT_ANALYSIS = "ProductAnalysis"
    AD_COPY = "AdCopy"
    CAMPAIGN_TEXT = "CampaignText"
    AD_IMAGE_COMPOSITE = "AdImageComposite"
    CAMPAIGN_VISUAL = "CampaignVisual"

    @classmethod
    def _missing_(cls, value):
        # The browser client sends camelCase tags ("campaignText"); exact match only.
        if isinstance(value, str):
            return LEGACY_TAGS.get(value)
        return None


LEGACY_TAGS = {
    "productAnalysis": OperationType.PRODUCT_ANALYSIS,
    "adCopy": OperationType.AD_COPY,
    "campaignText": OperationType.CAMPAIGN_TEXT,
    "adImageComposite": OperationType.AD_IMAGE_COMPOSITE,
    "campaignVisual": OperationType.CAMPAIGN_VISUAL,
}


class WireModel(BaseModel):
    """Gemini REST field names are camelCase; accept snake_case too."""

    model_config = ConfigDict(populate_by_name=True)


# ---------- response parts ----------


class InlineData(WireModel):
    mime_type: str = Field("image/png", alias="mimeType")
    data: str


class TextPart(WireModel):
    # A part is either text or inline data, never both.
    model_config = ConfigDict(extra="forbid")

    text: str


class InlineImagePart(WireModel):
    model_config = ConfigDict(extra="forbid")

    inline_data: InlineData = Field(alias="inlineData")


Part = Union[TextPart, InlineImagePart]


class Content(WireModel):
    role: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)


class Candidate(WireModel):
    content: Content = Field(default_factory=Content)
    finish_reason: Optional[str] = Field(None, alias="finishReason")

    def first_inline_image(self) -> Optional[InlineImagePart]:
        for part in self.content.parts:
            if isinstance(part, InlineImagePart):
                return part
        return None


# ---------- request side ----------


class GenerateRequest(BaseModel):
    type: str = Field(min_length=1)
    payload: Any

    model_config = ConfigDict(extra="ignore")


class StructuredInput(WireModel):
    contents: List[Content] = Field(min_length=1)
    generation_config: Optional[Dict[str, Any]] = Field(None, alias="generationConfig")


class PromptInstance(WireModel):
    prompt: str = Field(min_length=1)


class PromptParameters(WireModel):
    sample_count: int = Field(1, ge=1, le=8, alias="sampleCount")


class PromptInput(WireModel):
    instances: List[PromptInstance] = Field(min_length=1)
    parameters: PromptParameters = Field(default_factory=PromptParameters)

    @property
    def prompt(self) -> str:
        return self.instances[0].prompt


# ---------- normalized responses ----------


class CandidatesResponse(WireModel):
    candidates: List[Candidate]


class Prediction(WireModel):
    bytes_base64_encoded: str = Field(alias="bytesBase64Encoded")


class PredictionsResponse(WireModel):
    predictions: List[Prediction]


NormalizedResponse = Union[CandidatesResponse, PredictionsResponse]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
