# backend/ad_creator/normalizer.py

import logging
from typing import Any, Dict, List, Union

from .errors import (
    EmptyUpstreamResult,
    GatewayError,
    MissingImageData,
    UnknownOperationType,
    UpstreamCallFailed,
)
from .logging_config import inc_metric, measure, record_request
from .models import (
    Candidate,
    CandidatesResponse,
    NormalizedResponse,
    OperationType,
    Prediction,
    PredictionsResponse,
)
from .upstream.base import UpstreamCapability

log = logging.getLogger("ad-creator")

STRUCTURED = "structured"
PROMPT_TO_IMAGE = "prompt_to_image"

# Every OperationType must appear here; tests enforce it.
ROUTES: Dict[OperationType, str] = {
    OperationType.PRODUCT_ANALYSIS: STRUCTURED,
    OperationType.AD_COPY: STRUCTURED,
    OperationType.CAMPAIGN_TEXT: STRUCTURED,
    OperationType.AD_IMAGE_COMPOSITE: STRUCTURED,
    OperationType.CAMPAIGN_VISUAL: PROMPT_TO_IMAGE,
}


def resolve_operation(tag: Union[str, OperationType]) -> OperationType:
    try:
        return OperationType(tag)
    except ValueError:
        raise UnknownOperationType(tag) from None


def _upstream_message(exc: Exception) -> str:
    # google.genai.errors.APIError keeps the provider's text in `.message`
    message = getattr(exc, "message", None)
    return str(message or exc) or type(exc).__name__


class Normalizer:
    """
    Routes one operation to one upstream call and reshapes the result.

    Live and pitch mode share this class; only the injected capability differs.
    """

    def __init__(self, capability: UpstreamCapability):
        self.capability = capability

    async def normalize(self, tag: Union[str, OperationType], payload: Any) -> NormalizedResponse:
        operation = resolve_operation(tag)
        route = ROUTES[operation]

        record_request(operation.value)
        log.info(f"🚀 {operation.value} -> {self.capability.name}.{route}")

        candidates = await self._call(operation, route, payload)

        if not candidates:
            raise EmptyUpstreamResult(f"{operation.value}: upstream returned 0 candidates")

        if route == PROMPT_TO_IMAGE:
            return self._to_predictions(operation, candidates)
        return CandidatesResponse(candidates=candidates)

    async def _call(self, operation: OperationType, route: str, payload: Any) -> List[Candidate]:
        inc_metric("upstream_calls_total")
        try:
            with measure(f"upstream_{operation.value}"):
                if route == PROMPT_TO_IMAGE:
                    return await self.capability.generate_image(operation, payload)
                return await self.capability.generate_content(operation, payload)
        except GatewayError:
            raise
        except Exception as e:
            raise UpstreamCallFailed(_upstream_message(e)) from e

    @staticmethod
    def _to_predictions(operation: OperationType, candidates: List[Candidate]) -> PredictionsResponse:
        image = candidates[0].first_inline_image()
        if image is None:
            raise MissingImageData(f"{operation.value}: first candidate has no inline image part")
        return PredictionsResponse(
            predictions=[Prediction(bytes_base64_encoded=image.inline_data.data)]
        )
