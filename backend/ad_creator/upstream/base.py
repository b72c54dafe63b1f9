# backend/ad_creator/upstream/base.py

from abc import ABC, abstractmethod
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import BadRequest
from ..models import Candidate, OperationType, PromptInput, StructuredInput

M = TypeVar("M", bound=BaseModel)


class UpstreamCapability(ABC):
    """
    The two things the normalizer can ask of a model provider.

    Both methods receive the caller's payload untouched and return the
    provider's ranked candidates. Reshaping into the client envelope is the
    normalizer's job, not the capability's.
    """

    name: str = "base"

    @abstractmethod
    async def generate_content(self, operation: OperationType, payload: Any) -> List[Candidate]:
        ...

    @abstractmethod
    async def generate_image(self, operation: OperationType, payload: Any) -> List[Candidate]:
        ...


def _parse(model: Type[M], payload: Any, what: str) -> M:
    if not isinstance(payload, dict):
        raise BadRequest(f"{what} payload must be a JSON object.")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'payload'}: {err['msg']}"
            for err in e.errors()
        )
        raise BadRequest(f"Invalid {what} payload: {problems}") from e


def parse_structured_input(payload: Any) -> StructuredInput:
    """`contents` plus optional `generationConfig`."""
    return _parse(StructuredInput, payload, "structured generation")


def parse_prompt_input(payload: Any) -> PromptInput:
    """First prompt out of an `instances` list, plus `parameters.sampleCount`."""
    return _parse(PromptInput, payload, "image generation")
