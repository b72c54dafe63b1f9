# backend/ad_creator/errors.py

from typing import Any, Dict, Optional


class GatewayError(Exception):
    """
    Base class for every failure the generate endpoint reports to its caller.

    `message` is the short caller-facing string, `details` carries the upstream
    or validation detail when there is one.
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class MethodNotAllowed(GatewayError):
    status_code = 405

    def __init__(self, method: str):
        super().__init__("Method Not Allowed", f"{method} is not supported; use POST.")
        self.method = method


class MissingConfiguration(GatewayError):
    status_code = 500

    def __init__(self, details: Optional[str] = None):
        super().__init__("Server configuration error: API key not configured.", details)


class BadRequest(GatewayError):
    status_code = 400

    def __init__(self, details: Optional[str] = None):
        super().__init__("Bad Request", details)


class UnknownOperationType(GatewayError):
    status_code = 400

    def __init__(self, operation_type: Any):
        super().__init__(f"Bad Request: Invalid type: {operation_type}")
        self.operation_type = operation_type


class UpstreamCallFailed(GatewayError):
    status_code = 500

    def __init__(self, details: Optional[str] = None):
        super().__init__("An error occurred while calling the generation API.", details)


class EmptyUpstreamResult(GatewayError):
    status_code = 500

    def __init__(self, details: Optional[str] = None):
        super().__init__("The generation API returned no candidates.", details)


class MissingImageData(GatewayError):
    status_code = 500

    def __init__(self, details: Optional[str] = None):
        super().__init__("No image data found in the generation API response.", details)
