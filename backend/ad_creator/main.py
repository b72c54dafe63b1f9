# backend/ad_creator/main.py
from dotenv import load_dotenv

load_dotenv()  # Loads .env automatically

import json
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import ValidationError

from .config import Settings
from .errors import BadRequest, GatewayError, MethodNotAllowed, MissingConfiguration
from .logging_config import get_metrics_snapshot, log, record_error
from .models import ErrorResponse, GenerateRequest, OperationType
from .normalizer import Normalizer
from .placeholder import ERROR_PAGE, render_index
from .upstream.base import UpstreamCapability
from .upstream.demo import DemoCapability
from .upstream.gemini import GeminiCapability

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def build_normalizer(
    settings: Settings, capability: Optional[UpstreamCapability] = None
) -> Optional[Normalizer]:
    """
    Pick the capability once at startup. Returns None when live mode has no
    API key, so every request fails with MissingConfiguration instead of
    calling Gemini with nothing.
    """
    if capability is not None:
        return Normalizer(capability)
    if settings.demo_mode:
        log.info(f"🎭 Pitch mode enabled (delay={settings.demo_delay_seconds}s)")
        return Normalizer(DemoCapability(delay_seconds=settings.demo_delay_seconds))
    if not settings.live_ready:
        log.error("❌ Missing GEMINI_API_KEY / GOOGLE_API_KEY; /api/generate will refuse requests.")
        return None
    return Normalizer(GeminiCapability(settings))


def _parse_generate_request(body: Any) -> GenerateRequest:
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object with 'type' and 'payload'.")
    try:
        req = GenerateRequest.model_validate(body)
    except ValidationError as e:
        fields = ", ".join(sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}))
        raise BadRequest(f"Missing or invalid field(s): {fields or 'body'}") from e
    if req.payload is None:
        raise BadRequest("Missing or invalid field(s): payload")
    return req


def create_app(
    settings: Optional[Settings] = None,
    capability: Optional[UpstreamCapability] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Ad Creator Generation Gateway", version="1.0")
    app.state.settings = settings
    app.state.normalizer = build_normalizer(settings, capability)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        operation = getattr(request.state, "operation", "-")
        log.error(f"❌ {exc.kind} (type={operation}): {exc.message} | {exc.details or ''}")
        try:
            known = OperationType(operation).value
        except ValueError:
            known = "-"
        record_error(exc.kind, known)
        return JSONResponse(exc.to_body(), status_code=exc.status_code)

    # ==========================================================
    #                      GENERATE
    # ==========================================================

    @app.api_route(
        "/api/generate",
        methods=ALL_METHODS,
        responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def generate(request: Request):
        if request.method != "POST":
            raise MethodNotAllowed(request.method)

        normalizer: Optional[Normalizer] = request.app.state.normalizer
        if normalizer is None:
            raise MissingConfiguration("Set GEMINI_API_KEY or enable PITCH_MODE.")

        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BadRequest(f"Body is not valid JSON: {e}") from e

        req = _parse_generate_request(body)
        request.state.operation = req.type

        result = await normalizer.normalize(req.type, req.payload)
        log.info(f"✅ {req.type} complete")
        return JSONResponse(result.model_dump(by_alias=True, exclude_none=True))

    # ==========================================================
    #                  FRONT-END PLACEHOLDER
    # ==========================================================

    @app.get("/", response_class=HTMLResponse)
    @app.get("/api/placeholder", response_class=HTMLResponse)
    async def placeholder(request: Request):
        s: Settings = request.app.state.settings
        try:
            html = render_index(s.index_html_path, s.supabase_url, s.supabase_anon_key)
        except (OSError, UnicodeDecodeError) as e:
            log.error(f"Error processing placeholder file: {e}")
            return HTMLResponse(ERROR_PAGE, status_code=500)
        return HTMLResponse(html)

    # ==========================================================
    #                     METRICS + HEALTH
    # ==========================================================

    @app.get("/metrics")
    async def metrics():
        return get_metrics_snapshot()

    @app.get("/health")
    async def health(request: Request):
        s: Settings = request.app.state.settings
        return {
            "status": "ok" if request.app.state.normalizer is not None else "misconfigured",
            "mode": "pitch" if s.demo_mode else "live",
            "operations": [op.value for op in OperationType],
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.ad_creator.main:app", host="127.0.0.1", port=8000, reload=True)
