"""Vercel serverless entrypoint.

Vercel's Python runtime serves any module-level ASGI `app`; vercel.json rewrites
every path here so FastAPI sees /api/generate, /api/placeholder and /.
"""

from backend.ad_creator.main import app

__all__ = ["app"]
