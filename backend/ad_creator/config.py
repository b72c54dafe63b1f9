# backend/ad_creator/config.py

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from .models import OperationType

PROJECT_ROOT = Path(__file__).resolve().parents[2]

TRUTHY = {"1", "true", "yes", "on"}


def _first_non_empty(env: Mapping[str, str], *names: str) -> Optional[str]:
    for name in names:
        value = (env.get(name) or "").strip()
        if value:
            return value
    return None


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once when the app starts."""

    api_key: Optional[str] = None
    demo_mode: bool = False
    demo_delay_seconds: float = 0.5
    text_model: str = "gemini-2.5-flash"
    vision_model: str = "gemini-2.5-flash"
    image_model: str = "gemini-2.5-flash-image-preview"
    supabase_url: str = ""
    supabase_anon_key: str = ""
    index_html_path: Path = PROJECT_ROOT / "index.html"
    cors_allow_origins: Tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env

        delay_ms = (env.get("PITCH_MODE_DELAY_MS") or "").strip()
        demo_delay_seconds = float(delay_ms) / 1000 if delay_ms else 0.5
        if demo_delay_seconds < 0:
            raise ValueError("PITCH_MODE_DELAY_MS must not be negative.")

        origins = tuple(
            o.strip() for o in (env.get("CORS_ALLOW_ORIGINS") or "*").split(",") if o.strip()
        )

        return cls(
            api_key=_first_non_empty(env, "GEMINI_API_KEY", "GOOGLE_API_KEY"),
            demo_mode=(env.get("PITCH_MODE") or "").strip().lower() in TRUTHY,
            demo_delay_seconds=demo_delay_seconds,
            text_model=_first_non_empty(env, "GEMINI_TEXT_MODEL") or cls.text_model,
            vision_model=_first_non_empty(env, "GEMINI_VISION_MODEL") or cls.vision_model,
            image_model=_first_non_empty(env, "GEMINI_IMAGE_MODEL") or cls.image_model,
            supabase_url=(env.get("SUPABASE_URL") or "").strip(),
            supabase_anon_key=(env.get("SUPABASE_ANON_KEY") or "").strip(),
            index_html_path=Path(
                _first_non_empty(env, "INDEX_HTML_PATH") or PROJECT_ROOT / "index.html"
            ),
            cors_allow_origins=origins or ("*",),
        )

    def model_for(self, operation: OperationType) -> str:
        if operation is OperationType.PRODUCT_ANALYSIS:
            return self.vision_model
        if operation in (OperationType.AD_IMAGE_COMPOSITE, OperationType.CAMPAIGN_VISUAL):
            return self.image_model
        return self.text_model

    @property
    def live_ready(self) -> bool:
        return bool(self.api_key)
