# backend/ad_creator/placeholder.py

import logging
from pathlib import Path
from typing import Dict

log = logging.getLogger("ad-creator")

SUPABASE_URL_MARKER = "<!-- ____SUPABASE_URL____ -->"
SUPABASE_ANON_KEY_MARKER = "<!-- ____SUPABASE_ANON_KEY____ -->"

ERROR_PAGE = (
    "<h1>Error loading application</h1>"
    "<p>Could not process configuration. Please check the server logs.</p>"
)


def substitute(html: str, values: Dict[str, str]) -> str:
    for marker, value in values.items():
        html = html.replace(marker, value)
    return html


def render_index(path: Path, supabase_url: str, supabase_anon_key: str) -> str:
    """
    Read the front-end template and inject the two client-side config values.
    Raises OSError / UnicodeDecodeError when the template cannot be read.
    """
    if not supabase_url:
        log.warning("SUPABASE_URL is not set; serving page with an empty value.")
    if not supabase_anon_key:
        log.warning("SUPABASE_ANON_KEY is not set; serving page with an empty value.")

    html = Path(path).read_text(encoding="utf-8")
    return substitute(
        html,
        {
            SUPABASE_URL_MARKER: supabase_url,
            SUPABASE_ANON_KEY_MARKER: supabase_anon_key,
        },
    )
