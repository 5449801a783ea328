"""Runtime configuration for the SEO dashboard.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory.  Variables already set in the environment win
over the file.
"""
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Firecrawl scrape API
FIRECRAWL_API_KEY = os.getenv("FIRECRAWL_API_KEY", "")
FIRECRAWL_SCRAPE_URL = os.getenv("FIRECRAWL_SCRAPE_URL", "https://api.firecrawl.dev/v1/scrape")
REQUEST_TIMEOUT = _env_int("FIRECRAWL_TIMEOUT", 60)
SCRAPE_EXCLUDE_TAGS = ["script", "style", "nav", "footer", "iframe", "noscript", "aside", "form"]

# Logging
LOG_LEVEL = os.getenv("SEO_LOG_LEVEL", "INFO").upper()

# ==== DEV MODE CONFIGURATION ====
DEV_MODE = os.getenv("SEO_DEV_MODE", "").lower() in ("1", "true", "yes")
# ===============================
