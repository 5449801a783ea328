"""Wrapper around page_fetcher to decouple the app from the scrape provider."""
from __future__ import annotations

# Re‑export selected functions to keep external contract stable
from page_fetcher import (
    parse_scrape_response,  # noqa: F401 re-export
    scrape_page,  # noqa: F401 re-export
)

__all__: list[str] = [
    "parse_scrape_response",
    "scrape_page",
]
