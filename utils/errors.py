"""Custom exception hierarchy and validation helpers."""
from __future__ import annotations

from typing import Optional


class SEODashboardError(RuntimeError):
    """Base class for all custom errors."""
    pass


class ParseError(SEODashboardError):
    """Raised when parsing of external data (e.g., a GSC export) fails."""
    pass


class FetchError(SEODashboardError):
    """Raised when the scrape API cannot return a usable page."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ValidationError(SEODashboardError):
    """Raised when user‑provided configuration is invalid."""
    pass


def expect(condition: bool, message: str, exc: type[SEODashboardError] = ValidationError):
    """Assert *condition* is truthy else raise *exc*(message)."""
    if not condition:
        raise exc(message)
