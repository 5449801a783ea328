"""Facade for analysis functions so the UI does not depend on module layout."""

from analysis import analyze_page, check_custom_keywords  # noqa: F401 re-export
from comparison import analyze_competitor, compare_reports  # noqa: F401 re-export
from gsc_analysis import find_gsc_opportunities  # noqa: F401 re-export

__all__ = [
    "analyze_page",
    "check_custom_keywords",
    "analyze_competitor",
    "compare_reports",
    "find_gsc_opportunities",
]
