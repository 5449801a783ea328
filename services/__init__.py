"""Service layer that wraps core logic for easy import and future refactor."""
from importlib import import_module

# Re-export public APIs from child modules for convenience
for _mod in ("services.scrape_service", "services.analysis_service"):
    import_module(_mod)

from services.scrape_service import (
    parse_scrape_response,
    scrape_page,
)
from services.analysis_service import (
    analyze_competitor,
    analyze_page,
    check_custom_keywords,
    compare_reports,
    find_gsc_opportunities,
)

__all__ = [
    "parse_scrape_response",
    "scrape_page",
    "analyze_competitor",
    "analyze_page",
    "check_custom_keywords",
    "compare_reports",
    "find_gsc_opportunities",
]
