"""Keyword opportunities from Google Search Console data.

Three views over the imported query rows, each capped at the top five by
impressions:

* queries that bring impressions but never appear in the page text,
* queries ranking just outside the top three (positions 4-15),
* queries with many impressions but a weak click-through rate.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from analysis import round_half_up
from models import GscOpportunities, GscRow, PageInput, RankingOpportunity
from utils.text_utils import build_scan_text

TOP_N = 5

NEAR_TOP_POSITION_RANGE = (4.0, 15.0)
NEAR_TOP_MIN_IMPRESSIONS = 5
# Rough CTR for a top-three result, used to estimate extra clicks
TOP_THREE_CTR = 0.3

LOW_CTR_MIN_IMPRESSIONS = 50
LOW_CTR_THRESHOLD = 5.0  # percent


def page_scan_text(page: PageInput) -> str:
    return build_scan_text(page.page_title, page.meta_description, page.h1, page.body_content)


def keyword_on_page(row: GscRow, scan_text: str) -> bool:
    return row.keyword.lower() in scan_text


def _top_by_impressions(rows: Iterable[GscRow], limit: int = TOP_N) -> List[GscRow]:
    # sorted() is stable, so ties keep file order
    return sorted(rows, key=lambda r: r.impressions, reverse=True)[:limit]


def estimated_extra_clicks(row: GscRow) -> int:
    """Clicks gained if the query reached a top-three click-through rate."""
    if row.impressions <= 0:
        return 0
    return round_half_up(row.impressions * (TOP_THREE_CTR - row.clicks / row.impressions))


def find_gsc_opportunities(rows: Sequence[GscRow], page: PageInput) -> GscOpportunities:
    """
    Pick out the GSC queries worth acting on for *page*.

    Args:
        rows (Sequence[GscRow]): Imported GSC query rows
        page (PageInput): Page the queries are matched against

    Returns:
        GscOpportunities: The three opportunity lists, each at most five long
    """
    scan_text = page_scan_text(page)

    missing_on_page = _top_by_impressions(
        r for r in rows if r.impressions > 0 and not keyword_on_page(r, scan_text)
    )

    low, high = NEAR_TOP_POSITION_RANGE
    near_top = _top_by_impressions(
        r for r in rows if low <= r.position <= high and r.impressions > NEAR_TOP_MIN_IMPRESSIONS
    )

    low_ctr = _top_by_impressions(
        r for r in rows if r.impressions >= LOW_CTR_MIN_IMPRESSIONS and r.ctr < LOW_CTR_THRESHOLD
    )

    return GscOpportunities(
        missing_on_page=tuple(missing_on_page),
        near_top_three=tuple(RankingOpportunity(r, estimated_extra_clicks(r)) for r in near_top),
        low_ctr=tuple(low_ctr),
    )
