"""Content-gap notes and quick-win suggestions.

Gaps are a fixed set of three topics whose wording switches on a threshold.
Quick wins come from five independent checks run in a fixed order; each check
adds at most one item, so the list is ordered by check, not by priority.
"""
from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from models import ContentGap, ContentGapTopic, PageSignals, Priority, QuickWin

SHORT_PAGE_WORDS = 500
MIN_LINKS_FOR_NO_QUICK_WIN = 3
MAX_LISTED_MISSING = 4


def format_keyword_list(keywords: Sequence[str], limit: int = MAX_LISTED_MISSING) -> str:
    """Join the first *limit* keywords, noting how many were left out."""
    listed = ", ".join(keywords[:limit])
    remaining = len(keywords) - limit
    if remaining > 0:
        listed += f", and {remaining} more"
    return listed


# ----------------------------------------------------------------------
# Content gaps
# ----------------------------------------------------------------------

def _content_depth_gap(s: PageSignals, missing: Sequence[str]) -> ContentGap:
    if s.word_count < SHORT_PAGE_WORDS:
        title = "The page is too short"
        description = (
            f"With only ~{s.word_count} words the page is thin on content. Competitors typically "
            f"have 600-1000+ words on comparable pages."
        )
    else:
        title = "Content depth"
        description = (
            f"The page has {s.word_count} words. Consider expanding with product-specific details "
            f"and an FAQ to strengthen its authority."
        )
    return ContentGap(
        topic=ContentGapTopic.CONTENT_DEPTH,
        heading="Gap 01 · Content length",
        title=title,
        description=description,
        tag="#4f7fff",
    )


def _missing_keywords_gap(s: PageSignals, missing: Sequence[str]) -> ContentGap:
    if missing:
        noun = "keyword" if len(missing) == 1 else "keywords"
        title = f"{len(missing)} {noun} missing"
        description = (
            f"These keywords were not found on the page: {format_keyword_list(missing)}. "
            f"Work them naturally into body text and headings."
        )
    else:
        title = "Semantic coverage"
        description = (
            "All semantic keywords are covered. Consider additional long-tail variants "
            "to capture more traffic."
        )
    return ContentGap(
        topic=ContentGapTopic.MISSING_KEYWORDS,
        heading="Gap 02 · Missing keywords",
        title=title,
        description=description,
        tag="#ff7043",
    )


def _structured_data_gap(s: PageSignals, missing: Sequence[str]) -> ContentGap:
    return ContentGap(
        topic=ContentGapTopic.STRUCTURED_DATA,
        heading="Gap 03 · Structured data",
        title="FAQ + JSON-LD missing",
        description=(
            "The page most likely lacks an FAQ section with JSON-LD structured data. "
            "FAQ markup triggers rich snippets in Google and noticeably lifts CTR."
        ),
        tag="#2dce89",
    )


_GAP_BUILDERS: Dict[ContentGapTopic, Callable[[PageSignals, Sequence[str]], ContentGap]] = {
    ContentGapTopic.CONTENT_DEPTH: _content_depth_gap,
    ContentGapTopic.MISSING_KEYWORDS: _missing_keywords_gap,
    ContentGapTopic.STRUCTURED_DATA: _structured_data_gap,
}


def build_content_gaps(signals: PageSignals, missing_keywords: Sequence[str]) -> Tuple[ContentGap, ...]:
    """One gap note per topic, in topic order."""
    return tuple(_GAP_BUILDERS[topic](signals, missing_keywords) for topic in ContentGapTopic)


# ----------------------------------------------------------------------
# Quick wins
# ----------------------------------------------------------------------

def _meta_quick_win(s: PageSignals, missing: Sequence[str]) -> Optional[QuickWin]:
    if s.meta_has_keyword and s.meta_good_length:
        return None
    extras = [kw for kw in missing if kw != s.target_keyword][:2]
    also = f" and {', '.join(extras)}" if extras else ""
    return QuickWin(
        priority=Priority.HIGH,
        title="Update the meta description",
        detail=f'Add "{s.target_keyword}"{also} to the meta description. Direct CTR effect in the SERP.',
    )


def _content_quick_win(s: PageSignals, missing: Sequence[str]) -> Optional[QuickWin]:
    if s.word_count >= SHORT_PAGE_WORDS:
        return None
    return QuickWin(
        priority=Priority.HIGH,
        title="Add more content (~300 words)",
        detail=(
            f"The page only has {s.word_count} words. Write a new section that naturally "
            f"includes the missing keywords."
        ),
    )


def _missing_keywords_quick_win(s: PageSignals, missing: Sequence[str]) -> Optional[QuickWin]:
    if not missing:
        return None
    return QuickWin(
        priority=Priority.MEDIUM,
        title="Include the missing semantic keywords",
        detail=f"Use {', '.join(missing[:3])} naturally in body text, product descriptions or the FAQ.",
    )


def _faq_quick_win(s: PageSignals, missing: Sequence[str]) -> Optional[QuickWin]:
    if s.has_faq:
        return None
    return QuickWin(
        priority=Priority.MEDIUM,
        title="Add an FAQ section with JSON-LD",
        detail="3-5 questions and answers trigger rich snippets in Google and add visibility without link building.",
    )


def _links_quick_win(s: PageSignals, missing: Sequence[str]) -> Optional[QuickWin]:
    if s.link_count >= MIN_LINKS_FOR_NO_QUICK_WIN:
        return None
    return QuickWin(
        priority=Priority.LOW,
        title="Build internal links from related pages",
        detail=(
            "Link to this page from related categories with natural anchor texts "
            "that include the target keyword."
        ),
    )


QUICK_WIN_CHECKS: Tuple[Callable[[PageSignals, Sequence[str]], Optional[QuickWin]], ...] = (
    _meta_quick_win,
    _content_quick_win,
    _missing_keywords_quick_win,
    _faq_quick_win,
    _links_quick_win,
)


def build_quick_wins(signals: PageSignals, missing_keywords: Sequence[str]) -> Tuple[QuickWin, ...]:
    wins: List[QuickWin] = []
    for check in QUICK_WIN_CHECKS:
        win = check(signals, missing_keywords)
        if win is not None:
            wins.append(win)
    return tuple(wins)
