import math
from typing import Iterable, List, Sequence, Tuple

from content_gaps import build_content_gaps, build_quick_wins
from models import (
    KeywordRecord,
    KeywordStatus,
    PageInput,
    PageSignals,
    ScoreComponent,
    ScoreReport,
)
from recommendations import build_recommendations
from utils.logger import get_logger
from utils.text_utils import (
    build_scan_text,
    contains_keyword,
    count_links,
    count_occurrences,
    count_subheadings,
    count_words,
    has_faq_section,
)

# logger setup
logger = get_logger(__name__)

MAX_SCORE = 100

# Recommended occurrence ranges (min, max)
TARGET_RANGE = (5, 9)
SEMANTIC_RANGE = (2, 4)

TITLE_LENGTH_RANGE = (30, 65)
META_LENGTH_RANGE = (120, 160)

# (threshold, points) pairs, highest threshold first
CONTENT_LENGTH_TIERS = ((800, 20), (500, 14), (300, 8), (150, 4))
DENSITY_TIERS = ((6, 15), (4, 10), (2, 5), (1, 2))
SUBHEADING_TIERS = ((2, 5), (1, 3))
LINK_TIERS = ((1, 5),)

SEMANTIC_COVERAGE_POINTS = 15


def round_half_up(value: float) -> int:
    """Round halves towards positive infinity; Python's round() rounds halves to even."""
    return int(math.floor(value + 0.5))


def clean_keywords(keywords: Iterable[str]) -> List[str]:
    """Strip keywords and drop blank entries, keeping order and duplicates."""
    return [kw.strip() for kw in keywords if kw and kw.strip()]


def _tier_points(value: int, tiers: Sequence[Tuple[int, int]]) -> int:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return 0


def _in_range(value: int, bounds: Tuple[int, int]) -> bool:
    return bounds[0] <= value <= bounds[1]


def extract_signals(page: PageInput) -> PageSignals:
    """
    Measure everything the scoring factors and report builders need.

    Args:
        page (PageInput): The page to measure

    Returns:
        PageSignals: Counts and booleans derived from the page
    """
    target = page.target_keyword.strip()
    semantic = tuple(clean_keywords(page.semantic_keywords))
    scan_text = build_scan_text(page.page_title, page.meta_description, page.h1, page.body_content)

    # Scraper overrides win over the local heuristics; a link count of 0 falls back to scanning the text
    word_count = page.word_count if page.word_count is not None else count_words(page.body_content)
    h2_count = page.h2_count if page.h2_count is not None else count_subheadings(page.body_content)
    if page.internal_links:
        link_count = page.internal_links
    else:
        link_count = count_links(page.body_content, page.page_title, page.meta_description)

    return PageSignals(
        target_keyword=target,
        semantic_keywords=semantic,
        scan_text=scan_text,
        target_count=count_occurrences(scan_text, target),
        semantic_counts=tuple(count_occurrences(scan_text, kw) for kw in semantic),
        word_count=word_count,
        title_length=len(page.page_title),
        title_has_keyword=contains_keyword(page.page_title, target),
        title_good_length=_in_range(len(page.page_title), TITLE_LENGTH_RANGE),
        meta_length=len(page.meta_description),
        meta_has_keyword=contains_keyword(page.meta_description, target),
        meta_good_length=_in_range(len(page.meta_description), META_LENGTH_RANGE),
        h1=page.h1,
        h1_present=len(page.h1) > 0,
        h1_has_keyword=contains_keyword(page.h1, target),
        h2_count=h2_count,
        link_count=link_count,
        has_faq=has_faq_section(page.body_content, page.h1, page.page_title),
    )


# ----------------------------------------------------------------------
# Score factors
# ----------------------------------------------------------------------

def title_points(signals: PageSignals) -> int:
    return (10 if signals.title_has_keyword else 0) + (5 if signals.title_good_length else 0)


def meta_points(signals: PageSignals) -> int:
    return (8 if signals.meta_has_keyword else 0) + (7 if signals.meta_good_length else 0)


def h1_points(signals: PageSignals) -> int:
    return (5 if signals.h1_present else 0) + (5 if signals.h1_has_keyword else 0)


def content_length_points(word_count: int) -> int:
    return _tier_points(word_count, CONTENT_LENGTH_TIERS)


def density_points(target_count: int) -> int:
    return _tier_points(target_count, DENSITY_TIERS)


def semantic_coverage_points(covered: int, total: int) -> int:
    # No semantic keywords means nothing is uncovered: full credit
    ratio = covered / (total or 1)
    return round_half_up(ratio * SEMANTIC_COVERAGE_POINTS)


def subheading_points(h2_count: int) -> int:
    return _tier_points(h2_count, SUBHEADING_TIERS)


def link_points(link_count: int) -> int:
    return _tier_points(link_count, LINK_TIERS)


def compute_score_components(signals: PageSignals) -> Tuple[ScoreComponent, ...]:
    """Evaluate the eight scoring factors in report order."""
    return (
        ScoreComponent("Title Tag", title_points(signals), 15),
        ScoreComponent("Meta Description", meta_points(signals), 15),
        ScoreComponent("H1", h1_points(signals), 10),
        ScoreComponent("Content Length", content_length_points(signals.word_count), 20),
        ScoreComponent("Keyword Density", density_points(signals.target_count), 15),
        ScoreComponent(
            "Semantic Coverage",
            semantic_coverage_points(signals.semantic_covered, len(signals.semantic_keywords)),
            SEMANTIC_COVERAGE_POINTS,
        ),
        ScoreComponent("Subheadings", subheading_points(signals.h2_count), 5),
        ScoreComponent("Links", link_points(signals.link_count), 5),
    )


# ----------------------------------------------------------------------
# Keyword classification
# ----------------------------------------------------------------------

def classify_keyword(count: int, recommended_min: int) -> KeywordStatus:
    if count == 0:
        return KeywordStatus.MISSING
    if count < recommended_min:
        return KeywordStatus.NEEDS_WORK
    return KeywordStatus.COVERED


def _keyword_record(keyword: str, count: int, bounds: Tuple[int, int], is_target: bool = False) -> KeywordRecord:
    return KeywordRecord(
        keyword=keyword,
        count=count,
        status=classify_keyword(count, bounds[0]),
        recommended_min=bounds[0],
        recommended_max=bounds[1],
        is_target=is_target,
    )


def classify_keywords(signals: PageSignals) -> Tuple[KeywordRecord, ...]:
    """Target keyword first, then each semantic keyword in input order."""
    records = [_keyword_record(signals.target_keyword, signals.target_count, TARGET_RANGE, is_target=True)]
    for keyword, count in zip(signals.semantic_keywords, signals.semantic_counts):
        records.append(_keyword_record(keyword, count, SEMANTIC_RANGE))
    return tuple(records)


def check_custom_keywords(page: PageInput, keywords: Iterable[str]) -> List[KeywordRecord]:
    """
    Classify ad-hoc keywords against the page without touching the score.

    Args:
        page (PageInput): The page to scan
        keywords (Iterable[str]): Extra keywords typed by the user

    Returns:
        list: One KeywordRecord per non-blank keyword, in input order
    """
    scan_text = build_scan_text(page.page_title, page.meta_description, page.h1, page.body_content)
    return [
        _keyword_record(keyword, count_occurrences(scan_text, keyword), SEMANTIC_RANGE)
        for keyword in clean_keywords(keywords)
    ]


# ----------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------

def analyze_page(page: PageInput) -> ScoreReport:
    """
    Score a page against its target and semantic keywords.

    The analysis is a pure function of *page*: no I/O, no shared state, and
    identical input always yields an identical report.

    Args:
        page (PageInput): Page text plus keywords and optional scraper overrides

    Returns:
        ScoreReport: Score, keyword table, recommendations, gaps and quick wins
    """
    signals = extract_signals(page)

    components = compute_score_components(signals)
    score = sum(component.points for component in components)
    percentage = min(round_half_up(score), MAX_SCORE)

    keywords = classify_keywords(signals)
    missing_keywords = [k.keyword for k in keywords if k.status is KeywordStatus.MISSING]

    report = ScoreReport(
        score=score,
        percentage=percentage,
        keywords=keywords,
        recommendations=build_recommendations(signals),
        content_gaps=build_content_gaps(signals, missing_keywords),
        quick_wins=build_quick_wins(signals, missing_keywords),
        score_components=components,
        word_count=signals.word_count,
        keywords_found=sum(1 for k in keywords if k.status is KeywordStatus.COVERED),
        keywords_needs_work=sum(1 for k in keywords if k.status is KeywordStatus.NEEDS_WORK),
        keywords_missing=len(missing_keywords),
        max_score=MAX_SCORE,
    )

    logger.info(f"Page analysis complete for '{signals.target_keyword}'. Score: {report.percentage}%")
    return report
