"""Benchmark a page's report against a competitor's report."""
from __future__ import annotations

from typing import List, Optional

from analysis import analyze_page
from models import CompetitorComparison, PageInput, ScoreReport, ScrapedPage
from utils.logger import get_logger

logger = get_logger(__name__)


def analyze_competitor(page: PageInput, competitor: ScrapedPage) -> ScoreReport:
    """Score *competitor* with the same keywords the own page is scored on."""
    competitor_input = competitor.to_page_input(
        target_keyword=page.target_keyword,
        semantic_keywords=page.semantic_keywords,
    )
    return analyze_page(competitor_input)


def build_insights(own: ScoreReport, competitor: ScoreReport) -> List[str]:
    """Plain-language differences between the two reports, in a fixed order."""
    insights: List[str] = []

    word_delta = own.word_count - competitor.word_count
    if word_delta < 0:
        insights.append(f"The competitor has {-word_delta} more words. Consider expanding the content.")
    elif word_delta > 0:
        insights.append(f"Your content is deeper, with {word_delta} more words.")

    keyword_delta = own.keywords_found - competitor.keywords_found
    if keyword_delta > 0:
        insights.append(f"Better keyword coverage: you cover {keyword_delta} more keywords.")
    elif keyword_delta < 0:
        insights.append(f"The competitor covers {-keyword_delta} more keywords.")

    score_delta = own.percentage - competitor.percentage
    if score_delta > 0:
        insights.append(f"You are ahead! Your page scores {score_delta} points higher overall.")
    elif score_delta < 0:
        insights.append(f"The competitor scores {-score_delta} points higher overall.")

    return insights


def compare_reports(
    own: ScoreReport,
    competitor: ScoreReport,
    competitor_url: str,
    own_structured_data: Optional[bool] = None,
    competitor_structured_data: Optional[bool] = None,
) -> CompetitorComparison:
    """
    Build the benchmark table for two reports scored on the same keywords.

    Args:
        own (ScoreReport): Report for the page being optimised
        competitor (ScoreReport): Report for the competitor page
        competitor_url (str): Where the competitor page was fetched from
        own_structured_data (bool, optional): JSON-LD presence on the own page, if known
        competitor_structured_data (bool, optional): JSON-LD presence on the competitor page, if known

    Returns:
        CompetitorComparison: Side-by-side metrics plus insight sentences
    """
    comparison = CompetitorComparison(
        competitor_url=competitor_url,
        own_word_count=own.word_count,
        competitor_word_count=competitor.word_count,
        own_keywords_found=own.keywords_found,
        competitor_keywords_found=competitor.keywords_found,
        keywords_total=len(own.keywords),
        own_percentage=own.percentage,
        competitor_percentage=competitor.percentage,
        own_structured_data=own_structured_data,
        competitor_structured_data=competitor_structured_data,
        insights=tuple(build_insights(own, competitor)),
    )
    logger.info(
        "Compared against %s: %d%% vs %d%%",
        competitor_url, comparison.own_percentage, comparison.competitor_percentage,
    )
    return comparison
