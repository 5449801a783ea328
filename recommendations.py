"""Fixed-topic recommendations derived from page signals.

Every topic in :class:`models.RecommendationTopic` has exactly one builder
below, registered in ``_BUILDERS``.  A report therefore always carries the
same seven recommendations in enum order; only severity and wording change.
"""
from __future__ import annotations

from typing import Callable, Dict, Tuple

from models import PageSignals, Recommendation, RecommendationTopic, Severity

LABELS: Dict[RecommendationTopic, str] = {
    RecommendationTopic.TITLE: "Title Tag",
    RecommendationTopic.H1: "H1",
    RecommendationTopic.SUBHEADINGS: "Subheadings",
    RecommendationTopic.CONTENT: "Content Length",
    RecommendationTopic.LINKS: "Internal Links",
    RecommendationTopic.META: "Meta Description",
    RecommendationTopic.FAQ: "FAQ Section",
}

_DEFAULT_STATUS_LABELS = {
    Severity.OK: "Optimised",
    Severity.WARN: "1 warning",
    Severity.ERROR: "1 error",
}


def _recommendation(topic: RecommendationTopic, severity: Severity, detail: str, status_label: str = "") -> Recommendation:
    return Recommendation(
        topic=topic,
        severity=severity,
        label=LABELS[topic],
        status_label=status_label or _DEFAULT_STATUS_LABELS[severity],
        detail=detail,
    )


def _title(s: PageSignals) -> Recommendation:
    topic = RecommendationTopic.TITLE
    if s.title_has_keyword and s.title_good_length:
        return _recommendation(
            topic, Severity.OK,
            f"Title tag looks good ({s.title_length} characters) and contains the target keyword.",
        )
    if s.title_has_keyword:
        return _recommendation(
            topic, Severity.WARN,
            f"Title tag contains the keyword but is {s.title_length} characters. "
            f"Optimal length: 30-65 characters.",
        )
    return _recommendation(
        topic, Severity.ERROR,
        f'Title tag is missing the target keyword "{s.target_keyword}". Add it early in the title.',
    )


def _h1(s: PageSignals) -> Recommendation:
    topic = RecommendationTopic.H1
    if s.h1_has_keyword:
        return _recommendation(topic, Severity.OK, f'H1 is optimised and contains "{s.target_keyword}".')
    if s.h1_present:
        return _recommendation(
            topic, Severity.WARN,
            f'H1 is present but missing the target keyword. Current H1: "{s.h1}"',
        )
    return _recommendation(topic, Severity.ERROR, "No H1 found. Add an H1 that includes the target keyword.")


def _subheadings(s: PageSignals) -> Recommendation:
    topic = RecommendationTopic.SUBHEADINGS
    if s.h2_count >= 2:
        return _recommendation(topic, Severity.OK, f"{s.h2_count} H2 headings found. Good structure.")
    severity = Severity.WARN if s.h2_count >= 1 else Severity.ERROR
    return _recommendation(
        topic, severity,
        f"Only {s.h2_count} H2 found. Add more subheadings that cover the semantic keywords.",
        status_label=f"{s.h2_count} found",
    )


def _content(s: PageSignals) -> Recommendation:
    topic = RecommendationTopic.CONTENT
    if s.word_count >= 800:
        verdict = "Excellent content length."
    elif s.word_count >= 500:
        verdict = "Good, but competitors typically have 800+ words."
    else:
        verdict = (
            "Too short. Google prefers 500-800+ words for competitive search terms. "
            "Use the action plan below to add content."
        )
    detail = f"The page has ~{s.word_count} words. {verdict}"

    if s.word_count >= 500:
        return _recommendation(topic, Severity.OK, detail)
    severity = Severity.WARN if s.word_count >= 300 else Severity.ERROR
    # Short pages read as an error in the status pill even at warn severity
    return _recommendation(topic, severity, detail, status_label="1 error")


def _links(s: PageSignals) -> Recommendation:
    topic = RecommendationTopic.LINKS
    if s.link_count >= 1:
        if s.link_count == 1:
            detail = "1 internal link found. One relevant link beats many irrelevant ones."
        else:
            detail = f"{s.link_count} internal links found. Good internal linking."
        return _recommendation(topic, Severity.OK, detail)
    return _recommendation(
        topic, Severity.ERROR,
        "No internal links found. Add at least one relevant link to a related page.",
        status_label="0 found",
    )


def _meta(s: PageSignals) -> Recommendation:
    topic = RecommendationTopic.META
    if s.meta_has_keyword and s.meta_good_length:
        return _recommendation(topic, Severity.OK, f"Meta description is optimised ({s.meta_length} characters).")
    if s.meta_has_keyword:
        return _recommendation(
            topic, Severity.WARN,
            f"Meta description contains the keyword but is {s.meta_length} characters. "
            f"Optimal: 120-160 characters.",
            status_label="1 error",
        )
    too = "short" if s.meta_length < 120 else "long"
    return _recommendation(
        topic, Severity.ERROR,
        f"Meta description is missing the target keyword and/or is too {too} "
        f"({s.meta_length} characters). Optimal: 120-160 characters.",
    )


def _faq(s: PageSignals) -> Recommendation:
    topic = RecommendationTopic.FAQ
    if s.has_faq:
        return _recommendation(
            topic, Severity.OK,
            "FAQ section found. Add FAQPage JSON-LD structured data to trigger rich snippets in Google.",
        )
    return _recommendation(
        topic, Severity.WARN,
        "No FAQ section found. Add 3-5 questions and answers with JSON-LD structured data "
        "for better SERP visibility.",
    )


_BUILDERS: Dict[RecommendationTopic, Callable[[PageSignals], Recommendation]] = {
    RecommendationTopic.TITLE: _title,
    RecommendationTopic.H1: _h1,
    RecommendationTopic.SUBHEADINGS: _subheadings,
    RecommendationTopic.CONTENT: _content,
    RecommendationTopic.LINKS: _links,
    RecommendationTopic.META: _meta,
    RecommendationTopic.FAQ: _faq,
}


def build_recommendations(signals: PageSignals) -> Tuple[Recommendation, ...]:
    """One recommendation per topic, in topic order."""
    return tuple(_BUILDERS[topic](signals) for topic in RecommendationTopic)
