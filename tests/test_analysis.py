"""
Tests for analysis.py: signal extraction, the eight score factors, keyword
classification and the analyze_page() entry point.

What we test
------------
analyze_page():
  - A fully optimised page scores 100; an empty page scores only the
    vacuous semantic-coverage credit.
  - percentage == min(round(score), 100) and components sum to score.
  - Identical input gives identical output.
  - Worked examples: title 15, 799 words -> 14, no semantic keywords -> 15,
    3 target occurrences -> 5, literal "FAQ" -> FAQ ok and no FAQ quick win.

Score factors:
  - Tier boundaries for content length, density, subheadings and links.
  - Density never decreases as the target count grows.
  - Semantic coverage rounds halves up.

Keyword classification:
  - Missing / NeedsWork / Covered law.
  - One record per non-blank keyword, target first, input order kept.

Overrides:
  - Scraper word count, link count and H2 count win over the heuristics.
"""

from __future__ import annotations

import pytest

from analysis import (
    analyze_page,
    check_custom_keywords,
    classify_keyword,
    compute_score_components,
    content_length_points,
    density_points,
    extract_signals,
    link_points,
    round_half_up,
    semantic_coverage_points,
    subheading_points,
)
from conftest import filler_words
from models import KeywordStatus, Priority, RecommendationTopic, Severity


def _component(report, name):
    return next(c for c in report.score_components if c.name == name)


# ── analyze_page: totals ──────────────────────────────────────────────────────

class TestTotals:
    def test_optimised_page_scores_full_marks(self, optimised_page):
        report = analyze_page(optimised_page)
        assert report.score == 100
        assert report.percentage == 100
        assert report.max_score == 100

    def test_bare_page_only_gets_vacuous_semantic_credit(self, bare_page):
        report = analyze_page(bare_page)
        assert report.score == 15
        assert _component(report, "Semantic Coverage").points == 15

    def test_components_sum_to_score(self, make_page):
        report = analyze_page(make_page(h1="", body_content="short body"))
        assert sum(c.points for c in report.score_components) == report.score

    def test_components_are_bounded(self, make_page):
        report = analyze_page(make_page())
        for component in report.score_components:
            assert 0 <= component.points <= component.max_points
        assert sum(c.max_points for c in report.score_components) == 100

    def test_percentage_is_clamped_score(self, make_page):
        for page in (make_page(), make_page(meta_description=""), make_page(body_content="")):
            report = analyze_page(page)
            assert 0 <= report.score <= 100
            assert report.percentage == min(round_half_up(report.score), 100)

    def test_identical_input_gives_identical_report(self, make_page):
        first = analyze_page(make_page())
        second = analyze_page(make_page())
        assert first == second
        assert first.to_dict() == second.to_dict()


# ── Worked examples ──────────────────────────────────────────────────────────

class TestWorkedExamples:
    def test_good_title_scores_fifteen(self, make_page):
        report = analyze_page(make_page(page_title="Buy Red Shoes Online Today Fast"))
        assert _component(report, "Title Tag").points == 15

    def test_799_words_scores_fourteen(self, make_page):
        report = analyze_page(make_page(body_content=filler_words(799)))
        assert report.word_count == 799
        assert _component(report, "Content Length").points == 14

    def test_no_semantic_keywords_scores_full_coverage(self, make_page):
        report = analyze_page(make_page(semantic_keywords=[]))
        assert _component(report, "Semantic Coverage").points == 15

    def test_three_target_occurrences_scores_five(self, make_page):
        page = make_page(
            page_title="Shop now",
            meta_description="",
            h1="",
            body_content="red shoes and more red shoes and yet more red shoes",
        )
        report = analyze_page(page)
        assert report.keywords[0].count == 3
        assert _component(report, "Keyword Density").points == 5

    def test_literal_faq_marks_faq_ok_without_quick_win(self, make_page):
        page = make_page(body_content="See the FAQ below.", page_title="Plain title", h1="")
        report = analyze_page(page)
        assert report.recommendation(RecommendationTopic.FAQ).severity is Severity.OK
        titles = [w.title for w in report.quick_wins]
        assert "Add an FAQ section with JSON-LD" not in titles


# ── Title / meta / H1 factors ────────────────────────────────────────────────

class TestOnPageElements:
    def test_title_keyword_without_length(self, make_page):
        report = analyze_page(make_page(page_title="Red shoes"))
        assert _component(report, "Title Tag").points == 10

    def test_title_length_without_keyword(self, make_page):
        report = analyze_page(make_page(page_title="A perfectly sized title for a page"))
        assert _component(report, "Title Tag").points == 5

    @pytest.mark.parametrize("length,expected", [(29, 10), (30, 15), (65, 15), (66, 10)])
    def test_title_length_bounds(self, make_page, length, expected):
        title = ("red shoes " + "x" * 100)[:length]
        report = analyze_page(make_page(page_title=title))
        assert _component(report, "Title Tag").points == expected

    @pytest.mark.parametrize("length,expected", [(119, 8), (120, 15), (160, 15), (161, 8)])
    def test_meta_length_bounds(self, make_page, length, expected):
        meta = ("red shoes " + "y" * 200)[:length]
        report = analyze_page(make_page(meta_description=meta))
        assert _component(report, "Meta Description").points == expected

    def test_keyword_match_is_case_insensitive(self, make_page):
        report = analyze_page(make_page(h1="RED SHOES"))
        assert _component(report, "H1").points == 10

    def test_h1_without_keyword(self, make_page):
        report = analyze_page(make_page(h1="Welcome"))
        assert _component(report, "H1").points == 5

    def test_missing_h1(self, make_page):
        report = analyze_page(make_page(h1=""))
        assert _component(report, "H1").points == 0


# ── Tiered factors ───────────────────────────────────────────────────────────

class TestTiers:
    @pytest.mark.parametrize(
        "words,points",
        [(0, 0), (149, 0), (150, 4), (299, 4), (300, 8), (499, 8), (500, 14), (799, 14), (800, 20), (5000, 20)],
    )
    def test_content_length_tiers(self, words, points):
        assert content_length_points(words) == points

    @pytest.mark.parametrize("count,points", [(0, 0), (1, 2), (2, 5), (3, 5), (4, 10), (5, 10), (6, 15), (40, 15)])
    def test_density_tiers(self, count, points):
        assert density_points(count) == points

    def test_density_is_monotonic(self):
        scores = [density_points(n) for n in range(0, 20)]
        assert scores == sorted(scores)

    def test_density_is_monotonic_through_analysis(self, make_page):
        previous = -1
        for n in range(0, 9):
            page = make_page(page_title="", meta_description="", h1="", body_content="red shoes " * n)
            points = _component(analyze_page(page), "Keyword Density").points
            assert points >= previous
            previous = points

    @pytest.mark.parametrize("h2,points", [(0, 0), (1, 3), (2, 5), (9, 5)])
    def test_subheading_tiers(self, h2, points):
        assert subheading_points(h2) == points

    @pytest.mark.parametrize("links,points", [(0, 0), (1, 5), (3, 5), (50, 5)])
    def test_link_presence_is_binary(self, links, points):
        assert link_points(links) == points


# ── Semantic coverage ────────────────────────────────────────────────────────

class TestSemanticCoverage:
    def test_partial_coverage(self):
        assert semantic_coverage_points(1, 3) == 5

    def test_halves_round_up(self):
        # 1/6 * 15 = 2.5
        assert semantic_coverage_points(1, 6) == 3
        # 1/2 * 15 = 7.5
        assert semantic_coverage_points(1, 2) == 8

    def test_zero_total_is_full_credit(self):
        assert semantic_coverage_points(0, 0) == 15

    def test_single_occurrence_counts_as_covered(self, make_page):
        page = make_page(semantic_keywords=["sneakers", "boots"], body_content="sneakers once")
        report = analyze_page(page)
        # sneakers present once (NeedsWork), boots missing: 1 of 2 covered
        assert _component(report, "Semantic Coverage").points == 8


# ── Keyword classification ───────────────────────────────────────────────────

class TestKeywordClassification:
    @pytest.mark.parametrize(
        "count,minimum,status",
        [
            (0, 5, KeywordStatus.MISSING),
            (1, 5, KeywordStatus.NEEDS_WORK),
            (4, 5, KeywordStatus.NEEDS_WORK),
            (5, 5, KeywordStatus.COVERED),
            (12, 5, KeywordStatus.COVERED),
            (0, 2, KeywordStatus.MISSING),
            (1, 2, KeywordStatus.NEEDS_WORK),
            (2, 2, KeywordStatus.COVERED),
        ],
    )
    def test_classification_law(self, count, minimum, status):
        assert classify_keyword(count, minimum) is status

    def test_target_and_semantic_ranges(self, optimised_page):
        keywords = analyze_page(optimised_page).keywords
        assert (keywords[0].recommended_min, keywords[0].recommended_max) == (5, 9)
        assert keywords[0].is_target
        for record in keywords[1:]:
            assert (record.recommended_min, record.recommended_max) == (2, 4)
            assert not record.is_target

    def test_blank_semantic_keywords_are_dropped(self, make_page):
        page = make_page(semantic_keywords=["sneakers", "", "   ", "leather", " boots "])
        keywords = analyze_page(page).keywords
        assert [k.keyword for k in keywords] == ["red shoes", "sneakers", "leather", "boots"]

    def test_duplicates_are_kept_in_order(self, make_page):
        page = make_page(semantic_keywords=["leather", "sneakers", "leather"])
        keywords = analyze_page(page).keywords
        assert [k.keyword for k in keywords] == ["red shoes", "leather", "sneakers", "leather"]

    def test_semantic_keyword_equal_to_target_uses_semantic_range(self, make_page):
        keywords = analyze_page(make_page(semantic_keywords=["red shoes"])).keywords
        assert len(keywords) == 2
        assert keywords[1].recommended_min == 2

    def test_tallies(self, make_page):
        page = make_page(
            semantic_keywords=["sneakers", "boots", "laces"],
            body_content="red shoes " * 5 + "sneakers sneakers boots",
        )
        report = analyze_page(page)
        statuses = [k.status for k in report.keywords]
        assert report.keywords_found == statuses.count(KeywordStatus.COVERED)
        assert report.keywords_needs_work == statuses.count(KeywordStatus.NEEDS_WORK)
        assert report.keywords_missing == statuses.count(KeywordStatus.MISSING)
        assert report.missing_keywords == ["laces"]


# ── Overrides and heuristics ─────────────────────────────────────────────────

class TestOverrides:
    def test_word_count_override(self, make_page):
        report = analyze_page(make_page(body_content="two words", word_count=900))
        assert report.word_count == 900
        assert _component(report, "Content Length").points == 20

    def test_positive_link_override_beats_heuristic(self, make_page):
        signals = extract_signals(make_page(internal_links=7))
        assert signals.link_count == 7

    def test_zero_link_override_falls_back_to_content(self, make_page):
        page = make_page(
            body_content="See [our sale](/sale) and [boots](/boots).",
            internal_links=0,
        )
        report = analyze_page(page)
        assert extract_signals(page).link_count == 2
        assert _component(report, "Links").points == 5
        assert report.recommendation(RecommendationTopic.LINKS).severity is Severity.OK

    def test_zero_link_override_without_links_scores_nothing(self, make_page):
        report = analyze_page(make_page(body_content="no links at all", internal_links=0))
        assert _component(report, "Links").points == 0

    def test_h2_override(self, make_page):
        report = analyze_page(make_page(h2_count=1))
        assert _component(report, "Subheadings").points == 3

    def test_h2_heuristic_counts_html_markers(self, make_page):
        signals = extract_signals(make_page(body_content="<H2>One</H2><h2>Two</h2>"))
        assert signals.h2_count == 2

    def test_link_heuristic_scans_title_and_meta(self, make_page):
        page = make_page(body_content="no links here", page_title="See https://example.com")
        assert extract_signals(page).link_count == 1


# ── Degenerate input ─────────────────────────────────────────────────────────

class TestDegenerateInput:
    def test_empty_target_keyword_does_not_fail(self, make_page):
        report = analyze_page(make_page(target_keyword=""))
        assert _component(report, "Title Tag").points == 5
        assert _component(report, "Meta Description").points == 7
        assert _component(report, "H1").points == 5
        assert _component(report, "Keyword Density").points == 0
        assert report.keywords[0].count == 0
        assert report.keywords[0].status is KeywordStatus.MISSING

    def test_target_is_stripped(self, make_page):
        report = analyze_page(make_page(target_keyword="  red shoes  "))
        assert report.keywords[0].keyword == "red shoes"
        assert _component(report, "Title Tag").points == 15

    def test_punctuation_keywords_match_literally(self, make_page):
        page = make_page(
            target_keyword="C++",
            semantic_keywords=["Q&A"],
            body_content="Learn C++ fast. C++ is great. Our q&a covers it.",
        )
        report = analyze_page(page)
        assert report.keywords[0].count == 2
        assert report.keywords[1].count == 1

    def test_bare_page_has_all_five_quick_wins(self, bare_page):
        report = analyze_page(bare_page)
        assert [w.priority for w in report.quick_wins] == [
            Priority.HIGH, Priority.HIGH, Priority.MEDIUM, Priority.MEDIUM, Priority.LOW,
        ]


# ── Custom keywords ──────────────────────────────────────────────────────────

class TestCustomKeywords:
    def test_statuses(self, make_page):
        page = make_page(body_content="sandals sandals clogs")
        records = check_custom_keywords(page, ["sandals", "clogs", "boots", " "])
        assert [(r.keyword, r.status) for r in records] == [
            ("sandals", KeywordStatus.COVERED),
            ("clogs", KeywordStatus.NEEDS_WORK),
            ("boots", KeywordStatus.MISSING),
        ]

    def test_custom_keywords_do_not_change_score(self, optimised_page):
        before = analyze_page(optimised_page)
        check_custom_keywords(optimised_page, ["anything"])
        assert analyze_page(optimised_page) == before


def test_score_components_order(optimised_page):
    names = [c.name for c in compute_score_components(extract_signals(optimised_page))]
    assert names == [
        "Title Tag",
        "Meta Description",
        "H1",
        "Content Length",
        "Keyword Density",
        "Semantic Coverage",
        "Subheadings",
        "Links",
    ]
