import streamlit as st
import pandas as pd
from typing import List, Optional, Sequence

from gsc_analysis import keyword_on_page, page_scan_text
from models import (
    CompetitorComparison,
    GscOpportunities,
    GscRow,
    KeywordRecord,
    KeywordStatus,
    PageInput,
    ScoreReport,
)
from report_export import create_report_zip, report_filename
from utils.logger import get_logger

# logger setup
logger = get_logger(__name__)

_STATUS_COLORS = {
    KeywordStatus.COVERED: "green",
    KeywordStatus.NEEDS_WORK: "orange",
    KeywordStatus.MISSING: "red",
}
_PRIORITY_DOTS = {"high": "🔴", "medium": "🟡", "low": "🟢"}

GSC_TABLE_ROWS = 10


def score_color(percentage: int) -> str:
    if percentage >= 70:
        return "green"
    if percentage >= 45:
        return "orange"
    return "red"


def display_dataframe(title, data, key_prefix):
    """Helper function to consistently display dataframes with a title"""
    if data:
        st.markdown(f"#### {title}")
        df = pd.DataFrame(data)
        st.dataframe(df, use_container_width=True, hide_index=True, key=f"{key_prefix}_df")


def display_score_overview(report: ScoreReport):
    """
    Show the headline score, progress bar and per-factor breakdown.
    """
    color = score_color(report.percentage)
    st.markdown(
        f"### SEO Score: <span style='color:{color}'>{report.percentage}</span>/{report.max_score}",
        unsafe_allow_html=True,
    )
    st.progress(report.percentage / 100)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Words", report.word_count)
    col2.metric("Covered", report.keywords_found)
    col3.metric("Needs work", report.keywords_needs_work)
    col4.metric("Missing", report.keywords_missing)

    with st.expander("Score breakdown", expanded=False):
        breakdown = [
            {"Factor": c.name, "Points": c.points, "Max": c.max_points}
            for c in report.score_components
        ]
        display_dataframe("Points per factor", breakdown, "breakdown")


def display_recommendations(report: ScoreReport):
    st.subheader("Recommendations")
    for rec in report.recommendations:
        with st.expander(f"{rec.label}: {rec.status_label}", expanded=rec.severity.value == "error"):
            if rec.severity.value == "ok":
                st.success(rec.detail)
            elif rec.severity.value == "warn":
                st.warning(rec.detail)
            else:
                st.error(rec.detail)


def escape_brackets(text: str) -> str:
    """Backslash-escape square brackets so text is safe inside ``:color[...]`` markup."""
    return text.replace("[", "\\[").replace("]", "\\]")


def _keyword_pill(record: KeywordRecord) -> str:
    color = _STATUS_COLORS[record.status]
    suffix = " ✓" if record.status is KeywordStatus.COVERED else (f" {record.count}×" if record.count else "")
    return f":{color}[{escape_brackets(record.keyword)}{suffix}]"


def display_keywords(report: ScoreReport):
    st.subheader("Keywords")
    st.markdown(" · ".join(_keyword_pill(k) for k in report.keywords))

    keyword_data = [
        {
            "Keyword": k.keyword,
            "Status": k.status.value,
            "Recommended": f"{k.recommended_min}-{k.recommended_max}×",
            "Current": f"{k.count}×",
        }
        for k in report.keywords
    ]
    display_dataframe("Keyword table", keyword_data, "keywords")


def display_custom_keywords(records: Sequence[KeywordRecord]):
    if not records:
        return
    st.subheader("Custom keywords")
    st.markdown(" · ".join(_keyword_pill(k) for k in records))


def display_gsc_data(rows: Sequence[GscRow], page: PageInput):
    """
    Show the imported GSC queries and whether each one appears on the page.
    """
    if not rows:
        return
    scan_text = page_scan_text(page)
    table = [
        {
            "Keyword": row.keyword,
            "Clicks": row.clicks,
            "Impressions": row.impressions,
            "Position": round(row.position, 1),
            "On page?": "✓" if keyword_on_page(row, scan_text) else "✗",
        }
        for row in rows[:GSC_TABLE_ROWS]
    ]
    display_dataframe("Google Search Console data", table, "gsc")
    if len(rows) > GSC_TABLE_ROWS:
        st.caption(f"Showing top {GSC_TABLE_ROWS} of {len(rows)} keywords from GSC")


def display_gsc_opportunities(opportunities: GscOpportunities):
    st.subheader("GSC keyword gap analysis")
    if opportunities.is_empty:
        st.success("No immediate quick wins found in the GSC data. Your page is performing well! 🎉")
        return

    if opportunities.missing_on_page:
        st.markdown("##### Low-hanging fruit")
        st.caption("Queries with impressions that never appear on the page")
        for row in opportunities.missing_on_page:
            st.markdown(
                f"**{row.keyword}**: {row.impressions:,} impressions · {row.clicks:,} clicks · "
                f"Pos {row.position:.1f}"
            )

    if opportunities.near_top_three:
        st.markdown("##### Close to top 3")
        for item in opportunities.near_top_three:
            st.markdown(
                f"**{item.row.keyword}**: position #{item.row.position:.1f} · "
                f"{item.row.impressions:,} impressions · `+{item.estimated_extra_clicks} clicks`"
            )

    if opportunities.low_ctr:
        st.markdown("##### Improve title/meta")
        for row in opportunities.low_ctr:
            st.markdown(f"**{row.keyword}**: {row.impressions:,} impressions · CTR {row.ctr:.1f}%")


def display_content_gaps(report: ScoreReport):
    st.subheader("Content gaps")
    columns = st.columns(len(report.content_gaps))
    for column, gap in zip(columns, report.content_gaps):
        with column:
            st.markdown(
                f"<div style='border-top: 3px solid {gap.tag}; padding-top: 8px'>"
                f"<small>{gap.heading}</small></div>",
                unsafe_allow_html=True,
            )
            st.markdown(f"**{gap.title}**")
            st.caption(gap.description)


def display_quick_wins(report: ScoreReport):
    st.subheader("Quick wins")
    if not report.quick_wins:
        st.info("No quick wins left.")
        return
    for win in report.quick_wins:
        st.markdown(f"{_PRIORITY_DOTS[win.priority.value]} **{win.title}**  \n{win.detail}")


def display_competitor_comparison(comparison: CompetitorComparison):
    st.subheader("Competitor benchmark")
    st.caption(comparison.competitor_url)

    def _structured(value: Optional[bool]) -> str:
        if value is None:
            return "?"
        return "✓" if value else "✗"

    table = [
        {"Metric": "Word count", "You": comparison.own_word_count, "Competitor": comparison.competitor_word_count},
        {
            "Metric": "Keywords covered",
            "You": f"{comparison.own_keywords_found}/{comparison.keywords_total}",
            "Competitor": f"{comparison.competitor_keywords_found}/{comparison.keywords_total}",
        },
        {
            "Metric": "Structured data",
            "You": _structured(comparison.own_structured_data),
            "Competitor": _structured(comparison.competitor_structured_data),
        },
        {"Metric": "Score", "You": f"{comparison.own_percentage}%", "Competitor": f"{comparison.competitor_percentage}%"},
    ]
    # Mixed int/str columns; render everything as text
    st.dataframe(pd.DataFrame(table).astype(str), use_container_width=True, hide_index=True)
    for insight in comparison.insights:
        st.markdown(f"- {insight}")


def display_download(page: PageInput, report: ScoreReport, comparison: Optional[CompetitorComparison] = None):
    zip_buffer = create_report_zip(page, report, comparison)
    st.download_button(
        label="Download report (ZIP)",
        data=zip_buffer,
        file_name=report_filename(page.target_keyword, "zip"),
        mime="application/zip",
    )


def split_lines(value: str) -> List[str]:
    return [line.strip() for line in value.splitlines() if line.strip()]


def split_commas(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def initialize_session_state():
    """
    Initialize Streamlit session state with default values.
    """
    defaults = {
        'url': '',
        'competitor_urls': '',
        'target_keyword': '',
        'semantic_keywords': '',
        'custom_keywords': '',
        'page_title': '',
        'meta_description': '',
        'h1': '',
        'body_content': '',
        'scraped_page': None,
        'scrape_error': '',
        'gsc_rows': [],
        'gsc_file_name': '',
        'competitor_comparison': None,
        'firecrawl_api_key': '',
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def reset_session_state():
    for key in list(st.session_state.keys()):
        del st.session_state[key]
    initialize_session_state()
