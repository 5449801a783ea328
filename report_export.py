import io
import json
import re
import zipfile
from datetime import datetime
from typing import List, Optional

import markdown

from models import CompetitorComparison, PageInput, ScoreReport
from utils.logger import get_logger

# logger setup
logger = get_logger(__name__)

_SEVERITY_ICONS = {"ok": "✅", "warn": "⚠️", "error": "❌"}
_PRIORITY_ICONS = {"high": "🔴", "medium": "🟡", "low": "🟢"}


def report_to_markdown(
    page: PageInput,
    report: ScoreReport,
    comparison: Optional[CompetitorComparison] = None,
) -> str:
    """
    Render a score report as a markdown document.

    Args:
        page (PageInput): The analysed page
        report (ScoreReport): The report for *page*
        comparison (CompetitorComparison, optional): Benchmark to append

    Returns:
        str: Markdown text
    """
    lines: List[str] = [
        f"# SEO report: {page.target_keyword}",
        "",
    ]
    if page.url:
        lines += [f"URL: {page.url}", ""]
    lines += [
        f"**Score:** {report.percentage}/{report.max_score}",
        "",
        f"**Word count:** {report.word_count} · "
        f"**Keywords:** {report.keywords_found} covered, {report.keywords_needs_work} need work, "
        f"{report.keywords_missing} missing",
        "",
        "## Score breakdown",
        "",
        "| Factor | Points | Max |",
        "|---|---|---|",
    ]
    lines += [f"| {c.name} | {c.points} | {c.max_points} |" for c in report.score_components]

    lines += ["", "## Keywords", "", "| Keyword | Status | Recommended | Current |", "|---|---|---|---|"]
    for k in report.keywords:
        lines.append(f"| {k.keyword} | {k.status.value} | {k.recommended_min}-{k.recommended_max}× | {k.count}× |")

    lines += ["", "## Recommendations", ""]
    for rec in report.recommendations:
        icon = _SEVERITY_ICONS[rec.severity.value]
        lines.append(f"- {icon} **{rec.label}** ({rec.status_label}): {rec.detail}")

    lines += ["", "## Content gaps", ""]
    for gap in report.content_gaps:
        lines += [f"### {gap.heading}: {gap.title}", "", gap.description, ""]

    lines += ["## Quick wins", ""]
    if report.quick_wins:
        for win in report.quick_wins:
            lines.append(f"- {_PRIORITY_ICONS[win.priority.value]} **{win.title}**: {win.detail}")
    else:
        lines.append("No quick wins left. Nice work!")

    if comparison is not None:
        lines += [
            "",
            f"## Competitor benchmark: {comparison.competitor_url}",
            "",
            "| Metric | You | Competitor |",
            "|---|---|---|",
            f"| Word count | {comparison.own_word_count} | {comparison.competitor_word_count} |",
            f"| Keywords covered | {comparison.own_keywords_found}/{comparison.keywords_total} "
            f"| {comparison.competitor_keywords_found}/{comparison.keywords_total} |",
            f"| Score | {comparison.own_percentage}% | {comparison.competitor_percentage}% |",
            "",
        ]
        lines += [f"- {insight}" for insight in comparison.insights]

    return "\n".join(lines).rstrip() + "\n"


def report_to_html(markdown_content: str) -> str:
    """Convert a markdown report to HTML (tables enabled)."""
    return markdown.markdown(markdown_content, extensions=["tables", "sane_lists"])


def report_filename(keyword: str, extension: str) -> str:
    clean_keyword = re.sub(r'[^a-z0-9]+', '_', keyword.lower()).strip('_') or "page"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"seo_report_{clean_keyword}_{timestamp}.{extension}"


def create_report_zip(
    page: PageInput,
    report: ScoreReport,
    comparison: Optional[CompetitorComparison] = None,
) -> io.BytesIO:
    """
    Bundle the report as markdown, HTML and JSON plus the analysed input.

    Returns:
        io.BytesIO: Buffer containing the ZIP file, rewound to the start
    """
    md_content = report_to_markdown(page, report, comparison)
    report_data = report.to_dict()
    if comparison is not None:
        report_data["competitor"] = comparison.to_dict()

    zip_buffer = io.BytesIO()
    with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zip_file:
        zip_file.writestr("report.md", md_content)
        zip_file.writestr("report.html", report_to_html(md_content))
        zip_file.writestr("report.json", json.dumps(report_data, indent=4, ensure_ascii=False))
        zip_file.writestr("page.json", json.dumps(page.to_dict(), indent=4, ensure_ascii=False))
    zip_buffer.seek(0)
    logger.debug(f"Built report ZIP for '{page.target_keyword}'")
    return zip_buffer
