"""Shared data models for the SEO content dashboard.

These dataclasses provide a single, typed representation of the page data
that flows from the scraper and the input form into the scoring engine, and
of the report that flows back out to the dashboard and the exporters.

Report entities are frozen and hold tuples so a returned report can be shared
freely; ``to_dict()`` turns any of them into plain JSON-serialisable data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class KeywordStatus(str, Enum):
    COVERED = "Covered"
    NEEDS_WORK = "NeedsWork"
    MISSING = "Missing"


class Severity(str, Enum):
    OK = "ok"
    WARN = "warn"
    ERROR = "error"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecommendationTopic(str, Enum):
    """Fixed recommendation topics, in report order."""

    TITLE = "title"
    H1 = "h1"
    SUBHEADINGS = "subheadings"
    CONTENT = "content"
    LINKS = "links"
    META = "meta"
    FAQ = "faq"


class ContentGapTopic(str, Enum):
    """Fixed content-gap topics, in report order."""

    CONTENT_DEPTH = "content_depth"
    MISSING_KEYWORDS = "missing_keywords"
    STRUCTURED_DATA = "structured_data"


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass
class PageInput:
    """Everything the scorer needs to know about one page."""

    target_keyword: str
    semantic_keywords: List[str] = field(default_factory=list)
    page_title: str = ""
    meta_description: str = ""
    h1: str = ""
    body_content: str = ""
    url: str = ""
    competitor_urls: List[str] = field(default_factory=list)
    # Overrides from the scraper; None means "let the engine work it out"
    word_count: Optional[int] = None
    internal_links: Optional[int] = None
    h2_count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PageInput":
        return cls(
            target_keyword=str(data.get("target_keyword", "")),
            semantic_keywords=list(data.get("semantic_keywords", [])),
            page_title=str(data.get("page_title", "")),
            meta_description=str(data.get("meta_description", "")),
            h1=str(data.get("h1", "")),
            body_content=str(data.get("body_content", "")),
            url=str(data.get("url", "")),
            competitor_urls=list(data.get("competitor_urls", [])),
            word_count=_optional_int(data.get("word_count")),
            internal_links=_optional_int(data.get("internal_links")),
            h2_count=_optional_int(data.get("h2_count")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "competitor_urls": list(self.competitor_urls),
            "target_keyword": self.target_keyword,
            "semantic_keywords": list(self.semantic_keywords),
            "page_title": self.page_title,
            "meta_description": self.meta_description,
            "h1": self.h1,
            "body_content": self.body_content,
            "word_count": self.word_count,
            "internal_links": self.internal_links,
            "h2_count": self.h2_count,
        }


@dataclass(frozen=True)
class PageSignals:
    """Measurements taken from a PageInput in one pass.

    The score factors, the recommendation builders and the gap/quick-win
    builders all read from this record, so every derived boolean and count
    is computed exactly once per analysis.
    """

    target_keyword: str
    semantic_keywords: Tuple[str, ...]
    scan_text: str
    target_count: int
    semantic_counts: Tuple[int, ...]
    word_count: int
    title_length: int
    title_has_keyword: bool
    title_good_length: bool
    meta_length: int
    meta_has_keyword: bool
    meta_good_length: bool
    h1: str
    h1_present: bool
    h1_has_keyword: bool
    h2_count: int
    link_count: int
    has_faq: bool

    @property
    def semantic_covered(self) -> int:
        return sum(1 for count in self.semantic_counts if count >= 1)


@dataclass(frozen=True)
class KeywordRecord:
    keyword: str
    count: int
    status: KeywordStatus
    recommended_min: int
    recommended_max: int
    is_target: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "count": self.count,
            "status": self.status.value,
            "recommended_min": self.recommended_min,
            "recommended_max": self.recommended_max,
            "is_target": self.is_target,
        }


@dataclass(frozen=True)
class ScoreComponent:
    """Points achieved by one scoring factor."""

    name: str
    points: int
    max_points: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "points": self.points, "max_points": self.max_points}


@dataclass(frozen=True)
class Recommendation:
    topic: RecommendationTopic
    severity: Severity
    label: str
    status_label: str
    detail: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.topic.value,
            "severity": self.severity.value,
            "label": self.label,
            "status_label": self.status_label,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class ContentGap:
    topic: ContentGapTopic
    heading: str
    title: str
    description: str
    tag: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.topic.value,
            "heading": self.heading,
            "title": self.title,
            "description": self.description,
            "tag": self.tag,
        }


@dataclass(frozen=True)
class QuickWin:
    priority: Priority
    title: str
    detail: str

    def to_dict(self) -> Dict[str, Any]:
        return {"priority": self.priority.value, "title": self.title, "detail": self.detail}


@dataclass(frozen=True)
class ScoreReport:
    """Canonical result of one scoring run."""

    score: int
    percentage: int
    keywords: Tuple[KeywordRecord, ...]
    recommendations: Tuple[Recommendation, ...]
    content_gaps: Tuple[ContentGap, ...]
    quick_wins: Tuple[QuickWin, ...]
    score_components: Tuple[ScoreComponent, ...]
    word_count: int
    keywords_found: int
    keywords_needs_work: int
    keywords_missing: int
    max_score: int = 100

    @property
    def missing_keywords(self) -> List[str]:
        return [k.keyword for k in self.keywords if k.status is KeywordStatus.MISSING]

    def recommendation(self, topic: RecommendationTopic) -> Recommendation:
        for rec in self.recommendations:
            if rec.topic is topic:
                return rec
        raise KeyError(topic)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "max_score": self.max_score,
            "percentage": self.percentage,
            "keywords": [k.to_dict() for k in self.keywords],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "content_gaps": [g.to_dict() for g in self.content_gaps],
            "quick_wins": [w.to_dict() for w in self.quick_wins],
            "score_components": [c.to_dict() for c in self.score_components],
            "word_count": self.word_count,
            "keywords_found": self.keywords_found,
            "keywords_needs_work": self.keywords_needs_work,
            "keywords_missing": self.keywords_missing,
        }


# ----------------------------------------------------------------------
# Collaborator data: scraper output, GSC rows, competitor benchmarks
# ----------------------------------------------------------------------


@dataclass
class ScrapedPage:
    """Page fields extracted from a scrape API response."""

    url: str
    title: str = ""
    description: str = ""
    h1: str = ""
    body_content: str = ""
    word_count: int = 0
    internal_links: int = 0
    h2_count: int = 0
    has_structured_data: bool = False
    structured_data_types: List[str] = field(default_factory=list)

    def to_page_input(
        self,
        target_keyword: str,
        semantic_keywords: Optional[List[str]] = None,
        competitor_urls: Optional[List[str]] = None,
    ) -> PageInput:
        return PageInput(
            target_keyword=target_keyword,
            semantic_keywords=list(semantic_keywords or []),
            page_title=self.title,
            meta_description=self.description,
            h1=self.h1,
            body_content=self.body_content,
            url=self.url,
            competitor_urls=list(competitor_urls or []),
            word_count=self.word_count,
            internal_links=self.internal_links,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "h1": self.h1,
            "body_content": self.body_content,
            "word_count": self.word_count,
            "internal_links": self.internal_links,
            "h2_count": self.h2_count,
            "has_structured_data": self.has_structured_data,
            "structured_data_types": list(self.structured_data_types),
        }


@dataclass(frozen=True)
class GscRow:
    """One query row from a Google Search Console performance export."""

    keyword: str
    impressions: int = 0
    clicks: int = 0
    position: float = 0.0

    @property
    def ctr(self) -> float:
        """Click-through rate in percent."""
        if self.impressions <= 0:
            return 0.0
        return self.clicks / self.impressions * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "impressions": self.impressions,
            "clicks": self.clicks,
            "position": self.position,
            "ctr": round(self.ctr, 2),
        }


@dataclass(frozen=True)
class RankingOpportunity:
    row: GscRow
    estimated_extra_clicks: int


@dataclass(frozen=True)
class GscOpportunities:
    missing_on_page: Tuple[GscRow, ...] = ()
    near_top_three: Tuple[RankingOpportunity, ...] = ()
    low_ctr: Tuple[GscRow, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.missing_on_page or self.near_top_three or self.low_ctr)


@dataclass(frozen=True)
class CompetitorComparison:
    competitor_url: str
    own_word_count: int
    competitor_word_count: int
    own_keywords_found: int
    competitor_keywords_found: int
    keywords_total: int
    own_percentage: int
    competitor_percentage: int
    own_structured_data: Optional[bool] = None
    competitor_structured_data: Optional[bool] = None
    insights: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "competitor_url": self.competitor_url,
            "own_word_count": self.own_word_count,
            "competitor_word_count": self.competitor_word_count,
            "own_keywords_found": self.own_keywords_found,
            "competitor_keywords_found": self.competitor_keywords_found,
            "keywords_total": self.keywords_total,
            "own_percentage": self.own_percentage,
            "competitor_percentage": self.competitor_percentage,
            "own_structured_data": self.own_structured_data,
            "competitor_structured_data": self.competitor_structured_data,
            "insights": list(self.insights),
        }
