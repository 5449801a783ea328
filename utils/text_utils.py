"""Utility helpers for scanning page text.

Everything here is literal, case-insensitive matching: keywords are escaped
before they reach the regex engine, so phrases such as ``C++`` or ``Q&A``
match exactly as typed.  No stemming, no fuzzy matching.
"""
from __future__ import annotations
import re


# Heuristic link markers: markdown links, bare URLs and HTML anchors
_MARKDOWN_LINK_RE = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
_PLAIN_URL_RE = re.compile(r'https?://[^\s<>"]+', re.IGNORECASE)
_HTML_ANCHOR_RE = re.compile(r'<a[^>]+href', re.IGNORECASE)

_SUBHEADING_RE = re.compile(r'##|<h2', re.IGNORECASE)

FAQ_MARKERS = (
    "faq",
    "ofte stillede spørgsmål",
    "spørgsmål og svar",
    "q&a",
    "questions",
)
_FAQ_RE = re.compile("|".join(re.escape(m) for m in FAQ_MARKERS), re.IGNORECASE)
_FAQ_STRIP_RE = re.compile(r'[_*#]')


def build_scan_text(title: str, meta_description: str, h1: str, body: str) -> str:
    """Return the lower-cased text that keyword counts are taken from."""
    return " ".join([title, meta_description, h1, body]).lower()


def count_occurrences(text: str, keyword: str) -> int:
    """Count non-overlapping, case-insensitive occurrences of *keyword*."""
    if not text or not keyword:
        return 0
    return len(re.findall(re.escape(keyword.lower()), text.lower()))



def contains_keyword(text: str, keyword: str) -> bool:
    """Case-insensitive substring test; an empty keyword matches nothing."""
    if not keyword:
        return False
    return keyword.lower() in text.lower()


def count_words(text: str) -> int:
    """Number of whitespace-separated tokens in *text*."""
    return len(text.split())


def count_subheadings(body: str) -> int:
    """Count H2-level markers (markdown ``##`` or HTML ``<h2``)."""
    return len(_SUBHEADING_RE.findall(body))


def count_links(*texts: str) -> int:
    """Count link markers across *texts*.

    Markdown links, bare http(s) URLs and HTML anchors are counted
    independently, so a markdown link to an absolute URL counts twice.
    """
    content = " ".join(texts)
    return (
        len(_MARKDOWN_LINK_RE.findall(content))
        + len(_PLAIN_URL_RE.findall(content))
        + len(_HTML_ANCHOR_RE.findall(content))
    )


def has_faq_section(body: str, h1: str, title: str) -> bool:
    """True when the page text carries an FAQ indicator phrase.

    Markdown emphasis and heading markers are removed first so ``**F_A_Q**``
    style decoration does not hide the marker.
    """
    clean_text = _FAQ_STRIP_RE.sub("", (body + h1 + title).lower())
    return bool(_FAQ_RE.search(clean_text))
