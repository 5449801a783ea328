"""
Shared pytest fixtures for the SEO dashboard test suite.

Provides:
  - ``make_page``: factory building a ``PageInput`` that scores full marks
    on every factor, with any field overridable per test.
  - ``optimised_page`` / ``bare_page``: ready-made pages at both ends of
    the scale.
"""

from __future__ import annotations

from typing import Callable

import pytest

from models import PageInput

TARGET = "red shoes"

# 31 characters, contains the target keyword
GOOD_TITLE = "Buy Red Shoes Online Today Fast"

# 140 characters, contains the target keyword five times
GOOD_META = ("Shop red shoes in every size. " * 5)[:140]

GOOD_H1 = "Red Shoes for Every Occasion"


def filler_words(n: int) -> str:
    """*n* neutral words that match none of the test keywords."""
    return " ".join(["lorem"] * n)


def good_body(extra_words: int = 800) -> str:
    return (
        "## Why red shoes\n\n"
        + filler_words(extra_words)
        + "\n\n## FAQ\n\n"
        + "red shoes red shoes red shoes sneakers sneakers leather leather "
        + "[shop](https://example.com/shop)"
    )


@pytest.fixture
def make_page() -> Callable[..., PageInput]:
    """Return a factory for ``PageInput`` with full-score defaults."""

    def _make(**overrides) -> PageInput:
        fields = dict(
            target_keyword=TARGET,
            semantic_keywords=["sneakers", "leather"],
            page_title=GOOD_TITLE,
            meta_description=GOOD_META,
            h1=GOOD_H1,
            body_content=good_body(),
            url="https://example.com/red-shoes",
        )
        fields.update(overrides)
        return PageInput(**fields)

    return _make


@pytest.fixture
def optimised_page(make_page) -> PageInput:
    return make_page()


@pytest.fixture
def bare_page() -> PageInput:
    """Only a target keyword; every text field empty."""
    return PageInput(target_keyword=TARGET)
