import streamlit as st

from config import DEV_MODE, FIRECRAWL_API_KEY
from models import PageInput
from seo_parser import parse_gsc_export
from services import (
    analyze_competitor,
    analyze_page,
    check_custom_keywords,
    compare_reports,
    find_gsc_opportunities,
    scrape_page,
)
from ui_components import (
    display_competitor_comparison,
    display_content_gaps,
    display_custom_keywords,
    display_download,
    display_gsc_data,
    display_gsc_opportunities,
    display_keywords,
    display_quick_wins,
    display_recommendations,
    display_score_overview,
    initialize_session_state,
    reset_session_state,
    split_commas,
    split_lines,
)
from utils.errors import SEODashboardError
from utils.logger import get_logger

logger = get_logger(__name__)

SAMPLE_PAGE = {
    "url": "https://example.com/red-shoes",
    "target_keyword": "red shoes",
    "semantic_keywords": "sneakers, leather, free shipping",
    "page_title": "Buy Red Shoes Online Today Fast",
    "meta_description": "Shop red shoes in leather and canvas. Free shipping on all orders over $50 and free returns within 30 days on every pair of red shoes.",
    "h1": "Red Shoes for Every Occasion",
    "body_content": "## Why red shoes\n\nRed shoes add colour to any outfit.\n\n## FAQ\n\nAre red shoes in fashion? Yes.",
}

# Streamlit page configuration
st.set_page_config(
    page_title="SEO Dashboard",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
    menu_items={
        'About': "# SEO Dashboard\nRule-based on-page SEO scoring for one target keyword."
    }
)

# Call at the start of the app
initialize_session_state()


def _api_key() -> str:
    return st.session_state.get('firecrawl_api_key') or FIRECRAWL_API_KEY


def current_page_input() -> PageInput:
    """Build the scorer input from the form, reusing scrape counts while the body is untouched."""
    page = PageInput(
        target_keyword=st.session_state.target_keyword.strip(),
        semantic_keywords=split_commas(st.session_state.semantic_keywords),
        page_title=st.session_state.page_title,
        meta_description=st.session_state.meta_description,
        h1=st.session_state.h1,
        body_content=st.session_state.body_content,
        url=st.session_state.url.strip(),
        competitor_urls=split_lines(st.session_state.competitor_urls),
    )
    scraped = st.session_state.get('scraped_page')
    if scraped is not None and scraped.body_content == page.body_content:
        page.word_count = scraped.word_count
        page.internal_links = scraped.internal_links
    return page


def fetch_page():
    """Button callback: scrape the URL and fill empty-or-stale form fields."""
    st.session_state.scrape_error = ''
    try:
        scraped = scrape_page(st.session_state.url, _api_key())
    except SEODashboardError as e:
        logger.warning(f"Scrape failed: {e}")
        st.session_state.scrape_error = str(e)
        return
    st.session_state.scraped_page = scraped
    st.session_state.page_title = scraped.title or st.session_state.page_title
    st.session_state.meta_description = scraped.description or st.session_state.meta_description
    st.session_state.h1 = scraped.h1 or st.session_state.h1
    st.session_state.body_content = scraped.body_content or st.session_state.body_content


def fetch_competitor():
    """Button callback: scrape the first competitor URL and benchmark it."""
    st.session_state.scrape_error = ''
    competitor_urls = split_lines(st.session_state.competitor_urls)
    if not competitor_urls or not st.session_state.target_keyword.strip():
        return
    competitor_url = competitor_urls[0]
    try:
        scraped = scrape_page(competitor_url, _api_key())
    except SEODashboardError as e:
        logger.warning(f"Competitor scrape failed: {e}")
        st.session_state.scrape_error = str(e)
        return
    page = current_page_input()
    own_scraped = st.session_state.get('scraped_page')
    st.session_state.competitor_comparison = compare_reports(
        analyze_page(page),
        analyze_competitor(page, scraped),
        competitor_url,
        own_structured_data=own_scraped.has_structured_data if own_scraped is not None else None,
        competitor_structured_data=scraped.has_structured_data,
    )


def load_sample():
    for key, value in SAMPLE_PAGE.items():
        st.session_state[key] = value


# Sidebar for API configuration
with st.sidebar:
    st.title("Configuration")
    if DEV_MODE:
        st.info("Development Mode Enabled", icon="🛠️")
        st.button("Load sample page", on_click=load_sample)

    st.text_input(
        "Firecrawl API Key",
        type="password",
        key="firecrawl_api_key",
        help="Overrides FIRECRAWL_API_KEY from the environment. Not stored.",
    )
    if not _api_key():
        st.warning("Add a Firecrawl API key to fetch pages automatically.")

    st.button("Reset", on_click=reset_session_state)

# Main app title and description
st.title("SEO Dashboard")
st.markdown("""
Score a page's on-page SEO against a target keyword and related semantic keywords.
Fetch the page from its URL or paste the content, and the score updates as you edit.
""")

input_col, result_col = st.columns([2, 3])

with input_col:
    st.markdown("### Page")
    st.text_input("URL", key="url", placeholder="https://example.com/page")
    st.button("Fetch page", on_click=fetch_page, disabled=not st.session_state.url.strip())
    st.text_area("Competitor URLs (one per line)", key="competitor_urls", height=80)
    st.button(
        "🔍 Analyse competitor",
        on_click=fetch_competitor,
        disabled=not (st.session_state.competitor_urls.strip() and st.session_state.target_keyword.strip()),
    )
    if st.session_state.scrape_error:
        st.error(st.session_state.scrape_error)

    st.markdown("### Keywords")
    st.text_input("Target keyword", key="target_keyword")
    st.text_input("Semantic keywords (comma separated)", key="semantic_keywords")
    st.text_input("Custom keywords (comma separated)", key="custom_keywords")

    gsc_file = st.file_uploader(
        "Google Search Console data (optional: keyword, impressions, clicks, position)",
        type=["csv", "xlsx"],
    )
    if gsc_file is not None and gsc_file.name != st.session_state.gsc_file_name:
        try:
            st.session_state.gsc_rows = parse_gsc_export(gsc_file)
            st.session_state.gsc_file_name = gsc_file.name
        except SEODashboardError as e:
            st.error(str(e))
    if st.session_state.gsc_rows:
        st.success(f"✓ {len(st.session_state.gsc_rows)} keywords loaded from GSC")

    st.markdown("### Content")
    st.text_input("Page title", key="page_title")
    st.caption(f"{len(st.session_state.page_title)} characters (30-65 recommended)")
    st.text_area("Meta description", key="meta_description", height=80)
    st.caption(f"{len(st.session_state.meta_description)} characters (120-160 recommended)")
    st.text_input("H1", key="h1")
    st.text_area("Body content (markdown)", key="body_content", height=320)

with result_col:
    if not st.session_state.target_keyword.strip():
        st.info("Enter a target keyword to see the analysis.")
    else:
        page = current_page_input()
        report = analyze_page(page)

        display_score_overview(report)
        if page.url:
            st.caption(f"URL: {page.url}")

        comparison = st.session_state.competitor_comparison
        if comparison is not None:
            display_competitor_comparison(comparison)

        display_recommendations(report)
        display_keywords(report)
        display_custom_keywords(check_custom_keywords(page, split_commas(st.session_state.custom_keywords)))

        if st.session_state.gsc_rows:
            display_gsc_data(st.session_state.gsc_rows, page)
            display_gsc_opportunities(find_gsc_opportunities(st.session_state.gsc_rows, page))

        display_content_gaps(report)
        display_quick_wins(report)
        display_download(page, report, comparison)

# Footer
st.markdown("---")
st.markdown("SEO Dashboard")
