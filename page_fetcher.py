import json
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from config import FIRECRAWL_SCRAPE_URL, REQUEST_TIMEOUT, SCRAPE_EXCLUDE_TAGS
from models import ScrapedPage
from utils.errors import FetchError, ValidationError, expect
from utils.logger import get_logger
from utils.text_utils import count_words

# logger setup
logger = get_logger(__name__)

_H1_RE = re.compile(r'^#\s+(.+)$', re.MULTILINE)
_H2_RE = re.compile(r'^##\s+', re.MULTILINE)

# A second comma-separated part longer than this means two descriptions were glued together
_GLUED_DESCRIPTION_MIN = 50


def clean_description(description: str) -> str:
    """Keep only the first description when the metadata concatenates several."""
    if "," in description:
        parts = description.split(",")
        if len(parts) > 1 and len(parts[1].strip()) > _GLUED_DESCRIPTION_MIN:
            return parts[0].strip()
    return description


def count_internal_links(markdown: str, url: str) -> int:
    """Count markdown links pointing at the same host as *url*."""
    domain = urlparse(url).hostname or ""
    if not domain:
        return 0
    pattern = re.compile(r'\[.*?\]\(https?://' + re.escape(domain))
    return len(pattern.findall(markdown))


def _collect_types(node: Any, found: List[str]) -> None:
    if isinstance(node, list):
        for item in node:
            _collect_types(item, found)
        return
    if not isinstance(node, dict):
        return
    types = node.get("@type")
    for type_name in types if isinstance(types, list) else [types]:
        if isinstance(type_name, str) and type_name and type_name not in found:
            found.append(type_name)
    if "@graph" in node:
        _collect_types(node["@graph"], found)


def _json_ld_scripts(html: str) -> List[Any]:
    if not html:
        return []
    soup = BeautifulSoup(html, "html.parser")
    return soup.find_all("script", attrs={"type": "application/ld+json"})


def _types_from_scripts(scripts: List[Any]) -> List[str]:
    found: List[str] = []
    for script in scripts:
        raw = script.string or script.get_text() or ""
        try:
            payload = json.loads(raw.strip())
        except ValueError:
            logger.debug("Skipping invalid JSON-LD block")
            continue
        _collect_types(payload, found)
    return found


def extract_structured_data_types(html: str) -> List[str]:
    """
    Return the JSON-LD ``@type`` values declared in *html*, first-seen order.

    Blocks that are not valid JSON are skipped.
    """
    return _types_from_scripts(_json_ld_scripts(html))


def parse_scrape_response(payload: Dict[str, Any], url: str) -> ScrapedPage:
    """
    Turn a Firecrawl scrape response into the fields the scorer consumes.

    Args:
        payload (dict): Decoded JSON body from the scrape endpoint
        url (str): The URL that was requested

    Returns:
        ScrapedPage: Title, description, H1, markdown body and page counts
    """
    data = payload.get("data") or {}
    markdown = data.get("markdown") or ""
    html = data.get("html") or ""
    metadata = data.get("metadata") or {}
    scripts = _json_ld_scripts(html)

    title = metadata.get("title") or ""
    h1_match = _H1_RE.search(markdown)
    h1 = h1_match.group(1).strip() if h1_match else title

    return ScrapedPage(
        url=metadata.get("url") or url,
        title=title,
        description=clean_description(metadata.get("description") or ""),
        h1=h1,
        body_content=markdown,
        word_count=count_words(markdown),
        internal_links=count_internal_links(markdown, url),
        h2_count=len(_H2_RE.findall(markdown)),
        has_structured_data=bool(scripts),
        structured_data_types=_types_from_scripts(scripts),
    )


def scrape_page(url: str, api_key: str, timeout: Optional[int] = None) -> ScrapedPage:
    """
    Fetch *url* through the Firecrawl scrape API.

    Raises:
        ValidationError: When the URL or API key is missing
        FetchError: When the request fails or the API answers with an error
    """
    expect(bool(url and url.strip()), "URL is required", ValidationError)
    expect(bool(api_key), "FIRECRAWL_API_KEY is not set", ValidationError)
    url = url.strip()

    body = {
        "url": url,
        "formats": ["markdown", "html"],
        "onlyMainContent": True,
        "excludeTags": SCRAPE_EXCLUDE_TAGS,
    }
    headers = {"Content-Type": "application/json", "Authorization": f"Bearer {api_key}"}

    logger.debug(f"Scraping {url} | key_prefix={api_key[:5]}***")
    try:
        resp = requests.post(FIRECRAWL_SCRAPE_URL, headers=headers, json=body, timeout=timeout or REQUEST_TIMEOUT)
    except requests.Timeout as e:
        raise FetchError(f"Scrape timed out after {timeout or REQUEST_TIMEOUT} seconds") from e
    except requests.RequestException as e:
        raise FetchError(f"Network error while scraping {url}: {e}") from e

    if not resp.ok:
        raise FetchError(f"Firecrawl error: {resp.text[:500]}", status_code=resp.status_code)

    try:
        payload = resp.json()
    except ValueError as e:
        raise FetchError("Firecrawl returned a response that is not JSON", status_code=resp.status_code) from e

    page = parse_scrape_response(payload, url)
    logger.info(
        f"Scraped {url}: {page.word_count} words, {page.h2_count} H2, {page.internal_links} internal links"
    )
    return page
