"""VivaTech scraping pipeline: fetch raw records, then map them."""

import logging
from typing import Optional, Union

import requests

from config import (
    PAGE_SIZE,
    PARTNERS_API_URL,
    PARTNERS_PAGE_URL,
    SPEAKERS_API_URL,
    SPEAKERS_PAGE_URL,
)
from errors import ParseError
from models import Partner, Speaker
from scrapers.client import build_session, fetch
from scrapers.embedded import extract_embedded_records
from scrapers.pagination import collect_all
from scrapers.partners import map_partner, map_partners
from scrapers.speakers import map_speaker, map_speakers

logger = logging.getLogger(__name__)

SPEAKERS = "speakers"
PARTNERS = "partners"
KINDS = (SPEAKERS, PARTNERS)

SOURCE_API = "api"
SOURCE_PAGE = "page"

DEFAULT_URLS = {
    (SPEAKERS, SOURCE_API): SPEAKERS_API_URL,
    (PARTNERS, SOURCE_API): PARTNERS_API_URL,
    (SPEAKERS, SOURCE_PAGE): SPEAKERS_PAGE_URL,
    (PARTNERS, SOURCE_PAGE): PARTNERS_PAGE_URL,
}

# Keys identifying the right embedded array on each page
EMBEDDED_KEYS = {
    SPEAKERS: ("id", "firstname"),
    PARTNERS: ("id", "name"),
}


def map_record(raw: dict, kind: str) -> Union[Speaker, Partner]:
    """Map a single raw object to the record type for ``kind``."""
    if kind == SPEAKERS:
        return map_speaker(raw)
    if kind == PARTNERS:
        return map_partner(raw)
    raise ValueError(f"Unknown record kind: {kind}")


def _is_exhibitor(raw: dict) -> bool:
    """Partner pages also embed non-exhibitor objects; keep partners and startups."""
    kind = raw.get("type")
    return isinstance(kind, str) and ("partner" in kind or kind == "startup")


def fetch_page_records(
    kind: str,
    url: str,
    session: Optional[requests.Session] = None,
    debug_html: Optional[str] = None,
) -> list[dict]:
    """
    Read the records embedded in a public page.

    When nothing is found and ``debug_html`` is set, the page is saved there.
    """
    html = fetch(url, session=session, headers={"Accept": "text/html,application/xhtml+xml"})
    logger.info(f"Fetched {len(html)} bytes from {url}")

    try:
        raws = extract_embedded_records(html, EMBEDDED_KEYS[kind])
    except ParseError:
        if debug_html:
            with open(debug_html, "w", encoding="utf-8") as f:
                f.write(html)
            logger.info(f"Saved debug HTML to: {debug_html}")
        raise

    if kind == PARTNERS:
        raws = [raw for raw in raws if _is_exhibitor(raw)]
    return raws


def scrape(
    kind: str,
    url: Optional[str] = None,
    *,
    source: str = SOURCE_API,
    page_size: int = PAGE_SIZE,
    workers: int = 1,
    strict: bool = False,
    session: Optional[requests.Session] = None,
    debug_html: Optional[str] = None,
) -> list:
    """
    Run fetch then map for one dataset.

    Args:
        kind: "speakers" or "partners"
        url: Override of the default endpoint for kind/source
        source: "api" for the paginated backend, "page" for the embedded page data
        page_size: Records per API page
        workers: Concurrent page fetches once the total is known
        strict: Abort on the first unmappable record instead of skipping it

    Returns:
        Mapped records in API order
    """
    if kind not in KINDS:
        raise ValueError(f"Unknown record kind: {kind}")

    url = url or DEFAULT_URLS[(kind, source)]
    session = session or build_session()
    logger.info(f"Scraping {kind} from: {url}")

    if source == SOURCE_PAGE:
        raws = fetch_page_records(kind, url, session=session, debug_html=debug_html)
    else:
        raws = collect_all(url, page_size, session=session, workers=workers)
    logger.info(f"Collected {len(raws)} raw {kind} records")

    if kind == SPEAKERS:
        return map_speakers(raws, strict=strict)
    return map_partners(raws, strict=strict)
