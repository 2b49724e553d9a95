"""Page-by-page collection of raw records from a paginated endpoint."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

import requests

from config import MAX_PAGES
from errors import ParseError
from scrapers.client import build_session, fetch_json

logger = logging.getLogger(__name__)

# Envelope keys that may hold the records array, in lookup order
RECORD_KEYS = ["data", "results", "items", "records", "hits", "speakers", "partners"]
# "count" is left out: many APIs use it for the size of the current page
TOTAL_KEYS = ["total", "totalCount", "total_count", "nbHits"]


def extract_records(payload: Any, source: str = "response") -> list:
    """Locate the records array in a decoded page."""
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict):
        for key in RECORD_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value
            # {"data": {"items": [...]}} style envelopes
            if isinstance(value, dict):
                for inner_key in RECORD_KEYS:
                    if isinstance(value.get(inner_key), list):
                        return value[inner_key]

    raise ParseError(source, "no records array in response envelope")


def extract_total(payload: Any) -> Optional[int]:
    """Return the total record count advertised by the envelope, if any."""
    if not isinstance(payload, dict):
        return None

    candidates = [payload.get(key) for key in TOTAL_KEYS]
    meta = payload.get("meta")
    if isinstance(meta, dict):
        candidates.append(meta.get("total"))

    for value in candidates:
        # bool is an int subclass; a stray flag is not a count
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
    return None


def collect_all(
    endpoint: str,
    page_size: int,
    *,
    params: Optional[dict] = None,
    session: Optional[requests.Session] = None,
    workers: int = 1,
    page_param: str = "page",
    size_param: str = "limit",
    first_page: int = 1,
    max_pages: int = MAX_PAGES,
) -> list[dict]:
    """
    Fetch every page of an endpoint and return the raw records in API order.

    Stops on an empty page, a page repeating the previous one, when a known
    total has been reached, or after ``max_pages`` pages. Any fetch or parse failure aborts the collection.

    Args:
        endpoint: URL of the paginated resource
        page_size: Records requested per page
        params: Extra query parameters sent with every page
        workers: Pages fetched concurrently once the total is known

    Returns:
        Every raw record, ordered by page then by position within the page
    """
    session = session or build_session()
    base_params = dict(params or {})

    def fetch_page(page: int) -> tuple[list, Optional[int]]:
        query = {**base_params, page_param: page, size_param: page_size}
        payload = fetch_json(endpoint, query, session=session)
        return extract_records(payload, endpoint), extract_total(payload)

    records, total = fetch_page(first_page)
    logger.info(f"Page {first_page}: {len(records)} records (total: {total if total is not None else 'unknown'})")
    if not records:
        return []

    if total is not None and workers > 1:
        records += _collect_remaining_parallel(
            fetch_page, first_page, len(records), total, max_pages, workers
        )
        return records[:total]

    pages_fetched = 1
    page = first_page
    previous = list(records)
    while total is None or len(records) < total:
        if pages_fetched >= max_pages:
            logger.warning(f"Stopped after {max_pages} pages; raise VIVATECH_MAX_PAGES if records are missing")
            break
        page += 1
        batch, _ = fetch_page(page)
        pages_fetched += 1
        if not batch:
            break
        if batch == previous:
            logger.warning(f"Page {page} repeats page {page - 1}; the endpoint may ignore '{page_param}', stopping")
            break
        previous = batch
        records.extend(batch)
        logger.info(f"Page {page}: {len(batch)} records (accumulated: {len(records)})")

    if total is not None and len(records) > total:
        records = records[:total]
    return records


def _collect_remaining_parallel(fetch_page, first_page, per_page, total, max_pages, workers) -> list:
    """Fetch pages after the first concurrently, keeping page order."""
    page_count = -(-total // per_page)
    if page_count > max_pages:
        logger.warning(f"Total of {total} needs {page_count} pages; only fetching {max_pages}, raise VIVATECH_MAX_PAGES if records are missing")
        page_count = max_pages
    remaining = list(range(first_page + 1, first_page + page_count))
    if not remaining:
        return []

    logger.info(f"Fetching {len(remaining)} more pages with {workers} workers")
    records = []
    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        # map() yields results in submission order
        for page, (batch, _) in zip(remaining, executor.map(fetch_page, remaining)):
            if not batch:
                break
            records.extend(batch)
            logger.info(f"Page {page}: {len(batch)} records")
    finally:
        executor.shutdown(wait=True, cancel_futures=True)

    return records
