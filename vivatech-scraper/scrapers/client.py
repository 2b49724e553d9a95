"""HTTP access to the VivaTech backend with bounded retries."""

import json
import logging
import time
from typing import Any, Optional

import requests

from config import MAX_RETRIES, REQUEST_TIMEOUT, RETRY_DELAY, USER_AGENT
from errors import FetchError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
}


def build_session() -> requests.Session:
    """Create a session carrying the default browser-like headers."""
    session = requests.Session()
    session.headers.update(DEFAULT_HEADERS)
    return session


def fetch(
    url: str,
    params: Optional[dict] = None,
    *,
    method: str = "GET",
    json_body: Optional[dict] = None,
    headers: Optional[dict] = None,
    session: Optional[requests.Session] = None,
    max_retries: int = MAX_RETRIES,
    retry_delay: float = RETRY_DELAY,
    timeout: float = REQUEST_TIMEOUT,
) -> str:
    """
    Request a URL and return the response body as text.

    Network errors and non-2xx responses are retried up to ``max_retries``
    attempts in total, sleeping ``retry_delay * attempt`` seconds in between.

    Raises:
        FetchError: once every attempt has failed
    """
    session = session or build_session()
    attempts = max(1, max_retries)
    last_status = None
    last_reason = ""

    for attempt in range(1, attempts + 1):
        logger.debug(f"{method} {url} params={params} (attempt {attempt}/{attempts})")
        try:
            response = session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=timeout,
            )
        except requests.RequestException as e:
            last_status = None
            last_reason = str(e)
            logger.warning(f"Request to {url} failed: {e}")
        else:
            if 200 <= response.status_code < 300:
                return response.text
            last_status = response.status_code
            last_reason = response.reason or ""
            logger.warning(f"Server returned {response.status_code} for {url}")

        if attempt < attempts:
            time.sleep(retry_delay * attempt)

    raise FetchError(url, last_status, last_reason)


def fetch_json(url: str, params: Optional[dict] = None, **kwargs) -> Any:
    """Fetch a URL and decode the body as JSON."""
    body = fetch(url, params, **kwargs)
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise ParseError(url, f"invalid JSON ({e.msg} at position {e.pos})") from e
