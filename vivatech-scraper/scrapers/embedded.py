"""
Records embedded in the server-rendered VivaTech pages.

The public /speakers and /partners pages are Next.js pages whose data is
streamed inside ``self.__next_f.push([1, "..."])`` script tags, i.e. as a
JSON array inside an escaped JS string. This module finds that array and
decodes it without hitting the API.
"""

import json
import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from errors import ParseError

logger = logging.getLogger(__name__)

ARRAY_START = '[{"id":"'
NEXT_PUSH_RE = re.compile(r"self\.__next_f\.push\((.*)\)\s*;?\s*$", re.DOTALL)


def _script_texts(html: str) -> list[str]:
    """Return the JSON-ish text of every script tag, unescaping Next.js pushes."""
    soup = BeautifulSoup(html, "html.parser")
    texts = []

    for script in soup.find_all("script"):
        text = script.string or script.get_text()
        if not text:
            continue

        match = NEXT_PUSH_RE.search(text.strip())
        if match:
            try:
                chunk = json.loads(match.group(1))
            except json.JSONDecodeError:
                logger.debug("Skipping undecodable __next_f chunk")
            else:
                texts.extend(item for item in chunk if isinstance(item, str))
                continue

        texts.append(text)

    return texts


def _balanced_array(text: str, start: int) -> Optional[str]:
    """Return text[start:] up to the bracket closing the array opened at start."""
    depth = 0
    in_string = False
    escape = False

    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def _candidate_arrays(text: str):
    start = text.find(ARRAY_START)
    while start != -1:
        fragment = _balanced_array(text, start)
        if fragment is None:
            return
        try:
            yield json.loads(fragment)
        except json.JSONDecodeError:
            logger.debug(f"Unparseable array at offset {start}")
        start = text.find(ARRAY_START, start + len(fragment))


def extract_embedded_records(html: str, required_keys: tuple[str, ...] = ("id",)) -> list[dict]:
    """
    Find the first embedded array of objects carrying all required keys.

    Args:
        html: Full page HTML
        required_keys: Keys the first object of the array must have

    Raises:
        ParseError: if no matching array is embedded in the page
    """
    for text in _script_texts(html):
        for array in _candidate_arrays(text):
            first = array[0] if array else None
            if isinstance(first, dict) and all(key in first for key in required_keys):
                records = [item for item in array if isinstance(item, dict)]
                logger.info(f"Found embedded array with {len(records)} records")
                return records

    raise ParseError("page", f"no embedded records with keys {', '.join(required_keys)}")
