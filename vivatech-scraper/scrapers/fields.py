"""Defensive field access for loosely typed API records."""

from typing import Any

TRUE_STRINGS = ("true", "1", "yes")
FALSE_STRINGS = ("false", "0", "no", "")


def get_text(raw: dict, *keys: str) -> str:
    """Return the first non-empty value among keys as a stripped string."""
    for key in keys:
        value = raw.get(key)
        if value is None or isinstance(value, (bool, dict, list)):
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def get_nested(raw: dict, *path: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    value: Any = raw
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def is_present(value: Any) -> bool:
    """True for non-empty strings, collections and truthy scalars."""
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def get_flag(raw: dict, flag_key: str, *content_keys: str) -> bool:
    """
    Read a boolean flag.

    An explicit flag field wins; otherwise the flag is true when any of the
    content fields is non-empty (e.g. hasBio from biography).
    """
    value = raw.get(flag_key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    if value is not None:
        return is_present(value)
    return any(is_present(raw.get(key)) for key in content_keys)


def get_list(raw: dict, *keys: str) -> tuple[str, ...]:
    """
    Read a multi-value field as a tuple of strings.

    Absent or null fields give an empty tuple. Object entries contribute
    their name, label or title.
    """
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            continue

        items = []
        for entry in value:
            if isinstance(entry, dict):
                entry = get_text(entry, "name", "label", "title")
            elif entry is not None:
                entry = str(entry).strip()
            if entry:
                items.append(entry)
        return tuple(items)
    return ()
