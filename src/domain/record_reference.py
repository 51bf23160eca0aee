"""Record reference parsing.

A record reference is the URL of a catalogue detail page, e.g.
``https://datacatalogue.cessda.eu/detail/abc123?lang=en``. The segment after
``/detail/`` identifies the record; the optional ``lang`` query parameter
selects the language used for keyword matching.
"""

import re
from typing import Optional
from urllib.parse import SplitResult, urlsplit

from domain.errors import InvalidRecordReferenceError

DETAIL_SEGMENT = "/detail/"

_LANGUAGE_CODE = re.compile(r"^[a-zA-Z]{2}$")


def split_reference(url: str) -> SplitResult:
    """Split a record reference into its URL components.

    Raises:
        InvalidRecordReferenceError: If the reference is not a parseable URL.
    """
    try:
        return urlsplit(url)
    except ValueError as e:
        raise InvalidRecordReferenceError(f"Malformed URL '{url}': {e}") from e


def extract_record_identifier(url: str) -> str:
    """Return the record identifier following the ``/detail/`` marker.

    Raises:
        InvalidRecordReferenceError: If the URL cannot be parsed, the marker
            is absent or nothing follows it before the query string.
    """
    split_reference(url)
    clean_url = url.split("?", 1)[0]
    if DETAIL_SEGMENT not in clean_url:
        raise InvalidRecordReferenceError(f"URL must contain '{DETAIL_SEGMENT}': {url}")

    record_id = clean_url[clean_url.index(DETAIL_SEGMENT) + len(DETAIL_SEGMENT):]
    if not record_id:
        raise InvalidRecordReferenceError(f"No record identifier in URL: {url}")
    return record_id


def extract_language_code(url: str) -> Optional[str]:
    """Return the lower-cased two-letter ``lang`` parameter, if well formed."""
    try:
        query = split_reference(url).query
    except InvalidRecordReferenceError:
        return None
    if not query:
        return None

    for param in query.split("&"):
        key, sep, value = param.partition("=")
        if sep and key.lower() == "lang" and _LANGUAGE_CODE.match(value):
            return value.lower()
    return None
