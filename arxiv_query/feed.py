"""Decode arXiv Atom response bodies into the pydantic feed schema.

Elements are matched by local name, so the decoder accepts both the
namespaced documents the API returns (Atom, arxiv and opensearch namespaces)
and plain un-namespaced XML.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any

from pydantic import ValidationError

from .errors import DecodeError
from .models import ArxivResult, Feed

logger = logging.getLogger(__name__)

ENTRY_SCALAR_FIELDS = (
    "id",
    "title",
    "summary",
    "updated",
    "published",
    "doi",
    "comment",
    "journal_ref",
)

FEED_COUNTERS = {
    "totalResults": "total_results",
    "startIndex": "start_index",
    "itemsPerPage": "items_per_page",
}

OPTIONAL_TEXT_FIELDS = ("doi", "comment", "journal_ref")

API_ERROR_ID_MARKER = "/api/errors"


def _local_name(tag: str) -> str:
    """Strip the namespace from an ElementTree tag: "{ns}entry" -> "entry"."""
    return tag.rsplit("}", 1)[-1]


def _entry_to_dict(element: ET.Element) -> dict[str, Any]:
    """Convert an <entry> element into a dict matching the Entry model."""
    data: dict[str, Any] = {"authors": [], "links": [], "categories": []}

    for child in element:
        name = _local_name(child.tag)

        if name in ENTRY_SCALAR_FIELDS:
            text = child.text or ""
            if name in OPTIONAL_TEXT_FIELDS and not text.strip():
                # <arxiv:doi/> carries no value; leave the field absent
                continue
            # First occurrence wins
            data.setdefault(name, text)
        elif name == "author":
            author: dict[str, Any] = {}
            for part in child:
                if _local_name(part.tag) == "name":
                    author["name"] = part.text or ""
            data["authors"].append(author)
        elif name == "link":
            data["links"].append(dict(child.attrib))
        elif name == "primary_category":
            data["primary_category"] = dict(child.attrib)
        elif name == "category":
            data["categories"].append(dict(child.attrib))

    return data


def _check_api_error(entry: dict[str, Any]) -> None:
    # The API reports malformed queries as a feed holding a single error entry
    if API_ERROR_ID_MARKER in entry.get("id", ""):
        message = (entry.get("summary") or "unknown error").strip()
        raise DecodeError(f"arXiv API returned an error entry: {message}")


def decode_feed(body: str | bytes) -> Feed:
    """
    Parse a response body into a Feed.

    Args:
        body: Raw Atom XML

    Returns:
        Feed with zero or more entries

    Raises:
        DecodeError: If the body is not well-formed XML, is not a feed, or
            an entry is missing a required field
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise DecodeError(f"Failed to parse response body as XML: {e}") from e

    if _local_name(root.tag) != "feed":
        raise DecodeError(
            f"Expected a <feed> document, got <{_local_name(root.tag)}>"
        )

    data: dict[str, Any] = {"entries": []}
    for child in root:
        name = _local_name(child.tag)
        if name == "entry":
            entry = _entry_to_dict(child)
            _check_api_error(entry)
            data["entries"].append(entry)
        elif name in FEED_COUNTERS:
            data[FEED_COUNTERS[name]] = (child.text or "").strip() or None

    try:
        feed = Feed.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Response feed did not match the expected schema: {e}") from e

    logger.debug(
        f"Decoded feed with {len(feed.entries)} entries "
        f"(total_results={feed.total_results})"
    )
    return feed


def decode_results(body: str | bytes) -> list[ArxivResult]:
    """Decode a response body straight into result records, in feed order."""
    feed = decode_feed(body)
    return [ArxivResult.from_entry(entry) for entry in feed.entries]
