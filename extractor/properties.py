"""Scan a parsed document for og: meta tags and normalize them into Properties."""

from __future__ import annotations

from typing import Iterator

from core.models import Property
from parser.html import HtmlDocument


OG_PREFIX = "og:"

# Both conventions are scanned in this order, one full pass each.
META_KEY_ATTRIBUTES = ("name", "property")


def extract_properties(document: HtmlDocument, deduplicate: bool = False) -> Iterator[Property]:
    """
    Yield og: properties in scan order.

    All `<meta name="og:...">` tags come first, then all
    `<meta property="og:...">` tags, each pass in document order. A tag
    carrying both attributes is yielded once per pass unless `deduplicate`
    is set, in which case the second pass skips tags already yielded.
    """
    seen: set[int] = set()
    for attribute in META_KEY_ATTRIBUTES:
        for element in document.select("meta", attribute, startswith=OG_PREFIX):
            if deduplicate:
                if element.index in seen:
                    continue
                seen.add(element.index)
            raw_name = element.attr(attribute) or ""
            key = raw_name[len(OG_PREFIX):].strip().lower()
            value = (element.attr("content") or "").strip()
            yield Property(key=key, value=value)
