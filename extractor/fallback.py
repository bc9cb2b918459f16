"""Fill empty title/description/url from generic HTML when no og: value exists."""

from __future__ import annotations

from core.models import ObjectBase
from parser.html import HtmlDocument


def apply_fallbacks(target: ObjectBase, document: HtmlDocument, fallback_url: str | None) -> None:
    """
    Fill unset fields in place; og:-sourced values are never overwritten.

    - url: the caller's fallback URL (may stay None)
    - title: first <title> element text
    - description: first <meta property="description"> content
    """
    if target.url is None:
        target.url = fallback_url

    if not target.title:
        title_element = document.first("title")
        if title_element is not None:
            target.title = title_element.text.strip()

    if not target.description:
        description_element = document.first("meta", "property", equals="description")
        if description_element is not None:
            content = description_element.attr("content")
            if content is not None:
                target.description = content.strip()
