"""Minimal queryable HTML document built on the stdlib HTML parser."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Iterator


_VOID_TAGS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
}
# Start tag → tags that stop the search for an open element it implicitly closes.
_IMPLIED_END_TAGS: dict[str, set[str]] = {
    "li": {"ul", "ol", "menu"},
    "dt": {"dl"},
    "dd": {"dl"},
    "p": {"div", "section", "article", "blockquote", "li", "td", "th", "body"},
    "option": {"select", "datalist", "optgroup"},
    "tr": {"table", "thead", "tbody", "tfoot"},
    "td": {"tr", "table"},
    "th": {"tr", "table"},
}
_CHARSET_RE = re.compile(rb"<meta[^>]+charset\s*=\s*[\"']?\s*([a-zA-Z0-9._:-]+)", re.IGNORECASE)
_CHARSET_HEADER_RE = re.compile(r"charset=[\"']?([a-zA-Z0-9._:-]+)", re.IGNORECASE)
_CHARSET_SNIFF_BYTES = 4096
# A document that can carry an ASCII <meta charset> is never really UTF-16.
_META_CHARSET_OVERRIDES = {"utf-16": "utf-8", "utf-16le": "utf-8", "utf-16be": "utf-8"}


@dataclass
class Element:
    """One element with its attributes and its direct text/child content."""

    tag: str
    attrs: dict[str, str]
    index: int  # Position in document order
    _parts: list[str | Element] = field(default_factory=list, repr=False)

    def attr(self, name: str) -> str | None:
        """Return an attribute value, or None when the attribute is absent."""
        return self.attrs.get(name)

    @property
    def text(self) -> str:
        """Return the raw text content of this element and its descendants."""
        chunks: list[str] = []
        stack = [iter(self._parts)]
        while stack:
            for part in stack[-1]:
                if isinstance(part, Element):
                    stack.append(iter(part._parts))
                    break
                chunks.append(part)
            else:
                stack.pop()
        return "".join(chunks)


class _DocumentBuilder(HTMLParser):
    """Collect every element in document order; text goes to the innermost open element."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.elements: list[Element] = []
        self._open: list[Element] = []
        self._open_counts: dict[str, int] = {}

    def _add(self, tag: str, attrs: list[tuple[str, str | None]]) -> Element:
        attrs_map: dict[str, str] = {}
        for name, value in attrs:
            # First occurrence of a duplicated attribute wins, like browsers.
            attrs_map.setdefault(name.lower(), value or "")
        element = Element(tag=tag.lower(), attrs=attrs_map, index=len(self.elements))
        self.elements.append(element)
        if self._open:
            self._open[-1]._parts.append(element)
        return element

    def _close_from(self, position: int) -> None:
        for element in self._open[position:]:
            self._open_counts[element.tag] -= 1
        del self._open[position:]

    def _close_implied(self, tag: str) -> None:
        boundaries = _IMPLIED_END_TAGS.get(tag)
        if boundaries is None or not self._open_counts.get(tag):
            return
        for position in range(len(self._open) - 1, -1, -1):
            open_tag = self._open[position].tag
            if open_tag == tag:
                self._close_from(position)
                return
            if open_tag in boundaries:
                return

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._close_implied(tag.lower())
        element = self._add(tag, attrs)
        if element.tag not in _VOID_TAGS:
            self._open.append(element)
            self._open_counts[element.tag] = self._open_counts.get(element.tag, 0) + 1

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._add(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        tag_lower = tag.lower()
        if not self._open_counts.get(tag_lower):
            return
        for position in range(len(self._open) - 1, -1, -1):
            if self._open[position].tag == tag_lower:
                self._close_from(position)
                return

    def handle_data(self, data: str) -> None:
        if self._open:
            self._open[-1]._parts.append(data)


class HtmlDocument:
    """Parsed document supporting tag + attribute selection."""

    def __init__(self, elements: list[Element]) -> None:
        self.elements = elements

    def select(
        self,
        tag: str,
        attribute: str | None = None,
        *,
        startswith: str | None = None,
        equals: str | None = None,
    ) -> Iterator[Element]:
        """
        Yield elements named `tag` in document order.

        With `attribute`, only elements carrying it are yielded, further
        narrowed by a case-sensitive `startswith` prefix or exact `equals`.
        """
        tag_lower = tag.lower()
        for element in self.elements:
            if element.tag != tag_lower:
                continue
            if attribute is None:
                yield element
                continue
            value = element.attr(attribute)
            if value is None:
                continue
            if startswith is not None and not value.startswith(startswith):
                continue
            if equals is not None and value != equals:
                continue
            yield element

    def first(
        self,
        tag: str,
        attribute: str | None = None,
        *,
        startswith: str | None = None,
        equals: str | None = None,
    ) -> Element | None:
        """Return the first matching element, or None."""
        return next(self.select(tag, attribute, startswith=startswith, equals=equals), None)


def decode_html_bytes(body: bytes, content_type: str | None = None) -> str:
    """
    Decode body bytes using charset hints with safe fallback.

    Order: Content-Type header charset, then <meta charset> (UTF-16 labels
    read as UTF-8), then UTF-8, then Latin-1.
    """
    encodings = []
    if content_type:
        header_match = _CHARSET_HEADER_RE.search(content_type)
        if header_match:
            encodings.append(header_match.group(1))
    charset_match = _CHARSET_RE.search(body[:_CHARSET_SNIFF_BYTES])
    if charset_match:
        meta_charset = charset_match.group(1).decode("ascii").lower()
        encodings.append(_META_CHARSET_OVERRIDES.get(meta_charset, meta_charset))
    encodings.append("utf-8")

    for encoding in encodings:
        try:
            return body.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue

    return body.decode("latin-1")


def parse_html(html: str | bytes, content_type: str | None = None) -> HtmlDocument:
    """Parse HTML text (or raw bytes plus optional Content-Type) into a queryable document."""
    html_text = decode_html_bytes(html, content_type) if isinstance(html, bytes) else html
    builder = _DocumentBuilder()
    builder.feed(html_text)
    builder.close()
    return HtmlDocument(builder.elements)
