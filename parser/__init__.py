"""Parser package: HTML text to a queryable element list."""

from parser.html import Element, HtmlDocument, decode_html_bytes, parse_html

__all__ = ["Element", "HtmlDocument", "decode_html_bytes", "parse_html"]
