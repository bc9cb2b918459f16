"""Consumer that extracts Open Graph data from either a URL or an HTML string."""

from __future__ import annotations

from typing import Any

from core.models import ObjectBase
from core.pipeline import FetchStage
from core.structured_logging import EventLogger
from extractor.assigner import build_object
from extractor.fallback import apply_fallbacks
from extractor.properties import extract_properties
from fetcher.http import HttpFetchStage
from parser.html import parse_html


class Consumer:
    """
    Entry point: fetch → parse → extract → resolve → assign → fallback.

    Options persist across calls:
    - use_fallback_mode: fill url/title/description from generic HTML when
      no og: value was found
    - debug: raise MalformedPropertyError for qualified keys (og:image:width)
      that appear before their namespace key (og:image) instead of dropping them
    - deduplicate_meta_tags: count a meta tag carrying both `name="og:..."`
      and `property="og:..."` once instead of twice
    """

    def __init__(
        self,
        fetcher: FetchStage | None = None,
        use_fallback_mode: bool = False,
        debug: bool = False,
        deduplicate_meta_tags: bool = False,
        event_logger: EventLogger | None = None,
    ) -> None:
        """Initialize the fetch collaborator, extraction switches, and event sink."""
        self.fetcher = fetcher or HttpFetchStage(log_fetches=False)
        self.use_fallback_mode = use_fallback_mode
        self.debug = debug
        self.deduplicate_meta_tags = deduplicate_meta_tags
        self.event_logger = event_logger

    @classmethod
    def create(cls, **fetch_options: Any) -> Consumer:
        """Build a consumer with a default HTTP fetcher configured by `fetch_options`."""
        fetch_options.setdefault("log_fetches", False)
        return cls(fetcher=HttpFetchStage(**fetch_options))

    def _emit(self, event_type: str, payload: dict[str, Any]) -> None:
        if self.event_logger:
            self.event_logger(event_type, {"component": "consumer", **payload})

    def load_url(self, url: str) -> ObjectBase:
        """Fetch `url` and extract its Open Graph data; TransportError propagates."""
        body, content_type = self.fetcher.fetch_document(url)
        return self.load_html(body, url, content_type=content_type)

    def load_html(
        self,
        html: str | bytes,
        fallback_url: str | None = None,
        content_type: str | None = None,
    ) -> ObjectBase:
        """
        Extract Open Graph data from an HTML document.

        Byte input is decoded using the charset from `content_type` when
        given, then the document's own <meta charset>.
        """
        document = parse_html(html, content_type)
        properties = list(
            extract_properties(document, deduplicate=self.deduplicate_meta_tags)
        )

        def _on_dropped(message: str) -> None:
            self._emit("og_property_dropped", {"url": fallback_url, "message": message})

        result = build_object(properties, debug=self.debug, warning_hook=_on_dropped)

        if self.use_fallback_mode:
            apply_fallbacks(result, document, fallback_url)

        self._emit(
            "og_extraction_completed",
            {
                "url": fallback_url,
                "object_type": result.object_type,
                "property_count": len(properties),
                "image_count": len(result.images),
                "video_count": len(result.videos),
                "audio_count": len(result.audios),
                "fallback_mode": self.use_fallback_mode,
            },
        )
        return result
