"""
Default fetch configuration for opengraph-consumer.

These settings bound what a single `load_url` call may do on the network.
Extraction itself is not configured here; consumer-level switches
(fallback mode, debug mode, meta tag de-duplication) live on the Consumer.
"""

from typing import Set


class FetchConfig:
    """
    Fetch-layer settings.

    Everything defaults to "small + bounded": one request, a short redirect
    chain, and a body cap sized for HTML documents.
    """

    # ========================================================================
    # Request Constraints
    # ========================================================================

    # Protocol whitelist: only http(s), no file://, ftp://, etc.
    ALLOWED_PROTOCOLS: Set[str] = {"http", "https"}
    """Only HTTP(S) allowed."""

    # Maximum number of redirects per fetch
    MAX_REDIRECTS: int = 5
    """Maximum redirect hops per fetch."""

    # Fetch timeout
    FETCH_TIMEOUT_SECONDS: int = 30
    """Maximum time to wait for a single fetch (seconds)."""

    # User-Agent (descriptive, some sites only serve og tags to known crawlers)
    USER_AGENT: str = "opengraph-consumer/0.1 (+https://ogp.me/)"
    """User-Agent header."""

    # ========================================================================
    # Body Constraints
    # ========================================================================

    # The whole body is buffered before parsing, so cap it per content-type
    MAX_BODY_BYTES_BY_TYPE: dict[str, int] = {
        "text/html": 5_000_000,             # 5 MB for HTML pages
        "application/xhtml+xml": 5_000_000,
        "text/plain": 2_000_000,
        "application/pdf": 0,               # binary documents are not fetched
        "image/jpeg": 0,
        "image/png": 0,
    }
    """Max body bytes per content-type. Unlisted types default to MAX_BODY_BYTES_DEFAULT."""

    MAX_BODY_BYTES_DEFAULT: int = 1_000_000
    """Fallback max body size for unknown content-types."""

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration at startup.

        Raises:
            AssertionError: If any constraint is violated.
        """
        assert cls.ALLOWED_PROTOCOLS, "ALLOWED_PROTOCOLS must not be empty"

        assert (
            cls.ALLOWED_PROTOCOLS <= {"http", "https"}
        ), "ALLOWED_PROTOCOLS may only contain http/https"

        assert cls.MAX_REDIRECTS >= 0, "MAX_REDIRECTS must be ≥0"

        assert cls.FETCH_TIMEOUT_SECONDS > 0, "FETCH_TIMEOUT_SECONDS must be > 0"

        assert (
            cls.MAX_BODY_BYTES_DEFAULT > 0
        ), "MAX_BODY_BYTES_DEFAULT must be > 0"

        assert (
            all(b >= 0 for b in cls.MAX_BODY_BYTES_BY_TYPE.values())
        ), "All MAX_BODY_BYTES_BY_TYPE values must be ≥ 0"


# Validate at module import time
FetchConfig.validate()
