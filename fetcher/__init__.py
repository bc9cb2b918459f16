"""Fetcher subsystem: HTTP retrieval with redirect and body size limits."""

from fetcher.http import (
    BodyLimitExceeded,
    DisallowedUrl,
    FetchTimeout,
    HttpFetchStage,
    HttpStatusError,
    RedirectLimitExceeded,
    TransportError,
    emit_fetch_log,
    fetch_url,
)

__all__ = [
    "BodyLimitExceeded",
    "DisallowedUrl",
    "FetchTimeout",
    "HttpFetchStage",
    "HttpStatusError",
    "RedirectLimitExceeded",
    "TransportError",
    "fetch_url",
    "emit_fetch_log",
]
