"""HTTP fetcher with redirect, protocol, and body size limits."""

from __future__ import annotations

import hashlib
import time
from collections.abc import Callable
from urllib.parse import urljoin, urlparse

import requests

from core.config import FetchConfig
from core.models import FetchErrorCode, FetchedDoc, FetchLog
from core.pipeline import FetchStage
from core.structured_logging import emit_json_event


class TransportError(Exception):
    """Raised when a document cannot be retrieved over HTTP."""

    code: FetchErrorCode = FetchErrorCode.FETCH_ERROR

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DisallowedUrl(TransportError):
    """Raised for URLs with a non-HTTP(S) scheme or no host."""

    code = FetchErrorCode.DISALLOWED_URL


class RedirectLimitExceeded(TransportError):
    """Raised when a URL exceeds the configured redirect limit."""

    code = FetchErrorCode.REDIRECT_LIMIT


class BodyLimitExceeded(TransportError):
    """Raised when response body exceeds configured limits."""

    code = FetchErrorCode.BODY_TOO_LARGE


class FetchTimeout(TransportError):
    """Raised when the server does not answer within the timeout."""

    code = FetchErrorCode.TIMEOUT


class HttpStatusError(TransportError):
    """Raised for 4xx/5xx responses."""

    code = FetchErrorCode.HTTP_STATUS


_ERROR_BY_CODE: dict[FetchErrorCode, type[TransportError]] = {
    cls.code: cls
    for cls in (
        TransportError,
        DisallowedUrl,
        RedirectLimitExceeded,
        BodyLimitExceeded,
        FetchTimeout,
        HttpStatusError,
    )
}


def emit_fetch_log(fetch_log: FetchLog) -> str:
    """Emit one `fetch` event line for a FetchLog and return it for testability."""
    payload = fetch_log.model_dump(mode="json", exclude={"created_at"})
    return emit_json_event(
        "fetch",
        level="error" if fetch_log.error_code else "info",
        component="fetcher",
        **payload,
    )


def _validate_url_scheme(url: str) -> bool:
    """Validate that URL uses allowed protocols."""
    parsed = urlparse(url)
    return parsed.scheme.lower() in FetchConfig.ALLOWED_PROTOCOLS


def _content_limit_for_response(content_type: str | None) -> int:
    """Compute byte limit for a response content-type."""
    if not content_type:
        return FetchConfig.MAX_BODY_BYTES_DEFAULT
    normalized = content_type.split(";", 1)[0].strip().lower()
    return FetchConfig.MAX_BODY_BYTES_BY_TYPE.get(
        normalized,
        FetchConfig.MAX_BODY_BYTES_DEFAULT,
    )


def _read_body_with_limit(response: requests.Response, max_bytes: int) -> bytes:
    """Read response body up to the configured maximum size."""
    if max_bytes == 0:
        raise BodyLimitExceeded("content type is disabled by policy")

    chunks: list[bytes] = []
    total = 0
    for chunk in response.iter_content(chunk_size=8192):
        if not chunk:
            continue
        total += len(chunk)
        if total > max_bytes:
            raise BodyLimitExceeded(f"response exceeds {max_bytes} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


def _follow_redirects(
    session: requests.Session,
    url: str,
    timeout_seconds: int,
    max_redirects: int,
    user_agent: str,
) -> tuple[requests.Response, str]:
    """Fetch a URL while enforcing redirect constraints."""
    current_url = url

    for hop in range(max_redirects + 1):
        response = session.get(
            current_url,
            headers={"User-Agent": user_agent},
            timeout=timeout_seconds,
            allow_redirects=False,
            stream=True,
        )

        if 300 <= response.status_code < 400 and response.headers.get("location"):
            response.close()
            if hop >= max_redirects:
                raise RedirectLimitExceeded(f"redirects exceeded {max_redirects}")

            next_url = urljoin(current_url, response.headers["location"])
            if not _validate_url_scheme(next_url):
                raise RedirectLimitExceeded("redirected to disallowed protocol")

            current_url = next_url
            continue

        return response, current_url

    raise RedirectLimitExceeded(f"redirects exceeded {max_redirects}")


def fetch_url(
    url: str,
    session: requests.Session | None = None,
    timeout_seconds: int = FetchConfig.FETCH_TIMEOUT_SECONDS,
    max_redirects: int = FetchConfig.MAX_REDIRECTS,
    user_agent: str = FetchConfig.USER_AGENT,
) -> tuple[FetchedDoc | None, FetchLog]:
    """Fetch a URL; failures are reported in the FetchLog, never raised."""
    start = time.monotonic()

    def _failed(code: FetchErrorCode, message: str, status_code: int | None = None) -> tuple[None, FetchLog]:
        return None, FetchLog(
            url=url,
            status_code=status_code,
            error_code=code,
            error_message=message,
            latency_ms=int((time.monotonic() - start) * 1000),
        )

    if not _validate_url_scheme(url):
        return _failed(FetchErrorCode.DISALLOWED_URL, f"unsupported URL scheme: {url!r}")

    if not urlparse(url).hostname:
        return _failed(FetchErrorCode.DISALLOWED_URL, f"URL has no host: {url!r}")

    http_session = session or requests.Session()

    try:
        response, final_url = _follow_redirects(
            http_session,
            url,
            timeout_seconds=timeout_seconds,
            max_redirects=max_redirects,
            user_agent=user_agent,
        )

        if response.status_code >= 400:
            response.close()
            return _failed(
                FetchErrorCode.HTTP_STATUS,
                f"HTTP {response.status_code} for {final_url}",
                status_code=response.status_code,
            )

        try:
            content_limit = _content_limit_for_response(response.headers.get("content-type"))
            body = _read_body_with_limit(response, content_limit)
        finally:
            response.close()
        body_hash = hashlib.sha256(body).hexdigest() if body else None

        doc = FetchedDoc(
            status_code=response.status_code,
            final_url=final_url,
            headers={k.lower(): v for k, v in response.headers.items()},
            body_bytes=body,
            body_sha256=body_hash,
            latency_ms=int((time.monotonic() - start) * 1000),
        )
        log = FetchLog(
            url=url,
            status_code=response.status_code,
            latency_ms=doc.latency_ms,
            bytes_received=len(body),
            final_url=final_url,
        )
        return doc, log

    except TransportError as exc:
        return _failed(exc.code, str(exc))
    except requests.Timeout as exc:
        return _failed(FetchErrorCode.TIMEOUT, str(exc) or "request timed out")
    except requests.RequestException as exc:
        return _failed(FetchErrorCode.FETCH_ERROR, str(exc) or type(exc).__name__)


class HttpFetchStage(FetchStage):
    """FetchStage implementation backed by fetch_url + structured logging."""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout_seconds: int = FetchConfig.FETCH_TIMEOUT_SECONDS,
        max_redirects: int = FetchConfig.MAX_REDIRECTS,
        user_agent: str = FetchConfig.USER_AGENT,
        log_fetches: bool = True,
        log_sink: Callable[[FetchLog], object] | None = None,
    ) -> None:
        """Initialize the HTTP session, request limits, and fetch log sink."""
        self.session = session
        self.timeout_seconds = timeout_seconds
        self.max_redirects = max_redirects
        self.user_agent = user_agent
        self.log_fetches = log_fetches
        self.log_sink = log_sink or emit_fetch_log

    def fetch(self, url: str) -> FetchedDoc:
        """Fetch one URL, emit its fetch log, and raise on failure."""
        fetched_doc, fetch_log = fetch_url(
            url=url,
            session=self.session,
            timeout_seconds=self.timeout_seconds,
            max_redirects=self.max_redirects,
            user_agent=self.user_agent,
        )
        if self.log_fetches:
            self.log_sink(fetch_log)
        if fetched_doc is None:
            error_cls = _ERROR_BY_CODE.get(fetch_log.error_code, TransportError)
            raise error_cls(
                fetch_log.error_message or "fetch failed",
                url=url,
                status_code=fetch_log.status_code,
            )
        return fetched_doc

    def get(self, url: str) -> bytes:
        """Return the raw body of `url`."""
        return self.fetch(url).body_bytes or b""

    def fetch_document(self, url: str) -> tuple[bytes, str | None]:
        """Return the raw body of `url` with its Content-Type header."""
        fetched_doc = self.fetch(url)
        return fetched_doc.body_bytes or b"", fetched_doc.headers.get("content-type")
