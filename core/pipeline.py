"""
Collaborator interfaces for opengraph-consumer.

The extraction flow is fixed:
fetch → parse → extract properties → resolve type → assign → fallback

Only the fetch step is pluggable. Everything after it is deterministic and
runs in-process on a fully buffered document.
"""

from abc import ABC, abstractmethod
from typing import Optional


# ============================================================================
# Stage Interfaces
# ============================================================================

class FetchStage(ABC):
    """
    Fetch stage: given a URL, return the raw document body.

    Responsibilities:
    - Transport (HTTP session, redirects, timeouts)
    - Body size limits
    - Raising TransportError on any network/HTTP failure

    Not responsible for: caching, retries, charset decoding.
    """

    @abstractmethod
    def get(self, url: str) -> bytes:
        """
        Fetch a single URL.

        Args:
            url: URL to fetch

        Returns:
            Raw body bytes (possibly empty)

        Raises:
            TransportError: On network or HTTP failure
        """
        pass

    def fetch_document(self, url: str) -> tuple[bytes, Optional[str]]:
        """
        Fetch a URL along with its Content-Type header, when known.

        Stages without header access inherit this and report None, leaving
        charset detection to the document itself.
        """
        return self.get(url), None
