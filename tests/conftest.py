"""
Shared pytest fixtures and configuration for opengraph-consumer tests.
"""

from pathlib import Path

import pytest

from core.models import Audio, Image, Property, Video, Website
from core.pipeline import FetchStage
from opengraph_consumer import Consumer


FIXTURES_DIR = Path(__file__).parent / "fixtures"


class StubFetcher(FetchStage):
    """FetchStage stand-in returning canned bodies keyed by URL."""

    def __init__(self, bodies: dict[str, bytes] | None = None, error: Exception | None = None) -> None:
        self.bodies = dict(bodies or {})
        self.error = error
        self.calls: list[str] = []

    def get(self, url: str) -> bytes:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.bodies[url]


# ============================================================================
# Fixtures: HTML
# ============================================================================

@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def html_fixture():
    """Loader for HTML fixture files by name."""

    def _load(name: str) -> str:
        return (FIXTURES_DIR / "html" / name).read_text(encoding="utf-8")

    return _load


# ============================================================================
# Fixtures: Consumers
# ============================================================================

@pytest.fixture
def stub_fetcher() -> StubFetcher:
    """Empty stub fetcher; tests register bodies on `.bodies`."""
    return StubFetcher()


@pytest.fixture
def consumer(stub_fetcher: StubFetcher) -> Consumer:
    """Consumer with default options and no network access."""
    return Consumer(fetcher=stub_fetcher)


@pytest.fixture
def recorded_events() -> list[tuple[str, dict]]:
    """List collecting (event_type, payload) pairs from an event_logger hook."""
    return []


# ============================================================================
# Fixtures: Objects
# ============================================================================

@pytest.fixture
def sample_properties() -> list[Property]:
    """Ordered properties for a page with two images and one video."""
    return [
        Property(key="type", value="website"),
        Property(key="title", value="Sample Title"),
        Property(key="image", value="https://example.com/x.jpg"),
        Property(key="image:width", value="100"),
        Property(key="image", value="https://example.com/y.jpg"),
        Property(key="image:width", value="200"),
        Property(key="video", value="https://example.com/v.mp4"),
        Property(key="video:height", value="360"),
    ]


@pytest.fixture
def sample_website() -> Website:
    """Fully populated website object."""
    return Website(
        title="Sample Title",
        type="website",
        url="https://example.com/",
        description="Sample description",
        site_name="Example",
        locale="en_US",
        locale_alternate=["de_DE"],
        images=[Image(url="https://example.com/x.jpg", width=100, height=50)],
        videos=[Video(url="https://example.com/v.mp4", type="video/mp4")],
        audios=[Audio(url="https://example.com/a.mp3")],
    )


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "contract: contract schema compliance tests")
    config.addinivalue_line("markers", "integration: end-to-end integration tests")
    config.addinivalue_line("markers", "unit: unit tests")
