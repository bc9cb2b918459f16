"""
Core Pydantic models for opengraph-consumer.

Design principles:
- Open Graph objects are plain, typed containers; all parsing lives in extractor/
- One concrete variant per declared og:type, all sharing ObjectBase fields
- Sub-objects (image/video/audio) keep document order
- Deterministic serialization (model_dump(mode="json") is the export form)
"""

from datetime import UTC, datetime
from enum import Enum
from typing import ClassVar, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================

class FetchErrorCode(str, Enum):
    """Why did a fetch fail?"""
    TIMEOUT = "TIMEOUT"
    DISALLOWED_URL = "DISALLOWED_URL"  # Bad scheme, missing host
    FETCH_ERROR = "FETCH_ERROR"  # Network error
    HTTP_STATUS = "HTTP_STATUS"  # 4xx / 5xx
    BODY_TOO_LARGE = "BODY_TOO_LARGE"
    REDIRECT_LIMIT = "REDIRECT_LIMIT"


# ============================================================================
# Extracted Properties
# ============================================================================

class Property(BaseModel):
    """
    One Open Graph property as found in the document.

    Example:
      <meta property="og:image:width" content=" 100 ">
      → Property(key="image:width", value="100")
    """
    model_config = ConfigDict(frozen=True)

    key: str  # Lower-cased name after the "og:" prefix
    value: str  # Trimmed content attribute


# ============================================================================
# Structured Sub-Objects
# ============================================================================

class Image(BaseModel):
    """og:image and its og:image:* attributes."""
    url: Optional[str] = None
    secure_url: Optional[str] = None
    type: Optional[str] = None  # MIME type
    width: Optional[int] = None
    height: Optional[int] = None
    user_generated: Optional[bool] = None


class Video(BaseModel):
    """og:video and its og:video:* attributes."""
    url: Optional[str] = None
    secure_url: Optional[str] = None
    type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class Audio(BaseModel):
    """og:audio and its og:audio:* attributes."""
    url: Optional[str] = None
    secure_url: Optional[str] = None
    type: Optional[str] = None


# ============================================================================
# Open Graph Objects
# ============================================================================

class ObjectBase(BaseModel):
    """
    Fields shared by every Open Graph object type.

    Concrete variants subclass this and set `object_type`; the variant is
    chosen once per document (from the first og:type) and never changes.
    """
    object_type: ClassVar[str] = ""

    # Basic metadata
    title: Optional[str] = None
    type: Optional[str] = None  # og:type exactly as declared
    url: Optional[str] = None
    description: Optional[str] = None
    site_name: Optional[str] = None

    # Optional metadata
    determiner: Optional[str] = None
    locale: Optional[str] = None
    locale_alternate: List[str] = Field(default_factory=list)
    rich_attachment: Optional[bool] = None
    see_also: List[str] = Field(default_factory=list)
    updated_time: Optional[datetime] = None

    # Structured, repeatable media
    images: List[Image] = Field(default_factory=list)
    videos: List[Video] = Field(default_factory=list)
    audios: List[Audio] = Field(default_factory=list)


class Website(ObjectBase):
    """og:type "website", also the default for unknown or missing types."""
    object_type: ClassVar[str] = "website"


# ============================================================================
# Fetch / Network Logging
# ============================================================================

class FetchedDoc(BaseModel):
    """
    Raw result of fetching one URL.

    The body is fully buffered; extraction never streams.
    """
    status_code: int
    final_url: str  # After redirects
    headers: Dict[str, str] = Field(default_factory=dict)  # Lower-cased names
    body_bytes: Optional[bytes] = None
    body_sha256: Optional[str] = None
    latency_ms: Optional[int] = None


class FetchLog(BaseModel):
    """
    Log entry for a single fetch operation.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    url: str

    status_code: Optional[int] = None  # HTTP status
    latency_ms: Optional[int] = None  # Time to response
    bytes_received: Optional[int] = None

    error_code: Optional[FetchErrorCode] = None
    error_message: Optional[str] = None
    final_url: Optional[str] = None  # Set on success; differs from url after redirects

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
