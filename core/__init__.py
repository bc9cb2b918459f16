"""Core module for opengraph-consumer."""

from core.models import (
    Audio,
    FetchErrorCode,
    FetchedDoc,
    FetchLog,
    Image,
    ObjectBase,
    Property,
    Video,
    Website,
)
from core.config import FetchConfig
from core.pipeline import FetchStage

__all__ = [
    "Audio",
    "FetchErrorCode",
    "FetchedDoc",
    "FetchLog",
    "Image",
    "ObjectBase",
    "Property",
    "Video",
    "Website",
    "FetchConfig",
    "FetchStage",
]
