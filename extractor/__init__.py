"""Extractor package: og: meta tags to a typed Open Graph object."""

from extractor.assigner import (
    FIELD_SETTERS,
    NAMESPACES,
    MalformedPropertyError,
    NamespaceCursor,
    assign_properties,
    build_object,
)
from extractor.fallback import apply_fallbacks
from extractor.properties import extract_properties
from extractor.resolver import OBJECT_TYPES, resolve_object_type

__all__ = [
    "FIELD_SETTERS",
    "NAMESPACES",
    "OBJECT_TYPES",
    "MalformedPropertyError",
    "NamespaceCursor",
    "apply_fallbacks",
    "assign_properties",
    "build_object",
    "extract_properties",
    "resolve_object_type",
]
