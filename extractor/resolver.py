"""Pick the Open Graph object variant from the first declared og:type."""

from __future__ import annotations

from typing import Iterable

from core.models import ObjectBase, Property, Website


TYPE_KEY = "type"

DEFAULT_OBJECT_TYPE: type[ObjectBase] = Website

# Closed registry of supported variants, keyed by lower-cased og:type.
OBJECT_TYPES: dict[str, type[ObjectBase]] = {
    Website.object_type: Website,
}


def find_declared_type(properties: Iterable[Property]) -> str | None:
    """Return the value of the first `type` property, ignoring later ones."""
    for prop in properties:
        if prop.key == TYPE_KEY:
            return prop.value
    return None


def resolve_object_type(properties: Iterable[Property]) -> type[ObjectBase]:
    """Map the declared type to a variant class; unknown or missing → Website."""
    declared = find_declared_type(properties)
    if declared is None:
        return DEFAULT_OBJECT_TYPE
    return OBJECT_TYPES.get(declared.lower(), DEFAULT_OBJECT_TYPE)
