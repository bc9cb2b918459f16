"""Assign stage: map an ordered Property sequence onto an Open Graph object."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable

from pydantic import BaseModel

from core.models import Audio, Image, ObjectBase, Property, Video, Website
from extractor.resolver import resolve_object_type


Setter = Callable[[Any, str], None]

URL_QUALIFIER = "url"


class MalformedPropertyError(ValueError):
    """Raised in debug mode when a qualified key precedes its namespace key."""

    def __init__(self, prop: Property, namespace: str) -> None:
        super().__init__(
            f"Found '{prop.key}' property but no '{namespace}' property was found before."
        )
        self.key = prop.key
        self.value = prop.value
        self.namespace = namespace


def _parse_int(value: str) -> int | None:
    """Parse a non-negative base-10 integer of ASCII digits, or None."""
    stripped = value.strip()
    if not (stripped.isascii() and stripped.isdigit()):
        return None
    return int(stripped)


def _parse_bool(value: str) -> bool | None:
    """Parse Open Graph booleans ("true"/"false", "1"/"0")."""
    normalized = value.strip().lower()
    if normalized in {"true", "1"}:
        return True
    if normalized in {"false", "0"}:
        return False
    return None


def _parse_datetime(value: str) -> datetime | None:
    """Parse ISO-like datetime string with UTC Z support."""
    normalized = value.strip()
    if not normalized:
        return None
    normalized = normalized.replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def _set_field(field_name: str, parse: Callable[[str], Any] | None = None) -> Setter:
    """Build a last-write-wins setter; values that fail to parse are skipped."""

    def setter(target: Any, value: str) -> None:
        parsed = parse(value) if parse else value
        if parsed is None:
            return
        setattr(target, field_name, parsed)

    return setter


def _append_field(field_name: str) -> Setter:
    """Build a setter appending to a list field."""

    def setter(target: Any, value: str) -> None:
        getattr(target, field_name).append(value)

    return setter


# ============================================================================
# Field Mapping Tables
# ============================================================================

COMMON_SETTERS: dict[str, Setter] = {
    "title": _set_field("title"),
    "type": _set_field("type"),
    "url": _set_field("url"),
    "description": _set_field("description"),
    "site_name": _set_field("site_name"),
    "determiner": _set_field("determiner"),
    "locale": _set_field("locale"),
    "locale:alternate": _append_field("locale_alternate"),
    "rich_attachment": _set_field("rich_attachment", _parse_bool),
    "see_also": _append_field("see_also"),
    "updated_time": _set_field("updated_time", _parse_datetime),
}


def website_setters() -> dict[str, Setter]:
    """Website has no fields beyond the common set."""
    return dict(COMMON_SETTERS)


FIELD_SETTERS: dict[type[ObjectBase], dict[str, Setter]] = {
    ObjectBase: COMMON_SETTERS,
    Website: website_setters(),
}


def setters_for(object_cls: type[ObjectBase]) -> dict[str, Setter]:
    """Return the mapping table for a variant, inherited from its closest base."""
    for cls in object_cls.__mro__:
        table = FIELD_SETTERS.get(cls)
        if table is not None:
            return table
    return COMMON_SETTERS


@dataclass(frozen=True)
class Namespace:
    """A repeatable structured property such as og:image."""

    name: str
    list_field: str
    factory: type[BaseModel]
    attribute_setters: dict[str, Setter]


NAMESPACES: dict[str, Namespace] = {
    "image": Namespace(
        name="image",
        list_field="images",
        factory=Image,
        attribute_setters={
            "secure_url": _set_field("secure_url"),
            "type": _set_field("type"),
            "width": _set_field("width", _parse_int),
            "height": _set_field("height", _parse_int),
            "user_generated": _set_field("user_generated", _parse_bool),
        },
    ),
    "video": Namespace(
        name="video",
        list_field="videos",
        factory=Video,
        attribute_setters={
            "secure_url": _set_field("secure_url"),
            "type": _set_field("type"),
            "width": _set_field("width", _parse_int),
            "height": _set_field("height", _parse_int),
        },
    ),
    "audio": Namespace(
        name="audio",
        list_field="audios",
        factory=Audio,
        attribute_setters={
            "secure_url": _set_field("secure_url"),
            "type": _set_field("type"),
        },
    ),
}


class NamespaceCursor:
    """Track which sub-object (list index) is currently open per namespace."""

    def __init__(self) -> None:
        self._open: dict[str, int] = {}

    def open(self, namespace: str, index: int) -> None:
        self._open[namespace] = index

    def current(self, namespace: str) -> int | None:
        return self._open.get(namespace)


def assign_properties(
    target: ObjectBase,
    properties: Iterable[Property],
    debug: bool = False,
    warning_hook: Callable[[str], None] | None = None,
) -> None:
    """
    Populate `target` in place from properties in document order.

    - Scalar keys: last write wins
    - `image` / `image:url` (and video/audio): start a new sub-object
    - `image:width` etc.: set on the open sub-object of that namespace; with
      none open, raise MalformedPropertyError in debug mode, otherwise drop
    - Anything else: ignored
    """
    setters = setters_for(type(target))
    cursor = NamespaceCursor()

    for prop in properties:
        setter = setters.get(prop.key)
        if setter is not None:
            setter(target, prop.value)
            continue

        namespace_name, _, qualifier = prop.key.partition(":")
        namespace = NAMESPACES.get(namespace_name)
        if namespace is None:
            continue

        items = getattr(target, namespace.list_field)
        if not qualifier or qualifier == URL_QUALIFIER:
            items.append(namespace.factory(url=prop.value))
            cursor.open(namespace.name, len(items) - 1)
            continue

        attribute_setter = namespace.attribute_setters.get(qualifier)
        if attribute_setter is None:
            continue

        index = cursor.current(namespace.name)
        if index is None:
            error = MalformedPropertyError(prop, namespace.name)
            if debug:
                raise error
            if warning_hook:
                warning_hook(str(error))
            continue

        attribute_setter(items[index], prop.value)


def build_object(
    properties: Iterable[Property],
    debug: bool = False,
    warning_hook: Callable[[str], None] | None = None,
) -> ObjectBase:
    """Resolve the variant, construct it, and assign all properties."""
    ordered = list(properties)
    object_cls = resolve_object_type(ordered)
    target = object_cls()
    assign_properties(target, ordered, debug=debug, warning_hook=warning_hook)
    return target
