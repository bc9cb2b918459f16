"""Shared structured JSON logging helpers."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any, Callable


EventLogger = Callable[[str, dict[str, Any]], None]


def emit_json_event(
    event_type: str,
    *,
    level: str = "info",
    **payload: Any,
) -> str:
    """Emit one JSON event line to stdout and return the rendered line."""
    event: dict[str, Any] = {
        "event_type": event_type,
        "level": level,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    event.update(payload)
    line = json.dumps(event, ensure_ascii=True, sort_keys=True, default=str)
    print(line)
    return line


def json_event_logger(event_type: str, payload: dict[str, Any]) -> None:
    """Adapter so emit_json_event can be passed as an `event_logger` hook."""
    emit_json_event(event_type, **payload)
