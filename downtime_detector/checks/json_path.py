"""Total traversal over parsed JSON documents.

Extraction paths are dot-separated key sequences (``status.indicator``).
Traversal never raises: a step that cannot be taken degrades to an empty
object, which is falsy and never equals a non-empty expected value.
"""

from __future__ import annotations

import json
from typing import Dict, List, Optional, Union

JsonValue = Union[Dict[str, "JsonValue"], List["JsonValue"], str, int, float, bool, None]


def lookup(value: JsonValue, segment: str) -> Optional[JsonValue]:
    """Take one step into ``value``.

    Returns ``None`` when the step is impossible. Callers that need to tell a
    missing key from a JSON ``null`` should check ``has_step`` first.
    """
    if isinstance(value, dict):
        return value.get(segment)
    if isinstance(value, list) and segment.isdigit():
        idx = int(segment)
        if idx < len(value):
            return value[idx]
    return None


def has_step(value: JsonValue, segment: str) -> bool:
    if isinstance(value, dict):
        return segment in value
    if isinstance(value, list) and segment.isdigit():
        return int(segment) < len(value)
    return False


def resolve_path(value: JsonValue, path: str | None) -> JsonValue:
    if not path:
        return value

    current = value
    for segment in path.split("."):
        if not has_step(current, segment):
            current = {}
            continue
        current = lookup(current, segment)
    return current


def stringify(value: JsonValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float, str)):
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def is_truthy(value: JsonValue) -> bool:
    # Empty containers count as absent, including the {} a missed step yields.
    return bool(value)
