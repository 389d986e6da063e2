from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable

from downtime_detector.models import Service


def serialize_ts(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def utcnow_iso() -> str:
    return serialize_ts(datetime.now(timezone.utc)) or ""


def summarize_services(services: Iterable[Service]) -> dict[str, Any]:
    up = 0
    down = 0
    unknown = 0
    down_list: list[str] = []

    for service in services:
        if service.status == "up":
            up += 1
        elif service.status == "down":
            down += 1
            down_list.append(service.id)
        else:
            unknown += 1

    return {
        "total": up + down + unknown,
        "up": up,
        "down": down,
        "unknown": unknown,
        "down_list": down_list,
    }
