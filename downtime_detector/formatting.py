from __future__ import annotations

from downtime_detector.checks.results import CheckResult
from downtime_detector.models import Service


def format_result_notice(service: Service, result: CheckResult) -> str | None:
    if result.status == "up":
        return None

    if result.error:
        return f"Error checking {service.name}: {result.error}"
    if result.has_value:
        return f"{service.name} is {result.status} (got {result.value!r})"
    return f"{service.name} is {result.status}"
