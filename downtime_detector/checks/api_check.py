from __future__ import annotations

import json
import logging

from downtime_detector.checks.http_fetch import fetch
from downtime_detector.checks.json_path import is_truthy, resolve_path, stringify
from downtime_detector.checks.results import CheckResult

logger = logging.getLogger(__name__)


def _reject_constant(token: str) -> None:
    raise ValueError(f"non-standard JSON constant {token}")


def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def run_api(
    url: str,
    extraction_path: str | None,
    expected_value: str | None,
    timeout_s: float,
    connect_timeout_s: float | None = None,
) -> CheckResult:
    res = fetch(url, timeout_s=timeout_s, connect_timeout_s=connect_timeout_s)
    if res.response is None:
        return CheckResult.down(error=f"request failed: {res.error}")
    if not res.ok:
        return CheckResult.down(error=f"API request failed with status {res.status_code}")

    content_type = res.content_type
    if not is_json_content_type(content_type):
        return CheckResult.down(
            error=f"expected JSON response but got {content_type or 'unknown content type'}"
        )

    try:
        payload = json.loads(res.response.content, parse_constant=_reject_constant)
    except (ValueError, TypeError) as exc:
        logger.debug("Invalid JSON from %s: %s", url, exc)
        return CheckResult.down(error="failed to parse response")

    value = resolve_path(payload, extraction_path)

    if expected_value:
        is_up = stringify(value).lower() == expected_value.lower()
    else:
        is_up = is_truthy(value)

    return CheckResult.up(value) if is_up else CheckResult.down(value=value)
