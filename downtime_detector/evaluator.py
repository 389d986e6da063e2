from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from downtime_detector.checks.api_check import run_api
from downtime_detector.checks.page_check import run_page
from downtime_detector.checks.results import CheckResult
from downtime_detector.config import settings
from downtime_detector.models import CheckRequest

logger = logging.getLogger(__name__)


def evaluate(
    request: CheckRequest,
    *,
    timeout_s: float | None = None,
    connect_timeout_s: float | None = None,
) -> CheckResult:
    """Run one health check. Every failure is returned as a result, never raised."""
    timeout = settings.CHECK_TIMEOUT_SECONDS if timeout_s is None else timeout_s
    connect_timeout = (
        settings.CHECK_CONNECT_TIMEOUT_SECONDS if connect_timeout_s is None else connect_timeout_s
    )
    try:
        if request.mode == "structured-api":
            return run_api(
                request.url,
                request.extraction_path,
                request.expected_value,
                timeout_s=timeout,
                connect_timeout_s=connect_timeout,
            )
        if request.mode == "markup-page":
            return run_page(
                request.url,
                request.selector,
                request.expected_value,
                timeout_s=timeout,
                connect_timeout_s=connect_timeout,
            )
        return CheckResult.unknown(error=f"unsupported check mode: {request.mode}")
    except Exception:
        logger.exception("Unexpected error checking %s", request.url)
        return CheckResult.unknown(error="unexpected error")


def evaluate_envelope(payload: Any, **kwargs: Any) -> CheckResult:
    try:
        request = CheckRequest.model_validate(payload)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        return CheckResult.unknown(error=f"invalid check request: {problems}")
    return evaluate(request, **kwargs)
