from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from downtime_detector.checks.results import CheckResult
from downtime_detector.config import settings
from downtime_detector.evaluator import evaluate
from downtime_detector.formatting import format_result_notice
from downtime_detector.models import Service
from downtime_detector.services import ServiceRegistry

logger = logging.getLogger(__name__)


@dataclass
class RefreshOutcome:
    service: Service
    result: CheckResult
    notice: str | None = None


def check_service(service: Service) -> CheckResult:
    return evaluate(
        service.to_check_request(),
        timeout_s=settings.CHECK_TIMEOUT_SECONDS,
        connect_timeout_s=settings.CHECK_CONNECT_TIMEOUT_SECONDS,
    )


def _record(registry: ServiceRegistry, service: Service, res: CheckResult) -> RefreshOutcome:
    updated = registry.record_result(service.id, res) or service
    notice = format_result_notice(service, res)
    if notice:
        logger.warning(notice)
    return RefreshOutcome(service=updated, result=res, notice=notice)


def refresh_one(registry: ServiceRegistry, service_id: str) -> RefreshOutcome | None:
    service = registry.get(service_id)
    if service is None:
        return None
    return _record(registry, service, check_service(service))


def refresh_all(registry: ServiceRegistry, concurrency: int = 1) -> list[RefreshOutcome]:
    services = registry.mark_all_unknown()
    if not services:
        return []

    if concurrency <= 1:
        return [_record(registry, s, check_service(s)) for s in services]

    # map() yields in submission order, so results are recorded in list order.
    with ThreadPoolExecutor(max_workers=min(concurrency, len(services))) as pool:
        results = pool.map(check_service, services)
        return [_record(registry, s, res) for s, res in zip(services, results)]


def loop_forever(registry: ServiceRegistry, interval_s: int, concurrency: int = 1) -> None:
    while True:
        start = time.perf_counter()
        try:
            refresh_all(registry, concurrency=concurrency)
        except Exception:
            # A failed pass should never stop the refresh loop.
            logger.exception("Refresh pass failed")
        elapsed = time.perf_counter() - start
        sleep_s = max(0.0, interval_s - elapsed)
        time.sleep(sleep_s)
