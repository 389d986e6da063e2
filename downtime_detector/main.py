import logging
import threading
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from downtime_detector.api_schemas import (
    CheckStatusRequest,
    CheckStatusResponse,
    ConfigResponse,
    HealthResponse,
    RefreshResponse,
    RemoveServiceResponse,
    ServiceCheckResponse,
    ServiceResponse,
    ServicesSummaryResponse,
)
from downtime_detector.checks.results import CheckResult
from downtime_detector.config import settings
from downtime_detector.evaluator import evaluate_envelope
from downtime_detector.models import ServiceSpec
from downtime_detector.registry import seed_registry
from downtime_detector.runner import RefreshOutcome, loop_forever, refresh_all, refresh_one
from downtime_detector.services import ServiceRegistry
from downtime_detector.store import build_store

logger = logging.getLogger(__name__)
registry = ServiceRegistry(build_store(settings.DETECTOR_DB_PATH))


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.SERVICES_SEED_PATH:
        seed_registry(registry, Path(settings.SERVICES_SEED_PATH))
    if settings.MONITOR_INTERVAL > 0:
        t = threading.Thread(
            target=loop_forever,
            args=(registry, settings.MONITOR_INTERVAL, settings.REFRESH_CONCURRENCY),
            daemon=True,
        )
        t.start()
    yield


app = FastAPI(
    title="Downtime Detector",
    version="1.0.0",
    description=(
        "Registers external services and decides whether each is up by "
        "inspecting a JSON API field or an element on an HTML page."
    ),
    lifespan=lifespan,
)


def _outcome_payload(outcome: RefreshOutcome) -> dict:
    return {
        "service": outcome.service.model_dump(),
        "result": outcome.result.to_envelope(),
        "notice": outcome.notice,
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health Check",
    description="Liveness endpoint used by probes and orchestration.",
)
def health():
    return {"status": "ok"}


@app.get(
    "/config",
    response_model=ConfigResponse,
    tags=["system"],
    summary="Current Effective Config",
    description="Returns non-secret runtime config values.",
)
def config():
    return {
        "check_timeout_seconds": settings.CHECK_TIMEOUT_SECONDS,
        "check_connect_timeout_seconds": settings.CHECK_CONNECT_TIMEOUT_SECONDS,
        "interval": settings.MONITOR_INTERVAL,
        "refresh_concurrency": settings.REFRESH_CONCURRENCY,
        "persistent": bool(settings.DETECTOR_DB_PATH),
    }


@app.post(
    "/api/check-status",
    response_model=CheckStatusResponse,
    tags=["checks"],
    summary="Evaluate One Check",
    description=(
        "Fetches the target once and classifies it as up/down/unknown. "
        "Always answers 200; a malformed request yields status unknown."
    ),
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": CheckStatusRequest.model_json_schema()}
            },
        }
    },
)
async def check_status(request: Request):
    try:
        try:
            payload = await request.json()
        except ValueError:
            result = CheckResult.unknown(error="invalid check request: body is not valid JSON")
        else:
            result = await run_in_threadpool(evaluate_envelope, payload)
        return JSONResponse(content=result.to_envelope(), status_code=200)
    except Exception:
        logger.exception("Error checking status")
        result = CheckResult.unknown(error="unexpected error")
        return JSONResponse(content=result.to_envelope(), status_code=200)


@app.get(
    "/api/services",
    response_model=list[ServiceResponse],
    tags=["services"],
    summary="Registered Services",
    description="All registered services with their last known status.",
)
def services_list():
    return [s.model_dump() for s in registry.list_services()]


@app.get(
    "/api/services/summary",
    response_model=ServicesSummaryResponse,
    tags=["services"],
    summary="Status Summary",
    description="Counts per status and the ids of services currently down.",
)
def services_summary():
    return registry.summary()


@app.post(
    "/api/services",
    response_model=ServiceCheckResponse,
    status_code=201,
    tags=["services"],
    summary="Register Service",
    description="Adds a service and runs its first check.",
)
def services_add(spec: ServiceSpec):
    service = registry.add(spec)
    outcome = refresh_one(registry, service.id)
    if outcome is None:
        raise HTTPException(status_code=404, detail=f"Unknown service id: {service.id}")
    return _outcome_payload(outcome)


@app.delete(
    "/api/services/{service_id}",
    response_model=RemoveServiceResponse,
    tags=["services"],
    summary="Remove Service",
)
def services_remove(service_id: str):
    if not registry.remove(service_id):
        raise HTTPException(status_code=404, detail=f"Unknown service id: {service_id}")
    return {"ok": True, "id": service_id}


@app.post(
    "/api/services/refresh",
    response_model=RefreshResponse,
    tags=["services"],
    summary="Refresh All Services",
    description="Marks every service unknown, then checks each one.",
)
def services_refresh():
    outcomes = refresh_all(registry, concurrency=settings.REFRESH_CONCURRENCY)
    return {
        "checked": len(outcomes),
        "outcomes": [_outcome_payload(o) for o in outcomes],
    }


@app.post(
    "/api/services/{service_id}/check",
    response_model=ServiceCheckResponse,
    tags=["services"],
    summary="Check One Service",
)
def services_check(service_id: str):
    outcome = refresh_one(registry, service_id)
    if outcome is None:
        raise HTTPException(status_code=404, detail=f"Unknown service id: {service_id}")
    return _outcome_payload(outcome)
