from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from downtime_detector.models import CheckMode


class HealthResponse(BaseModel):
    status: str = Field(description="Health status")


class ConfigResponse(BaseModel):
    check_timeout_seconds: float
    check_connect_timeout_seconds: float | None = None
    interval: int = Field(ge=0)
    refresh_concurrency: int = Field(ge=1)
    persistent: bool


class CheckStatusRequest(BaseModel):
    mode: CheckMode
    url: str
    extractionPath: str | None = None
    selector: str | None = None
    expectedValue: str | None = None


class CheckStatusResponse(BaseModel):
    status: Literal["up", "down", "unknown"]
    value: Any = Field(default=None, description="Extracted value, omitted when nothing was extracted")
    error: str | None = Field(default=None, description="Diagnostic, omitted when status is up")


class ServiceResponse(BaseModel):
    id: str
    name: str
    mode: CheckMode
    url: str
    extraction_path: str | None = None
    selector: str | None = None
    expected_value: str | None = None
    status: Literal["up", "down", "unknown"]
    last_checked: str | None = None


class ServiceCheckResponse(BaseModel):
    service: ServiceResponse
    # Envelope dict: absent value/error keys stay absent.
    result: dict[str, Any]
    notice: str | None = None


class RefreshResponse(BaseModel):
    checked: int
    outcomes: list[ServiceCheckResponse]


class ServicesSummaryResponse(BaseModel):
    total: int
    up: int
    down: int
    unknown: int
    down_list: list[str]


class RemoveServiceResponse(BaseModel):
    ok: bool
    id: str
