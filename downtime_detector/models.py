from __future__ import annotations

from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from downtime_detector.checks.results import CheckStatus

CheckMode = Literal["structured-api", "markup-page"]

LEGACY_MODES = {"api": "structured-api", "page": "markup-page"}


def _normalize_mode(v):
    if isinstance(v, str):
        return LEGACY_MODES.get(v, v)
    return v


class CheckRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mode: CheckMode = Field(validation_alias=AliasChoices("mode", "type"))
    url: str = Field(..., min_length=1)
    extraction_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("extractionPath", "extraction_path", "path"),
    )
    selector: Optional[str] = None
    expected_value: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("expectedValue", "expected_value"),
    )

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, v):
        return _normalize_mode(v)


class ServiceSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    mode: CheckMode = Field(validation_alias=AliasChoices("mode", "type"))
    url: str = Field(..., min_length=1)
    extraction_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("extractionPath", "extraction_path", "path"),
    )
    selector: Optional[str] = None
    expected_value: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("expectedValue", "expected_value"),
    )

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, v):
        return _normalize_mode(v)

    @field_validator("name", "url")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @model_validator(mode="after")
    def check_extraction_rule(self) -> ServiceSpec:
        if self.mode == "structured-api" and not self.extraction_path:
            raise ValueError("structured-api services need an extraction path")
        if self.mode == "markup-page" and not self.selector:
            raise ValueError("markup-page services need a selector")
        return self


class Service(ServiceSpec):
    id: str = Field(..., min_length=1)
    status: CheckStatus = "unknown"
    last_checked: Optional[str] = None

    def to_check_request(self) -> CheckRequest:
        return CheckRequest(
            mode=self.mode,
            url=self.url,
            extraction_path=self.extraction_path,
            selector=self.selector,
            expected_value=self.expected_value,
        )
