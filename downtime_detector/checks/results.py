from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

CheckStatus = Literal["up", "down", "unknown"]


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


# Distinguishes "nothing extracted" from an extracted JSON null.
MISSING: Any = _Missing()


@dataclass(frozen=True)
class CheckResult:
    status: CheckStatus
    value: Any = MISSING
    error: str | None = None

    @classmethod
    def up(cls, value: Any) -> CheckResult:
        return cls(status="up", value=value)

    @classmethod
    def down(cls, value: Any = MISSING, error: str | None = None) -> CheckResult:
        return cls(status="down", value=value, error=error)

    @classmethod
    def unknown(cls, error: str) -> CheckResult:
        return cls(status="unknown", error=error)

    @property
    def has_value(self) -> bool:
        return self.value is not MISSING

    def to_envelope(self) -> dict[str, Any]:
        out: dict[str, Any] = {"status": self.status}
        if self.has_value:
            out["value"] = self.value
        if self.error is not None:
            out["error"] = self.error
        return out
