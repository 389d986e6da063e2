from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import requests

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    ok: bool
    latency_ms: int
    status_code: int | None = None
    response: requests.Response | None = None
    error: str | None = None

    @property
    def content_type(self) -> str | None:
        if self.response is None:
            return None
        return self.response.headers.get("Content-Type") or None


def fetch(url: str, timeout_s: float, connect_timeout_s: float | None = None) -> FetchResult:
    start = time.perf_counter()
    try:
        connect_timeout = timeout_s if connect_timeout_s is None else connect_timeout_s
        r = requests.get(url, timeout=(connect_timeout, timeout_s))
        latency_ms = int((time.perf_counter() - start) * 1000)
        ok = 200 <= r.status_code < 300
        logger.debug("GET %s -> %s in %dms", url, r.status_code, latency_ms)
        return FetchResult(ok=ok, latency_ms=latency_ms, status_code=r.status_code, response=r)
    except requests.RequestException as e:
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.debug("GET %s failed after %dms: %s", url, latency_ms, e)
        return FetchResult(ok=False, latency_ms=latency_ms, error=f"{e.__class__.__name__}: {e}")
