from __future__ import annotations

import threading
import uuid
from typing import Any

from downtime_detector.checks.results import CheckResult
from downtime_detector.models import Service, ServiceSpec
from downtime_detector.ops_logic import summarize_services, utcnow_iso
from downtime_detector.store import ServiceStore


class ServiceRegistry:
    """Operator-managed service list kept in a ``ServiceStore``.

    Every mutation is a load/modify/save round trip under one lock, so the
    store always holds the whole list.
    """

    def __init__(self, store: ServiceStore) -> None:
        self._store = store
        self._lock = threading.Lock()

    def list_services(self) -> list[Service]:
        with self._lock:
            return self._store.load()

    def get(self, service_id: str) -> Service | None:
        for service in self.list_services():
            if service.id == service_id:
                return service
        return None

    def add(self, spec: ServiceSpec) -> Service:
        service = Service(
            id=uuid.uuid4().hex,
            status="unknown",
            last_checked=utcnow_iso(),
            **spec.model_dump(),
        )
        with self._lock:
            services = self._store.load()
            services.append(service)
            self._store.save(services)
        return service

    def remove(self, service_id: str) -> bool:
        with self._lock:
            services = self._store.load()
            kept = [s for s in services if s.id != service_id]
            if len(kept) == len(services):
                return False
            self._store.save(kept)
            return True

    def record_result(self, service_id: str, result: CheckResult) -> Service | None:
        with self._lock:
            services = self._store.load()
            updated: Service | None = None
            for i, s in enumerate(services):
                if s.id == service_id:
                    updated = s.model_copy(
                        update={"status": result.status, "last_checked": utcnow_iso()}
                    )
                    services[i] = updated
                    break
            if updated is not None:
                self._store.save(services)
            return updated

    def mark_all_unknown(self) -> list[Service]:
        with self._lock:
            ts = utcnow_iso()
            services = [
                s.model_copy(update={"status": "unknown", "last_checked": ts})
                for s in self._store.load()
            ]
            self._store.save(services)
            return services

    def summary(self) -> dict[str, Any]:
        return summarize_services(self.list_services())
