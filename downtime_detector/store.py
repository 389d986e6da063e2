from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import Any, Protocol

from downtime_detector.models import Service

_COLUMNS = (
    "id",
    "name",
    "mode",
    "url",
    "extraction_path",
    "selector",
    "expected_value",
    "status",
    "last_checked",
)


class ServiceStore(Protocol):
    def load(self) -> list[Service]: ...

    def save(self, services: list[Service]) -> None: ...


class MemoryServiceStore:
    def __init__(self, services: list[Service] | None = None) -> None:
        self._services = [s.model_copy() for s in services or []]
        self._lock = threading.Lock()

    def load(self) -> list[Service]:
        with self._lock:
            return [s.model_copy() for s in self._services]

    def save(self, services: list[Service]) -> None:
        with self._lock:
            self._services = [s.model_copy() for s in services]


class SQLiteServiceStore:
    def __init__(self, db_path: str) -> None:
        self._db_path = self._resolve_db_path(db_path)
        self._lock = threading.Lock()

        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row

        with self._lock:
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            self._init_schema()

    @staticmethod
    def _resolve_db_path(raw_path: str) -> Path:
        p = Path(raw_path).expanduser()
        if p.is_absolute():
            return p
        return Path.cwd() / p

    def _init_schema(self) -> None:
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS services (
                position INTEGER NOT NULL,
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                mode TEXT NOT NULL,
                url TEXT NOT NULL,
                extraction_path TEXT,
                selector TEXT,
                expected_value TEXT,
                status TEXT NOT NULL DEFAULT 'unknown',
                last_checked TEXT
            )
            """
        )
        self._conn.commit()

    @staticmethod
    def _to_row(position: int, service: Service) -> tuple[Any, ...]:
        data = service.model_dump()
        return (position, *(data[col] for col in _COLUMNS))

    def load(self) -> list[Service]:
        with self._lock:
            rows = self._conn.execute(
                f"SELECT {', '.join(_COLUMNS)} FROM services ORDER BY position"
            ).fetchall()
        return [Service.model_validate({col: r[col] for col in _COLUMNS}) for r in rows]

    def save(self, services: list[Service]) -> None:
        placeholders = ", ".join("?" for _ in range(len(_COLUMNS) + 1))
        rows = [self._to_row(i, s) for i, s in enumerate(services)]
        with self._lock:
            with self._conn:
                self._conn.execute("DELETE FROM services")
                self._conn.executemany(
                    f"INSERT INTO services (position, {', '.join(_COLUMNS)}) "
                    f"VALUES ({placeholders})",
                    rows,
                )

    def close(self) -> None:
        with self._lock:
            self._conn.close()


def build_store(db_path: str | None) -> ServiceStore:
    if db_path:
        return SQLiteServiceStore(db_path)
    return MemoryServiceStore()
