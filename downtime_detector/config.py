import os
from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


class Settings:
    DETECTOR_DB_PATH: str = os.getenv(
        "DETECTOR_DB_PATH", "data/downtime-detector.sqlite3"
    )
    CHECK_TIMEOUT_SECONDS: float = float(os.getenv("CHECK_TIMEOUT_SECONDS", "10"))
    CHECK_CONNECT_TIMEOUT_SECONDS: float | None = _optional_float(
        "CHECK_CONNECT_TIMEOUT_SECONDS"
    )
    MONITOR_INTERVAL: int = int(os.getenv("MONITOR_INTERVAL", 60))
    REFRESH_CONCURRENCY: int = max(1, int(os.getenv("REFRESH_CONCURRENCY", 1)))
    SERVICES_SEED_PATH: str | None = os.getenv("SERVICES_SEED_PATH") or None


settings = Settings()
