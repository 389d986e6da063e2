from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel

from downtime_detector.models import ServiceSpec
from downtime_detector.services import ServiceRegistry

logger = logging.getLogger(__name__)


class SeedFile(BaseModel):
    services: List[ServiceSpec] = []


def load_seed(path: Path) -> list[ServiceSpec]:
    if not path.exists():
        raise FileNotFoundError(f"Missing services seed file at {path}")

    data = yaml.safe_load(path.read_text()) or {}
    seed = SeedFile.model_validate(data)

    # Ensure unique names
    seen = set()
    for s in seed.services:
        if s.name in seen:
            raise ValueError(f"Duplicate service name: {s.name}")
        seen.add(s.name)

    return seed.services


def seed_registry(registry: ServiceRegistry, path: Path) -> int:
    """
    Add the seed services when the registry is still empty.
    Returns the number of services added.
    """
    if registry.list_services():
        return 0

    specs = load_seed(path)
    for spec in specs:
        registry.add(spec)
    logger.info("Seeded %d services from %s", len(specs), path)
    return len(specs)
