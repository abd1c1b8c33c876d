"""Load jobs and applicant profiles from a YAML seed document.

Expected layout::

    jobs:
      - id: job-1
        title: Poultry farm hand
        location: Ashanti
        job_type: farm_hand
    profiles:
      - id: app-1
        role: graduate
        preferred_region: Ashanti
        is_verified: true
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from src.core.db import upsert_applicant, upsert_job
from src.core.schemas import Applicant, Job

logger = logging.getLogger(__name__)


class SeedData(BaseModel):
    """Records parsed from a seed document."""

    jobs: list[Job] = Field(default_factory=list)
    profiles: list[Applicant] = Field(default_factory=list)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SeedData":
        """Load seed records from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Seed file not found: {path}"
            raise FileNotFoundError(msg)
        raw: Any = yaml.safe_load(path.read_text()) or {}
        if not isinstance(raw, dict):
            msg = f"Seed file must contain a mapping, got {type(raw).__name__}"
            raise ValueError(msg)
        return cls.model_validate(raw)


def load_seed(conn: sqlite3.Connection, seed: SeedData) -> tuple[int, int]:
    """Upsert every seed record. Returns (jobs_written, profiles_written)."""
    for job in seed.jobs:
        upsert_job(conn, job)
    for applicant in seed.profiles:
        upsert_applicant(conn, applicant)
    logger.info("Loaded %d jobs and %d profiles", len(seed.jobs), len(seed.profiles))
    return len(seed.jobs), len(seed.profiles)
