"""Configuration models and YAML loader for the match engine."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/agromatch.db"


class ScoringConfig(BaseModel):
    """Weights for rule-based match scoring.

    Defaults are the regional placement policy; location dominates.
    """

    location_match_bonus: int = Field(default=50, ge=0)
    verified_bonus: int = Field(default=20, ge=0)
    qualification_match_bonus: int = Field(default=15, ge=0)
    institution_match_bonus: int = Field(default=10, ge=0)
    specialization_match_bonus: int = Field(default=15, ge=0)
    farm_hand_bonus: int = Field(default=10, ge=0)
    farm_manager_bonus: int = Field(default=10, ge=0)
    internship_bonus: int = Field(default=20, ge=0)


class MatchingConfig(BaseModel):
    """Thresholds and candidate pool for the match finder."""

    job_min_score: int = Field(default=1, ge=1, le=100)
    applicant_min_score: int = Field(default=30, ge=0, le=100)
    notify_min_score: int = Field(default=50, ge=0, le=100)
    notify_limit: int = Field(default=10, ge=1)
    applicant_roles: list[str] = Field(
        default_factory=lambda: ["graduate", "student", "worker"],
    )

    @field_validator("applicant_roles")
    @classmethod
    def at_least_one_role(cls, v: list[str]) -> list[str]:
        roles = [r.strip().lower() for r in v if r.strip()]
        if not roles:
            msg = "applicant_roles must not be empty"
            raise ValueError(msg)
        return roles


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
