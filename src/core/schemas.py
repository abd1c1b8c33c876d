"""Core data models for the match engine."""

from pydantic import BaseModel, ConfigDict, Field

INSTITUTION_ANY = "any"
MATCH_FOUND = "match_found"


class Job(BaseModel):
    """A job posting published by a farm.

    Frozen: the engine only reads postings, the store owns them.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    location: str | None = None
    job_type: str = ""
    required_qualification: str | None = None
    required_institution_type: str | None = INSTITUTION_ANY
    required_specialization: str | None = None
    status: str = "active"


class Applicant(BaseModel):
    """An applicant profile (graduate, student, worker, ...)."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: str
    full_name: str = ""
    preferred_region: str | None = None
    is_verified: bool = False
    qualification: str | None = None
    institution_type: str | None = None
    specialization: str | None = None
    nss_status: str | None = None


class MatchScore(BaseModel):
    """Score for one (job, applicant) pair plus the reasons behind it."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(default=0, ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)


class MatchResult(BaseModel):
    """A ranked pairing returned by the match finder."""

    model_config = ConfigDict(frozen=True)

    applicant_id: str
    job_id: str
    match_score: int = Field(ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)


class Notification(BaseModel):
    """An in-app notification addressed to a single user."""

    model_config = ConfigDict(frozen=True)

    type: str = MATCH_FOUND
    title: str
    message: str
    link: str | None = None
