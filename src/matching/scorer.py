"""Rule-based compatibility scoring between a job and an applicant.

Score range: 0-100 (capped). Individual bonuses from ScoringConfig.
Rules are independent; several can fire for the same pair. Location is
always reported in the reasons, matched or not.
"""

from src.core.config import ScoringConfig
from src.core.schemas import INSTITUTION_ANY, Applicant, Job, MatchScore

MAX_SCORE = 100

INTERNSHIP_JOB_TYPES = ("intern", "nss")
NSS_NOT_APPLICABLE = "not_applicable"


def score_match(job: Job, applicant: Applicant, config: ScoringConfig) -> MatchScore:
    """Score a single (job, applicant) pair.

    Args:
        job: The posting, already fetched.
        applicant: The applicant profile, already fetched.
        config: Scoring weights from settings.

    Returns:
        MatchScore with the capped score and the reasons in rule order.
    """
    score = 0
    reasons: list[str] = []

    # Regional placement policy
    if job.location == applicant.preferred_region:
        score += config.location_match_bonus
        reasons.append("Location match (same region)")
    else:
        reasons.append("Location mismatch - different region")

    if applicant.is_verified:
        score += config.verified_bonus
        reasons.append("Verified applicant")

    if job.required_qualification and _contains(applicant.qualification, job.required_qualification):
        score += config.qualification_match_bonus
        reasons.append("Qualification match")

    required_institution = job.required_institution_type
    if required_institution and required_institution != INSTITUTION_ANY:
        if applicant.institution_type == required_institution:
            score += config.institution_match_bonus
            reasons.append("Institution type match")

    if job.required_specialization and applicant.specialization:
        if applicant.specialization.lower() == job.required_specialization.lower():
            score += config.specialization_match_bonus
            reasons.append("Specialization match")

    # Job type compatibility
    if job.job_type == "farm_hand" and applicant.qualification:
        if applicant.institution_type == "training_college":
            score += config.farm_hand_bonus
            reasons.append("Suitable for farm hand position")

    if job.job_type == "farm_manager" and applicant.qualification:
        if applicant.institution_type == "university":
            score += config.farm_manager_bonus
            reasons.append("Suitable for management position")

    if job.job_type in INTERNSHIP_JOB_TYPES:
        if applicant.role == "student" and applicant.nss_status != NSS_NOT_APPLICABLE:
            score += config.internship_bonus
            reasons.append("NSS/Internship eligible")

    return MatchScore(score=min(score, MAX_SCORE), reasons=reasons)


def _contains(haystack: str | None, needle: str) -> bool:
    """Case-insensitive substring test; a missing haystack never matches."""
    if not haystack:
        return False
    return needle.lower() in haystack.lower()
