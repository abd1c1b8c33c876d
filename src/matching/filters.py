"""Coarse candidate filters pushed down to the store.

These only shrink the candidate set before scoring:
  - applicant_filter: anchor is a job, strict equality on region,
    institution type and specialization
  - job_filter: anchor is an applicant, soft OR-filters so jobs without an
    institution or specialization requirement stay in the pool
"""

import logging

from src.core.config import MatchingConfig
from src.core.schemas import INSTITUTION_ANY, Applicant, Job
from src.repository.predicates import AnyOf, Eq, In, Predicate

logger = logging.getLogger(__name__)

ACTIVE = "active"


def applicant_filter(job: Job, config: MatchingConfig) -> list[Predicate]:
    """Build the predicate set for applicants worth scoring against a job."""
    predicates: list[Predicate] = [
        Eq(field="is_verified", value=True),
        In(field="role", values=tuple(config.applicant_roles)),
    ]
    if job.location:
        predicates.append(Eq(field="preferred_region", value=job.location))
    if job.required_institution_type and job.required_institution_type != INSTITUTION_ANY:
        predicates.append(Eq(field="institution_type", value=job.required_institution_type))
    if job.required_specialization:
        predicates.append(Eq(field="specialization", value=job.required_specialization))
    logger.debug("applicant_filter for job %s: %s", job.id, predicates)
    return predicates


def job_filter(applicant: Applicant, all_regions: bool = False) -> list[Predicate]:
    """Build the predicate set for active jobs worth scoring against an applicant.

    With all_regions every active job is a candidate; the applicant browses
    past their region and the score threshold alone decides.
    """
    predicates: list[Predicate] = [Eq(field="status", value=ACTIVE)]
    if all_regions:
        return predicates
    if applicant.preferred_region:
        predicates.append(Eq(field="location", value=applicant.preferred_region))
    if applicant.institution_type:
        predicates.append(AnyOf(
            field="required_institution_type",
            values=(applicant.institution_type, INSTITUTION_ANY),
        ))
    if applicant.specialization:
        predicates.append(AnyOf(
            field="required_specialization",
            values=(applicant.specialization, None),
        ))
    logger.debug("job_filter for applicant %s: %s", applicant.id, predicates)
    return predicates
