"""Abstract base class for job and profile stores."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.core.schemas import Applicant, Job
from src.repository.predicates import Predicate


class Repository(ABC):
    """Read access to jobs and applicant profiles.

    Query results come back in the store's own order; callers that rank
    must sort stably so ties keep that order.
    """

    @abstractmethod
    async def get_job(self, job_id: str) -> Job | None:
        """Return the job with this id, or None if it does not exist."""

    @abstractmethod
    async def get_applicant(self, applicant_id: str) -> Applicant | None:
        """Return the applicant profile with this id, or None."""

    @abstractmethod
    async def query_jobs(self, predicates: Sequence[Predicate]) -> list[Job]:
        """Return jobs satisfying every predicate."""

    @abstractmethod
    async def query_applicants(self, predicates: Sequence[Predicate]) -> list[Applicant]:
        """Return applicant profiles satisfying every predicate."""
