"""Repository backed by the local SQLite database."""

import logging
import sqlite3
from collections.abc import Sequence

from src.core import db
from src.core.schemas import Applicant, Job
from src.repository.base import Repository
from src.repository.predicates import Predicate

logger = logging.getLogger(__name__)


class SQLiteRepository(Repository):
    """Serves reads from a connection created by ``init_db``.

    sqlite3 errors propagate unchanged; the store being unreachable is the
    caller's problem, not something to paper over here.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def get_job(self, job_id: str) -> Job | None:
        return db.get_job(self._conn, job_id)

    async def get_applicant(self, applicant_id: str) -> Applicant | None:
        return db.get_applicant(self._conn, applicant_id)

    async def query_jobs(self, predicates: Sequence[Predicate]) -> list[Job]:
        jobs = db.select_jobs(self._conn, predicates)
        logger.debug("query_jobs: %d predicates -> %d rows", len(predicates), len(jobs))
        return jobs

    async def query_applicants(self, predicates: Sequence[Predicate]) -> list[Applicant]:
        applicants = db.select_applicants(self._conn, predicates)
        logger.debug(
            "query_applicants: %d predicates -> %d rows", len(predicates), len(applicants),
        )
        return applicants
