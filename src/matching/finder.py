"""Match finder: wires the store, filters, scorer and notification fan-out.

Data flow for a ranked query:
  1. Fetch the anchor (job or applicant); missing anchor -> no matches
  2. Build a coarse predicate set and query candidates
  3. Re-read each candidate by id and score it against the anchor
  4. Keep scores at or above the query's threshold
  5. Stable sort, highest score first

Store errors propagate. Only individual notification sends are contained.
"""

import json
import logging

from src.core.config import Settings
from src.core.schemas import Applicant, Job, MatchResult, Notification
from src.matching.filters import applicant_filter, job_filter
from src.matching.scorer import score_match
from src.notifications.base import NotificationDispatcher
from src.repository.base import Repository

logger = logging.getLogger(__name__)

MATCH_TITLE = "New Job Match Found"


class MatchFinder:
    """Ranks applicants for a job and jobs for an applicant.

    Usage::

        finder = MatchFinder(SQLiteRepository(conn), dispatcher, settings)
        matches = await finder.find_matches_for_job("job-1")
        await finder.notify_matching_applicants("job-1")

    Holds no state between calls; each operation is a single pass.
    """

    def __init__(
        self,
        repository: Repository,
        dispatcher: NotificationDispatcher,
        settings: Settings,
    ) -> None:
        self._repo = repository
        self._dispatcher = dispatcher
        self._settings = settings

    async def score_job_applicant(self, job_id: str, applicant_id: str) -> int:
        """Return the 0-100 score for a pair of ids; 0 if either is missing."""
        job = await self._repo.get_job(job_id)
        if job is None:
            logger.debug("Job %s not found - score 0", job_id)
            return 0
        applicant = await self._repo.get_applicant(applicant_id)
        if applicant is None:
            logger.debug("Applicant %s not found - score 0", applicant_id)
            return 0
        return score_match(job, applicant, self._settings.scoring).score

    async def find_matches_for_job(self, job_id: str) -> list[MatchResult]:
        """Rank every applicant with a nonzero score for this job."""
        job = await self._repo.get_job(job_id)
        if job is None:
            logger.info("Job %s not found - no matches", job_id)
            return []

        candidates = await self._repo.query_applicants(
            applicant_filter(job, self._settings.matching),
        )
        logger.info("Job %s: %d candidate applicants", job_id, len(candidates))

        min_score = self._settings.matching.job_min_score
        matches: list[MatchResult] = []
        for candidate in candidates:
            applicant = await self._repo.get_applicant(candidate.id)
            if applicant is None:
                continue
            result = self._score(job, applicant)
            if result.match_score >= min_score:
                matches.append(result)

        return _ranked(matches)

    async def find_jobs_for_applicant(
        self,
        applicant_id: str,
        all_regions: bool = False,
    ) -> list[MatchResult]:
        """Rank active jobs scoring at least applicant_min_score for this applicant.

        Args:
            applicant_id: The applicant browsing jobs.
            all_regions: Score every active job instead of pre-filtering
                (scores still favour the preferred region).
        """
        applicant = await self._repo.get_applicant(applicant_id)
        if applicant is None:
            logger.info("Applicant %s not found - no matches", applicant_id)
            return []

        candidates = await self._repo.query_jobs(job_filter(applicant, all_regions))
        logger.info("Applicant %s: %d candidate jobs", applicant_id, len(candidates))

        min_score = self._settings.matching.applicant_min_score
        matches: list[MatchResult] = []
        for candidate in candidates:
            job = await self._repo.get_job(candidate.id)
            if job is None:
                continue
            result = self._score(job, applicant)
            if result.match_score >= min_score:
                matches.append(result)

        return _ranked(matches)

    async def notify_matching_applicants(self, job_id: str) -> int:
        """Notify the top-ranked applicants about a job.

        Returns the number of notifications delivered. A failed send is
        logged and the loop moves on to the next recipient.
        """
        matches = await self.find_matches_for_job(job_id)

        job = await self._repo.get_job(job_id)
        if job is None:
            return 0

        config = self._settings.matching
        top = [m for m in matches if m.match_score >= config.notify_min_score][: config.notify_limit]
        notification = Notification(
            title=MATCH_TITLE,
            message=(
                f"A new {job.job_type} position in {job.location} "
                f"matches your profile: {job.title}"
            ),
            link=f"/jobs/{job_id}",
        )

        sent = 0
        for match in top:
            try:
                delivered = await self._dispatcher.send(match.applicant_id, notification)
            except Exception:
                logger.warning(
                    "Notification to '%s' for job %s raised", match.applicant_id, job_id,
                    exc_info=True,
                )
                continue
            if delivered:
                sent += 1
            else:
                logger.warning("Notification to '%s' for job %s failed", match.applicant_id, job_id)

        logger.info("Job %s: notified %d/%d top matches", job_id, sent, len(top))
        return sent

    def _score(self, job: Job, applicant: Applicant) -> MatchResult:
        scored = score_match(job, applicant, self._settings.scoring)
        return MatchResult(
            applicant_id=applicant.id,
            job_id=job.id,
            match_score=scored.score,
            reasons=scored.reasons,
        )


def _ranked(matches: list[MatchResult]) -> list[MatchResult]:
    # sorted() is stable, so ties keep the store's order
    return sorted(matches, key=lambda m: m.match_score, reverse=True)


def export_results_json(results: list[MatchResult]) -> str:
    """Export ranked matches as a JSON string (ids and score only)."""
    data = [
        {
            "applicant_id": r.applicant_id,
            "job_id": r.job_id,
            "match_score": r.match_score,
        }
        for r in results
    ]
    return json.dumps(data, indent=2)
