import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import select, delete

from database.models import CandidateJobMatch
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class MatchRepository(BaseRepository):
    def get_existing_match(
        self,
        job_id: str,
        candidate_id: str
    ) -> Optional[CandidateJobMatch]:
        stmt = select(CandidateJobMatch).where(
            CandidateJobMatch.job_id == job_id,
            CandidateJobMatch.candidate_id == candidate_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def store_match(
        self,
        job_id: str,
        candidate_id: str,
        match_score: int,
        matching_skills: List[Dict[str, Any]],
        skill_gaps: List[Dict[str, Any]],
        overall_fit: str
    ) -> CandidateJobMatch:
        """Insert or update the match row for (job, candidate). Does not commit."""
        record = self.get_existing_match(job_id, candidate_id)

        if record:
            record.match_score = match_score
            record.matching_skills = matching_skills
            record.skill_gaps = skill_gaps
            record.overall_fit = overall_fit
        else:
            record = CandidateJobMatch(
                job_id=job_id,
                candidate_id=candidate_id,
                match_score=match_score,
                matching_skills=matching_skills,
                skill_gaps=skill_gaps,
                overall_fit=overall_fit
            )
            self.db.add(record)

        self.flush()
        return record

    def get_stored_matches(
        self,
        job_id: str,
        min_score: Optional[int] = None
    ) -> List[CandidateJobMatch]:
        stmt = select(CandidateJobMatch).where(CandidateJobMatch.job_id == job_id)

        if min_score is not None:
            stmt = stmt.where(CandidateJobMatch.match_score >= min_score)

        stmt = stmt.order_by(CandidateJobMatch.match_score.desc(), CandidateJobMatch.candidate_id)
        return self.db.execute(stmt).scalars().all()

    def get_matches_for_candidate(self, candidate_id: str) -> List[CandidateJobMatch]:
        stmt = select(CandidateJobMatch).where(
            CandidateJobMatch.candidate_id == candidate_id
        ).order_by(CandidateJobMatch.match_score.desc(), CandidateJobMatch.job_id)
        return self.db.execute(stmt).scalars().all()

    def delete_matches_for_job(self, job_id: str) -> int:
        result = self.db.execute(
            delete(CandidateJobMatch).where(CandidateJobMatch.job_id == job_id)
        )
        count = result.rowcount or 0
        if count > 0:
            logger.info(f"Deleted {count} stored matches for job {job_id}")
        return count

    def delete_matches_for_candidate(self, candidate_id: str) -> int:
        result = self.db.execute(
            delete(CandidateJobMatch).where(CandidateJobMatch.candidate_id == candidate_id)
        )
        count = result.rowcount or 0
        if count > 0:
            logger.info(f"Deleted {count} stored matches for candidate {candidate_id}")
        return count
