#!/usr/bin/env python3
"""
Persistence Operations - Durable storage of computed matches.

Implements the ``store_match(job_id, candidate_id, result)`` hook used by
MatchingService. The engine works without it; storing is for audit and
for serving previously computed matches.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from sqlalchemy.orm import sessionmaker

from core.matcher.models import Fit, MatchResult, Skill
from database.database import db_session_scope
from database.models import CandidateJobMatch
from database.repositories import MatchRepository

logger = logging.getLogger(__name__)


@runtime_checkable
class MatchStore(Protocol):
    def store_match(self, job_id: str, candidate_id: str, result: MatchResult) -> None:
        ...


def _extract_row(result: MatchResult) -> Dict[str, Any]:
    return {
        'match_score': int(result.score),
        'matching_skills': [s.to_dict() for s in result.matching_skills],
        'skill_gaps': [s.to_dict() for s in result.skill_gaps],
        'overall_fit': result.overall_fit.value,
    }


def record_to_result(record: CandidateJobMatch) -> MatchResult:
    """Convert a stored row back into a MatchResult."""
    return MatchResult(
        candidate_id=record.candidate_id,
        job_id=record.job_id,
        score=int(record.match_score),
        matching_skills=[Skill.from_dict(s) for s in (record.matching_skills or [])],
        skill_gaps=[Skill.from_dict(s) for s in (record.skill_gaps or [])],
        overall_fit=Fit(record.overall_fit),
    )


def save_match_to_db(
    repo: MatchRepository,
    job_id: str,
    candidate_id: str,
    result: MatchResult
) -> CandidateJobMatch:
    """
    Insert or update the stored match for (job, candidate).

    Args:
        repo: MatchRepository bound to an open session
        job_id: Job the match was computed for
        candidate_id: Candidate the match was computed for
        result: The computed MatchResult

    Returns:
        CandidateJobMatch record that was created or updated (not committed)
    """
    record = repo.store_match(job_id=job_id, candidate_id=candidate_id, **_extract_row(result))
    logger.debug(f"Stored match for job {job_id}, candidate {candidate_id}: score={result.score}")
    return record


class SqlMatchStore:
    """MatchStore backed by the candidate_job_match table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def store_match(self, job_id: str, candidate_id: str, result: MatchResult) -> None:
        with db_session_scope(self.session_factory) as session:
            save_match_to_db(MatchRepository(session), job_id, candidate_id, result)

    def get_stored_matches(self, job_id: str, min_score: Optional[int] = None) -> List[MatchResult]:
        """Stored matches for a job, best first."""
        with db_session_scope(self.session_factory) as session:
            records = MatchRepository(session).get_stored_matches(job_id, min_score=min_score)
            return [record_to_result(r) for r in records]

    def delete_matches_for_job(self, job_id: str) -> int:
        with db_session_scope(self.session_factory) as session:
            return MatchRepository(session).delete_matches_for_job(job_id)

    def delete_matches_for_candidate(self, candidate_id: str) -> int:
        with db_session_scope(self.session_factory) as session:
            return MatchRepository(session).delete_matches_for_candidate(candidate_id)
