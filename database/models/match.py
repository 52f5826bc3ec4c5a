import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Text, TIMESTAMP, Integer, JSON, UniqueConstraint, Index

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CandidateJobMatch(Base):
    """
    Stores the computed match between a candidate and a job.

    One row per (job, candidate); recomputing a match updates it in place.
    Skills are stored as JSON lists of {name, proficiency?, category?}.
    """
    __tablename__ = 'candidate_job_match'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    job_id = Column(Text, nullable=False)
    candidate_id = Column(Text, nullable=False)

    match_score = Column(Integer, nullable=False)
    matching_skills = Column(JSON, default=list)
    skill_gaps = Column(JSON, default=list)
    overall_fit = Column(Text, nullable=False)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        UniqueConstraint('job_id', 'candidate_id', name='uq_candidate_job_match_job_candidate'),
        Index('idx_candidate_job_match_candidate', 'candidate_id'),
        Index('idx_candidate_job_match_score', 'match_score'),
    )
