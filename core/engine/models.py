#!/usr/bin/env python3
"""
Engine Models - Ranked results and result pages.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.matcher.models import Candidate, JobRequirement, MatchResult
from core.engine.pagination import PaginationMeta
from core.engine.stats import MatchSummary


@dataclass(frozen=True)
class RankedMatch:
    """One pool member with its match. Exactly one of candidate/job is set."""
    match: MatchResult
    candidate: Optional[Candidate] = None
    job: Optional[JobRequirement] = None

    @property
    def subject_id(self) -> str:
        if self.candidate is not None:
            return self.candidate.id
        return self.job.id

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'match': self.match.to_dict()}
        if self.candidate is not None:
            data['candidate'] = self.candidate.to_dict()
        if self.job is not None:
            data['job'] = self.job.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RankedMatch':
        return cls(
            match=MatchResult.from_dict(data['match']),
            candidate=Candidate.from_dict(data['candidate']) if data.get('candidate') else None,
            job=JobRequirement.from_dict(data['job']) if data.get('job') else None,
        )


@dataclass(frozen=True)
class MatchPage:
    """A page of ranked matches, its pagination metadata and a summary of all filtered results."""
    items: List[RankedMatch]
    pagination: PaginationMeta
    summary: MatchSummary = field(default_factory=MatchSummary)

    @property
    def results(self) -> List[MatchResult]:
        return [item.match for item in self.items]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': [item.to_dict() for item in self.items],
            'pagination': self.pagination.to_dict(),
            'summary': self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatchPage':
        return cls(
            items=[RankedMatch.from_dict(item) for item in data.get('items', [])],
            pagination=PaginationMeta(**data['pagination']),
            summary=MatchSummary(**data.get('summary', {})),
        )
