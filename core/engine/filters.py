#!/usr/bin/env python3
"""
Match Filters - Optional constraints on a ranking run.

Skills, experience level, location, remote and availability are
pre-filters on the pool; ``min_match_score`` is applied after scoring.
A filter on an attribute the pool member does not have (availability on
jobs) is ignored for that direction.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from core.exceptions import InvalidFilterParameters
from core.matcher.models import Candidate, JobRequirement, Skill, as_utc
from core.matcher.equivalence import SkillEquivalence

logger = logging.getLogger(__name__)

ExperienceLevel = Literal['entry', 'mid', 'senior', 'executive', 'intern']


class MatchFilters(BaseModel):
    """Independently optional filters for a ranking run."""
    model_config = ConfigDict(extra='forbid')

    min_match_score: Optional[float] = Field(None, ge=0, le=100)
    skills: Optional[List[str]] = None
    experience_levels: Optional[List[ExperienceLevel]] = None
    location: Optional[str] = None
    remote_only: bool = False
    available_from: Optional[datetime] = None
    available_until: Optional[datetime] = None

    @model_validator(mode='after')
    def _check_window(self) -> 'MatchFilters':
        if (
            self.available_from and self.available_until
            and as_utc(self.available_until) < as_utc(self.available_from)
        ):
            raise ValueError("available_until must not be before available_from")
        return self

    @property
    def is_empty(self) -> bool:
        return self == MatchFilters()


def parse_filters(filters: Union[MatchFilters, Dict[str, Any], None]) -> Optional[MatchFilters]:
    """Validate caller-supplied filters.

    Raises:
        InvalidFilterParameters: If any field is out of range or unknown.
    """
    if filters is None or isinstance(filters, MatchFilters):
        return filters
    try:
        return MatchFilters(**filters)
    except (ValidationError, TypeError) as e:
        raise InvalidFilterParameters(f"Invalid match filters: {e}") from e


def _has_any_skill(skills: List[Skill], wanted: List[str], equivalence: SkillEquivalence) -> bool:
    return any(equivalence.equivalent(w, s.name) for w in wanted for s in skills)


def _location_matches(location: Optional[str], wanted: str) -> bool:
    if not location:
        return False
    return wanted.lower().strip() in location.lower()


def candidate_passes(candidate: Candidate, filters: MatchFilters, equivalence: SkillEquivalence) -> bool:
    if filters.skills and not _has_any_skill(candidate.skills, filters.skills, equivalence):
        return False
    if filters.experience_levels and candidate.experience_level not in filters.experience_levels:
        return False
    if filters.location and not _location_matches(candidate.location, filters.location):
        return False
    if filters.remote_only and not candidate.remote_ok:
        return False
    if filters.available_from or filters.available_until:
        if not any(w.overlaps(filters.available_from, filters.available_until) for w in candidate.availability):
            return False
    return True


def job_passes(job: JobRequirement, filters: MatchFilters, equivalence: SkillEquivalence) -> bool:
    if filters.skills and not _has_any_skill(job.skills, filters.skills, equivalence):
        return False
    if filters.experience_levels and job.experience_level not in filters.experience_levels:
        return False
    if filters.location and not _location_matches(job.location, filters.location):
        return False
    if filters.remote_only and not job.remote_allowed:
        return False
    return True
