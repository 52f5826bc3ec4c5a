#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from typing import List, Dict, Any
from dataclasses import dataclass, field

from core.matcher.models import Skill


@dataclass(frozen=True)
class ScoredSkillMatch:
    """Score and skill breakdown for one candidate against one job."""
    score: int
    matching_skills: List[Skill] = field(default_factory=list)
    skill_gaps: List[Skill] = field(default_factory=list)

    required_coverage: float = 0.0
    preferred_coverage: float = 0.0
    required_multiplier: float = 1.0
    preferred_multiplier: float = 1.0
    raw_score: float = 0.0

    def components(self) -> Dict[str, Any]:
        return {
            'required_coverage': self.required_coverage,
            'preferred_coverage': self.preferred_coverage,
            'required_multiplier': self.required_multiplier,
            'preferred_multiplier': self.preferred_multiplier,
            'raw_score': self.raw_score,
        }


@dataclass(frozen=True)
class SkillGapAnalysis:
    """Where a candidate falls short of, and stands out for, one job."""
    critical_gaps: List[Skill] = field(default_factory=list)
    minor_gaps: List[Skill] = field(default_factory=list)
    strengths: List[Skill] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'critical_gaps': [s.to_dict() for s in self.critical_gaps],
            'minor_gaps': [s.to_dict() for s in self.minor_gaps],
            'strengths': [s.to_dict() for s in self.strengths],
            'recommendations': list(self.recommendations),
        }
