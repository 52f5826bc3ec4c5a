#!/usr/bin/env python3
"""
Scoring Module - Rule-based skill match scoring.

Public API:
- MatchScorer: Scores one candidate against one job requirement
- ScoredSkillMatch: Score plus coverage breakdown
- SkillGapAnalysis: Critical/minor gaps, strengths, recommendations
- classify_fit: Score -> fit bucket

Modules:

- models.py: Data structures (ScoredSkillMatch, SkillGapAnalysis)
- coverage.py: Skill matching, coverage and score blending
- proficiency.py: Proficiency normalization and multiplier
- fit.py: Fit classification
- gap_analysis.py: Skill gap analysis and recommendations
- persistence.py: Storing match results (store_match hook)
- service.py: MatchScorer orchestrator
"""

from core.scorer.models import ScoredSkillMatch, SkillGapAnalysis
from core.scorer.fit import classify_fit
from core.scorer.service import MatchScorer

__all__ = ['MatchScorer', 'ScoredSkillMatch', 'SkillGapAnalysis', 'classify_fit']
