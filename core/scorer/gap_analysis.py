#!/usr/bin/env python3
"""
Skill Gap Analysis - Critical/minor gaps, strengths and recommendations.

Uses the same skill equivalence as scoring, so a gap reported here is
always a gap the score was penalised for.
"""

from typing import List, Sequence
import logging

from core.config_loader import ScorerConfig
from core.matcher.models import Skill
from core.matcher.equivalence import SkillEquivalence
from core.scorer.coverage import match_skills
from core.scorer.models import SkillGapAnalysis
from core.scorer.proficiency import normalize_proficiency

logger = logging.getLogger(__name__)

MAX_SUGGESTED_PREFERRED = 3
MAX_HIGHLIGHTED_STRENGTHS = 3


def _has_numeric_proficiency(skill: Skill) -> bool:
    # Sentinel outside 0-100 tells labels and missing values apart from real numbers
    return normalize_proficiency(skill.proficiency, neutral=-1.0) >= 0.0


def find_strengths(candidate_skills: Sequence[Skill], threshold: float) -> List[Skill]:
    """Candidate skills with numeric proficiency >= threshold, strongest first."""
    strong = [
        s for s in candidate_skills
        if _has_numeric_proficiency(s) and normalize_proficiency(s.proficiency) >= threshold
    ]
    return sorted(strong, key=lambda s: normalize_proficiency(s.proficiency), reverse=True)


def generate_recommendations(
    critical_gaps: Sequence[Skill],
    minor_gaps: Sequence[Skill],
    strengths: Sequence[Skill]
) -> List[str]:
    recommendations = []

    if critical_gaps:
        recommendations.append(
            f"Focus on developing these critical skills: {', '.join(s.name for s in critical_gaps)}"
        )

    if minor_gaps and len(minor_gaps) <= MAX_SUGGESTED_PREFERRED:
        recommendations.append(
            f"Consider learning these preferred skills to stand out: {', '.join(s.name for s in minor_gaps)}"
        )

    if strengths:
        top = strengths[:MAX_HIGHLIGHTED_STRENGTHS]
        recommendations.append(f"Highlight your strong skills: {', '.join(s.name for s in top)}")

    if not critical_gaps and not minor_gaps:
        recommendations.append("Excellent match! You meet all the requirements for this position.")

    return recommendations


def analyze_skill_gaps(
    candidate_skills: Sequence[Skill],
    required_skills: Sequence[Skill],
    preferred_skills: Sequence[Skill],
    equivalence: SkillEquivalence,
    config: ScorerConfig
) -> SkillGapAnalysis:
    """
    Analyze a candidate's skill gaps against one job.

    Args:
        candidate_skills: The candidate's skills
        required_skills: Job's required skills (unmatched -> critical gaps)
        preferred_skills: Job's preferred skills (unmatched -> minor gaps)
        equivalence: Skill-name equivalence strategy
        config: ScorerConfig (strength_threshold)

    Returns:
        SkillGapAnalysis
    """
    _, _, critical_gaps = match_skills(required_skills, candidate_skills, equivalence)
    _, _, minor_gaps = match_skills(preferred_skills, candidate_skills, equivalence)
    strengths = find_strengths(candidate_skills, config.strength_threshold)

    return SkillGapAnalysis(
        critical_gaps=critical_gaps,
        minor_gaps=minor_gaps,
        strengths=strengths,
        recommendations=generate_recommendations(critical_gaps, minor_gaps, strengths),
    )
