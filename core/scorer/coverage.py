#!/usr/bin/env python3
"""
Coverage Calculations - Required and preferred coverage metrics.

Calculates what percentage of a job's skill list is covered by the
candidate's skills, and blends the two coverages into a score.
"""

from typing import List, Optional, Sequence, Tuple
import math
import logging

from core.config_loader import ScorerConfig
from core.matcher.models import Skill
from core.matcher.equivalence import SkillEquivalence

logger = logging.getLogger(__name__)


def find_skill_match(
    job_skill: Skill,
    candidate_skills: Sequence[Skill],
    equivalence: SkillEquivalence
) -> Optional[Skill]:
    """Return the first candidate skill equivalent to job_skill, or None."""
    for candidate_skill in candidate_skills:
        if equivalence.equivalent(job_skill.name, candidate_skill.name):
            return candidate_skill
    return None


def match_skills(
    job_skills: Sequence[Skill],
    candidate_skills: Sequence[Skill],
    equivalence: SkillEquivalence
) -> Tuple[List[Skill], List[Skill], List[Skill]]:
    """
    Match each job skill against the candidate's skills.

    Returns: (matched_job_skills, matched_candidate_skills, missing_job_skills)
    where matched_candidate_skills[i] is the candidate skill that satisfied
    matched_job_skills[i].
    """
    matched: List[Skill] = []
    matched_candidate: List[Skill] = []
    missing: List[Skill] = []

    for job_skill in job_skills:
        candidate_skill = find_skill_match(job_skill, candidate_skills, equivalence)
        if candidate_skill is None:
            missing.append(job_skill)
        else:
            matched.append(job_skill)
            matched_candidate.append(candidate_skill)

    return matched, matched_candidate, missing


def calculate_coverage(
    matched_count: int,
    total: int,
    empty_value: float
) -> float:
    """
    Percentage (0-100) of a skill list that is covered.

    Args:
        matched_count: Number of covered skills
        total: Size of the skill list
        empty_value: Coverage reported for an empty list

    Returns:
        Coverage in 0.0-100.0
    """
    if total <= 0:
        return empty_value
    return 100.0 * matched_count / total


def calculate_required_coverage(matched_count: int, total: int) -> float:
    # No required skills is vacuously fully satisfied
    return calculate_coverage(matched_count, total, empty_value=100.0)


def calculate_preferred_coverage(matched_count: int, total: int) -> float:
    # No preferred skills means nothing to reward
    return calculate_coverage(matched_count, total, empty_value=0.0)


def calculate_base_score(
    weighted_required: float,
    weighted_preferred: float,
    config: ScorerConfig
) -> float:
    """
    Blend the (proficiency-adjusted) coverages into a raw score.

    Formula: w_req * RequiredCoverage + w_pref * PreferredCoverage

    Args:
        weighted_required: Adjusted required coverage (0-100 scale)
        weighted_preferred: Adjusted preferred coverage (0-100 scale)
        config: ScorerConfig with weight settings

    Returns:
        Unrounded, unclamped score
    """
    return (
        config.weight_required * weighted_required +
        config.weight_preferred * weighted_preferred
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def finalize_score(raw_score: float) -> int:
    """Round and clamp a raw score into the integer range [0, 100]."""
    return max(0, min(100, round_half_up(raw_score)))
