#!/usr/bin/env python3
"""
Scoring Service - Rule-based skill match scoring.

Scores one candidate's skills against one job's required and preferred
skills:

1. Match each required, then each preferred, skill to the first
   equivalent candidate skill.
2. Coverage per list (empty required = 100, empty preferred = 0).
3. Scale each coverage by the proficiency multiplier of the candidate
   skills that satisfied it.
4. score = round(0.7 * required + 0.3 * preferred), clamped to [0, 100].

Scoring is pure: no I/O, no randomness, no exceptions for empty lists.
"""

from typing import Optional, Sequence
import logging

from core.config_loader import ScorerConfig, EquivalenceConfig
from core.matcher.models import Skill, Candidate, JobRequirement, MatchResult
from core.matcher.equivalence import SkillEquivalence, RuleBasedSkillEquivalence

from core.scorer.models import ScoredSkillMatch, SkillGapAnalysis
from core.scorer import coverage
from core.scorer.proficiency import proficiency_multiplier
from core.scorer.fit import classify_fit
from core.scorer.gap_analysis import analyze_skill_gaps

logger = logging.getLogger(__name__)


class MatchScorer:
    """
    Score a candidate against a job requirement.

    The equivalence strategy is injected; any object with
    ``equivalent(a, b) -> bool`` works.
    """

    def __init__(
        self,
        config: Optional[ScorerConfig] = None,
        equivalence: Optional[SkillEquivalence] = None
    ):
        self.config = config or ScorerConfig()
        self.equivalence = equivalence or RuleBasedSkillEquivalence.from_config(EquivalenceConfig())

    def score_skills(
        self,
        candidate_skills: Sequence[Skill],
        required_skills: Sequence[Skill],
        preferred_skills: Sequence[Skill]
    ) -> ScoredSkillMatch:
        """Calculate score, matching skills and skill gaps for one pair.

        Args:
            candidate_skills: Skills the candidate has
            required_skills: Skills the job requires
            preferred_skills: Skills the job prefers

        Returns:
            ScoredSkillMatch with integer score in [0, 100]
        """
        matched_required, matched_required_candidate, skill_gaps = coverage.match_skills(
            required_skills, candidate_skills, self.equivalence
        )
        matched_preferred, matched_preferred_candidate, _ = coverage.match_skills(
            preferred_skills, candidate_skills, self.equivalence
        )

        required_coverage = coverage.calculate_required_coverage(
            len(matched_required), len(required_skills)
        )
        preferred_coverage = coverage.calculate_preferred_coverage(
            len(matched_preferred), len(preferred_skills)
        )

        required_multiplier = proficiency_multiplier(matched_required_candidate, self.config)
        preferred_multiplier = proficiency_multiplier(matched_preferred_candidate, self.config)

        raw_score = coverage.calculate_base_score(
            weighted_required=required_coverage * required_multiplier,
            weighted_preferred=preferred_coverage * preferred_multiplier,
            config=self.config
        )
        score = coverage.finalize_score(raw_score)

        return ScoredSkillMatch(
            score=score,
            matching_skills=matched_required + matched_preferred,
            skill_gaps=skill_gaps,
            required_coverage=required_coverage,
            preferred_coverage=preferred_coverage,
            required_multiplier=required_multiplier,
            preferred_multiplier=preferred_multiplier,
            raw_score=raw_score,
        )

    def score(self, candidate: Candidate, job: JobRequirement) -> MatchResult:
        """Score a candidate against a job and classify the fit."""
        scored = self.score_skills(candidate.skills, job.required_skills, job.preferred_skills)
        fit = classify_fit(scored.score, self.config.fit_thresholds)

        logger.debug(
            f"Candidate {candidate.id} vs job {job.id}: score={scored.score} ({fit.value}), "
            f"required={scored.required_coverage:.0f}%, preferred={scored.preferred_coverage:.0f}%"
        )

        return MatchResult(
            candidate_id=candidate.id,
            job_id=job.id,
            score=scored.score,
            matching_skills=scored.matching_skills,
            skill_gaps=scored.skill_gaps,
            overall_fit=fit,
        )

    def analyze_gaps(self, candidate: Candidate, job: JobRequirement) -> SkillGapAnalysis:
        return analyze_skill_gaps(
            candidate.skills,
            job.required_skills,
            job.preferred_skills,
            self.equivalence,
            self.config
        )
