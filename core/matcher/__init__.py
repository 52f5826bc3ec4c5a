"""Matcher Module - Skill data model and skill-name equivalence."""
from core.matcher.models import (
    Skill, Candidate, JobRequirement, MatchResult, Fit, AvailabilityWindow
)
from core.matcher.equivalence import (
    SkillEquivalence, RuleBasedSkillEquivalence, normalize_skill_name
)

__all__ = [
    'Skill', 'Candidate', 'JobRequirement', 'MatchResult', 'Fit', 'AvailabilityWindow',
    'SkillEquivalence', 'RuleBasedSkillEquivalence', 'normalize_skill_name'
]
