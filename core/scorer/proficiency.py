#!/usr/bin/env python3
"""
Proficiency Adjustment - Scale coverage by the strength of matched skills.

Numeric proficiency (0-100, or a numeric string) is used as-is after
clamping. Anything else (categorical labels such as "expert", missing
values) maps to the neutral midpoint, which yields a multiplier of 1.0,
so label-only skill sets score on pure coverage.
"""

from typing import Optional, Sequence
import logging

from core.config_loader import ScorerConfig
from core.matcher.models import Skill, Proficiency

logger = logging.getLogger(__name__)


def normalize_proficiency(value: Proficiency, neutral: float = 50.0) -> float:
    """Map any proficiency representation onto 0-100."""
    if value is None or isinstance(value, bool):
        return neutral
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return neutral
    if isinstance(value, (int, float)):
        if value != value:  # NaN
            return neutral
        return max(0.0, min(100.0, float(value)))
    return neutral


def average_proficiency(skills: Sequence[Skill], neutral: float = 50.0) -> Optional[float]:
    if not skills:
        return None
    return sum(normalize_proficiency(s.proficiency, neutral) for s in skills) / len(skills)


def proficiency_multiplier(skills: Sequence[Skill], config: ScorerConfig) -> float:
    """
    Multiplier applied to a coverage score for a set of matched candidate skills.

    Empty set, or weighting disabled -> 1.0.
    Otherwise base + (avg / 100) * range, bounded to [min_multiplier, max_multiplier].
    """
    if not config.proficiency_weighting:
        return 1.0

    avg = average_proficiency(skills, config.neutral_proficiency)
    if avg is None:
        return 1.0

    multiplier = config.multiplier_base + (avg / 100.0) * config.multiplier_range
    multiplier = max(config.min_multiplier, min(config.max_multiplier, multiplier))

    logger.debug(
        f"Proficiency weighting: {len(skills)} skills, avg={avg:.1f}, multiplier={multiplier:.3f}"
    )
    return multiplier
