#!/usr/bin/env python3
"""
Match Statistics - Aggregates over a list of match results.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from core.matcher.models import Fit, MatchResult
from core.matcher.equivalence import normalize_skill_name


@dataclass(frozen=True)
class MatchSummary:
    total: int = 0
    average_score: float = 0.0
    fit_distribution: Dict[str, int] = field(default_factory=dict)
    top_skills: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'average_score': self.average_score,
            'fit_distribution': dict(self.fit_distribution),
            'top_skills': list(self.top_skills),
        }


def summarize_matches(results: Sequence[MatchResult], top_n: int = 5) -> MatchSummary:
    """
    Average score, fit distribution and most frequently matched skills.

    Skills are counted by normalized name and reported under the first
    spelling seen; equal counts are ordered alphabetically.
    """
    distribution = {fit.value: 0 for fit in Fit}
    if not results:
        return MatchSummary(fit_distribution=distribution)

    counts: Counter = Counter()
    display_names: Dict[str, str] = {}
    for result in results:
        distribution[result.overall_fit.value] += 1
        for skill in result.matching_skills:
            key = normalize_skill_name(skill.name)
            display_names.setdefault(key, skill.name)
            counts[key] += 1

    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    average = sum(r.score for r in results) / len(results)

    return MatchSummary(
        total=len(results),
        average_score=round(average, 1),
        fit_distribution=distribution,
        top_skills=[display_names[key] for key, _ in ranked[:top_n]],
    )
