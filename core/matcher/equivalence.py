#!/usr/bin/env python3
"""
Skill Equivalence - Decide whether two skill names denote the same skill.

Rules, in order:
1. Exact match after normalization (lowercase, trimmed).
2. Synonym groups: both names appear in one group (canonical or variant).
3. Substring fallback: one normalized name contains the other.
4. Optional word overlap for multi-word names.

The substring rule is a known source of false positives on very short
names ("c" vs "objective-c"). Inject a stricter strategy where that
matters.
"""
from typing import Dict, Iterable, List, Mapping, FrozenSet, Optional, Protocol, runtime_checkable

from core.config_loader import EquivalenceConfig


def normalize_skill_name(name: str) -> str:
    return name.lower().strip()


@runtime_checkable
class SkillEquivalence(Protocol):
    """Capability: are two skill names the same skill?"""

    def equivalent(self, a: str, b: str) -> bool:
        ...


class RuleBasedSkillEquivalence:
    """Exact, synonym-group and substring skill equivalence."""

    def __init__(self, synonyms: Mapping[str, Iterable[str]], word_overlap: bool = False):
        """
        Initialize with an immutable copy of the synonym table.

        Args:
            synonyms: Canonical term -> variant spellings
            word_overlap: Also match multi-word names sharing a word (len > 2)
        """
        groups: List[FrozenSet[str]] = []
        membership: Dict[str, FrozenSet[int]] = {}
        for canonical, variants in synonyms.items():
            group = frozenset(normalize_skill_name(v) for v in (canonical, *variants))
            index = len(groups)
            groups.append(group)
            for term in group:
                membership[term] = membership.get(term, frozenset()) | {index}

        self._groups = tuple(groups)
        self._membership = membership
        self.word_overlap = word_overlap

    @classmethod
    def from_config(cls, config: Optional[EquivalenceConfig] = None) -> "RuleBasedSkillEquivalence":
        config = config or EquivalenceConfig()
        return cls(config.synonyms, word_overlap=config.word_overlap)

    def are_synonyms(self, a: str, b: str) -> bool:
        groups_a = self._membership.get(a)
        groups_b = self._membership.get(b)
        if not groups_a or not groups_b:
            return False
        return not groups_a.isdisjoint(groups_b)

    @staticmethod
    def _share_word(a: str, b: str) -> bool:
        words_a = a.split()
        words_b = b.split()
        if len(words_a) <= 1 and len(words_b) <= 1:
            return False
        return any(
            len(wa) > 2 and len(wb) > 2 and (wa in wb or wb in wa)
            for wa in words_a
            for wb in words_b
        )

    def equivalent(self, a: str, b: str) -> bool:
        a = normalize_skill_name(a)
        b = normalize_skill_name(b)

        if a == b:
            return True

        if self.are_synonyms(a, b):
            return True

        # Empty names would be a substring of everything
        if a and b and (a in b or b in a):
            return True

        if self.word_overlap and self._share_word(a, b):
            return True

        return False
