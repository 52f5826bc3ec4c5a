#!/usr/bin/env python3
"""
Match Engine - Rank a pool of candidates for a job, or jobs for a candidate.

Both directions share one MatchScorer; only which side forms the pool
changes. A run pre-filters the pool, scores every member, drops results
under ``min_match_score``, sorts and paginates.

Ordering: score descending, then pool-member id ascending, then input
order (the sort is stable).

The engine holds no state between calls and performs no I/O, so scoring
can be spread over a thread pool without locks.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar, Union
import logging

from core.config_loader import EngineConfig, MatchingConfig, ResultPolicy
from core.matcher.models import Candidate, JobRequirement, MatchResult
from core.matcher.equivalence import RuleBasedSkillEquivalence
from core.scorer import MatchScorer

from core.engine.filters import MatchFilters, parse_filters, candidate_passes, job_passes
from core.engine.models import MatchPage, RankedMatch
from core.engine.pagination import PaginationParams, paginate, resolve_pagination
from core.engine.stats import MatchSummary, summarize_matches

logger = logging.getLogger(__name__)

T = TypeVar('T')


class MatchEngine:
    """
    Orchestrates scoring, filtering, ranking and pagination over a pool.

    Designed to be called by a service layer that owns data access,
    caching and persistence.
    """

    def __init__(
        self,
        scorer: Optional[MatchScorer] = None,
        config: Optional[EngineConfig] = None,
        result_policy: Optional[ResultPolicy] = None
    ):
        self.scorer = scorer or MatchScorer()
        self.config = config or EngineConfig()
        self.result_policy = result_policy or ResultPolicy()

    @classmethod
    def from_config(cls, config: MatchingConfig) -> 'MatchEngine':
        equivalence = RuleBasedSkillEquivalence.from_config(config.equivalence)
        scorer = MatchScorer(config=config.scorer, equivalence=equivalence)
        return cls(scorer=scorer, config=config.engine, result_policy=config.result_policy)

    def _map(self, fn: Callable[[T], MatchResult], pool: Sequence[T]) -> List[MatchResult]:
        """Apply fn to every pool member, preserving order."""
        workers = self.config.max_workers
        if not workers or workers <= 1 or len(pool) <= 1:
            return [fn(member) for member in pool]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(fn, pool))

    def score_candidates(self, job: JobRequirement, candidates: Sequence[Candidate]) -> List[MatchResult]:
        """Score every candidate against a job, in input order."""
        return self._map(lambda candidate: self.scorer.score(candidate, job), candidates)

    def score_jobs(self, candidate: Candidate, jobs: Sequence[JobRequirement]) -> List[MatchResult]:
        """Score a candidate against every job, in input order."""
        return self._map(lambda job: self.scorer.score(candidate, job), jobs)

    def _rank(
        self,
        ranked: List[RankedMatch],
        filters: Optional[MatchFilters],
        params: PaginationParams
    ) -> MatchPage:
        if filters is not None and filters.min_match_score is not None:
            ranked = [r for r in ranked if r.match.score >= filters.min_match_score]

        ranked = sorted(ranked, key=lambda r: (-r.match.score, r.subject_id))
        summary = summarize_matches([r.match for r in ranked], top_n=self.config.top_skills_limit)
        items, meta = paginate(ranked, params)
        return MatchPage(items=items, pagination=meta, summary=summary)

    def rank_candidates(
        self,
        job: JobRequirement,
        candidates: Sequence[Candidate],
        filters: Union[MatchFilters, Dict[str, Any], None] = None,
        pagination: Union[PaginationParams, Dict[str, Any], None] = None
    ) -> MatchPage:
        """Rank candidates for a job.

        Args:
            job: Job requirement to match against
            candidates: Candidate pool (may be empty)
            filters: Optional MatchFilters (or dict of its fields)
            pagination: Optional page/limit (defaults from ResultPolicy)

        Returns:
            MatchPage sorted by score, best first

        Raises:
            InvalidFilterParameters: If filters or pagination are invalid
        """
        filters = parse_filters(filters)
        params = resolve_pagination(pagination, self.result_policy)

        pool = list(candidates)
        if filters is not None:
            equivalence = self.scorer.equivalence
            pool = [c for c in pool if candidate_passes(c, filters, equivalence)]

        results = self.score_candidates(job, pool)
        ranked = [RankedMatch(match=result, candidate=c) for c, result in zip(pool, results)]
        page = self._rank(ranked, filters, params)

        logger.info(
            f"Ranked {len(pool)}/{len(candidates)} candidates for job {job.id}: "
            f"{page.pagination.total} after filtering, page {params.page}"
        )
        return page

    def rank_jobs(
        self,
        candidate: Candidate,
        jobs: Sequence[JobRequirement],
        filters: Union[MatchFilters, Dict[str, Any], None] = None,
        pagination: Union[PaginationParams, Dict[str, Any], None] = None
    ) -> MatchPage:
        """Rank jobs for a candidate. Mirror of rank_candidates."""
        filters = parse_filters(filters)
        params = resolve_pagination(pagination, self.result_policy)

        pool = list(jobs)
        if filters is not None:
            equivalence = self.scorer.equivalence
            pool = [j for j in pool if job_passes(j, filters, equivalence)]

        results = self.score_jobs(candidate, pool)
        ranked = [RankedMatch(match=result, job=j) for j, result in zip(pool, results)]
        page = self._rank(ranked, filters, params)

        logger.info(
            f"Ranked {len(pool)}/{len(jobs)} jobs for candidate {candidate.id}: "
            f"{page.pagination.total} after filtering, page {params.page}"
        )
        return page

    def summarize(self, results: Sequence[MatchResult]) -> MatchSummary:
        return summarize_matches(results, top_n=self.config.top_skills_limit)
