#!/usr/bin/env python3
"""
Matching Service - Caching, persistence and precondition checks around the MatchEngine.

The engine is pure; this service is where the side effects live:
- precondition errors (job/candidate missing, empty candidate pool)
- read-through caching of unfiltered pages, with a force-refresh bypass
- invalidation hooks for write paths (job edited, candidate skills changed)
- optional persistence of every computed match via a MatchStore
"""

from typing import Any, Dict, Optional, Sequence, Union
import logging

from core.config_loader import AppConfig
from core.exceptions import CandidateNotFound, JobNotFound, NoCandidatesAvailable
from core.matcher.models import Candidate, JobRequirement
from core.cache.match_cache import MatchCacheService
from core.engine import MatchEngine, MatchFilters, MatchPage, PaginationParams, parse_filters, resolve_pagination
from core.scorer.models import SkillGapAnalysis
from core.scorer.persistence import MatchStore

logger = logging.getLogger(__name__)

Filters = Union[MatchFilters, Dict[str, Any], None]
Pagination = Union[PaginationParams, Dict[str, Any], None]


def _is_cacheable(filters: Optional[MatchFilters]) -> bool:
    return filters is None or filters.is_empty


class MatchingService:
    """Entry point for callers that own data access (routes, CLI, workers)."""

    def __init__(
        self,
        engine: MatchEngine,
        cache: Optional[MatchCacheService] = None,
        store: Optional[MatchStore] = None
    ):
        self.engine = engine
        self.cache = cache
        self.store = store

    @classmethod
    def from_config(cls, config: AppConfig, store: Optional[MatchStore] = None) -> 'MatchingService':
        cache = None
        if config.cache.enabled:
            cache = MatchCacheService(
                redis_url=config.cache.redis_url,
                password=config.cache.password,
                ttl_seconds=config.cache.ttl_seconds
            )
        return cls(engine=MatchEngine.from_config(config.matching), cache=cache, store=store)

    def find_candidates_for_job(
        self,
        job: Optional[JobRequirement],
        candidates: Optional[Sequence[Candidate]],
        filters: Filters = None,
        pagination: Pagination = None,
        force_refresh: bool = False
    ) -> MatchPage:
        """Rank candidates for a job.

        Unfiltered pages are served from the cache unless force_refresh is
        set; recomputed unfiltered pages are written back either way.

        Raises:
            JobNotFound: job is None
            NoCandidatesAvailable: there are no candidates at all
            InvalidFilterParameters: invalid filters or pagination
        """
        if job is None:
            raise JobNotFound("Job posting not found")
        if not candidates:
            raise NoCandidatesAvailable(f"No candidates available to match against job {job.id}")

        filters = parse_filters(filters)
        params = resolve_pagination(pagination, self.engine.result_policy)
        cacheable = self.cache is not None and _is_cacheable(filters)

        if cacheable and not force_refresh:
            cached = self.cache.get_job_matches(job.id, params.page, params.limit)
            if cached is not None:
                logger.debug(f"Candidate matching cache hit for job {job.id}")
                return MatchPage.from_dict(cached)

        page = self.engine.rank_candidates(job, candidates, filters, params)

        if cacheable:
            self.cache.set_job_matches(
                job.id, params.page, params.limit, page.to_dict(),
                candidate_ids=[c.id for c in candidates]
            )

        return page

    def find_jobs_for_candidate(
        self,
        candidate: Optional[Candidate],
        jobs: Sequence[JobRequirement],
        filters: Filters = None,
        pagination: Pagination = None,
        force_refresh: bool = False
    ) -> MatchPage:
        """Rank jobs for a candidate. An empty job list gives an empty page.

        Raises:
            CandidateNotFound: candidate is None
            InvalidFilterParameters: invalid filters or pagination
        """
        if candidate is None:
            raise CandidateNotFound("Candidate not found")

        filters = parse_filters(filters)
        params = resolve_pagination(pagination, self.engine.result_policy)
        cacheable = self.cache is not None and _is_cacheable(filters)

        if cacheable and not force_refresh:
            cached = self.cache.get_candidate_matches(candidate.id, params.page, params.limit)
            if cached is not None:
                logger.debug(f"Job matching cache hit for candidate {candidate.id}")
                return MatchPage.from_dict(cached)

        page = self.engine.rank_jobs(candidate, jobs or [], filters, params)

        if cacheable:
            self.cache.set_candidate_matches(candidate.id, params.page, params.limit, page.to_dict())

        return page

    def refresh_job_matches(
        self,
        job: Optional[JobRequirement],
        candidates: Optional[Sequence[Candidate]]
    ) -> int:
        """Drop cached pages for a job, recompute every match and store them.

        Returns:
            Number of matches computed
        """
        if job is None:
            raise JobNotFound("Job posting not found")
        if not candidates:
            raise NoCandidatesAvailable(f"No candidates available to match against job {job.id}")

        self.invalidate_job(job.id)
        results = self.engine.score_candidates(job, candidates)

        if self.store is not None:
            for result in results:
                self.store.store_match(job.id, result.candidate_id, result)

        logger.info(f"Refreshed {len(results)} matches for job {job.id} (stored={self.store is not None})")
        return len(results)

    def analyze_skill_gaps(
        self,
        candidate: Optional[Candidate],
        job: Optional[JobRequirement]
    ) -> SkillGapAnalysis:
        if candidate is None:
            raise CandidateNotFound("Candidate not found")
        if job is None:
            raise JobNotFound("Job posting not found")
        return self.engine.scorer.analyze_gaps(candidate, job)

    def invalidate_job(self, job_id: str) -> None:
        """Call after a job's requirements change."""
        if self.cache is not None:
            self.cache.invalidate_job(job_id)

    def invalidate_candidate(self, candidate_id: str) -> None:
        """Call after a candidate's skills change. Also drops cached job pages ranked over them."""
        if self.cache is not None:
            self.cache.invalidate_candidate(candidate_id)
