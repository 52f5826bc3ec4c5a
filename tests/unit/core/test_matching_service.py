#!/usr/bin/env python3
"""
Unit tests for MatchingService - cache and store are mocked.
"""

import fnmatch
import unittest
from unittest.mock import MagicMock, patch

from core.cache.match_cache import MatchCacheService
from core.config_loader import AppConfig
from core.engine import MatchEngine, MatchPage
from core.exceptions import (
    CandidateNotFound,
    InvalidFilterParameters,
    JobNotFound,
    NoCandidatesAvailable,
)
from core.matching_service import MatchingService
from core.scorer.persistence import MatchStore
from tests import make_candidate, make_job


class TestMatchingServicePreconditions(unittest.TestCase):

    def setUp(self):
        self.service = MatchingService(engine=MatchEngine())
        self.job = make_job("job-1", required=["Python"])
        self.candidate = make_candidate("c1", ["Python"])

    def test_01_job_not_found(self):
        with self.assertRaises(JobNotFound):
            self.service.find_candidates_for_job(None, [self.candidate])

    def test_02_no_candidates_available(self):
        with self.assertRaises(NoCandidatesAvailable):
            self.service.find_candidates_for_job(self.job, [])

    def test_03_filtered_to_nothing_is_not_an_error(self):
        page = self.service.find_candidates_for_job(
            self.job, [self.candidate], filters={"location": "Atlantis"}
        )
        self.assertEqual(page.pagination.total, 0)

    def test_04_candidate_not_found(self):
        with self.assertRaises(CandidateNotFound):
            self.service.find_jobs_for_candidate(None, [self.job])

    def test_05_no_jobs_is_empty_page(self):
        page = self.service.find_jobs_for_candidate(self.candidate, [])
        self.assertEqual(page.items, [])

    def test_06_invalid_filters(self):
        with self.assertRaises(InvalidFilterParameters):
            self.service.find_candidates_for_job(self.job, [self.candidate], filters={"min_match_score": 200})

    def test_07_gap_analysis_preconditions(self):
        with self.assertRaises(CandidateNotFound):
            self.service.analyze_skill_gaps(None, self.job)
        with self.assertRaises(JobNotFound):
            self.service.analyze_skill_gaps(self.candidate, None)

    def test_08_gap_analysis(self):
        analysis = self.service.analyze_skill_gaps(make_candidate("c2", ["Go"]), self.job)
        self.assertEqual([s.name for s in analysis.critical_gaps], ["Python"])

    def test_09_invalidation_without_cache_is_noop(self):
        self.service.invalidate_job("job-1")
        self.service.invalidate_candidate("c1")


class TestMatchingServiceCaching(unittest.TestCase):

    def setUp(self):
        self.engine = MatchEngine()
        self.cache = MagicMock(spec=MatchCacheService)
        self.cache.get_job_matches.return_value = None
        self.cache.get_candidate_matches.return_value = None
        self.service = MatchingService(engine=self.engine, cache=self.cache)

        self.job = make_job("job-1", required=["React"], preferred=["TypeScript"])
        self.candidates = [make_candidate("a", ["React"]), make_candidate("b", ["React", "TypeScript"])]

    def test_01_cache_miss_computes_and_stores(self):
        page = self.service.find_candidates_for_job(self.job, self.candidates)

        self.cache.get_job_matches.assert_called_once_with("job-1", 1, 20)
        self.cache.set_job_matches.assert_called_once_with(
            "job-1", 1, 20, page.to_dict(), candidate_ids=["a", "b"]
        )
        self.assertEqual([r.candidate_id for r in page.results], ["b", "a"])

    def test_02_cache_hit_skips_engine(self):
        cached = self.engine.rank_candidates(self.job, self.candidates)
        self.cache.get_job_matches.return_value = cached.to_dict()

        with patch.object(self.engine, "rank_candidates") as rank:
            page = self.service.find_candidates_for_job(self.job, self.candidates)

        rank.assert_not_called()
        self.cache.set_job_matches.assert_not_called()
        self.assertIsInstance(page, MatchPage)
        self.assertEqual(page, cached)

    def test_03_force_refresh_bypasses_read_but_writes(self):
        self.cache.get_job_matches.return_value = {"stale": True}

        page = self.service.find_candidates_for_job(self.job, self.candidates, force_refresh=True)

        self.cache.get_job_matches.assert_not_called()
        self.cache.set_job_matches.assert_called_once_with(
            "job-1", 1, 20, page.to_dict(), candidate_ids=["a", "b"]
        )

    def test_04_filtered_requests_bypass_cache(self):
        self.service.find_candidates_for_job(self.job, self.candidates, filters={"min_match_score": 50})

        self.cache.get_job_matches.assert_not_called()
        self.cache.set_job_matches.assert_not_called()

    def test_05_empty_filters_are_cacheable(self):
        self.service.find_candidates_for_job(self.job, self.candidates, filters={})

        self.cache.get_job_matches.assert_called_once()

    def test_06_page_and_limit_in_key(self):
        self.service.find_candidates_for_job(self.job, self.candidates, pagination={"page": 2, "limit": 5})

        self.cache.get_job_matches.assert_called_once_with("job-1", 2, 5)

    def test_07_candidate_direction_uses_candidate_keys(self):
        candidate = self.candidates[0]

        page = self.service.find_jobs_for_candidate(candidate, [self.job])

        self.cache.get_candidate_matches.assert_called_once_with("a", 1, 20)
        self.cache.set_candidate_matches.assert_called_once_with("a", 1, 20, page.to_dict())
        self.cache.get_job_matches.assert_not_called()

    def test_08_invalidation_hooks(self):
        self.service.invalidate_job("job-1")
        self.service.invalidate_candidate("a")

        self.cache.invalidate_job.assert_called_once_with("job-1")
        self.cache.invalidate_candidate.assert_called_once_with("a")


class InMemoryRedis:
    """Just enough of the redis-py client for MatchCacheService. TTLs are not enforced."""

    def __init__(self):
        self.values = {}
        self.sets = {}

    def ping(self):
        return True

    def get(self, key):
        return self.values.get(key)

    def setex(self, key, ttl, value):
        self.values[key] = value
        return True

    def sadd(self, key, *members):
        self.sets.setdefault(key, set()).update(members)
        return len(members)

    def smembers(self, key):
        return set(self.sets.get(key, set()))

    def expire(self, key, ttl):
        return key in self.sets

    def scan(self, cursor=0, match="*", count=None):
        keys = [k for k in list(self.values) + list(self.sets) if fnmatch.fnmatchcase(k, match)]
        return 0, keys

    def delete(self, *keys):
        deleted = 0
        for key in keys:
            deleted += (self.values.pop(key, None) is not None) + (self.sets.pop(key, None) is not None)
        return deleted


class TestCandidateInvalidationWithRedis(unittest.TestCase):
    """A candidate's skill change must not leave job pages ranked over their old skills."""

    def setUp(self):
        self.redis = InMemoryRedis()
        with patch('core.cache.match_cache.Redis') as redis_class:
            redis_class.from_url.return_value = self.redis
            cache = MatchCacheService()
        self.service = MatchingService(engine=MatchEngine(), cache=cache)
        self.job = make_job("j1", required=["Python"])

    def test_01_job_page_recomputed_after_candidate_invalidation(self):
        before = self.service.find_candidates_for_job(self.job, [make_candidate("c1")])
        self.assertEqual(before.results[0].score, 0)

        self.service.invalidate_candidate("c1")
        after = self.service.find_candidates_for_job(self.job, [make_candidate("c1", ["Python"])])

        self.assertEqual(after.results[0].score, 70)

    def test_02_job_page_served_from_cache_without_invalidation(self):
        self.service.find_candidates_for_job(self.job, [make_candidate("c1")])

        page = self.service.find_candidates_for_job(self.job, [make_candidate("c1", ["Python"])])

        self.assertEqual(page.results[0].score, 0)

    def test_03_other_candidates_keep_their_job_pages(self):
        self.service.find_candidates_for_job(self.job, [make_candidate("c1")])
        other_job = make_job("j2", required=["Go"])
        self.service.find_candidates_for_job(other_job, [make_candidate("c2")])

        self.service.invalidate_candidate("c1")

        self.assertIsNone(self.service.cache.get_job_matches("j1", 1, 20))
        self.assertIsNotNone(self.service.cache.get_job_matches("j2", 1, 20))


class TestRefreshJobMatches(unittest.TestCase):

    def setUp(self):
        self.cache = MagicMock(spec=MatchCacheService)
        self.store = MagicMock(spec=MatchStore)
        self.service = MatchingService(engine=MatchEngine(), cache=self.cache, store=self.store)
        self.job = make_job("job-1", required=["Python"])

    def test_01_invalidates_scores_and_stores(self):
        candidates = [make_candidate("a", ["Python"]), make_candidate("b", [])]

        count = self.service.refresh_job_matches(self.job, candidates)

        self.assertEqual(count, 2)
        self.cache.invalidate_job.assert_called_once_with("job-1")
        stored = [c.args for c in self.store.store_match.call_args_list]
        self.assertEqual([(job_id, candidate_id) for job_id, candidate_id, _ in stored], [("job-1", "a"), ("job-1", "b")])
        self.assertEqual(stored[0][2].score, 70)
        self.assertEqual(stored[1][2].score, 0)

    def test_02_preconditions(self):
        with self.assertRaises(JobNotFound):
            self.service.refresh_job_matches(None, [make_candidate("a")])
        with self.assertRaises(NoCandidatesAvailable):
            self.service.refresh_job_matches(self.job, [])
        self.store.store_match.assert_not_called()

    def test_03_without_store(self):
        service = MatchingService(engine=MatchEngine())
        self.assertEqual(service.refresh_job_matches(self.job, [make_candidate("a")]), 1)


class TestFromConfig(unittest.TestCase):

    def test_cache_disabled(self):
        service = MatchingService.from_config(AppConfig())
        self.assertIsNone(service.cache)

    def test_cache_enabled(self):
        config = AppConfig(cache={"enabled": True, "redis_url": "redis://cache:6379/2", "ttl_seconds": 60})

        with patch("core.matching_service.MatchCacheService") as cache_class:
            service = MatchingService.from_config(config)

        cache_class.assert_called_once_with(redis_url="redis://cache:6379/2", password=None, ttl_seconds=60)
        self.assertIs(service.cache, cache_class.return_value)


if __name__ == '__main__':
    unittest.main()
