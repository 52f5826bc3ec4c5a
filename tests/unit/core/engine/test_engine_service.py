#!/usr/bin/env python3
"""
Unit tests for MatchEngine ranking in both directions.
"""

import unittest
from unittest.mock import patch

from core.config_loader import EngineConfig, MatchingConfig, ResultPolicy
from core.exceptions import InvalidFilterParameters
from core.engine import MatchEngine, MatchFilters, MatchPage, PaginationParams
from core.matcher.models import Fit
from tests import make_candidate, make_job


class TestRankCandidates(unittest.TestCase):

    def setUp(self):
        self.engine = MatchEngine()
        self.job = make_job("job-1", required=["React", "JavaScript"], preferred=["TypeScript"])
        self.pool = [
            make_candidate("c1", ["React"]),
            make_candidate("c2", ["React", "JavaScript", "TypeScript"]),
            make_candidate("c3", []),
        ]

    def test_01_sorted_best_first(self):
        page = self.engine.rank_candidates(self.job, self.pool)

        self.assertEqual([item.candidate.id for item in page.items], ["c2", "c1", "c3"])
        self.assertEqual([r.score for r in page.results], [100, 35, 0])
        self.assertEqual(page.pagination.total, 3)

    def test_02_empty_pool_is_empty_page(self):
        page = self.engine.rank_candidates(self.job, [])

        self.assertEqual(page.items, [])
        self.assertEqual(page.pagination.total, 0)
        self.assertEqual(page.pagination.total_pages, 0)
        self.assertFalse(page.pagination.has_next)
        self.assertEqual(page.summary.total, 0)

    def test_03_ties_broken_by_id(self):
        pool = [make_candidate("b", ["React"]), make_candidate("a", ["React"]), make_candidate("c", ["React"])]

        page = self.engine.rank_candidates(self.job, pool)

        self.assertEqual([item.candidate.id for item in page.items], ["a", "b", "c"])

    def test_04_min_match_score(self):
        page = self.engine.rank_candidates(self.job, self.pool, filters={"min_match_score": 40})

        self.assertEqual([r.candidate_id for r in page.results], ["c2"])
        self.assertEqual(page.pagination.total, 1)
        self.assertEqual(page.summary.total, 1)

    def test_05_skill_prefilter(self):
        page = self.engine.rank_candidates(self.job, self.pool, filters=MatchFilters(skills=["ts"]))

        self.assertEqual([r.candidate_id for r in page.results], ["c2"])

    def test_06_pagination(self):
        pool = [make_candidate(f"c{i}", ["React"] if i % 2 else []) for i in range(5)]

        page = self.engine.rank_candidates(self.job, pool, pagination={"page": 2, "limit": 2})

        self.assertEqual(len(page.items), 2)
        self.assertEqual(page.pagination.total, 5)
        self.assertEqual(page.pagination.total_pages, 3)
        self.assertTrue(page.pagination.has_next)
        self.assertTrue(page.pagination.has_prev)
        # Summary covers every filtered result, not just the page
        self.assertEqual(page.summary.total, 5)

    def test_07_invalid_parameters(self):
        with self.assertRaises(InvalidFilterParameters):
            self.engine.rank_candidates(self.job, self.pool, pagination={"page": 0})
        with self.assertRaises(InvalidFilterParameters):
            self.engine.rank_candidates(self.job, self.pool, pagination={"limit": 1000})
        with self.assertRaises(InvalidFilterParameters):
            self.engine.rank_candidates(self.job, self.pool, filters={"min_match_score": 101})

    def test_08_deterministic(self):
        first = self.engine.rank_candidates(self.job, self.pool).to_dict()
        second = self.engine.rank_candidates(self.job, self.pool).to_dict()

        self.assertEqual(first, second)

    def test_09_does_not_mutate_inputs(self):
        pool = list(self.pool)

        self.engine.rank_candidates(self.job, pool, filters={"skills": ["React"]})

        self.assertEqual(pool, self.pool)

    def test_10_summary(self):
        page = self.engine.rank_candidates(self.job, self.pool)

        self.assertEqual(page.summary.average_score, 45.0)
        self.assertEqual(page.summary.fit_distribution[Fit.EXCELLENT.value], 1)
        self.assertEqual(page.summary.top_skills[0], "React")


class TestRankJobs(unittest.TestCase):

    def setUp(self):
        self.engine = MatchEngine()
        self.candidate = make_candidate("c1", ["React", "JavaScript"])
        self.jobs = [
            make_job("j2", required=["Python"]),
            make_job("j3"),
            make_job("j1", required=["React", "JavaScript"], preferred=["TypeScript"]),
        ]

    def test_01_sorted_best_first_ties_by_id(self):
        page = self.engine.rank_jobs(self.candidate, self.jobs)

        self.assertEqual([item.job.id for item in page.items], ["j1", "j3", "j2"])
        self.assertEqual([r.score for r in page.results], [70, 70, 0])
        self.assertTrue(all(r.candidate_id == "c1" for r in page.results))

    def test_02_symmetric_with_candidate_ranking(self):
        job = self.jobs[2]

        by_job = self.engine.rank_candidates(job, [self.candidate]).results[0]
        by_candidate = [r for r in self.engine.rank_jobs(self.candidate, self.jobs).results if r.job_id == "j1"][0]

        self.assertEqual(by_job, by_candidate)

    def test_03_empty_job_list(self):
        page = self.engine.rank_jobs(self.candidate, [])
        self.assertEqual(page.pagination.total, 0)

    def test_04_job_filters(self):
        jobs = [
            make_job("remote", required=["React"], remote_allowed=True),
            make_job("office", required=["React"], remote_allowed=False),
        ]

        page = self.engine.rank_jobs(self.candidate, jobs, filters={"remote_only": True})

        self.assertEqual([item.job.id for item in page.items], ["remote"])


class TestEngineConfiguration(unittest.TestCase):

    def setUp(self):
        self.job = make_job("job-1", required=["Python", "SQL"], preferred=["Docker"])
        self.pool = [
            make_candidate(f"c{i:02d}", [("Python", i * 5), "PostgreSQL", "Docker"][: i % 4])
            for i in range(20)
        ]

    def test_01_thread_pool_matches_sequential(self):
        sequential = MatchEngine().rank_candidates(self.job, self.pool)
        threaded = MatchEngine(config=EngineConfig(max_workers=4)).rank_candidates(self.job, self.pool)

        self.assertEqual(threaded.to_dict(), sequential.to_dict())

    def test_02_thread_pool_used(self):
        engine = MatchEngine(config=EngineConfig(max_workers=4))
        with patch('core.engine.service.ThreadPoolExecutor') as executor_class:
            executor = executor_class.return_value.__enter__.return_value
            executor.map.side_effect = lambda fn, pool: map(fn, pool)

            engine.score_candidates(self.job, self.pool)

        executor_class.assert_called_once_with(max_workers=4)

    def test_03_result_policy_defaults(self):
        engine = MatchEngine(result_policy=ResultPolicy(default_limit=5, max_limit=10))

        page = engine.rank_candidates(self.job, self.pool)

        self.assertEqual(page.pagination.limit, 5)
        self.assertEqual(len(page.items), 5)

    def test_04_from_config(self):
        config = MatchingConfig(**{
            "equivalence": {"synonyms": {}},
            "result_policy": {"default_limit": 3},
            "engine": {"top_skills_limit": 1},
        })

        engine = MatchEngine.from_config(config)
        page = engine.rank_candidates(make_job("j", required=["JavaScript"]), [make_candidate("c", ["js"])])

        self.assertEqual(page.results[0].score, 0)
        self.assertEqual(page.pagination.limit, 3)
        self.assertEqual(engine.summarize(page.results).top_skills, [])


class TestMatchPageSerialization(unittest.TestCase):

    def test_page_survives_dict_round_trip(self):
        engine = MatchEngine()
        job = make_job("job-1", required=["React"], preferred=["TypeScript"])
        pool = [make_candidate("a", [("React", 90)], location="Lisbon"), make_candidate("b", ["TypeScript"])]

        page = engine.rank_candidates(job, pool, pagination=PaginationParams(page=1, limit=1))

        self.assertEqual(MatchPage.from_dict(page.to_dict()), page)


if __name__ == '__main__':
    unittest.main()
