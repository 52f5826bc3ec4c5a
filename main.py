import sys
import json
import logging
import argparse
from typing import Any, List, Optional

from core.config_loader import load_config, AppConfig
from core.exceptions import NOT_FOUND_ERRORS, VALIDATION_ERRORS
from core.matcher.models import Candidate, JobRequirement
from core.matching_service import MatchingService
from core.scorer.persistence import SqlMatchStore
from database.database import build_engine, build_session_factory, init_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_json(path: str) -> Any:
    with open(path, "r") as f:
        return json.load(f)


def load_job(path: str) -> JobRequirement:
    return JobRequirement.from_dict(load_json(path))


def load_candidate(path: str) -> Candidate:
    return Candidate.from_dict(load_json(path))


def load_candidates(path: str) -> List[Candidate]:
    return [Candidate.from_dict(c) for c in load_json(path)]


def load_jobs(path: str) -> List[JobRequirement]:
    return [JobRequirement.from_dict(j) for j in load_json(path)]


def build_filters(args: argparse.Namespace) -> Optional[dict]:
    filters = {}
    if args.min_score is not None:
        filters['min_match_score'] = args.min_score
    if args.skill:
        filters['skills'] = args.skill
    if args.experience_level:
        filters['experience_levels'] = args.experience_level
    if args.location:
        filters['location'] = args.location
    if args.remote_only:
        filters['remote_only'] = True
    return filters or None


def build_service(config: AppConfig, with_store: bool = False) -> MatchingService:
    store = None
    if with_store:
        engine = build_engine(config.database.url)
        init_db(engine)
        store = SqlMatchStore(build_session_factory(engine))
    return MatchingService.from_config(config, store=store)


def run(args: argparse.Namespace) -> Any:
    config = load_config(args.config)

    if args.command == "rank-candidates":
        service = build_service(config)
        page = service.find_candidates_for_job(
            load_job(args.job),
            load_candidates(args.candidates),
            filters=build_filters(args),
            pagination={'page': args.page, 'limit': args.limit},
            force_refresh=args.refresh
        )
        return page.to_dict()

    if args.command == "rank-jobs":
        service = build_service(config)
        page = service.find_jobs_for_candidate(
            load_candidate(args.candidate),
            load_jobs(args.jobs),
            filters=build_filters(args),
            pagination={'page': args.page, 'limit': args.limit},
            force_refresh=args.refresh
        )
        return page.to_dict()

    if args.command == "gaps":
        service = build_service(config)
        return service.analyze_skill_gaps(load_candidate(args.candidate), load_job(args.job)).to_dict()

    if args.command == "refresh":
        service = build_service(config, with_store=True)
        job = load_job(args.job)
        count = service.refresh_job_matches(job, load_candidates(args.candidates))
        return {"job_id": job.id, "refreshed": count}

    raise ValueError(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Skill-based candidate/job matching")
    parser.add_argument("--config", default="config.yaml", help="Path to config YAML")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_ranking_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--min-score", type=float, default=None, help="Drop matches scoring below this")
        p.add_argument("--skill", action="append", help="Keep pool members with this skill (repeatable)")
        p.add_argument("--experience-level", action="append", help="Keep this experience level (repeatable)")
        p.add_argument("--location", default=None)
        p.add_argument("--remote-only", action="store_true")
        p.add_argument("--page", type=int, default=None)
        p.add_argument("--limit", type=int, default=None)
        p.add_argument("--refresh", action="store_true", help="Bypass cached results")

    rank_candidates = subparsers.add_parser("rank-candidates", help="Rank candidates for a job")
    rank_candidates.add_argument("--job", required=True, help="Job requirement JSON file")
    rank_candidates.add_argument("--candidates", required=True, help="JSON list of candidates")
    add_ranking_args(rank_candidates)

    rank_jobs = subparsers.add_parser("rank-jobs", help="Rank jobs for a candidate")
    rank_jobs.add_argument("--candidate", required=True, help="Candidate JSON file")
    rank_jobs.add_argument("--jobs", required=True, help="JSON list of job requirements")
    add_ranking_args(rank_jobs)

    gaps = subparsers.add_parser("gaps", help="Skill gap analysis of a candidate for a job")
    gaps.add_argument("--job", required=True)
    gaps.add_argument("--candidate", required=True)

    refresh = subparsers.add_parser("refresh", help="Recompute and store all matches for a job")
    refresh.add_argument("--job", required=True)
    refresh.add_argument("--candidates", required=True)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        result = run(args)
    except NOT_FOUND_ERRORS as e:
        logger.error(f"Not found: {e}")
        return 2
    except VALIDATION_ERRORS as e:
        logger.error(f"Invalid request ({e.kind}): {e}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read input: {e}")
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
