"""Match Cache Service - Redis read-through cache for ranked match pages."""
import json
import logging
from typing import Optional, Dict, Any, Iterable
from datetime import datetime, timezone
from urllib.parse import urlparse

from redis import Redis

logger = logging.getLogger(__name__)

# 5 minutes
CACHE_TTL_SECONDS = 5 * 60

JOB_PREFIX = "match:job"
CANDIDATE_PREFIX = "match:candidate"
# Per-candidate set of job page keys whose ranking includes that candidate
CANDIDATE_INDEX_PREFIX = "match:candidate-index"


def _sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    try:
        parsed = urlparse(url)
        if parsed.password:
            sanitized = parsed._replace(
                netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
            )
            return sanitized.geturl()
        return url
    except ValueError:
        return url


class MatchCacheService:
    """
    Cache of ranked match pages keyed by job or candidate identity.

    Entries for a job are dropped with invalidate_job() when its
    requirements change, and for a candidate with invalidate_candidate()
    when their skills change. When Redis is unreachable every operation
    is a no-op and callers recompute.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        ttl_seconds: int = CACHE_TTL_SECONDS
    ):
        self.redis_url = redis_url
        self.password = password
        self.ttl_seconds = ttl_seconds
        self._redis: Optional[Redis] = None
        self._available = False

        try:
            self._redis = Redis.from_url(
                redis_url,
                password=password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            self._redis.ping()
            self._available = True
            logger.info(f"Match cache connected to Redis at {_sanitize_url(redis_url)}")
        except Exception as e:
            logger.warning(f"Match cache Redis unavailable: {e}")
            self._redis = None
            self._available = False

    @property
    def is_available(self) -> bool:
        """Check if cache is available."""
        if not self._available or not self._redis:
            return False
        try:
            return self._redis.ping()
        except Exception:
            return False

    @staticmethod
    def job_key(job_id: str, page: int, limit: int) -> str:
        return f"{JOB_PREFIX}:{job_id}:page:{page}:limit:{limit}"

    @staticmethod
    def candidate_key(candidate_id: str, page: int, limit: int) -> str:
        return f"{CANDIDATE_PREFIX}:{candidate_id}:page:{page}:limit:{limit}"

    @staticmethod
    def candidate_index_key(candidate_id: str) -> str:
        return f"{CANDIDATE_INDEX_PREFIX}:{candidate_id}"

    def _get(self, key: str) -> Optional[Dict[str, Any]]:
        if not self.is_available:
            return None

        try:
            data = self._redis.get(key)
            if data:
                logger.debug(f"Cache hit for {key}")
                return json.loads(data).get("data")
            logger.debug(f"Cache miss for {key}")
            return None
        except Exception as e:
            logger.warning(f"Error reading from match cache: {e}")
            return None

    def _set(self, key: str, value: Dict[str, Any], ttl_seconds: Optional[int] = None) -> bool:
        if not self.is_available:
            return False

        try:
            ttl = ttl_seconds or self.ttl_seconds
            cache_entry = {
                "data": value,
                "cached_at": datetime.now(timezone.utc).isoformat(),
                "ttl_seconds": ttl
            }
            self._redis.setex(key, ttl, json.dumps(cache_entry))
            logger.debug(f"Cached {key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.warning(f"Error writing to match cache: {e}")
            return False

    def _delete_pattern(self, pattern: str) -> int:
        if not self.is_available:
            return 0

        try:
            cursor = 0
            deleted = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=pattern, count=100)
                if keys:
                    self._redis.delete(*keys)
                    deleted += len(keys)
                if cursor == 0:
                    break
            return deleted
        except Exception as e:
            logger.warning(f"Error deleting {pattern} from match cache: {e}")
            return 0

    def get_job_matches(self, job_id: str, page: int, limit: int) -> Optional[Dict[str, Any]]:
        """Get a cached candidates-for-job page."""
        return self._get(self.job_key(job_id, page, limit))

    def set_job_matches(
        self,
        job_id: str,
        page: int,
        limit: int,
        value: Dict[str, Any],
        ttl_seconds: Optional[int] = None,
        candidate_ids: Iterable[str] = ()
    ) -> bool:
        """Cache a candidates-for-job page.

        candidate_ids should name every candidate the ranking was computed
        over (the page summary depends on all of them), so that
        invalidate_candidate() can find this page later.
        """
        key = self.job_key(job_id, page, limit)
        # An unindexed page could outlive a candidate invalidation
        if not self._index_job_page(key, candidate_ids, ttl_seconds or self.ttl_seconds):
            return False
        return self._set(key, value, ttl_seconds)

    def _index_job_page(self, key: str, candidate_ids: Iterable[str], ttl: int) -> bool:
        if not self.is_available:
            return False

        try:
            for candidate_id in dict.fromkeys(candidate_ids):
                index_key = self.candidate_index_key(candidate_id)
                self._redis.sadd(index_key, key)
                self._redis.expire(index_key, ttl)
            return True
        except Exception as e:
            logger.warning(f"Error indexing {key} in match cache: {e}")
            return False

    def _delete_indexed_job_pages(self, candidate_id: str) -> int:
        if not self.is_available:
            return 0

        index_key = self.candidate_index_key(candidate_id)
        try:
            keys = list(self._redis.smembers(index_key))
            if keys:
                self._redis.delete(*keys)
            self._redis.delete(index_key)
            return len(keys)
        except Exception as e:
            logger.warning(f"Error deleting job pages indexed under {index_key}: {e}")
            return 0

    def get_candidate_matches(self, candidate_id: str, page: int, limit: int) -> Optional[Dict[str, Any]]:
        """Get a cached jobs-for-candidate page."""
        return self._get(self.candidate_key(candidate_id, page, limit))

    def set_candidate_matches(
        self,
        candidate_id: str,
        page: int,
        limit: int,
        value: Dict[str, Any],
        ttl_seconds: Optional[int] = None
    ) -> bool:
        return self._set(self.candidate_key(candidate_id, page, limit), value, ttl_seconds)

    def invalidate_job(self, job_id: str) -> int:
        """Drop every cached page for a job. Call when its requirements change."""
        deleted = self._delete_pattern(f"{JOB_PREFIX}:{job_id}:*")
        logger.info(f"Invalidated {deleted} cached pages for job {job_id}")
        return deleted

    def invalidate_candidate(self, candidate_id: str) -> int:
        """Drop every cached page for a candidate, and every job page ranked
        over them. Call when their skills change."""
        deleted = self._delete_pattern(f"{CANDIDATE_PREFIX}:{candidate_id}:*")
        deleted += self._delete_indexed_job_pages(candidate_id)
        logger.info(f"Invalidated {deleted} cached pages for candidate {candidate_id}")
        return deleted

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        if not self.is_available:
            return {"available": False}

        try:
            info = self._redis.info()
            key_count = 0
            cursor = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match="match:*", count=1000)
                key_count += len(keys)
                if cursor == 0:
                    break
            return {
                "available": True,
                "used_memory_human": info.get("used_memory_human", "unknown"),
                "match_cache_keys": key_count,
                "ttl_seconds": self.ttl_seconds,
            }
        except Exception as e:
            logger.warning(f"Error getting cache stats: {e}")
            return {"available": False, "error": str(e)}

    def clear_all(self) -> bool:
        """Clear all cached match pages. Use with caution."""
        if not self.is_available:
            return False
        deleted = self._delete_pattern("match:*")
        logger.info(f"Cleared {deleted} match pages from cache")
        return True
