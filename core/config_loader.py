import yaml
import os
import logging
from typing import List, Optional, Dict
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


DEFAULT_SYNONYMS: Dict[str, List[str]] = {
    "javascript": ["js", "ecmascript", "es6", "es2015", "es2020"],
    "typescript": ["ts"],
    "react": ["reactjs", "react.js"],
    "vue": ["vuejs", "vue.js"],
    "angular": ["angularjs"],
    "node": ["nodejs", "node.js"],
    "python": ["py"],
    "java": ["jvm"],
    "c#": ["csharp", "c-sharp"],
    "c++": ["cpp", "cplusplus"],
    "postgresql": ["postgres", "psql"],
    "mongodb": ["mongo"],
    "mysql": ["sql"],
    "aws": ["amazon web services"],
    "gcp": ["google cloud platform", "google cloud"],
    "azure": ["microsoft azure"],
    "docker": ["containerization"],
    "kubernetes": ["k8s"],
    "git": ["version control"],
}


class EquivalenceConfig(BaseModel):
    """
    Configuration for skill-name equivalence.

    The synonym table maps a canonical term to its variant spellings.
    """
    synonyms: Dict[str, List[str]] = Field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_SYNONYMS.items()})
    # Multi-word overlap heuristic ("machine learning" vs "learning"); off keeps
    # equivalence to exact + synonym + substring.
    word_overlap: bool = False


class FitThresholds(BaseModel):
    """Lower bounds (inclusive) of each fit bucket."""
    excellent: int = 80
    good: int = 60
    fair: int = 40


class ScorerConfig(BaseModel):
    """
    Configuration for the MatchScorer.

    score = round(w_req * ReqCoverage * adj(req) + w_pref * PrefCoverage * adj(pref))
    """
    weight_required: float = 0.7
    weight_preferred: float = 0.3

    # Proficiency multiplier: base + (avg / 100) * range, bounded to [min, max]
    proficiency_weighting: bool = True
    neutral_proficiency: float = 50.0
    multiplier_base: float = 0.7
    multiplier_range: float = 0.6
    min_multiplier: float = 0.7
    max_multiplier: float = 1.3

    fit_thresholds: FitThresholds = Field(default_factory=FitThresholds)

    # Gap analysis: candidate skills at or above this proficiency are strengths
    strength_threshold: float = 70.0


class ResultPolicy(BaseModel):
    """Pagination defaults applied when the caller omits them."""
    default_page: int = 1
    default_limit: int = 20
    max_limit: int = 100


class EngineConfig(BaseModel):
    """
    Configuration for the MatchEngine.

    max_workers > 1 scores the pool on a thread pool; None or 1 is sequential.
    """
    max_workers: Optional[int] = None
    top_skills_limit: int = 5


class CacheConfig(BaseModel):
    enabled: bool = False
    redis_url: str = "redis://localhost:6379/0"
    password: Optional[str] = None
    ttl_seconds: int = 300


class DatabaseConfig(BaseModel):
    url: Optional[str] = None


class MatchingConfig(BaseModel):
    """
    Top-level matching configuration.
    """
    equivalence: EquivalenceConfig = Field(default_factory=EquivalenceConfig)
    scorer: ScorerConfig = Field(default_factory=ScorerConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    result_policy: ResultPolicy = Field(default_factory=ResultPolicy)


class AppConfig(BaseModel):
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from elsewhere), try the repo root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.info("No config file found, using defaults")

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        if not data.get('database'):
            data['database'] = {}
        data['database']['url'] = env_db_url

    # Allow env var override for Redis URL
    env_redis_url = os.environ.get("REDIS_URL")
    if env_redis_url:
        if not data.get('cache'):
            data['cache'] = {}
        data['cache']['redis_url'] = env_redis_url

    return AppConfig(**data)
