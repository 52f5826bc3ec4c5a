"""Engine Module - Ranking, filtering and pagination over a match pool."""
from core.engine.filters import MatchFilters, parse_filters
from core.engine.pagination import PaginationParams, PaginationMeta, paginate, resolve_pagination
from core.engine.stats import MatchSummary, summarize_matches
from core.engine.models import RankedMatch, MatchPage
from core.engine.service import MatchEngine

__all__ = [
    'MatchEngine', 'MatchFilters', 'parse_filters',
    'PaginationParams', 'PaginationMeta', 'paginate', 'resolve_pagination',
    'MatchSummary', 'summarize_matches', 'RankedMatch', 'MatchPage'
]
