#!/usr/bin/env python3
"""
Pagination - Page/limit slicing with metadata.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypeVar, Union

from pydantic import BaseModel, Field, ValidationError

from core.config_loader import ResultPolicy
from core.exceptions import InvalidFilterParameters

T = TypeVar('T')


class PaginationParams(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1)


@dataclass(frozen=True)
class PaginationMeta:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'page': self.page,
            'limit': self.limit,
            'total': self.total,
            'total_pages': self.total_pages,
            'has_next': self.has_next,
            'has_prev': self.has_prev,
        }


def resolve_pagination(
    pagination: Union[PaginationParams, Dict[str, Any], None],
    policy: Optional[ResultPolicy] = None
) -> PaginationParams:
    """Fill defaults from the ResultPolicy and validate bounds.

    Raises:
        InvalidFilterParameters: page < 1, limit < 1 or limit > max_limit.
    """
    policy = policy or ResultPolicy()
    if isinstance(pagination, PaginationParams):
        params = pagination
    else:
        raw = {k: v for k, v in (pagination or {}).items() if v is not None}
        raw.setdefault('page', policy.default_page)
        raw.setdefault('limit', policy.default_limit)
        try:
            params = PaginationParams(**raw)
        except (ValidationError, TypeError) as e:
            raise InvalidFilterParameters(f"Invalid pagination: {e}") from e

    if params.limit > policy.max_limit:
        raise InvalidFilterParameters(f"limit {params.limit} exceeds maximum of {policy.max_limit}")
    return params


def paginate(items: Sequence[T], params: PaginationParams) -> Tuple[List[T], PaginationMeta]:
    """Return items[(page-1)*limit : page*limit] and its metadata."""
    total = len(items)
    start = (params.page - 1) * params.limit
    end = params.page * params.limit

    meta = PaginationMeta(
        page=params.page,
        limit=params.limit,
        total=total,
        total_pages=math.ceil(total / params.limit) if total else 0,
        has_next=end < total,
        has_prev=params.page > 1,
    )
    return list(items[start:end]), meta
