"""
Ordering and pagination of filtered match listings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from footyquery.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from footyquery.data.schema import MatchRecord
from footyquery.query.params import QueryParams


@dataclass(frozen=True)
class Page:
    """One slice of a listing plus the size of the full listing."""

    total: int
    page: int
    page_size: int
    items: List[MatchRecord]


def sort_by_date_desc(records: Sequence[MatchRecord]) -> List[MatchRecord]:
    """
    Sort newest first. Undated records sink to the end; equal dates keep
    their input order.
    """
    return sorted(records, key=lambda record: record.sort_date, reverse=True)


def resolve_page(params: QueryParams) -> int:
    page = params.get("page")
    return max(1, page) if page is not None else 1


def resolve_page_size(params: QueryParams) -> int:
    page_size = params.get("page_size")
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return min(max(1, page_size), MAX_PAGE_SIZE)


def paginate(records: Sequence[MatchRecord], page: int, page_size: int) -> Page:
    offset = (page - 1) * page_size
    return Page(
        total=len(records),
        page=page,
        page_size=page_size,
        items=list(records[offset:offset + page_size]),
    )
