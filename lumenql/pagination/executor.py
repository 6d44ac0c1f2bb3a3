"""Runtime side of pagination: windowing a query into a result page."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from ..errors import ValidationError
from ..sql.builders import QueryBuilder
from .cursor import decode_cursor, encode_cursor
from .types import CountBounds, PaginationType


@dataclass(frozen=True)
class Edge:
    node: Any
    cursor: str


@dataclass
class QueryResultPage:
    """One window of records plus the metadata the wrapper types expose.

    ``total`` is ``None`` when the pagination type does not count.
    """

    items: List[Any]
    per_page: int
    offset: int
    has_more: bool
    total: Optional[int] = None
    edges: List[Edge] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def current_page(self) -> int:
        return self.offset // self.per_page + 1

    @property
    def first_item(self) -> Optional[int]:
        return self.offset + 1 if self.items else None

    @property
    def last_item(self) -> Optional[int]:
        return self.offset + len(self.items) if self.items else None

    @property
    def last_page(self) -> Optional[int]:
        if self.total is None:
            return None
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def has_previous_page(self) -> bool:
        return self.offset > 0

    @property
    def start_cursor(self) -> Optional[str]:
        return self.edges[0].cursor if self.edges else None

    @property
    def end_cursor(self) -> Optional[str]:
        return self.edges[-1].cursor if self.edges else None


def _page_offset(arguments: Mapping[str, Any], per_page: int) -> int:
    page = arguments.get('page')
    if page is None:
        return 0
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValidationError(f"Page must be a positive integer, got {page!r}", 'page', page)
    return (page - 1) * per_page


def _cursor_offset(arguments: Mapping[str, Any]) -> int:
    after = arguments.get('after')
    if after is None:
        return 0
    return decode_cursor(after) + 1


async def paginate(
    builder: QueryBuilder,
    session: Any,
    pagination_type: PaginationType,
    bounds: CountBounds,
    arguments: Mapping[str, Any],
) -> QueryResultPage | List[Any]:
    """Execute ``builder`` for one page.

    NONE returns every record as a list. PAGINATOR and CONNECTION issue a
    count query next to the fetch; SIMPLE fetches one extra row instead of
    counting to learn whether more pages exist.
    """
    builder = builder.order_by_primary_key()
    if pagination_type is PaginationType.NONE:
        return await builder.fetch(session)
    per_page = bounds.clamp(arguments.get('first'))
    if pagination_type is PaginationType.CONNECTION:
        offset = _cursor_offset(arguments)
    else:
        offset = _page_offset(arguments, per_page)

    if not pagination_type.counts_total:
        rows = await builder.fetch(session, limit=per_page + 1, offset=offset)
        has_more = len(rows) > per_page
        return QueryResultPage(items=rows[:per_page], per_page=per_page, offset=offset, has_more=has_more)

    total = await builder.count(session)
    rows = await builder.fetch(session, limit=per_page, offset=offset)
    page = QueryResultPage(
        items=rows,
        per_page=per_page,
        offset=offset,
        has_more=offset + len(rows) < total,
        total=total,
    )
    if pagination_type is PaginationType.CONNECTION:
        page.edges = [Edge(node=row, cursor=encode_cursor(offset + i)) for i, row in enumerate(rows)]
    return page
