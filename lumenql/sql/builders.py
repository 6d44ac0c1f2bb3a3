from __future__ import annotations
from typing import Any, Callable, List, Optional, Type

from sqlalchemy import func, inspect as sa_inspect, select
from sqlalchemy.orm import with_parent
from sqlalchemy.sql import Select

from ..core.naming import name_candidates

# Backing-store query builder consumed by the relation and pagination resolvers.

SCOPE_PREFIX = 'scope_'


def find_scope(model_cls: Type[Any], name: str) -> Optional[Callable[[Select], Select]]:
    """Scope callable ``scope_<name>`` (or its snake_case form) on a model."""
    for candidate in name_candidates(name):
        fn = getattr(model_cls, SCOPE_PREFIX + candidate, None)
        if callable(fn):
            return fn
    return None


def find_relationship(model_cls: Type[Any], name: str) -> Optional[str]:
    """Attribute name of the relationship ``name`` refers to on ``model_cls``."""
    mapper = sa_inspect(model_cls, raiseerr=False)
    if mapper is None:
        return None
    relationships = mapper.relationships
    for candidate in name_candidates(name):
        if candidate in relationships:
            return candidate
    return None


class QueryBuilder:
    """Immutable wrapper around a ``Select`` over one model.

    Every method returns a new builder so a compiled resolver can derive a
    fresh query per invocation.
    """

    def __init__(self, model_cls: Type[Any], stmt: Optional[Select] = None):
        self.model_cls = model_cls
        self.stmt = stmt if stmt is not None else select(model_cls)

    @classmethod
    def for_relation(cls, parent: Any, relation_name: str, target_cls: Type[Any]) -> 'QueryBuilder':
        """Records of ``target_cls`` related to ``parent`` through ``relation_name``."""
        prop = getattr(type(parent), relation_name)
        return cls(target_cls, select(target_cls).where(with_parent(parent, prop)))

    def _derive(self, stmt: Select) -> 'QueryBuilder':
        return QueryBuilder(self.model_cls, stmt)

    def filter(self, *criteria: Any) -> 'QueryBuilder':
        return self._derive(self.stmt.where(*criteria))

    def apply_scope(self, name: str) -> 'QueryBuilder':
        scope = find_scope(self.model_cls, name)
        if scope is None:
            raise ValueError(f"Unknown scope {name!r} on {self.model_cls.__name__}")
        return self._derive(scope(self.stmt))

    def order_by_primary_key(self) -> 'QueryBuilder':
        """Stable ordering for offset windows, unless an order is already set."""
        if self.stmt._order_by_clauses:
            return self
        pk_cols = list(sa_inspect(self.model_cls).primary_key)
        return self._derive(self.stmt.order_by(*pk_cols))

    async def count(self, session) -> int:
        count_stmt = select(func.count()).select_from(self.stmt.order_by(None).subquery())
        return int(await session.scalar(count_stmt) or 0)

    async def fetch(self, session, *, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Any]:
        stmt = self.stmt
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def first(self, session) -> Any | None:
        result = await session.execute(self.stmt.limit(1))
        return result.scalars().first()
