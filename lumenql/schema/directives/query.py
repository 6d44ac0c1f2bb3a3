"""Directives querying every record of a model: ``@all`` and ``@paginate``."""

from __future__ import annotations

from typing import Any, Callable, Tuple, Type

from ...core.utils import get_context_lock
from ...pagination.executor import paginate
from ...pagination.types import PaginationType
from ...sql.builders import QueryBuilder
from .base import FieldDirective, FieldManipulator, FieldResolver, require_session


class ModelQueryDirective(FieldDirective):
    def target_model(self) -> Type[Any]:
        model_cls = self.model_from_argument('model') or self.return_type_model()
        if model_cls is None:
            raise self.definition_error(
                f"Cannot determine the model of {self.return_type!r}; bind the type or pass 'model'"
            )
        return model_cls

    def scopes(self) -> Tuple[str, ...]:
        return self.string_list_argument('scopes')

    def base_builder(self) -> Callable[[], QueryBuilder]:
        model_cls = self.target_model()
        scopes = self.scopes()
        self.validate_scopes(model_cls, scopes)

        def make() -> QueryBuilder:
            builder = QueryBuilder(model_cls)
            for scope in scopes:
                builder = builder.apply_scope(scope)
            return builder
        return make


class AllDirective(ModelQueryDirective, FieldResolver):
    name = 'all'
    definition = '''
"""
Fetch all records of a model.
"""
directive @all(
  """
  The model to query, defaults to the model bound to the return type.
  """
  model: String

  """
  Apply scopes to the underlying query.
  """
  scopes: [String!]
) on FIELD_DEFINITION
'''

    def resolve_field(self) -> Callable[..., Any]:
        make_builder = self.base_builder()

        async def resolve(root, info, **args):
            session = require_session(info)
            async with get_context_lock(info):
                return await make_builder().order_by_primary_key().fetch(session)
        return resolve


class PaginateDirective(ModelQueryDirective, FieldManipulator, FieldResolver):
    name = 'paginate'
    definition = '''
"""
Query records of a model as a paginated list.
"""
directive @paginate(
  """
  Which pagination style to use.
  """
  type: PaginationType = PAGINATOR

  """
  The model to query, defaults to the model bound to the return type.
  """
  model: String

  """
  Apply scopes to the underlying query.
  """
  scopes: [String!]

  """
  Page size used when the client does not pass `first`.
  Overrules the `pagination.default_count` setting.
  """
  defaultCount: Int

  """
  Upper bound for the page size clients can request.
  Overrules the `pagination.max_count` setting.
  """
  maxCount: Int

  """
  Custom edge type for the "connection" pagination type.
  """
  edgeType: String
) on FIELD_DEFINITION
'''

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.pagination_type, self.bounds = self.pagination_options(PaginationType.PAGINATOR)
        if not self.pagination_type.is_paginated:
            raise self.definition_error("@paginate cannot use pagination type NONE")

    def manipulate_field_definition(self) -> None:
        wrapper = self.context.pagination.transform_to_paginated_field(
            self.context.document,
            self.parent_type,
            self.current_field(),
            self.return_type,
            self.pagination_type,
            self.bounds,
            self.string_argument('edgeType'),
        )
        self.context.field_resolvers.update(wrapper.resolvers)

    def resolve_field(self) -> Callable[..., Any]:
        make_builder = self.base_builder()
        pagination_type = self.pagination_type
        bounds = self.bounds

        async def resolve(root, info, **args):
            session = require_session(info)
            async with get_context_lock(info):
                return await paginate(make_builder(), session, pagination_type, bounds, args)
        return resolve
