"""Relation directives: ``@hasMany``, ``@belongsToMany``, ``@belongsTo``, ``@hasOne``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple, Type

from sqlalchemy import inspect as sa_inspect

from ...core.models import model_class_of
from ...core.utils import get_context_lock
from ...pagination.executor import paginate
from ...pagination.types import CountBounds, PaginationType
from ...sql.builders import QueryBuilder, find_relationship
from .base import FieldDirective, FieldManipulator, FieldResolver, require_session

_PAGINATED_ARGUMENTS = '''
  """
  Specify the relationship name in the model class,
  if it is named different from the field in the schema.
  """
  relation: String

  """
  Apply scopes to the underlying query.
  """
  scopes: [String!]

  """
  Allows to resolve the relation as a paginated list.
  """
  type: PaginationType

  """
  Allow clients to query paginated lists without specifying the amount of items.
  Overrules the `pagination.default_count` setting.
  """
  defaultCount: Int

  """
  Limit the maximum amount of items that clients can request from paginated lists.
  Overrules the `pagination.max_count` setting.
  """
  maxCount: Int

  """
  Specify a custom type that implements the Edge interface
  to extend edge object.
  Only applies when using Relay style "connection" pagination.
  """
  edgeType: String
'''

_SINGLE_ARGUMENTS = '''
  """
  Specify the relationship name in the model class,
  if it is named different from the field in the schema.
  """
  relation: String

  """
  Apply scopes to the underlying query.
  """
  scopes: [String!]
'''


@dataclass(frozen=True)
class RelationDirectiveConfig:
    relation: str
    scopes: Tuple[str, ...] = ()
    pagination_type: PaginationType = PaginationType.NONE
    default_count: Optional[int] = None
    max_count: Optional[int] = None
    edge_type: Optional[str] = None


class RelationDirective(FieldDirective, FieldResolver):
    """Resolve a field through a SQLAlchemy ``relationship()`` of the parent record."""

    single: ClassVar[bool] = False
    paginatable: ClassVar[bool] = False

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.paginatable:
            pagination_type, self.bounds = self.pagination_options(PaginationType.NONE)
        else:
            pagination_type, self.bounds = PaginationType.NONE, CountBounds()
        self.config = RelationDirectiveConfig(
            relation=self.string_argument('relation') or self.field_name,
            scopes=self.string_list_argument('scopes'),
            pagination_type=pagination_type,
            default_count=self.int_argument('defaultCount'),
            max_count=self.int_argument('maxCount'),
            edge_type=self.string_argument('edgeType'),
        )

    def relation_target(self, parent_cls: Type[Any]) -> Tuple[str, Type[Any]]:
        """Relationship attribute on ``parent_cls`` and the model it points to."""
        attr = find_relationship(parent_cls, self.config.relation)
        if attr is None:
            raise self.definition_error(
                f"Model {parent_cls.__name__} has no relationship {self.config.relation!r}"
            )
        return attr, sa_inspect(parent_cls).relationships[attr].mapper.class_

    def resolve_field(self) -> Callable[..., Any]:
        config = self.config
        bounds = self.bounds
        single = self.single
        relations: Dict[Type[Any], Tuple[str, Type[Any]]] = {}

        parent_cls = self.context.registry.model_class_for(self.parent_type)
        if parent_cls is not None:
            relations[parent_cls] = self.relation_target(parent_cls)
            target_cls = relations[parent_cls][1]
        else:
            target_cls = self.return_type_model()
        if target_cls is not None:
            self.validate_scopes(target_cls, config.scopes)
        elif config.scopes:
            raise self.definition_error(
                f"Cannot check scopes {list(config.scopes)}: neither {self.parent_type!r} "
                f"nor {self.return_type!r} is bound to a model"
            )

        async def resolve(parent, info, **args):
            record_cls = model_class_of(parent)
            relation = relations.get(record_cls)
            if relation is None:
                relation = relations[record_cls] = self.relation_target(record_cls)
            attr, target = relation
            builder = QueryBuilder.for_relation(parent, attr, target)
            for scope in config.scopes:
                builder = builder.apply_scope(scope)
            session = require_session(info)
            async with get_context_lock(info):
                if single:
                    return await builder.first(session)
                return await paginate(builder, session, config.pagination_type, bounds, args)
        return resolve


class PaginatedRelationDirective(RelationDirective, FieldManipulator):
    paginatable = True

    def manipulate_field_definition(self) -> None:
        if not self.config.pagination_type.is_paginated:
            return
        wrapper = self.context.pagination.transform_to_paginated_field(
            self.context.document,
            self.parent_type,
            self.current_field(),
            self.return_type,
            self.config.pagination_type,
            self.bounds,
            self.config.edge_type,
        )
        self.context.field_resolvers.update(wrapper.resolvers)


class HasManyDirective(PaginatedRelationDirective):
    name = 'hasMany'
    definition = f'''
"""
Corresponds to a one-to-many relationship.
"""
directive @hasMany(
{_PAGINATED_ARGUMENTS}) on FIELD_DEFINITION
'''


class BelongsToManyDirective(PaginatedRelationDirective):
    name = 'belongsToMany'
    definition = f'''
"""
Resolves a field through a many-to-many relationship.
"""
directive @belongsToMany(
{_PAGINATED_ARGUMENTS}) on FIELD_DEFINITION
'''


class BelongsToDirective(RelationDirective):
    name = 'belongsTo'
    single = True
    definition = f'''
"""
Resolves a field through a many-to-one relationship.
"""
directive @belongsTo(
{_SINGLE_ARGUMENTS}) on FIELD_DEFINITION
'''


class HasOneDirective(RelationDirective):
    name = 'hasOne'
    single = True
    definition = f'''
"""
Corresponds to a one-to-one relationship.
"""
directive @hasOne(
{_SINGLE_ARGUMENTS}) on FIELD_DEFINITION
'''
