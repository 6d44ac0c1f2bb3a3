"""The closed set of directives understood by the schema builder."""

from typing import Dict, Type

from .abstract import InterfaceDirective, UnionDirective, explicit_type_resolver, registry_type_resolver
from .base import (
    BaseDirective,
    CompileContext,
    FieldDirective,
    FieldManipulator,
    FieldResolver,
    ModelBinder,
    TypeDirective,
    TypeResolver,
)
from .field import FieldResolverDirective
from .model import ModelDirective
from .query import AllDirective, PaginateDirective
from .relation import (
    BelongsToDirective,
    BelongsToManyDirective,
    HasManyDirective,
    HasOneDirective,
    RelationDirectiveConfig,
)

TYPE_DIRECTIVES: Dict[str, Type[TypeDirective]] = {
    cls.name: cls for cls in (ModelDirective, InterfaceDirective, UnionDirective)
}

FIELD_DIRECTIVES: Dict[str, Type[FieldDirective]] = {
    cls.name: cls
    for cls in (
        FieldResolverDirective,
        AllDirective,
        PaginateDirective,
        HasManyDirective,
        BelongsToManyDirective,
        BelongsToDirective,
        HasOneDirective,
    )
}

PAGINATION_TYPE_DEFINITION = '''
"""
Pagination style of a paginated field.
"""
enum PaginationType {
  """
  Offset-based pagination with the total number of records.
  """
  PAGINATOR

  """
  Offset-based pagination which does not count the total number of records.
  """
  SIMPLE

  """
  Cursor-based pagination, compatible with the Relay specification.
  """
  CONNECTION
}
'''

DIRECTIVE_DEFINITIONS = '\n'.join(
    [PAGINATION_TYPE_DEFINITION]
    + [cls.definition for cls in TYPE_DIRECTIVES.values()]
    + [cls.definition for cls in FIELD_DIRECTIVES.values()]
)

__all__ = [
    'AllDirective',
    'BaseDirective',
    'BelongsToDirective',
    'BelongsToManyDirective',
    'CompileContext',
    'DIRECTIVE_DEFINITIONS',
    'FIELD_DIRECTIVES',
    'FieldDirective',
    'FieldManipulator',
    'FieldResolver',
    'FieldResolverDirective',
    'HasManyDirective',
    'HasOneDirective',
    'InterfaceDirective',
    'ModelBinder',
    'ModelDirective',
    'PaginateDirective',
    'RelationDirectiveConfig',
    'TYPE_DIRECTIVES',
    'TypeDirective',
    'TypeResolver',
    'UnionDirective',
    'explicit_type_resolver',
    'registry_type_resolver',
]
