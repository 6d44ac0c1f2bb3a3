"""Compile-time side of pagination: wrapper types and field rewriting."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from graphql import FieldDefinitionNode, NamedTypeNode, NameNode, TypeDefinitionNode

from ..errors import DefinitionException
from ..schema.document import DocumentAST, parse_argument, parse_source
from .types import CountBounds, PaginationType

_logger = logging.getLogger("lumenql")

FieldKey = Tuple[str, str]

PAGINATOR_INFO_SDL = '''
"Information about pagination using a fully featured paginator."
type PaginatorInfo {
  "Number of items in the current page."
  count: Int!
  "Index of the current page."
  currentPage: Int!
  "Index of the first item in the current page."
  firstItem: Int
  "Are there more pages after this one?"
  hasMorePages: Boolean!
  "Index of the last item in the current page."
  lastItem: Int
  "Index of the last available page."
  lastPage: Int!
  "Number of items per page."
  perPage: Int!
  "Number of total available items."
  total: Int!
}
'''

SIMPLE_PAGINATOR_INFO_SDL = '''
"Information about pagination using a simple paginator."
type SimplePaginatorInfo {
  "Number of items in the current page."
  count: Int!
  "Index of the current page."
  currentPage: Int!
  "Index of the first item in the current page."
  firstItem: Int
  "Index of the last item in the current page."
  lastItem: Int
  "Number of items per page."
  perPage: Int!
  "Are there more pages after this one?"
  hasMorePages: Boolean!
}
'''

PAGE_INFO_SDL = '''
"Information about pagination using a Relay style cursor connection."
type PageInfo {
  "When paginating forwards, are there more items?"
  hasNextPage: Boolean!
  "When paginating backwards, are there more items?"
  hasPreviousPage: Boolean!
  "The cursor to continue paginating backwards."
  startCursor: String
  "The cursor to continue paginating forwards."
  endCursor: String
  "Total number of nodes in the paginated connection."
  total: Int!
  "Number of nodes in the current page."
  count: Int!
  "Index of the current page."
  currentPage: Int!
  "Index of the last available page."
  lastPage: Int!
}
'''

# GraphQL field name -> QueryResultPage attribute
PAGINATOR_INFO_FIELDS = {
    'count': 'count',
    'currentPage': 'current_page',
    'firstItem': 'first_item',
    'hasMorePages': 'has_more',
    'lastItem': 'last_item',
    'lastPage': 'last_page',
    'perPage': 'per_page',
    'total': 'total',
}
PAGE_INFO_FIELDS = {
    'hasNextPage': 'has_more',
    'hasPreviousPage': 'has_previous_page',
    'startCursor': 'start_cursor',
    'endCursor': 'end_cursor',
    'total': 'total',
    'count': 'count',
    'currentPage': 'current_page',
    'lastPage': 'last_page',
}


def attribute_resolver(attr: str) -> Callable[..., Any]:
    def resolve(source, info, **_):
        return getattr(source, attr)
    return resolve


def resolve_self(source, info, **_):
    return source


@dataclass(frozen=True)
class WrapperTypes:
    """Generated definitions for one (base type, pagination type, edge type) signature."""

    name: str
    definitions: Tuple[TypeDefinitionNode, ...]
    resolvers: Dict[FieldKey, Callable[..., Any]] = field(default_factory=dict)


class WrapperTypeCache:
    """Generated wrapper types shared by every compilation of one builder.

    A key is generated at most once even when several threads compile the
    same schema concurrently: the first writer for a key holds that key's
    lock while the others wait for its result.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._key_locks: Dict[Hashable, threading.Lock] = {}
        self._entries: Dict[Hashable, WrapperTypes] = {}

    def get_or_create(self, key: Hashable, factory: Callable[[], WrapperTypes]) -> WrapperTypes:
        entry = self._entries.get(key)
        if entry is not None:
            return entry
        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())
        with key_lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = factory()
                self._entries[key] = entry
                _logger.debug("lumenql: generated pagination types %s", [d.name.value for d in entry.definitions])
        return entry

    def __len__(self) -> int:
        return len(self._entries)


def _single_type(sdl: str) -> TypeDefinitionNode:
    return parse_source(sdl).definitions[0]


def connection_name_for_edge(edge_type: str) -> str:
    stem = edge_type[:-len('Edge')] if edge_type.endswith('Edge') and len(edge_type) > 4 else edge_type
    return f"{stem}Connection"


def _paginator_types(base: str, simple: bool) -> WrapperTypes:
    info_name = 'SimplePaginatorInfo' if simple else 'PaginatorInfo'
    name = f"{base}SimplePaginator" if simple else f"{base}Paginator"
    paginator = _single_type(f'''
"A paginated list of {base} items."
type {name} {{
  "Pagination information about the list of items."
  paginatorInfo: {info_name}!
  "A list of {base} items."
  data: [{base}!]!
}}
''')
    info = _single_type(SIMPLE_PAGINATOR_INFO_SDL if simple else PAGINATOR_INFO_SDL)
    resolvers: Dict[FieldKey, Callable[..., Any]] = {
        (name, 'paginatorInfo'): resolve_self,
        (name, 'data'): attribute_resolver('items'),
    }
    for gql_name, attr in PAGINATOR_INFO_FIELDS.items():
        if simple and gql_name in ('lastPage', 'total'):
            continue
        resolvers[(info_name, gql_name)] = attribute_resolver(attr)
    return WrapperTypes(name=name, definitions=(paginator, info), resolvers=resolvers)


def _connection_types(base: str, edge_type: Optional[str]) -> WrapperTypes:
    edge_name = edge_type or f"{base}Edge"
    name = connection_name_for_edge(edge_name)
    definitions = [_single_type(f'''
"A paginated list of {base} edges."
type {name} {{
  "Pagination information about the list of edges."
  pageInfo: PageInfo!
  "A list of {base} edges."
  edges: [{edge_name}!]!
}}
''')]
    if edge_type is None:
        definitions.append(_single_type(f'''
"An edge that contains a node of type {base} and a cursor."
type {edge_name} {{
  "The {base} node."
  node: {base}!
  "A unique cursor that can be used for pagination."
  cursor: String!
}}
'''))
    definitions.append(_single_type(PAGE_INFO_SDL))
    resolvers: Dict[FieldKey, Callable[..., Any]] = {
        (name, 'pageInfo'): resolve_self,
        (name, 'edges'): attribute_resolver('edges'),
    }
    for gql_name, attr in PAGE_INFO_FIELDS.items():
        resolvers[('PageInfo', gql_name)] = attribute_resolver(attr)
    return WrapperTypes(name=name, definitions=tuple(definitions), resolvers=resolvers)


class PaginationManipulator:
    """Rewrites paginated fields to return generated wrapper types."""

    def __init__(self, cache: WrapperTypeCache):
        self.cache = cache

    def wrapper_types(self, base: str, pagination_type: PaginationType, edge_type: Optional[str] = None) -> WrapperTypes:
        if not pagination_type.is_paginated:
            raise ValueError("Plain lists have no wrapper type")
        if pagination_type is not PaginationType.CONNECTION:
            edge_type = None
        key = (base, pagination_type.value, edge_type)
        if pagination_type is PaginationType.CONNECTION:
            return self.cache.get_or_create(key, lambda: _connection_types(base, edge_type))
        simple = pagination_type is PaginationType.SIMPLE
        return self.cache.get_or_create(key, lambda: _paginator_types(base, simple))

    def transform_to_paginated_field(
        self,
        document: DocumentAST,
        parent_type: str,
        field_node: FieldDefinitionNode,
        base: str,
        pagination_type: PaginationType,
        bounds: CountBounds,
        edge_type: Optional[str] = None,
    ) -> WrapperTypes:
        """Swap the field's type for its wrapper type and add missing arguments."""
        field_name = field_node.name.value
        if edge_type == f"{base}Edge" and edge_type not in document.source_types:
            # The default edge name refers to the generated edge type
            edge_type = None
        if pagination_type is PaginationType.CONNECTION and edge_type is not None and edge_type not in document.source_types:
            raise DefinitionException(
                f"Edge type {edge_type!r} of {parent_type}.{field_name} is not defined",
                parent_type,
                field_name,
            )
        wrapper = self.wrapper_types(base, pagination_type, edge_type)
        for definition in wrapper.definitions:
            document.add_type_if_absent(definition)

        arguments = list(field_node.arguments or ())
        existing = {arg.name.value for arg in arguments}
        if 'first' not in existing:
            default = f" = {bounds.default_count}" if bounds.default_count else ''
            arguments.append(parse_argument(f'"Limits number of fetched items." first: Int!{default}'))
        if pagination_type is PaginationType.CONNECTION:
            if 'after' not in existing:
                arguments.append(parse_argument('"A cursor after which elements are returned." after: String'))
        elif 'page' not in existing:
            arguments.append(parse_argument('"The offset from which items are returned." page: Int'))

        document.replace_field(parent_type, field_node.__class__(
            description=field_node.description,
            name=field_node.name,
            arguments=tuple(arguments),
            type=NamedTypeNode(name=NameNode(value=wrapper.name)),
            directives=field_node.directives,
        ))
        return wrapper
