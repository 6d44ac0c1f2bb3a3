"""Pagination: wrapper type generation and the runtime page executor."""

from .cursor import decode_cursor, encode_cursor
from .executor import Edge, QueryResultPage, paginate
from .manipulator import PaginationManipulator, WrapperTypeCache, WrapperTypes
from .types import CountBounds, PaginationType

__all__ = [
    'CountBounds',
    'Edge',
    'PaginationManipulator',
    'PaginationType',
    'QueryResultPage',
    'WrapperTypeCache',
    'WrapperTypes',
    'decode_cursor',
    'encode_cursor',
    'paginate',
]
