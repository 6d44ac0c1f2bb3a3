from __future__ import annotations

import asyncio
from typing import Any, Dict

from graphql import (
    DirectiveNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    TypeNode,
    value_from_ast_untyped,
)
from graphql.language import Node

_SESSION_KEYS = ('db_session', 'db', 'session', 'async_session')


def get_db_session(info_or_ctx: Any) -> Any | None:
    """Extract an AsyncSession-like object from the GraphQL context.

    Accepts either a ``GraphQLResolveInfo`` or a plain context object/dict and
    tries the keys ``db_session``, ``db``, ``session``, ``async_session`` in
    order, first as mapping keys and then as attributes.

    Returns:
        The session object if found; otherwise ``None``.
    """
    if info_or_ctx is None:
        return None
    ctx = getattr(info_or_ctx, 'context', info_or_ctx)
    if ctx is None:
        return None
    get = getattr(ctx, 'get', None)
    if callable(get):
        for k in _SESSION_KEYS:
            v = get(k, None)
            if v is not None:
                return v
    for k in _SESSION_KEYS:
        v = getattr(ctx, k, None)
        if v is not None:
            return v
    return None


def directive_arguments(directive: DirectiveNode) -> Dict[str, Any]:
    """Plain Python values of a directive's literal arguments.

    Enum literals come back as their names.
    """
    return {
        arg.name.value: value_from_ast_untyped(arg.value)
        for arg in directive.arguments or ()
    }


def named_type_name(type_node: TypeNode) -> str:
    """Innermost named type of a (possibly wrapped) type reference."""
    while isinstance(type_node, (NonNullTypeNode, ListTypeNode)):
        type_node = type_node.type
    assert isinstance(type_node, NamedTypeNode)
    return type_node.name.value


def is_list_type(type_node: TypeNode) -> bool:
    if isinstance(type_node, NonNullTypeNode):
        type_node = type_node.type
    return isinstance(type_node, ListTypeNode)


def replace_node(node: Node, **changes: Any) -> Node:
    """Shallow copy of an AST node with some attributes replaced."""
    values = {key: getattr(node, key) for key in node.keys}
    values.update(changes)
    return node.__class__(**values)


_LOCK_KEY = '_lumenql_db_lock'


def get_context_lock(info: Any) -> asyncio.Lock:
    """Per-request lock serializing queries on the shared session.

    Sibling fields resolve concurrently while an ``AsyncSession`` allows one
    operation at a time, so the lock is stored on the request context.
    """
    ctx = getattr(info, 'context', None)
    if isinstance(ctx, dict):
        lock = ctx.get(_LOCK_KEY)
        if lock is None:
            lock = ctx[_LOCK_KEY] = asyncio.Lock()
        return lock
    if ctx is not None:
        lock = getattr(ctx, _LOCK_KEY, None)
        if lock is None:
            lock = asyncio.Lock()
            try:
                setattr(ctx, _LOCK_KEY, lock)
            except (AttributeError, TypeError):
                # Slotted or frozen context: the lock cannot be shared
                pass
        return lock
    return asyncio.Lock()
