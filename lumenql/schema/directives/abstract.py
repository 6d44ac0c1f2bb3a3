from __future__ import annotations

import inspect
from typing import Any, Callable

from ...core.references import ResolverReference
from ...core.registry import TypeRegistry
from .base import TypeDirective, TypeResolver


def _type_name(result: Any) -> Any:
    return getattr(result, 'name', result)


def explicit_type_resolver(reference: ResolverReference) -> Callable[..., Any]:
    """``resolve_type`` calling ``reference(value, info)``.

    The reference may return a type name or a type object, sync or async.
    """
    def resolve_type(value, info, abstract_type):
        result = reference(value, info)
        if inspect.isawaitable(result):
            async def await_name():
                return _type_name(await result)
            return await_name()
        return _type_name(result)
    return resolve_type


def registry_type_resolver(registry: TypeRegistry) -> Callable[..., Any]:
    """``resolve_type`` mapping the value's model class through the registry."""
    def resolve_type(value, info, abstract_type):
        return registry.resolve_concrete_type(abstract_type.name, value)
    return resolve_type


class InterfaceDirective(TypeDirective, TypeResolver):
    """Explicit type resolution for an interface.

    The referenced callable is authoritative: the registry is never consulted
    for this interface.
    """

    name = 'interface'
    definition = '''
"""
Use a custom resolver to determine the concrete type of an interface.
"""
directive @interface(
  """
  Reference to a callable that gets the runtime value and returns the
  concrete type or its name. Either a registered resolver name or
  "package.module:function".
  """
  resolveType: String!
) on INTERFACE
'''

    def resolve_type(self) -> Callable[..., Any]:
        return explicit_type_resolver(self.reference_argument('resolveType'))


class UnionDirective(InterfaceDirective):
    """Explicit type resolution for a union."""

    name = 'union'
    definition = '''
"""
Use a custom resolver to determine the concrete type of a union.
"""
directive @union(
  """
  Reference to a callable that gets the runtime value and returns the
  concrete type or its name. Either a registered resolver name or
  "package.module:function".
  """
  resolveType: String!
) on UNION
'''
