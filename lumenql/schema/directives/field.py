from __future__ import annotations

from typing import Any, Callable

from .base import FieldDirective, FieldResolver


class FieldResolverDirective(FieldDirective, FieldResolver):
    """Resolve a field with a referenced callable ``(root, info, **args)``."""

    name = 'field'
    definition = '''
"""
Assign a resolver function to a field.
"""
directive @field(
  """
  A registered resolver name or "package.module:function".
  """
  resolver: String!
) on FIELD_DEFINITION
'''

    def resolve_field(self) -> Callable[..., Any]:
        reference = self.reference_argument('resolver')

        def resolve(root, info, **args):
            return reference(root, info, **args)
        return resolve
