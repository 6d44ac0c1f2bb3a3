from __future__ import annotations

from typing import Any, Type

from .base import ModelBinder, TypeDirective


class ModelDirective(TypeDirective, ModelBinder):
    """Bind an object type to a model other than its same-named one."""

    name = 'model'
    definition = '''
"""
Map a type to a model class, if it is named differently from the type.
"""
directive @model(
  """
  The model name from the catalog, or a fully qualified class path.
  """
  class: String!
) on OBJECT
'''

    def model_class(self) -> Type[Any]:
        class_name = self.string_argument('class')
        if not class_name:
            raise self.definition_error("@model requires the 'class' argument")
        model_cls = self.context.catalog.get(class_name)
        if model_cls is None:
            raise self.definition_error(f"Unknown model class {class_name!r}")
        return model_cls
