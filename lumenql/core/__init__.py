"""Building blocks shared by the schema compiler and the resolvers."""

from .models import ModelCatalog, model_class_of
from .references import ResolverReference
from .registry import TypeRegistry

__all__ = ['ModelCatalog', 'ResolverReference', 'TypeRegistry', 'model_class_of']
