"""Lookup of backing model classes by name."""

from __future__ import annotations

import importlib
from typing import Any, Dict, Iterable, Mapping, Optional, Type, Union

from sqlalchemy import inspect as sa_inspect

from ..errors import ConfigurationError

ModelSource = Union[Type[Any], Mapping[str, Type[Any]], Iterable[Type[Any]]]


def model_class_of(value: Any) -> Type[Any]:
    """Model class of a runtime value.

    Mapped SQLAlchemy instances report their mapper's class; anything else
    reports ``type(value)``.
    """
    state = sa_inspect(value, raiseerr=False)
    mapper = getattr(state, 'mapper', None)
    if mapper is not None and getattr(state, 'is_instance', False):
        return mapper.class_
    return type(value)


class ModelCatalog:
    """Named set of model classes that schema types can be bound to.

    Accepts a SQLAlchemy declarative base (every mapped class is collected), a
    ``{name: class}`` mapping, or an iterable of classes.
    """

    def __init__(self, source: Optional[ModelSource] = None):
        self._models: Dict[str, Type[Any]] = {}
        if source is None:
            return
        registry = getattr(source, 'registry', None)
        if isinstance(source, type) and registry is not None and hasattr(registry, 'mappers'):
            for mapper in registry.mappers:
                self.add(mapper.class_)
        elif isinstance(source, Mapping):
            for name, cls in source.items():
                self.add(cls, name=name)
        else:
            for cls in source:
                self.add(cls)

    def add(self, cls: Type[Any], name: Optional[str] = None) -> None:
        key = name or cls.__name__
        existing = self._models.get(key)
        if existing is not None and existing is not cls:
            raise ConfigurationError(
                f"Model name {key!r} is ambiguous: {existing.__module__}.{existing.__qualname__} "
                f"and {cls.__module__}.{cls.__qualname__}"
            )
        self._models[key] = cls

    def get(self, name: str) -> Optional[Type[Any]]:
        """Model for a catalog name or a ``package.module.Class`` path."""
        cls = self._models.get(name)
        if cls is not None or '.' not in name:
            return cls
        module_name, _, attr = name.rpartition('.')
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            return None
        return getattr(module, attr, None)

    def __contains__(self, name: str) -> bool:
        return name in self._models

    def __len__(self) -> int:
        return len(self._models)
