"""Binding between schema type names and backing model classes."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type

from ..errors import ConfigurationError, UnresolvableAbstractTypeMapping
from .models import model_class_of

_logger = logging.getLogger("lumenql")


class TypeRegistry:
    """Type <-> model bindings for one compiled schema.

    The registry is created by the schema builder for every compilation and
    handed to the resolvers that need it. Bindings and possible-type sets are
    written while the schema is compiled; afterwards the registry is read by
    concurrent requests. Writes take a short exclusive lock, reads of the
    plain dicts do not.

    Ambiguity inside an abstract type (two possible types bound to the same
    model class) is detected lazily, on the first resolution for that model
    class, since bindings are added incrementally while the schema is built.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._models: Dict[str, Type[Any]] = {}
        self._possible_types: Dict[str, Tuple[str, ...]] = {}
        self._resolved: Dict[Tuple[str, Type[Any]], str] = {}

    def register(self, type_name: str, model_class: Type[Any]) -> None:
        """Bind ``type_name`` to ``model_class``.

        Registering the same pair again is a no-op.

        Raises:
            ConfigurationError: ``type_name`` is already bound to another class.
        """
        with self._lock:
            existing = self._models.get(type_name)
            if existing is model_class:
                return
            if existing is not None:
                raise ConfigurationError(
                    f"Type {type_name!r} is already bound to {existing.__qualname__}, "
                    f"cannot bind it to {model_class.__qualname__}",
                    type_name,
                )
            self._models[type_name] = model_class
            self._resolved.clear()
        _logger.debug("lumenql: bound type %s to %s", type_name, model_class.__qualname__)

    def model_class_for(self, type_name: str) -> Optional[Type[Any]]:
        return self._models.get(type_name)

    def set_possible_types(self, abstract_type: str, type_names: Iterable[str]) -> None:
        """Declare the concrete types implementing an interface or forming a union."""
        with self._lock:
            self._possible_types[abstract_type] = tuple(type_names)
            self._resolved = {k: v for k, v in self._resolved.items() if k[0] != abstract_type}

    def possible_types(self, abstract_type: str) -> Tuple[str, ...]:
        return self._possible_types.get(abstract_type, ())

    def candidate_types(self, abstract_type: str, model_class: Type[Any]) -> List[str]:
        """Possible types of ``abstract_type`` bound exactly to ``model_class``."""
        return [
            name for name in self.possible_types(abstract_type)
            if self._models.get(name) is model_class
        ]

    def resolve_concrete_type(self, abstract_type: str, value: Any) -> str:
        """Name of the single possible type of ``abstract_type`` bound to ``value``'s model.

        Raises:
            UnresolvableAbstractTypeMapping: zero or several candidates.
        """
        model_class = model_class_of(value)
        key = (abstract_type, model_class)
        cached = self._resolved.get(key)
        if cached is not None:
            return cached
        candidates = self.candidate_types(abstract_type, model_class)
        if len(candidates) != 1:
            _logger.debug(
                "lumenql: cannot resolve %s for %s, candidates=%s",
                abstract_type, model_class.__qualname__, candidates,
            )
            raise UnresolvableAbstractTypeMapping(model_class, candidates)
        with self._lock:
            self._resolved[key] = candidates[0]
        return candidates[0]

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._models
