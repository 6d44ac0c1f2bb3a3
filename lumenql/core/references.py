from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from ..errors import DefinitionException


@dataclass(frozen=True)
class ResolverReference:
    """A callable named in the schema, resolved once when the schema is compiled.

    ``name`` keeps the reference as written for error messages.
    """

    name: str
    func: Callable[..., Any]

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.func(*args, **kwargs)

    @classmethod
    def resolve(
        cls,
        name: str,
        resolvers: Optional[Mapping[str, Callable[..., Any]]] = None,
        *,
        type_name: Optional[str] = None,
        field_name: Optional[str] = None,
    ) -> "ResolverReference":
        """Look ``name`` up in ``resolvers`` or import it as ``package.module:attr``.

        Raises:
            DefinitionException: the reference does not name a callable.
        """
        if resolvers and name in resolvers:
            func = resolvers[name]
        else:
            func = _import_reference(name)
        if not callable(func):
            raise DefinitionException(
                f"Resolver reference {name!r} does not name a callable", type_name, field_name
            )
        return cls(name=name, func=func)


def _import_reference(name: str) -> Any:
    module_name, sep, attr_path = name.partition(':')
    if not sep or not module_name or not attr_path:
        raise DefinitionException(
            f"Unknown resolver reference {name!r}; expected a registered name or 'package.module:attribute'"
        )
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise DefinitionException(f"Cannot import module for resolver reference {name!r}: {e}") from e
    for part in attr_path.split('.'):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise DefinitionException(f"Resolver reference {name!r} not found") from None
    return target
