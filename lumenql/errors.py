"""Exception types raised by LumenQL.

Compile-time problems (``ConfigurationError`` and ``DefinitionException``)
abort :meth:`lumenql.SchemaBuilder.build`. Execution-time problems
(``UnresolvableAbstractTypeMapping`` and ``ValidationError``) are raised from
resolvers and end up in the ``errors`` list of the GraphQL response for the
failing field only.
"""

from typing import Any, List, Optional, Sequence


class LumenQLError(Exception):
    """Base exception for LumenQL errors."""


class ConfigurationError(LumenQLError):
    """Raised when settings or directive arguments conflict or are malformed."""

    def __init__(self, message: str, type_name: Optional[str] = None):
        self.type_name = type_name
        super().__init__(message)


class DefinitionException(ConfigurationError):
    """Raised when the schema definition itself cannot be compiled."""

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        field_name: Optional[str] = None,
    ):
        self.field_name = field_name
        super().__init__(message, type_name)


class UnresolvableAbstractTypeMapping(LumenQLError):
    """Raised when a runtime value cannot be mapped to exactly one concrete type."""

    def __init__(self, model_class: Any, candidates: Sequence[str]):
        self.model_class = model_class
        self.candidates: List[str] = list(candidates)
        super().__init__(self.format_message(model_class, self.candidates))

    @staticmethod
    def format_message(model_class: Any, candidates: Sequence[str]) -> str:
        name = getattr(model_class, "__qualname__", None) or str(model_class)
        if candidates:
            return (
                f"Expected to map {name} to a single concrete type, "
                f"got ambiguous candidates: {', '.join(candidates)}."
            )
        return f"Expected to map {name} to a concrete type, but no possible type is bound to it."


class ValidationError(LumenQLError, ValueError):
    """Raised when client supplied pagination arguments are invalid."""

    def __init__(self, message: str, argument: Optional[str] = None, value: Any = None):
        self.argument = argument
        self.value = value
        super().__init__(message)
