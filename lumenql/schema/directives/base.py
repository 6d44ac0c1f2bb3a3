"""Directive base classes and the capabilities a directive can provide.

A directive instance is created once per annotated type or field while the
schema is compiled. The builder asks each instance for the capabilities it
implements:

- :class:`ModelBinder`: binds an object type to a model class.
- :class:`FieldManipulator`: rewrites the field definition in the document.
- :class:`FieldResolver`: provides the runtime resolver of the field.
- :class:`TypeResolver`: provides ``resolve_type`` for an abstract type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Sequence, Tuple, Type

from graphql import DirectiveNode, FieldDefinitionNode, TypeDefinitionNode

from ...config import Settings
from ...core.models import ModelCatalog
from ...core.references import ResolverReference
from ...core.registry import TypeRegistry
from ...core.utils import directive_arguments, get_db_session, is_list_type, named_type_name
from ...errors import ConfigurationError, DefinitionException, LumenQLError
from ...pagination.manipulator import PaginationManipulator
from ...pagination.types import CountBounds, PaginationType
from ...sql.builders import find_scope
from ..document import DocumentAST

FieldKey = Tuple[str, str]


@dataclass
class CompileContext:
    """State shared by the directives of one schema compilation."""

    document: DocumentAST
    registry: TypeRegistry
    catalog: ModelCatalog
    settings: Settings
    pagination: PaginationManipulator
    references: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    field_resolvers: Dict[FieldKey, Callable[..., Any]] = field(default_factory=dict)
    type_resolvers: Dict[str, Callable[..., Any]] = field(default_factory=dict)


class BaseDirective:
    name: ClassVar[str]
    definition: ClassVar[str]

    def __init__(self, node: DirectiveNode, context: CompileContext):
        self.node = node
        self.context = context
        self.arguments = directive_arguments(node)

    def definition_error(self, message: str) -> DefinitionException:
        return DefinitionException(message)

    def string_argument(self, name: str) -> Optional[str]:
        value = self.arguments.get(name)
        if value is not None and not isinstance(value, str):
            raise self.definition_error(f"Argument {name!r} of @{self.name} must be a string, got {value!r}")
        return value

    def int_argument(self, name: str) -> Optional[int]:
        value = self.arguments.get(name)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise self.definition_error(f"Argument {name!r} of @{self.name} must be an integer, got {value!r}")
        return value

    def string_list_argument(self, name: str) -> Tuple[str, ...]:
        value = self.arguments.get(name)
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
            raise self.definition_error(f"Argument {name!r} of @{self.name} must be a list of strings, got {value!r}")
        return tuple(value)

    def reference_argument(self, name: str) -> ResolverReference:
        raw = self.string_argument(name)
        if not raw:
            raise self.definition_error(f"@{self.name} requires the {name!r} argument")
        try:
            return ResolverReference.resolve(raw, self.context.references)
        except DefinitionException as e:
            raise self.definition_error(str(e)) from e


class TypeDirective(BaseDirective):
    """Directive placed on a type definition."""

    def __init__(self, node: DirectiveNode, context: CompileContext, type_node: TypeDefinitionNode):
        super().__init__(node, context)
        self.type_node = type_node
        self.type_name = type_node.name.value

    def definition_error(self, message: str) -> DefinitionException:
        return DefinitionException(f"{self.type_name}: {message}", self.type_name)


class FieldDirective(BaseDirective):
    """Directive placed on a field definition of an object or interface type."""

    def __init__(
        self,
        node: DirectiveNode,
        context: CompileContext,
        parent: TypeDefinitionNode,
        field_node: FieldDefinitionNode,
    ):
        super().__init__(node, context)
        self.parent = parent
        self.parent_type = parent.name.value
        self.field_node = field_node
        self.field_name = field_node.name.value
        self.return_type = named_type_name(field_node.type)
        self.returns_list = is_list_type(field_node.type)

    def definition_error(self, message: str) -> DefinitionException:
        return DefinitionException(
            f"{self.parent_type}.{self.field_name}: {message}", self.parent_type, self.field_name
        )

    def current_field(self) -> FieldDefinitionNode:
        """The field as it is in the document now, after earlier rewrites."""
        return self.context.document.get_field(self.parent_type, self.field_name) or self.field_node

    def model_from_argument(self, name: str = 'model') -> Optional[Type[Any]]:
        model_name = self.string_argument(name)
        if model_name is None:
            return None
        model_cls = self.context.catalog.get(model_name)
        if model_cls is None:
            raise self.definition_error(f"Unknown model class {model_name!r}")
        return model_cls

    def return_type_model(self) -> Optional[Type[Any]]:
        return self.context.registry.model_class_for(self.return_type)

    def pagination_options(self, default: PaginationType) -> Tuple[PaginationType, CountBounds]:
        """Pagination type and page size bounds from the directive arguments."""
        try:
            pagination_type = PaginationType.parse(self.arguments.get('type'), default)
            bounds = CountBounds.resolve(
                self.int_argument('defaultCount'),
                self.int_argument('maxCount'),
                self.context.settings.pagination,
            )
        except DefinitionException:
            raise
        except ConfigurationError as e:
            raise self.definition_error(str(e)) from e
        if pagination_type.is_paginated and not self.returns_list:
            raise self.definition_error(f"Paginated fields must be declared as a list of {self.return_type}")
        return pagination_type, bounds

    def validate_scopes(self, model_cls: Type[Any], scopes: Sequence[str]) -> None:
        for scope in scopes:
            if find_scope(model_cls, scope) is None:
                raise self.definition_error(f"Unknown scope {scope!r} on model {model_cls.__name__}")


class ModelBinder(ABC):
    @abstractmethod
    def model_class(self) -> Type[Any]:
        ...


class FieldManipulator(ABC):
    @abstractmethod
    def manipulate_field_definition(self) -> None:
        ...


class FieldResolver(ABC):
    @abstractmethod
    def resolve_field(self) -> Callable[..., Any]:
        ...


class TypeResolver(ABC):
    @abstractmethod
    def resolve_type(self) -> Callable[..., Any]:
        ...


def require_session(info: Any) -> Any:
    session = get_db_session(info)
    if session is None:
        raise LumenQLError("No database session found in the GraphQL context (expected 'db_session')")
    return session
