"""Compile SDL with LumenQL directives into an executable schema."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from graphql import (
    ExecutionResult,
    GraphQLError,
    GraphQLSchema,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    UnionTypeDefinitionNode,
    build_ast_schema,
    graphql,
    is_abstract_type,
    print_schema,
)

from ..config import Settings
from ..core.models import ModelCatalog, ModelSource
from ..core.registry import TypeRegistry
from ..errors import DefinitionException
from ..pagination.manipulator import PaginationManipulator, WrapperTypeCache
from .directives import (
    DIRECTIVE_DEFINITIONS,
    FIELD_DIRECTIVES,
    TYPE_DIRECTIVES,
    CompileContext,
    FieldDirective,
    FieldManipulator,
    FieldResolver,
    ModelBinder,
    TypeResolver,
    registry_type_resolver,
)
from .document import DocumentAST

_logger = logging.getLogger("lumenql")


class CompiledSchema:
    """An executable schema together with the registry its resolvers read."""

    def __init__(self, graphql_schema: GraphQLSchema, registry: TypeRegistry):
        self.graphql_schema = graphql_schema
        self.registry = registry

    async def execute(
        self,
        query: str,
        variable_values: Optional[Dict[str, Any]] = None,
        context_value: Any = None,
        root_value: Any = None,
        operation_name: Optional[str] = None,
    ) -> ExecutionResult:
        return await graphql(
            self.graphql_schema,
            query,
            root_value=root_value,
            context_value=context_value,
            variable_values=variable_values,
            operation_name=operation_name,
        )

    def as_str(self) -> str:
        return print_schema(self.graphql_schema)


class SchemaBuilder:
    """Compiles schema documents against a catalog of models.

    Every :meth:`build` call produces a fresh :class:`TypeRegistry`. Generated
    pagination types are shared between builds of one builder, so one builder
    can compile schemas from several threads.

    Args:
        models: Declarative base, ``{name: class}`` mapping, iterable of model
            classes, or a :class:`ModelCatalog`.
        settings: Global settings, defaults to ``Settings()``.
        resolvers: Named callables that ``@field(resolver:)``,
            ``@interface(resolveType:)`` and ``@union(resolveType:)`` can reference.
    """

    def __init__(
        self,
        models: Union[ModelCatalog, ModelSource, None] = None,
        *,
        settings: Optional[Settings] = None,
        resolvers: Optional[Mapping[str, Callable[..., Any]]] = None,
    ):
        self.catalog = models if isinstance(models, ModelCatalog) else ModelCatalog(models)
        self.settings = settings or Settings()
        self.resolvers = dict(resolvers or {})
        self.wrapper_cache = WrapperTypeCache()

    def build(self, sdl: str) -> CompiledSchema:
        context = CompileContext(
            document=DocumentAST.from_source(DIRECTIVE_DEFINITIONS, sdl),
            registry=TypeRegistry(),
            catalog=self.catalog,
            settings=self.settings,
            pagination=PaginationManipulator(self.wrapper_cache),
            references=self.resolvers,
        )
        self._bind_models(context)
        self._visit_types(context)
        schema = self._build_schema(context.document)
        self._declare_possible_types(schema, context.registry)
        self._attach_resolvers(schema, context)
        _logger.debug("lumenql: compiled schema with %d types", len(schema.type_map))
        return CompiledSchema(schema, context.registry)

    def _bind_models(self, context: CompileContext) -> None:
        for name, node in list(context.document.types.items()):
            if not isinstance(node, ObjectTypeDefinitionNode):
                continue
            model_cls = None
            for directive in self._type_directives(context, node):
                if isinstance(directive, ModelBinder):
                    model_cls = directive.model_class()
            if model_cls is None and name in self.catalog:
                model_cls = self.catalog.get(name)
            if model_cls is not None:
                context.registry.register(name, model_cls)

    def _type_directives(self, context: CompileContext, node: Any) -> List[Any]:
        return [
            TYPE_DIRECTIVES[d.name.value](d, context, node)
            for d in node.directives or ()
            if d.name.value in TYPE_DIRECTIVES
        ]

    def _field_directives(self, context: CompileContext, parent: Any, field_node: Any) -> List[FieldDirective]:
        return [
            FIELD_DIRECTIVES[d.name.value](d, context, parent, field_node)
            for d in field_node.directives or ()
            if d.name.value in FIELD_DIRECTIVES
        ]

    def _visit_types(self, context: CompileContext) -> None:
        # Snapshot: generated wrapper types are added while visiting.
        for name, node in list(context.document.types.items()):
            if isinstance(node, (InterfaceTypeDefinitionNode, UnionTypeDefinitionNode)):
                for directive in self._type_directives(context, node):
                    if isinstance(directive, TypeResolver):
                        context.type_resolvers[name] = directive.resolve_type()
            if not isinstance(node, (ObjectTypeDefinitionNode, InterfaceTypeDefinitionNode)):
                continue
            is_object = isinstance(node, ObjectTypeDefinitionNode)
            for field_node in node.fields or ():
                directives = self._field_directives(context, node, field_node)
                for directive in directives:
                    if isinstance(directive, FieldManipulator):
                        directive.manipulate_field_definition()
                if not is_object:
                    continue
                for directive in directives:
                    if not isinstance(directive, FieldResolver):
                        continue
                    key = (name, field_node.name.value)
                    if key in context.field_resolvers:
                        raise directive.definition_error("More than one directive provides a resolver")
                    context.field_resolvers[key] = directive.resolve_field()

    def _build_schema(self, document: DocumentAST) -> GraphQLSchema:
        try:
            return build_ast_schema(document.to_document())
        except (GraphQLError, TypeError) as e:
            raise DefinitionException(f"Invalid schema definition: {e}") from e

    def _declare_possible_types(self, schema: GraphQLSchema, registry: TypeRegistry) -> None:
        for name, gql_type in schema.type_map.items():
            if is_abstract_type(gql_type):
                registry.set_possible_types(name, [t.name for t in schema.get_possible_types(gql_type)])

    def _attach_resolvers(self, schema: GraphQLSchema, context: CompileContext) -> None:
        for (type_name, field_name), resolver in context.field_resolvers.items():
            field = schema.type_map[type_name].fields.get(field_name)
            if field is not None:
                field.resolve = resolver
        for name, gql_type in schema.type_map.items():
            if name.startswith('__') or not is_abstract_type(gql_type):
                continue
            explicit = context.type_resolvers.get(name)
            gql_type.resolve_type = explicit or registry_type_resolver(context.registry)
            _logger.debug(
                "lumenql: %s resolves types %s", name, "explicitly" if explicit else "through the registry"
            )
