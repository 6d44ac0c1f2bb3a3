"""LumenQL public API with lazy exports.

Importing the package stays cheap: the schema builder (and with it
graphql-core and SQLAlchemy) is only imported when one of its names is
first accessed.

Exposes:
- SchemaBuilder, CompiledSchema
- TypeRegistry, ModelCatalog, ResolverReference
- Settings, PaginationSettings
- PaginationType, QueryResultPage, QueryBuilder
- the exception types from ``lumenql.errors``
"""
from __future__ import annotations

from .config import PaginationSettings, Settings
from .errors import (
    ConfigurationError,
    DefinitionException,
    LumenQLError,
    UnresolvableAbstractTypeMapping,
    ValidationError,
)

_LAZY = {
    'SchemaBuilder': ('.schema.builder', 'SchemaBuilder'),
    'CompiledSchema': ('.schema.builder', 'CompiledSchema'),
    'TypeRegistry': ('.core.registry', 'TypeRegistry'),
    'ModelCatalog': ('.core.models', 'ModelCatalog'),
    'ResolverReference': ('.core.references', 'ResolverReference'),
    'PaginationType': ('.pagination.types', 'PaginationType'),
    'QueryResultPage': ('.pagination.executor', 'QueryResultPage'),
    'QueryBuilder': ('.sql.builders', 'QueryBuilder'),
}


def __getattr__(name: str):  # PEP 562 lazy exports
    import importlib as _importlib
    target = _LAZY.get(name)
    if target is None:
        raise AttributeError(name)
    module = _importlib.import_module(target[0], __name__)
    return getattr(module, target[1])


__all__ = [
    'CompiledSchema',
    'ConfigurationError',
    'DefinitionException',
    'LumenQLError',
    'ModelCatalog',
    'PaginationSettings',
    'PaginationType',
    'QueryBuilder',
    'QueryResultPage',
    'ResolverReference',
    'SchemaBuilder',
    'Settings',
    'TypeRegistry',
    'UnresolvableAbstractTypeMapping',
    'ValidationError',
]
