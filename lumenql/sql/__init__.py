from .builders import QueryBuilder, find_relationship, find_scope

__all__ = ['QueryBuilder', 'find_relationship', 'find_scope']
