from __future__ import annotations

import re
from typing import List

__all__ = [
    'from_camel',
    'name_candidates',
]

_camel_to_snake_pattern = re.compile(r'(?<!^)(?=[A-Z])')


def from_camel(name: str) -> str:
    """Convert lower/upper camelCase to snake_case."""
    if not name:
        return name
    return _camel_to_snake_pattern.sub('_', str(name)).lower()


def name_candidates(name: str) -> List[str]:
    """Python attribute names a GraphQL name may map to, most specific first."""
    out = [name]
    snake = from_camel(name)
    if snake != name:
        out.append(snake)
    return out
