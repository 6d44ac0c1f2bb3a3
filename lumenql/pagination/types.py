from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..config import PaginationSettings
from ..errors import ConfigurationError, ValidationError


class PaginationType(str, Enum):
    NONE = 'NONE'
    PAGINATOR = 'PAGINATOR'
    SIMPLE = 'SIMPLE'
    CONNECTION = 'CONNECTION'

    @classmethod
    def parse(cls, value: Any, default: 'PaginationType') -> 'PaginationType':
        if value is None:
            return default
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ConfigurationError(f"Unknown pagination type {value!r}") from None

    @property
    def is_paginated(self) -> bool:
        return self is not PaginationType.NONE

    @property
    def counts_total(self) -> bool:
        return self in (PaginationType.PAGINATOR, PaginationType.CONNECTION)


def _check_count_setting(name: str, value: Any) -> None:
    if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
        raise ConfigurationError(f"{name} must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class CountBounds:
    """Page size limits of one paginated field.

    ``None`` for either bound means "not configured"; ``max_count`` of ``None``
    means unbounded.
    """

    default_count: Optional[int] = None
    max_count: Optional[int] = None
    hard_max_count: Optional[int] = None

    @classmethod
    def resolve(
        cls,
        default_count: Optional[int],
        max_count: Optional[int],
        settings: PaginationSettings,
    ) -> 'CountBounds':
        """Combine directive level bounds with the global settings.

        A directive value of ``None`` falls back to the setting; ``0`` at
        either level disables the bound.
        """
        _check_count_setting('defaultCount', default_count)
        _check_count_setting('maxCount', max_count)
        if default_count is None:
            default_count = settings.default_count
        if max_count is None:
            max_count = settings.max_count
        bounds = cls(
            default_count=default_count or None,
            max_count=max_count or None,
            hard_max_count=settings.hard_max_count or None,
        )
        if bounds.default_count and bounds.max_count and bounds.default_count > bounds.max_count:
            raise ConfigurationError(
                f"defaultCount {bounds.default_count} exceeds maxCount {bounds.max_count}"
            )
        return bounds

    def clamp(self, requested: Any) -> int:
        """Page size for a client request.

        Raises:
            ValidationError: missing without a default, not a positive integer,
                or above the hard ceiling.
        """
        if requested is None:
            requested = self.default_count
            if requested is None:
                raise ValidationError("A page size must be given with the 'first' argument", 'first')
        if isinstance(requested, bool) or not isinstance(requested, int):
            raise ValidationError(f"Page size must be an integer, got {requested!r}", 'first', requested)
        if requested < 1:
            raise ValidationError(f"Page size must be at least 1, got {requested}", 'first', requested)
        if self.hard_max_count is not None and requested > self.hard_max_count:
            raise ValidationError(
                f"Maximum number of {self.hard_max_count} requested items exceeded, got {requested}",
                'first',
                requested,
            )
        if self.max_count is not None:
            return min(requested, self.max_count)
        return requested
