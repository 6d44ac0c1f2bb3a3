"""Settings consumed by the schema compiler."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .errors import ConfigurationError

ENV_PREFIX = "LUMENQL_"


def _int_or_none(environ: Mapping[str, str], key: str) -> Optional[int]:
    raw = environ.get(ENV_PREFIX + key)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX}{key} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigurationError(f"{ENV_PREFIX}{key} must be non-negative, got {value}")
    return value


@dataclass(frozen=True)
class PaginationSettings:
    """Global pagination defaults.

    Attributes:
        default_count: Page size used when the client omits ``first`` and the
            directive has no ``defaultCount``.
        max_count: Requested page sizes above this are clamped down to it.
            ``None`` or ``0`` means unbounded.
        hard_max_count: Requests above this are rejected instead of clamped.
    """

    default_count: Optional[int] = None
    max_count: Optional[int] = None
    hard_max_count: Optional[int] = None

    def __post_init__(self):
        for name in ("default_count", "max_count", "hard_max_count"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                raise ConfigurationError(f"pagination.{name} must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class Settings:
    pagination: PaginationSettings = field(default_factory=PaginationSettings)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from ``LUMENQL_*`` environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            pagination=PaginationSettings(
                default_count=_int_or_none(env, "PAGINATION_DEFAULT_COUNT"),
                max_count=_int_or_none(env, "PAGINATION_MAX_COUNT"),
                hard_max_count=_int_or_none(env, "PAGINATION_HARD_MAX_COUNT"),
            )
        )
