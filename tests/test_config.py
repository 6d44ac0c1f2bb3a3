import pytest

from lumenql import Settings
from lumenql.config import PaginationSettings
from lumenql.errors import ConfigurationError


def test_defaults_are_unbounded():
    settings = Settings()
    assert settings.pagination == PaginationSettings(None, None, None)


def test_from_env_reads_pagination_settings():
    settings = Settings.from_env({
        'LUMENQL_PAGINATION_DEFAULT_COUNT': '15',
        'LUMENQL_PAGINATION_MAX_COUNT': '100',
        'LUMENQL_PAGINATION_HARD_MAX_COUNT': '',
    })
    assert settings.pagination.default_count == 15
    assert settings.pagination.max_count == 100
    assert settings.pagination.hard_max_count is None


def test_from_env_uses_process_environment(monkeypatch):
    monkeypatch.setenv('LUMENQL_PAGINATION_MAX_COUNT', '25')
    monkeypatch.delenv('LUMENQL_PAGINATION_DEFAULT_COUNT', raising=False)
    settings = Settings.from_env()
    assert settings.pagination.max_count == 25
    assert settings.pagination.default_count is None


@pytest.mark.parametrize('raw', ['ten', '-3'])
def test_from_env_rejects_invalid_values(raw):
    with pytest.raises(ConfigurationError):
        Settings.from_env({'LUMENQL_PAGINATION_DEFAULT_COUNT': raw})


def test_pagination_settings_validate_types():
    with pytest.raises(ConfigurationError):
        PaginationSettings(max_count=-1)
    with pytest.raises(ConfigurationError):
        PaginationSettings(default_count=True)
