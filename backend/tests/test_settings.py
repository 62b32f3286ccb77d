import importlib
from datetime import time

import pytest
from django.core.exceptions import ImproperlyConfigured


@pytest.fixture
def reload_settings(monkeypatch):
    module = importlib.import_module("bakery.settings")
    yield lambda: importlib.reload(module)
    monkeypatch.undo()
    importlib.reload(module)


def test_plain_install_defaults_to_sqlite(monkeypatch, reload_settings):
    monkeypatch.delenv("DB_ENGINE", raising=False)
    conf = reload_settings()
    assert conf.DATABASES["default"]["ENGINE"] == "django.db.backends.sqlite3"


def test_mysql_is_opt_in(monkeypatch, reload_settings):
    monkeypatch.setenv("DB_ENGINE", "mysql")
    conf = reload_settings()
    assert conf.DATABASES["default"]["ENGINE"] == "django.db.backends.mysql"


def test_default_due_time_is_parsed_at_load(monkeypatch, reload_settings):
    monkeypatch.setenv("BAKERY_DEFAULT_DUE_TIME", "07:45")
    assert reload_settings().BAKERY_DEFAULT_DUE_TIME == time(7, 45)


def test_malformed_due_time_fails_at_load(monkeypatch, reload_settings):
    monkeypatch.setenv("BAKERY_DEFAULT_DUE_TIME", "4pm")
    with pytest.raises(ImproperlyConfigured):
        reload_settings()
