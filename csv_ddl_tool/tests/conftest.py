import logging
import os

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch, tmp_path):
    """Keep CSV_DDL_* variables and any local .env out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith('CSV_DDL_'):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
