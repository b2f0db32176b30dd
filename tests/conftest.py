"""Shared test fixtures and configuration."""

import pytest

from tabular_search.config import Settings


# Environment variables read by Settings; cleared so a developer's shell or
# .env cannot change ranking results under test.
SETTINGS_ENV_VARS = [name.upper() for name in Settings.model_fields]


@pytest.fixture(autouse=True)
def isolated_settings_env(monkeypatch, tmp_path):
    """Run every test against the documented defaults."""

    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def issue_rows():
    """Two-row corpus used by the end-to-end ranking examples."""

    return [
        {"title": "Login bug", "description": "Cannot authenticate"},
        {"title": "UI polish", "description": "Button color"},
    ]


@pytest.fixture
def tracker_rows():
    """Issue-tracker rows with status and priority columns."""

    return [
        {"title": "Login bug", "description": "Cannot authenticate", "status": "open", "priority": "A"},
        {"title": "Login timeout", "description": "Session expires", "status": "closed", "priority": "B"},
        {"title": "UI polish", "description": "Button color", "status": "open", "priority": "C"},
    ]
