"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from local_todo.storage import TodoStore  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    """Path of a data file that does not exist yet."""
    return tmp_path / "db.json"


@pytest.fixture
def store(db_path):
    """An open store backed by a fresh file."""
    with TodoStore(db_path) as todo_store:
        yield todo_store


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the user's config and LOCAL_TODO_DB out of every test."""
    monkeypatch.delenv("LOCAL_TODO_DB", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
