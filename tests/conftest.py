"""Pytest fixtures for the datasift test suite."""

import os

import pytest

from datasift.config import get_settings
from datasift.data import Table


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test reads settings from a clean environment."""
    for key in list(os.environ):
        if key.startswith("DATASIFT_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def outlier_table():
    return Table.from_records([{"v": "1"}, {"v": "2"}, {"v": "3"}, {"v": "100"}])


@pytest.fixture
def duplicate_table():
    return Table.from_records([
        {"a": "x", "b": "1"},
        {"a": "x", "b": "1"},
        {"a": "y", "b": "2"},
    ])


@pytest.fixture
def missing_table():
    return Table.from_records([{"v": "1"}, {"v": ""}, {"v": "2"}, {"v": "n/a"}, {"v": "3"}])


@pytest.fixture
def mixed_table():
    return Table.from_records([
        {"name": "  Alice ", "age": "30", "color": "red", "score": 4.5},
        {"name": "Bob", "age": "n/a", "color": "blue", "score": "7"},
        {"name": None, "age": "25", "color": "red", "score": "x"},
        {"name": "Dana", "age": "41", "color": "", "score": 2},
    ])
