"""Shared test fixtures for paperjournal."""

import itertools

import pytest

from paperjournal.logic import EditorShell

FIXED_NOW = "2026-10-19T12:00:00+00:00"


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point the config directory at a temporary XDG_CONFIG_HOME."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def shell():
    """An editor shell with predictable ids (1, 2, 3, ...) and a fixed clock."""
    return EditorShell(id_source=itertools.count(1).__next__, clock=lambda: FIXED_NOW)
