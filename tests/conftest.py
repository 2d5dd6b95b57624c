"""Shared pytest fixtures."""

import os
import tempfile

import pytest

from atomspace import AtomSpace, LocalStorage


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def db_path(temp_dir):
    """Path to a database file inside the temporary directory."""
    return os.path.join(temp_dir, "atomspace.db")


@pytest.fixture
def storage(temp_dir):
    """Local storage shared by every owner in a test."""
    return LocalStorage(temp_dir)


@pytest.fixture
def alice(storage):
    """AtomSpace for owner 'alice'."""
    return AtomSpace("alice", storage=storage)


@pytest.fixture
def bob(storage):
    """AtomSpace for owner 'bob', sharing alice's database."""
    return AtomSpace("bob", storage=storage)


@pytest.fixture
def carol(storage):
    """AtomSpace for owner 'carol', sharing alice's database."""
    return AtomSpace("carol", storage=storage)


@pytest.fixture
def clean_env(monkeypatch, temp_dir):
    """Run in an empty directory with no ATOMSPACE_* variables set."""
    for key in list(os.environ):
        if key.startswith("ATOMSPACE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(temp_dir)
    return temp_dir


@pytest.fixture
def data_dir(clean_env):
    """Data directory for commands and CLI tests, isolated from any real config."""
    return os.path.join(clean_env, "kb")
