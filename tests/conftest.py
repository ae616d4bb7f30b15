"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from tests.fakes import FakeRepository


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_repo():
    return FakeRepository()


@pytest.fixture
def config_dir(mocker, temp_dir):
    """Point ~/.committer at a temporary directory."""
    config_dir = temp_dir / ".committer"
    mocker.patch("committer.global_config._CONFIG_DIR", config_dir)
    return config_dir


@pytest.fixture
def sample_commit_message():
    """Sample generated commit message."""
    return """feat(auth): add refresh token

- Issue refresh tokens alongside access tokens
- Rotate refresh tokens on use"""
