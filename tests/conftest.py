"""
Shared test fixtures and configuration for tfdocs-action tests.

This module provides common fixtures used across all test types:
- Isolated global git configuration (never touches ~/.gitconfig)
- ActionConfig factory bound to a temporary workspace
- Mock git client and generator
"""

import logging
from pathlib import Path
from unittest.mock import Mock

import pytest

from tfdocs_action.action_config import ActionConfig
from tfdocs_action.generator import TerraformDocsRunner
from tfdocs_action.git_client import GitClient

# ============================================================================
# ENVIRONMENT FIXTURES
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_git_config(tmp_path, monkeypatch):
    """Point git's global config at a temporary file.

    The action rewrites global user.name/user.email and safe.directory, so
    every test gets its own HOME and GIT_CONFIG_GLOBAL.
    """
    home = tmp_path / "home"
    home.mkdir()
    gitconfig = home / ".gitconfig"
    gitconfig.touch()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(gitconfig))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    monkeypatch.delenv("GITHUB_WORKSPACE", raising=False)
    return gitconfig


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging() calls made by the code under test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def workspace(tmp_path) -> Path:
    """Empty workspace directory."""
    path = tmp_path / "workspace"
    path.mkdir()
    return path


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================


@pytest.fixture
def make_config(workspace):
    """Factory for ActionConfig instances rooted at the test workspace.

    Example:
        config = make_config(output_method="replace", git_push=True)
    """

    def _make(**overrides) -> ActionConfig:
        values = {"workspace": workspace}
        values.update(overrides)
        return ActionConfig(**values)

    return _make


# ============================================================================
# COLLABORATOR MOCKS
# ============================================================================


@pytest.fixture
def mock_git():
    """GitClient mock reporting a clean repository."""
    git = Mock(spec=GitClient)
    git.count_changes.return_value = 0
    git.is_path_changed.return_value = False
    git.get_global_config.return_value = None
    git.fetch_tags.return_value = True
    git.status_short.return_value = ""
    return git


@pytest.fixture
def mock_generator():
    """TerraformDocsRunner mock that always succeeds."""
    return Mock(spec=TerraformDocsRunner)
