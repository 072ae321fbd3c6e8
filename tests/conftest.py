"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from sgit.core import Repository


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a workspace with an initialized .sgit directory."""
    workspace_root = tmp_path / "workspace"
    workspace_root.mkdir()
    Repository.init(workspace_root)
    return workspace_root


@pytest.fixture
def repo(workspace: Path) -> Repository:
    """Open the repository in the workspace fixture."""
    return Repository.open(workspace)


@pytest.fixture
def temp_repo(tmp_path: Path) -> Path:
    """Create a temporary working tree with a few sample text files."""
    root = tmp_path / "test_repo"
    root.mkdir()

    (root / "notes.txt").write_text(
        "shopping list\n"
        "- milk\n"
        "- eggs\n"
    )
    (root / "README.md").write_text("# Project\n\nA sample project.\n")
    (root / "config.ini").write_text("[main]\nname = demo\n")

    return root
