"""Fixtures for integration tests."""

import subprocess
import sys

import pytest


@pytest.fixture
def sgit_cmd():
    """Command prefix that runs the sgit CLI in a subprocess."""
    return [sys.executable, "-m", "sgit.cli.main"]


@pytest.fixture
def initialized_repo(tmp_path, sgit_cmd):
    """Create a temporary directory with initialized SGit repository.

    Returns:
        Path: Path to the workspace root
    """
    workspace = tmp_path / "test_workspace"
    workspace.mkdir()

    result = subprocess.run(
        [*sgit_cmd, "init", "--quiet"],
        cwd=workspace,
        capture_output=True,
        text=True,
    )

    if result.returncode != 0:
        raise RuntimeError(f"Failed to initialize repo: {result.stdout}\n{result.stderr}")

    return workspace
