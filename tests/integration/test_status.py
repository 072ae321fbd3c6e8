"""Integration tests for sgit status command."""

import hashlib
import os
from pathlib import Path

from typer.testing import CliRunner

from sgit.cli.main import app
from sgit.constants import SGIT_DIR

runner = CliRunner()


class TestStatusCommand:
    """Test sgit status command."""

    def test_status_empty_repo(self, tmp_path: Path) -> None:
        """Test status on newly initialized repo."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])

            result = runner.invoke(app, ["status"])

            assert result.exit_code == 0
            assert "no commits yet" in result.stdout.lower()
            assert "No staged files" in result.stdout

        finally:
            os.chdir(original_cwd)

    def test_status_with_staged_files(self, tmp_path: Path) -> None:
        """Test status lists each staged path with its hash."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])

            (tmp_path / "a.txt").write_text("alpha\n")
            (tmp_path / "b.txt").write_text("beta\n")
            runner.invoke(app, ["add", "a.txt", "b.txt"])

            result = runner.invoke(app, ["status"])

            assert result.exit_code == 0
            assert "Changes to be committed" in result.stdout
            assert "a.txt" in result.stdout
            assert hashlib.sha1(b"alpha\n").hexdigest() in result.stdout
            assert "b.txt" in result.stdout
            assert result.stdout.index("a.txt") < result.stdout.index("b.txt")

        finally:
            os.chdir(original_cwd)

    def test_status_shows_duplicate_adds(self, tmp_path: Path) -> None:
        """Re-adding a path keeps both entries."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])

            (tmp_path / "a.txt").write_text("v1\n")
            runner.invoke(app, ["add", "a.txt"])
            (tmp_path / "a.txt").write_text("v2\n")
            runner.invoke(app, ["add", "a.txt"])

            result = runner.invoke(app, ["status"])

            assert result.stdout.count("a.txt") == 2

        finally:
            os.chdir(original_cwd)

    def test_status_after_commit(self, tmp_path: Path) -> None:
        """Test status after making a commit."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])

            (tmp_path / "a.txt").write_text("alpha\n")
            runner.invoke(app, ["add", "a.txt"])
            runner.invoke(app, ["commit", "snapshot"])
            head = (tmp_path / SGIT_DIR / "HEAD").read_text()

            result = runner.invoke(app, ["status"])

            assert result.exit_code == 0
            assert head in result.stdout
            assert "No staged files" in result.stdout

        finally:
            os.chdir(original_cwd)

    def test_status_not_initialized(self, tmp_path: Path) -> None:
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            result = runner.invoke(app, ["status"])

            assert result.exit_code == 1
            assert "Not an SGit repository" in result.stdout

        finally:
            os.chdir(original_cwd)

    def test_status_corrupted_index(self, tmp_path: Path) -> None:
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])
            (tmp_path / SGIT_DIR / "index").write_text("{oops")

            result = runner.invoke(app, ["status"])

            assert result.exit_code == 1
            assert "Corrupted index" in result.stdout

        finally:
            os.chdir(original_cwd)
