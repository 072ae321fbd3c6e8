"""Unit tests for sgit init command."""

import os
from pathlib import Path

from typer.testing import CliRunner

from sgit.cli.main import app
from sgit.constants import SGIT_DIR

runner = CliRunner()


class TestInitCommand:
    """Test sgit init command."""

    def test_init_creates_directory_structure(self, tmp_path: Path) -> None:
        """Test that init creates required directories and files."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            result = runner.invoke(app, ["init", "--quiet"])

            assert result.exit_code == 0

            sgit_dir = tmp_path / SGIT_DIR
            assert sgit_dir.is_dir()
            assert (sgit_dir / "objects").is_dir()
            assert (sgit_dir / "HEAD").read_text() == ""
            assert (sgit_dir / "index").read_text() == "[]"
        finally:
            os.chdir(original_cwd)

    def test_init_quiet_suppresses_output(self, tmp_path: Path) -> None:
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            result = runner.invoke(app, ["init", "--quiet"])

            assert result.exit_code == 0
            assert result.stdout.strip() == ""
        finally:
            os.chdir(original_cwd)

    def test_init_reports_success(self, tmp_path: Path) -> None:
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            result = runner.invoke(app, ["init"])

            assert result.exit_code == 0
            assert "Initialized empty SGit repository" in result.stdout
        finally:
            os.chdir(original_cwd)

    def test_init_path_with_brackets(self, tmp_path: Path) -> None:
        """Square brackets in the workspace path are printed literally."""
        workspace = tmp_path / "proj[red]"
        workspace.mkdir()
        original_cwd = Path.cwd()
        os.chdir(workspace)

        try:
            result = runner.invoke(app, ["init"])

            assert result.exit_code == 0
            assert "proj[red]" in result.stdout.replace("\n", "")
        finally:
            os.chdir(original_cwd)

    def test_init_already_initialized_is_not_fatal(self, tmp_path: Path) -> None:
        """Test that a second init reports and leaves data alone."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])
            head_file = tmp_path / SGIT_DIR / "HEAD"
            head_file.write_text("a" * 40)

            result = runner.invoke(app, ["init"])

            assert result.exit_code == 0
            assert "already initialized" in result.stdout
            assert head_file.read_text() == "a" * 40
        finally:
            os.chdir(original_cwd)

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "SGit version 0.1.0" in result.stdout
