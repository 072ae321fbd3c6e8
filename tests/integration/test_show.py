"""Integration tests for sgit show command."""

import os
from pathlib import Path

from typer.testing import CliRunner

from sgit.cli.main import app
from sgit.constants import EXIT_USER_ERROR, SGIT_DIR

runner = CliRunner()


def _head(root: Path) -> str:
    return (root / SGIT_DIR / "HEAD").read_text()


class TestShowCommand:
    """Test sgit show command."""

    def test_show_first_commit(self, tmp_path: Path) -> None:
        """Every file of a root commit is reported as first commit, without a diff."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])
            (tmp_path / "a.txt").write_text("alpha\n")
            (tmp_path / "b.txt").write_text("beta\n")
            runner.invoke(app, ["add", "a.txt", "b.txt"])
            runner.invoke(app, ["commit", "init"])

            result = runner.invoke(app, ["show", _head(tmp_path)])

            assert result.exit_code == 0
            assert "File: a.txt" in result.stdout
            assert "File: b.txt" in result.stdout
            assert "alpha" in result.stdout
            assert "beta" in result.stdout
            assert result.stdout.count("First commit") == 2
            assert "Diff:" not in result.stdout

        finally:
            os.chdir(original_cwd)

    def test_show_modified_file(self, tmp_path: Path) -> None:
        """A file present in the parent is diffed against it."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])
            (tmp_path / "a.txt").write_text("keep\nold line\n")
            runner.invoke(app, ["add", "a.txt"])
            runner.invoke(app, ["commit", "init"])

            (tmp_path / "a.txt").write_text("keep\nnew line\n")
            runner.invoke(app, ["add", "a.txt"])
            runner.invoke(app, ["commit", "edit"])

            result = runner.invoke(app, ["show", _head(tmp_path)])

            assert result.exit_code == 0
            assert "Diff:" in result.stdout
            assert "--old line" in result.stdout
            assert "++new line" in result.stdout
            assert "First commit" not in result.stdout

            diff_section = result.stdout.split("Diff:")[1]
            assert "\nkeep\n" in diff_section
            assert diff_section.index("--old line") < diff_section.index("++new line")

        finally:
            os.chdir(original_cwd)

    def test_show_new_file(self, tmp_path: Path) -> None:
        """A file absent from the parent is reported as new."""
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])
            (tmp_path / "a.txt").write_text("alpha\n")
            runner.invoke(app, ["add", "a.txt"])
            runner.invoke(app, ["commit", "init"])

            (tmp_path / "b.txt").write_text("beta\n")
            runner.invoke(app, ["add", "b.txt"])
            runner.invoke(app, ["commit", "add b"])

            result = runner.invoke(app, ["show", _head(tmp_path)])

            assert result.exit_code == 0
            assert "New file in this commit" in result.stdout
            assert "Diff:" not in result.stdout

        finally:
            os.chdir(original_cwd)

    def test_show_content_with_markup_characters(self, tmp_path: Path) -> None:
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])
            (tmp_path / "a.txt").write_text("[bold]not markup[/bold]\n")
            runner.invoke(app, ["add", "a.txt"])
            runner.invoke(app, ["commit", "init"])

            result = runner.invoke(app, ["show", _head(tmp_path)])

            assert "[bold]not markup[/bold]" in result.stdout

        finally:
            os.chdir(original_cwd)

    def test_show_unknown_commit(self, tmp_path: Path) -> None:
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])

            result = runner.invoke(app, ["show", "0" * 40])

            assert result.exit_code == EXIT_USER_ERROR
            assert "Commit not found" in result.stdout

        finally:
            os.chdir(original_cwd)

    def test_show_file_hash_is_not_a_commit(self, tmp_path: Path) -> None:
        original_cwd = Path.cwd()
        os.chdir(tmp_path)

        try:
            runner.invoke(app, ["init", "--quiet"])
            (tmp_path / "a.txt").write_text("alpha\n")
            add_result = runner.invoke(app, ["add", "a.txt"])
            blob_hash = add_result.stdout.splitlines()[0].strip()

            result = runner.invoke(app, ["show", blob_hash])

            assert result.exit_code == EXIT_USER_ERROR
            assert "Commit not found" in result.stdout

        finally:
            os.chdir(original_cwd)
