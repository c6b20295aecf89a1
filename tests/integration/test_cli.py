"""Integration tests for the cgi-helper CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from cgi_helper import __version__
from cgi_helper.cli import SELFTEST_TEMPLATE, app, parse_vars
from cgi_helper.doctypes import available_doctypes
from tests.fixtures import BROKEN_TEMPLATE, GREETING_TEMPLATE

runner = CliRunner()


@pytest.mark.usefixtures("isolated_cwd", "clean_logging")
class TestSelftest:
    """Tests for `cgi-helper selftest`."""

    def test_selftest_output(self) -> None:
        """Test that the header precedes the rendered sample."""
        result = runner.invoke(app, ["selftest"])

        assert result.exit_code == 0, result.output
        assert result.stdout == "Content-type: text/html\n\n" + SELFTEST_TEMPLATE

    def test_version(self) -> None:
        """Test --version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.stdout.strip() == f"cgi-helper {__version__}"


@pytest.mark.usefixtures("clean_logging")
class TestRenderCommand:
    """Tests for `cgi-helper render`."""

    def test_render_with_header(self, isolated_cwd: Path) -> None:
        """Test rendering a template as a full response."""
        result = runner.invoke(
            app,
            ["render", str(GREETING_TEMPLATE), "--var", "name=World"],
        )

        assert result.exit_code == 0, result.output
        assert result.stdout == (
            "Content-type: text/html\n"
            "\n"
            '<!doctype html><html lang="en-us">\n'
            "<body>\n"
            "<p>Hello, World!</p>\n"
            "</body>\n"
            "</html>\n"
        )

    def test_render_no_header(self, isolated_cwd: Path) -> None:
        """Test --no-header."""
        result = runner.invoke(
            app,
            ["render", str(GREETING_TEMPLATE), "--var", "name=<me>", "--no-header"],
        )

        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("<!doctype html>")
        assert "<p>Hello, &lt;me&gt;!</p>" in result.stdout
        assert "Content-type" not in result.stdout

    def test_render_content_type_option(self, isolated_cwd: Path) -> None:
        """Test overriding the content type."""
        result = runner.invoke(
            app,
            [
                "render", str(GREETING_TEMPLATE),
                "--var", "name=x",
                "--content-type", "application/xhtml+xml",
            ],
        )

        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("Content-type: application/xhtml+xml\n\n")

    def test_render_uses_config(self, isolated_cwd: Path) -> None:
        """Test that header defaults come from the discovered config file."""
        (isolated_cwd / "cgi_helper.yaml").write_text(
            "header:\n  content_type: text/plain\n"
        )

        result = runner.invoke(app, ["render", str(GREETING_TEMPLATE), "--var", "name=x"])

        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("Content-type: text/plain\n\n")

    def test_render_explicit_config(self, isolated_cwd: Path, tmp_path: Path) -> None:
        """Test --config."""
        config_file = tmp_path / "other.yaml"
        config_file.write_text("render:\n  strict_undefined: false\n")

        result = runner.invoke(
            app,
            ["--config", str(config_file), "render", str(GREETING_TEMPLATE), "--no-header"],
        )

        assert result.exit_code == 0, result.output
        assert "<p>Hello, !</p>" in result.stdout

    def test_render_missing_variable(self, isolated_cwd: Path) -> None:
        """Test that an undefined variable fails the command."""
        result = runner.invoke(app, ["render", str(GREETING_TEMPLATE)])

        assert result.exit_code == 1
        assert "Content-type" not in result.stdout

    def test_render_syntax_error(self, isolated_cwd: Path) -> None:
        """Test that a malformed template exits with code 1."""
        result = runner.invoke(app, ["render", str(BROKEN_TEMPLATE), "--var", "name=x"])

        assert result.exit_code == 1
        assert "Content-type" not in result.stdout

    def test_render_bad_var(self, isolated_cwd: Path) -> None:
        """Test that --var without '=' is a usage error."""
        result = runner.invoke(app, ["render", str(GREETING_TEMPLATE), "--var", "name"])

        assert result.exit_code == 2

    def test_invalid_config_file(self, isolated_cwd: Path) -> None:
        """Test that an invalid config stops the CLI."""
        (isolated_cwd / "cgi_helper.yaml").write_text("header:\n  doctype: xhtml11\n")

        result = runner.invoke(app, ["doctype"])

        assert result.exit_code == 1


@pytest.mark.usefixtures("isolated_cwd", "clean_logging")
class TestDoctypeCommand:
    """Tests for `cgi-helper doctype`."""

    def test_default_doctype(self) -> None:
        """Test printing the default doctype."""
        result = runner.invoke(app, ["doctype"])

        assert result.exit_code == 0, result.output
        assert result.stdout == '<!doctype html><html lang="en-us">\n'

    def test_named_doctype(self) -> None:
        """Test printing a named doctype."""
        result = runner.invoke(app, ["doctype", "html4str"])

        assert result.exit_code == 0, result.output
        assert result.stdout == (
            '<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 4.01//EN"\n'
            '    "http://www.w3.org/TR/html4/strict.dtd">\n'
            "<html>\n"
        )

    def test_list(self) -> None:
        """Test --list."""
        result = runner.invoke(app, ["doctype", "--list"])

        assert result.exit_code == 0, result.output
        assert tuple(result.stdout.split()) == available_doctypes()

    def test_unknown_doctype(self) -> None:
        """Test that unknown identifiers exit with code 1."""
        result = runner.invoke(app, ["doctype", "xhtml11"])

        assert result.exit_code == 1
        assert "<!DOCTYPE" not in result.stdout


@pytest.mark.usefixtures("clean_logging")
class TestInitCommand:
    """Tests for `cgi-helper init`."""

    def test_init_writes_config(self, isolated_cwd: Path) -> None:
        """Test writing the default config."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0, result.output
        assert (isolated_cwd / "cgi_helper.yaml").exists()

    def test_init_refuses_overwrite(self, isolated_cwd: Path) -> None:
        """Test that an existing file is kept without --force."""
        config_file = isolated_cwd / "cgi_helper.yaml"
        config_file.write_text("# mine\n")

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert config_file.read_text() == "# mine\n"

    def test_init_force(self, isolated_cwd: Path) -> None:
        """Test --force."""
        config_file = isolated_cwd / "cgi_helper.yaml"
        config_file.write_text("# mine\n")

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0, result.output
        assert "header:" in config_file.read_text()


class TestParseVars:
    """Tests for --var parsing."""

    def test_pairs(self) -> None:
        """Test NAME=VALUE pairs, including '=' inside values."""
        assert parse_vars(["a=1", "b=x=y", "c="]) == {"a": "1", "b": "x=y", "c": ""}

    def test_none(self) -> None:
        """Test no values."""
        assert parse_vars(None) == {}
