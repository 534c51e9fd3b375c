# ==============================================================================
# Tests for CLI Help Commands
# ==============================================================================
"""
Tests that all CLI help commands generate the expected output.

These tests use the real app from loki_analytics.app (not minimal Typer apps)
to ensure the full command tree is wired up correctly and that Typer can
introspect all command function signatures without errors.
"""

import pytest
from typer.testing import CliRunner

from loki_analytics.app import app

runner = CliRunner()


class TestRootHelp:
    """Tests for the root `loki-analytics --help` output."""

    def test_exit_code(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0

    def test_description(self):
        result = runner.invoke(app, ["--help"])
        assert "Web traffic analytics from Loki page view logs" in result.output

    def test_lists_all_subcommands(self):
        result = runner.invoke(app, ["--help"])
        expected_commands = [
            "active",
            "analytics",
            "config",
            "pages",
            "sources",
            "status",
            "views",
            "visitors",
        ]
        for cmd in expected_commands:
            assert cmd in result.output, f"Missing command: {cmd}"


class TestCommandHelp:
    """Every command's --help exits cleanly and documents its options."""

    @pytest.mark.parametrize(
        "args, options",
        [
            (["analytics"], ["--range", "--json"]),
            (["pages"], ["--range", "--limit", "--json"]),
            (["sources"], ["--range", "--limit", "--json"]),
            (["views"], ["--range", "--limit", "--json"]),
            (["visitors"], ["--range", "--json"]),
            (["active"], ["--json"]),
            (["status"], ["--json"]),
            (["config", "show"], ["--json"]),
        ],
    )
    def test_help(self, args, options):
        result = runner.invoke(app, [*args, "--help"])
        assert result.exit_code == 0
        for option in options:
            assert option in result.output, f"Missing option {option} for {args}"

    def test_config_lists_show(self):
        result = runner.invoke(app, ["config", "--help"])
        assert result.exit_code == 0
        assert "Configuration management" in result.output
        assert "show" in result.output
