"""Tests for ``javadev-mcp catalog`` CLI command."""

from __future__ import annotations

import json

from click.testing import CliRunner

from javadev_mcp.cli import main


class TestCatalogCommand:
    def test_tables(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["catalog"])

        assert result.exit_code == 0
        assert "Tools" in result.output
        assert "Resources" in result.output
        assert "Prompts" in result.output

    def test_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["catalog", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [t["name"] for t in data["tools"]] == [
            "java-class-analyzer",
            "spring-controller-generator",
            "jpa-entity-generator",
            "unit-test-generator",
        ]
        assert data["resources"][0]["uri"] == "java-project://current/structure"
        assert data["prompts"][1]["name"] == "implement-crud-operations"


class TestVersion:
    def test_version_option(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output
