"""Tests for the click CLI."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from linkedin_ads_mcp.cli.main import cli

TOKEN = "AQV" + "x" * 40


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("LINKEDIN_ACCESS_TOKEN", "LINKEDIN_COMMUNITY_TOKEN", "LINKEDIN_ADS_MCP_CONFIG_FILE", "DEBUG"):
        monkeypatch.delenv(name, raising=False)


class TestToolsCommand:
    def test_lists_all_tools(self, cli_runner):
        result = cli_runner.invoke(cli, ["tools"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["success"] is True
        assert data["count"] == 28
        by_name = {tool["name"]: tool for tool in data["tools"]}
        assert by_name["list_campaigns"]["credential"] == "ads"
        assert by_name["create_post"]["credential"] == "community"


class TestCheckConfig:
    def test_masks_tokens(self, cli_runner):
        result = cli_runner.invoke(cli, ["check-config"], env={"LINKEDIN_ACCESS_TOKEN": TOKEN})

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["success"] is True
        assert TOKEN not in result.output
        assert data["config"]["access_token"].endswith(TOKEN[-4:])
        assert data["config"]["community_token"] is None
        assert data["config"]["api_version"] == "202601"
        assert data["warnings"] == []

    def test_reports_warnings(self, cli_runner):
        result = cli_runner.invoke(cli, ["check-config"], env={"LINKEDIN_ACCESS_TOKEN": "short"})

        data = json.loads(result.output)
        assert len(data["warnings"]) == 1

    def test_missing_token(self, cli_runner):
        result = cli_runner.invoke(cli, ["check-config"])

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["success"] is False
        assert data["code"] == "CONFIGURATION_ERROR"
        assert "LINKEDIN_ACCESS_TOKEN is required" in data["error"]

    def test_config_file_option(self, cli_runner, tmp_path):
        path = tmp_path / "ads.toml"
        path.write_text(f'[linkedin]\naccess_token = "{TOKEN}"\napi_version = "202510"\n')

        result = cli_runner.invoke(cli, ["--config-file", str(path), "check-config"])

        assert result.exit_code == 0
        assert json.loads(result.output)["config"]["api_version"] == "202510"


class TestServe:
    def test_serve_is_default(self, cli_runner):
        with patch("linkedin_ads_mcp.cli.main.serve_stdio") as serve_stdio:
            result = cli_runner.invoke(cli, [])

        assert result.exit_code == 0
        serve_stdio.assert_called_once_with(None)

    def test_serve_passes_config_file(self, cli_runner, tmp_path):
        with patch("linkedin_ads_mcp.cli.main.serve_stdio") as serve_stdio:
            result = cli_runner.invoke(cli, ["--config-file", str(tmp_path / "x.toml"), "serve"])

        assert result.exit_code == 0
        serve_stdio.assert_called_once_with(str(tmp_path / "x.toml"))
