"""Tests for ServerConfig loading (env > TOML > defaults)."""

import logging

import pytest

from linkedin_ads_mcp.config import (
    DEFAULT_API_VERSION,
    ServerConfig,
    mask_token,
    validate_access_token,
)
from linkedin_ads_mcp.core.errors import ConfigurationError

VALID_TOKEN = "AQV" + "x" * 40
ENV_VARS = (
    "LINKEDIN_ACCESS_TOKEN",
    "LINKEDIN_COMMUNITY_TOKEN",
    "LINKEDIN_API_VERSION",
    "DEBUG",
    "LINKEDIN_ADS_MCP_LOG_LEVEL",
    "LINKEDIN_ADS_MCP_MAX_RETRIES",
    "LINKEDIN_ADS_MCP_REQUEST_TIMEOUT",
    "LINKEDIN_ADS_MCP_CONFIG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate each test from the caller's environment and working directory."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestTokenHelpers:
    def test_validate_access_token_accepts_long_token(self):
        assert validate_access_token(VALID_TOKEN) is True

    def test_validate_access_token_rejects_short_token(self):
        assert validate_access_token("abc") is False

    def test_validate_access_token_rejects_invalid_characters(self):
        assert validate_access_token("a" * 25 + " $") is False

    def test_mask_token_keeps_last_four(self):
        assert mask_token("abcdefgh") == "****efgh"

    def test_mask_token_none(self):
        assert mask_token(None) is None
        assert mask_token("") is None


class TestFromEnv:
    def test_missing_token_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ServerConfig.from_env()
        assert "LINKEDIN_ACCESS_TOKEN is required" in str(exc_info.value)

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_ACCESS_TOKEN", VALID_TOKEN)

        config = ServerConfig.from_env()

        assert config.access_token == VALID_TOKEN
        assert config.community_token is None
        assert config.api_version == DEFAULT_API_VERSION
        assert config.debug is False
        assert config.log_level == "INFO"
        assert config.max_retries == 3
        assert config.request_timeout == 30.0
        assert config.startup_warnings == ()

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_ACCESS_TOKEN", VALID_TOKEN)
        monkeypatch.setenv("LINKEDIN_COMMUNITY_TOKEN", "c" * 30)
        monkeypatch.setenv("LINKEDIN_API_VERSION", "202512")
        monkeypatch.setenv("LINKEDIN_ADS_MCP_MAX_RETRIES", "5")
        monkeypatch.setenv("LINKEDIN_ADS_MCP_REQUEST_TIMEOUT", "12.5")
        monkeypatch.setenv("LINKEDIN_ADS_MCP_LOG_LEVEL", "warning")

        config = ServerConfig.from_env()

        assert config.community_token == "c" * 30
        assert config.has_community_token is True
        assert config.api_version == "202512"
        assert config.max_retries == 5
        assert config.request_timeout == 12.5
        assert config.log_level == "WARNING"

    def test_debug_forces_debug_level(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_ACCESS_TOKEN", VALID_TOKEN)
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LINKEDIN_ADS_MCP_LOG_LEVEL", "ERROR")

        config = ServerConfig.from_env()

        assert config.debug is True
        assert config.log_level == "DEBUG"

    def test_invalid_api_version(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_ACCESS_TOKEN", VALID_TOKEN)
        monkeypatch.setenv("LINKEDIN_API_VERSION", "2026-01")

        with pytest.raises(ConfigurationError) as exc_info:
            ServerConfig.from_env()
        assert "apiVersion: API version must be in YYYYMM format" in str(exc_info.value)

    def test_errors_are_collected(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_API_VERSION", "bad")
        monkeypatch.setenv("LINKEDIN_ADS_MCP_MAX_RETRIES", "many")

        with pytest.raises(ConfigurationError) as exc_info:
            ServerConfig.from_env()

        message = str(exc_info.value)
        assert message.startswith("Configuration error:\n")
        assert "  - accessToken:" in message
        assert "  - apiVersion:" in message
        assert "  - maxRetries: must be an integer" in message

    def test_negative_retries_rejected(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_ACCESS_TOKEN", VALID_TOKEN)
        monkeypatch.setenv("LINKEDIN_ADS_MCP_MAX_RETRIES", "-1")

        with pytest.raises(ConfigurationError, match="maxRetries"):
            ServerConfig.from_env()

    def test_suspicious_token_is_a_warning(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_ACCESS_TOKEN", "short")

        config = ServerConfig.from_env()

        assert config.access_token == "short"
        assert len(config.startup_warnings) == 1
        assert "does not look like" in config.startup_warnings[0]

    def test_config_is_immutable(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_ACCESS_TOKEN", VALID_TOKEN)
        config = ServerConfig.from_env()

        with pytest.raises(AttributeError):
            config.api_version = "202401"  # type: ignore[misc]

    def test_repr_masks_token(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_ACCESS_TOKEN", VALID_TOKEN)
        config = ServerConfig.from_env()

        assert VALID_TOKEN not in repr(config)
        assert VALID_TOKEN[-4:] in repr(config)


class TestTomlLoading:
    def test_explicit_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(
            f"""
[linkedin]
access_token = "{VALID_TOKEN}"
api_version = "202510"

[client]
max_retries = 1
request_timeout = 5

[logging]
level = "debug"
structured = false

[server]
name = "ads-test"
"""
        )

        config = ServerConfig.from_env(str(path))

        assert config.access_token == VALID_TOKEN
        assert config.api_version == "202510"
        assert config.max_retries == 1
        assert config.request_timeout == 5.0
        assert config.log_level == "DEBUG"
        assert config.structured_logging is False
        assert config.server_name == "ads-test"

    def test_default_file_in_working_directory(self, tmp_path):
        (tmp_path / "linkedin-ads-mcp.toml").write_text(f'[linkedin]\naccess_token = "{VALID_TOKEN}"\n')

        config = ServerConfig.from_env()

        assert config.access_token == VALID_TOKEN

    def test_env_overrides_toml(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.toml"
        path.write_text(f'[linkedin]\naccess_token = "{VALID_TOKEN}"\napi_version = "202510"\n')
        monkeypatch.setenv("LINKEDIN_ADS_MCP_CONFIG_FILE", str(path))
        monkeypatch.setenv("LINKEDIN_API_VERSION", "202601")

        config = ServerConfig.from_env()

        assert config.api_version == "202601"

    def test_invalid_toml_raises(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[linkedin\naccess_token = ")

        with pytest.raises(ConfigurationError, match="Error loading config file"):
            ServerConfig.from_env(str(path))

    def test_missing_file_falls_back_to_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LINKEDIN_ACCESS_TOKEN", VALID_TOKEN)

        config = ServerConfig.from_env(str(tmp_path / "missing.toml"))

        assert config.access_token == VALID_TOKEN


class TestSetupLogging:
    def test_installs_handler_and_logs_warnings(self, caplog):
        config = ServerConfig.from_mapping({"access_token": "short", "log_level": "WARNING"})
        package_logger = logging.getLogger("linkedin_ads_mcp")
        before = list(package_logger.handlers)

        try:
            with caplog.at_level(logging.WARNING, logger="linkedin_ads_mcp.config"):
                config.setup_logging()

            assert package_logger.level == logging.WARNING
            assert len(package_logger.handlers) == len(before) + 1
            assert any("does not look like" in record.getMessage() for record in caplog.records)
        finally:
            for handler in package_logger.handlers[len(before):]:
                package_logger.removeHandler(handler)
            package_logger.setLevel(logging.NOTSET)
