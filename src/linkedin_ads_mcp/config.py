"""
Server configuration for linkedin-ads-mcp.

Supports configuration via:
1. Environment variables (highest priority)
2. TOML config file (linkedin-ads-mcp.toml)
3. Default values (lowest priority)

Environment variables:
- LINKEDIN_ACCESS_TOKEN: OAuth access token with rw_ads scope (required)
- LINKEDIN_COMMUNITY_TOKEN: Token from the Community Management API app (optional)
- LINKEDIN_API_VERSION: API version in YYYYMM format (default: 202601)
- DEBUG: Enable debug logging (true/false)
- LINKEDIN_ADS_MCP_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
- LINKEDIN_ADS_MCP_MAX_RETRIES: Retries for rate-limited calls (default: 3)
- LINKEDIN_ADS_MCP_REQUEST_TIMEOUT: Per-request HTTP timeout in seconds (default: 30)
- LINKEDIN_ADS_MCP_CONFIG_FILE: Path to TOML config file

The loaded ServerConfig is immutable. Reloading requires a process restart.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from linkedin_ads_mcp.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "202601"
DEFAULT_CONFIG_FILES = ("linkedin-ads-mcp.toml", ".linkedin-ads-mcp.toml")

_API_VERSION_RE = re.compile(r"^\d{6}$")
_TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_TRUTHY = ("true", "1", "yes")


def validate_access_token(token: str) -> bool:
    """
    Check that a token looks like a LinkedIn access token.

    This is a format check only; the API decides whether it is valid.
    """
    return len(token) > 20 and bool(_TOKEN_RE.match(token))


def mask_token(token: Optional[str]) -> Optional[str]:
    """Return a token with all but the last four characters hidden."""
    if not token:
        return None
    return f"{'*' * max(len(token) - 4, 0)}{token[-4:]}"


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration with support for env vars and TOML overrides."""

    # LinkedIn credentials
    access_token: str
    community_token: Optional[str] = field(default=None, repr=False)
    api_version: str = DEFAULT_API_VERSION

    # Logging configuration
    debug: bool = False
    log_level: str = "INFO"
    structured_logging: bool = True

    # Client behavior
    max_retries: int = 3
    request_timeout: float = 30.0
    base_url: str = "https://api.linkedin.com/rest"

    # Server configuration
    server_name: str = "linkedin-ads-mcp"
    server_version: str = "0.1.0"

    startup_warnings: Tuple[str, ...] = field(default=(), repr=False, compare=False)

    def __repr__(self) -> str:
        return (
            f"ServerConfig(access_token={mask_token(self.access_token)!r}, "
            f"api_version={self.api_version!r}, debug={self.debug!r}, "
            f"log_level={self.log_level!r}, max_retries={self.max_retries!r})"
        )

    @property
    def has_community_token(self) -> bool:
        return bool(self.community_token)

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "ServerConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config file
        3. Default values

        Raises:
            ConfigurationError: If required values are missing or invalid
        """
        values: Dict[str, Any] = {}

        toml_path = config_file or os.environ.get("LINKEDIN_ADS_MCP_CONFIG_FILE")
        if toml_path:
            values.update(_load_toml(Path(toml_path)))
        else:
            for default_path in DEFAULT_CONFIG_FILES:
                if Path(default_path).exists():
                    values.update(_load_toml(Path(default_path)))
                    break

        values.update(_load_env(os.environ))

        return cls.from_mapping(values)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ServerConfig":
        """Validate raw values and build the immutable configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        access_token = (values.get("access_token") or "").strip()
        if not access_token:
            errors.append("accessToken: LINKEDIN_ACCESS_TOKEN is required")
        elif not validate_access_token(access_token):
            warnings.append("LINKEDIN_ACCESS_TOKEN does not look like a LinkedIn access token")

        community_token = (values.get("community_token") or "").strip() or None
        if community_token and not validate_access_token(community_token):
            warnings.append("LINKEDIN_COMMUNITY_TOKEN does not look like a LinkedIn access token")

        api_version = str(values.get("api_version") or DEFAULT_API_VERSION)
        if not _API_VERSION_RE.match(api_version):
            errors.append("apiVersion: API version must be in YYYYMM format")

        max_retries = _coerce_int(values.get("max_retries", 3), "maxRetries", errors)
        if max_retries is not None and max_retries < 0:
            errors.append("maxRetries: must be zero or greater")

        request_timeout = _coerce_float(values.get("request_timeout", 30.0), "requestTimeout", errors)
        if request_timeout is not None and request_timeout <= 0:
            errors.append("requestTimeout: must be greater than zero")

        if errors:
            details = "\n".join(f"  - {e}" for e in errors)
            raise ConfigurationError(f"Configuration error:\n{details}")

        debug = bool(values.get("debug", False))
        log_level = "DEBUG" if debug else str(values.get("log_level") or "INFO").upper()

        optional: Dict[str, Any] = {}
        for key in ("structured_logging", "base_url", "server_name", "server_version"):
            if key in values:
                optional[key] = values[key]

        return cls(
            access_token=access_token,
            community_token=community_token,
            api_version=api_version,
            debug=debug,
            log_level=log_level,
            max_retries=max_retries,
            request_timeout=request_timeout,
            startup_warnings=tuple(warnings),
            **optional,
        )

    def setup_logging(self) -> None:
        """Configure logging based on settings.

        Logs go to stderr; stdout carries the MCP stdio transport.
        """
        level = getattr(logging, self.log_level, logging.INFO)

        if self.structured_logging:
            # JSON-style structured logging
            formatter = logging.Formatter(
                '{"timestamp":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}'
            )
        else:
            formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        root_logger = logging.getLogger("linkedin_ads_mcp")
        root_logger.setLevel(level)
        root_logger.addHandler(handler)

        for warning in self.startup_warnings:
            logger.warning(warning)


def _load_toml(path: Path) -> Dict[str, Any]:
    """Load configuration values from a TOML file."""
    if not path.exists():
        logger.warning(f"Config file not found: {path}")
        return {}

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Error loading config file {path}: {e}") from e

    values: Dict[str, Any] = {}

    # LinkedIn settings
    if "linkedin" in data:
        li = data["linkedin"]
        for key in ("access_token", "community_token", "api_version", "base_url"):
            if key in li:
                values[key] = li[key]

    # Client settings
    if "client" in data:
        client = data["client"]
        if "max_retries" in client:
            values["max_retries"] = client["max_retries"]
        if "request_timeout" in client:
            values["request_timeout"] = client["request_timeout"]

    # Logging settings
    if "logging" in data:
        log = data["logging"]
        if "level" in log:
            values["log_level"] = str(log["level"]).upper()
        if "structured" in log:
            values["structured_logging"] = bool(log["structured"])
        if "debug" in log:
            values["debug"] = bool(log["debug"])

    # Server settings
    if "server" in data:
        srv = data["server"]
        if "name" in srv:
            values["server_name"] = srv["name"]
        if "version" in srv:
            values["server_version"] = srv["version"]

    return values


def _load_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Load configuration values from environment variables."""
    values: Dict[str, Any] = {}

    if "LINKEDIN_ACCESS_TOKEN" in environ:
        values["access_token"] = environ["LINKEDIN_ACCESS_TOKEN"]

    if community := environ.get("LINKEDIN_COMMUNITY_TOKEN"):
        values["community_token"] = community

    if version := environ.get("LINKEDIN_API_VERSION"):
        values["api_version"] = version

    if "DEBUG" in environ:
        values["debug"] = environ["DEBUG"].lower() in _TRUTHY

    if level := environ.get("LINKEDIN_ADS_MCP_LOG_LEVEL"):
        values["log_level"] = level.upper()

    if retries := environ.get("LINKEDIN_ADS_MCP_MAX_RETRIES"):
        values["max_retries"] = retries

    if timeout := environ.get("LINKEDIN_ADS_MCP_REQUEST_TIMEOUT"):
        values["request_timeout"] = timeout

    return values


def _coerce_int(value: Any, name: str, errors: List[str]) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        errors.append(f"{name}: must be an integer")
        return None


def _coerce_float(value: Any, name: str, errors: List[str]) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        errors.append(f"{name}: must be a number")
        return None
