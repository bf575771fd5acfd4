"""Command line interface for linkedin-ads-mcp."""

from linkedin_ads_mcp.cli.main import cli

__all__ = ["cli"]
