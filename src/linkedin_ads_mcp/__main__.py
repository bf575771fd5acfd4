"""Allow ``python -m linkedin_ads_mcp``."""

from linkedin_ads_mcp.cli.main import cli

if __name__ == "__main__":
    cli()
