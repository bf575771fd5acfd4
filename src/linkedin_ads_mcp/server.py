"""
FastMCP server assembly for linkedin-ads-mcp.

Builds the server from an already-loaded ``ServerConfig``: one client per
API product, every tool registered against its client, and a lifespan
that closes the HTTP connections when the transport shuts down.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP

from linkedin_ads_mcp.config import ServerConfig
from linkedin_ads_mcp.core.client import (
    LinkedInClient,
    create_community_client,
    create_linkedin_client,
)
from linkedin_ads_mcp.core.errors import ConfigurationError
from linkedin_ads_mcp.tools import register_all_tools

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "Tools for LinkedIn Campaign Manager (ad accounts, campaigns, campaign groups, creatives, "
    "targeting, analytics) and organization pages (posts, page statistics). IDs are numeric "
    "strings without the URN prefix; dates use YYYY-MM-DD."
)


def create_server(
    config: ServerConfig,
    *,
    ads_client: Optional[LinkedInClient] = None,
    community_client: Optional[LinkedInClient] = None,
) -> FastMCP:
    """
    Create the FastMCP server with all tools registered.

    Args:
        config: Loaded server configuration
        ads_client: Client for the Marketing API (built from config if omitted)
        community_client: Client for the Community Management API (built from
            config if omitted)
    """
    ads = ads_client or create_linkedin_client(config)
    community = community_client or create_community_client(config)

    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[None]:
        logger.info("%s started (LinkedIn API version %s)", config.server_name, config.api_version)
        try:
            yield
        finally:
            await ads.aclose()
            await community.aclose()
            logger.info("%s stopped", config.server_name)

    mcp = FastMCP(config.server_name, instructions=SERVER_INSTRUCTIONS, lifespan=lifespan)
    register_all_tools(mcp, ads, community)

    return mcp


def main(config_file: Optional[str] = None) -> None:
    """Load configuration and serve over stdio."""
    try:
        config = ServerConfig.from_env(config_file)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    config.setup_logging()
    create_server(config).run(transport="stdio")


if __name__ == "__main__":
    main()
