"""MCP tools for LinkedIn Campaign Manager and organization pages.

Ads tools call the Marketing API with the primary access token; post and
organization analytics tools call the Community Management API with the
community token (falling back to the primary one).
"""

from mcp.server.fastmcp import FastMCP

from linkedin_ads_mcp.core.client import LinkedInClient
from linkedin_ads_mcp.tools.accounts import ACCOUNT_TOOLS
from linkedin_ads_mcp.tools.analytics import ANALYTICS_TOOLS
from linkedin_ads_mcp.tools.campaign_groups import CAMPAIGN_GROUP_TOOLS
from linkedin_ads_mcp.tools.campaigns import CAMPAIGN_TOOLS
from linkedin_ads_mcp.tools.creatives import CREATIVE_TOOLS
from linkedin_ads_mcp.tools.organization_analytics import ORGANIZATION_ANALYTICS_TOOLS
from linkedin_ads_mcp.tools.posts import POST_TOOLS
from linkedin_ads_mcp.tools.registry import ToolDefinition, register_tools
from linkedin_ads_mcp.tools.targeting import TARGETING_TOOLS

ADS_TOOLS = [
    *ACCOUNT_TOOLS,
    *CAMPAIGN_TOOLS,
    *CAMPAIGN_GROUP_TOOLS,
    *CREATIVE_TOOLS,
    *ANALYTICS_TOOLS,
    *TARGETING_TOOLS,
]

COMMUNITY_TOOLS = [
    *POST_TOOLS,
    *ORGANIZATION_ANALYTICS_TOOLS,
]

ALL_TOOLS = [*ADS_TOOLS, *COMMUNITY_TOOLS]


def register_all_tools(mcp: FastMCP, ads_client: LinkedInClient, community_client: LinkedInClient) -> None:
    """Register every tool, each bound to the client for its API product."""
    register_tools(mcp, ADS_TOOLS, ads_client)
    register_tools(mcp, COMMUNITY_TOOLS, community_client)


__all__ = [
    "ADS_TOOLS",
    "ALL_TOOLS",
    "COMMUNITY_TOOLS",
    "ToolDefinition",
    "register_all_tools",
]
