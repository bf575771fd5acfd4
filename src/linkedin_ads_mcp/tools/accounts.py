"""
Ad account tools for linkedin-ads-mcp.

Read-only access to the ad accounts the access token can see.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel

from linkedin_ads_mcp.core.client import LinkedInClient
from linkedin_ads_mcp.core.formatters import format_ad_account
from linkedin_ads_mcp.tools.common import AccountId, elements
from linkedin_ads_mcp.tools.registry import ToolDefinition, parse_input, to_json


class ListAdAccountsInput(BaseModel):
    """No parameters."""


class GetAdAccountInput(BaseModel):
    account_id: AccountId


async def list_ad_accounts(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """List all ad accounts accessible to the authenticated user."""
    parse_input(ListAdAccountsInput, params)

    response = await client.finder("/adAccounts", "search", {})
    accounts = [format_ad_account(raw) for raw in elements(response)]

    return to_json({"accounts": accounts, "count": len(accounts)})


async def get_ad_account(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Get detailed information about a specific ad account."""
    args = parse_input(GetAdAccountInput, params)

    response = await client.get("/adAccounts", args.account_id)

    return to_json(format_ad_account(response))


ACCOUNT_TOOLS = [
    ToolDefinition(
        name="list_ad_accounts",
        description="List all LinkedIn ad accounts accessible to the authenticated user",
        input_model=ListAdAccountsInput,
        handler=list_ad_accounts,
    ),
    ToolDefinition(
        name="get_ad_account",
        description="Get detailed information about a specific LinkedIn ad account",
        input_model=GetAdAccountInput,
        handler=get_ad_account,
    ),
]
