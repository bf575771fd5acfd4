"""
Campaign tools for linkedin-ads-mcp.

Campaigns live under ``/adAccounts/{account}/adCampaigns``. LinkedIn does
not support hard deletes, so ``delete_campaign`` archives instead.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from linkedin_ads_mcp.core.client import LinkedInClient
from linkedin_ads_mcp.core.formatters import (
    build_money_amount,
    build_urn,
    date_to_epoch_ms,
    format_campaign,
    now_epoch_ms,
)
from linkedin_ads_mcp.tools.common import AccountId, OptionalDate, elements
from linkedin_ads_mcp.tools.registry import ToolDefinition, parse_input, to_json

logger = logging.getLogger(__name__)

CampaignStatus = Literal["ACTIVE", "PAUSED", "ARCHIVED", "CANCELED", "DRAFT", "PENDING_DELETION"]
CostType = Literal["CPC", "CPM", "CPV"]
ObjectiveType = Literal[
    "BRAND_AWARENESS",
    "WEBSITE_VISITS",
    "ENGAGEMENT",
    "VIDEO_VIEWS",
    "LEAD_GENERATION",
    "WEBSITE_CONVERSIONS",
    "JOB_APPLICANTS",
    "TALENT_LEADS",
]

DEFAULT_CAMPAIGN_TYPE = "SPONSORED_UPDATES"


def _campaigns_path(account_id: str) -> str:
    return f"/adAccounts/{account_id}/adCampaigns"


class ListCampaignsInput(BaseModel):
    account_id: AccountId
    status: Optional[CampaignStatus] = Field(None, description="Filter by campaign status")
    campaign_group_id: Optional[str] = Field(None, description="Filter by campaign group ID")


class GetCampaignInput(BaseModel):
    account_id: AccountId
    campaign_id: str = Field(..., description="The campaign ID")


class CreateCampaignInput(BaseModel):
    account_id: AccountId
    name: str = Field(..., min_length=1, max_length=255, description="Campaign name")
    objective_type: ObjectiveType = Field(..., description="Campaign objective")
    campaign_group_id: Optional[str] = Field(None, description="Parent campaign group ID")
    daily_budget: float = Field(..., gt=0, description="Daily budget in account currency")
    cost_type: CostType = Field(..., description="Billing type: CPC, CPM, or CPV")
    start_date: OptionalDate = Field(None, description="Start date in YYYY-MM-DD format (defaults to now)")
    end_date: OptionalDate = Field(None, description="End date in YYYY-MM-DD format (optional)")
    status: Literal["ACTIVE", "PAUSED", "DRAFT"] = Field("DRAFT", description="Initial status")


class UpdateCampaignInput(BaseModel):
    account_id: AccountId
    campaign_id: str = Field(..., description="The campaign ID")
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="New campaign name")
    status: Optional[Literal["ACTIVE", "PAUSED", "ARCHIVED"]] = Field(None, description="New status")
    daily_budget: Optional[float] = Field(None, gt=0, description="New daily budget")
    end_date: OptionalDate = Field(None, description="New end date in YYYY-MM-DD format")


class DeleteCampaignInput(BaseModel):
    account_id: AccountId
    campaign_id: str = Field(..., description="The campaign ID")


async def list_campaigns(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """List campaigns for an ad account with optional filters."""
    args = parse_input(ListCampaignsInput, params)

    query_params: Dict[str, Any] = {}
    if args.status:
        query_params["search.status.values[0]"] = args.status
    if args.campaign_group_id:
        query_params["search.campaignGroup.values[0]"] = build_urn("sponsoredCampaignGroup", args.campaign_group_id)

    response = await client.finder(_campaigns_path(args.account_id), "search", query_params)
    campaigns = [format_campaign(raw) for raw in elements(response)]

    return to_json({"campaigns": campaigns, "count": len(campaigns)})


async def get_campaign(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Get detailed information about a specific campaign."""
    args = parse_input(GetCampaignInput, params)

    response = await client.get(_campaigns_path(args.account_id), args.campaign_id)

    return to_json(format_campaign(response))


async def create_campaign(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Create a new ad campaign."""
    args = parse_input(CreateCampaignInput, params)

    entity: Dict[str, Any] = {
        "account": build_urn("sponsoredAccount", args.account_id),
        "name": args.name,
        "objectiveType": args.objective_type,
        "costType": args.cost_type,
        "dailyBudget": build_money_amount(args.daily_budget),
        "status": args.status,
        "type": DEFAULT_CAMPAIGN_TYPE,
    }

    if args.campaign_group_id:
        entity["campaignGroup"] = build_urn("sponsoredCampaignGroup", args.campaign_group_id)

    if args.start_date:
        run_schedule: Dict[str, int] = {"start": date_to_epoch_ms(args.start_date)}
        if args.end_date:
            run_schedule["end"] = date_to_epoch_ms(args.end_date)
        entity["runSchedule"] = run_schedule
    elif args.end_date:
        # A schedule needs a start; begin immediately
        entity["runSchedule"] = {"start": now_epoch_ms(), "end": date_to_epoch_ms(args.end_date)}

    response = await client.create(_campaigns_path(args.account_id), entity)
    logger.info("Created campaign %s in account %s", response.get("id"), args.account_id)

    return to_json({"message": "Campaign created successfully", "campaign": format_campaign(response)})


async def update_campaign(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Update an existing campaign and return its refreshed state."""
    args = parse_input(UpdateCampaignInput, params)

    patch_set: Dict[str, Any] = {}
    if args.name is not None:
        patch_set["name"] = args.name
    if args.status is not None:
        patch_set["status"] = args.status
    if args.daily_budget is not None:
        patch_set["dailyBudget"] = build_money_amount(args.daily_budget)
    if args.end_date is not None:
        patch_set["runSchedule.end"] = date_to_epoch_ms(args.end_date)

    path = _campaigns_path(args.account_id)
    await client.partial_update(path, args.campaign_id, patch_set)
    updated = await client.get(path, args.campaign_id)

    return to_json({"message": "Campaign updated successfully", "campaign": format_campaign(updated)})


async def delete_campaign(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Archive a campaign (campaigns cannot be hard deleted)."""
    args = parse_input(DeleteCampaignInput, params)

    await client.partial_update(_campaigns_path(args.account_id), args.campaign_id, {"status": "ARCHIVED"})

    return to_json({"message": "Campaign archived successfully", "campaignId": args.campaign_id})


CAMPAIGN_TOOLS = [
    ToolDefinition(
        name="list_campaigns",
        description="List campaigns for a LinkedIn ad account with optional filters",
        input_model=ListCampaignsInput,
        handler=list_campaigns,
    ),
    ToolDefinition(
        name="get_campaign",
        description="Get detailed information about a specific LinkedIn campaign",
        input_model=GetCampaignInput,
        handler=get_campaign,
    ),
    ToolDefinition(
        name="create_campaign",
        description="Create a new LinkedIn ad campaign",
        input_model=CreateCampaignInput,
        handler=create_campaign,
    ),
    ToolDefinition(
        name="update_campaign",
        description="Update an existing LinkedIn campaign (status, budget, name, etc.)",
        input_model=UpdateCampaignInput,
        handler=update_campaign,
    ),
    ToolDefinition(
        name="delete_campaign",
        description="Archive a LinkedIn campaign (campaigns cannot be hard deleted)",
        input_model=DeleteCampaignInput,
        handler=delete_campaign,
    ),
]
