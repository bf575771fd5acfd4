"""Campaign group tools for linkedin-ads-mcp."""

from __future__ import annotations

from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from linkedin_ads_mcp.core.client import LinkedInClient
from linkedin_ads_mcp.core.formatters import (
    build_money_amount,
    build_urn,
    date_to_epoch_ms,
    format_campaign_group,
)
from linkedin_ads_mcp.tools.common import AccountId, OptionalDate, elements
from linkedin_ads_mcp.tools.registry import ToolDefinition, parse_input, to_json


def _groups_path(account_id: str) -> str:
    return f"/adAccounts/{account_id}/adCampaignGroups"


class ListCampaignGroupsInput(BaseModel):
    account_id: AccountId


class CreateCampaignGroupInput(BaseModel):
    account_id: AccountId
    name: str = Field(..., min_length=1, max_length=255, description="Campaign group name")
    total_budget: Optional[float] = Field(None, gt=0, description="Total budget cap")
    start_date: OptionalDate = Field(None, description="Start date in YYYY-MM-DD format")
    end_date: OptionalDate = Field(None, description="End date in YYYY-MM-DD format")
    status: Literal["ACTIVE", "PAUSED"] = Field("ACTIVE", description="Initial status")


class UpdateCampaignGroupInput(BaseModel):
    account_id: AccountId
    group_id: str = Field(..., description="The campaign group ID")
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="New name")
    status: Optional[Literal["ACTIVE", "PAUSED", "ARCHIVED"]] = Field(None, description="New status")
    total_budget: Optional[float] = Field(None, gt=0, description="New budget cap")
    end_date: OptionalDate = Field(None, description="New end date in YYYY-MM-DD format")


async def list_campaign_groups(params: Mapping[str, Any], client: LinkedInClient) -> str:
    args = parse_input(ListCampaignGroupsInput, params)

    response = await client.finder(_groups_path(args.account_id), "search", {})
    groups = [format_campaign_group(raw) for raw in elements(response)]

    return to_json({"campaignGroups": groups, "count": len(groups)})


async def create_campaign_group(params: Mapping[str, Any], client: LinkedInClient) -> str:
    args = parse_input(CreateCampaignGroupInput, params)

    entity: Dict[str, Any] = {
        "account": build_urn("sponsoredAccount", args.account_id),
        "name": args.name,
        "status": args.status,
    }

    if args.total_budget is not None:
        entity["totalBudget"] = build_money_amount(args.total_budget)

    run_schedule: Dict[str, int] = {}
    if args.start_date:
        run_schedule["start"] = date_to_epoch_ms(args.start_date)
    if args.end_date:
        run_schedule["end"] = date_to_epoch_ms(args.end_date)
    if run_schedule:
        entity["runSchedule"] = run_schedule

    response = await client.create(_groups_path(args.account_id), entity)

    return to_json(
        {"message": "Campaign group created successfully", "campaignGroup": format_campaign_group(response)}
    )


async def update_campaign_group(params: Mapping[str, Any], client: LinkedInClient) -> str:
    args = parse_input(UpdateCampaignGroupInput, params)

    patch_set: Dict[str, Any] = {}
    if args.name is not None:
        patch_set["name"] = args.name
    if args.status is not None:
        patch_set["status"] = args.status
    if args.total_budget is not None:
        patch_set["totalBudget"] = build_money_amount(args.total_budget)
    if args.end_date is not None:
        patch_set["runSchedule.end"] = date_to_epoch_ms(args.end_date)

    path = _groups_path(args.account_id)
    await client.partial_update(path, args.group_id, patch_set)
    updated = await client.get(path, args.group_id)

    return to_json(
        {"message": "Campaign group updated successfully", "campaignGroup": format_campaign_group(updated)}
    )


CAMPAIGN_GROUP_TOOLS = [
    ToolDefinition(
        name="list_campaign_groups",
        description="List campaign groups for a LinkedIn ad account",
        input_model=ListCampaignGroupsInput,
        handler=list_campaign_groups,
    ),
    ToolDefinition(
        name="create_campaign_group",
        description="Create a new LinkedIn campaign group for organizing campaigns",
        input_model=CreateCampaignGroupInput,
        handler=create_campaign_group,
    ),
    ToolDefinition(
        name="update_campaign_group",
        description="Update an existing LinkedIn campaign group",
        input_model=UpdateCampaignGroupInput,
        handler=update_campaign_group,
    ),
]
