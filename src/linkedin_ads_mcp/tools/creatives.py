"""
Creative tools for linkedin-ads-mcp.

Creatives live under ``/adAccounts/{account}/creatives``. The variables
block of a creative depends on its type: text ads carry a title and text,
every other type is sponsored content carrying the activity text and an
optional media reference.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from linkedin_ads_mcp.core.client import LinkedInClient
from linkedin_ads_mcp.core.errors import ValidationError
from linkedin_ads_mcp.core.formatters import (
    SPONSORED_UPDATE_VARIABLES,
    TEXT_AD_VARIABLES,
    build_urn,
    format_creative,
)
from linkedin_ads_mcp.tools.common import AccountId, Url, elements
from linkedin_ads_mcp.tools.registry import ToolDefinition, parse_input, to_json

CreativeType = Literal["TEXT_AD", "SPONSORED_STATUS_UPDATE", "SPONSORED_VIDEO", "SPONSORED_MESSAGE", "CAROUSEL"]


def _creatives_path(account_id: str) -> str:
    return f"/adAccounts/{account_id}/creatives"


class ListCreativesInput(BaseModel):
    account_id: AccountId
    campaign_id: Optional[str] = Field(None, description="Filter by campaign ID")


class GetCreativeInput(BaseModel):
    account_id: AccountId
    creative_id: str = Field(..., description="The creative ID")


class CreateCreativeInput(BaseModel):
    account_id: AccountId
    campaign_id: str = Field(..., description="Parent campaign ID")
    type: CreativeType = Field(..., description="Creative type")
    title: Optional[str] = Field(None, max_length=100, description="Ad title (required for TEXT_AD)")
    text: str = Field(..., max_length=600, description="Ad copy/description")
    destination_url: Url = Field(..., description="Click-through URL")
    image_url: Optional[Url] = Field(None, description="Image URL (for sponsored content)")
    status: Literal["ACTIVE", "PAUSED"] = Field("ACTIVE", description="Initial status")


class UpdateCreativeInput(BaseModel):
    account_id: AccountId
    creative_id: str = Field(..., description="The creative ID")
    status: Optional[Literal["ACTIVE", "PAUSED"]] = Field(None, description="New status")
    destination_url: Optional[Url] = Field(None, description="Updated click-through URL")


class DeleteCreativeInput(BaseModel):
    account_id: AccountId
    creative_id: str = Field(..., description="The creative ID")


def build_creative_variables(args: CreateCreativeInput) -> Dict[str, Any]:
    """Build the type-specific ``variables`` block of a new creative."""
    if args.type == "TEXT_AD":
        if args.title is None or not args.title.strip():
            raise ValidationError("Title is required for TEXT_AD creatives", field="title")
        return {
            "clickUri": args.destination_url,
            "data": {TEXT_AD_VARIABLES: {"title": args.title, "text": args.text}},
        }

    sponsored: Dict[str, Any] = {"activity": args.text}
    if args.image_url is not None:
        sponsored["media"] = args.image_url
    return {"clickUri": args.destination_url, "data": {SPONSORED_UPDATE_VARIABLES: sponsored}}


async def list_creatives(params: Mapping[str, Any], client: LinkedInClient) -> str:
    args = parse_input(ListCreativesInput, params)

    query_params: Dict[str, Any] = {}
    if args.campaign_id is not None and args.campaign_id.strip():
        query_params["search.campaign.values[0]"] = build_urn("sponsoredCampaign", args.campaign_id)

    response = await client.finder(_creatives_path(args.account_id), "search", query_params)
    creatives = [format_creative(raw) for raw in elements(response)]

    return to_json({"creatives": creatives, "count": len(creatives)})


async def get_creative(params: Mapping[str, Any], client: LinkedInClient) -> str:
    args = parse_input(GetCreativeInput, params)

    response = await client.get(_creatives_path(args.account_id), args.creative_id)

    return to_json(format_creative(response))


async def create_creative(params: Mapping[str, Any], client: LinkedInClient) -> str:
    args = parse_input(CreateCreativeInput, params)

    entity = {
        "campaign": build_urn("sponsoredCampaign", args.campaign_id),
        "status": args.status,
        "type": args.type,
        "variables": build_creative_variables(args),
    }

    response = await client.create(_creatives_path(args.account_id), entity)

    return to_json({"message": "Creative created successfully", "creative": format_creative(response)})


async def update_creative(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Update a creative; LinkedIn only allows status and click-through changes."""
    args = parse_input(UpdateCreativeInput, params)

    patch_set: Dict[str, Any] = {}
    if args.status is not None:
        patch_set["status"] = args.status
    if args.destination_url is not None:
        patch_set["variables.clickUri"] = args.destination_url

    path = _creatives_path(args.account_id)
    await client.partial_update(path, args.creative_id, patch_set)
    updated = await client.get(path, args.creative_id)

    return to_json({"message": "Creative updated successfully", "creative": format_creative(updated)})


async def delete_creative(params: Mapping[str, Any], client: LinkedInClient) -> str:
    args = parse_input(DeleteCreativeInput, params)

    await client.delete(_creatives_path(args.account_id), args.creative_id)

    return to_json({"message": "Creative deleted successfully", "creativeId": args.creative_id})


CREATIVE_TOOLS = [
    ToolDefinition(
        name="list_creatives",
        description="List ad creatives for a LinkedIn ad account, optionally filtered by campaign",
        input_model=ListCreativesInput,
        handler=list_creatives,
    ),
    ToolDefinition(
        name="get_creative",
        description="Get detailed information about a specific LinkedIn ad creative",
        input_model=GetCreativeInput,
        handler=get_creative,
    ),
    ToolDefinition(
        name="create_creative",
        description="Create a new LinkedIn ad creative (text ad, sponsored content, etc.)",
        input_model=CreateCreativeInput,
        handler=create_creative,
    ),
    ToolDefinition(
        name="update_creative",
        description="Update an existing LinkedIn ad creative (limited to status and destination URL)",
        input_model=UpdateCreativeInput,
        handler=update_creative,
    ),
    ToolDefinition(
        name="delete_creative",
        description="Delete a LinkedIn ad creative",
        input_model=DeleteCreativeInput,
        handler=delete_creative,
    ),
]
