"""
Analytics tools for linkedin-ads-mcp.

Reporting goes through the ``/adAnalytics`` ``analytics`` finder. Rows are
trimmed to the requested metrics and enriched with click-through rate and
average cost per click when the inputs for them are present.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from linkedin_ads_mcp.core.client import LinkedInClient
from linkedin_ads_mcp.core.formatters import build_urn, date_to_date_parts
from linkedin_ads_mcp.tools.common import AccountId, elements
from linkedin_ads_mcp.tools.registry import ToolDefinition, parse_input, to_json

DEFAULT_METRICS = [
    "impressions",
    "clicks",
    "costInLocalCurrency",
    "externalWebsiteConversions",
    "likes",
    "shares",
    "comments",
    "follows",
]

AnalyticsPivot = Literal[
    "ACCOUNT",
    "CAMPAIGN",
    "CAMPAIGN_GROUP",
    "CREATIVE",
    "COMPANY",
    "MEMBER_COMPANY",
    "MEMBER_COMPANY_SIZE",
    "MEMBER_COUNTRY_V2",
    "MEMBER_REGION_V2",
    "MEMBER_INDUSTRY",
    "MEMBER_JOB_FUNCTION",
    "MEMBER_JOB_TITLE",
    "MEMBER_SENIORITY",
]


class GetAnalyticsInput(BaseModel):
    account_id: AccountId
    start_date: date = Field(..., description="Start date in YYYY-MM-DD format")
    end_date: date = Field(..., description="End date in YYYY-MM-DD format")
    pivot: AnalyticsPivot = Field("CAMPAIGN", description="Grouping dimension")
    campaign_ids: Optional[List[str]] = Field(None, description="Filter to specific campaign IDs")
    metrics: Optional[List[str]] = Field(None, description="Specific metrics to return")


class GetCampaignPerformanceInput(BaseModel):
    account_id: AccountId
    campaign_id: str = Field(..., description="The campaign ID")
    start_date: date = Field(..., description="Start date in YYYY-MM-DD format")
    end_date: date = Field(..., description="End date in YYYY-MM-DD format")


def _cost_amount(cost: Any) -> Optional[float]:
    raw = cost.get("amount") if isinstance(cost, Mapping) else cost
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def summarize_row(element: Mapping[str, Any], metrics: List[str]) -> Dict[str, Any]:
    """Keep the requested metrics of one analytics row and add derived ones."""
    row: Dict[str, Any] = {}

    if "pivotValue" in element:
        row["pivotValue"] = element["pivotValue"]

    for metric in metrics:
        if metric in element:
            row[metric] = element[metric]

    impressions = element.get("impressions")
    clicks = element.get("clicks")

    if impressions is not None and clicks is not None and impressions > 0:
        row["ctr"] = f"{clicks / impressions * 100:.2f}%"

    cost = element.get("costInLocalCurrency")
    if cost is not None and clicks is not None and clicks > 0:
        amount = _cost_amount(cost)
        if amount is not None:
            row["averageCpc"] = {
                "amount": f"{amount / clicks:.2f}",
                "currencyCode": cost.get("currencyCode") if isinstance(cost, Mapping) else None,
            }

    return row


async def get_analytics(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Get performance analytics with flexible pivoting."""
    args = parse_input(GetAnalyticsInput, params)

    query_params: Dict[str, Any] = {
        "dateRange": {
            "start": date_to_date_parts(args.start_date),
            "end": date_to_date_parts(args.end_date),
        },
        "pivot": args.pivot,
        "timeGranularity": "ALL",
        "accounts": [build_urn("sponsoredAccount", args.account_id)],
    }

    if args.campaign_ids:
        query_params["campaigns"] = [build_urn("sponsoredCampaign", cid) for cid in args.campaign_ids]

    metrics = args.metrics if args.metrics is not None else DEFAULT_METRICS
    query_params["fields"] = ",".join(metrics)

    response = await client.finder("/adAnalytics", "analytics", query_params)
    analytics = [summarize_row(element, metrics) for element in elements(response)]

    return to_json(
        {
            "analytics": analytics,
            "dateRange": {"start": args.start_date.isoformat(), "end": args.end_date.isoformat()},
            "pivot": args.pivot,
            "count": len(analytics),
        }
    )


async def get_campaign_performance(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Performance summary for a single campaign."""
    args = parse_input(GetCampaignPerformanceInput, params)

    return await get_analytics(
        {
            "account_id": args.account_id,
            "start_date": args.start_date,
            "end_date": args.end_date,
            "pivot": "CAMPAIGN",
            "campaign_ids": [args.campaign_id],
        },
        client,
    )


ANALYTICS_TOOLS = [
    ToolDefinition(
        name="get_analytics",
        description=(
            "Get LinkedIn Ads performance analytics with flexible pivoting "
            "(by campaign, creative, account, etc.)"
        ),
        input_model=GetAnalyticsInput,
        handler=get_analytics,
    ),
    ToolDefinition(
        name="get_campaign_performance",
        description="Get performance summary for a specific LinkedIn campaign",
        input_model=GetCampaignPerformanceInput,
        handler=get_campaign_performance,
    ),
]
