"""
Organization analytics tools for linkedin-ads-mcp.

Page-level statistics from the Community Management API. These tools need
a token from the Community Management app (``rw_organization_admin``),
which is separate from the Marketing app used by the ads tools.

Response bodies are validated against pydantic models before use so a
shape change on LinkedIn's side surfaces as a ``ValidationError`` naming
the response instead of a wrong number.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Mapping, Optional, Type, TypeVar

import pydantic
from pydantic import BaseModel, Field

from linkedin_ads_mcp.core.client import LinkedInClient
from linkedin_ads_mcp.core.errors import ValidationError
from linkedin_ads_mcp.core.formatters import (
    build_urn,
    date_to_epoch_ms,
    epoch_ms_to_date,
    extract_id_from_urn,
    now_epoch_ms,
)
from linkedin_ads_mcp.tools.common import OptionalDate, OrganizationId, elements
from linkedin_ads_mcp.tools.registry import ToolDefinition, parse_input, to_json

ResponseT = TypeVar("ResponseT", bound=BaseModel)

TimeGranularity = Literal["DAY", "MONTH"]


# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------


class OrganizationStatisticsInput(BaseModel):
    organization_id: OrganizationId
    start_date: OptionalDate = Field(
        None, description="Start date in YYYY-MM-DD format (optional, defaults to lifetime)"
    )
    end_date: OptionalDate = Field(None, description="End date in YYYY-MM-DD format (optional)")
    granularity: TimeGranularity = Field("DAY", description="Time granularity: DAY or MONTH")


class GetOrganizationInput(BaseModel):
    organization_id: OrganizationId


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class TotalShareStatistics(BaseModel):
    impressionCount: Optional[int] = None
    uniqueImpressionsCount: Optional[int] = None
    clickCount: Optional[int] = None
    likeCount: Optional[int] = None
    commentCount: Optional[int] = None
    shareCount: Optional[int] = None
    engagement: Optional[float] = None


class ShareStatisticsElement(BaseModel):
    totalShareStatistics: Optional[TotalShareStatistics] = None


class FollowerCounts(BaseModel):
    organicFollowerCount: Optional[int] = None
    paidFollowerCount: Optional[int] = None


class DemographicItem(BaseModel):
    function: Optional[str] = None
    seniority: Optional[str] = None
    industry: Optional[str] = None
    geo: Optional[str] = None
    staffCountRange: Optional[str] = None
    followerCounts: Optional[FollowerCounts] = None

    @property
    def key(self) -> str:
        for value in (self.function, self.seniority, self.industry, self.geo, self.staffCountRange):
            if value:
                return value
        return "unknown"


class FollowerStatisticsElement(BaseModel):
    followerCounts: Optional[FollowerCounts] = None
    followerCountsByFunction: Optional[List[DemographicItem]] = None
    followerCountsBySeniority: Optional[List[DemographicItem]] = None
    followerCountsByIndustry: Optional[List[DemographicItem]] = None
    followerCountsByGeoCountry: Optional[List[DemographicItem]] = None
    followerCountsByStaffCountRange: Optional[List[DemographicItem]] = None


class LogoV2(BaseModel):
    original: Optional[str] = None


class OrganizationResponse(BaseModel):
    localizedName: Optional[str] = None
    name: Optional[str] = None
    vanityName: Optional[str] = None
    localizedDescription: Optional[str] = None
    localizedWebsite: Optional[str] = None
    industries: Optional[List[str]] = None
    localizedSpecialties: Optional[List[str]] = None
    staffCountRange: Optional[str] = None
    logoV2: Optional[LogoV2] = None


# Demographic breakdowns: response field -> output key
DEMOGRAPHIC_FIELDS = (
    ("followerCountsByFunction", "byFunction"),
    ("followerCountsBySeniority", "bySeniority"),
    ("followerCountsByIndustry", "byIndustry"),
    ("followerCountsByGeoCountry", "byLocation"),
    ("followerCountsByStaffCountRange", "byCompanySize"),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def validate_response(model: Type[ResponseT], raw: Any, *, field: str, label: str) -> ResponseT:
    """Validate an API response body, raising ``ValidationError`` on mismatch."""
    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as e:
        raise ValidationError(
            f"Invalid {label}: {e}",
            field=field,
            details=e.errors(include_url=False),
        ) from e


def aggregate_demographics(items: List[DemographicItem]) -> Dict[str, int]:
    """Sum organic and paid followers per demographic key.

    URN keys are shortened to their trailing id and repeated keys are
    added together rather than overwritten.
    """
    result: Dict[str, int] = {}
    for item in items:
        counts = item.followerCounts or FollowerCounts()
        count = (counts.organicFollowerCount or 0) + (counts.paidFollowerCount or 0)
        key = item.key
        if "urn:" in key:
            key = extract_id_from_urn(key)
        result[key] = result.get(key, 0) + count
    return result


def _statistics_query(args: OrganizationStatisticsInput) -> Dict[str, Any]:
    query_params: Dict[str, Any] = {
        "organizationalEntity": build_urn("organization", args.organization_id),
    }
    if args.start_date:
        end_ms = date_to_epoch_ms(args.end_date) if args.end_date else now_epoch_ms()
        query_params["timeIntervals"] = {
            "timeRange": {"start": date_to_epoch_ms(args.start_date), "end": end_ms},
            "timeGranularityType": args.granularity,
        }
    return query_params


def _time_range(args: OrganizationStatisticsInput) -> Optional[Dict[str, str]]:
    if not args.start_date:
        return None
    end = args.end_date.isoformat() if args.end_date else epoch_ms_to_date(now_epoch_ms())
    return {"start": args.start_date.isoformat(), "end": end}


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def get_share_statistics(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Engagement totals for an organization's posts."""
    args = parse_input(OrganizationStatisticsInput, params)

    response = await client.finder(
        "/organizationalEntityShareStatistics", "organizationalEntity", _statistics_query(args)
    )
    rows = elements(response)

    validated = ShareStatisticsElement()
    if rows:
        validated = validate_response(
            ShareStatisticsElement,
            rows[0],
            field="shareStatisticsResponse",
            label=f"share statistics response for organization {args.organization_id}",
        )
    totals = validated.totalShareStatistics or TotalShareStatistics()

    result: Dict[str, Any] = {
        "organizationId": args.organization_id,
        "dataAvailable": bool(rows),
        "totalStats": {
            "impressions": totals.impressionCount or 0,
            "uniqueImpressions": totals.uniqueImpressionsCount or 0,
            "clicks": totals.clickCount or 0,
            "likes": totals.likeCount or 0,
            "comments": totals.commentCount or 0,
            "shares": totals.shareCount or 0,
            "engagement": totals.engagement or 0,
        },
    }

    time_range = _time_range(args)
    if time_range:
        result["timeRange"] = time_range

    return to_json(result)


async def get_follower_statistics(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Follower totals and demographic breakdowns for an organization."""
    args = parse_input(OrganizationStatisticsInput, params)

    response = await client.finder(
        "/organizationalEntityFollowerStatistics", "organizationalEntity", _statistics_query(args)
    )
    rows = elements(response)

    validated = FollowerStatisticsElement()
    if rows:
        validated = validate_response(
            FollowerStatisticsElement,
            rows[0],
            field="followerStatisticsResponse",
            label=f"follower statistics response for organization {args.organization_id}",
        )

    counts = validated.followerCounts or FollowerCounts()
    organic = counts.organicFollowerCount or 0
    paid = counts.paidFollowerCount or 0

    result: Dict[str, Any] = {
        "organizationId": args.organization_id,
        "dataAvailable": bool(rows),
        "totalFollowers": organic + paid,
        "organicFollowers": organic,
        "paidFollowers": paid,
    }

    demographics = {
        output_key: aggregate_demographics(getattr(validated, response_field))
        for response_field, output_key in DEMOGRAPHIC_FIELDS
        if getattr(validated, response_field) is not None
    }
    if demographics:
        result["demographics"] = demographics

    time_range = _time_range(args)
    if time_range:
        result["timeRange"] = time_range

    return to_json(result)


async def get_organization(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Organization page details."""
    args = parse_input(GetOrganizationInput, params)

    response = await client.get("/organizations", args.organization_id)
    org = validate_response(
        OrganizationResponse,
        response,
        field="organizationResponse",
        label=f"organization response for {args.organization_id}",
    )

    summary = {
        "id": args.organization_id,
        "name": org.localizedName or org.name or "",
        "vanityName": org.vanityName,
        "description": org.localizedDescription,
        "websiteUrl": org.localizedWebsite,
        "industries": [extract_id_from_urn(urn) for urn in org.industries] if org.industries is not None else None,
        "specialties": org.localizedSpecialties,
        "staffCount": org.staffCountRange,
        "logoUrl": org.logoV2.original if org.logoV2 else None,
    }

    return to_json({k: v for k, v in summary.items() if v is not None})


ORGANIZATION_ANALYTICS_TOOLS = [
    ToolDefinition(
        name="get_share_statistics",
        description=(
            "Get engagement statistics for an organization's posts: impressions, clicks, likes, "
            "comments, shares. Requires Community Management API access (separate app with "
            "rw_organization_admin scope)."
        ),
        input_model=OrganizationStatisticsInput,
        handler=get_share_statistics,
    ),
    ToolDefinition(
        name="get_follower_statistics",
        description=(
            "Get follower statistics for an organization: total followers, organic vs paid, and "
            "demographic breakdowns (job function, seniority, industry, location, company size). "
            "Requires Community Management API access."
        ),
        input_model=OrganizationStatisticsInput,
        handler=get_follower_statistics,
    ),
    ToolDefinition(
        name="get_organization",
        description=(
            "Get details about a LinkedIn organization/company page: name, vanity name, description, "
            "website, industries, specialties, staff count range, logo URL. Requires Community "
            "Management API access."
        ),
        input_model=GetOrganizationInput,
        handler=get_organization,
    ),
]
