"""Targeting tools for linkedin-ads-mcp."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from linkedin_ads_mcp.core.client import LinkedInClient
from linkedin_ads_mcp.tools.common import AccountId, elements
from linkedin_ads_mcp.tools.registry import ToolDefinition, parse_input, to_json

# Friendly facet names -> LinkedIn facet URNs
FACET_MAPPING: Dict[str, str] = {
    "locations": "urn:li:adTargetingFacet:locations",
    "industries": "urn:li:adTargetingFacet:industries",
    "seniorities": "urn:li:adTargetingFacet:seniorities",
    "jobFunctions": "urn:li:adTargetingFacet:jobFunctions",
    "titles": "urn:li:adTargetingFacet:titles",
    "skills": "urn:li:adTargetingFacet:skills",
    "companies": "urn:li:adTargetingFacet:employers",
    "schools": "urn:li:adTargetingFacet:schools",
}

MINIMUM_AUDIENCE_SIZE = 300

FacetName = Literal["locations", "industries", "seniorities", "jobFunctions", "titles", "skills", "companies", "schools"]


class ListTargetingFacetsInput(BaseModel):
    """No parameters."""


class SearchTargetingEntitiesInput(BaseModel):
    facet: FacetName = Field(..., description="Targeting facet type")
    query: Optional[str] = Field(None, description="Search term")
    limit: int = Field(20, ge=1, le=100, description="Max results")


class EstimateAudienceInput(BaseModel):
    account_id: AccountId
    included_locations: List[str] = Field(..., min_length=1, description="Location URNs to include")
    included_industries: Optional[List[str]] = Field(None, description="Industry URNs")
    included_seniorities: Optional[List[str]] = Field(None, description="Seniority URNs")
    included_job_functions: Optional[List[str]] = Field(None, description="Job function URNs")
    excluded_seniorities: Optional[List[str]] = Field(None, description="Seniorities to exclude")


async def list_targeting_facets(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """List available targeting facets (dimensions)."""
    parse_input(ListTargetingFacetsInput, params)

    response = await client.get_all("/adTargetingFacets")
    facets = [
        {
            "name": facet.get("name"),
            "urn": facet.get("urn"),
            "availableFinders": facet.get("availableEntityFinders"),
        }
        for facet in elements(response)
    ]

    return to_json({"facets": facets, "count": len(facets)})


async def search_targeting_entities(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Search for targeting entities within a facet."""
    args = parse_input(SearchTargetingEntitiesInput, params)

    query_params: Dict[str, Any] = {
        "facet": FACET_MAPPING[args.facet],
        "queryVersion": "QUERY_USES_URNS",
        "count": args.limit,
    }
    if args.query is not None:
        query_params["query"] = args.query

    response = await client.finder("/adTargetingEntities", "adTargetingFacet", query_params)
    entities = [
        {"urn": entity.get("urn"), "name": entity.get("name"), "facetUrn": entity.get("facetUrn")}
        for entity in elements(response)
    ]

    return to_json({"entities": entities, "facet": args.facet, "count": len(entities)})


async def estimate_audience(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Estimate audience size for the given targeting criteria."""
    args = parse_input(EstimateAudienceInput, params)

    query_params: Dict[str, Any] = {
        "target.includedTargetingFacets.locations": args.included_locations,
    }
    optional_facets = (
        ("target.includedTargetingFacets.industries", args.included_industries),
        ("target.includedTargetingFacets.seniorities", args.included_seniorities),
        ("target.includedTargetingFacets.jobFunctions", args.included_job_functions),
        ("target.excludingTargetingFacets.seniorities", args.excluded_seniorities),
    )
    for key, values in optional_facets:
        if values:
            query_params[key] = values

    response = await client.finder("/audienceCounts", "targetingCriteria", query_params)
    rows = elements(response)
    counts = rows[0] if rows else {"total": 0, "active": 0}
    total = counts.get("total", 0)

    result: Dict[str, Any] = {
        "audienceSize": {
            "total": total,
            "active": counts.get("active", 0),
            "meetsMinimum": total >= MINIMUM_AUDIENCE_SIZE,
        }
    }
    if total < MINIMUM_AUDIENCE_SIZE:
        result["note"] = "LinkedIn requires a minimum audience of 300 members for campaigns"

    return to_json(result)


TARGETING_TOOLS = [
    ToolDefinition(
        name="list_targeting_facets",
        description="List available LinkedIn targeting dimensions (locations, industries, seniorities, etc.)",
        input_model=ListTargetingFacetsInput,
        handler=list_targeting_facets,
    ),
    ToolDefinition(
        name="search_targeting_entities",
        description="Search for specific targeting values within a facet (e.g., search for locations, job titles)",
        input_model=SearchTargetingEntitiesInput,
        handler=search_targeting_entities,
    ),
    ToolDefinition(
        name="estimate_audience",
        description="Estimate the audience size for given targeting criteria",
        input_model=EstimateAudienceInput,
        handler=estimate_audience,
    ),
]
