"""Tests for targeting tools."""

import pytest

from linkedin_ads_mcp.core.errors import ValidationError
from linkedin_ads_mcp.tools.targeting import (
    estimate_audience,
    list_targeting_facets,
    search_targeting_entities,
)


@pytest.mark.asyncio
async def test_list_targeting_facets(mock_client, run):
    mock_client.get_all.return_value = {
        "elements": [
            {
                "facetName": "locations",
                "name": "Locations",
                "urn": "urn:li:adTargetingFacet:locations",
                "availableEntityFinders": ["TYPEAHEAD"],
            }
        ]
    }

    result = await run(list_targeting_facets, mock_client)

    mock_client.get_all.assert_awaited_once_with("/adTargetingFacets")
    assert result == {
        "facets": [
            {"name": "Locations", "urn": "urn:li:adTargetingFacet:locations", "availableFinders": ["TYPEAHEAD"]}
        ],
        "count": 1,
    }


class TestSearchTargetingEntities:
    @pytest.mark.asyncio
    async def test_companies_maps_to_employers(self, mock_client, run):
        mock_client.finder.return_value = {
            "elements": [{"urn": "urn:li:organization:1", "name": "Acme", "facetUrn": "urn:li:adTargetingFacet:employers"}]
        }

        result = await run(search_targeting_entities, mock_client, facet="companies", query="acme", limit=5)

        mock_client.finder.assert_awaited_once_with(
            "/adTargetingEntities",
            "adTargetingFacet",
            {
                "facet": "urn:li:adTargetingFacet:employers",
                "queryVersion": "QUERY_USES_URNS",
                "count": 5,
                "query": "acme",
            },
        )
        assert result["facet"] == "companies"
        assert result["entities"][0]["name"] == "Acme"

    @pytest.mark.asyncio
    async def test_default_limit_without_query(self, mock_client, run):
        await run(search_targeting_entities, mock_client, facet="titles")

        query = mock_client.finder.await_args.args[2]
        assert query["count"] == 20
        assert "query" not in query

    @pytest.mark.asyncio
    async def test_unknown_facet(self, mock_client, run):
        with pytest.raises(ValidationError) as exc_info:
            await run(search_targeting_entities, mock_client, facet="hobbies")

        assert exc_info.value.field == "facet"

    @pytest.mark.asyncio
    async def test_limit_bounds(self, mock_client, run):
        with pytest.raises(ValidationError):
            await run(search_targeting_entities, mock_client, facet="titles", limit=500)


class TestEstimateAudience:
    @pytest.mark.asyncio
    async def test_large_audience(self, mock_client, run):
        mock_client.finder.return_value = {"elements": [{"total": 50000, "active": 12000}]}

        result = await run(
            estimate_audience,
            mock_client,
            account_id="123",
            included_locations=["urn:li:geo:103644278"],
            included_seniorities=["urn:li:seniority:6"],
            excluded_seniorities=["urn:li:seniority:1"],
        )

        mock_client.finder.assert_awaited_once_with(
            "/audienceCounts",
            "targetingCriteria",
            {
                "target.includedTargetingFacets.locations": ["urn:li:geo:103644278"],
                "target.includedTargetingFacets.seniorities": ["urn:li:seniority:6"],
                "target.excludingTargetingFacets.seniorities": ["urn:li:seniority:1"],
            },
        )
        assert result == {"audienceSize": {"total": 50000, "active": 12000, "meetsMinimum": True}}

    @pytest.mark.asyncio
    async def test_small_audience_adds_note(self, mock_client, run):
        mock_client.finder.return_value = {"elements": [{"total": 120, "active": 40}]}

        result = await run(estimate_audience, mock_client, account_id="123", included_locations=["urn:li:geo:1"])

        assert result["audienceSize"]["meetsMinimum"] is False
        assert "300" in result["note"]

    @pytest.mark.asyncio
    async def test_no_rows(self, mock_client, run):
        result = await run(estimate_audience, mock_client, account_id="123", included_locations=["urn:li:geo:1"])

        assert result["audienceSize"] == {"total": 0, "active": 0, "meetsMinimum": False}

    @pytest.mark.asyncio
    async def test_requires_a_location(self, mock_client, run):
        with pytest.raises(ValidationError) as exc_info:
            await run(estimate_audience, mock_client, account_id="123", included_locations=[])

        assert exc_info.value.field == "included_locations"
