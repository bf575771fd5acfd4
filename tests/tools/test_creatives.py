"""Tests for creative tools."""

import pytest

from linkedin_ads_mcp.core.errors import ValidationError
from linkedin_ads_mcp.core.formatters import SPONSORED_UPDATE_VARIABLES, TEXT_AD_VARIABLES
from linkedin_ads_mcp.tools.creatives import (
    create_creative,
    delete_creative,
    get_creative,
    list_creatives,
    update_creative,
)

PATH = "/adAccounts/123/creatives"
CREATIVE = {
    "id": "urn:li:sponsoredCreative:77",
    "campaign": "urn:li:sponsoredCampaign:9",
    "type": "TEXT_AD",
    "status": "ACTIVE",
    "variables": {"data": {TEXT_AD_VARIABLES: {"title": "Buy", "text": "Now"}}},
}


def create_params(**overrides):
    params = {
        "account_id": "123",
        "campaign_id": "9",
        "type": "TEXT_AD",
        "title": "Buy",
        "text": "Now",
        "destination_url": "https://example.com/landing",
    }
    params.update(overrides)
    return params


class TestListCreatives:
    @pytest.mark.asyncio
    async def test_filter_by_campaign(self, mock_client, run):
        mock_client.finder.return_value = {"elements": [CREATIVE]}

        result = await run(list_creatives, mock_client, account_id="123", campaign_id="9")

        mock_client.finder.assert_awaited_once_with(
            PATH, "search", {"search.campaign.values[0]": "urn:li:sponsoredCampaign:9"}
        )
        assert result["creatives"][0]["title"] == "Buy"
        assert result["count"] == 1

    @pytest.mark.asyncio
    async def test_blank_campaign_is_no_filter(self, mock_client, run):
        await run(list_creatives, mock_client, account_id="123", campaign_id="  ")

        mock_client.finder.assert_awaited_once_with(PATH, "search", {})


@pytest.mark.asyncio
async def test_get_creative(mock_client, run):
    mock_client.get.return_value = CREATIVE

    result = await run(get_creative, mock_client, account_id="123", creative_id="77")

    mock_client.get.assert_awaited_once_with(PATH, "77")
    assert result == {
        "id": "77",
        "campaignId": "9",
        "type": "TEXT_AD",
        "status": "ACTIVE",
        "title": "Buy",
        "text": "Now",
    }


class TestCreateCreative:
    @pytest.mark.asyncio
    async def test_text_ad(self, mock_client, run):
        mock_client.create.return_value = CREATIVE

        result = await run(create_creative, mock_client, **create_params())

        mock_client.create.assert_awaited_once_with(
            PATH,
            {
                "campaign": "urn:li:sponsoredCampaign:9",
                "status": "ACTIVE",
                "type": "TEXT_AD",
                "variables": {
                    "clickUri": "https://example.com/landing",
                    "data": {TEXT_AD_VARIABLES: {"title": "Buy", "text": "Now"}},
                },
            },
        )
        assert result["message"] == "Creative created successfully"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, "", "   "])
    async def test_text_ad_requires_title(self, mock_client, run, title):
        with pytest.raises(ValidationError) as exc_info:
            await run(create_creative, mock_client, **create_params(title=title))

        assert exc_info.value.field == "title"
        assert exc_info.value.message == "Title is required for TEXT_AD creatives"
        mock_client.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sponsored_content_with_media(self, mock_client, run):
        mock_client.create.return_value = {"id": "urn:li:sponsoredCreative:78"}

        await run(
            create_creative,
            mock_client,
            **create_params(type="SPONSORED_STATUS_UPDATE", title=None, image_url="https://cdn.example.com/a.png"),
        )

        variables = mock_client.create.await_args.args[1]["variables"]
        assert variables == {
            "clickUri": "https://example.com/landing",
            "data": {SPONSORED_UPDATE_VARIABLES: {"activity": "Now", "media": "https://cdn.example.com/a.png"}},
        }

    @pytest.mark.asyncio
    async def test_relative_url_rejected(self, mock_client, run):
        with pytest.raises(ValidationError) as exc_info:
            await run(create_creative, mock_client, **create_params(destination_url="/landing"))

        assert exc_info.value.field == "destination_url"


@pytest.mark.asyncio
async def test_update_creative(mock_client, run):
    mock_client.get.return_value = {**CREATIVE, "status": "PAUSED"}

    result = await run(
        update_creative,
        mock_client,
        account_id="123",
        creative_id="77",
        status="PAUSED",
        destination_url="https://example.com/new",
    )

    mock_client.partial_update.assert_awaited_once_with(
        PATH, "77", {"status": "PAUSED", "variables.clickUri": "https://example.com/new"}
    )
    assert result["creative"]["status"] == "PAUSED"


@pytest.mark.asyncio
async def test_delete_creative(mock_client, run):
    result = await run(delete_creative, mock_client, account_id="123", creative_id="77")

    mock_client.delete.assert_awaited_once_with(PATH, "77")
    assert result == {"message": "Creative deleted successfully", "creativeId": "77"}
