"""Tests for campaign group tools."""

import pytest

from linkedin_ads_mcp.core.errors import ValidationError
from linkedin_ads_mcp.tools.campaign_groups import (
    create_campaign_group,
    list_campaign_groups,
    update_campaign_group,
)

PATH = "/adAccounts/123/adCampaignGroups"
GROUP = {
    "id": "urn:li:sponsoredCampaignGroup:4",
    "name": "Q1",
    "status": "ACTIVE",
    "totalBudget": {"amount": "1000", "currencyCode": "USD"},
}


@pytest.mark.asyncio
async def test_list_campaign_groups(mock_client, run):
    mock_client.finder.return_value = {"elements": [GROUP]}

    result = await run(list_campaign_groups, mock_client, account_id="123")

    mock_client.finder.assert_awaited_once_with(PATH, "search", {})
    assert result == {
        "campaignGroups": [
            {"id": "4", "name": "Q1", "status": "ACTIVE", "totalBudget": {"amount": "1000", "currencyCode": "USD"}}
        ],
        "count": 1,
    }


class TestCreateCampaignGroup:
    @pytest.mark.asyncio
    async def test_minimal(self, mock_client, run):
        mock_client.create.return_value = {"id": "urn:li:sponsoredCampaignGroup:4", "name": "Q1"}

        result = await run(create_campaign_group, mock_client, account_id="123", name="Q1")

        mock_client.create.assert_awaited_once_with(
            PATH, {"account": "urn:li:sponsoredAccount:123", "name": "Q1", "status": "ACTIVE"}
        )
        assert result["message"] == "Campaign group created successfully"
        assert result["campaignGroup"] == {"id": "4", "name": "Q1"}

    @pytest.mark.asyncio
    async def test_budget_and_schedule(self, mock_client, run):
        mock_client.create.return_value = GROUP

        await run(
            create_campaign_group,
            mock_client,
            account_id="123",
            name="Q1",
            total_budget=1000,
            start_date="2026-01-01",
            status="PAUSED",
        )

        entity = mock_client.create.await_args.args[1]
        assert entity["totalBudget"] == {"amount": "1000", "currencyCode": "USD"}
        assert entity["runSchedule"] == {"start": 1767225600000}
        assert entity["status"] == "PAUSED"

    @pytest.mark.asyncio
    async def test_negative_budget_rejected(self, mock_client, run):
        with pytest.raises(ValidationError) as exc_info:
            await run(create_campaign_group, mock_client, account_id="123", name="Q1", total_budget=-5)

        assert exc_info.value.field == "total_budget"


@pytest.mark.asyncio
async def test_update_campaign_group(mock_client, run):
    mock_client.get.return_value = {**GROUP, "name": "Q2"}

    result = await run(
        update_campaign_group, mock_client, account_id="123", group_id="4", name="Q2", end_date="2026-01-31"
    )

    mock_client.partial_update.assert_awaited_once_with(
        PATH, "4", {"name": "Q2", "runSchedule.end": 1769817600000}
    )
    mock_client.get.assert_awaited_once_with(PATH, "4")
    assert result["message"] == "Campaign group updated successfully"
    assert result["campaignGroup"]["name"] == "Q2"
