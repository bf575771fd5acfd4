"""Tests for ad account tools."""

import pytest

from linkedin_ads_mcp.core.errors import ValidationError
from linkedin_ads_mcp.tools.accounts import get_ad_account, list_ad_accounts


class TestListAdAccounts:
    @pytest.mark.asyncio
    async def test_lists_formatted_accounts(self, mock_client, run):
        mock_client.finder.return_value = {
            "elements": [
                {"id": "urn:li:sponsoredAccount:1", "name": "A", "status": "ACTIVE", "currency": "USD", "type": "BUSINESS"},
                {"id": "urn:li:sponsoredAccount:2", "name": "B", "status": "CANCELED", "currency": "EUR", "type": "ENTERPRISE"},
            ]
        }

        result = await run(list_ad_accounts, mock_client)

        mock_client.finder.assert_awaited_once_with("/adAccounts", "search", {})
        assert result["count"] == 2
        assert result["accounts"][0] == {
            "id": "1",
            "name": "A",
            "status": "ACTIVE",
            "currency": "USD",
            "type": "BUSINESS",
        }

    @pytest.mark.asyncio
    async def test_missing_elements_yields_empty_list(self, mock_client, run):
        mock_client.finder.return_value = {}

        result = await run(list_ad_accounts, mock_client)

        assert result == {"accounts": [], "count": 0}


class TestGetAdAccount:
    @pytest.mark.asyncio
    async def test_fetches_by_id(self, mock_client, run):
        mock_client.get.return_value = {"id": "urn:li:sponsoredAccount:123", "name": "Acme"}

        result = await run(get_ad_account, mock_client, account_id="123")

        mock_client.get.assert_awaited_once_with("/adAccounts", "123")
        assert result["id"] == "123"
        assert result["name"] == "Acme"

    @pytest.mark.asyncio
    async def test_requires_account_id(self, mock_client, run):
        with pytest.raises(ValidationError) as exc_info:
            await run(get_ad_account, mock_client)

        assert exc_info.value.field == "account_id"
        mock_client.get.assert_not_awaited()
