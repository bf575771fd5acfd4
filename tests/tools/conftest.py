"""Shared fixtures for tool handler tests."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from linkedin_ads_mcp.core.client import LinkedInClient


@pytest.fixture
def mock_client():
    """LinkedInClient double whose verbs are AsyncMocks."""
    client = MagicMock(spec=LinkedInClient)
    for verb in ("finder", "get", "get_all", "create", "update", "partial_update", "delete"):
        setattr(client, verb, AsyncMock(return_value=None))
    client.finder.return_value = {"elements": []}
    return client


def parse(result: str):
    return json.loads(result)


@pytest.fixture
def run():
    """Call a handler and decode its JSON result."""

    async def _run(handler, client, **params):
        return parse(await handler(params, client))

    return _run
