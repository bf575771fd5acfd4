"""Resilient client layer for the LinkedIn REST API.

Error taxonomy and classification, the retrying invoker, the Rest.li
transport and the verb-level client built on top of them.
"""

from linkedin_ads_mcp.core.client import (
    LinkedInClient,
    create_community_client,
    create_linkedin_client,
)
from linkedin_ads_mcp.core.restli import RestliClient, RestliResponse

__all__ = [
    "LinkedInClient",
    "RestliClient",
    "RestliResponse",
    "create_community_client",
    "create_linkedin_client",
]
