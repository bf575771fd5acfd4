"""
Post tools for linkedin-ads-mcp.

Organization page posts through the Community Management ``/posts``
resource. Writing requires ``w_organization_social``, reading
``r_organization_social``. Post URNs are URL-encoded when used as keys.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Literal, Mapping, Optional
from urllib.parse import quote

from pydantic import BaseModel, Field

from linkedin_ads_mcp.core.client import LinkedInClient
from linkedin_ads_mcp.core.errors import ValidationError
from linkedin_ads_mcp.core.formatters import build_urn, format_post, truncate_text
from linkedin_ads_mcp.tools.common import OrganizationId, Url, elements
from linkedin_ads_mcp.tools.registry import ToolDefinition, parse_input, to_json

logger = logging.getLogger(__name__)

PostVisibility = Literal["PUBLIC", "CONNECTIONS", "LOGGED_IN"]


def encode_post_urn(post_urn: str) -> str:
    """``urn:li:share:1`` -> ``urn%3Ali%3Ashare%3A1``"""
    return quote(post_urn, safe="")


class CreatePostInput(BaseModel):
    organization_id: OrganizationId
    text: str = Field(..., min_length=1, max_length=3000, description="The post text content")
    visibility: PostVisibility = Field("PUBLIC", description="Post visibility: PUBLIC, CONNECTIONS, or LOGGED_IN")
    link_url: Optional[Url] = Field(
        None, description="Optional URL to include in the post (creates link preview)"
    )
    is_dark_post: bool = Field(
        False, description="If true, post will not appear on company page feed (for ads only)"
    )


class ListPostsInput(BaseModel):
    organization_id: OrganizationId
    count: int = Field(10, ge=1, le=100, description="Number of posts to return (max 100)")
    start: int = Field(0, ge=0, description="Pagination offset")


class GetPostInput(BaseModel):
    post_urn: str = Field(..., description="The post URN (e.g., urn:li:share:123456 or urn:li:ugcPost:123456)")


class UpdatePostInput(BaseModel):
    post_urn: str = Field(..., description="The post URN to update")
    text: Optional[str] = Field(None, max_length=3000, description="Updated post text")


class DeletePostInput(BaseModel):
    post_urn: str = Field(..., description="The post URN to delete")


async def create_post(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Publish a post on an organization page."""
    args = parse_input(CreatePostInput, params)

    author_urn = build_urn("organization", args.organization_id)
    entity: Dict[str, Any] = {
        "author": author_urn,
        "commentary": args.text,
        "visibility": args.visibility,
        "distribution": {
            "feedDistribution": "NONE" if args.is_dark_post else "MAIN_FEED",
            "targetEntities": [],
            "thirdPartyDistributionChannels": [],
        },
        "lifecycleState": "PUBLISHED",
        "isReshareDisabledByAuthor": False,
    }

    if args.link_url:
        # Title left blank; LinkedIn fills it from the page
        entity["content"] = {"article": {"source": args.link_url, "title": ""}}

    response = await client.create("/posts", entity)

    post_urn = response.get("id") or response.get("x-restli-id")
    if not post_urn:
        raise ValidationError("LinkedIn API did not return a post URN", field="postUrn", details=response)

    logger.info("Created post %s for %s", post_urn, author_urn)

    return to_json(
        {
            "success": True,
            "message": (
                "Dark post created successfully (not visible on company page)"
                if args.is_dark_post
                else "Post published successfully to company page"
            ),
            "postUrn": post_urn,
            "author": author_urn,
            "text": truncate_text(args.text),
        }
    )


async def list_posts(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """List recent posts of an organization, most recently modified first."""
    args = parse_input(ListPostsInput, params)

    response = await client.finder(
        "/posts",
        "author",
        {
            "author": build_urn("organization", args.organization_id),
            "count": args.count,
            "start": args.start,
            "sortBy": "LAST_MODIFIED",
        },
    )
    posts = [format_post(raw) for raw in elements(response)]

    return to_json(
        {
            "posts": posts,
            "count": len(posts),
            "organizationId": args.organization_id,
            "pagination": {"start": args.start, "requested": args.count},
        }
    )


async def get_post(params: Mapping[str, Any], client: LinkedInClient) -> str:
    args = parse_input(GetPostInput, params)

    response = await client.get("/posts", encode_post_urn(args.post_urn))

    return to_json(format_post(response))


async def update_post(params: Mapping[str, Any], client: LinkedInClient) -> str:
    """Replace the text of a post. Only the author can update it."""
    args = parse_input(UpdatePostInput, params)

    if not args.text:
        return to_json({"success": False, "message": "No updates provided. Please specify text to update."})

    await client.partial_update("/posts", encode_post_urn(args.post_urn), {"commentary": args.text})

    return to_json(
        {
            "success": True,
            "message": "Post updated successfully",
            "postUrn": args.post_urn,
            "updatedFields": {"text": truncate_text(args.text)},
        }
    )


async def delete_post(params: Mapping[str, Any], client: LinkedInClient) -> str:
    args = parse_input(DeletePostInput, params)

    await client.delete("/posts", encode_post_urn(args.post_urn))

    return to_json({"success": True, "message": "Post deleted successfully", "postUrn": args.post_urn})


POST_TOOLS = [
    ToolDefinition(
        name="create_post",
        description=(
            "Create a new post on a LinkedIn company/organization page. Supports text posts and "
            "link posts with previews. Use is_dark_post=true for ad-only content that won't "
            "appear on the page feed."
        ),
        input_model=CreatePostInput,
        handler=create_post,
    ),
    ToolDefinition(
        name="list_posts",
        description=(
            "List recent posts from a LinkedIn company/organization page. "
            "Returns posts sorted by last modified date."
        ),
        input_model=ListPostsInput,
        handler=list_posts,
    ),
    ToolDefinition(
        name="get_post",
        description="Get details of a specific LinkedIn post by its URN",
        input_model=GetPostInput,
        handler=get_post,
    ),
    ToolDefinition(
        name="update_post",
        description="Update the text content of an existing LinkedIn post. Only the post author can update.",
        input_model=UpdatePostInput,
        handler=update_post,
    ),
    ToolDefinition(
        name="delete_post",
        description="Delete a LinkedIn post. Only the post author can delete. This action is irreversible.",
        input_model=DeletePostInput,
        handler=delete_post,
    ),
]
