"""Shared input types and response helpers for tool handlers."""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import AfterValidator, BeforeValidator, Field

AccountId = Annotated[str, Field(description="The ad account ID (numeric, without URN prefix)")]
OrganizationId = Annotated[str, Field(description="The organization/company page ID (numeric, without URN prefix)")]


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]
"""``YYYY-MM-DD`` date where an empty string means "not given"."""


def elements(response: Any) -> List[Dict[str, Any]]:
    """Return the ``elements`` collection of a finder response (empty when absent)."""
    if not isinstance(response, dict):
        return []
    return list(response.get("elements") or [])


def _require_url(value: str) -> str:
    parts = urlparse(value)
    if not parts.scheme or not parts.netloc:
        raise ValueError("must be an absolute URL")
    return value


Url = Annotated[str, AfterValidator(_require_url)]
