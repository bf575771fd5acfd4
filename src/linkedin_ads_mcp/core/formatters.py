"""URN, money and date helpers plus response formatters.

Raw LinkedIn payloads are reshaped into small, stable summaries here; tool
handlers never return raw API shapes.
"""

import time
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

URN_PREFIX = "urn:li"
TEXT_AD_VARIABLES = "com.linkedin.ads.TextAdCreativeVariables"
SPONSORED_UPDATE_VARIABLES = "com.linkedin.ads.SponsoredUpdateCreativeVariables"


# ---------------------------------------------------------------------------
# URNs
# ---------------------------------------------------------------------------


def build_urn(entity_type: str, entity_id: str) -> str:
    """``("sponsoredAccount", "123")`` -> ``"urn:li:sponsoredAccount:123"``"""
    return f"{URN_PREFIX}:{entity_type}:{entity_id}"


def extract_id_from_urn(urn: str) -> str:
    """``"urn:li:sponsoredAccount:123"`` -> ``"123"``"""
    return urn.split(":")[-1]


def _id_or_none(value: Any) -> Optional[str]:
    return extract_id_from_urn(value) if isinstance(value, str) else None


# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------


def format_decimal(amount: Union[int, float]) -> str:
    """Render a number the way the API expects amounts (``50`` not ``50.0``)."""
    value = float(amount)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def build_money_amount(amount: Union[int, float], currency_code: str = "USD") -> Dict[str, str]:
    """Build a currency-aware money amount object for the API."""
    return {"amount": format_decimal(amount), "currencyCode": currency_code}


def format_money_amount(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {"amount": raw.get("amount"), "currencyCode": raw.get("currencyCode")}


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def date_to_epoch_ms(value: Union[str, date]) -> int:
    """Midnight UTC of a ``YYYY-MM-DD`` date as epoch milliseconds."""
    day = date.fromisoformat(value) if isinstance(value, str) else value
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return int(midnight.timestamp() * 1000)


def epoch_ms_to_date(epoch_ms: Union[int, float]) -> str:
    """Epoch milliseconds -> ``YYYY-MM-DD`` (UTC)."""
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).date().isoformat()


def date_to_date_parts(value: Union[str, date]) -> Dict[str, int]:
    """``2026-01-15`` -> ``{"day": 15, "month": 1, "year": 2026}``"""
    day = date.fromisoformat(value) if isinstance(value, str) else value
    return {"day": day.day, "month": day.month, "year": day.year}


def now_epoch_ms() -> int:
    return int(time.time() * 1000)


# ---------------------------------------------------------------------------
# Response formatters
# ---------------------------------------------------------------------------


def _without_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def format_ad_account(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": _id_or_none(raw.get("id")),
        "name": raw.get("name"),
        "status": raw.get("status"),
        "currency": raw.get("currency"),
        "type": raw.get("type"),
    }


def format_campaign(raw: Mapping[str, Any]) -> Dict[str, Any]:
    daily_budget = raw.get("dailyBudget")
    total_spend = raw.get("totalSpend")
    return _without_none(
        {
            "id": _id_or_none(raw.get("id")),
            "name": raw.get("name"),
            "status": raw.get("status"),
            "objectiveType": raw.get("objectiveType"),
            "costType": raw.get("costType"),
            "dailyBudget": format_money_amount(daily_budget) if daily_budget else None,
            "totalSpend": format_money_amount(total_spend) if total_spend else None,
        }
    )


def format_campaign_group(raw: Mapping[str, Any]) -> Dict[str, Any]:
    total_budget = raw.get("totalBudget")
    return _without_none(
        {
            "id": _id_or_none(raw.get("id")),
            "name": raw.get("name"),
            "status": raw.get("status"),
            "totalBudget": format_money_amount(total_budget) if total_budget else None,
        }
    )


def format_creative(raw: Mapping[str, Any]) -> Dict[str, Any]:
    variables = raw.get("variables") or {}
    data = variables.get("data") or {}
    text_ad = data.get(TEXT_AD_VARIABLES) or {}
    return _without_none(
        {
            "id": _id_or_none(raw.get("id")),
            "campaignId": _id_or_none(raw.get("campaign")),
            "type": raw.get("type"),
            "status": raw.get("status"),
            "title": text_ad.get("title"),
            "text": text_ad.get("text"),
        }
    )


def format_post(raw: Mapping[str, Any]) -> Dict[str, Any]:
    urn = raw.get("id")
    created_at = raw.get("createdAt")
    published_at = raw.get("publishedAt")
    last_modified_at = raw.get("lastModifiedAt")
    return _without_none(
        {
            "id": _id_or_none(urn),
            "urn": urn,
            "author": raw.get("author"),
            "text": raw.get("commentary", ""),
            "visibility": raw.get("visibility"),
            "lifecycleState": raw.get("lifecycleState"),
            "createdAt": epoch_ms_to_date(created_at) if isinstance(created_at, (int, float)) else None,
            "publishedAt": epoch_ms_to_date(published_at) if isinstance(published_at, (int, float)) else None,
            "lastModifiedAt": (
                epoch_ms_to_date(last_modified_at) if isinstance(last_modified_at, (int, float)) else None
            ),
        }
    )


def truncate_text(text: str, limit: int = 100) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")
