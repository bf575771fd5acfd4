"""Classify arbitrary transport failures into the LinkedIn error taxonomy.

Usage:
    from linkedin_ads_mcp.core.errors import classify_error

    try:
        await transport.get(...)
    except Exception as e:
        raise classify_error(e) from e
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import httpx

from linkedin_ads_mcp.core.errors.linkedin import (
    AuthenticationError,
    LinkedInAdsError,
    LinkedInApiError,
    PermissionDeniedError,
    RateLimitError,
)

_DIGITS = re.compile(r"^\s*(\d+)\s*$")


@dataclass
class ResponseDescriptor:
    """Status, body and headers pulled off a failed response."""

    status: int
    body: Any = None
    headers: Mapping[str, Any] = field(default_factory=dict)


def classify_error(error: object) -> Exception:
    """Map a failure raised by a remote call onto exactly one error class.

    Dispatch:
        - already classified (any ``LinkedInAdsError``): returned unchanged
        - carries a response with a status code (attribute, or key of a
          mapping value): mapped by status
        - anything else: wrapped as ``RuntimeError`` with its message

    Args:
        error: The raised exception, or any other value a transport produced.

    Returns:
        The classified exception. Never raises.
    """
    if isinstance(error, LinkedInAdsError):
        return error

    descriptor = _response_descriptor(error)
    if descriptor is not None:
        return _classify_response(descriptor, _fallback_message(error))

    if isinstance(error, BaseException):
        return RuntimeError(str(error) or type(error).__name__)

    return RuntimeError(str(error))


def _classify_response(descriptor: ResponseDescriptor, fallback: Optional[str]) -> LinkedInApiError:
    body = descriptor.body if isinstance(descriptor.body, dict) else None
    message = _body_message(body) or fallback or "Unknown API error"

    if descriptor.status == 401:
        return AuthenticationError(message, details=descriptor.body)
    if descriptor.status == 403:
        return PermissionDeniedError(message, details=descriptor.body)
    if descriptor.status == 429:
        return RateLimitError(
            message,
            retry_after=parse_retry_after(_header(descriptor.headers, "retry-after")),
            details=descriptor.body,
        )

    error_code = body.get("code") if body else None
    return LinkedInApiError(
        message,
        descriptor.status,
        error_code=error_code if isinstance(error_code, str) else None,
        details=descriptor.body,
    )


def parse_retry_after(value: Any) -> Optional[int]:
    """Parse a ``retry-after`` header as whole seconds, ``None`` if not numeric."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value if value >= 0 else None
    match = _DIGITS.match(str(value))
    return int(match.group(1)) if match else None


def _response_descriptor(error: object) -> Optional[ResponseDescriptor]:
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return ResponseDescriptor(
            status=response.status_code,
            body=_response_body(response),
            headers=response.headers,
        )

    if isinstance(error, Mapping):
        response = error.get("response")
    else:
        response = getattr(error, "response", None)
    if response is None:
        return None

    if isinstance(response, Mapping):
        status = response.get("status", response.get("status_code"))
        body = response.get("data", response.get("body"))
        headers = response.get("headers") or {}
    else:
        status = getattr(response, "status_code", getattr(response, "status", None))
        body = getattr(response, "data", None)
        headers = getattr(response, "headers", None) or {}

    if not isinstance(status, int) or isinstance(status, bool):
        return None
    return ResponseDescriptor(status=status, body=body, headers=headers)


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _body_message(body: Optional[dict]) -> Optional[str]:
    if not body:
        return None
    message = body.get("message")
    return message if isinstance(message, str) and message else None


def _fallback_message(error: object) -> Optional[str]:
    if isinstance(error, Mapping):
        message = error.get("message")
    else:
        message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    if isinstance(error, BaseException):
        return str(error) or None
    return None


def _header(headers: Mapping[str, Any], name: str) -> Any:
    if isinstance(headers, httpx.Headers):
        return headers.get(name)
    for key, value in headers.items():
        if isinstance(key, str) and key.lower() == name:
            return value
    return None
