"""Error taxonomy for linkedin-ads-mcp.

Usage:
    from linkedin_ads_mcp.core.errors import RateLimitError, classify_error
"""

from linkedin_ads_mcp.core.errors.classification import (
    ResponseDescriptor,
    classify_error,
    parse_retry_after,
)
from linkedin_ads_mcp.core.errors.linkedin import (
    AuthenticationError,
    ConfigurationError,
    LinkedInAdsError,
    LinkedInApiError,
    PermissionDeniedError,
    RateLimitError,
    ValidationError,
)

__all__ = [
    # Taxonomy
    "LinkedInAdsError",
    "LinkedInApiError",
    "AuthenticationError",
    "PermissionDeniedError",
    "RateLimitError",
    "ValidationError",
    "ConfigurationError",
    # Classification
    "ResponseDescriptor",
    "classify_error",
    "parse_retry_after",
]
