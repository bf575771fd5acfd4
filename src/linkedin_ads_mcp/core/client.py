"""LinkedIn API client.

Wraps the Rest.li transport, injecting the access token and API version on
every call and running each call through ``execute_with_retry`` so rate
limits are retried and every other failure surfaces classified.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from linkedin_ads_mcp.core.resilience import SleepFunc, execute_with_retry
from linkedin_ads_mcp.core.restli import RestliClient

if TYPE_CHECKING:
    from linkedin_ads_mcp.config import ServerConfig

logger = logging.getLogger(__name__)


class LinkedInClient:
    """Verb-level access to the LinkedIn REST API.

    Args:
        config: Loaded server configuration (read-only).
        restli_client: Transport to use; one is built from ``config`` if omitted.
        access_token: Credential override (e.g. the community token).
        sleep_func: Injectable sleep used between retries.
    """

    def __init__(
        self,
        config: ServerConfig,
        *,
        restli_client: Optional[RestliClient] = None,
        access_token: Optional[str] = None,
        sleep_func: Optional[SleepFunc] = None,
    ):
        self._restli = restli_client or RestliClient(config.base_url, timeout=config.request_timeout)
        self._access_token = access_token or config.access_token
        self._api_version = config.api_version
        self._max_retries = config.max_retries
        self._sleep_func = sleep_func

    async def aclose(self) -> None:
        await self._restli.aclose()

    async def finder(
        self,
        resource_path: str,
        finder_name: str,
        query_params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Execute a finder query (search/list operations)."""

        async def operation() -> Any:
            response = await self._restli.finder(
                resource_path=resource_path,
                finder_name=finder_name,
                query_params=dict(query_params or {}),
                access_token=self._access_token,
                version_string=self._api_version,
            )
            return response.data

        return await self._execute(operation, f"finder {resource_path}?q={finder_name}")

    async def get(self, resource_path: str, entity_id: str) -> Any:
        """Get a single entity by ID."""

        async def operation() -> Any:
            response = await self._restli.get(
                resource_path=f"{resource_path}/{entity_id}",
                access_token=self._access_token,
                version_string=self._api_version,
            )
            return response.data

        return await self._execute(operation, f"get {resource_path}")

    async def get_all(self, resource_path: str) -> Any:
        """Get all entities of a collection."""

        async def operation() -> Any:
            response = await self._restli.get_all(
                resource_path=resource_path,
                access_token=self._access_token,
                version_string=self._api_version,
            )
            return response.data

        return await self._execute(operation, f"get_all {resource_path}")

    async def create(self, resource_path: str, entity: Mapping[str, Any]) -> Dict[str, Any]:
        """Create an entity and return its created representation."""

        async def operation() -> Dict[str, Any]:
            response = await self._restli.create(
                resource_path=resource_path,
                entity=entity,
                access_token=self._access_token,
                version_string=self._api_version,
            )
            return response.data

        return await self._execute(operation, f"create {resource_path}")

    async def update(self, resource_path: str, entity_id: str, entity: Mapping[str, Any]) -> None:
        """Replace an entity (full update)."""

        async def operation() -> None:
            await self._restli.update(
                resource_path=f"{resource_path}/{entity_id}",
                entity=entity,
                access_token=self._access_token,
                version_string=self._api_version,
            )

        await self._execute(operation, f"update {resource_path}")

    async def partial_update(self, resource_path: str, entity_id: str, patch_set: Mapping[str, Any]) -> None:
        """Partially update an entity.

        Keys of ``patch_set`` may use dotted paths (``runSchedule.end``) to
        address nested fields.
        """

        async def operation() -> None:
            await self._restli.partial_update(
                resource_path=f"{resource_path}/{entity_id}",
                patch_set_entity=patch_set,
                access_token=self._access_token,
                version_string=self._api_version,
            )

        await self._execute(operation, f"partial_update {resource_path}")

    async def delete(self, resource_path: str, entity_id: str) -> None:
        """Delete an entity."""

        async def operation() -> None:
            await self._restli.delete(
                resource_path=f"{resource_path}/{entity_id}",
                access_token=self._access_token,
                version_string=self._api_version,
            )

        await self._execute(operation, f"delete {resource_path}")

    async def _execute(self, operation, label: str):
        return await execute_with_retry(
            operation,
            max_retries=self._max_retries,
            sleep_func=self._sleep_func,
            operation_name=label,
        )


def create_linkedin_client(config: ServerConfig, **kwargs: Any) -> LinkedInClient:
    """Create the client used by the Marketing (ads) tools."""
    return LinkedInClient(config, **kwargs)


def create_community_client(config: ServerConfig, **kwargs: Any) -> LinkedInClient:
    """Create the client used by the Community Management tools.

    Falls back to the primary access token when no community token is set.
    """
    if not config.has_community_token:
        logger.info("LINKEDIN_COMMUNITY_TOKEN not set, community tools use the primary access token")
        return LinkedInClient(config, **kwargs)
    return LinkedInClient(config, access_token=config.community_token, **kwargs)
