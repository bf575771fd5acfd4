"""Rest.li 2.0 transport for the LinkedIn REST API.

Thin async wrapper over ``httpx.AsyncClient`` exposing the Rest.li verbs
(finder, get, get_all, create, update, partial_update, delete). It performs
exactly one HTTP request per call and raises ``httpx.HTTPStatusError`` for
non-2xx responses; classification and retry live in the layers above.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.linkedin.com/rest"
RESTLI_PROTOCOL_VERSION = "2.0.0"


@dataclass
class RestliResponse:
    """Decoded response of a single Rest.li call."""

    status_code: int
    data: Any = None
    headers: Dict[str, str] = field(default_factory=dict)


def encode_restli_value(value: Any) -> str:
    """Encode a query parameter value using Rest.li 2.0 syntax.

    Objects become ``(key:value,...)``, lists ``List(a,b)``; scalars are
    percent-encoded so reserved characters ``(),':`` survive the round trip.
    """
    if isinstance(value, Mapping):
        inner = ",".join(f"{_quote(str(k))}:{encode_restli_value(v)}" for k, v in value.items())
        return f"({inner})"
    if isinstance(value, (list, tuple)):
        return f"List({','.join(encode_restli_value(v) for v in value)})"
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return _quote(str(value))


def encode_query(params: Mapping[str, Any]) -> str:
    """Build a Rest.li 2.0 query string from a parameter map."""
    return "&".join(
        f"{quote(str(key), safe='.[]')}={encode_restli_value(value)}"
        for key, value in params.items()
        if value is not None
    )


def build_patch_document(patch_set: Mapping[str, Any]) -> Dict[str, Any]:
    """Build a Rest.li partial update body from a flat patch set.

    Dotted keys address nested fields::

        >>> build_patch_document({"name": "x", "runSchedule.end": 1})
        {'patch': {'$set': {'name': 'x'}, 'runSchedule': {'$set': {'end': 1}}}}
    """
    patch: Dict[str, Any] = {}
    for path, value in patch_set.items():
        *parents, leaf = path.split(".")
        node = patch
        for parent in parents:
            node = node.setdefault(parent, {})
        node.setdefault("$set", {})[leaf] = value
    return {"patch": patch}


def _quote(value: str) -> str:
    return quote(value, safe="")


class RestliClient:
    """Async Rest.li client for the LinkedIn versioned REST API.

    Args:
        base_url: API root, defaults to the versioned ``/rest`` endpoint.
        timeout: Per-request timeout in seconds.
        http_client: Optional preconfigured ``httpx.AsyncClient`` (tests
            inject one backed by ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def finder(
        self,
        *,
        resource_path: str,
        finder_name: str,
        query_params: Mapping[str, Any],
        access_token: str,
        version_string: str,
    ) -> RestliResponse:
        params = {"q": finder_name, **query_params}
        return await self._request(
            "GET",
            resource_path,
            method_header="FINDER",
            query=params,
            access_token=access_token,
            version_string=version_string,
        )

    async def get(self, *, resource_path: str, access_token: str, version_string: str) -> RestliResponse:
        return await self._request(
            "GET",
            resource_path,
            method_header="GET",
            access_token=access_token,
            version_string=version_string,
        )

    async def get_all(self, *, resource_path: str, access_token: str, version_string: str) -> RestliResponse:
        return await self._request(
            "GET",
            resource_path,
            method_header="GET_ALL",
            access_token=access_token,
            version_string=version_string,
        )

    async def create(
        self,
        *,
        resource_path: str,
        entity: Mapping[str, Any],
        access_token: str,
        version_string: str,
    ) -> RestliResponse:
        response = await self._request(
            "POST",
            resource_path,
            method_header="CREATE",
            body=entity,
            access_token=access_token,
            version_string=version_string,
        )
        created_id = response.headers.get("x-restli-id") or response.headers.get("x-linkedin-id")
        data = response.data if isinstance(response.data, dict) else {}
        if created_id and "id" not in data:
            data = {**data, "id": created_id}
        response.data = data
        return response

    async def update(
        self,
        *,
        resource_path: str,
        entity: Mapping[str, Any],
        access_token: str,
        version_string: str,
    ) -> RestliResponse:
        return await self._request(
            "PUT",
            resource_path,
            method_header="UPDATE",
            body=entity,
            access_token=access_token,
            version_string=version_string,
        )

    async def partial_update(
        self,
        *,
        resource_path: str,
        patch_set_entity: Mapping[str, Any],
        access_token: str,
        version_string: str,
    ) -> RestliResponse:
        return await self._request(
            "POST",
            resource_path,
            method_header="PARTIAL_UPDATE",
            body=build_patch_document(patch_set_entity),
            access_token=access_token,
            version_string=version_string,
        )

    async def delete(self, *, resource_path: str, access_token: str, version_string: str) -> RestliResponse:
        return await self._request(
            "DELETE",
            resource_path,
            method_header="DELETE",
            access_token=access_token,
            version_string=version_string,
        )

    async def _request(
        self,
        http_method: str,
        resource_path: str,
        *,
        method_header: str,
        access_token: str,
        version_string: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> RestliResponse:
        url = f"{self._base_url}{resource_path}"
        if query:
            url = f"{url}?{encode_query(query)}"

        headers = {
            "Authorization": f"Bearer {access_token}",
            "LinkedIn-Version": version_string,
            "X-Restli-Protocol-Version": RESTLI_PROTOCOL_VERSION,
            "X-RestLi-Method": method_header,
        }

        logger.debug("Rest.li %s %s", method_header, resource_path)
        response = await self._http.request(http_method, url, headers=headers, json=body)
        response.raise_for_status()

        return RestliResponse(
            status_code=response.status_code,
            data=_decode_body(response),
            headers={k.lower(): v for k, v in response.headers.items()},
        )


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


