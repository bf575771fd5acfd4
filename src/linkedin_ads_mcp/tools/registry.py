"""
Tool registry for linkedin-ads-mcp.

Each capability module exposes a list of ``ToolDefinition`` objects. A
definition pairs a pydantic input model with an async handler; registration
publishes the model as the tool's input schema and converts domain errors
into FastMCP ``ToolError`` carrying the user-facing summary.
"""

from __future__ import annotations

import inspect
import json
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Awaitable, Callable, Iterable, Mapping, Type, TypeVar

import pydantic
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field

from linkedin_ads_mcp.core.client import LinkedInClient
from linkedin_ads_mcp.core.errors import LinkedInAdsError, ValidationError
from linkedin_ads_mcp.core.observability import mcp_tool

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Handler = Callable[[Mapping[str, Any], LinkedInClient], Awaitable[str]]


@dataclass(frozen=True)
class ToolDefinition:
    """A named operation exposed to the agent.

    Attributes:
        name: Tool name as published over MCP (snake_case)
        description: Text shown to the agent when choosing tools
        input_model: Pydantic model describing and validating the input
        handler: ``async (params, client) -> str`` returning a JSON document
    """

    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Handler


def parse_input(model: Type[ModelT], params: Mapping[str, Any]) -> ModelT:
    """Validate raw tool input, raising ``ValidationError`` on the first bad field."""
    try:
        return model.model_validate(dict(params))
    except pydantic.ValidationError as e:
        errors = e.errors(include_url=False)
        first = errors[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationError(first["msg"], field=field, details=errors) from e


def to_json(result: Any) -> str:
    return json.dumps(result, indent=2)


def tool_signature(model: Type[BaseModel]) -> inspect.Signature:
    """Build a keyword-only signature mirroring the fields of ``model``.

    FastMCP derives a tool's input schema from the registered function's
    signature, so the published schema matches the model's constraints.
    """
    parameters = []
    for name, field in model.model_fields.items():
        annotation = Annotated[(field.annotation, *field.metadata, Field(description=field.description))]
        default = inspect.Parameter.empty if field.is_required() else field.get_default(call_default_factory=True)
        parameters.append(
            inspect.Parameter(name, inspect.Parameter.KEYWORD_ONLY, default=default, annotation=annotation)
        )
    return inspect.Signature(parameters, return_annotation=str)


def build_tool_function(tool: ToolDefinition, client: LinkedInClient) -> Callable[..., Awaitable[str]]:
    """Bind a tool definition to a client as a FastMCP-compatible coroutine."""

    async def invoke(**kwargs: Any) -> str:
        try:
            return await tool.handler(kwargs, client)
        except LinkedInAdsError as exc:
            logger.warning("Tool %s failed: %s: %s", tool.name, type(exc).__name__, exc)
            raise ToolError(exc.to_user_message()) from exc

    invoke.__name__ = tool.name
    invoke.__qualname__ = tool.name
    invoke.__doc__ = tool.description
    invoke.__signature__ = tool_signature(tool.input_model)  # type: ignore[attr-defined]

    return mcp_tool(tool_name=tool.name)(invoke)


def register_tools(mcp: FastMCP, tools: Iterable[ToolDefinition], client: LinkedInClient) -> None:
    """
    Register tool definitions with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        tools: Definitions to publish
        client: Client the handlers call the API through
    """
    for tool in tools:
        mcp.add_tool(
            build_tool_function(tool, client),
            name=tool.name,
            description=tool.description,
            structured_output=False,
        )
        logger.debug("Registered tool %s", tool.name)
