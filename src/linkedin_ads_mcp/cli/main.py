"""linkedin-ads-mcp command line interface.

Commands:
    serve         Run the MCP server over stdio (default)
    tools         List the tools the server publishes
    check-config  Validate configuration without starting the server

``tools`` and ``check-config`` print JSON to stdout.
"""

import json
from typing import Any, Dict, Optional

import click

from linkedin_ads_mcp.config import ServerConfig, mask_token
from linkedin_ads_mcp.core.errors import ConfigurationError
from linkedin_ads_mcp.server import main as serve_stdio
from linkedin_ads_mcp.tools import ADS_TOOLS, COMMUNITY_TOOLS


def emit(data: Dict[str, Any]) -> None:
    click.echo(json.dumps(data, indent=2))


def emit_error(message: str, code: str) -> None:
    emit({"success": False, "error": message, "code": code})
    raise SystemExit(1)


@click.group(invoke_without_command=True)
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False),
    envvar="LINKEDIN_ADS_MCP_CONFIG_FILE",
    help="Path to a TOML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str]) -> None:
    """LinkedIn Campaign Manager MCP server."""
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@cli.command("serve")
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Run the MCP server over stdio."""
    serve_stdio(ctx.obj.get("config_file"))


@cli.command("tools")
def list_tools() -> None:
    """List published tools and which credential each uses."""
    tools = [
        {"name": tool.name, "description": tool.description, "credential": credential}
        for credential, group in (("ads", ADS_TOOLS), ("community", COMMUNITY_TOOLS))
        for tool in group
    ]
    emit({"success": True, "tools": tools, "count": len(tools)})


@cli.command("check-config")
@click.pass_context
def check_config(ctx: click.Context) -> None:
    """Load and validate configuration, then print a masked summary."""
    try:
        config = ServerConfig.from_env(ctx.obj.get("config_file"))
    except ConfigurationError as e:
        emit_error(str(e), code="CONFIGURATION_ERROR")
        return

    emit(
        {
            "success": True,
            "config": {
                "access_token": mask_token(config.access_token),
                "community_token": mask_token(config.community_token),
                "api_version": config.api_version,
                "log_level": config.log_level,
                "max_retries": config.max_retries,
                "request_timeout": config.request_timeout,
            },
            "warnings": list(config.startup_warnings),
        }
    )


if __name__ == "__main__":
    cli()
