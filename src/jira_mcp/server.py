"""Jira MCP Server - Expose Jira issues, search and users to AI assistants."""
import asyncio
import logging
import os
import sys
import traceback
from typing import Any, Optional

from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from pydantic import ValidationError

from jira_core import config
from jira_core.client import JiraClient, client_from_env
from jira_core.errors import ConfigurationError, JiraHttpError

# Import shared formatters, tools, and handlers
from . import formatters
from . import tools
from . import handlers

logger = logging.getLogger("jira-mcp")

SERVER_NAME = "jira-api-mcp"

# MCP Server instance
app = Server(SERVER_NAME)

# Built once in main() from the environment
_jira: Optional[JiraClient] = None


# Map tool names to (handler, message used when the handler fails)
HANDLER_MAP = {
    "jira_list_fields": (handlers.handle_list_fields, "Failed to list fields"),
    "jira_get_issue": (handlers.handle_get_issue, "Failed to get issue"),
    "jira_update_issue_fields": (handlers.handle_update_issue_fields, "Failed to update issue"),
    "jira_search_issues_jql": (handlers.handle_search_issues_jql, "Failed to search issues (JQL)"),
    "jira_create_issue": (handlers.handle_create_issue, "Failed to create issue"),
    "jira_add_comment": (handlers.handle_add_comment, "Failed to add comment"),
    "jira_get_transitions": (handlers.handle_get_transitions, "Failed to get transitions"),
    "jira_transition_issue": (handlers.handle_transition_issue, "Failed to transition issue"),
    "jira_bulk_create_issues": (handlers.handle_bulk_create_issues, "Failed to bulk create issues"),
    "jira_bulk_get_editable_fields": (handlers.handle_bulk_get_editable_fields, "Failed to get bulk editable fields"),
    "jira_bulk_edit_issues": (handlers.handle_bulk_edit_issues, "Failed to bulk edit issues"),
    "jira_search_users": (handlers.handle_search_users, "Failed to search users"),
    "jira_resolve_user_account_id": (handlers.handle_resolve_user_account_id, "Failed to resolve user"),
}


class ToolCallFailed(Exception):
    """Raised with the JSON text of an error envelope.

    The MCP server reports exceptions raised by call_tool as isError results
    whose text is str(exception).
    """


def configure_logging() -> None:
    # stdout carries the MCP protocol, so logs must go to stderr
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
        force=True
    )


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available MCP tools for Jira."""
    return tools.get_tools()


async def execute_tool(name: str, arguments: Optional[dict], jira: JiraClient) -> list[TextContent]:
    """Run one tool against the given client and shape the result.

    Raises ToolCallFailed carrying the error envelope on any failure.
    """
    entry = HANDLER_MAP.get(name)
    if entry is None:
        logger.warning(f"Unknown tool requested: {name}")
        raise ToolCallFailed(formatters.format_tool_error(f"Unknown tool: {name}"))

    handler, failure_message = entry
    try:
        result = await handler(arguments or {}, jira)

    except ValidationError as e:
        logger.warning(f"Invalid arguments for {name}: {e}")
        raise ToolCallFailed(formatters.format_tool_error(
            f"Invalid arguments for {name}", e.errors(include_url=False)
        )) from e

    except handlers.ToolError as e:
        logger.warning(f"{name} failed: {e.message}")
        raise ToolCallFailed(formatters.format_tool_error(e.message, e.extra)) from e

    except JiraHttpError as e:
        logger.error(f"HTTP error during {name} call:")
        logger.error(f"  Status: {e.status}")
        logger.error(f"  URL: {e.url}")
        logger.error(f"  Response text: {e.body_text}")
        raise ToolCallFailed(formatters.format_tool_error(
            failure_message, formatters.error_to_public_json(e)
        )) from e

    except Exception as e:
        logger.error(f"Error during {name} call:")
        logger.error(f"  Error type: {type(e).__name__}")
        logger.error(f"  Error message: {str(e)}")
        logger.debug(f"  Traceback:\n{traceback.format_exc()}")
        raise ToolCallFailed(formatters.format_tool_error(
            failure_message, formatters.error_to_public_json(e)
        )) from e

    return formatters.to_tool_result(result)


@app.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Any) -> list[TextContent]:
    """Handle MCP tool calls by delegating to shared handlers."""
    logger.info(f"Tool call: {name} with arguments: {arguments}")
    if _jira is None:
        raise ToolCallFailed(formatters.format_tool_error("Jira client is not configured"))
    return await execute_tool(name, arguments, _jira)


def env_summary(environ: Optional[dict] = None) -> dict[str, str]:
    """Report which JIRA_* variables are set without revealing their values."""
    env = os.environ if environ is None else environ
    names = [config.ENV_BASE_URL, config.ENV_EMAIL, config.ENV_API_TOKEN, config.ENV_BEARER_TOKEN]
    return {name: "set" if env.get(name) else "not set" for name in names}


async def main():
    """Run the MCP server."""
    global _jira

    configure_logging()
    load_dotenv()
    logger.info(f"{SERVER_NAME}: starting...")
    logger.info(f"{SERVER_NAME}: env {env_summary()}")

    try:
        _jira = client_from_env()
    except ConfigurationError as e:
        logger.error(f"{SERVER_NAME}: ERROR failed to start: {e}")
        raise SystemExit(1)

    auth_type = _jira.config.auth.type
    logger.info(f"MCP Server configured for {_jira.base_url} with {auth_type} authentication")

    async with stdio_server() as (read_stream, write_stream):
        logger.info(f"{SERVER_NAME}: ready")
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
