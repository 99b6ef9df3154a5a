"""Shared formatting functions for MCP responses.

Every tool answers with a single text block holding pretty-printed JSON:
the Jira result on success, or {"error": ..., "extra": ...} on failure.
"""
import json
from typing import Any, Optional

from mcp.types import TextContent

from jira_core.errors import JiraHttpError


def _dump(obj: Any) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False, default=str)


def to_tool_result(obj: Any) -> list[TextContent]:
    """Format a successful result."""
    return [TextContent(type="text", text=_dump(obj))]


def format_tool_error(message: str, extra: Optional[Any] = None) -> str:
    """Format a failure as the JSON text of an error envelope."""
    envelope: dict[str, Any] = {"error": message}
    if extra:
        envelope["extra"] = extra
    return _dump(envelope)


def error_to_public_json(error: BaseException) -> dict[str, Any]:
    """Expose the structured parts of an error to the caller."""
    if isinstance(error, JiraHttpError):
        return {
            "message": str(error),
            "details": {
                "status": error.status,
                "url": error.url,
                "bodyText": error.body_text,
            },
        }
    return {"message": str(error)}


USER_KEYS = ("accountId", "displayName", "active", "emailAddress")


def format_user(user: dict) -> dict:
    """Project a Jira user down to the fields callers need, omitting ones Jira did not send."""
    return {key: user[key] for key in USER_KEYS if user.get(key) is not None}


def format_field(field: dict, include_schema: bool = False) -> dict:
    """Project a Jira field definition, omitting flags Jira did not send."""
    shaped = {"id": field["id"], "name": field["name"]}
    if field.get("custom") is not None:
        shaped["custom"] = field["custom"]
    if field.get("searchable") is not None:
        shaped["searchable"] = field["searchable"]
    if include_schema and field.get("schema") is not None:
        shaped["schema"] = field["schema"]
    return shaped
