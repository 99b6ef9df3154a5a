"""Shared MCP tool definitions for the Jira wrapper.

This module is the single list of tools the server advertises. Input schemas
are generated from the argument models in schemas.py so the advertised schema
and the validation applied in handlers.py cannot drift apart.
"""
from typing import NamedTuple

from mcp.types import Tool
from pydantic import BaseModel

from . import schemas


class ToolSpec(NamedTuple):
    name: str
    description: str
    arguments: type[BaseModel]


TOOL_SPECS: list[ToolSpec] = [
    # ============================================================================
    # Field Tools
    # ============================================================================
    ToolSpec(
        name="jira_list_fields",
        description="List Jira fields (including customfield_*) from /rest/api/3/field. "
                    "Use this to map friendly names to field IDs.",
        arguments=schemas.ListFieldsArgs,
    ),
    # ============================================================================
    # Issue Tools
    # ============================================================================
    ToolSpec(
        name="jira_get_issue",
        description="Fetch a Jira issue by key using /rest/api/3/issue/{key}. "
                    "You can request specific fields/expand to reduce payload.",
        arguments=schemas.GetIssueArgs,
    ),
    ToolSpec(
        name="jira_update_issue_fields",
        description="Update Jira issue fields via /rest/api/3/issue/{key} PUT. Supports customfield_* and ADF docs. "
                    "You must send correct field IDs and value shapes (e.g. user picker needs accountId).",
        arguments=schemas.UpdateIssueFieldsArgs,
    ),
    ToolSpec(
        name="jira_search_issues_jql",
        description="Search issues using JQL via /rest/api/3/search. Returns a page of issues with selected fields.",
        arguments=schemas.SearchIssuesJqlArgs,
    ),
    ToolSpec(
        name="jira_create_issue",
        description="Create an issue via /rest/api/3/issue. Supply fields including project + issuetype "
                    "and any customfield_* values (including ADF docs).",
        arguments=schemas.CreateIssueArgs,
    ),
    ToolSpec(
        name="jira_add_comment",
        description="Add a comment to an issue via /rest/api/3/issue/{key}/comment. "
                    "Body may be plain string or ADF doc object.",
        arguments=schemas.AddCommentArgs,
    ),
    # ============================================================================
    # Transition Tools
    # ============================================================================
    ToolSpec(
        name="jira_get_transitions",
        description="Get available transitions for an issue via /rest/api/3/issue/{key}/transitions.",
        arguments=schemas.GetTransitionsArgs,
    ),
    ToolSpec(
        name="jira_transition_issue",
        description="Transition an issue via /rest/api/3/issue/{key}/transitions. "
                    "Provide a transition id (use jira_get_transitions first).",
        arguments=schemas.TransitionIssueArgs,
    ),
    # ============================================================================
    # Bulk Tools
    # ============================================================================
    ToolSpec(
        name="jira_bulk_create_issues",
        description="Bulk create issues via POST /rest/api/3/issue/bulk. "
                    "Provide issueUpdates entries containing fields (and optional update).",
        arguments=schemas.BulkCreateIssuesArgs,
    ),
    ToolSpec(
        name="jira_bulk_get_editable_fields",
        description="Get bulk-editable field IDs for a set of issues via GET /rest/api/3/bulk/issues/fields. "
                    "Use the returned field IDs in selectedActions for jira_bulk_edit_issues.",
        arguments=schemas.BulkGetEditableFieldsArgs,
    ),
    ToolSpec(
        name="jira_bulk_edit_issues",
        description="Bulk edit issues via POST /rest/api/3/bulk/issues/fields. You must provide "
                    "selectedIssueIdsOrKeys, selectedActions (field IDs), and editedFieldsInput.",
        arguments=schemas.BulkEditIssuesArgs,
    ),
    # ============================================================================
    # User Tools
    # ============================================================================
    ToolSpec(
        name="jira_search_users",
        description="Search users (returns accountId) using /rest/api/3/user/search. "
                    "Use this to map email/displayName → accountId for user picker fields.",
        arguments=schemas.SearchUsersArgs,
    ),
    ToolSpec(
        name="jira_resolve_user_account_id",
        description="Resolve a single best-match Jira user and return accountId (for setting user picker custom "
                    "fields). Uses /rest/api/3/user/search and selects the best candidate.",
        arguments=schemas.ResolveUserAccountIdArgs,
    ),
]


def get_tools() -> list[Tool]:
    """Get the list of all MCP tools for the Jira wrapper."""
    return [
        Tool(
            name=spec.name,
            description=spec.description,
            inputSchema=spec.arguments.model_json_schema(by_alias=True),
        )
        for spec in TOOL_SPECS
    ]
