"""Pydantic schemas for MCP tool arguments.

Tool arguments arrive in camelCase (issueKey, maxResults, ...). Each model
exposes them as snake_case attributes through aliases, and its JSON schema
(by alias) is what tools.py advertises as the tool's inputSchema.
"""
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ToolArguments(BaseModel):
    """Base schema for tool arguments."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


ISSUE_KEY_DESCRIPTION = "Issue key, e.g. WOR-2367"
VALIDATE_ADF_DESCRIPTION = "If true, validates any ADF-like objects contain type/version/content"


# Field Schemas

class ListFieldsArgs(ToolArguments):
    query: Optional[str] = Field(
        None, description="Optional case-insensitive substring filter applied to field name and id"
    )
    include_schema: bool = Field(False, description="Include schema metadata if present")


# Issue Schemas

class GetIssueArgs(ToolArguments):
    issue_key: str = Field(..., description=ISSUE_KEY_DESCRIPTION)
    fields: Optional[list[str]] = Field(None, description="Optional list of fields (names or IDs) to include")
    expand: Optional[list[str]] = Field(
        None, description='Optional expand list, e.g. ["names","schema","renderedFields","operations"]'
    )


class UpdateIssueFieldsArgs(ToolArguments):
    issue_key: str = Field(..., description=ISSUE_KEY_DESCRIPTION)
    fields: dict[str, Any] = Field(
        ..., description='Fields object to set (e.g. { "customfield_10246": { "accountId": "..." } })'
    )
    update: Optional[dict[str, Any]] = Field(None, description='Optional Jira "update" object for advanced updates')
    notify_users: bool = Field(False, description="Whether to notify users (Jira notifyUsers query param)")
    override_screen_security: bool = Field(False, description="Attempt to override screen security (if permitted)")
    override_editable_flag: bool = Field(False, description="Attempt to override editable flag (if permitted)")
    validate_adf: bool = Field(True, description=VALIDATE_ADF_DESCRIPTION)


class SearchIssuesJqlArgs(ToolArguments):
    jql: str = Field(..., description="JQL query (e.g. project=WOR AND key=WOR-2367)")
    max_results: int = Field(50, ge=1, le=100, description="Max results (1-100)")
    start_at: int = Field(0, ge=0, description="Pagination start offset")
    fields: Optional[list[str]] = Field(None, description="Optional list of fields (names or IDs) to include")
    expand: Optional[list[str]] = Field(None, description="Optional expand list")


class CreateIssueArgs(ToolArguments):
    fields: dict[str, Any] = Field(..., description="Issue fields for creation (must include project and issuetype)")
    validate_adf: bool = Field(True, description=VALIDATE_ADF_DESCRIPTION)


class AddCommentArgs(ToolArguments):
    issue_key: str = Field(..., description=ISSUE_KEY_DESCRIPTION)
    body: Union[str, dict[str, Any]] = Field(..., description="Comment body: plain text string or ADF doc object")
    validate_adf: bool = Field(True, description="If true and body is object-like, validate it as an ADF doc")


# Transition Schemas

class GetTransitionsArgs(ToolArguments):
    issue_key: str = Field(..., description=ISSUE_KEY_DESCRIPTION)
    expand: Optional[list[str]] = Field(None, description="Optional expand list")


class TransitionIssueArgs(ToolArguments):
    issue_key: str = Field(..., description=ISSUE_KEY_DESCRIPTION)
    transition_id: str = Field(..., description="Transition id to apply")
    fields: Optional[dict[str, Any]] = Field(None, description="Optional fields to set during transition")
    update: Optional[dict[str, Any]] = Field(None, description="Optional update object to apply during transition")


# Bulk Schemas

class IssueUpdate(ToolArguments):
    fields: dict[str, Any] = Field(..., description="Issue fields for creation")
    update: Optional[dict[str, Any]] = Field(None, description="Optional Jira update object for creation")


class BulkCreateIssuesArgs(ToolArguments):
    issue_updates: list[IssueUpdate] = Field(
        ..., min_length=1, max_length=50,
        description="Issues to create (Jira Cloud limit is typically 50 per request)",
    )
    validate_adf: bool = Field(
        True, description="If true, validates any ADF-like objects inside each issue fields object"
    )


class BulkGetEditableFieldsArgs(ToolArguments):
    issue_ids_or_keys: list[str] = Field(
        ..., min_length=1, max_length=1000, description="Issue IDs or keys to calculate bulk-editable fields for"
    )
    search_text: Optional[str] = Field(None, description="Optional search text filter")
    starting_after: Optional[str] = Field(None, description="Pagination cursor")
    ending_before: Optional[str] = Field(None, description="Pagination cursor")


class BulkEditIssuesArgs(ToolArguments):
    selected_issue_ids_or_keys: list[str] = Field(
        ..., min_length=1, max_length=1000, description="Issue IDs or keys to bulk edit (Jira limit is typically 1000)"
    )
    selected_actions: list[str] = Field(
        ..., min_length=1, max_length=200,
        description="Field IDs to be bulk edited (use jira_bulk_get_editable_fields to discover field IDs "
                    "for your selected issues)",
    )
    edited_fields_input: dict[str, Any] = Field(
        ..., description="Object containing the new field values (must align to selectedActions)"
    )
    send_bulk_notification: bool = Field(True, description="Whether Jira should send a bulk change notification email")
    validate_adf: bool = Field(True, description="If true, validates any ADF-like objects inside editedFieldsInput")


# User Schemas

class SearchUsersArgs(ToolArguments):
    query: str = Field(..., description="Search query (email or name)")
    max_results: int = Field(10, ge=1, le=50, description="Max results (1-50)")
    include_inactive: bool = Field(False, description="If true, do not filter out inactive users client-side")


class ResolveUserAccountIdArgs(ToolArguments):
    query: str = Field(..., description="Email or name to resolve")
    require_email_match: bool = Field(
        False, description="If true, prefers exact email match when emailAddress is present"
    )
    include_inactive: bool = Field(False, description="If true, allow inactive users")
