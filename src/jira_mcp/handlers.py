"""MCP tool handlers for the Jira wrapper.

All handlers follow a consistent pattern:
- Accept: the raw arguments dict and a JiraClient
- Validate arguments with the matching model from schemas.py
- Make exactly one Jira call and return a JSON-serializable result
- Raise on failure; server.py turns exceptions into error envelopes
"""
import logging
from typing import Any, Optional
from urllib.parse import quote

from jira_core.adf import assert_valid_adf_doc, text_to_adf, validate_adf_in_fields
from jira_core.client import JiraClient
from jira_core.errors import AdfValidationError

from . import formatters
from . import schemas

logger = logging.getLogger("jira-mcp.handlers")

API = "/rest/api/3"

RESOLVE_USER_SEARCH_LIMIT = 20
RESOLVE_USER_CANDIDATE_LIMIT = 10


class ToolError(Exception):
    """A tool-level failure with a message and optional structured details."""

    def __init__(self, message: str, extra: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.extra = extra


def issue_path(issue_key: str, suffix: str = "") -> str:
    return f"{API}/issue/{quote(issue_key.strip(), safe='')}{suffix}"


def _join(values: Optional[list[str]]) -> Optional[str]:
    return ",".join(values) if values else None


# ============================================================================
# Field Handlers
# ============================================================================

async def handle_list_fields(arguments: dict, jira: JiraClient) -> Any:
    """List field definitions, optionally filtered by a substring of id or name."""
    args = schemas.ListFieldsArgs.model_validate(arguments)
    fields = await jira.get_json(f"{API}/field")

    q = (args.query or "").strip().lower()
    if q:
        fields = [f for f in fields if q in f["id"].lower() or q in f["name"].lower()]

    shaped = [formatters.format_field(f, include_schema=args.include_schema) for f in fields]
    logger.info(f"Listed {len(shaped)} fields")
    return {"count": len(shaped), "fields": shaped}


# ============================================================================
# Issue Handlers
# ============================================================================

async def handle_get_issue(arguments: dict, jira: JiraClient) -> Any:
    args = schemas.GetIssueArgs.model_validate(arguments)
    query = {"fields": _join(args.fields), "expand": _join(args.expand)}
    return await jira.get_json(issue_path(args.issue_key), query)


async def handle_update_issue_fields(arguments: dict, jira: JiraClient) -> Any:
    """Update issue fields with PUT /issue/{key}.

    Jira answers 204 No Content on success, so the result is synthesized.
    """
    args = schemas.UpdateIssueFieldsArgs.model_validate(arguments)
    issue_key = args.issue_key.strip()
    if args.validate_adf:
        validate_adf_in_fields(args.fields)

    body: dict[str, Any] = {"fields": args.fields}
    if args.update is not None:
        body["update"] = args.update

    await jira.put_json(issue_path(issue_key), body, {
        "notifyUsers": args.notify_users,
        "overrideScreenSecurity": args.override_screen_security,
        "overrideEditableFlag": args.override_editable_flag,
    })
    logger.info(f"Updated {len(args.fields)} field(s) on {issue_key}")
    return {"success": True, "issueKey": issue_key}


async def handle_search_issues_jql(arguments: dict, jira: JiraClient) -> Any:
    args = schemas.SearchIssuesJqlArgs.model_validate(arguments)
    body: dict[str, Any] = {
        "jql": args.jql,
        "maxResults": args.max_results,
        "startAt": args.start_at,
    }
    if args.fields:
        body["fields"] = args.fields
    if args.expand:
        body["expand"] = args.expand
    return await jira.post_json(f"{API}/search", body)


async def handle_create_issue(arguments: dict, jira: JiraClient) -> Any:
    args = schemas.CreateIssueArgs.model_validate(arguments)
    if args.validate_adf:
        validate_adf_in_fields(args.fields)
    result = await jira.post_json(f"{API}/issue", {"fields": args.fields})
    logger.info(f"Created issue {result.get('key') if isinstance(result, dict) else None}")
    return result


async def handle_add_comment(arguments: dict, jira: JiraClient) -> Any:
    """Add a comment. Plain strings are wrapped in a one-paragraph ADF doc."""
    args = schemas.AddCommentArgs.model_validate(arguments)
    if isinstance(args.body, str):
        comment_body = text_to_adf(args.body)
    else:
        comment_body = args.body
        if args.validate_adf:
            assert_valid_adf_doc(comment_body, "comment.body")

    return await jira.post_json(issue_path(args.issue_key, "/comment"), {"body": comment_body})


# ============================================================================
# Transition Handlers
# ============================================================================

async def handle_get_transitions(arguments: dict, jira: JiraClient) -> Any:
    args = schemas.GetTransitionsArgs.model_validate(arguments)
    return await jira.get_json(issue_path(args.issue_key, "/transitions"), {"expand": _join(args.expand)})


async def handle_transition_issue(arguments: dict, jira: JiraClient) -> Any:
    args = schemas.TransitionIssueArgs.model_validate(arguments)
    issue_key = args.issue_key.strip()
    body: dict[str, Any] = {"transition": {"id": args.transition_id}}
    if args.fields is not None:
        body["fields"] = args.fields
    if args.update is not None:
        body["update"] = args.update

    await jira.post_json(issue_path(issue_key, "/transitions"), body)
    logger.info(f"Transitioned {issue_key} with transition {args.transition_id}")
    return {"success": True, "issueKey": issue_key, "transitionId": args.transition_id}


# ============================================================================
# Bulk Handlers
# ============================================================================

async def handle_bulk_create_issues(arguments: dict, jira: JiraClient) -> Any:
    """Bulk create issues. ADF failures name the offending issueUpdates index."""
    args = schemas.BulkCreateIssuesArgs.model_validate(arguments)
    if args.validate_adf:
        for idx, issue_update in enumerate(args.issue_updates):
            try:
                validate_adf_in_fields(issue_update.fields)
            except AdfValidationError as e:
                raise ToolError(
                    f"ADF validation failed for issueUpdates[{idx}].fields",
                    formatters.error_to_public_json(e),
                ) from e

    issue_updates = [u.model_dump(by_alias=True, exclude_none=True) for u in args.issue_updates]
    return await jira.post_json(f"{API}/issue/bulk", {"issueUpdates": issue_updates})


async def handle_bulk_get_editable_fields(arguments: dict, jira: JiraClient) -> Any:
    args = schemas.BulkGetEditableFieldsArgs.model_validate(arguments)
    return await jira.get_json(f"{API}/bulk/issues/fields", {
        "issueIdsOrKeys": ",".join(args.issue_ids_or_keys),
        "searchText": args.search_text,
        "startingAfter": args.starting_after,
        "endingBefore": args.ending_before,
    })


async def handle_bulk_edit_issues(arguments: dict, jira: JiraClient) -> Any:
    args = schemas.BulkEditIssuesArgs.model_validate(arguments)
    if args.validate_adf:
        validate_adf_in_fields(args.edited_fields_input)

    payload = {
        "selectedIssueIdsOrKeys": args.selected_issue_ids_or_keys,
        "selectedActions": args.selected_actions,
        "editedFieldsInput": args.edited_fields_input,
        "sendBulkNotification": args.send_bulk_notification,
    }
    result = await jira.post_json(f"{API}/bulk/issues/fields", payload)
    logger.info(f"Submitted bulk edit for {len(args.selected_issue_ids_or_keys)} issue(s)")
    return result


# ============================================================================
# User Handlers
# ============================================================================

def _active_users(users: list[dict], include_inactive: bool) -> list[dict]:
    if include_inactive:
        return users
    return [u for u in users if u.get("active") is not False]


async def handle_search_users(arguments: dict, jira: JiraClient) -> Any:
    args = schemas.SearchUsersArgs.model_validate(arguments)
    users = await jira.get_json(f"{API}/user/search", {"query": args.query, "maxResults": args.max_results})
    shaped = [formatters.format_user(u) for u in _active_users(users, args.include_inactive)]
    return {"count": len(shaped), "users": shaped}


async def handle_resolve_user_account_id(arguments: dict, jira: JiraClient) -> Any:
    """Pick one user for a query.

    An exact (case-insensitive) email match wins; otherwise the first candidate
    in the order Jira returned them.
    """
    args = schemas.ResolveUserAccountIdArgs.model_validate(arguments)
    users = await jira.get_json(
        f"{API}/user/search", {"query": args.query, "maxResults": RESOLVE_USER_SEARCH_LIMIT}
    )

    candidates = _active_users(users, args.include_inactive)
    if not candidates:
        raise ToolError("No users found for query", {"query": args.query})

    q = args.query.strip().lower()
    email_exact = next(
        (u for u in candidates if u.get("emailAddress") and u["emailAddress"].lower() == q),
        None,
    )
    if args.require_email_match and email_exact is None:
        raise ToolError("No exact email match found (email visibility may be restricted in your Jira)", {
            "query": args.query,
            "hint": "Try resolving by display name, or use the candidates list from jira_search_users "
                    "to pick an accountId.",
        })

    chosen = email_exact if email_exact is not None else candidates[0]
    logger.info(f"Resolved user query to accountId {chosen.get('accountId')}")
    return {
        **formatters.format_user(chosen),
        "candidates": [formatters.format_user(u) for u in candidates[:RESOLVE_USER_CANDIDATE_LIMIT]],
    }
