"""Atlassian Document Format (ADF) shape checks.

Jira rejects malformed rich-text documents with a generic 400. Checking the
outer shape locally lets us name the offending field before anything is sent.
"""
from typing import Any

from .errors import AdfValidationError

ADF_DOC_TYPE = "doc"
ADF_VERSION = 1


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def looks_like_adf_doc(value: Any) -> bool:
    """Cheap pre-filter: does this value claim to be an ADF doc?

    Only mappings qualify. Lists never do, even when they hold doc-shaped items.
    """
    if not isinstance(value, dict):
        return False
    return value.get("type") == ADF_DOC_TYPE or "version" in value or "content" in value


def assert_valid_adf_doc(value: Any, field_name: str) -> None:
    """Raise AdfValidationError unless value has type="doc", a numeric version and list content."""
    if not isinstance(value, dict):
        raise AdfValidationError(
            f'Field "{field_name}" was expected to be an ADF doc object, got {type(value).__name__}',
            field_name,
        )
    if value.get("type") != ADF_DOC_TYPE:
        raise AdfValidationError(f'Field "{field_name}" ADF doc is missing type="doc"', field_name)
    if not _is_number(value.get("version")):
        raise AdfValidationError(f'Field "{field_name}" ADF doc is missing numeric version', field_name)
    if not isinstance(value.get("content"), list):
        raise AdfValidationError(f'Field "{field_name}" ADF doc is missing array content', field_name)


def validate_adf_in_fields(fields: dict[str, Any]) -> None:
    """Strictly validate every field value that looks like an ADF doc."""
    for field_name, value in fields.items():
        if not looks_like_adf_doc(value):
            continue
        assert_valid_adf_doc(value, field_name)


def text_to_adf(text: str) -> dict[str, Any]:
    """Wrap plain text in a single-paragraph ADF doc."""
    return {
        "type": ADF_DOC_TYPE,
        "version": ADF_VERSION,
        "content": [{"type": "paragraph", "content": [{"type": "text", "text": text}]}],
    }
