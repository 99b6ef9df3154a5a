"""Failure taxonomy for the Jira core.

Every failure raised by jira_core is a JiraError subclass, so the tool layer can
tell them apart by type and read their structured attributes:

- ConfigurationError: bad endpoint configuration, raised at construction time
- AdfValidationError: an ADF document failed the local shape check
- JiraTimeoutError: no response before the configured timeout (no status code)
- JiraHttpError: the remote answered with a non-2xx status
- JiraTransportError: DNS, connection or body read failure
"""
from typing import Optional


class JiraError(Exception):
    """Base class for all Jira core failures."""


class ConfigurationError(JiraError):
    """Raised when the endpoint configuration is missing or malformed."""


class AdfValidationError(JiraError, ValueError):
    """Raised when a value does not satisfy the minimal ADF document shape."""

    def __init__(self, message: str, field_name: str):
        super().__init__(message)
        self.field_name = field_name


class JiraTimeoutError(JiraError, TimeoutError):
    """Raised when a request is cancelled because its timeout elapsed."""

    def __init__(self, message: str, method: str, url: str, timeout: float):
        super().__init__(message)
        self.method = method
        self.url = url
        self.timeout = timeout


class JiraHttpError(JiraError):
    """Raised for non-2xx responses."""

    def __init__(self, message: str, status: int, url: str, body_text: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.url = url
        self.body_text = body_text


class JiraTransportError(JiraError):
    """Raised when the request could not be sent or its response not received."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url
