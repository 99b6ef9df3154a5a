"""Jira core: REST client, endpoint configuration and ADF validation."""

from .adf import assert_valid_adf_doc, looks_like_adf_doc, text_to_adf, validate_adf_in_fields
from .client import JiraClient, client_from_env
from .config import BasicAuth, BearerAuth, JiraClientConfig, config_from_env
from .errors import (
    AdfValidationError,
    ConfigurationError,
    JiraError,
    JiraHttpError,
    JiraTimeoutError,
    JiraTransportError,
)

__version__ = "0.1.0"

__all__ = [
    "AdfValidationError",
    "BasicAuth",
    "BearerAuth",
    "ConfigurationError",
    "JiraClient",
    "JiraClientConfig",
    "JiraError",
    "JiraHttpError",
    "JiraTimeoutError",
    "JiraTransportError",
    "assert_valid_adf_doc",
    "client_from_env",
    "config_from_env",
    "looks_like_adf_doc",
    "text_to_adf",
    "validate_adf_in_fields",
    "__version__",
]
