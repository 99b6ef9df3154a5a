"""Endpoint configuration for the Jira client.

The client itself only ever sees a JiraClientConfig. Reading the process
environment happens here, in config_from_env(), which is called once at startup.
"""
import base64
import os
from typing import Annotated, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from .errors import ConfigurationError

DEFAULT_TIMEOUT_SECONDS = 30.0

ENV_BASE_URL = "JIRA_BASE_URL"
ENV_BEARER_TOKEN = "JIRA_BEARER_TOKEN"
ENV_EMAIL = "JIRA_EMAIL"
ENV_API_TOKEN = "JIRA_API_TOKEN"
ENV_TIMEOUT = "JIRA_TIMEOUT_SECONDS"


class BearerAuth(BaseModel):
    """Bearer token authentication (Jira Data Center PATs, OAuth access tokens)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["bearer"] = "bearer"
    token: SecretStr

    def header_value(self) -> str:
        return f"Bearer {self.token.get_secret_value()}"


class BasicAuth(BaseModel):
    """Basic authentication with an Atlassian account email and API token."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["basic"] = "basic"
    email: str = Field(..., min_length=1)
    api_token: SecretStr

    def header_value(self) -> str:
        raw = f"{self.email}:{self.api_token.get_secret_value()}".encode("utf-8")
        return f"Basic {base64.b64encode(raw).decode('ascii')}"


JiraAuth = Annotated[Union[BearerAuth, BasicAuth], Field(discriminator="type")]


class JiraClientConfig(BaseModel):
    """Base URL, credentials and timeout for one Jira site."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: str
    auth: JiraAuth
    timeout: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0, description="Per-request timeout in seconds")


def normalize_base_url(raw: str) -> str:
    """Trim whitespace and trailing slashes; require an explicit http(s) scheme."""
    trimmed = raw.strip().rstrip("/")
    if not trimmed.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"{ENV_BASE_URL} must start with http:// or https:// (e.g. https://your-domain.atlassian.net)"
        )
    return trimmed


def _parse_timeout(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"{ENV_TIMEOUT} must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise ConfigurationError(f"{ENV_TIMEOUT} must be positive, got {raw!r}")
    return timeout


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> JiraClientConfig:
    """Build a JiraClientConfig from JIRA_* environment variables.

    A bearer token takes precedence over email + API token when both are set.
    """
    env = os.environ if environ is None else environ

    base_url = env.get(ENV_BASE_URL)
    if not base_url:
        raise ConfigurationError(f"Missing required env var: {ENV_BASE_URL}")

    bearer = env.get(ENV_BEARER_TOKEN)
    email = env.get(ENV_EMAIL)
    api_token = env.get(ENV_API_TOKEN)
    timeout = _parse_timeout(env.get(ENV_TIMEOUT))

    if bearer:
        auth: Union[BearerAuth, BasicAuth] = BearerAuth(token=bearer)
    elif email and api_token:
        auth = BasicAuth(email=email, api_token=api_token)
    else:
        raise ConfigurationError(
            f"Missing auth env vars: set either {ENV_BEARER_TOKEN} or ({ENV_EMAIL} + {ENV_API_TOKEN})"
        )

    return JiraClientConfig(base_url=base_url, auth=auth, timeout=timeout)
