"""Tests for endpoint configuration and the environment adapter."""
import base64

import pytest

from jira_core.client import JiraClient, client_from_env
from jira_core.config import (
    DEFAULT_TIMEOUT_SECONDS,
    BasicAuth,
    BearerAuth,
    JiraClientConfig,
    config_from_env,
    normalize_base_url,
)
from jira_core.errors import ConfigurationError


class TestNormalizeBaseUrl:
    """Test base URL normalization."""

    @pytest.mark.parametrize("raw", [
        "https://example.atlassian.net",
        "https://example.atlassian.net/",
        "https://example.atlassian.net///",
        "  https://example.atlassian.net/  ",
        "\thttps://example.atlassian.net\n",
    ])
    def test_trims_whitespace_and_trailing_slashes(self, raw):
        assert normalize_base_url(raw) == "https://example.atlassian.net"

    def test_keeps_context_path(self):
        assert normalize_base_url("http://jira.local/jira/") == "http://jira.local/jira"

    @pytest.mark.parametrize("raw", [
        "example.atlassian.net",
        "ftp://example.atlassian.net",
        "",
        "   ",
        "//example.atlassian.net",
    ])
    def test_requires_http_scheme(self, raw):
        with pytest.raises(ConfigurationError, match="must start with http:// or https://"):
            normalize_base_url(raw)


class TestClientConstruction:
    """Test that JiraClient validates and normalizes its configuration."""

    def test_normalizes_base_url(self):
        client = JiraClient(JiraClientConfig(base_url=" https://x.atlassian.net/ ", auth=BearerAuth(token="t")))
        assert client.base_url == "https://x.atlassian.net"

    def test_fails_without_scheme(self):
        config = JiraClientConfig(base_url="x.atlassian.net", auth=BearerAuth(token="t"))
        with pytest.raises(ConfigurationError):
            JiraClient(config)

    def test_default_timeout(self):
        client = JiraClient(JiraClientConfig(base_url="https://x", auth=BearerAuth(token="t")))
        assert client.config.timeout == DEFAULT_TIMEOUT_SECONDS


class TestAuthHeader:
    """Test Authorization header construction."""

    @pytest.mark.parametrize("token", ["abc", "pat-123", "with spaces and ünïcode"])
    def test_bearer(self, token):
        client = JiraClient(JiraClientConfig(base_url="https://x", auth=BearerAuth(token=token)))
        assert client.auth_header() == f"Bearer {token}"

    @pytest.mark.parametrize("email,api_token", [
        ("dev@example.com", "secret"),
        ("a@b.c", "tok:with:colons"),
    ])
    def test_basic(self, email, api_token):
        client = JiraClient(JiraClientConfig(
            base_url="https://x", auth=BasicAuth(email=email, api_token=api_token)
        ))
        expected = base64.b64encode(f"{email}:{api_token}".encode()).decode()
        assert client.auth_header() == f"Basic {expected}"

    def test_secrets_not_in_repr(self):
        config = JiraClientConfig(base_url="https://x", auth=BasicAuth(email="a@b.c", api_token="hunter2"))
        assert "hunter2" not in repr(config)


class TestConfigFromEnv:
    """Test building configuration from JIRA_* variables."""

    def test_missing_base_url(self):
        with pytest.raises(ConfigurationError) as exc_info:
            config_from_env({"JIRA_BEARER_TOKEN": "t"})
        assert str(exc_info.value) == "Missing required env var: JIRA_BASE_URL"

    def test_empty_base_url_counts_as_missing(self):
        with pytest.raises(ConfigurationError, match="JIRA_BASE_URL"):
            config_from_env({"JIRA_BASE_URL": "", "JIRA_BEARER_TOKEN": "t"})

    def test_missing_auth(self):
        with pytest.raises(ConfigurationError) as exc_info:
            config_from_env({"JIRA_BASE_URL": "https://x", "JIRA_EMAIL": "a@b.c"})
        assert str(exc_info.value) == (
            "Missing auth env vars: set either JIRA_BEARER_TOKEN or (JIRA_EMAIL + JIRA_API_TOKEN)"
        )

    def test_basic_auth(self):
        config = config_from_env({
            "JIRA_BASE_URL": "https://x",
            "JIRA_EMAIL": "a@b.c",
            "JIRA_API_TOKEN": "tok",
        })
        assert isinstance(config.auth, BasicAuth)
        assert config.auth.email == "a@b.c"
        assert config.auth.api_token.get_secret_value() == "tok"

    def test_bearer_overrides_basic(self):
        config = config_from_env({
            "JIRA_BASE_URL": "https://x",
            "JIRA_BEARER_TOKEN": "bearer-tok",
            "JIRA_EMAIL": "a@b.c",
            "JIRA_API_TOKEN": "tok",
        })
        assert isinstance(config.auth, BearerAuth)
        assert config.auth.header_value() == "Bearer bearer-tok"

    def test_timeout(self):
        config = config_from_env({
            "JIRA_BASE_URL": "https://x",
            "JIRA_BEARER_TOKEN": "t",
            "JIRA_TIMEOUT_SECONDS": "2.5",
        })
        assert config.timeout == 2.5

    @pytest.mark.parametrize("raw", ["soon", "0", "-1"])
    def test_invalid_timeout(self, raw):
        with pytest.raises(ConfigurationError, match="JIRA_TIMEOUT_SECONDS"):
            config_from_env({"JIRA_BASE_URL": "https://x", "JIRA_BEARER_TOKEN": "t", "JIRA_TIMEOUT_SECONDS": raw})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("JIRA_BASE_URL", "https://env.atlassian.net/")
        monkeypatch.setenv("JIRA_BEARER_TOKEN", "from-env")
        client = client_from_env()
        assert client.base_url == "https://env.atlassian.net"
        assert client.auth_header() == "Bearer from-env"

    def test_client_from_env_rejects_bad_scheme(self):
        with pytest.raises(ConfigurationError, match="http://"):
            client_from_env({"JIRA_BASE_URL": "example.atlassian.net", "JIRA_BEARER_TOKEN": "t"})
