"""Shared fixtures: a JiraClient backed by httpx.MockTransport."""
import pytest
import httpx

from jira_core.client import JiraClient
from jira_core.config import BasicAuth, BearerAuth, JiraClientConfig

BASE_URL = "https://example.atlassian.net"


def make_client(handler, base_url=BASE_URL, auth=None, timeout=5.0) -> JiraClient:
    config = JiraClientConfig(
        base_url=base_url,
        auth=auth or BasicAuth(email="dev@example.com", api_token="secret-token"),
        timeout=timeout,
    )
    return JiraClient(config, transport=httpx.MockTransport(handler))


class Recorder:
    """Records requests and answers with a canned response."""

    def __init__(self, response=None):
        self.requests: list[httpx.Request] = []
        self.response = response if response is not None else httpx.Response(200, json={})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def bearer_auth():
    return BearerAuth(token="pat-123")
