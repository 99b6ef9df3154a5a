"""Async Jira REST client.

One JiraClient call is one HTTP exchange: build the URL, attach the
Authorization header, race the exchange against the configured timeout and
turn every failure into a JiraError subclass. Nothing is retried or cached, and
the client holds no per-request state, so one instance can serve concurrent
tool calls.
"""
import asyncio
import json
from typing import Any, Mapping, Optional, Union

import httpx

from .config import JiraClientConfig, config_from_env, normalize_base_url
from .errors import JiraHttpError, JiraTimeoutError, JiraTransportError

QueryValue = Union[str, int, float, bool, None]
Query = Mapping[str, QueryValue]

MAX_ERROR_BODY_CHARS = 20_000
TRUNCATION_MARKER = "…(truncated)"

_NO_BODY = object()


def encode_query(query: Optional[Query]) -> dict[str, str]:
    """Drop None values and stringify the rest (booleans as true/false)."""
    if not query:
        return {}
    params = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


def truncate_body_text(text: str) -> str:
    if len(text) > MAX_ERROR_BODY_CHARS:
        return text[:MAX_ERROR_BODY_CHARS] + TRUNCATION_MARKER
    return text


async def _read_body_text_safely(response: httpx.Response) -> Optional[str]:
    # Diagnostics only: an unreadable body must not mask the HTTP error itself.
    try:
        await response.aread()
        return truncate_body_text(response.text)
    except (httpx.HTTPError, httpx.StreamError):
        return None


class JiraClient:
    """Thin async wrapper over the Jira REST API."""

    def __init__(self, config: JiraClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config.model_copy(update={"base_url": normalize_base_url(config.base_url)})
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def auth_header(self) -> str:
        return self.config.auth.header_value()

    def url(self, path: str, query: Optional[Query] = None) -> str:
        """Resolve path (with or without a leading slash) and query against the base URL."""
        url = httpx.URL(f"{self.config.base_url}/{path.lstrip('/')}")
        params = encode_query(query)
        if params:
            url = url.copy_merge_params(params)
        return str(url)

    async def get_json(self, path: str, query: Optional[Query] = None) -> Any:
        return await self._request("GET", path, query=query)

    async def put_json(self, path: str, body: Any, query: Optional[Query] = None) -> Any:
        return await self._request("PUT", path, body=body, query=query)

    async def post_json(self, path: str, body: Any, query: Optional[Query] = None) -> Any:
        return await self._request("POST", path, body=body, query=query)

    async def _request(self, method: str, path: str, body: Any = _NO_BODY, query: Optional[Query] = None) -> Any:
        url = self.url(path, query)
        loop = asyncio.get_running_loop()
        exchange = asyncio.ensure_future(self._exchange(method, url, body))
        expired = False

        def _expire() -> None:
            nonlocal expired
            expired = True
            exchange.cancel()

        timer = loop.call_later(self.config.timeout, _expire)
        try:
            return await exchange
        except asyncio.CancelledError:
            if expired:
                raise JiraTimeoutError(
                    f"Jira {method} timed out after {self.config.timeout:g}s",
                    method=method,
                    url=url,
                    timeout=self.config.timeout,
                ) from None
            raise
        finally:
            timer.cancel()

    async def _exchange(self, method: str, url: str, body: Any) -> Any:
        headers = {
            "Accept": "application/json",
            "Authorization": self.auth_header(),
        }
        content = None
        if body is not _NO_BODY:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body).encode("utf-8")

        # Deadline is enforced by _request, so httpx's own timeouts are disabled.
        async with httpx.AsyncClient(transport=self._transport, timeout=None) as http:
            request = http.build_request(method, url, headers=headers, content=content)
            try:
                response = await http.send(request, stream=True)
                try:
                    return await self._read_result(method, url, response, has_body=body is not _NO_BODY)
                finally:
                    await response.aclose()
            except httpx.RequestError as exc:
                raise JiraTransportError(f"Jira {method} request failed: {exc}", url=url) from exc

    async def _read_result(self, method: str, url: str, response: httpx.Response, has_body: bool) -> Any:
        # Issue edits and transitions commonly answer 204 No Content.
        if has_body and response.status_code == 204:
            return {}

        if not response.is_success:
            body_text = await _read_body_text_safely(response)
            raise JiraHttpError(
                f"Jira {method} failed: {response.status_code} {response.reason_phrase}",
                status=response.status_code,
                url=url,
                body_text=body_text,
            )

        if has_body and "application/json" not in response.headers.get("content-type", ""):
            return {}

        await response.aread()
        return response.json()


def client_from_env(
    environ: Optional[Mapping[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> JiraClient:
    """Build a JiraClient from JIRA_* environment variables."""
    return JiraClient(config_from_env(environ), transport=transport)
