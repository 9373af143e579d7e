"""
HTTP Client for Sentinel core.

Thin wrapper around httpx.AsyncClient used by every suite. It resolves paths
against the target base URL, injects default and auth headers, enforces the
per-request timeout and returns a compact Response. Redirects are never
followed and nothing is retried: a timeout or network failure raises
TransportError.
"""

from __future__ import annotations

import base64
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional
from urllib.parse import urljoin

import httpx

from .errors import TransportError

AuthHeaderProvider = Callable[[], Dict[str, str]]


@dataclass
class Response:
    """Normalized response object returned by HTTPClient.

    Header names are lowercased. Times are expressed in milliseconds.
    """

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    url: str = ""
    elapsed_ms: float = 0.0

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400


def _merge_headers(*layers: Optional[Dict[str, str]]) -> Dict[str, str]:
    """Merge header dicts case-insensitively; later layers win."""
    merged: Dict[str, str] = {}
    for layer in layers:
        for name, value in (layer or {}).items():
            merged[name.lower()] = value
    return merged


class HTTPClient:
    """Async HTTP sender shared by all suites of one scan."""

    def __init__(self,
                 base_url: str,
                 timeout_ms: int = 8000,
                 default_headers: Optional[Dict[str, str]] = None,
                 auth_header: Optional[AuthHeaderProvider] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.timeout_ms = timeout_ms
        self.default_headers = default_headers or {}
        self.auth_header = auth_header
        self.logger = logging.getLogger(__name__)
        self._transport = transport
        self._session: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HTTPClient":
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _ensure_session(self) -> httpx.AsyncClient:
        if self._session is None:
            self._session = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_ms / 1000.0),
                follow_redirects=False,
                transport=self._transport,
            )
        return self._session

    async def close(self) -> None:
        if self._session:
            await self._session.aclose()
            self._session = None

    def resolve(self, path: str = "/") -> str:
        return urljoin(self.base_url, path)

    async def request(self,
                      method: str,
                      path: Optional[str] = None,
                      url: Optional[str] = None,
                      headers: Optional[Dict[str, str]] = None,
                      body: Optional[str] = None) -> Response:
        """Send one request.

        `url` takes precedence over `path`; `path` is resolved against the base URL.
        Header precedence: defaults < auth header < per-request headers.
        """
        session = self._ensure_session()
        target_url = url or self.resolve(path or "/")
        final_headers = _merge_headers(
            self.default_headers,
            self.auth_header() if self.auth_header else None,
            headers,
        )

        self.logger.debug(f"{method.upper()} {target_url}")
        start_time = time.monotonic()
        try:
            response = await session.request(
                method=method.upper(),
                url=target_url,
                headers=final_headers,
                content=body,
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Request timed out after {self.timeout_ms}ms: {method.upper()} {target_url}",
                method=method.upper(),
                url=target_url,
            ) from e
        except httpx.TransportError as e:
            raise TransportError(
                f"Request failed: {method.upper()} {target_url}: {e}",
                method=method.upper(),
                url=target_url,
            ) from e

        return Response(
            status_code=response.status_code,
            headers={name.lower(): value for name, value in response.headers.items()},
            text=response.text,
            url=target_url,
            elapsed_ms=(time.monotonic() - start_time) * 1000.0,
        )


def build_auth_header(auth) -> AuthHeaderProvider:
    """Return a provider producing the credential header for the configured auth type."""

    def provider() -> Dict[str, str]:
        if auth.type == "bearer" and auth.bearer_token:
            return {"authorization": f"Bearer {auth.bearer_token}"}
        if auth.type == "basic" and auth.basic_user is not None and auth.basic_pass is not None:
            token = base64.b64encode(f"{auth.basic_user}:{auth.basic_pass}".encode()).decode()
            return {"authorization": f"Basic {token}"}
        if auth.type == "apiKey" and auth.api_key_header and auth.api_key_value:
            return {auth.api_key_header: auth.api_key_value}
        return {}

    return provider
