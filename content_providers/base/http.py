"""HTTP-backed provider base.

Wraps ``httpx.AsyncClient`` so concrete providers only describe endpoints and
payload mapping. Every failure (transport error, non-2xx status, undecodable
body) is classified, logged and returned as ``None``; nothing raised here
reaches the format resolver.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .constants import DEFAULT_HTTP_TIMEOUT
from .errors import ErrorCode, ProviderError, classify_exception, classify_status
from .interfaces import ContentProvider
from .logging import LogContext, get_logger, log_event
from .models import AuthData


class HttpContentProvider(ContentProvider):
    api_base: str = ""

    def __init__(
        self,
        api_base: Optional[str] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if api_base:
            self.api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._logger = get_logger(f"content_providers.{self.id or 'http'}")

    def auth_headers(self, auth: Optional[AuthData]) -> Optional[Dict[str, str]]:
        if auth is None:
            return None
        return {"Authorization": f"{auth.token_type or 'Bearer'} {auth.access_token}", "Accept": "application/json"}

    async def api_request(
        self,
        path: str,
        auth: Optional[AuthData] = None,
        method: str = "GET",
        body: Optional[Any] = None,
    ) -> Optional[Any]:
        url = f"{self.api_base}{path}"
        headers = self.auth_headers(auth) or {"Accept": "application/json"}
        ctx = LogContext(provider=self.id, path=path, extra={"method": method})
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.request(method, url, headers=headers, json=body)
        except httpx.HTTPError as e:
            self._report(ProviderError(code=classify_exception(e), message=str(e), provider=self.id, path=path, raw=e), ctx)
            return None

        if not resp.is_success:
            code = classify_status(resp.status_code)
            self._report(ProviderError(code=code, message=resp.reason_phrase, provider=self.id, path=path, status=resp.status_code), ctx)
            return None

        try:
            return resp.json()
        except ValueError as e:
            self._report(ProviderError(code=ErrorCode.VALIDATION, message=f"invalid JSON: {e}", provider=self.id, path=path, raw=e), ctx)
            return None

    def _report(self, error: ProviderError, ctx: LogContext) -> None:
        log_event(
            self._logger,
            "http.error",
            ctx,
            level=logging.WARNING,
            code=error.code.value,
            status=error.status,
            error=error.message,
        )


__all__ = ["HttpContentProvider"]
