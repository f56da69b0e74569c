"""
Thin async HTTP client. Every call returns an ApiResult; nothing raises past
the caller for network or HTTP failures.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import ErrorKind, error_message, kind_for_status
from .state import AppState

logger = logging.getLogger(__name__)


@dataclass
class ApiResult:
    ok: bool
    status_code: int | None = None
    data: Any = None
    error: str | None = None
    kind: ErrorKind | None = None


class ApiClient:
    def __init__(
        self,
        base_url: str,
        state: AppState,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.state = state
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        if self.state.token:
            return {"Authorization": f"Bearer {self.state.token}"}
        return {}

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        raw: bool = False,
    ) -> ApiResult:
        """
        Send one request. With `raw=True` a successful body is returned as
        bytes instead of decoded JSON.
        """
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params=params,
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            # Connection failures and timeouts alike
            logger.warning("%s %s failed: %s", method, path, exc)
            return ApiResult(ok=False, error=str(exc) or exc.__class__.__name__, kind=ErrorKind.UNREACHABLE)

        if response.is_success:
            if raw:
                return ApiResult(ok=True, status_code=response.status_code, data=response.content)
            return ApiResult(ok=True, status_code=response.status_code, data=_decode(response))

        body = _decode(response)
        kind = kind_for_status(response.status_code)
        if response.status_code == 401 and self.state.token is not None:
            logger.info("Session rejected by server, signing out")
            self.state.sign_out()

        return ApiResult(
            ok=False,
            status_code=response.status_code,
            data=body,
            error=error_message(body, response.reason_phrase or f"HTTP {response.status_code}"),
            kind=kind,
        )

    async def get(self, path: str, **kwargs) -> ApiResult:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> ApiResult:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> ApiResult:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> ApiResult:
        return await self.request("DELETE", path, **kwargs)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
