"""
Local mirror of server state for a single signed-in session.

Every local change is derived from the server's response to the request that
caused it. A failed request leaves every collection exactly as it was and
returns the failed ApiResult.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any

import httpx

from .api import ApiClient, ApiResult
from .errors import ErrorKind
from .config import ClientSettings
from .normalize import flatten_history, normalize_asset
from .state import AppState, LocalStore

logger = logging.getLogger(__name__)


def _replace_by_id(items: list[dict[str, Any]], entity: dict[str, Any]) -> list[dict[str, Any]]:
    return [entity if item.get("id") == entity.get("id") else item for item in items]


def _remove_by_id(items: list[dict[str, Any]], entity_id: str) -> list[dict[str, Any]]:
    return [item for item in items if item.get("id") != entity_id]


def _checked(result: ApiResult, shape: type = dict, **fields: type) -> ApiResult:
    """
    Pass `result` through unless it succeeded with a body that is not a
    `shape` (or lacks one of `fields` with the given type). A malformed body
    becomes a failed ApiResult so callers never index into it.
    """
    body = result.data
    if not result.ok or (
        isinstance(body, shape) and all(isinstance(body.get(k), t) for k, t in fields.items())
    ):
        return result
    logger.warning("Malformed response body (status %s)", result.status_code)
    return ApiResult(
        ok=False,
        status_code=result.status_code,
        data=body,
        error="Unexpected response from server",
        kind=ErrorKind.SERVER,
    )


class SyncCache:
    def __init__(self, api: ApiClient):
        self.api = api
        self.assets: list[dict[str, Any]] = []
        self.users: list[dict[str, Any]] = []
        self.logs: list[dict[str, Any]] = []
        self.complaints: list[dict[str, Any]] = []
        # One mutation in flight at a time, applied in issue order
        self._lock = asyncio.Lock()

    @property
    def state(self):
        return self.api.state

    async def aclose(self) -> None:
        await self.api.aclose()

    def get_asset(self, asset_id: str) -> dict[str, Any] | None:
        return next((a for a in self.assets if a.get("id") == asset_id), None)

    def _clear(self) -> None:
        self.assets = []
        self.users = []
        self.logs = []
        self.complaints = []

    # --- Session ---

    async def login(self, username: str, password: str) -> ApiResult:
        async with self._lock:
            result = _checked(
                await self.api.post("/auth/login", json={"username": username, "password": password}),
                user=dict,
                token=str,
            )
            if not result.ok:
                return result
            self.state.sign_in(result.data["user"], result.data["token"])
            logger.info("Signed in as %s", username)
        await self.refresh()
        return result

    async def logout(self) -> None:
        async with self._lock:
            self.state.sign_out()
            self._clear()

    async def refresh(self) -> ApiResult:
        """
        Reload assets (with their history) and users. Each collection is only
        replaced when its own fetch succeeds.
        """
        async with self._lock:
            assets_result = _checked(await self.api.get("/assets"), list)
            if assets_result.ok:
                assets = [normalize_asset(a) for a in assets_result.data if isinstance(a, dict)]
                logs, complaints = flatten_history(assets)
                self.assets, self.logs, self.complaints = assets, logs, complaints

            users_result = _checked(await self.api.get("/users"), list)
            if users_result.ok:
                self.users = [u for u in users_result.data if isinstance(u, dict)]

        if not assets_result.ok:
            return assets_result
        return users_result

    # --- Assets ---

    async def create_asset(self, fields: dict[str, Any]) -> ApiResult:
        async with self._lock:
            result = _checked(await self.api.post("/assets", json=fields))
            if result.ok:
                self.assets = [normalize_asset(result.data), *self.assets]
            return result

    async def update_asset(self, asset_id: str, changes: dict[str, Any]) -> ApiResult:
        async with self._lock:
            result = _checked(await self.api.put(f"/assets/{asset_id}", json=changes))
            if result.ok:
                self.assets = _replace_by_id(self.assets, normalize_asset(result.data))
            return result

    async def delete_asset(self, asset_id: str) -> ApiResult:
        async with self._lock:
            result = await self.api.delete(f"/assets/{asset_id}")
            if result.ok:
                self.assets = _remove_by_id(self.assets, asset_id)
                # Deleted assets drop out of listings with their history
                self.logs = [log for log in self.logs if log.get("assetId") != asset_id]
                self.complaints = [c for c in self.complaints if c.get("assetId") != asset_id]
            return result

    async def verify_asset(self, asset_id: str, verifier_name: str) -> ApiResult:
        async with self._lock:
            result = _checked(
                await self.api.post(f"/assets/{asset_id}/verify", json={"verifierName": verifier_name}),
                log=dict,
            )
            if not result.ok:
                return result

            log = result.data["log"]
            self.logs = [log, *self.logs]

            if isinstance(result.data.get("asset"), dict):
                self.assets = _replace_by_id(self.assets, normalize_asset(result.data["asset"]))
            else:
                asset = self.get_asset(asset_id)
                if asset is not None:
                    patched = dict(
                        asset,
                        lastVerifiedDate=log.get("timestamp"),
                        verifiedBy=log.get("verifiedBy"),
                        verificationLogs=[log, *asset.get("verificationLogs", [])],
                    )
                    self.assets = _replace_by_id(self.assets, patched)
            return result

    async def generate_identity_artifact(self, asset_id: str) -> ApiResult:
        """
        Mark the asset as labelled and download its printable card. A
        successful result carries the PDF bytes in `data`.
        """
        async with self._lock:
            result = _checked(await self.api.post(f"/assets/{asset_id}/qr"))
            if not result.ok:
                return result
            self.assets = _replace_by_id(self.assets, normalize_asset(result.data))
            return await self.api.get(f"/assets/{asset_id}/qr.pdf", raw=True)

    # --- Complaints ---

    async def file_complaint(
        self,
        asset_id: str,
        reported_by: str,
        description: str,
        complaint_date: date | None = None,
    ) -> ApiResult:
        body: dict[str, Any] = {"reportedBy": reported_by, "description": description}
        if complaint_date is not None:
            body["date"] = complaint_date.isoformat()

        async with self._lock:
            result = _checked(await self.api.post(f"/assets/{asset_id}/complaint", json=body))
            if not result.ok:
                return result

            complaint = result.data
            self.complaints = [complaint, *self.complaints]
            asset = self.get_asset(asset_id)
            if asset is not None:
                patched = dict(asset, complaints=[complaint, *asset.get("complaints", [])])
                self.assets = _replace_by_id(self.assets, patched)
            return result

    async def resolve_complaint(self, complaint_id: str) -> ApiResult:
        async with self._lock:
            result = _checked(await self.api.post(f"/complaints/{complaint_id}/resolve"))
            if not result.ok:
                return result

            complaint = result.data
            self.complaints = _replace_by_id(self.complaints, complaint)
            asset = self.get_asset(complaint.get("assetId"))
            if asset is not None:
                patched = dict(asset, complaints=_replace_by_id(asset.get("complaints", []), complaint))
                self.assets = _replace_by_id(self.assets, patched)
            return result

    # --- Users ---

    async def create_user(self, fields: dict[str, Any]) -> ApiResult:
        async with self._lock:
            result = _checked(await self.api.post("/users", json=fields))
            if result.ok:
                self.users = [result.data, *self.users]
            return result

    async def update_user(self, user_id: str, changes: dict[str, Any]) -> ApiResult:
        async with self._lock:
            result = _checked(await self.api.put(f"/users/{user_id}", json=changes))
            if result.ok:
                self.users = _replace_by_id(self.users, result.data)
            return result

    async def delete_user(self, user_id: str) -> ApiResult:
        async with self._lock:
            result = await self.api.delete(f"/users/{user_id}")
            if result.ok:
                self.users = _remove_by_id(self.users, user_id)
            return result


def build_cache(
    settings: ClientSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SyncCache:
    """Wire state, HTTP client and cache together from ClientSettings."""
    settings = settings or ClientSettings()
    state = AppState.load(LocalStore(settings.STATE_FILE))
    api = ApiClient(settings.API_URL, state, timeout=settings.REQUEST_TIMEOUT, transport=transport)
    return SyncCache(api)
