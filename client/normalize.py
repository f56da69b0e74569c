"""
Canonical client-side shapes. Servers have sent child collections under both
PascalCase and camelCase keys; everything is normalized here on ingest.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Iterable

_LOG_KEYS = ("verificationLogs", "VerificationLogs")
_COMPLAINT_KEYS = ("complaints", "Complaints")

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _children(raw: dict[str, Any], keys: tuple[str, ...]) -> list[dict[str, Any]]:
    # Lists under every casing are merged; an empty list under one key never
    # hides rows under another. Rows repeated across keys are kept once.
    merged: list[dict[str, Any]] = []
    seen: set[Any] = set()
    for key in keys:
        value = raw.get(key)
        if not isinstance(value, list):
            continue
        for item in value:
            if not isinstance(item, dict):
                continue
            item_id = item.get("id")
            if item_id is not None:
                if item_id in seen:
                    continue
                seen.add(item_id)
            merged.append(dict(item))
    return merged


def normalize_asset(raw: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of `raw` whose history is always under `verificationLogs` and `complaints`."""
    asset = {k: v for k, v in raw.items() if k not in _LOG_KEYS and k not in _COMPLAINT_KEYS}
    asset["verificationLogs"] = _children(raw, _LOG_KEYS)
    asset["complaints"] = _children(raw, _COMPLAINT_KEYS)
    return asset


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO timestamp. Naive values are UTC; garbage sorts last."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return _EARLIEST
    else:
        return _EARLIEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _complaint_sort_key(complaint: dict[str, Any]) -> tuple[date, datetime]:
    raw_date = complaint.get("date")
    try:
        day = date.fromisoformat(str(raw_date)[:10])
    except ValueError:
        day = date.min
    return day, parse_timestamp(complaint.get("createdAt"))


def sort_logs(logs: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(logs, key=lambda log: parse_timestamp(log.get("timestamp")), reverse=True)


def sort_complaints(complaints: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(complaints, key=_complaint_sort_key, reverse=True)


def flatten_history(assets: Iterable[dict[str, Any]]) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """
    Pull every asset's history into two global lists: logs newest first by
    timestamp, complaints newest first by date.
    """
    logs: list[dict[str, Any]] = []
    complaints: list[dict[str, Any]] = []
    for asset in assets:
        normalized = normalize_asset(asset)
        logs.extend(normalized["verificationLogs"])
        complaints.extend(normalized["complaints"])
    return sort_logs(logs), sort_complaints(complaints)
