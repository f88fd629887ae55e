"""HTTP client for the remote mirror (a web-app script endpoint).

The mirror speaks a two-call protocol:

- ``GET <url>?action=read&t=<ms>`` returns ``{"status": "success", "entries": [...]}``
- ``POST <url>`` with ``{"action": "write", "entries": [...], ...}``; the reply
  is never looked at.

Neither call raises. Every outcome is reported as a :class:`SyncResult` so the
caller decides what to log and what to ignore.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel, Field, ValidationError

from worklog.domain.models import Entry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class SyncStatus(str, Enum):
    SUCCESS = "success"
    DISABLED = "disabled"
    NETWORK_ERROR = "network_error"
    HTTP_ERROR = "http_error"
    MALFORMED = "malformed"
    REJECTED = "rejected"
    # Pulled fine, but the local copy could not be written
    STORAGE_ERROR = "storage_error"


class SyncResult(BaseModel):
    """Outcome of one mirror call."""

    status: SyncStatus
    entries: List[Entry] = Field(default_factory=list)
    message: str = ""
    finished_at: datetime = Field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return self.status == SyncStatus.SUCCESS

    @classmethod
    def failure(cls, status: SyncStatus, message: str) -> "SyncResult":
        return cls(status=status, message=message)


class RemoteMirrorClient:
    """Wraps the HTTP calls to the mirror endpoint."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_entries(self, url: str) -> SyncResult:
        """Read the remote entry collection."""
        if not url:
            return SyncResult.failure(SyncStatus.DISABLED, "no endpoint configured")

        params = {"action": "read", "t": int(time.time() * 1000)}
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            return SyncResult.failure(SyncStatus.NETWORK_ERROR, str(exc))

        if not 200 <= response.status_code < 300:
            return SyncResult.failure(SyncStatus.HTTP_ERROR, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            return SyncResult.failure(SyncStatus.MALFORMED, f"invalid JSON: {exc}")

        if not isinstance(data, dict):
            return SyncResult.failure(SyncStatus.MALFORMED, "response is not a JSON object")
        if data.get("status") != "success":
            return SyncResult.failure(SyncStatus.REJECTED, f"remote status: {data.get('status')!r}")

        raw_entries = data.get("entries")
        if not isinstance(raw_entries, list):
            return SyncResult.failure(SyncStatus.MALFORMED, "'entries' is not a list")
        try:
            entries = [Entry.model_validate(item) for item in raw_entries]
        except ValidationError as exc:
            return SyncResult.failure(SyncStatus.MALFORMED, f"invalid entry: {exc}")

        return SyncResult(status=SyncStatus.SUCCESS, entries=entries)

    def send_entries(self, url: str, payload: Dict[str, Any]) -> SyncResult:
        """Dispatch a write. Only transport failures are reported."""
        if not url:
            return SyncResult.failure(SyncStatus.DISABLED, "no endpoint configured")
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            return SyncResult.failure(SyncStatus.NETWORK_ERROR, str(exc))
        return SyncResult(status=SyncStatus.SUCCESS, message=f"dispatched (HTTP {response.status_code})")

    def close(self) -> None:
        self.session.close()


def build_write_payload(entries: List[Entry], hourly_wage: float, company_name: str) -> Dict[str, Any]:
    """Body of the write request."""
    return {
        "action": "write",
        "entries": [e.to_record() for e in entries],
        "hourlyWage": hourly_wage,
        "companyName": company_name,
        "settings": {
            "companyName": company_name,
            "hourlyWage": hourly_wage,
        },
    }
