"""
Sync Service - keeps the entry store and the remote mirror roughly in step.

Architecture Decision: fire-and-forget, no coordination
- A pull replaces the whole local store when the remote answers "success";
  any failure leaves the store as it was and is only logged.
- Every local mutation dispatches its own push and returns immediately.
  Pushes are never retried, queued or awaited.
- Pulls and pushes may race. A pull that lands while a push is still in
  flight can overwrite the local state; this is accepted.

Network calls run on a small thread pool. Workers only talk HTTP; the store
is touched exclusively on the thread that applies the pull result.
"""

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from worklog.domain.models import Entry
from worklog.infra.remote import RemoteMirrorClient, SyncResult, SyncStatus, build_write_payload
from worklog.infra.repository import StorageError, UserRepository
from worklog.services.entry_store import EntryStore

logger = logging.getLogger(__name__)


class SyncService(QObject):
    """
    Pull/push coordinator between EntryStore and RemoteMirrorClient.
    """

    # Emitted on the applying thread after every pull outcome
    status_changed = Signal(object)  # SyncResult

    def __init__(self, store: EntryStore, client: Optional[RemoteMirrorClient] = None,
                 user_repo: Optional[UserRepository] = None, company_name: str = "Zimmerei",
                 max_workers: int = 4, auto_push: bool = True):
        super().__init__()
        self.store = store
        self.client = client or RemoteMirrorClient()
        self.user_repo = user_repo or UserRepository()
        self.company_name = company_name
        self.last_pull: Optional[SyncResult] = None
        self.last_push: Optional[SyncResult] = None
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="mirror")

        if auto_push:
            self.store.mutated.connect(self.push)

    # ------------------------------------------------------------------
    # Pull
    # ------------------------------------------------------------------
    async def pull(self) -> SyncResult:
        """Fetch the remote collection and overwrite the store on success"""
        future = self.start_pull()
        if future is None:
            return self.apply_pull(self.disabled_result())
        result = await asyncio.wrap_future(future)
        return self.apply_pull(result)

    @staticmethod
    def disabled_result() -> SyncResult:
        return SyncResult.failure(SyncStatus.DISABLED, "no endpoint configured")

    def start_pull(self) -> Optional[Future]:
        """Dispatch the read request; None when sync is disabled"""
        prefs = self.user_repo.get_preferences()
        if not prefs.sync_enabled:
            return None
        return self._executor.submit(self.client.fetch_entries, prefs.script_url)

    def apply_pull(self, result: SyncResult) -> SyncResult:
        """
        Apply a finished read. Must run on the thread that owns the store.

        A pulled collection that cannot be saved leaves the store untouched and
        is reported as STORAGE_ERROR.
        """
        if result.ok:
            try:
                self.store.replace_all(result.entries)
            except StorageError as e:
                result = SyncResult.failure(SyncStatus.STORAGE_ERROR, str(e))

        self.last_pull = result
        if result.ok:
            logger.info(f"Pulled {len(result.entries)} entries from remote")
        elif result.status == SyncStatus.DISABLED:
            logger.debug("Remote sync disabled, skipping pull")
        else:
            logger.warning(f"Sync error ({result.status.value}): {result.message}")
        self.status_changed.emit(result)
        return result

    # ------------------------------------------------------------------
    # Push
    # ------------------------------------------------------------------
    def push(self, entries: List[Entry]) -> Optional[Future]:
        """Dispatch a write of the full collection and return without waiting"""
        prefs = self.user_repo.get_preferences()
        if not prefs.sync_enabled:
            return None
        payload = build_write_payload(entries, prefs.hourly_wage, self.company_name)
        future = self._executor.submit(self.client.send_entries, prefs.script_url, payload)
        future.add_done_callback(self._on_push_done)
        return future

    def _on_push_done(self, future: Future) -> None:
        # Runs on a worker thread: record and log only
        result = future.result()
        self.last_push = result
        if result.ok:
            logger.debug(f"Push {result.message}")
        else:
            logger.warning(f"Save error ({result.status.value}): {result.message}")

    def shutdown(self, wait: bool = False) -> None:
        """Stop accepting work; in-flight requests are left to finish"""
        self._executor.shutdown(wait=wait)
        if wait:
            self.client.close()
