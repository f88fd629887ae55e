"""
Worklog Application - UI entry point and composition root.

Architecture Decision: Presentation Layer
This layer only wires things together and handles UI concerns. It owns the
store, the sync service and the gateway and hands them to the window.
"""

import logging
import sys
from concurrent.futures import Future
from typing import Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication, QMessageBox

from worklog.i18n import set_language, tr
from worklog.infra.config import get_settings
from worklog.infra.db import init_db
from worklog.infra.remote import RemoteMirrorClient
from worklog.infra.repository import EntryRepository, RecordRepository, StorageError, UserRepository
from worklog.services import EntryGateway, EntryStore, ExcelExportService, SyncService
from .main_window import MainWindow

logger = logging.getLogger(__name__)

PULL_POLL_MS = 100


def apply_theme(theme: str) -> bool:
    """
    Apply 'light', 'dark' or 'auto' using qdarktheme.

    Returns False when qdarktheme is not installed (it has no wheels for the
    newest Python releases); the default Qt style stays in place then.
    """
    try:
        import qdarktheme
    except ImportError:
        logger.warning("qdarktheme is not installed, keeping the default Qt style")
        return False

    if theme in ("auto", "dark", "light"):
        qdarktheme.setup_theme(theme)
    else:
        qdarktheme.setup_theme("auto")
    return True


class WorklogApp:
    """
    Main application class: builds the object graph, loads the local copy,
    shows the window and refreshes from the remote mirror in the background.
    """

    def __init__(self):
        self.app = QApplication(sys.argv)

        # Settings
        self.settings = get_settings()
        set_language(self.settings.language)
        apply_theme(self.settings.theme)

        # Persistence
        init_db(self.settings.get_db_url())
        records = RecordRepository()
        self.user_repo = UserRepository(records, defaults=self.settings.preferences)

        # Services
        self.store = EntryStore(EntryRepository(records))
        self.sync = SyncService(
            self.store,
            RemoteMirrorClient(timeout=self.settings.request_timeout),
            self.user_repo,
            company_name=self.settings.company_name,
            max_workers=self.settings.sync_workers,
        )
        self.gateway = EntryGateway(self.store, self.user_repo)
        self.export_service = ExcelExportService(
            company_name=self.settings.company_name,
            currency=self.settings.currency,
        )

        self.main_window: Optional[MainWindow] = None
        self._pending_pull: Optional[Future] = None
        self._pull_timer = QTimer()
        self._pull_timer.timeout.connect(self._poll_pull)

        # Initialize on startup
        QTimer.singleShot(0, self._init)

    def _init(self):
        """Load the local copy, show the window, then pull"""
        try:
            self.store.load()
        except StorageError as e:
            QMessageBox.critical(None, tr("dialog.error"), tr("app.init_error", error=e))

        self.main_window = MainWindow(self.gateway, self.sync, self.export_service,
                                      currency=self.settings.currency)
        self.main_window.show()
        self.start_pull()

    def start_pull(self):
        """Dispatch a pull without blocking the UI thread"""
        if self._pending_pull is not None:
            return
        future = self.sync.start_pull()
        if future is None:
            self.sync.apply_pull(self.sync.disabled_result())
            return
        self._pending_pull = future
        self._pull_timer.start(PULL_POLL_MS)

    def _poll_pull(self):
        """Apply the pull result on the UI thread once it is ready"""
        if self._pending_pull is None or not self._pending_pull.done():
            return
        self._pull_timer.stop()
        future, self._pending_pull = self._pending_pull, None
        self.sync.apply_pull(future.result())

    def run(self) -> int:
        """Run the application"""
        exit_code = self.app.exec()
        self.sync.shutdown()
        return exit_code
