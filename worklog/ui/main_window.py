"""
Main Window - entry form, month list and dashboard.

Architecture Decision: Presentation Layer
The window renders what EntryGateway/EntryStore expose and forwards user
actions to the gateway. It holds no entry state of its own.
"""

import datetime
import logging
from pathlib import Path

from PySide6.QtCore import QDate, Qt, QTimer, Signal
from PySide6.QtWidgets import (
    QFileDialog, QFormLayout, QHBoxLayout, QLabel, QListWidget, QListWidgetItem,
    QMainWindow, QMessageBox, QPushButton, QVBoxLayout, QWidget,
)

from worklog.domain.models import Entry
from worklog.domain.timecalc import calc_duration, split_date
from worklog.i18n import tr
from worklog.infra.remote import SyncResult, SyncStatus
from worklog.infra.repository import StorageError
from worklog.services import EntryGateway, EntryValidationError, ExcelExportService, SyncService
from worklog.services.summary_service import available_months, month_label
from .dialogs import EditEntryDialog, ExportDialog, SettingsDialog, date_value, make_date_input, make_time_input

logger = logging.getLogger(__name__)

TOAST_MS = 3000


def entry_label(entry: Entry) -> str:
    """Label like 'MO - 04.03.2024'"""
    parts = split_date(entry.date)
    if parts is None:
        return entry.date
    year, month, day = parts
    try:
        weekday = tr(f"weekday.{datetime.date(year, month, day).weekday()}")
    except ValueError:
        return entry.date
    return f"{weekday} - {day:02d}.{month:02d}.{year}"


class MainWindow(QMainWindow):
    """
    Single window with three areas:
    - Entry form (date, from, to, calculated hours)
    - Month navigation, dashboard totals and sync status
    - Entry list with multi-select for batch deletion
    """

    closed = Signal()

    def __init__(self, gateway: EntryGateway, sync: SyncService,
                 export_service: ExcelExportService, currency: str = "CHF", parent=None):
        super().__init__(parent)
        self.gateway = gateway
        self.sync = sync
        self.export_service = export_service
        self.currency = currency

        self.setWindowTitle(tr("app.name"))
        self._setup_ui()
        self._connect_signals()
        self.refresh()

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        # Entry form
        form = QFormLayout()
        self.date_input = make_date_input()
        self.from_input = make_time_input()
        self.to_input = make_time_input()
        self.calc_label = QLabel("—")
        self.save_btn = QPushButton(tr("entry.save"))
        form.addRow(tr("entry.date"), self.date_input)
        form.addRow(tr("entry.from"), self.from_input)
        form.addRow(tr("entry.to"), self.to_input)
        form.addRow(self.calc_label, self.save_btn)
        layout.addLayout(form)

        # Month navigation
        nav = QHBoxLayout()
        self.prev_btn = QPushButton("<")
        self.month_label = QLabel()
        self.month_label.setAlignment(Qt.AlignCenter)
        self.next_btn = QPushButton(">")
        self.multi_btn = QPushButton(tr("list.select"))
        self.multi_btn.setCheckable(True)
        nav.addWidget(self.prev_btn)
        nav.addWidget(self.month_label, 1)
        nav.addWidget(self.next_btn)
        nav.addWidget(self.multi_btn)
        layout.addLayout(nav)

        # Dashboard
        dash = QHBoxLayout()
        self.hours_label = QLabel()
        self.pay_label = QLabel()
        self.sync_label = QLabel()
        dash.addWidget(self.hours_label)
        dash.addWidget(self.pay_label)
        dash.addStretch(1)
        dash.addWidget(self.sync_label)
        layout.addLayout(dash)

        # Entries
        self.entry_list = QListWidget()
        layout.addWidget(self.entry_list, 1)

        # Multi-select bar
        self.selection_bar = QWidget()
        bar = QHBoxLayout(self.selection_bar)
        bar.setContentsMargins(0, 0, 0, 0)
        self.selection_count = QLabel()
        self.delete_selected_btn = QPushButton(tr("list.delete_selected"))
        bar.addWidget(self.selection_count, 1)
        bar.addWidget(self.delete_selected_btn)
        layout.addWidget(self.selection_bar)

        # Footer
        footer = QHBoxLayout()
        self.settings_btn = QPushButton(tr("settings.title"))
        self.export_btn = QPushButton(tr("export.button"))
        footer.addWidget(self.settings_btn)
        footer.addStretch(1)
        footer.addWidget(self.export_btn)
        layout.addLayout(footer)

    def _connect_signals(self):
        self.from_input.textChanged.connect(self._update_calc)
        self.to_input.textChanged.connect(self._update_calc)
        self.save_btn.clicked.connect(self._on_save)

        self.prev_btn.clicked.connect(self.gateway.previous_month)
        self.next_btn.clicked.connect(self.gateway.next_month)
        self.multi_btn.clicked.connect(lambda: self.gateway.toggle_multi_select())
        self.delete_selected_btn.clicked.connect(self._on_delete_selected)
        self.entry_list.itemClicked.connect(self._on_item_clicked)
        self.settings_btn.clicked.connect(self._show_settings)
        self.export_btn.clicked.connect(self._show_export)

        self.gateway.store.changed.connect(self.refresh)
        self.gateway.view_month_changed.connect(lambda *_: self.refresh())
        # Deferred: the clicked item must outlive its own signal
        self.gateway.selection_changed.connect(lambda _: QTimer.singleShot(0, self.refresh))
        self.gateway.multi_select_changed.connect(self._on_multi_select_changed)
        self.gateway.preferences_changed.connect(lambda _: self.refresh())
        self.sync.status_changed.connect(self._on_sync_status)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def refresh(self):
        summary = self.gateway.current_summary()
        selected = self.gateway.selected_ids
        multi = self.gateway.multi_select_mode

        self.month_label.setText(summary.label)
        self.entry_list.clear()
        if not summary.entries:
            placeholder = QListWidgetItem(tr("entry.empty"))
            placeholder.setFlags(Qt.NoItemFlags)
            self.entry_list.addItem(placeholder)
        for entry in summary.entries:
            item = QListWidgetItem(f"{entry_label(entry)}\t{tr('entry.hours', hours=entry.hours)}")
            item.setData(Qt.UserRole, entry.id)
            if multi:
                item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
                item.setCheckState(Qt.Checked if entry.id in selected else Qt.Unchecked)
            self.entry_list.addItem(item)

        self.selection_bar.setVisible(multi)
        self.selection_count.setText(tr("list.selected_count", count=len(selected)))
        self.hours_label.setText(tr("dashboard.hours", hours=summary.total_hours))
        self.pay_label.setText(tr("dashboard.pay", currency=self.currency, amount=summary.total_pay))

    def _update_calc(self):
        if self.from_input.text() and self.to_input.text():
            hours = calc_duration(self.from_input.text(), self.to_input.text())
            self.calc_label.setText(tr("entry.hours", hours=hours))
        else:
            self.calc_label.setText("—")

    def _toast(self, message: str):
        self.statusBar().showMessage(message, TOAST_MS)

    def _on_sync_status(self, result: SyncResult):
        if result.ok:
            self.sync_label.setText(tr("sync.success"))
        elif result.status == SyncStatus.DISABLED:
            self.sync_label.setText(tr("sync.disabled"))
        else:
            self.sync_label.setText(tr("sync.failed", status=result.status.value))

    def _on_multi_select_changed(self, enabled: bool):
        self.multi_btn.setChecked(enabled)
        self.refresh()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def _report_storage_error(self, error: StorageError):
        logger.error(f"Local save failed: {error}")
        QMessageBox.critical(self, tr("dialog.error"), tr("entry.storage_error", error=error))

    def _on_save(self):
        try:
            self.gateway.create_entry(date_value(self.date_input),
                                      self.from_input.text(), self.to_input.text())
        except EntryValidationError as e:
            self._toast(str(e))
            return
        except StorageError as e:
            self._report_storage_error(e)
            return
        self._toast(tr("entry.saved"))
        self.from_input.clear()
        self.to_input.clear()
        self.date_input.setDate(QDate.currentDate())

    def _on_item_clicked(self, item: QListWidgetItem):
        entry_id = item.data(Qt.UserRole)
        if not entry_id:
            return
        if self.gateway.multi_select_mode:
            self.gateway.toggle_selection(entry_id)
        else:
            self._edit_entry(entry_id)

    def _edit_entry(self, entry_id: str):
        entry = self.gateway.store.get(entry_id)
        if entry is None:
            return
        dialog = EditEntryDialog(entry, self)
        if not dialog.exec():
            return
        try:
            if dialog.action == "save":
                self.gateway.update_entry(entry_id, *dialog.values())
                self._toast(tr("entry.updated"))
            elif dialog.action == "delete":
                if self.gateway.delete_entry(entry_id, confirm=self._confirm_single_delete):
                    self._toast(tr("entry.deleted"))
        except EntryValidationError as e:
            self._toast(str(e))
        except StorageError as e:
            self._report_storage_error(e)

    def _confirm_single_delete(self) -> bool:
        answer = QMessageBox.question(self, tr("dialog.delete"), tr("entry.confirm_delete"))
        return answer == QMessageBox.Yes

    def _confirm_batch_delete(self, count: int) -> bool:
        answer = QMessageBox.question(self, tr("dialog.delete"),
                                      tr("list.confirm_delete_many", count=count))
        return answer == QMessageBox.Yes

    def _on_delete_selected(self):
        try:
            removed = self.gateway.delete_selected(self._confirm_batch_delete)
        except StorageError as e:
            self._report_storage_error(e)
            return
        if removed:
            self._toast(tr("list.deleted_many"))

    def _show_settings(self):
        dialog = SettingsDialog(self.gateway.preferences, self)
        if not dialog.exec():
            return
        try:
            self.gateway.save_preferences(*dialog.values())
        except EntryValidationError as e:
            self._toast(str(e))
            return
        except StorageError as e:
            self._report_storage_error(e)
            return
        self._toast(tr("settings.saved"))

    def _show_export(self):
        months = available_months(self.gateway.store.entries)
        dialog = ExportDialog(months, self)
        if not dialog.exec():
            return
        year, month = dialog.selected_month()
        summary = self.gateway.summary_for(year, month)
        if not summary.entries:
            self._toast(tr("export.no_entries"))
            return

        default_path = str(Path.home() / self.export_service.default_filename(summary))
        path, _ = QFileDialog.getSaveFileName(self, tr("export.title"), default_path, "Excel (*.xlsx)")
        if not path:
            return
        try:
            self.export_service.export_month(summary, path)
        except OSError as e:
            QMessageBox.warning(self, tr("dialog.error"), str(e))
            return
        self._toast(tr("export.done"))
        logger.info(f"Exported {month_label(year, month)} to {path}")

    def closeEvent(self, event):
        self.closed.emit()
        super().closeEvent(event)
