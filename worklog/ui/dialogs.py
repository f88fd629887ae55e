"""
Dialogs used by the main window: edit entry, settings, export month.
"""

from typing import List, Optional, Tuple

from PySide6.QtCore import QDate, QRegularExpression
from PySide6.QtGui import QRegularExpressionValidator
from PySide6.QtWidgets import (
    QComboBox, QDateEdit, QDialog, QDialogButtonBox, QDoubleSpinBox,
    QFormLayout, QLabel, QLineEdit, QPushButton, QVBoxLayout,
)

from worklog.domain.models import Entry, UserPreferences
from worklog.domain.timecalc import calc_duration
from worklog.i18n import tr
from worklog.services.summary_service import month_label

TIME_PATTERN = QRegularExpression(r"^([01]\d|2[0-3]):[0-5]\d$")


def make_time_input(value: str = "") -> QLineEdit:
    """HH:MM line edit; empty shows --:--"""
    line = QLineEdit(value)
    line.setPlaceholderText("--:--")
    line.setValidator(QRegularExpressionValidator(TIME_PATTERN, line))
    line.setMaxLength(5)
    return line


def make_date_input(iso_date: Optional[str] = None) -> QDateEdit:
    edit = QDateEdit()
    edit.setCalendarPopup(True)
    edit.setDisplayFormat("dd.MM.yyyy")
    date = QDate.fromString(iso_date, "yyyy-MM-dd") if iso_date else QDate.currentDate()
    edit.setDate(date if date.isValid() else QDate.currentDate())
    return edit


def date_value(edit: QDateEdit) -> str:
    return edit.date().toString("yyyy-MM-dd")


class EditEntryDialog(QDialog):
    """
    Edit or delete one entry.

    After exec(), `action` is "save", "delete" or None (cancelled).
    """

    def __init__(self, entry: Entry, parent=None):
        super().__init__(parent)
        self.entry = entry
        self.action: Optional[str] = None
        self.setWindowTitle(tr("entry.save"))

        layout = QVBoxLayout(self)
        form = QFormLayout()
        self.date_input = make_date_input(entry.date)
        self.from_input = make_time_input(entry.from_)
        self.to_input = make_time_input(entry.to)
        self.calc_label = QLabel()
        form.addRow(tr("entry.date"), self.date_input)
        form.addRow(tr("entry.from"), self.from_input)
        form.addRow(tr("entry.to"), self.to_input)
        form.addRow("", self.calc_label)
        layout.addLayout(form)

        buttons = QDialogButtonBox()
        save_btn = buttons.addButton(tr("entry.save"), QDialogButtonBox.AcceptRole)
        delete_btn = buttons.addButton(tr("dialog.delete"), QDialogButtonBox.DestructiveRole)
        cancel_btn = buttons.addButton(tr("dialog.cancel"), QDialogButtonBox.RejectRole)
        save_btn.clicked.connect(lambda: self._finish("save"))
        delete_btn.clicked.connect(lambda: self._finish("delete"))
        cancel_btn.clicked.connect(self.reject)
        layout.addWidget(buttons)

        self.from_input.textChanged.connect(self._update_calc)
        self.to_input.textChanged.connect(self._update_calc)
        self._update_calc()

    def _update_calc(self):
        hours = calc_duration(self.from_input.text(), self.to_input.text())
        self.calc_label.setText(tr("entry.hours", hours=hours))

    def _finish(self, action: str):
        self.action = action
        self.accept()

    def values(self) -> Tuple[str, str, str]:
        return date_value(self.date_input), self.from_input.text(), self.to_input.text()


class SettingsDialog(QDialog):
    """Sync URL and hourly wage."""

    def __init__(self, prefs: UserPreferences, parent=None):
        super().__init__(parent)
        self.setWindowTitle(tr("settings.title"))

        layout = QVBoxLayout(self)
        form = QFormLayout()
        self.url_input = QLineEdit(prefs.script_url)
        self.wage_input = QDoubleSpinBox()
        self.wage_input.setRange(0, 100000)
        self.wage_input.setDecimals(2)
        self.wage_input.setValue(prefs.hourly_wage)
        form.addRow(tr("settings.script_url"), self.url_input)
        form.addRow(tr("settings.hourly_wage"), self.wage_input)
        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def values(self) -> Tuple[str, float]:
        return self.url_input.text().strip(), self.wage_input.value()


class ExportDialog(QDialog):
    """Pick the month to export."""

    def __init__(self, months: List[Tuple[int, int]], parent=None):
        super().__init__(parent)
        self.setWindowTitle(tr("export.title"))

        layout = QVBoxLayout(self)
        self.month_combo = QComboBox()
        for year, month in months:
            self.month_combo.addItem(month_label(year, month), (year, month))
        layout.addWidget(self.month_combo)

        export_btn = QPushButton(tr("export.button"))
        export_btn.clicked.connect(self.accept)
        cancel_btn = QPushButton(tr("dialog.cancel"))
        cancel_btn.clicked.connect(self.reject)
        layout.addWidget(export_btn)
        layout.addWidget(cancel_btn)

    def selected_month(self) -> Tuple[int, int]:
        return self.month_combo.currentData()
