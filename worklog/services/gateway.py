"""
Entry Gateway - the single entry point for UI-triggered changes.

Architecture Decision: explicit state object
The selection set, the multi-select mode, the month being viewed and the
loaded user preferences all live on one QObject owned by the application
root, instead of module globals. The UI observes it through signals.
"""

import datetime
import logging
from typing import Callable, FrozenSet, Optional, Set

from PySide6.QtCore import QObject, Signal

from worklog.domain.models import Entry, UserPreferences
from worklog.domain.timecalc import is_calendar_date, is_clock_time
from worklog.i18n import tr
from worklog.infra.repository import UserRepository
from worklog.services.entry_store import EntryStore
from worklog.services.summary_service import MonthSummary, month_summary

logger = logging.getLogger(__name__)


class EntryValidationError(ValueError):
    """User input rejected before anything was changed. str() is user-facing."""


class EntryGateway(QObject):
    """
    Applies create/update/delete requests to the store and tracks the
    selection state used for batch deletion.
    """

    selection_changed = Signal(object)  # FrozenSet[str]
    multi_select_changed = Signal(bool)
    view_month_changed = Signal(int, int)  # year, month
    preferences_changed = Signal(object)  # UserPreferences

    def __init__(self, store: EntryStore, user_repo: Optional[UserRepository] = None,
                 today: Optional[datetime.date] = None):
        super().__init__()
        self.store = store
        self.user_repo = user_repo or UserRepository()
        self.preferences: UserPreferences = self.user_repo.get_preferences()

        self._selected: Set[str] = set()
        self._multi_select = False

        today = today or datetime.date.today()
        self.view_year = today.year
        self.view_month = today.month

    # ------------------------------------------------------------------
    # Single entry operations
    # ------------------------------------------------------------------
    @staticmethod
    def _require(date: str, time_from: str, time_to: str) -> None:
        if not all(value and value.strip() for value in (date, time_from, time_to)):
            raise EntryValidationError(tr("entry.missing_fields"))
        # Half-typed times like "08:" would otherwise be stored with 0 hours
        if not (is_calendar_date(date.strip()) and is_clock_time(time_from.strip())
                and is_clock_time(time_to.strip())):
            raise EntryValidationError(tr("entry.invalid_values"))

    def create_entry(self, date: str, time_from: str, time_to: str) -> Entry:
        """Validate and store a new entry"""
        self._require(date, time_from, time_to)
        return self.store.create(Entry(date=date, from_=time_from, to=time_to))

    def update_entry(self, entry_id: str, date: str, time_from: str, time_to: str) -> Optional[Entry]:
        """Validate and apply an edit; None if the entry no longer exists"""
        self._require(date, time_from, time_to)
        return self.store.update(entry_id, date, time_from, time_to)

    def delete_entry(self, entry_id: str, confirm: Optional[Callable[[], bool]] = None) -> bool:
        """Delete one entry after optional confirmation"""
        if confirm is not None and not confirm():
            return False
        removed = self.store.delete(entry_id)
        if entry_id in self._selected:
            self._selected.discard(entry_id)
            self.selection_changed.emit(self.selected_ids)
        return removed > 0

    # ------------------------------------------------------------------
    # Multi select
    # ------------------------------------------------------------------
    @property
    def multi_select_mode(self) -> bool:
        return self._multi_select

    @property
    def selected_ids(self) -> FrozenSet[str]:
        return frozenset(self._selected)

    def toggle_multi_select(self) -> bool:
        """Flip multi-select mode; the selection is always cleared"""
        self._multi_select = not self._multi_select
        self._selected.clear()
        self.multi_select_changed.emit(self._multi_select)
        self.selection_changed.emit(self.selected_ids)
        return self._multi_select

    def toggle_selection(self, entry_id: str) -> bool:
        """
        Add or remove an id; returns True if it is now selected.

        Outside multi-select mode there is no selection and this does nothing.
        """
        if not self._multi_select:
            return False
        if entry_id in self._selected:
            self._selected.discard(entry_id)
        else:
            self._selected.add(entry_id)
        self.selection_changed.emit(self.selected_ids)
        return entry_id in self._selected

    def delete_selected(self, confirm: Callable[[int], bool]) -> int:
        """
        Delete every selected entry once `confirm(count)` agrees.

        Afterwards the selection is empty and multi-select mode is off, even if
        some ids had already disappeared from the store.
        """
        if not self._selected:
            return 0
        if not confirm(len(self._selected)):
            return 0

        removed = self.store.delete_many(self._selected)
        logger.info(f"Batch delete removed {removed} of {len(self._selected)} selected entries")
        self._selected.clear()
        self._multi_select = False
        self.selection_changed.emit(self.selected_ids)
        self.multi_select_changed.emit(False)
        return removed

    # ------------------------------------------------------------------
    # Month navigation
    # ------------------------------------------------------------------
    def set_view_month(self, year: int, month: int) -> None:
        self.view_year, self.view_month = year, month
        self.view_month_changed.emit(year, month)

    def previous_month(self) -> None:
        if self.view_month == 1:
            self.set_view_month(self.view_year - 1, 12)
        else:
            self.set_view_month(self.view_year, self.view_month - 1)

    def next_month(self) -> None:
        if self.view_month == 12:
            self.set_view_month(self.view_year + 1, 1)
        else:
            self.set_view_month(self.view_year, self.view_month + 1)

    def current_summary(self) -> MonthSummary:
        return self.summary_for(self.view_year, self.view_month)

    def summary_for(self, year: int, month: int) -> MonthSummary:
        return month_summary(self.store.entries, year, month, self.preferences.hourly_wage)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def save_preferences(self, script_url: str, hourly_wage) -> UserPreferences:
        """Validate and persist the settings record immediately"""
        try:
            prefs = UserPreferences(script_url=script_url, hourly_wage=hourly_wage)
        except ValueError as e:
            # pydantic's ValidationError is a ValueError
            logger.debug(f"Rejected preferences: {e}")
            raise EntryValidationError(tr("settings.invalid_wage")) from e

        self.user_repo.update_preferences(prefs)
        self.preferences = prefs
        self.preferences_changed.emit(prefs)
        return prefs
