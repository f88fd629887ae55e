"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
Separates data access logic from business logic. Makes it easy to:
- Switch database implementations
- Mock data for testing
- Keep the JSON record format in one place

Two named records are kept, both as JSON documents:
- ``zt_settings``: {"scriptUrl": str, "hourlyWage": number}
- ``zt_entries``: [Entry, ...]
"""

import json
import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from worklog.domain.models import Entry, UserPreferences
from worklog.infra.db import RecordModel, get_engine

logger = logging.getLogger(__name__)

SETTINGS_KEY = "zt_settings"
ENTRIES_KEY = "zt_entries"


class StorageError(RuntimeError):
    """The durable local copy could not be read or written."""


class RecordRepository:
    """
    Key/value access to the records table.
    """

    def __init__(self, session: Optional[Session] = None):
        self.session = session

    def _get_session(self) -> Session:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        engine = get_engine()
        return engine.get_session()

    def get(self, key: str) -> Optional[str]:
        """Raw JSON text stored under key, or None"""
        session = self._get_session()
        try:
            with session:
                model = session.get(RecordModel, key)
                return model.value if model else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read record '{key}': {e}") from e

    def put(self, key: str, value: str) -> None:
        """Insert or replace the record"""
        session = self._get_session()
        try:
            with session:
                model = session.get(RecordModel, key)
                if model is None:
                    session.add(RecordModel(key=key, value=value))
                else:
                    model.value = value
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write record '{key}': {e}") from e


class EntryRepository:
    """
    Handles the entries record.

    Reads are forgiving (a broken record is reported as missing), writes are
    not: a failed save raises StorageError.
    """

    def __init__(self, records: Optional[RecordRepository] = None):
        self.records = records or RecordRepository()

    def load_entries(self) -> Optional[List[Entry]]:
        """Entries from the durable copy, or None if absent or unreadable"""
        try:
            raw = self.records.get(ENTRIES_KEY)
        except StorageError as e:
            logger.error(f"Could not read entries: {e}")
            return None
        if raw is None:
            return None

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return [Entry.model_validate(item) for item in data]
        except (ValueError, TypeError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(f"Stored entries are corrupt, ignoring them: {e}")
            return None

    def save_entries(self, entries: List[Entry]) -> None:
        """Write the full list; raises StorageError on failure"""
        payload = json.dumps([e.to_record() for e in entries], ensure_ascii=False)
        self.records.put(ENTRIES_KEY, payload)


class UserRepository:
    """
    Handles the settings record (User Preferences).
    """

    def __init__(self, records: Optional[RecordRepository] = None,
                 defaults: Optional[UserPreferences] = None):
        self.records = records or RecordRepository()
        self.defaults = defaults or UserPreferences()

    def get_preferences(self) -> UserPreferences:
        """Get current user preferences, falling back to the defaults"""
        try:
            raw = self.records.get(SETTINGS_KEY)
        except StorageError as e:
            logger.error(f"Could not read settings: {e}")
            return self.defaults.model_copy()
        if raw is None:
            return self.defaults.model_copy()

        try:
            return UserPreferences.model_validate(json.loads(raw))
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning(f"Stored settings are invalid, using defaults: {e}")
            return self.defaults.model_copy()

    def update_preferences(self, prefs: UserPreferences) -> None:
        """Persist preferences immediately; raises StorageError on failure"""
        self.records.put(SETTINGS_KEY, json.dumps(prefs.to_record(), ensure_ascii=False))
