"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
from typing import Any, List, Optional

import pytest
import requests
from PySide6.QtCore import QCoreApplication

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.domain.models import Entry, UserPreferences
from worklog.i18n import set_language
from worklog.infra.db import DatabaseEngine
from worklog.infra.remote import RemoteMirrorClient
from worklog.infra.repository import EntryRepository, RecordRepository, StorageError, UserRepository
from worklog.services.entry_store import EntryStore

SCRIPT_URL = "https://script.example.com/exec"


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Qt signals need a core application instance"""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture(autouse=True)
def english():
    set_language("en")
    yield
    set_language("en")


@pytest.fixture
def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = DatabaseEngine("sqlite:///:memory:")
    engine.create_tables()
    yield engine
    engine.engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create a new session for a test"""
    session = db_engine.get_session()
    yield session
    session.close()


@pytest.fixture
def records(db_session):
    return RecordRepository(session=db_session)


@pytest.fixture
def entry_repo(records):
    return EntryRepository(records)


@pytest.fixture
def user_repo(records):
    return UserRepository(records)


@pytest.fixture
def store(entry_repo):
    return EntryStore(entry_repo)


@pytest.fixture
def sync_prefs(user_repo):
    """Settings record with the remote mirror enabled"""
    prefs = UserPreferences(script_url=SCRIPT_URL, hourly_wage=40)
    user_repo.update_preferences(prefs)
    return prefs


def make_entries(*rows) -> List[Entry]:
    """make_entries(("2024-03-01", "08:00", "12:00"), ...)"""
    return [Entry(id=f"e{i}", date=d, from_=f, to=t) for i, (d, f, t) in enumerate(rows, start=1)]


class FailingRepository(EntryRepository):
    """Saves always fail, as with a full disk"""

    def __init__(self):
        pass

    def load_entries(self):
        return None

    def save_entries(self, entries):
        raise StorageError("disk full")


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeHttpSession:
    """Stands in for requests.Session; records every call"""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response or FakeResponse(200, {"status": "success", "entries": []})
        self.error = error
        self.gets: List[dict] = []
        self.posts: List[dict] = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.gets.append({"url": url, "params": params, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response

    def post(self, url, json=None, timeout=None):
        self.posts.append({"url": url, "json": json, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture
def http():
    return FakeHttpSession()


@pytest.fixture
def offline_http():
    return FakeHttpSession(error=requests.ConnectionError("network unreachable"))


@pytest.fixture
def client(http):
    return RemoteMirrorClient(timeout=5, session=http)
