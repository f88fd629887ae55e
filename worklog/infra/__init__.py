"""Infrastructure layer - Configuration, persistence and the remote mirror"""

from .db import DatabaseEngine, get_engine, init_db
from .remote import RemoteMirrorClient, SyncResult, SyncStatus
from .repository import EntryRepository, RecordRepository, StorageError, UserRepository

__all__ = [
    "DatabaseEngine", "get_engine", "init_db",
    "RemoteMirrorClient", "SyncResult", "SyncStatus",
    "EntryRepository", "RecordRepository", "StorageError", "UserRepository",
]
