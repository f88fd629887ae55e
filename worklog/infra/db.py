"""
SQLAlchemy database models and configuration.

Architecture Decision: Why SQLAlchemy?
- Provides ORM for cleaner code and prevents SQL injection
- The durable copy is a tiny key/value table (one JSON document per record)
- Easy to point at another database in tests (in-memory SQLite)

The engine is synchronous on purpose: every mutation must be on disk before
control returns to the event loop.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import os

from sqlalchemy import create_engine, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, Session, sessionmaker
from sqlalchemy.pool import StaticPool


# Base class for all models
class Base(DeclarativeBase):
    pass


class RecordModel(Base):
    """One named JSON document (settings record, entries record)"""
    __tablename__ = "records"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now,
                                                 onupdate=datetime.now, nullable=False)


class DatabaseEngine:
    """
    Manages database connection and session lifecycle.

    Singleton pattern ensures only one engine exists per application.
    """
    _instance: Optional['DatabaseEngine'] = None

    def __init__(self, db_url: str):
        if db_url.endswith(":memory:"):
            # One shared connection, otherwise every session sees an empty database
            self.engine = create_engine(
                db_url, echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(db_url, echo=False)
        self.session_factory = sessionmaker(self.engine, class_=Session, expire_on_commit=False)

    @classmethod
    def get_instance(cls, db_url: Optional[str] = None) -> 'DatabaseEngine':
        """Get or create the database engine instance"""
        if cls._instance is None:
            if db_url is None:
                # Default: Store in user's AppData on Windows, ~/.local/share on Linux
                if os.name == 'nt':  # Windows
                    data_dir = Path(os.getenv('APPDATA')) / 'Worklog'
                else:  # Linux/Mac
                    data_dir = Path.home() / '.local' / 'share' / 'worklog'

                data_dir.mkdir(parents=True, exist_ok=True)
                db_path = data_dir / 'worklog.db'
                db_url = f"sqlite:///{db_path}"

            cls._instance = cls(db_url)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Dispose the engine and forget the singleton (tests, shutdown)"""
        if cls._instance is not None:
            cls._instance.engine.dispose()
            cls._instance = None

    def create_tables(self):
        """Create all tables in the database"""
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session"""
        return self.session_factory()


# Convenience functions
def get_engine(db_url: Optional[str] = None) -> DatabaseEngine:
    """Get the database engine instance"""
    return DatabaseEngine.get_instance(db_url)


def init_db(db_url: Optional[str] = None) -> DatabaseEngine:
    """Initialize the database (create tables)"""
    engine = get_engine(db_url)
    engine.create_tables()
    return engine
