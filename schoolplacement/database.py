from datetime import datetime
from pathlib import Path

from sqlalchemy import create_engine, Column, String, Text, DateTime
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class RecordRowMixin:
    key = Column(String, primary_key=True)
    payload = Column(Text, nullable=False)  # JSON encoded record
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


class MinistryRow(RecordRowMixin, Base):
    """Holds zero or one row."""

    __tablename__ = "ministry"


class HighschoolRow(RecordRowMixin, Base):
    __tablename__ = "highschools"


class StudentRow(RecordRowMixin, Base):
    __tablename__ = "students"


def _ensure_sqlite_parent(url: str) -> None:
    parsed = make_url(url)
    if parsed.drivername.startswith("sqlite") and parsed.database and parsed.database != ":memory:":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)


def init_database(url: str) -> Engine:
    """Create the engine and all record tables."""
    _ensure_sqlite_parent(url)
    engine = create_engine(url)
    Base.metadata.create_all(engine)
    return engine


def get_session_factory(engine: Engine) -> sessionmaker:
    """Get a session factory bound to the engine."""
    return sessionmaker(bind=engine, expire_on_commit=False)
