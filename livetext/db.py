# FILE: livetext/db.py
"""
Storage for the project registry.

Only the projects table lives here; source files are never stored, they are
read from each project's root on demand. SQLite under ./data by default,
LIVETEXT_DATABASE_URL points the registry somewhere else.
"""
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

DATABASE_URL = os.getenv("LIVETEXT_DATABASE_URL", "sqlite:///./data/livetext.db")

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()


def get_db():
    """Per-request registry session for the routers."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db():
    """Create the registry tables if missing."""
    from livetext.projects import models  # noqa: F401  (registers Project on Base)

    Base.metadata.create_all(bind=engine)
