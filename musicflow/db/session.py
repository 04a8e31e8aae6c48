# ============================================================================
# FILE: musicflow/db/session.py
# ============================================================================
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from musicflow.config import Settings

def create_db_engine(settings: Settings) -> Engine:
    """Build the SQLAlchemy engine for the configured DATABASE_URL"""
    url = settings.DATABASE_URL
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    # SQLite connections are shared across FastAPI's worker threads
    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # Single shared in-memory database
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)

def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
