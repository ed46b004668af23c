"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("mealminder.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _engine_options() -> dict:
    """Pooling options per backend; in-memory SQLite must share one connection"""
    if settings.uses_sqlite():
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {"pool_pre_ping": True}


# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
    **_engine_options(),
)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True, expire_on_commit=False)


def init_database():
    """Initialize database schema"""
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
        logger.info("Database tables created successfully")


def ping_database() -> bool:
    """Run a trivial query to confirm the database is reachable"""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return True


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
