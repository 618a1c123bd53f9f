from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from app.core.config import settings

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


def _is_memory_sqlite(url: str) -> bool:
    return ":memory:" in url or url.rstrip("/").endswith(":")


def make_engine(url: str):
    """Build an engine for `url`.

    Postgres gets pre-ping to avoid stale connections. An in-memory SQLite
    database (tests) lives on a single shared connection so every session
    sees it; file-backed SQLite keeps the default pool, one connection per
    session, so uncommitted writes stay private.
    """
    if url.startswith("sqlite"):
        if _is_memory_sqlite(url):
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


# Create SQLAlchemy engine (connects to Postgres)
engine = make_engine(settings.database_url)

# Factory that creates DB sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Dependency we will use in FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
