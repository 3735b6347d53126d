from sqlmodel import SQLModel, create_engine, Session
from taskhub.core.config import settings

# Global engine instance
_engine = None


def get_engine():
    global _engine

    if _engine is not None:
        return _engine

    # Fallback to a local SQLite file when DATABASE_URL is not configured
    db_url = settings.DATABASE_URL or "sqlite:///./taskhub.db"

    # SQLite fix for multithreading
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}

    # pool_pre_ping surfaces dropped connections as OperationalError up front
    _engine = create_engine(db_url, connect_args=connect_args, pool_pre_ping=True)
    return _engine

engine = get_engine()


def init_db(bind=None):
    """Create all tables registered on the SQLModel metadata."""
    # Import models so every table is registered before create_all
    import taskhub.models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


def get_db():
    with Session(engine) as session:
        yield session
