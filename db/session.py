from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from typing import Generator
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Default to a local SQLite file if DATABASE_URL is not set
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///db/interviews.db")
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "").lower() in ("1", "true", "yes")

# Base class for models
Base = declarative_base()


def make_engine(url: str = DATABASE_URL, echo: bool = DATABASE_ECHO) -> Engine:
    # SQLite-specific connection arguments
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, echo=echo, future=True)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """
    SQLite ships with foreign key enforcement off; the ON DELETE CASCADE
    rules on marks and comments depend on it.
    """
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind, future=True)


# Create engine
engine = make_engine()

# Create session factory
SessionLocal = make_session_factory(engine)


def init_db(bind: Engine = engine) -> None:
    """
    Ensure DB tables exist. Uses SQLAlchemy Base metadata to create tables if they don't exist.
    """
    # Register every model on Base.metadata before creating tables
    from models.candidate import Candidate  # noqa: F401
    from models.interviewer import Interviewer  # noqa: F401
    from models.category import Category  # noqa: F401
    from models.interview import Interview  # noqa: F401
    from models.mark import Mark  # noqa: F401
    from models.interview_comment import InterviewComment  # noqa: F401

    Base.metadata.create_all(bind=bind)


# Dependency for getting DB session
def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
