"""
Database connection and session management.
Provides SQLAlchemy engine, session factory, declarative base and schema setup.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import settings

def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # sessions are used from both the event loop and the threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}

engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()

def init_db(bind=None) -> None:
    """
    Create every table that does not exist yet.

    Importing the model modules registers them on ``Base.metadata``.
    """
    from .auth.models import User  # noqa: F401
    from .core.audit_models import AuditLog  # noqa: F401
    from .patients.models import Patient  # noqa: F401
    from .appointments.models import Appointment  # noqa: F401
    from .medical_records.models import MedicalRecord  # noqa: F401
    from .staff.models import StaffMember  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)

def get_db():
    """
    Database dependency - Creates and yields a database session.

    The session is closed after the request is processed, even if an
    exception occurs during request handling. Event streams do not depend
    on it, so a long-lived connection never pins a session.

    Yields:
        SQLAlchemy Session: Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
