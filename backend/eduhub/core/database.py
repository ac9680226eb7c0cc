"""
Engine, sessions and declarative base for EduHub.

Tests run against a single shared in-memory SQLite connection; everything
else talks to the configured PostgreSQL database.
"""

import logging
from typing import Iterator

from sqlalchemy import MetaData, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings


logger = logging.getLogger(__name__)


# Constraint naming convention
metadata = MetaData(naming_convention={
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
})

Base = declarative_base(metadata=metadata)


def _build_engine() -> Engine:
    if settings.TESTING:
        return create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=settings.DEBUG,
    )


engine = _build_engine()

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=True)


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request, closed afterwards."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_all_tables() -> None:
    # Registers every mapped class on Base.metadata
    import eduhub.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables ready: {', '.join(sorted(Base.metadata.tables))}")


def drop_all_tables() -> None:
    import eduhub.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    logger.warning("Dropped every EduHub table")


def init_db(db: Session) -> None:
    """
    Make sure the configured first admin account exists.

    Safe to call on every startup; an existing account with that email is
    left untouched.
    """
    from eduhub.core.security import get_password_hash
    from eduhub.models.user import User, UserRole

    email = settings.FIRST_ADMIN_EMAIL.strip().lower()
    if db.query(User.id).filter(User.email == email).first() is not None:
        return

    db.add(User(
        email=email,
        name=settings.FIRST_ADMIN_NAME,
        hashed_password=get_password_hash(settings.FIRST_ADMIN_PASSWORD),
        role=UserRole.ADMIN.value,
    ))
    db.commit()
    logger.info(f"First admin account created: {email}")


def check_database_connection() -> bool:
    """Run a trivial query; used by the health endpoint."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
    return True
