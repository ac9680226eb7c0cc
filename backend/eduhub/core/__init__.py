"""
Core module for EduHub backend.

Settings, the database layer and the exception root that the rest of the
package builds on.
"""

from .config import settings
from .database import Base, SessionLocal, engine, get_db, init_db
from .exceptions import EduHubException

__all__ = [
    "settings",
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "init_db",
    "EduHubException",
]
