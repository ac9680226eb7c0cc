"""
Service layer for EduHub.

Functions here take an explicit SQLAlchemy session plus the entities they
act on and commit once per operation.
"""

from . import accounts, catalog, enrollment, reviews

__all__ = ["accounts", "catalog", "enrollment", "reviews"]
