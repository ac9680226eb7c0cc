"""
EduHub backend.

Course marketplace API: accounts, catalog, enrollment and reviews.
"""

__version__ = "1.0.0"
