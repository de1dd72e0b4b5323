"""SQLAlchemy Declarative Base - shared base class for ORM models.

Design Decisions:
    - Separate file for Base: models, alembic env and test fixtures import it
      without importing each other
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all guest-services ORM models."""
    pass
