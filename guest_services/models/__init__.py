"""ORM Models - SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - ServiceRequest is the only entity; no relationships

Design Decisions:
    - Models imported here so Base.metadata is complete for alembic and tests
"""

from guest_services.models.service_request import ServiceRequest  # noqa: F401
