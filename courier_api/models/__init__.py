"""
SQLAlchemy ORM models package.

Models are imported here so that Base.metadata knows about every table
before create_all() runs at startup.
"""

from courier_api.models.user import User, UserRole  # noqa: F401
