"""
User model: the canonical account record.

Each User is a login credential (email + hashed password) plus the contact
details shown on the profile screen. The store owns this entity; the profile
endpoint only ever reads an allow-listed projection of it, so columns such as
password_hash never leave the database layer.

Roles:
  - USER: Customer booking and receiving parcels (default at registration)
  - COURIER: Delivery staff
  - STORE_OWNER: Marketplace merchant
  - ADMIN: Platform operator
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column

from courier_api.database import Base


class UserRole(str, enum.Enum):
    """
    Role tag carried on every user.

    Inherits from str so the value serializes naturally to JSON.
    """
    USER = "USER"
    COURIER = "COURIER"
    STORE_OWNER = "STORE_OWNER"
    ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    # String ids keep the column portable across SQLite and PostgreSQL
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    phone_number: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )

    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole),
        default=UserRole.USER,
        nullable=False,
    )

    # Argon2id hash; never selected by the profile query
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
