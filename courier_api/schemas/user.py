"""
Pydantic schemas for User-related responses.

These schemas control what user data is exposed through the API.
password_hash is NEVER included in any response schema: the profile
projection is an explicit allow-list of six fields, serialized in camelCase.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from courier_api.models.user import UserRole


# Shared by every public schema: snake_case in Python, camelCase on the wire
CAMEL_CASE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
)


class ProfileProjection(BaseModel):
    """Public view of a User: the only user fields the API ever returns."""
    id: str
    full_name: str
    email: str
    phone_number: str | None
    role: UserRole
    created_at: datetime

    model_config = CAMEL_CASE_CONFIG

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without tzinfo even for timezone=True columns
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ProfileResponse(BaseModel):
    """
    Envelope for GET /user/me.

    `data` is None when the caller's id matches no stored user. That case is
    still reported as a success.
    """
    success: bool = True
    data: ProfileProjection | None
