"""
Pydantic schemas for the register and login endpoints.

Pydantic validates incoming data automatically: if a required field is
missing or the wrong type, FastAPI returns a 422 error before our code runs.
"""

from pydantic import BaseModel, EmailStr, Field

from courier_api.schemas.user import CAMEL_CASE_CONFIG, ProfileProjection


class RegisterRequest(BaseModel):
    """Request body for POST /auth/register."""
    full_name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=8)
    phone_number: str | None = Field(None, max_length=32)

    model_config = CAMEL_CASE_CONFIG


class LoginRequest(BaseModel):
    """Request body for POST /auth/login."""
    email: EmailStr
    password: str


class AuthData(BaseModel):
    user: ProfileProjection
    access_token: str
    token_type: str = "bearer"

    model_config = CAMEL_CASE_CONFIG


class AuthResponse(BaseModel):
    """Response body for a successful register or login."""
    success: bool = True
    data: AuthData


class CallerIdentity(BaseModel):
    """
    The authenticated principal making a request.

    Built by the bearer-token dependency from a verified JWT. Services take
    it as an explicit argument instead of reading it off the request.
    """
    id: str = Field(min_length=1)
    role: str | None = None

    model_config = {"frozen": True}
