"""
Authentication router: register and login endpoints.

These are the only public (unauthenticated) endpoints besides /health.

Endpoints:
  POST /auth/register  - Create a user and get a token
  POST /auth/login     - Authenticate and get a token

Plaintext passwords exist only in memory during request processing; they
are hashed before any database operation and never logged.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from courier_api.config import Settings
from courier_api.database import get_db
from courier_api.dependencies import get_settings
from courier_api.schemas.auth import AuthData, AuthResponse, LoginRequest, RegisterRequest
from courier_api.services import auth_service
from courier_api.services.profile_service import project_user

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Register a new user and log them in.

    - **fullName**: Required, 1-255 characters
    - **email**: Must be a valid email and not already registered
    - **password**: Minimum 8 characters
    - **phoneNumber**: Optional
    """
    user, token = await auth_service.register(
        db=db,
        settings=settings,
        full_name=request.full_name,
        email=request.email,
        password=request.password,
        phone_number=request.phone_number,
    )
    return AuthResponse(data=AuthData(user=project_user(user), access_token=token))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Authenticate and get a token",
)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Authenticate with email and password.

    Send the returned token on later requests as:

        Authorization: Bearer <token>
    """
    user, token = await auth_service.login(
        db=db,
        settings=settings,
        email=request.email,
        password=request.password,
    )
    return AuthResponse(data=AuthData(user=project_user(user), access_token=token))
