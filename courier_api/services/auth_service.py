"""
Authentication service: register and login business logic.

The router calls these functions and translates the results into HTTP
responses, so this logic can be tested without a web server.

Register flow:
  1. Check if email is already registered
  2. Hash the password with Argon2id
  3. Create the User
  4. Return a JWT so the user is immediately logged in

Login flow:
  1. Look up user by email
  2. Verify password against stored hash
  3. Return a JWT

Login returns the same error for "wrong password" and "email not found" so
valid emails cannot be enumerated.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courier_api.config import Settings
from courier_api.exceptions import DuplicateEmailError, InvalidCredentialsError
from courier_api.models.user import User, UserRole
from courier_api.security import create_access_token, hash_password, verify_password


logger = logging.getLogger(__name__)


async def register(
    db: AsyncSession,
    settings: Settings,
    full_name: str,
    email: str,
    password: str,
    phone_number: str | None = None,
) -> tuple[User, str]:
    """
    Register a new user.

    Args:
        db: Database session.
        settings: Configuration record (JWT secret and lifetime).
        full_name: Display name.
        email: Login email (must be unique).
        password: Plaintext password (hashed before storage).
        phone_number: Optional contact number.

    Returns:
        Tuple of (User instance, JWT token string).

    Raises:
        DuplicateEmailError: If the email is already registered.
    """
    result = await db.execute(select(User.id).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        raise DuplicateEmailError(email)

    user = User(
        full_name=full_name,
        email=email,
        phone_number=phone_number,
        role=UserRole.USER,
        password_hash=hash_password(password),
    )
    db.add(user)
    # Flush to get id and created_at assigned
    await db.flush()

    token = create_access_token(settings, subject=user.id, role=user.role.value)
    logger.info("Registered user %s", user.id)
    return user, token


async def login(
    db: AsyncSession,
    settings: Settings,
    email: str,
    password: str,
) -> tuple[User, str]:
    """
    Authenticate a user and return a JWT.

    Raises:
        InvalidCredentialsError: If email doesn't exist or password is wrong.
    """
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()

    token = create_access_token(settings, subject=user.id, role=user.role.value)
    return user, token
