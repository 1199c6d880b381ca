"""
Security utilities: password hashing and JWT tokens.

1. PASSWORD HASHING (Argon2)
   - Passwords are never stored in plaintext
   - passlib's CryptContext handles hashing and constant-time verification

2. JWT TOKENS (JSON Web Tokens)
   - After register/login, the user receives a signed JWT whose "sub" claim
     is their user id and whose "role" claim is their role tag
   - Signed with JWT_SECRET using HS256
   - Lifetime comes from JWT_EXPIRES_IN, written in the same timespan
     notation the Node services use ("15m", "12h", "7d", "2 days", "60000")

Every token function takes the Settings record explicitly; nothing here
reads configuration on its own.
"""

import re
from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext

from courier_api.config import Settings
from courier_api.exceptions import InvalidTokenLifetimeError, MissingJWTSecretError


ALGORITHM = "HS256"

# Lifetime used when JWT_EXPIRES_IN is unset
DEFAULT_TOKEN_LIFETIME = timedelta(days=1)


# ---------------------------------------------------------------------------
# 1. Password Hashing (Argon2)
# ---------------------------------------------------------------------------

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ---------------------------------------------------------------------------
# 2. JWT Tokens
# ---------------------------------------------------------------------------

_TIMESPAN_PATTERN = re.compile(
    r"^(?P<amount>-?\d*\.?\d+)\s*(?P<unit>[a-z]+)?$",
    re.IGNORECASE,
)

_UNIT_SECONDS = {
    "ms": 0.001, "msec": 0.001, "msecs": 0.001,
    "millisecond": 0.001, "milliseconds": 0.001,
    "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
    "m": 60, "min": 60, "mins": 60, "minute": 60, "minutes": 60,
    "h": 3600, "hr": 3600, "hrs": 3600, "hour": 3600, "hours": 3600,
    "d": 86400, "day": 86400, "days": 86400,
    "w": 604800, "week": 604800, "weeks": 604800,
    "y": 31557600, "yr": 31557600, "yrs": 31557600, "year": 31557600, "years": 31557600,
}


def parse_token_lifetime(raw_value: str | None) -> timedelta:
    """
    Convert a JWT_EXPIRES_IN value into a timedelta.

    A bare number is milliseconds; otherwise the number is followed by a
    unit (ms, s, m, h, d, w, y or a long form such as "days"). Units are
    case-insensitive and may be separated from the number by whitespace.

    Args:
        raw_value: The raw environment value, or None.

    Returns:
        The token lifetime. DEFAULT_TOKEN_LIFETIME when raw_value is None.

    Raises:
        InvalidTokenLifetimeError: If the value is not a positive timespan.
    """
    if raw_value is None:
        return DEFAULT_TOKEN_LIFETIME

    match = _TIMESPAN_PATTERN.match(raw_value.strip())
    if match is None:
        raise InvalidTokenLifetimeError(raw_value)

    unit = (match.group("unit") or "ms").lower()
    if unit not in _UNIT_SECONDS:
        raise InvalidTokenLifetimeError(raw_value)

    seconds = float(match.group("amount")) * _UNIT_SECONDS[unit]
    if seconds <= 0:
        raise InvalidTokenLifetimeError(raw_value)
    return timedelta(seconds=seconds)


def _require_secret(settings: Settings) -> str:
    if not settings.jwt_secret:
        raise MissingJWTSecretError()
    return settings.jwt_secret


def create_access_token(settings: Settings, subject: str, role: str | None = None) -> str:
    """
    Create a signed JWT access token.

    The payload contains:
      - "sub": the user id
      - "role": the user's role tag (informational; nothing here enforces it)
      - "exp": expiration timestamp, now + JWT_EXPIRES_IN

    Raises:
        MissingJWTSecretError: If JWT_SECRET is unset.
        InvalidTokenLifetimeError: If JWT_EXPIRES_IN cannot be parsed.
    """
    secret = _require_secret(settings)
    expire = datetime.now(timezone.utc) + parse_token_lifetime(settings.jwt_expiry)

    to_encode = {"sub": subject, "exp": expire}
    if role is not None:
        to_encode["role"] = role
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def decode_access_token(settings: Settings, token: str) -> dict:
    """
    Decode and verify a JWT access token.

    Raises:
        JWTError: If the token is expired, tampered with, or invalid.
        MissingJWTSecretError: If JWT_SECRET is unset.

    Returns:
        The decoded payload dictionary (contains "sub", "exp", etc.).
    """
    return jwt.decode(token, _require_secret(settings), algorithms=[ALGORITHM])
