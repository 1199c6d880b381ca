"""
FastAPI dependencies for configuration and caller identity.

    get_settings          (request -> Settings)
    get_caller_identity   (Authorization: Bearer <jwt> -> CallerIdentity)

get_caller_identity trusts a correctly signed, unexpired token and does not
look the user up: whether the user still exists is the endpoint's concern.
If the token is missing or invalid, the request is rejected with 401 before
the route handler runs.
"""

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from courier_api.config import Settings
from courier_api.schemas.auth import CallerIdentity
from courier_api.security import decode_access_token


logger = logging.getLogger(__name__)

# Reads the "Authorization: Bearer <token>" header. tokenUrl points Swagger
# UI's "Authorize" button at the login endpoint.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_settings(request: Request) -> Settings:
    """Return the configuration record the app was created with."""
    return request.app.state.settings


async def get_caller_identity(
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> CallerIdentity:
    """
    Validate the JWT and return the identity it asserts.

    Raises:
        HTTPException 401: If the token is invalid, expired, or has no subject.
        MissingJWTSecretError: If JWT_SECRET is unset (mapped to 500).
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_access_token(settings, token)
    except JWTError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    return CallerIdentity(id=str(user_id), role=payload.get("role"))
