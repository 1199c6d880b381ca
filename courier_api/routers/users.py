"""
Users router: the caller's own profile.

Endpoints:
  GET /user/me  - Get the authenticated user's profile

The bearer token identifies the caller; the profile service does a single
projected lookup. A token whose subject no longer exists still gets a 200
with "data": null.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from courier_api.database import get_db
from courier_api.dependencies import get_caller_identity
from courier_api.schemas.auth import CallerIdentity
from courier_api.schemas.user import ProfileResponse
from courier_api.services import profile_service

router = APIRouter()


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get current user's profile",
)
async def get_my_profile(
    caller: CallerIdentity = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_db),
):
    """
    Return the authenticated user's profile.

    Fields: id, fullName, email, phoneNumber, role, createdAt.
    """
    profile = await profile_service.get_profile(db, caller)
    return ProfileResponse(success=True, data=profile)
