"""
Profile service: the caller's own user record, as an allow-listed projection.

get_profile() issues exactly one query: a primary-key lookup that selects
only the PROFILE_COLUMNS. The full User row is never loaded, so fields such
as password_hash cannot leak into the response even by accident.

A caller whose id matches no row gets None back. That is not an error here;
the router wraps it in a normal success envelope. Store failures are not
caught: they propagate to the session dependency and the app's error handlers.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from courier_api.models.user import User
from courier_api.schemas.auth import CallerIdentity
from courier_api.schemas.user import ProfileProjection


# The only columns the profile endpoint may read
PROFILE_COLUMNS = (
    User.id,
    User.full_name,
    User.email,
    User.phone_number,
    User.role,
    User.created_at,
)


async def get_profile(
    db: AsyncSession,
    caller: CallerIdentity,
) -> ProfileProjection | None:
    """
    Fetch the caller's profile projection.

    Args:
        db: Database session.
        caller: The authenticated identity; caller.id is the lookup key.

    Returns:
        The projection, or None if no user has that id.
    """
    result = await db.execute(
        select(*PROFILE_COLUMNS).where(User.id == caller.id)
    )
    row = result.one_or_none()

    if row is None:
        return None

    return ProfileProjection.model_validate(dict(row._mapping))


def project_user(user: User) -> ProfileProjection:
    """Build the projection from an already-loaded User (e.g. right after register)."""
    return ProfileProjection.model_validate(
        {column.key: getattr(user, column.key) for column in PROFILE_COLUMNS}
    )
