"""
Tests for profile_service.get_profile, called directly with a session.

These check what the HTTP tests can't see: the query itself. The profile
lookup must be a single SELECT that never names password_hash.
"""

import pytest
from sqlalchemy import event

from courier_api.models.user import UserRole
from courier_api.schemas.auth import CallerIdentity
from courier_api.services import profile_service


@pytest.fixture
def captured_sql(db_engine):
    """Record every SQL statement the engine executes during the test."""
    statements = []

    def _capture(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(db_engine.sync_engine, "before_cursor_execute", _capture)
    yield statements
    event.remove(db_engine.sync_engine, "before_cursor_execute", _capture)


class TestGetProfileService:

    async def test_returns_projection(self, db_session, make_user):
        await make_user(phone_number="+44 20 7946 0000", role=UserRole.COURIER)

        profile = await profile_service.get_profile(db_session, CallerIdentity(id="u1"))

        assert profile is not None
        assert profile.id == "u1"
        assert profile.full_name == "Ada Lovelace"
        assert profile.phone_number == "+44 20 7946 0000"
        assert profile.role == UserRole.COURIER
        assert profile.created_at.tzinfo is not None

    async def test_missing_user_returns_none(self, db_session):
        profile = await profile_service.get_profile(db_session, CallerIdentity(id="nobody"))
        assert profile is None

    async def test_single_projected_query(self, db_session, make_user, captured_sql):
        await make_user()
        captured_sql.clear()

        await profile_service.get_profile(db_session, CallerIdentity(id="u1"))

        assert len(captured_sql) == 1
        assert captured_sql[0].lstrip().upper().startswith("SELECT")
        assert "password_hash" not in captured_sql[0]

    async def test_projection_dump_has_no_credential(self, db_session, make_user):
        await make_user()

        profile = await profile_service.get_profile(db_session, CallerIdentity(id="u1"))

        dumped = profile.model_dump(by_alias=True)
        assert set(dumped) == {"id", "fullName", "email", "phoneNumber", "role", "createdAt"}

    async def test_role_claim_does_not_affect_lookup(self, db_session, make_user):
        """The lookup is keyed on id alone; whatever role the token claims is ignored."""
        await make_user(role=UserRole.USER)

        profile = await profile_service.get_profile(
            db_session, CallerIdentity(id="u1", role="ADMIN")
        )

        assert profile.role == UserRole.USER
