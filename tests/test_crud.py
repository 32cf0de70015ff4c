"""
Tests for CRUD operations.

This module contains tests for the user store against a SQLite database.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text

from app.crud.user import CRUDUser
from app.exceptions import UsernameAlreadyExistsError
from app.models.user import User


@pytest.mark.asyncio
async def test_add_user_sets_audit_timestamps(db):
    users = CRUDUser(db)

    user = await users.add(User("crud_user", "hash"))

    assert user.id is not None
    assert user.created_at is not None
    assert user.updated_at is not None


@pytest.mark.asyncio
async def test_get_by_username_ignores_case(db):
    users = CRUDUser(db)
    created = await users.add(User("CaseUser", "hash"))

    found = await users.get_by_username("caseuser")

    assert found is not None
    assert found.id == created.id
    assert found.username == "CaseUser"


@pytest.mark.asyncio
async def test_get_by_username_returns_none_for_unknown(db):
    assert await CRUDUser(db).get_by_username("nobody") is None


@pytest.mark.asyncio
async def test_username_exists_ignores_case(db):
    users = CRUDUser(db)
    await users.add(User("ExistingUser", "hash"))

    assert await users.username_exists("existinguser") is True
    assert await users.username_exists("EXISTINGUSER") is True
    assert await users.username_exists("someoneelse") is False


@pytest.mark.asyncio
async def test_duplicate_username_is_rejected_by_unique_index(db):
    users = CRUDUser(db)
    await users.add(User("dupe", "hash"))

    with pytest.raises(UsernameAlreadyExistsError):
        await users.add(User("DUPE", "other-hash"))

    # the session is still usable after the failed insert
    assert await users.username_exists("dupe") is True


@pytest.mark.asyncio
async def test_update_persists_lockout_state(db):
    users = CRUDUser(db)
    user = await users.add(User("lockme", "hash"))
    now = datetime.now(timezone.utc)

    for _ in range(3):
        user.increment_failed_attempts(3, timedelta(minutes=15), now)
    await users.update(user)

    stored = await users.get(user.id)
    assert stored.failed_login_attempts == 3
    assert stored.is_locked_out(now) is True

    stored.reset_failed_attempts()
    await users.update(stored)

    stored = await users.get_by_username("lockme")
    assert stored.failed_login_attempts == 0
    assert stored.lockout_end is None


@pytest.mark.asyncio
async def test_exists_by_id(db):
    users = CRUDUser(db)
    user = await users.add(User("byid", "hash"))

    assert await users.exists(user.id) is True
    assert await users.exists("missing-id") is False


@pytest.mark.asyncio
async def test_row_inserted_without_counter_starts_at_zero(db):
    await db.execute(
        text(
            "INSERT INTO users (id, username, normalized_username, password_hash) "
            "VALUES ('raw-id', 'RawUser', 'rawuser', 'hash')"
        )
    )
    await db.commit()

    user = await CRUDUser(db).get_by_username("rawuser")

    assert user.failed_login_attempts == 0
    assert user.lockout_end is None
    assert User.__table__.c.failed_login_attempts.server_default.arg == "0"
