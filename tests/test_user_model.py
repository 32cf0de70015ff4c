"""
Tests for the User model and its account lockout rules.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.models.user import User

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
LOCKOUT = timedelta(minutes=15)


def make_user() -> User:
    return User("testuser", "$2b$04$hashedpasswordvalue")


def test_new_user_starts_active():
    user = make_user()
    assert user.id
    assert user.username == "testuser"
    assert user.normalized_username == "testuser"
    assert user.failed_login_attempts == 0
    assert user.lockout_end is None
    assert user.is_locked_out(NOW) is False


def test_new_users_get_distinct_ids():
    assert make_user().id != make_user().id


def test_normalized_username_is_lower_case():
    user = User("TestUser", "hash")
    assert user.username == "TestUser"
    assert user.normalized_username == "testuser"


@pytest.mark.parametrize("username", ["", "   ", None])
def test_empty_username_is_rejected(username):
    with pytest.raises(ValueError, match="Username"):
        User(username, "hash")


@pytest.mark.parametrize("password_hash", ["", "   ", None])
def test_empty_password_hash_is_rejected(password_hash):
    with pytest.raises(ValueError, match="Password hash"):
        User("testuser", password_hash)


def test_attempts_below_threshold_do_not_lock():
    user = make_user()
    for _ in range(4):
        user.increment_failed_attempts(5, LOCKOUT, NOW)

    assert user.failed_login_attempts == 4
    assert user.lockout_end is None
    assert user.is_locked_out(NOW) is False


def test_reaching_threshold_locks_account():
    user = make_user()
    for _ in range(5):
        user.increment_failed_attempts(5, LOCKOUT, NOW)

    assert user.failed_login_attempts == 5
    assert user.lockout_end == NOW + LOCKOUT
    assert user.is_locked_out(NOW) is True
    assert user.lockout_remaining(NOW) == LOCKOUT


def test_lockout_expires_without_reset():
    user = make_user()
    for _ in range(5):
        user.increment_failed_attempts(5, LOCKOUT, NOW)

    assert user.is_locked_out(NOW + LOCKOUT - timedelta(seconds=1)) is True
    # lockout_end == now is no longer locked
    assert user.is_locked_out(NOW + LOCKOUT) is False
    assert user.lockout_remaining(NOW + LOCKOUT) == timedelta(0)


def test_failures_past_threshold_keep_counting_and_extend_lockout():
    user = make_user()
    for _ in range(5):
        user.increment_failed_attempts(5, LOCKOUT, NOW)

    later = NOW + timedelta(minutes=10)
    user.increment_failed_attempts(5, LOCKOUT, later)

    assert user.failed_login_attempts == 6
    assert user.lockout_end == later + LOCKOUT


def test_reset_clears_counter_and_lockout():
    user = make_user()
    for _ in range(5):
        user.increment_failed_attempts(5, LOCKOUT, NOW)

    user.reset_failed_attempts()

    assert user.failed_login_attempts == 0
    assert user.lockout_end is None
    assert user.is_locked_out(NOW) is False


def test_naive_lockout_end_is_treated_as_utc():
    user = make_user()
    user.lockout_end = (NOW + LOCKOUT).replace(tzinfo=None)
    assert user.is_locked_out(NOW) is True
