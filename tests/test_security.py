"""
Tests for password hashing and JWT token issuance.
"""

from datetime import timedelta

import pytest
from jose import jwt

from app.models.user import User
from app.utils.security import PasswordHasher, TokenIssuer

SECRET = "test-secret-key-for-the-weather-forecast-api"


def test_hash_differs_from_plaintext_and_verifies(password_hasher):
    hashed = password_hasher.hash_password("Password123!")

    assert hashed != "Password123!"
    assert password_hasher.verify_password("Password123!", hashed) is True
    assert password_hasher.verify_password("WrongPassword", hashed) is False


def test_same_password_hashes_differently(password_hasher):
    assert password_hasher.hash_password("Password123!") != password_hasher.hash_password("Password123!")


def test_verify_against_malformed_hash_returns_false(password_hasher):
    assert password_hasher.verify_password("Password123!", "not-a-bcrypt-hash") is False


def test_token_contains_user_claims(token_issuer):
    user = User("testuser", "hash")
    token = token_issuer.create_access_token(user)

    payload = token_issuer.verify_token(token)

    assert payload["sub"] == user.id
    assert payload["name"] == "testuser"
    assert payload["iss"] == "WeatherForecast.Api"
    assert payload["aud"] == "WeatherForecast.Client"
    assert payload["jti"]
    assert "exp" in payload


def test_tokens_for_same_user_are_unique(token_issuer):
    user = User("testuser", "hash")
    assert token_issuer.create_access_token(user) != token_issuer.create_access_token(user)


def test_expired_token_is_rejected(token_issuer):
    user = User("testuser", "hash")
    token = token_issuer.create_access_token(user, expires_delta=timedelta(seconds=-1))

    assert token_issuer.verify_token(token) is None


def test_token_signed_with_other_key_is_rejected(token_issuer):
    user = User("testuser", "hash")
    other = TokenIssuer(
        secret_key="another-secret-key",
        issuer="WeatherForecast.Api",
        audience="WeatherForecast.Client",
    )

    assert token_issuer.verify_token(other.create_access_token(user)) is None


def test_token_for_other_audience_is_rejected(token_issuer):
    user = User("testuser", "hash")
    other = TokenIssuer(secret_key=SECRET, issuer="WeatherForecast.Api", audience="someone-else")

    assert token_issuer.verify_token(other.create_access_token(user)) is None


def test_garbage_token_is_rejected(token_issuer):
    assert token_issuer.verify_token("not.a.token") is None


def test_token_uses_configured_algorithm(token_issuer):
    token = token_issuer.create_access_token(User("testuser", "hash"))
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


@pytest.mark.parametrize("secret", ["", "   "])
def test_missing_secret_key_is_rejected(secret):
    with pytest.raises(ValueError):
        TokenIssuer(secret_key=secret)
