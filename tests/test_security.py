"""Tests for password hashing and access tokens."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from jose import JWTError, jwt

from payroll_portal.config import get_settings
from payroll_portal.services.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:
    """Test password hashing and verification."""

    def test_hash_is_bcrypt_and_salted(self):
        first = get_password_hash("testpassword")
        second = get_password_hash("testpassword")

        assert first.startswith("$2b$")
        assert first != second

    def test_verify(self):
        hashed = get_password_hash("testpassword")

        assert verify_password("testpassword", hashed) is True
        assert verify_password("wrongpassword", hashed) is False

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("testpassword", "not-a-hash") is False


class TestAccessTokens:
    """Test JWT creation and decoding."""

    def test_round_trip_subject(self):
        user_id = uuid4()

        assert decode_access_token(create_access_token(user_id)) == user_id

    def test_default_expiry_from_settings(self):
        settings = get_settings()
        token = create_access_token(uuid4())

        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
        lifetime = payload["exp"] - datetime.now(timezone.utc).timestamp()

        assert 0 < lifetime <= settings.access_token_expire_minutes * 60

    def test_expired_token_rejected(self):
        token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-30))

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_other_key_rejected(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "not-the-server-key",
            algorithm="HS256",
        )

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_subject_must_be_identity_id(self):
        token = create_access_token("admin")

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_tampered_token_rejected(self):
        token = create_access_token(uuid4())
        header, payload, signature = token.split(".")
        other_payload = create_access_token(uuid4()).split(".")[1]

        with pytest.raises(JWTError):
            decode_access_token(".".join([header, other_payload, signature]))
