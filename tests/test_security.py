"""
Unit tests for password hashing and JWT helpers.

Tests:
- bcrypt hashing and verification
- Token claims and expiry
- Tampered tokens are rejected
"""

from datetime import timedelta

import pytest
from jose import JWTError, jwt

from app.core.config import settings
from app.core.security import create_access_token, decode_token, get_password_hash, verify_password


class TestPasswordHashing:
    """Test bcrypt helpers"""

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("password1")

        assert hashed != "password1"
        assert hashed.startswith("$2b$")

    def test_verify(self):
        hashed = get_password_hash("password1")

        assert verify_password("password1", hashed) is True
        assert verify_password("password2", hashed) is False

    def test_long_password_truncated_to_72_bytes(self):
        """Bytes beyond bcrypt's limit do not affect verification"""
        base = "x" * 72
        hashed = get_password_hash(base + "tail-a")

        assert verify_password(base + "tail-b", hashed) is True


class TestTokens:
    """Test token creation and decoding"""

    def test_claims(self):
        payload = decode_token(create_access_token("u1", False))

        assert payload["sub"] == "u1"
        assert payload["is_admin"] is False
        assert "exp" in payload

    def test_admin_flag_coerced_to_bool(self):
        payload = decode_token(create_access_token("admin", 1))

        assert payload["is_admin"] is True

    def test_expired_token_rejected(self):
        token = create_access_token("u1", False, expires_delta=timedelta(seconds=-1))

        with pytest.raises(JWTError):
            decode_token(token)

    def test_wrong_key_rejected(self):
        token = jwt.encode({"sub": "u1", "is_admin": True}, "not-the-key", algorithm=settings.ALGORITHM)

        with pytest.raises(JWTError):
            decode_token(token)
