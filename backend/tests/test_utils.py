"""
Unit tests for utility functions
"""
import re
import pytest
from datetime import timedelta

from blog.config import Settings
from blog.utils.auth import (
    create_access_token,
    create_user_token,
    decode_access_token,
    hash_password,
    verify_password,
)

JWT_SHAPE = re.compile(r"^eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+$")


@pytest.fixture
def config() -> Settings:
    return Settings(jwt_secret="unit-secret")


class TestPasswordHashing:
    """Test password hashing helpers"""

    def test_hash_is_not_plaintext(self, config):
        """Test hashed password differs from the plaintext"""
        hashed = hash_password("P@ss1", config)

        assert hashed != "P@ss1"
        assert "P@ss1" not in hashed

    def test_hash_uses_bcrypt_cost_10(self, config):
        """Test bcrypt with cost factor 10"""
        hashed = hash_password("P@ss1", config)

        assert hashed.startswith("$2b$10$")

    def test_hash_uses_configured_cost(self):
        """Test cost factor follows the settings"""
        hashed = hash_password("P@ss1", Settings(jwt_secret="unit-secret", bcrypt_rounds=4))

        assert hashed.startswith("$2b$04$")

    def test_hash_is_salted(self, config):
        """Test hashing the same password twice gives different hashes"""
        assert hash_password("same", config) != hash_password("same", config)

    def test_verify_password(self, config):
        """Test verifying correct and wrong passwords"""
        hashed = hash_password("P@ss1", config)

        assert verify_password("P@ss1", hashed, config) is True
        assert verify_password("P@ss2", hashed, config) is False
        assert verify_password("", hashed, config) is False


class TestTokenUtils:
    """Test JWT helpers"""

    def test_create_access_token(self, config):
        """Test creating JWT token"""
        token = create_access_token(
            data={"sub": "test_user_id"},
            config=config,
            expires_delta=timedelta(hours=1)
        )

        assert isinstance(token, str)
        assert JWT_SHAPE.match(token)

    def test_decode_access_token(self, config):
        """Test decoding JWT token"""
        token = create_access_token(
            data={"sub": "test_user_123"},
            config=config,
            expires_delta=timedelta(hours=1)
        )

        payload = decode_access_token(token, config)

        assert payload is not None
        assert payload.get("sub") == "test_user_123"
        assert "exp" in payload

    def test_user_token_carries_id_and_username(self, config):
        """Test user token payload"""
        payload = decode_access_token(create_user_token("user-id-1", "alice", config), config)

        assert payload["sub"] == "user-id-1"
        assert payload["username"] == "alice"

    def test_token_signed_with_configured_secret(self, config):
        """Test the token verifies only under the secret it was issued with"""
        from jose import jwt

        token = create_user_token("user-id-1", "alice", config)

        assert jwt.decode(token, "unit-secret", algorithms=["HS256"])["sub"] == "user-id-1"
        assert decode_access_token(token, Settings(jwt_secret="other-secret")) is None

    def test_decode_invalid_token(self, config):
        """Test decoding invalid token"""
        assert decode_access_token("invalid_token", config) is None

    def test_decode_tampered_token(self, config):
        """Test token signed with another secret is rejected"""
        from jose import jwt

        forged = jwt.encode({"sub": "someone"}, "another-secret", algorithm="HS256")

        assert decode_access_token(forged, config) is None

    def test_token_expiration(self, config):
        """Test token with very short expiration"""
        token = create_access_token(
            data={"sub": "user"},
            config=config,
            expires_delta=timedelta(seconds=-1)  # Already expired
        )

        assert decode_access_token(token, config) is None
