"""Tests for TokenIssuer."""

import time

import jwt
import pytest
from unittest.mock import patch

from foxden_doi.api.auth import TokenIssuer
from foxden_doi.errors import AuthError


def decode(token, config):
    return jwt.decode(token, config.authz_client_id, algorithms=["HS256"])


class TestTokenIssuer:
    """Test scoped token issuance."""

    def test_claims(self, config):
        """Test that the token carries the user, scope and client claims."""
        issuer = TokenIssuer(config)

        claims = decode(issuer.issue("alice", "read"), config)

        assert claims["user"] == "alice"
        assert claims["scope"] == "read"
        assert claims["kind"] == "client_credentials"
        assert claims["application"] == "FOXDEN"
        assert claims["iss"] == config.authz_client_id

    def test_zero_expiry_uses_default(self, config):
        """Test that a zero lifetime falls back to 7200 seconds."""
        config.token_expires = 0
        issuer = TokenIssuer(config)

        claims = decode(issuer.issue("alice", "write"), config)

        assert claims["exp"] - claims["iat"] == 7200

    def test_configured_expiry(self, config):
        """Test that a configured lifetime is used for exp."""
        config.token_expires = 600
        claims = decode(TokenIssuer(config).issue("alice", "read"), config)

        assert claims["exp"] - claims["iat"] == 600
        assert claims["exp"] > time.time()

    def test_unknown_scope(self, config):
        """Test that a scope other than read or write raises AuthError."""
        with pytest.raises(AuthError) as exc_info:
            TokenIssuer(config).issue("alice", "admin")

        assert exc_info.value.scope == "admin"
        assert exc_info.value.user == "alice"

    def test_missing_client_id(self, config):
        """Test that a missing client id raises AuthError."""
        config.authz_client_id = ""

        with pytest.raises(AuthError, match="client id"):
            TokenIssuer(config).issue("alice", "read")

    def test_signing_failure_is_surfaced(self, config):
        """Test that a PyJWT failure is raised as AuthError."""
        with patch("foxden_doi.api.auth.jwt.encode", side_effect=jwt.PyJWTError("bad key")):
            with pytest.raises(AuthError, match="bad key"):
                TokenIssuer(config).issue("alice", "read")

    def test_fresh_token_per_call(self, config):
        """Test that every call issues a new token."""
        issuer = TokenIssuer(config)

        with patch("foxden_doi.api.auth.jwt.encode", side_effect=["t1", "t2"]) as mock_encode:
            assert issuer.issue("alice", "read") == "t1"
            assert issuer.issue("alice", "read") == "t2"

        assert mock_encode.call_count == 2

    def test_auth_header(self, config):
        """Test the Bearer authorization header."""
        header = TokenIssuer(config).auth_header("alice", "read")

        assert header["Authorization"].startswith("Bearer ")
        assert decode(header["Authorization"][len("Bearer "):], config)["scope"] == "read"
