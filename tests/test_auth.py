"""Tests for skybook/auth.py — bearer tokens to SessionContext."""
from datetime import timedelta

from skybook.auth import create_access_token, decode_token, session_from_header


class TestTokens:
    def test_round_trip(self):
        token = create_access_token("u1", "u1@example.com")
        payload = decode_token(token)
        assert payload["sub"] == "u1"
        assert payload["email"] == "u1@example.com"

    def test_header_to_context(self):
        ctx = session_from_header(f"Bearer {create_access_token('u1', 'u1@example.com')}")
        assert ctx.user_id == "u1"
        assert ctx.email == "u1@example.com"

    def test_missing_header(self):
        assert session_from_header(None).is_authenticated is False

    def test_wrong_scheme(self):
        assert session_from_header(f"Basic {create_access_token('u1')}").is_authenticated is False

    def test_garbage_token(self):
        assert session_from_header("Bearer not-a-jwt").is_authenticated is False

    def test_expired_token(self):
        token = create_access_token("u1", expires_in=timedelta(seconds=-1))
        assert decode_token(token) is None
        assert session_from_header(f"Bearer {token}").is_authenticated is False
