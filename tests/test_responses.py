"""Tests for API response and token helpers."""

import base64
import json

from kahunas_cli.responses import (
    extract_token,
    extract_user_uuid_from_checkins,
    is_likely_auth_token,
    is_likely_login_html,
    is_token_expired_response,
    resolve_token_expiry,
)

LONG_TOKEN = "a" * 96


def make_jwt(claims: dict) -> str:
    payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).decode().rstrip("=")
    return f"eyJhbGciOiJIUzI1NiJ9.{payload}.signature"


class TestTokenExpired:
    def test_expired_markers(self):
        assert is_token_expired_response({"token_expired": 1})
        assert is_token_expired_response({"token_expired": True})
        assert is_token_expired_response({"status": -3})
        assert is_token_expired_response({"message": "Please Login again"})

    def test_valid_responses(self):
        assert not is_token_expired_response({"status": 1, "data": {}})
        assert not is_token_expired_response({"token_expired": 0})
        assert not is_token_expired_response([{"status": -3}])
        assert not is_token_expired_response(None)


class TestUserUuid:
    def test_first_checkin(self):
        payload = {"data": {"checkins": [{"user_uuid": "u-1"}, {"user_uuid": "u-2"}]}}

        assert extract_user_uuid_from_checkins(payload) == "u-1"

    def test_missing(self):
        assert extract_user_uuid_from_checkins({"data": {"checkins": []}}) is None
        assert extract_user_uuid_from_checkins({"data": []}) is None


class TestExtractToken:
    """Test /get-token response parsing."""

    def test_token_shapes(self):
        assert is_likely_auth_token(LONG_TOKEN)
        assert is_likely_auth_token("a.b.c")
        assert is_likely_auth_token("abc+def/" * 5)
        assert not is_likely_auth_token("short")

    def test_json_token_key(self):
        assert extract_token(json.dumps({"status": 1, "data": {"auth_token": LONG_TOKEN}})) == LONG_TOKEN

    def test_json_without_token(self):
        assert extract_token(json.dumps({"status": 0, "message": "nope"})) is None

    def test_plain_text(self):
        assert extract_token(f"  {LONG_TOKEN}\n") == LONG_TOKEN
        assert extract_token("   ") is None


class TestLoginHtml:
    def test_detects_login_page(self):
        assert is_likely_login_html("<!DOCTYPE html><html><title>Kahunas | Login</title>")
        assert is_likely_login_html("<div>Welcome back</div>")

    def test_json_is_not_login(self):
        assert not is_likely_login_html('{"message": "welcome back"}')


class TestTokenExpiry:
    def test_jwt_exp_claim(self):
        assert resolve_token_expiry(make_jwt({"exp": 1767225600})) == "2026-01-01T00:00:00Z"

    def test_opaque_token(self):
        assert resolve_token_expiry(LONG_TOKEN) is None
        assert resolve_token_expiry(make_jwt({"sub": "u-1"})) is None
