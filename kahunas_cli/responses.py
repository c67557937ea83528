"""Helpers for reading API responses and captured tokens."""

import base64
import json
import re
from datetime import datetime, timezone
from typing import Any, Optional

BASE64_CHARS = re.compile(r"[+/=]")


def is_token_expired_response(payload: Any) -> bool:
    """Whether an API payload says the auth token is no longer valid."""
    if not isinstance(payload, dict):
        return False
    token_expired = payload.get("token_expired")
    if token_expired is True or (type(token_expired) is int and token_expired == 1):
        return True
    if payload.get("status") == -3:
        return True
    message = payload.get("message")
    return isinstance(message, str) and "login" in message.lower()


def extract_user_uuid_from_checkins(payload: Any) -> Optional[str]:
    """User uuid from the first entry of a check-in list response."""
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
        return None
    checkins = payload["data"].get("checkins")
    if not isinstance(checkins, list) or not checkins or not isinstance(checkins[0], dict):
        return None
    candidate = checkins[0].get("user_uuid")
    return candidate if isinstance(candidate, str) else None


def is_likely_auth_token(value: str) -> bool:
    """Long opaque strings, JWTs and base64-looking strings pass."""
    if len(value) >= 80:
        return True
    if len(value.split(".")) >= 3:
        return True
    return bool(BASE64_CHARS.search(value)) and len(value) >= 40


def _find_token(value: Any, depth: int = 0) -> Optional[str]:
    if depth > 32:
        return None
    if isinstance(value, str):
        return value if is_likely_auth_token(value) else None
    if isinstance(value, list):
        for entry in value:
            token = _find_token(entry, depth + 1)
            if token:
                return token
        return None
    if isinstance(value, dict):
        for key, entry in value.items():
            if isinstance(entry, str) and "token" in key.lower() and is_likely_auth_token(entry):
                return entry
            token = _find_token(entry, depth + 1)
            if token:
                return token
    return None


def extract_token(text: str) -> Optional[str]:
    """Token from a /get-token response body (JSON or plain text)."""
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        trimmed = text.strip()
        return trimmed or None
    return _find_token(parsed)


def is_likely_login_html(text: str) -> bool:
    """Whether a web response is the login page instead of data."""
    trimmed = text.strip().lower()
    if not trimmed.startswith("<"):
        return False
    return (
        "login to your account" in trimmed
        or "welcome back" in trimmed
        or "<title>kahunas" in trimmed
    )


def _jwt_claims(token: str) -> Optional[dict]:
    parts = token.split(".")
    if len(parts) < 3:
        return None
    payload = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(payload))
    except (ValueError, json.JSONDecodeError):
        return None
    return claims if isinstance(claims, dict) else None


def resolve_token_expiry(token: str) -> Optional[str]:
    """ISO expiry of a token from its JWT exp claim, if it has one."""
    claims = _jwt_claims(token)
    if claims is None:
        return None
    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc).isoformat().replace("+00:00", "Z")
