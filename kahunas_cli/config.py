"""Configuration, credentials and workout cache files."""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kahunas_cli.errors import ConfigError
from kahunas_cli.models import WorkoutPlan

DEFAULT_BASE_URL = "https://api.kahunas.io"
DEFAULT_WEB_BASE_URL = "https://kahunas.io"


def get_config_dir() -> Path:
    """
    Get the directory holding config, credentials and caches.

    Uses KAHUNAS_CONFIG_DIR if set, otherwise ~/.config/kahunas.

    Returns:
        Path to the config directory
    """
    env_dir = os.environ.get("KAHUNAS_CONFIG_DIR")
    if env_dir:
        return Path(env_dir)
    return Path.home() / ".config" / "kahunas"


def config_path() -> Path:
    return get_config_dir() / "config.json"


def auth_path() -> Path:
    return get_config_dir() / "auth.json"


def workout_cache_path() -> Path:
    return get_config_dir() / "workouts.json"


def cache_dir_path() -> Path:
    return get_config_dir() / "cache"


class KahunasConfig(BaseModel):
    """Persisted session state (tokens, cookies, endpoints)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token: Optional[str] = None
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    csrf_token: Optional[str] = Field(default=None, alias="csrfToken")
    web_base_url: Optional[str] = Field(default=None, alias="webBaseUrl")
    auth_cookie: Optional[str] = Field(default=None, alias="authCookie")
    csrf_cookie: Optional[str] = Field(default=None, alias="csrfCookie")
    user_uuid: Optional[str] = Field(default=None, alias="userUuid")
    token_updated_at: Optional[str] = Field(default=None, alias="tokenUpdatedAt")
    token_expires_at: Optional[str] = Field(default=None, alias="tokenExpiresAt")
    timezone: Optional[str] = None
    debug: bool = False


class AuthConfig(BaseModel):
    """Stored login credentials."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    login_path: Optional[str] = Field(default=None, alias="loginPath")


class WorkoutCache(BaseModel):
    """Last synced program list and formatted calendar events."""

    model_config = ConfigDict(populate_by_name=True)

    updated_at: str = Field(alias="updatedAt")
    plans: list[WorkoutPlan] = Field(default_factory=list)
    events: Optional[dict[str, Any]] = None


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as err:
        raise ConfigError(f"Invalid JSON in {path}.") from err


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def read_config() -> KahunasConfig:
    """Load config.json, or an empty config when it does not exist."""
    path = config_path()
    if not path.exists():
        return KahunasConfig()
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config in {path}: expected an object.")
    try:
        return KahunasConfig.model_validate(data)
    except ValidationError as err:
        raise ConfigError(f"Invalid config in {path}: {err}") from err


def write_config(config: KahunasConfig) -> None:
    _write_json(config_path(), config.model_dump(by_alias=True, exclude_none=True))


def validate_auth_config(auth: AuthConfig) -> AuthConfig:
    """Require a username or email plus a password."""
    missing = []
    if not (auth.username or "").strip() and not (auth.email or "").strip():
        missing.append("username or email")
    if not (auth.password or "").strip():
        missing.append("password")
    if missing:
        raise ConfigError(f"Invalid auth.json at {auth_path()}. Missing {' and '.join(missing)}.")
    return auth


def read_auth_config() -> Optional[AuthConfig]:
    path = auth_path()
    if not path.exists():
        return None
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid auth.json at {path}: expected an object.")
    return validate_auth_config(AuthConfig.model_validate(data))


def read_workout_cache() -> Optional[WorkoutCache]:
    """Load workouts.json; unreadable caches count as missing."""
    path = workout_cache_path()
    if not path.exists():
        return None
    try:
        return WorkoutCache.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError:
        return None


def write_workout_cache(plans: list[WorkoutPlan], events: Optional[dict[str, Any]] = None) -> WorkoutCache:
    cache = WorkoutCache(
        updated_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        plans=plans,
        events=events,
    )
    _write_json(workout_cache_path(), cache.model_dump(mode="json", by_alias=True, exclude_none=True))
    return cache


def _first(*values: Optional[str]) -> Optional[str]:
    return next((value for value in values if value), None)


def resolve_token(config: KahunasConfig, override: Optional[str] = None) -> Optional[str]:
    return _first(override, os.getenv("KAHUNAS_TOKEN"), config.token)


def resolve_csrf_token(config: KahunasConfig, override: Optional[str] = None) -> Optional[str]:
    """CSRF value for web requests; the csrf cookie wins over the page token."""
    return _first(override, os.getenv("KAHUNAS_CSRF_TOKEN"), config.csrf_cookie, config.csrf_token)


def resolve_cookie_header(config: KahunasConfig, override: Optional[str] = None) -> Optional[str]:
    """Cookie header for web requests, falling back to the csrf cookie alone."""
    cookie = _first(override, os.getenv("KAHUNAS_AUTH_COOKIE"), config.auth_cookie)
    if cookie:
        return cookie
    csrf = _first(config.csrf_cookie, config.csrf_token)
    return f"csrf_kahunas_cookie_token={csrf}" if csrf else None


def resolve_user_uuid(config: KahunasConfig, override: Optional[str] = None) -> Optional[str]:
    return _first(override, os.getenv("KAHUNAS_USER_UUID"), config.user_uuid)


def resolve_base_url(config: KahunasConfig) -> str:
    return _first(os.getenv("KAHUNAS_BASE_URL"), config.base_url) or DEFAULT_BASE_URL


def resolve_web_base_url(config: KahunasConfig) -> str:
    return _first(os.getenv("KAHUNAS_WEB_BASE_URL"), config.web_base_url) or DEFAULT_WEB_BASE_URL
