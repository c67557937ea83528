"""
Shared fixtures for kahunas-cli tests.

Config-touching tests run against a temporary config directory so nothing
reads or writes ~/.config/kahunas.
"""

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"

KAHUNAS_ENV_VARS = (
    "KAHUNAS_TOKEN",
    "KAHUNAS_CSRF_TOKEN",
    "KAHUNAS_AUTH_COOKIE",
    "KAHUNAS_USER_UUID",
    "KAHUNAS_TIMEZONE",
    "KAHUNAS_BASE_URL",
    "KAHUNAS_WEB_BASE_URL",
)


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def preview_html() -> str:
    """Two-day preview widget: day 0 visible with supersets, day 1 hidden."""
    return load_fixture("workout-day-preview.html")


@pytest.fixture
def config_dir(tmp_path, monkeypatch) -> Path:
    """Point the config directory at tmp_path and clear credential env vars."""
    monkeypatch.setenv("KAHUNAS_CONFIG_DIR", str(tmp_path))
    for name in KAHUNAS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def posterior_program() -> dict:
    """Program JSON with two days addressed by 1-based day_number."""
    return {
        "uuid": "p1",
        "title": "Strength Block",
        "days": [
            {
                "day_number": 1,
                "title": "Day 1: Anterior",
                "workout": [{"exercise_name": "Front Squat", "sets": 4, "reps": "5", "rest_period": "150"}],
            },
            {
                "day_number": 2,
                "title": "Day 2: Posterior",
                "workout": [{"exercise_name": "Deadlift", "sets": 3, "reps": "3-5reps", "rest_period": "180"}],
            },
        ],
    }
