"""Local cache of calendar snapshots and program payloads."""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kahunas_cli.config import cache_dir_path

logger = logging.getLogger(__name__)


class CalendarCacheEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str
    updated_at: str = Field(alias="updatedAt")
    timezone: str
    user_uuid: Optional[str] = Field(default=None, alias="userUuid")


class ProgramCacheEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str
    updated_at: str = Field(alias="updatedAt")


class CacheIndex(BaseModel):
    """Contents of cache/index.json."""

    calendar: Optional[CalendarCacheEntry] = None
    programs: dict[str, ProgramCacheEntry] = Field(default_factory=dict)


class CalendarSnapshot(BaseModel):
    """A stored calendar response."""

    model_config = ConfigDict(populate_by_name=True)

    updated_at: str = Field(alias="updatedAt")
    timezone: str
    user_uuid: Optional[str] = Field(default=None, alias="userUuid")
    payload: Any = None


def _index_path() -> Path:
    return cache_dir_path() / "index.json"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _write(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def read_cache_index() -> CacheIndex:
    path = _index_path()
    if not path.exists():
        return CacheIndex()
    try:
        return CacheIndex.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError:
        logger.debug("Ignoring unreadable cache index at %s", path)
        return CacheIndex()


def write_cache_index(index: CacheIndex) -> None:
    _write(_index_path(), index.model_dump(mode="json", by_alias=True, exclude_none=True))


def write_calendar_cache(payload: Any, time_zone: str, user_uuid: Optional[str] = None) -> CalendarSnapshot:
    """Store a calendar response as calendar-<timestamp>.json and index it."""
    updated_at = _now_iso()
    file_name = f"calendar-{re.sub(r'[:.]', '-', updated_at)}.json"
    snapshot = CalendarSnapshot(
        updated_at=updated_at,
        timezone=time_zone,
        user_uuid=user_uuid,
        payload=payload,
    )
    _write(cache_dir_path() / file_name, snapshot.model_dump(mode="json", by_alias=True, exclude_none=True))

    index = read_cache_index()
    index.calendar = CalendarCacheEntry(
        file=file_name,
        updated_at=updated_at,
        timezone=time_zone,
        user_uuid=user_uuid,
    )
    write_cache_index(index)
    return snapshot


def read_calendar_cache() -> Optional[CalendarSnapshot]:
    """Latest calendar snapshot, or None when missing or unreadable."""
    index = read_cache_index()
    if index.calendar is None:
        return None
    path = cache_dir_path() / index.calendar.file
    if not path.exists():
        return None
    try:
        return CalendarSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError:
        logger.debug("Ignoring unreadable calendar cache at %s", path)
        return None


def write_program_cache(program_id: str, payload: Any) -> None:
    if not program_id:
        return
    file_name = f"program-{program_id}.json"
    _write(cache_dir_path() / file_name, payload)

    index = read_cache_index()
    index.programs[program_id] = ProgramCacheEntry(file=file_name, updated_at=_now_iso())
    write_cache_index(index)


def read_program_cache(program_id: str) -> Optional[Any]:
    if not program_id:
        return None
    entry = read_cache_index().programs.get(program_id)
    if entry is None:
        return None
    path = cache_dir_path() / entry.file
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.debug("Ignoring unreadable program cache at %s", path)
        return None


def read_program_caches(program_ids: list[str]) -> dict[str, Any]:
    """Cached program payloads keyed by uuid; missing entries are skipped."""
    details = {}
    for program_id in program_ids:
        payload = read_program_cache(program_id)
        if payload is not None:
            details[program_id] = payload
    return details
